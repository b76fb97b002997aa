"""Tests para la resolución de conflictos de nombres."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from proymigra.transform.conflicts import MapaRenombres, resolver_conflictos
from tests._fixtures.proyectos import analisis_vacio


def _info(ruta: str, categoria: str = "component") -> dict:
    nombre_archivo = ruta.rsplit("/", 1)[-1]
    info = {
        "file_path": f"/b/{ruta}",
        "relative_path": ruta,
        "file_name": nombre_archivo,
        "extension": "." + nombre_archivo.rsplit(".", 1)[-1],
        "category": categoria,
    }
    if categoria in ("component", "page"):
        info["component_name"] = nombre_archivo.rsplit(".", 1)[0]
    return info


def _analisis_a_con(*nombres: str) -> dict:
    return analisis_vacio("/a", component_map={n: _info(f"src/components/{n}.jsx") for n in nombres})


def test_registrar_si_ausente_no_sobrescribe() -> None:
    mapa = MapaRenombres()

    assert mapa.registrar_si_ausente("Header", "HeaderB") == (True, "HeaderB")
    assert mapa.registrar_si_ausente("Header", "HeaderX") == (False, "HeaderB")
    assert mapa.snapshot() == {"Header": "HeaderB"}
    assert "Header" in mapa
    assert len(mapa) == 1


def test_registro_concurrente_un_solo_ganador() -> None:
    mapa = MapaRenombres()

    with ThreadPoolExecutor(max_workers=8) as executor:
        resultados = list(executor.map(lambda i: mapa.registrar_si_ausente("Nav", f"Nav{i}"), range(32)))

    assert sum(1 for insertado, _ in resultados if insertado) == 1
    assert len({vigente for _, vigente in resultados}) == 1


def test_resolver_conflictos_renombra_y_reubica() -> None:
    archivos = [
        _info("src/components/Header.jsx"),
        _info("src/components/Footer.jsx"),
        _info("src/utils/Header.js", categoria="util"),
    ]
    renombres = MapaRenombres()

    reubicados = resolver_conflictos(archivos, _analisis_a_con("Header"), renombres, "B")

    assert reubicados == [("src/components/Header.jsx", "src/components/HeaderB.jsx")]
    assert archivos[0]["file_name"] == "HeaderB.jsx"
    assert archivos[2]["relative_path"] == "src/utils/Header.js"
    assert renombres.snapshot() == {"Header": "HeaderB"}


def test_resolver_conflictos_es_idempotente() -> None:
    renombres = MapaRenombres()
    analisis_a = _analisis_a_con("Header", "HeaderB")

    primera = resolver_conflictos([_info("src/components/Header.jsx")], analisis_a, renombres, "B")
    segunda = resolver_conflictos([_info("src/components/Header.jsx")], analisis_a, renombres, "B")

    assert primera == segunda == [("src/components/Header.jsx", "src/components/HeaderB.jsx")]
    assert renombres.snapshot() == {"Header": "HeaderB"}


def test_resolver_conflictos_respeta_mapa_del_usuario() -> None:
    archivos = [_info("src/pages/Home.jsx", categoria="page")]
    renombres = MapaRenombres({"Home": "InicioLegado"})

    reubicados = resolver_conflictos(archivos, _analisis_a_con("Home"), renombres, "B")

    assert reubicados == [("src/pages/Home.jsx", "src/pages/InicioLegado.jsx")]
    assert renombres.snapshot() == {"Home": "InicioLegado"}
