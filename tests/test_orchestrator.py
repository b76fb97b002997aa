"""Tests de extremo a extremo del orquestador de migración."""

from __future__ import annotations

import json
import threading
import time
from pathlib import Path

from proymigra.models import MigrationOptions
from proymigra.orchestrator import Cancelacion, MigrationOrchestrator, comparar_estilos, ejecutar_migracion
from proymigra.scanner import escanear_proyecto

FASES_MIGRACION = [
    "Idle",
    "AnalyzingA",
    "AnalyzingB",
    "MigratingComponents",
    "HarmonizingRoutes",
    "IntegratingState",
    "ComparingStyles",
    "Done",
]


def _migrados(a: Path) -> Path:
    return a / "src" / "components_migrated_from_B"


def test_migracion_completa(proyectos) -> None:
    a, b = proyectos

    orquestador = MigrationOrchestrator(str(a), str(b), MigrationOptions())
    resultado = orquestador.ejecutar()

    assert resultado["estado"] == "Done"
    assert resultado["historial_estados"] == FASES_MIGRACION
    assert resultado["renombres"] == {"Header": "HeaderB"}
    assert resultado["fallos"] == {}
    assert [origen for origen, _ in resultado["escrituras"]] == [
        "src/components/Header.jsx",
        "src/components/Layout.jsx",
        "src/pages/Home.jsx",
        "src/utils/format.js",
    ]

    base = _migrados(a) / "src"
    assert (base / "components" / "HeaderB.jsx").exists()
    assert not (base / "components" / "Header.jsx").exists()
    assert (base / "utils" / "format.js").exists()
    # Hojas de estilo y assets no se migran
    assert not (base / "styles").exists()
    assert not (base / "assets").exists()

    layout = (base / "components" / "Layout.jsx").read_text(encoding="utf-8")
    assert "<HeaderB />" in layout
    assert "import HeaderB from '@/components_migrated_from_B/src/components/HeaderB';" in layout

    home = (base / "pages" / "Home.jsx").read_text(encoding="utf-8")
    assert "from '@/components_migrated_from_B/src/components/Layout'" in home

    advertencias = orquestador.auditoria.mensajes("WARN")
    assert "    Renombrando 'Header' a 'HeaderB' para evitar conflicto" in advertencias
    assert all(entrada.startswith("[") for entrada in orquestador.auditoria.entradas())


def test_dry_run_planifica_lo_mismo_sin_escribir(proyectos) -> None:
    a, b = proyectos

    simulado = MigrationOrchestrator(str(a), str(b), MigrationOptions(dry_run=True)).ejecutar()

    assert simulado["estado"] == "Done"
    assert simulado["escritos"] == []
    assert not _migrados(a).exists()

    real = MigrationOrchestrator(str(a), str(b), MigrationOptions()).ejecutar()

    assert real["escrituras"] == simulado["escrituras"]
    assert real["renombres"] == simulado["renombres"]
    assert sorted(real["escritos"]) == sorted(destino for _, destino in real["escrituras"])


def test_segunda_ejecucion_no_vuelve_a_renombrar(proyectos) -> None:
    a, b = proyectos
    orquestador = MigrationOrchestrator(str(a), str(b), MigrationOptions())

    primera = orquestador.ejecutar()
    segunda = orquestador.ejecutar()

    assert segunda["estado"] == "Done"
    assert segunda["escrituras"] == primera["escrituras"]
    assert segunda["renombres"] == {"Header": "HeaderB"}
    assert not list(_migrados(a).rglob("HeaderBB*"))


def test_raiz_inexistente_termina_en_failed(proyectos, tmp_path) -> None:
    _, b = proyectos

    resultado = ejecutar_migracion(str(tmp_path / "no-existe"), str(b))

    assert resultado["estado"] == "Failed"
    assert resultado["historial_estados"] == ["Idle", "AnalyzingA", "Failed"]
    assert resultado["escrituras"] == []


def test_sintaxis_invalida_se_copia_tal_cual(proyectos) -> None:
    a, b = proyectos
    roto = "export const = ;\n"
    (b / "src" / "utils" / "roto.js").write_text(roto, encoding="utf-8")

    resultado = ejecutar_migracion(str(a), str(b))

    assert resultado["estado"] == "Done"
    assert resultado["fallos"] == {}
    assert (_migrados(a) / "src" / "utils" / "roto.js").read_text(encoding="utf-8") == roto


def test_transformador_personalizado_y_tests_generados(proyectos) -> None:
    a, b = proyectos
    opciones = MigrationOptions(
        generate_tests=True,
        custom_transformer=lambda contenido, info: f"// {info['file_name']}\n{contenido}",
    )

    resultado = ejecutar_migracion(str(a), str(b), opciones)

    componentes = _migrados(a) / "src" / "components"
    assert (componentes / "HeaderB.jsx").read_text(encoding="utf-8").startswith("// HeaderB.jsx\n")
    test_header = componentes / "__tests__" / "HeaderB.test.jsx"
    assert "import HeaderB from '../HeaderB';" in test_header.read_text(encoding="utf-8")
    assert str(test_header) in resultado["escritos"]
    # Solo componentes y páginas reciben test
    assert not (_migrados(a) / "src" / "utils" / "__tests__").exists()


def test_transformador_personalizado_que_falla_no_aborta(proyectos) -> None:
    a, b = proyectos

    def _explota(contenido, info):
        raise RuntimeError("boom")

    resultado = ejecutar_migracion(str(a), str(b), MigrationOptions(custom_transformer=_explota))

    assert resultado["estado"] == "Done"
    assert resultado["fallos"] == {}
    assert (_migrados(a) / "src" / "utils" / "format.js").exists()


def test_modo_diff_no_escribe(proyectos) -> None:
    a, b = proyectos

    resultado = ejecutar_migracion(str(a), str(b), MigrationOptions(output_mode="diff"))

    assert resultado["estado"] == "Done"
    assert resultado["escrituras"]
    assert resultado["escritos"] == []
    assert not _migrados(a).exists()


def test_modo_prototipo(proyectos) -> None:
    a, b = proyectos

    resultado = ejecutar_migracion(str(a), str(b), MigrationOptions(output_mode="prototype"))

    assert "GeneratingPrototype" in resultado["historial_estados"]
    package_json = json.loads((a / "prototypes" / "generated" / "package.json").read_text(encoding="utf-8"))
    assert package_json["dependencies"] == {"react-redux": "^9.0.0", "clsx": "^2.0.0"}


def test_comparar_estilos(proyectos) -> None:
    a, b = proyectos
    opciones = MigrationOptions()

    informe = comparar_estilos(escanear_proyecto(str(a), opciones), escanear_proyecto(str(b), opciones))

    assert informe["colors"] == {"common": ["#333"], "a_only": [], "b_only": ["#ff0000"]}
    assert informe["font_families"]["a_only"] == ["Inter", "sans-serif"]
    assert informe["properties"]["b_only"] == ["background-color"]


def test_componente_reubicado_y_util_homonima(proyectos) -> None:
    a, b = proyectos
    (b / "src" / "utils" / "Header.js").write_text("export const titulo = 'Hola';\n", encoding="utf-8")
    (b / "src" / "pages" / "Ayuda.jsx").write_text(
        "import Header from '../components/Header';\n"
        "import { titulo } from '../utils/Header';\n"
        "export default function Ayuda() { return <Header title={titulo} />; }\n",
        encoding="utf-8",
    )

    resultado = ejecutar_migracion(str(a), str(b))

    assert resultado["fallos"] == {}
    base = _migrados(a) / "src"
    assert (base / "utils" / "Header.js").exists()
    ayuda = (base / "pages" / "Ayuda.jsx").read_text(encoding="utf-8")
    assert "import HeaderB from '@/components_migrated_from_B/src/components/HeaderB';" in ayuda
    assert "import { titulo } from '@/components_migrated_from_B/src/utils/Header';" in ayuda
    assert "<HeaderB title={titulo} />" in ayuda


def test_tiempo_agotado_no_escribe_despues_de_terminar(proyectos) -> None:
    a, b = proyectos
    liberar = threading.Event()

    def _lento(contenido, info):
        if info["file_name"] == "format.js":
            liberar.wait(5)
        return contenido

    opciones = MigrationOptions(custom_transformer=_lento, file_timeout=0.3, max_workers=2)
    resultado = ejecutar_migracion(str(a), str(b), opciones)
    liberar.set()
    time.sleep(0.5)

    destino = _migrados(a) / "src" / "utils" / "format.js"
    assert resultado["estado"] == "Done"
    assert resultado["fallos"] == {"src/utils/format.js": "tiempo agotado (0.3s)"}
    assert str(destino) not in resultado["escritos"]
    assert not destino.exists()
    assert (_migrados(a) / "src" / "components" / "HeaderB.jsx").exists()


def test_cancelacion_y_escritura_se_excluyen() -> None:
    cancelada = Cancelacion()
    assert cancelada.cancelar() is True
    assert cancelada.iniciar_escritura() is False

    escribiendo = Cancelacion()
    assert escribiendo.iniciar_escritura() is True
    assert escribiendo.cancelar() is False


def test_archivo_demasiado_grande_se_copia_tal_cual(proyectos, monkeypatch) -> None:
    a, b = proyectos
    monkeypatch.setattr("proymigra.utils.file_utils.MAX_TAMANO_BYTES_TEXTO", 10)
    original = (b / "src" / "utils" / "format.js").read_bytes()

    resultado = ejecutar_migracion(str(a), str(b), MigrationOptions(custom_transformer=lambda c, i: "cambiado"))

    assert resultado["fallos"] == {}
    assert (_migrados(a) / "src" / "utils" / "format.js").read_bytes() == original
