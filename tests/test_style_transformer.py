"""Tests para las estrategias de estilos."""

from __future__ import annotations

from proymigra.analysis.css_parser import extraer_estilos_texto
from proymigra.models import MigrationOptions
from proymigra.transform.style_transformer import (
    construir_mapa_colores, transformar_estilos_en_linea, transformar_hoja,
)
from tests._fixtures.proyectos import analisis_vacio

INFO_CSS = {"relative_path": "src/components/Card.css", "extension": ".css", "file_name": "Card.css"}
INFO_JSX = {"relative_path": "src/components/Card.jsx", "extension": ".jsx", "file_name": "Card.jsx"}


def _par_analisis():
    a = analisis_vacio("/a", style_info={"a.css": extraer_estilos_texto(".x { color: #000; }", ".css", "a.css")})
    b = analisis_vacio("/b", style_info={"b.css": extraer_estilos_texto(".y { color: #0f0; }", ".css", "b.css")})
    return a, b


def test_prefix_styles_prefija_cada_selector() -> None:
    a, b = _par_analisis()
    css = ".card, .card--active { color: red; }\n"

    resultado = transformar_hoja(css, INFO_CSS, a, b, MigrationOptions(style_strategy="prefix-styles"))

    assert resultado == "migrated-.card, migrated-.card--active { color: red; }\n"


def test_prefix_styles_con_prefijo_propio_y_reglas_anidadas() -> None:
    a, b = _par_analisis()
    info = dict(INFO_CSS, extension=".scss", relative_path="src/components/Card.scss")
    scss = ".card {\n  .titulo { color: #111; }\n}\n"

    resultado = transformar_hoja(scss, info, a, b, MigrationOptions(style_strategy="prefix-styles", style_prefix="b-"))

    assert resultado == "b-.card {\n  b-.titulo { color: #111; }\n}\n"


def test_estrategia_none_no_modifica() -> None:
    a, b = _par_analisis()
    css = ".card { color: red; }\n"

    assert transformar_hoja(css, INFO_CSS, a, b, MigrationOptions(style_strategy="none")) == css


def test_estrategia_desconocida_no_modifica() -> None:
    a, b = _par_analisis()
    css = ".card { color: red; }\n"

    assert transformar_hoja(css, INFO_CSS, a, b, MigrationOptions(style_strategy="arcoiris")) == css


def test_basic_mapping_conserva_colores() -> None:
    a, b = _par_analisis()
    css = ".y { color: #0f0; }\n"

    assert transformar_hoja(css, INFO_CSS, a, b, MigrationOptions(style_strategy="basic-mapping")) == css
    assert construir_mapa_colores(a, b) == {"#0f0": "#0f0"}


def test_hoja_mal_formada_se_copia_sin_cambios() -> None:
    a, b = _par_analisis()
    css = ".ok { color: #fff; }\n.roto"

    assert transformar_hoja(css, INFO_CSS, a, b, MigrationOptions(style_strategy="prefix-styles")) == css


def test_estilos_en_linea_no_modifican_el_codigo() -> None:
    a, b = _par_analisis()
    codigo = "export const C = () => <div style={{ color: '#0f0' }} />;\n"

    resultado = transformar_estilos_en_linea(codigo, INFO_JSX, a, b, MigrationOptions(style_strategy="basic-mapping"))

    assert resultado == codigo
