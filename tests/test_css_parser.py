"""Tests para proymigra.analysis.css_parser."""

from __future__ import annotations

import textwrap

import pytest

from proymigra.analysis.css_parser import (
    HojaEstilo, aplicar_ediciones, es_declaracion_de_color, extraer_estilos_archivo, extraer_estilos_texto,
)
from proymigra.errors import ErrorParseoEstilo
from proymigra.models import CssVariant


def test_extraer_estilos_css() -> None:
    css = textwrap.dedent(
        """
        .a { color: #fff; }
        .b { color: #fff; background-color: rgb(0, 0, 0); font-family: "Inter", sans-serif; font-size: 16px; }
        @media (max-width: 600px) {
          .c { border-color: #123456; }
        }
        """
    )

    registro = extraer_estilos_texto(css, ".css", "base.css")

    assert registro["colors"] == ["#fff", "rgb(0, 0, 0)", "#123456"]
    assert registro["font_families"] == ["Inter", "sans-serif"]
    assert registro["font_sizes"] == ["16px"]
    assert registro["selectors"] == [".a", ".b", ".c"]
    assert registro["properties"]["color"] == ["#fff"]


def test_extraer_estilos_scss_anidado() -> None:
    scss = textwrap.dedent(
        """
        .card {
          color: $primario;
          // comentario de línea
          a:hover { color: #f00; }
        }
        """
    )

    registro = extraer_estilos_texto(scss, ".scss", "card.scss")

    assert "#f00" in registro["colors"]
    assert ".card" in registro["selectors"]
    assert "a:hover" in registro["selectors"]


def test_hoja_mal_formada_devuelve_registro_vacio() -> None:
    registro = extraer_estilos_texto(".ok { color: #fff; }\n.roto", ".css", "roto.css")

    assert registro["colors"] == []
    assert registro["selectors"] == []
    assert registro["file_path"] == "roto.css"


def test_hoja_css_mal_formada_lanza_error_de_parseo() -> None:
    with pytest.raises(ErrorParseoEstilo):
        HojaEstilo(".ok { color: #fff; }\n.roto", CssVariant.CSS, "roto.css")


def test_extraer_estilos_archivo(tmp_path) -> None:
    ruta = tmp_path / "tema.less"
    ruta.write_text("@fondo: #fafafa;\n.tema { background: #fafafa; }\n", encoding="utf-8")

    registro = extraer_estilos_archivo(str(ruta))

    assert registro["colors"] == ["#fafafa"]
    assert registro["selectors"] == [".tema"]


def test_rango_valor_apunta_al_texto_original() -> None:
    texto = ".a {\n  color:   #abc ;\n}\n"
    hoja = HojaEstilo(texto, CssVariant.CSS)
    (_, declaraciones), = list(hoja.reglas())

    inicio, fin = hoja.rango_valor(declaraciones[0])

    assert texto[inicio:fin].strip() == "#abc"
    assert aplicar_ediciones(texto, [(inicio, fin, " red")]) == ".a {\n  color: red;\n}\n"


def test_es_declaracion_de_color() -> None:
    assert es_declaracion_de_color("background-color", "#000")
    assert es_declaracion_de_color("border", "1px solid hsl(0, 0%, 10%)")
    assert not es_declaracion_de_color("margin", "#000")
    assert not es_declaracion_de_color("color", "inherit")
