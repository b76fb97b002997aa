"""Tests para detección de framework y alias de importación."""

from __future__ import annotations

import pytest

from proymigra.detection import cargar_alias, dependencias_declaradas, detectar_framework
from proymigra.utils.path_utils import alias_raiz_fuentes, resolver_alias


@pytest.mark.parametrize(
    ("package_json", "esperado"),
    [
        ({"dependencies": {"next": "14.0.0", "react": "18.2.0"}}, "next"),
        ({"dependencies": {"react": "18.2.0", "react-dom": "18.2.0"}}, "react"),
        ({"dependencies": {"vue": "3.4.0"}, "devDependencies": {"vite": "5.0.0"}}, "vue"),
        ({"devDependencies": {"vite": "5.0.0"}}, "vite"),
        ({"dependencies": {"vite": "5.0.0", "astro": "4.0.0"}}, "vite"),
        ({"dependencies": {"@remix-run/react": "2.0.0", "vite": "5.0.0"}}, "vite"),
        ({"dependencies": {"@remix-run/react": "2.0.0", "react": "18.2.0"}}, "react"),
        ({"dependencies": {"nuxt": "3.9.0", "vue": "3.4.0"}}, "nuxt"),
        ({"dependencies": {"astro": "4.0.0"}}, "astro"),
        ({"dependencies": {"@angular/core": "17.0.0"}}, "angular"),
        ({"dependencies": {"lodash": "4.17.21"}}, None),
        ({}, None),
    ],
)
def test_detectar_framework(package_json, esperado) -> None:
    assert detectar_framework(package_json) == esperado


def test_dependencias_declaradas_une_secciones() -> None:
    package_json = {"dependencies": {"a": "1"}, "devDependencies": {"b": "2"}, "peerDependencies": {"c": "3"}}

    assert dependencias_declaradas(package_json) == {"a": "1", "b": "2"}


def test_cargar_alias(construir_proyecto) -> None:
    raiz = construir_proyecto("ts", {"tsconfig.json": {"compilerOptions": {"paths": {"~/*": ["./src/*"]}}}})

    assert cargar_alias(str(raiz)) == {"~/*": ["./src/*"]}


def test_cargar_alias_tsconfig_invalido(construir_proyecto) -> None:
    raiz = construir_proyecto("roto", {"tsconfig.json": "{ compilerOptions: "})

    assert cargar_alias(str(raiz)) == {}


def test_resolver_alias() -> None:
    aliases = {"@/*": ["src/*"]}

    assert resolver_alias("@/utils/foo", aliases) == "src/utils/foo"
    assert resolver_alias("react", aliases) == "react"
    assert resolver_alias("./local", aliases) == "./local"


def test_alias_raiz_fuentes() -> None:
    assert alias_raiz_fuentes({"@/*": ["src/*"]}) == ("@/*", "@/")
    assert alias_raiz_fuentes({"#lib/*": ["lib/*"], "~/*": ["./src/*"]}) == ("~/*", "~/")
    assert alias_raiz_fuentes({"#lib/*": ["lib/*"]}) is None
