"""Tests para proymigra.config_manager."""

from __future__ import annotations

import json

from proymigra.config_manager import cargar_config, construir_opciones, guardar_config, obtener_ruta_config
from proymigra.models import MigrationOptions


def test_cargar_config_sin_archivo_devuelve_valores_por_defecto(home_aislado) -> None:
    config = cargar_config()

    assert config == {"last_source_dir": None, "last_target_dir": None, "default_debug_mode": False}
    assert obtener_ruta_config().startswith(str(home_aislado))


def test_guardar_y_cargar(home_aislado) -> None:
    guardar_config({"last_source_dir": "/b", "migration": {"dry_run": True}})

    config = cargar_config()

    assert config["last_source_dir"] == "/b"
    assert config["migration"] == {"dry_run": True}


def test_cargar_config_corrupta(home_aislado) -> None:
    ruta = home_aislado / ".proymigra" / "config.json"
    ruta.parent.mkdir()
    ruta.write_text("{ roto", encoding="utf-8")

    assert cargar_config()["last_target_dir"] is None


def test_construir_opciones_precedencia() -> None:
    config_usuario = {
        "migration": {
            "ignore_dirs": ["node_modules", "tmp"],
            "style_strategy": "prefix-styles",
            "component_name_mapping": {"Header": "SiteHeader"},
            "desconocida": 1,
        }
    }

    opciones = construir_opciones(config_usuario, dry_run=True, style_strategy="none", output_mode=None)

    assert opciones.ignore_dirs == ("node_modules", "tmp")
    assert opciones.style_strategy == "none"
    assert opciones.dry_run is True
    assert opciones.output_mode == "migrate"
    assert opciones.component_name_mapping == {"Header": "SiteHeader"}


def test_construir_opciones_rechaza_callables_desde_archivo() -> None:
    opciones = construir_opciones({"migration": {"custom_transformer": "os.system"}})

    assert opciones.custom_transformer is None
    assert opciones == MigrationOptions()


def test_construir_opciones_acepta_transformador_por_codigo() -> None:
    def _transformador(contenido, info):
        return contenido

    opciones = construir_opciones({}, custom_transformer=_transformador)

    assert opciones.custom_transformer is _transformador


def test_guardar_config_es_json_legible(home_aislado) -> None:
    guardar_config({"default_debug_mode": True})

    with open(obtener_ruta_config(), encoding="utf-8") as f:
        assert json.load(f) == {"default_debug_mode": True}
