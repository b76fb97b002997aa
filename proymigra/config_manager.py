# proymigra/config_manager.py
import os
import json
import logging
import dataclasses
from typing import Dict, Any

from .models import MigrationOptions

logger = logging.getLogger(__name__) # Usa 'proymigra.config_manager'

CONFIG_DIR_NAME = ".proymigra"
CONFIG_FILE_NAME = "config.json"

# Campos que en MigrationOptions son tuplas (JSON los entrega como listas)
_CAMPOS_TUPLA = {'component_dirs', 'util_dirs', 'asset_dirs', 'config_dirs', 'ignore_dirs', 'file_extensions'}
# No representables en JSON: solo por código
_CAMPOS_SOLO_CODIGO = {'custom_transformer', 'aesthetic_strategy'}


def obtener_ruta_config() -> str:
    """Obtiene la ruta completa al archivo de configuración del usuario."""
    home_dir = os.path.expanduser("~")
    return os.path.join(home_dir, CONFIG_DIR_NAME, CONFIG_FILE_NAME)


def cargar_config() -> Dict[str, Any]:
    """Carga la configuración de usuario desde JSON. Ausente o corrupta -> {}."""
    ruta_config = obtener_ruta_config()
    config: Dict[str, Any] = {}
    if os.path.exists(ruta_config):
        try:
            with open(ruta_config, 'r', encoding='utf-8') as f:
                config = json.load(f)
            logger.debug(f"Configuración cargada desde: {ruta_config}")
        except json.JSONDecodeError:
            logger.error(f"Error al decodificar el archivo de configuración: {ruta_config}. Se usará configuración vacía.")
            config = {}
        except OSError as e:
            logger.error(f"Error al leer la configuración desde {ruta_config}: {e}")
            config = {}
    else:
        logger.debug(f"Archivo de configuración no encontrado en {ruta_config}.")

    if not isinstance(config, dict):
        logger.error(f"La configuración en {ruta_config} no es un objeto JSON. Se ignora.")
        config = {}
    config.setdefault("last_source_dir", None)
    config.setdefault("last_target_dir", None)
    config.setdefault("default_debug_mode", False)
    return config


def guardar_config(config: Dict[str, Any]):
    """Guarda la configuración en el archivo JSON."""
    ruta_config = obtener_ruta_config()
    try:
        os.makedirs(os.path.dirname(ruta_config), exist_ok=True)
        with open(ruta_config, 'w', encoding='utf-8') as f:
            json.dump(config, f, indent=4)
        logger.debug(f"Configuración guardada en: {ruta_config}")
    except OSError as e:
        logger.error(f"Error al guardar la configuración en {ruta_config}: {e}")


def construir_opciones(config_usuario: Dict[str, Any] = None, **overrides) -> MigrationOptions:
    """
    Combina valores por defecto, el bloque 'migration' de la configuración de usuario
    y los overrides explícitos (CLI o código), en ese orden de precedencia creciente.
    Claves desconocidas se advierten y se descartan.
    """
    validos = {f.name for f in dataclasses.fields(MigrationOptions)}
    valores: Dict[str, Any] = {}

    bloque = (config_usuario or {}).get('migration') or {}
    if not isinstance(bloque, dict):
        logger.warning("La sección 'migration' de la configuración no es un objeto; se ignora.")
        bloque = {}

    for origen, datos in (('configuración de usuario', bloque), ('argumentos', overrides)):
        for clave, valor in datos.items():
            if clave not in validos:
                logger.warning(f"Opción desconocida '{clave}' en {origen}; se ignora.")
                continue
            if origen != 'argumentos' and clave in _CAMPOS_SOLO_CODIGO:
                logger.warning(f"La opción '{clave}' no puede definirse en el archivo de configuración.")
                continue
            if valor is None:
                continue
            if clave in _CAMPOS_TUPLA:
                valor = tuple(valor)
            elif clave in ('component_name_mapping', 'import_path_rewrites'):
                valor = dict(valor)
            valores[clave] = valor

    opciones = MigrationOptions(**valores)
    logger.debug(f"Opciones de migración efectivas: { {k: v for k, v in valores.items() if k not in _CAMPOS_SOLO_CODIGO} }")
    return opciones
