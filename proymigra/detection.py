# proymigra/detection.py
import os
import logging
from typing import Any, Dict, List, Optional

from .config import ARCHIVO_PACKAGE_JSON, ARCHIVO_TSCONFIG, FIRMAS_FRAMEWORK
from .errors import ErrorConfiguracion
from .utils.file_utils import leer_json

logger = logging.getLogger(__name__)


def dependencias_declaradas(package_json: Dict[str, Any]) -> Dict[str, Any]:
    """Unión de dependencies y devDependencies (devDependencies gana en empate)."""
    dependencias: Dict[str, Any] = {}
    for clave in ('dependencies', 'devDependencies'):
        seccion = package_json.get(clave)
        if isinstance(seccion, dict):
            dependencias.update(seccion)
    return dependencias


def detectar_framework(package_json: Dict[str, Any]) -> Optional[str]:
    """Primer framework de la tabla de firmas presente en las dependencias, o None."""
    dependencias = dependencias_declaradas(package_json)
    for framework, paquetes in FIRMAS_FRAMEWORK:
        if any(dependencias.get(paquete) for paquete in paquetes):
            return framework
    return None


def cargar_package_json(raiz_proyecto: str) -> Dict[str, Any]:
    ruta = os.path.join(raiz_proyecto, ARCHIVO_PACKAGE_JSON)
    try:
        return leer_json(ruta)
    except ErrorConfiguracion as e:
        logger.warning(f"  No se pudo leer package.json de {raiz_proyecto}: {e}")
        return {}


def cargar_alias(raiz_proyecto: str) -> Dict[str, List[str]]:
    """
    Extrae compilerOptions.paths de tsconfig.json tal cual.
    Ej: {"@/*": ["src/*"]}. Ausente o mal formado -> {} con advertencia.
    """
    ruta = os.path.join(raiz_proyecto, ARCHIVO_TSCONFIG)
    try:
        tsconfig = leer_json(ruta)
    except ErrorConfiguracion as e:
        logger.warning(f"  No se pudo parsear tsconfig.json de {raiz_proyecto}: {e}")
        return {}

    opciones = tsconfig.get('compilerOptions')
    paths = opciones.get('paths') if isinstance(opciones, dict) else None
    if paths is None:
        return {}
    if not isinstance(paths, dict):
        logger.warning(f"  compilerOptions.paths en {ruta} no es un objeto; se ignora.")
        return {}
    return dict(paths)
