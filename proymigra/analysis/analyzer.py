# proymigra/analysis/analyzer.py
import logging
from typing import Optional

from ..config import EXTENSIONES_JS
from ..errors import ErrorParseo
from ..models import FileInfo, ProjectAnalysis
from ..utils.file_utils import leer_texto
from .dependencies import reconstruir_dependencias
from .js_parser import ArbolFuente, extraer_script_vue, parsear_codigo
from .patterns import reconocer_patrones
from .semantic import analizar_semantica

logger = logging.getLogger(__name__)


def es_analizable(info: FileInfo) -> bool:
    return info['extension'] in EXTENSIONES_JS or info['extension'] == '.vue'


def parsear_fuente(contenido: str, info: FileInfo) -> Optional[ArbolFuente]:
    """
    Árbol del código de un archivo JS/TS o del <script> de un .vue.
    None si no hay código analizable. Sintaxis inválida -> ErrorParseo.
    """
    ruta = info['relative_path']
    if info['extension'] == '.vue':
        script = extraer_script_vue(contenido, ruta)
        if script is None:
            return None
        codigo, extension = script
        return parsear_codigo(codigo, extension, ruta)
    return parsear_codigo(contenido, info['extension'], ruta)


def analizar_archivo(info: FileInfo, analisis: ProjectAnalysis) -> bool:
    """Ejecuta las pasadas semántica, de dependencias y de patrones sobre un archivo."""
    ruta = info['relative_path']
    try:
        estado, _, contenido = leer_texto(info['file_path'])
    except OSError as e:
        logger.error(f"    Error de acceso/lectura en {ruta}: {e}")
        return False
    if estado != "ok":
        logger.warning(f"    Se omite el análisis de {ruta}: {contenido}")
        return False

    try:
        arbol = parsear_fuente(contenido, info)
    except ErrorParseo as e:
        logger.warning(f"    {e}. Se omite el análisis AST.")
        return False
    if arbol is None:
        logger.debug(f"    Sin código analizable en {ruta}")
        return False

    analizar_semantica(arbol, info, analisis)
    reconstruir_dependencias(arbol, info, analisis)
    reconocer_patrones(arbol, info, analisis)
    return True


def analizar_proyecto(analisis: ProjectAnalysis) -> int:
    """
    Pasada de análisis AST sobre todos los archivos JS/TS/Vue de un proyecto.
    Secuencial: cada clave de los mapas se escribe una sola vez.
    """
    candidatos = [info for info in analisis['files'] if es_analizable(info)]
    logger.info(f"  Análisis AST de {len(candidatos)} archivos en {analisis['root_path']}")
    analizados = sum(1 for info in candidatos if analizar_archivo(info, analisis))
    logger.info(f"  {analizados}/{len(candidatos)} archivos analizados.")
    return analizados
