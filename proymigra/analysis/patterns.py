# proymigra/analysis/patterns.py
import logging

from ..config import FRAMEWORKS_CON_HOOKS, PAQUETE_REDUX
from ..models import FileInfo, ProjectAnalysis
from .js_parser import ArbolFuente, valor_cadena

logger = logging.getLogger(__name__)


def reconocer_patrones(arbol: ArbolFuente, info: FileInfo, analisis: ProjectAnalysis):
    """
    Heurística sobre imports: 'redux' si se importa react-redux; 'contextApi'
    acumula el nombre del archivo por cada import que contenga 'context'
    (solo en frameworks con hooks). Falsos positivos aceptados.
    """
    logger.info(f"    [Reconocimiento de Patrones] Analizando patrones en {info['relative_path']}")
    patrones = analisis['architectural_patterns']
    admite_hooks = analisis['framework'] in FRAMEWORKS_CON_HOOKS

    for nodo in arbol.nodos_de_tipo('import_statement'):
        especificador = valor_cadena(arbol, nodo.child_by_field_name('source'))
        if especificador is None:
            continue
        if especificador == PAQUETE_REDUX:
            patrones['redux'] = True
        if 'context' in especificador and admite_hooks:
            patrones.setdefault('contextApi', []).append(info['file_name'])
