# proymigra/analysis/dependencies.py
import logging
from typing import List

from ..models import FileInfo, ProjectAnalysis
from ..utils.path_utils import resolver_alias
from .js_parser import ArbolFuente, argumentos_llamada, valor_cadena

logger = logging.getLogger(__name__)


def reconstruir_dependencias(arbol: ArbolFuente, info: FileInfo, analisis: ProjectAnalysis) -> List[str]:
    """
    Especificadores importados por el archivo, en orden de aparición.
    Imports estáticos: se resuelven los alias del proyecto.
    import() dinámico: primer argumento literal, sin resolver alias.
    """
    ruta = info['relative_path']
    logger.info(f"    [Grafo de Dependencias] Reconstruyendo dependencias de {ruta}")
    dependencias: List[str] = []

    for nodo in arbol.nodos_de_tipo('import_statement', 'call_expression'):
        if nodo.type == 'import_statement':
            especificador = valor_cadena(arbol, nodo.child_by_field_name('source'))
            if especificador is None:
                continue
            resuelto = resolver_alias(especificador, analisis['aliases'])
            dependencias.append(resuelto)
        else:
            funcion = nodo.child_by_field_name('function')
            if funcion is None or funcion.type != 'import':
                continue
            argumentos = argumentos_llamada(nodo)
            literal = valor_cadena(arbol, argumentos[0]) if argumentos else None
            if literal is not None:
                dependencias.append(literal)
            else:
                logger.debug(f"      import() no literal en {ruta}; se omite")

    analisis['dependency_graph'][ruta] = dependencias
    return dependencias
