# proymigra/analysis/semantic.py
import logging
from typing import List

from ..config import FRAMEWORKS_CON_HOOKS
from ..models import FileInfo, ProjectAnalysis, SemanticInsight
from .js_parser import ArbolFuente, nombre_clave, objeto_de_atributo_style, pares_de_objeto, valor_cadena

logger = logging.getLogger(__name__)


def _declaraciones_nivel_superior(arbol: ArbolFuente):
    """function_declaration directas del programa, incluidas las exportadas."""
    for hijo in arbol.raiz.named_children:
        if hijo.type == 'function_declaration':
            yield hijo
        elif hijo.type == 'export_statement':
            declaracion = hijo.child_by_field_name('declaration')
            if declaracion is not None and declaracion.type == 'function_declaration':
                yield declaracion


def _nombres_importados(arbol: ArbolFuente, nodo_import) -> List[str]:
    nombres: List[str] = []
    for hijo in nodo_import.named_children:
        if hijo.type != 'import_clause':
            continue
        for parte in hijo.named_children:
            if parte.type == 'identifier':
                nombres.append(arbol.texto(parte))
            elif parte.type == 'namespace_import':
                nombres.extend(arbol.texto(n) for n in parte.named_children if n.type == 'identifier')
            elif parte.type == 'named_imports':
                for especificador in parte.named_children:
                    if especificador.type != 'import_specifier':
                        continue
                    local = especificador.child_by_field_name('alias') or especificador.child_by_field_name('name')
                    if local is not None:
                        nombres.append(arbol.texto(local))
    return nombres


def _valor_estilo(arbol: ArbolFuente, nodo_valor) -> str:
    literal = valor_cadena(arbol, nodo_valor)
    return literal if literal is not None else arbol.texto(nodo_valor)


def analizar_semantica(arbol: ArbolFuente, info: FileInfo, analisis: ProjectAnalysis) -> SemanticInsight:
    """
    Clasifica el rol del archivo, detecta hooks y recoge estilos en línea.
    El resultado queda en analisis['semantic_context'][ruta relativa].
    """
    ruta = info['relative_path']
    logger.info(f"    [Análisis Semántico] Analizando {ruta}")
    insights = SemanticInsight(
        role='unknown',
        exported_entities=[],
        imported_entities=[],
        data_flow=[],
        uses_hooks=False,
        inline_styles=[],
    )

    for declaracion in _declaraciones_nivel_superior(arbol):
        nodo_nombre = declaracion.child_by_field_name('name')
        nombre = arbol.texto(nodo_nombre) if nodo_nombre is not None else ''
        if nombre and nombre[0].isupper():
            insights['role'] = 'Component'
            insights['exported_entities'].append(nombre)

    admite_hooks = analisis['framework'] in FRAMEWORKS_CON_HOOKS
    for nodo in arbol.nodos_de_tipo('import_statement', 'call_expression', 'jsx_attribute'):
        if nodo.type == 'import_statement':
            insights['imported_entities'].extend(_nombres_importados(arbol, nodo))
        elif nodo.type == 'call_expression':
            funcion = nodo.child_by_field_name('function')
            if admite_hooks and funcion is not None and funcion.type == 'identifier':
                nombre = arbol.texto(funcion)
                if nombre.startswith('use'):
                    insights['uses_hooks'] = True
                    insights['data_flow'].append(f"Hook: {nombre}")
        else:
            objeto = objeto_de_atributo_style(arbol, nodo)
            if objeto is None:
                continue
            pares = []
            for par in pares_de_objeto(objeto):
                clave = nombre_clave(arbol, par.child_by_field_name('key'))
                valor = par.child_by_field_name('value')
                if clave is None or valor is None:
                    continue
                pares.append(f"{clave}: {_valor_estilo(arbol, valor)}")
            insights['inline_styles'].append('; '.join(pares))

    analisis['semantic_context'][ruta] = insights
    return insights
