# proymigra/transform/ast_adapter.py
import os
import logging
import posixpath
from typing import Callable, Dict, List, Optional, Tuple

from ..analysis.js_parser import (
    ArbolFuente, nombre_clave, objeto_de_atributo_style, pares_de_objeto, parsear_codigo, valor_cadena,
)
from ..config import DIR_FUENTES, EXTENSIONES_UI
from ..models import FileInfo, ProjectAnalysis
from ..utils.path_utils import alias_raiz_fuentes, es_relativa, ruta_relativa_posix

logger = logging.getLogger(__name__)

# (inicio_byte, fin_byte, reemplazo)
Edicion = Tuple[int, int, str]


def _puente_vue_a_react(arbol: ArbolFuente, info: FileInfo) -> List[Edicion]:
    # Punto de extensión: la conversión <template> -> JSX queda fuera de alcance
    logger.info(f"      Intentando puente de componente Vue a React: {info['relative_path']}")
    return []


# (framework origen, framework destino) -> puente
PUENTES_FRAMEWORK: Dict[Tuple[str, str], Callable[[ArbolFuente, FileInfo], List[Edicion]]] = {
    ('vue', 'react'): _puente_vue_a_react,
}


def _literal_con_comillas(arbol: ArbolFuente, nodo_cadena, valor: str) -> str:
    """Nuevo literal que conserva la comilla original del nodo."""
    comilla = arbol.texto(nodo_cadena)[0]
    escapado = valor.replace(comilla, '\\' + comilla)
    return f"{comilla}{escapado}{comilla}"


def reexpresar_relativa(especificador: str, ruta_destino: str, analisis_a: ProjectAnalysis) -> Optional[str]:
    """
    './x' (relativo al archivo ya migrado) -> '<alias de src de A>/<ruta desde src>'.
    None si A no tiene alias hacia src o el destino queda fuera de src.
    """
    alias = alias_raiz_fuentes(analisis_a['aliases'])
    if alias is None:
        return None
    _, prefijo = alias
    absoluta = os.path.normpath(os.path.join(os.path.dirname(ruta_destino), especificador))
    raiz_fuentes = os.path.join(analisis_a['root_path'], DIR_FUENTES)
    desde_src = ruta_relativa_posix(absoluta, raiz_fuentes)
    if desde_src == '..' or desde_src.startswith('../'):
        logger.debug(f"      '{especificador}' resuelve fuera de {raiz_fuentes}; se mantiene")
        return None
    return f"{prefijo}{desde_src}"


def _resolver_reubicacion(especificador: str, info: FileInfo,
                          reubicados: Dict[str, str]) -> Optional[Tuple[str, str, str]]:
    """
    Resuelve un import relativo contra la ruta original del archivo en B.
    Si apunta a un componente reubicado devuelve
    (nuevo especificador, nombre original, nombre nuevo); si no, None.
    """
    if not reubicados:
        return None
    candidata = posixpath.normpath(posixpath.join(posixpath.dirname(info['relative_path']), especificador))
    extension = posixpath.splitext(candidata)[1]
    if extension in EXTENSIONES_UI:
        candidatas = [candidata]
    else:
        # './Header' sin extensión: se prueban las extensiones de componentes
        extension = ''
        candidatas = [candidata + ext for ext in sorted(EXTENSIONES_UI)]
    for ruta in candidatas:
        nuevo_nombre = reubicados.get(ruta)
        if nuevo_nombre is None:
            continue
        nombre_original = posixpath.splitext(posixpath.basename(ruta))[0]
        directorio = especificador.rpartition('/')[0]
        return f"{directorio}/{nuevo_nombre}{extension}", nombre_original, nuevo_nombre
    return None


def _ediciones_import(arbol: ArbolFuente, nodo_import, info: FileInfo, ruta_destino: str,
                      analisis_a: ProjectAnalysis, overrides: Dict[str, str],
                      reubicados: Dict[str, str], enlaces: Dict[str, str]) -> List[Edicion]:
    nodo_fuente = nodo_import.child_by_field_name('source')
    especificador = valor_cadena(arbol, nodo_fuente)
    if especificador is None:
        return []
    ediciones: List[Edicion] = []

    nuevo: Optional[str] = None
    if especificador in overrides:
        # Los overrides explícitos tienen prioridad sobre cualquier otra reescritura
        nuevo = overrides[especificador]
    elif es_relativa(especificador):
        ajustado = especificador
        reubicacion = _resolver_reubicacion(especificador, info, reubicados)
        if reubicacion is not None:
            ajustado, nombre_original, nuevo_nombre = reubicacion
            ediciones.extend(_renombrar_enlaces_import(arbol, nodo_import, nombre_original, nuevo_nombre, enlaces))
        nuevo = reexpresar_relativa(ajustado, ruta_destino, analisis_a)
        if nuevo is None and ajustado != especificador:
            nuevo = ajustado

    if nuevo is not None and nuevo != especificador:
        logger.debug(f"      Import reescrito en {info['relative_path']}: '{especificador}' -> '{nuevo}'")
        ediciones.append((nodo_fuente.start_byte, nodo_fuente.end_byte, _literal_con_comillas(arbol, nodo_fuente, nuevo)))
    return ediciones


def _renombrar_enlaces_import(arbol: ArbolFuente, nodo_import, nombre_original: str, nuevo_nombre: str,
                              enlaces: Dict[str, str]) -> List[Edicion]:
    """
    'import Header' -> 'import HeaderB'; '{ Header }' -> '{ Header as HeaderB }'.
    Los enlaces locales renombrados se anotan en `enlaces` para la pasada de referencias.
    """
    ediciones: List[Edicion] = []
    for hijo in nodo_import.named_children:
        if hijo.type != 'import_clause':
            continue
        for parte in hijo.named_children:
            if parte.type == 'identifier' and arbol.texto(parte) == nombre_original:
                ediciones.append((parte.start_byte, parte.end_byte, nuevo_nombre))
                enlaces[nombre_original] = nuevo_nombre
            elif parte.type == 'named_imports':
                for especificador in parte.named_children:
                    if especificador.type != 'import_specifier' or especificador.child_by_field_name('alias') is not None:
                        continue
                    nombre = especificador.child_by_field_name('name')
                    if nombre is not None and arbol.texto(nombre) == nombre_original:
                        ediciones.append((nombre.start_byte, nombre.end_byte, f"{nombre_original} as {nuevo_nombre}"))
                        enlaces[nombre_original] = nuevo_nombre
    return ediciones


def _dentro_de(nodo, tipo: str) -> bool:
    actual = nodo.parent
    while actual is not None:
        if actual.type == tipo:
            return True
        actual = actual.parent
    return False


def _ediciones_referencias(arbol: ArbolFuente, enlaces: Dict[str, str]) -> List[Edicion]:
    """Renombra cada uso de un enlace importado que cambió de nombre (JSX incluido)."""
    ediciones: List[Edicion] = []
    for nodo in arbol.nodos_de_tipo('identifier', 'shorthand_property_identifier'):
        nombre = arbol.texto(nodo)
        if nombre not in enlaces or _dentro_de(nodo, 'import_statement'):
            continue
        nuevo_nombre = enlaces[nombre]
        padre = nodo.parent
        if nodo.type == 'shorthand_property_identifier':
            reemplazo = f"{nombre}: {nuevo_nombre}"
        elif padre is not None and padre.type == 'export_specifier':
            if padre.child_by_field_name('alias') is not None:
                if padre.child_by_field_name('name') != nodo:
                    continue
                reemplazo = nuevo_nombre
            else:
                # El nombre exportado hacia fuera no cambia
                reemplazo = f"{nuevo_nombre} as {nombre}"
        else:
            reemplazo = nuevo_nombre
        ediciones.append((nodo.start_byte, nodo.end_byte, reemplazo))
    return ediciones


def _ediciones_fondo(arbol: ArbolFuente, nodo_atributo, info: FileInfo,
                     analisis_a: ProjectAnalysis, estetica) -> List[Edicion]:
    objeto = objeto_de_atributo_style(arbol, nodo_atributo)
    if objeto is None:
        return []
    perfil = analisis_a['aesthetic_profile']
    ediciones: List[Edicion] = []
    for par in pares_de_objeto(objeto):
        if nombre_clave(arbol, par.child_by_field_name('key')) != 'background':
            continue
        nodo_valor = par.child_by_field_name('value')
        fondo = valor_cadena(arbol, nodo_valor)
        if not fondo or estetica.coincide(fondo, perfil):
            continue
        sustituto = estetica.sustituir(fondo, perfil)
        if sustituto == fondo:
            continue
        ediciones.append((nodo_valor.start_byte, nodo_valor.end_byte, _literal_con_comillas(arbol, nodo_valor, sustituto)))
        logger.info(f"      Fondo sustituido en {info['relative_path']}: {fondo} -> {sustituto}")
    return ediciones


def aplicar_ediciones_bytes(codigo: bytes, ediciones: List[Edicion]) -> str:
    """Aplica ediciones por rango de bytes de atrás hacia delante; el resto del texto queda intacto."""
    resultado = codigo
    for inicio, fin, reemplazo in sorted(ediciones, key=lambda e: e[0], reverse=True):
        resultado = resultado[:inicio] + reemplazo.encode('utf-8') + resultado[fin:]
    return resultado.decode('utf-8')


def adaptar_codigo(contenido: str, info: FileInfo, ruta_destino: str,
                   analisis_a: ProjectAnalysis, analisis_b: ProjectAnalysis, contexto) -> str:
    """
    Adapta un módulo JS/TS de B a las convenciones de A: reescribe imports,
    sigue a los componentes reubicados (import y cada referencia, JSX incluido)
    y sustituye fondos en estilos en línea según la estrategia estética.
    Sintaxis inválida -> ErrorParseo (el llamador decide copiar tal cual).
    """
    logger.info(f"    [Adaptación Contextual] Adaptando {info['relative_path']} al Proyecto A")
    arbol = parsear_codigo(contenido, info['extension'], info['relative_path'])
    ediciones: List[Edicion] = []

    if analisis_b['framework'] != analisis_a['framework']:
        puente = PUENTES_FRAMEWORK.get((analisis_b['framework'], analisis_a['framework']))
        if puente is not None:
            ediciones.extend(puente(arbol, info))

    overrides = contexto.opciones.import_path_rewrites
    reubicados = contexto.reubicados
    # Enlaces importados que cambian de nombre en este archivo: original -> nuevo
    enlaces: Dict[str, str] = {}

    for nodo in arbol.nodos_de_tipo('import_statement', 'jsx_attribute'):
        if nodo.type == 'import_statement':
            ediciones.extend(_ediciones_import(arbol, nodo, info, ruta_destino, analisis_a, overrides, reubicados, enlaces))
        else:
            ediciones.extend(_ediciones_fondo(arbol, nodo, info, analisis_a, contexto.estetica))
    if enlaces:
        ediciones.extend(_ediciones_referencias(arbol, enlaces))

    if not ediciones:
        return contenido
    logger.debug(f"      {len(ediciones)} edición(es) en {info['relative_path']}")
    return aplicar_ediciones_bytes(arbol.codigo, ediciones)
