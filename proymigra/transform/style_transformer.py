# proymigra/transform/style_transformer.py
import logging
from typing import Dict, List, Tuple

from ..analysis.css_parser import (
    PATRON_PROPIEDAD_COLOR, aplicar_ediciones, colores_observados, es_declaracion_de_color,
    parsear_hoja, valor_declaracion,
)
from ..analysis.js_parser import nombre_clave, objeto_de_atributo_style, pares_de_objeto, parsear_codigo, valor_cadena
from ..config import EXTENSIONES_ESTILO
from ..errors import ErrorParseo, ErrorParseoEstilo
from ..models import CssVariant, FileInfo, MigrationOptions, ProjectAnalysis

logger = logging.getLogger(__name__)


def construir_mapa_colores(analisis_a: ProjectAnalysis, analisis_b: ProjectAnalysis) -> Dict[str, str]:
    """
    Mapa color de B -> color a usar en A.
    Hoy es la identidad: un color de B se conserva esté o no en la paleta de A.
    """
    colores_a = colores_observados(analisis_a['style_info'])
    mapa: Dict[str, str] = {}
    for color in colores_observados(analisis_b['style_info']):
        if color not in colores_a:
            logger.debug(f"      Color '{color}' solo en Proyecto B; se conserva.")
        # TODO: sustituir por el color más cercano de colores_a cuando exista un criterio de paleta
        mapa[color] = color
    return mapa


def _mapeo_basico(contenido: str, info: FileInfo, analisis_a: ProjectAnalysis, analisis_b: ProjectAnalysis) -> str:
    mapa = construir_mapa_colores(analisis_a, analisis_b)
    hoja = parsear_hoja(contenido, CssVariant.desde_extension(info['extension']), info['relative_path'])
    ediciones: List[Tuple[int, int, str]] = []
    for _, declaraciones in hoja.reglas():
        for decl in declaraciones:
            valor = valor_declaracion(decl)
            if not es_declaracion_de_color(decl.name, valor):
                continue
            nuevo = mapa.get(valor)
            if nuevo is None or nuevo == valor:
                continue
            inicio, fin = hoja.rango_valor(decl)
            tramo = contenido[inicio:fin]
            ediciones.append((inicio, fin, tramo.replace(valor, nuevo, 1)))
    logger.info(f"      Mapeo básico de colores aplicado a {info['relative_path']}.")
    return aplicar_ediciones(contenido, ediciones)


def _prefijar_selectores(contenido: str, info: FileInfo, prefijo: str) -> str:
    hoja = parsear_hoja(contenido, CssVariant.desde_extension(info['extension']), info['relative_path'])
    ediciones: List[Tuple[int, int, str]] = []
    for regla, _ in hoja.reglas():
        inicio, llave = hoja.rango_selector(regla)
        bruto = contenido[inicio:llave]
        selector = bruto.rstrip()
        espacio_final = bruto[len(selector):]
        nuevo = ', '.join(f"{prefijo}{parte.strip()}" for parte in selector.split(','))
        ediciones.append((inicio, llave, nuevo + espacio_final))
    logger.info(f"      Selectores de {info['relative_path']} prefijados con '{prefijo}'.")
    return aplicar_ediciones(contenido, ediciones)


def transformar_hoja(contenido: str, info: FileInfo, analisis_a: ProjectAnalysis,
                     analisis_b: ProjectAnalysis, opciones: MigrationOptions) -> str:
    """Aplica la estrategia de estilos configurada a una hoja .css/.scss/.less."""
    estrategia = opciones.style_strategy
    logger.info(f"    Aplicando estrategia de estilos: {estrategia} a {info['relative_path']}")

    if estrategia == 'none':
        return contenido
    if estrategia not in ('basic-mapping', 'prefix-styles'):
        logger.warning(f"  Estrategia de transformación de estilos desconocida: {estrategia}")
        return contenido
    if info['extension'] not in EXTENSIONES_ESTILO:
        return contenido

    try:
        if estrategia == 'basic-mapping':
            return _mapeo_basico(contenido, info, analisis_a, analisis_b)
        return _prefijar_selectores(contenido, info, opciones.style_prefix)
    except ErrorParseoEstilo as e:
        logger.warning(f"      {e}. Se copia sin transformar.")
        return contenido


def transformar_estilos_en_linea(contenido: str, info: FileInfo, analisis_a: ProjectAnalysis,
                                 analisis_b: ProjectAnalysis, opciones: MigrationOptions) -> str:
    """
    Revisa los colores de `style={{...}}` frente a las paletas de ambos proyectos.
    Solo diagnostica: el contenido se devuelve sin cambios.
    """
    estrategia = opciones.style_strategy
    if estrategia == 'none':
        return contenido
    logger.info(f"    Transformando estilos en línea de {info['relative_path']} con estrategia: {estrategia}")

    try:
        arbol = parsear_codigo(contenido, info['extension'], info['relative_path'])
    except ErrorParseo as e:
        logger.warning(f"      {e}. Se omite la revisión de estilos en línea.")
        return contenido

    colores_a = colores_observados(analisis_a['style_info'])
    colores_b = colores_observados(analisis_b['style_info'])
    for nodo in arbol.nodos_de_tipo('jsx_attribute'):
        objeto = objeto_de_atributo_style(arbol, nodo)
        if objeto is None:
            continue
        for par in pares_de_objeto(objeto):
            clave = nombre_clave(arbol, par.child_by_field_name('key'))
            valor = valor_cadena(arbol, par.child_by_field_name('value'))
            if clave is None or valor is None or not PATRON_PROPIEDAD_COLOR.search(clave):
                continue
            if valor in colores_b and valor not in colores_a:
                logger.info(f"      Color en línea '{valor}' de Proyecto B no encontrado en Proyecto A. Se mantiene.")
    return contenido
