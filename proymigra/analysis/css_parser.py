# proymigra/analysis/css_parser.py
import os
import re
import logging
from typing import Dict, Iterator, List, Optional, Tuple

import tinycss2

from ..errors import ErrorParseoEstilo
from ..models import CssVariant, StyleRecord
from ..utils.file_utils import leer_texto

logger = logging.getLogger(__name__)

# Propiedad portadora de color (color, background-color, border-top, ...)
PATRON_PROPIEDAD_COLOR = re.compile(r"(color|background|border)-?", re.I)
PATRON_COLOR = re.compile(
    r"#(?:[a-fA-F0-9]{3}){1,2}"
    r"|rgba?\(\s*\d+\s*,\s*\d+\s*,\s*\d+\s*(?:,\s*[0-9.]+\s*)?\)"
    r"|hsla?\(\s*\d+\s*,\s*\d+%\s*,\s*\d+%\s*(?:,\s*[0-9.]+\s*)?\)"
)

# At-rules cuyo bloque contiene reglas (se recorren como postcss walkRules)
AT_RULES_DE_GRUPO = {'media', 'supports', 'layer', 'container', 'document', 'scope'}


def es_declaracion_de_color(propiedad: str, valor: str) -> bool:
    return bool(PATRON_PROPIEDAD_COLOR.search(propiedad)) and bool(PATRON_COLOR.search(valor))


def _enmascarar_comentarios_linea(texto: str) -> str:
    """
    Sustituye comentarios '//' (SCSS/LESS) por espacios.
    Mantiene la longitud para que las posiciones sigan apuntando al texto original.
    """
    resultado = list(texto)
    i, n = 0, len(texto)
    comilla: Optional[str] = None
    while i < n:
        c = texto[i]
        if comilla:
            if c == '\\':
                i += 2
                continue
            if c == comilla or c == '\n':
                comilla = None
        elif c in ('"', "'"):
            comilla = c
        elif texto.startswith('/*', i):
            fin = texto.find('*/', i + 2)
            i = n if fin == -1 else fin + 2
            continue
        elif texto.startswith('//', i) and (i == 0 or texto[i - 1] not in ':('):
            # 'http://' y 'url(//cdn...)' no son comentarios
            fin = texto.find('\n', i)
            fin = n if fin == -1 else fin
            for j in range(i, fin):
                resultado[j] = ' '
            i = fin
            continue
        i += 1
    return ''.join(resultado)


def _buscar_fuera_de_anidamiento(texto: str, inicio: int, objetivos: str) -> int:
    """Primer índice >= inicio con un carácter de `objetivos` fuera de cadenas, () y []."""
    profundidad = 0
    comilla: Optional[str] = None
    i, n = inicio, len(texto)
    while i < n:
        c = texto[i]
        if comilla:
            if c == '\\':
                i += 2
                continue
            if c == comilla:
                comilla = None
        elif c in ('"', "'"):
            comilla = c
        elif texto.startswith('/*', i):
            fin = texto.find('*/', i + 2)
            i = n if fin == -1 else fin + 2
            continue
        elif c in '([':
            profundidad += 1
        elif c in ')]':
            profundidad = max(0, profundidad - 1)
        elif profundidad == 0 and c in objetivos:
            return i
        i += 1
    return n


class HojaEstilo:
    """Hoja de estilos parseada con tinycss2 más el texto original para reescrituras por posición."""

    def __init__(self, texto: str, variante: CssVariant, ruta: str = '<memoria>'):
        self.texto = texto
        self.variante = variante
        self.ruta = ruta
        self._texto_parseo = texto if variante is CssVariant.CSS else _enmascarar_comentarios_linea(texto)
        self._inicios_linea = [0] + [m.end() for m in re.finditer('\n', texto)]
        self.nodos = self._parsear_nivel_superior()

    def _parsear_nivel_superior(self) -> list:
        if self.variante is CssVariant.CSS:
            nodos = tinycss2.parse_stylesheet(self._texto_parseo, skip_comments=True, skip_whitespace=True)
            errores = [n for n in nodos if n.type == 'error']
            if errores:
                primero = errores[0]
                raise ErrorParseoEstilo(self.ruta, f"{primero.message} (línea {primero.source_line})")
            return nodos
        # SCSS / LESS: variables y mixins producen nodos de error que se toleran
        nodos = tinycss2.parse_blocks_contents(self._texto_parseo, skip_comments=True, skip_whitespace=True)
        for nodo in nodos:
            if nodo.type == 'error':
                logger.debug(f"Construcción no CSS ignorada en {self.ruta} (línea {nodo.source_line}): {nodo.message}")
        return nodos

    # --- Posiciones ---
    def offset(self, linea: int, columna: int) -> int:
        # tinycss2 usa líneas y columnas 1-based
        return self._inicios_linea[linea - 1] + columna - 1

    def rango_selector(self, regla) -> Tuple[int, int]:
        inicio = self.offset(regla.source_line, regla.source_column)
        llave = _buscar_fuera_de_anidamiento(self._texto_parseo, inicio, '{')
        return inicio, llave

    def selector(self, regla) -> str:
        inicio, llave = self.rango_selector(regla)
        return self.texto[inicio:llave].strip()

    def rango_valor(self, declaracion) -> Tuple[int, int]:
        """Rango del texto tras ':' hasta ';' o '}' (o '{' en reglas anidadas)."""
        inicio_nombre = self.offset(declaracion.source_line, declaracion.source_column)
        dos_puntos = self._texto_parseo.find(':', inicio_nombre)
        fin = _buscar_fuera_de_anidamiento(self._texto_parseo, dos_puntos + 1, ';}{')
        return dos_puntos + 1, fin

    # --- Recorrido ---
    def _contenido(self, tokens) -> list:
        if self.variante is CssVariant.CSS:
            return tinycss2.parse_declaration_list(tokens, skip_comments=True, skip_whitespace=True)
        return tinycss2.parse_blocks_contents(tokens, skip_comments=True, skip_whitespace=True)

    def _recorrer(self, nodos) -> Iterator[Tuple[object, list]]:
        for nodo in nodos:
            if nodo.type == 'qualified-rule':
                contenido = self._contenido(nodo.content)
                declaraciones = [d for d in contenido if d.type == 'declaration']
                yield nodo, declaraciones
                if self.variante is not CssVariant.CSS:
                    yield from self._recorrer(contenido)
            elif nodo.type == 'at-rule' and nodo.content is not None:
                if nodo.lower_at_keyword in AT_RULES_DE_GRUPO:
                    if self.variante is CssVariant.CSS:
                        internos = tinycss2.parse_rule_list(nodo.content, skip_comments=True, skip_whitespace=True)
                    else:
                        internos = self._contenido(nodo.content)
                    yield from self._recorrer(internos)
                elif self.variante is not CssVariant.CSS:
                    # @include x { ... }, @mixin, etc. pueden anidar reglas
                    yield from self._recorrer(self._contenido(nodo.content))

    def reglas(self) -> Iterator[Tuple[object, list]]:
        """(regla, declaraciones) en orden de documento, incluyendo reglas anidadas."""
        return self._recorrer(self.nodos)


def valor_declaracion(declaracion) -> str:
    return tinycss2.serialize(declaracion.value).strip()


def parsear_hoja(texto: str, variante: CssVariant, ruta: str = '<memoria>') -> HojaEstilo:
    return HojaEstilo(texto, variante, ruta)


def aplicar_ediciones(texto: str, ediciones: List[Tuple[int, int, str]]) -> str:
    """Aplica (inicio, fin, reemplazo) sin solapamientos, de atrás hacia delante."""
    resultado = texto
    for inicio, fin, reemplazo in sorted(ediciones, key=lambda e: e[0], reverse=True):
        resultado = resultado[:inicio] + reemplazo + resultado[fin:]
    return resultado


def registro_estilo_vacio(ruta_archivo: str) -> StyleRecord:
    return StyleRecord(file_path=ruta_archivo, colors=[], font_families=[], font_sizes=[], properties={}, selectors=[])


def extraer_estilos_texto(texto: str, extension: str, ruta_archivo: str = '<memoria>') -> StyleRecord:
    """
    Extrae colores, familias tipográficas, tamaños, propiedades y selectores.
    Hoja mal formada -> registro vacío (se loggea, no aborta).
    """
    variante = CssVariant.desde_extension(extension)
    try:
        hoja = parsear_hoja(texto, variante, ruta_archivo)
    except ErrorParseoEstilo as e:
        logger.error(f"    Fallo al extraer estilos de {ruta_archivo}: {e}")
        return registro_estilo_vacio(ruta_archivo)

    # dict como conjunto ordenado: deduplica conservando orden de inserción
    colores: Dict[str, None] = {}
    familias: Dict[str, None] = {}
    tamanos: Dict[str, None] = {}
    propiedades: Dict[str, Dict[str, None]] = {}
    selectores: Dict[str, None] = {}

    for regla, declaraciones in hoja.reglas():
        selectores[hoja.selector(regla)] = None
        for decl in declaraciones:
            propiedad = decl.name
            valor = valor_declaracion(decl)
            if es_declaracion_de_color(propiedad, valor):
                colores[valor] = None
            if decl.lower_name == 'font-family':
                for fuente in valor.split(','):
                    nombre = fuente.strip().replace('"', '').replace("'", '')
                    if nombre:
                        familias[nombre] = None
            if decl.lower_name == 'font-size':
                tamanos[valor] = None
            propiedades.setdefault(propiedad, {})[valor] = None

    return StyleRecord(
        file_path=ruta_archivo,
        colors=list(colores),
        font_families=list(familias),
        font_sizes=list(tamanos),
        properties={prop: list(valores) for prop, valores in propiedades.items()},
        selectors=list(selectores),
    )


def extraer_estilos_archivo(ruta_completa: str) -> StyleRecord:
    logger.info(f"    [Extracción de Estilos] Extrayendo estilos de {ruta_completa}")
    estado, _, contenido = leer_texto(ruta_completa)
    if estado != "ok":
        logger.error(f"    Fallo al extraer estilos de {ruta_completa}: {contenido}")
        return registro_estilo_vacio(ruta_completa)
    extension = os.path.splitext(ruta_completa)[1]
    return extraer_estilos_texto(contenido, extension, ruta_completa)


def colores_observados(style_info: Dict[str, StyleRecord]) -> Dict[str, None]:
    """Unión ordenada de los colores de todos los registros de un proyecto."""
    colores: Dict[str, None] = {}
    for registro in style_info.values():
        for color in registro.get('colors', []):
            colores[color] = None
    return colores
