# proymigra/analysis/js_parser.py
import logging
import threading
from typing import Dict, Iterator, List, Optional, Tuple

import tree_sitter
import tree_sitter_javascript
import tree_sitter_typescript
from bs4 import BeautifulSoup, FeatureNotFound

from ..errors import ErrorParseo

logger = logging.getLogger(__name__) # Usa 'proymigra.analysis.js_parser'

IDIOMA_POR_EXTENSION = {
    '.js': 'javascript',
    '.jsx': 'javascript', # La gramática JS incluye JSX
    '.ts': 'typescript',
    '.tsx': 'tsx',
}

# lang de <script> en SFC de Vue -> extensión equivalente
EXTENSION_POR_LANG_VUE = {'ts': '.ts', 'tsx': '.tsx', 'jsx': '.jsx'}

_idiomas: Dict[str, tree_sitter.Language] = {}
_lock_idiomas = threading.Lock()


def _obtener_idioma(nombre: str) -> tree_sitter.Language:
    """Carga (una vez) la gramática tree-sitter pedida."""
    with _lock_idiomas:
        idioma = _idiomas.get(nombre)
        if idioma is None:
            if nombre == 'javascript':
                idioma = tree_sitter.Language(tree_sitter_javascript.language())
            elif nombre == 'typescript':
                idioma = tree_sitter.Language(tree_sitter_typescript.language_typescript())
            elif nombre == 'tsx':
                idioma = tree_sitter.Language(tree_sitter_typescript.language_tsx())
            else:
                raise ValueError(f"Gramática no disponible: {nombre}")
            _idiomas[nombre] = idioma
        return idioma


def _primer_error(nodo) -> Optional[object]:
    pila = [nodo]
    while pila:
        actual = pila.pop()
        if actual.type == 'ERROR' or actual.is_missing:
            return actual
        if actual.has_error:
            pila.extend(reversed(actual.children))
    return None


class ArbolFuente:
    """Árbol sintáctico de un módulo JS/TS junto a los bytes que lo originaron."""

    def __init__(self, arbol, codigo: bytes, idioma: str, ruta: str):
        self.arbol = arbol
        self.codigo = codigo
        self.idioma = idioma
        self.ruta = ruta

    @property
    def raiz(self):
        return self.arbol.root_node

    def texto(self, nodo) -> str:
        return self.codigo[nodo.start_byte:nodo.end_byte].decode('utf-8')

    def recorrer(self) -> Iterator[object]:
        """Preorden iterativo (sin recursión: los JSX profundos no agotan la pila)."""
        pila = [self.raiz]
        while pila:
            nodo = pila.pop()
            yield nodo
            pila.extend(reversed(nodo.children))

    def nodos_de_tipo(self, *tipos: str) -> Iterator[object]:
        return (n for n in self.recorrer() if n.type in tipos)


def parsear_codigo(texto: str, extension: str, ruta: str = '<memoria>') -> ArbolFuente:
    """Parsea código JS/JSX/TS/TSX. Sintaxis inválida o extensión ajena -> ErrorParseo."""
    nombre_idioma = IDIOMA_POR_EXTENSION.get(extension.lower())
    if nombre_idioma is None:
        raise ErrorParseo(ruta, f"extensión no soportada '{extension}'")

    # Un Parser por llamada: los Parser de tree-sitter no son seguros entre hilos
    parser = tree_sitter.Parser(_obtener_idioma(nombre_idioma))
    codigo = texto.encode('utf-8')
    arbol = parser.parse(codigo)

    if arbol.root_node.has_error:
        error = _primer_error(arbol.root_node)
        linea = error.start_point[0] + 1 if error is not None else '?'
        raise ErrorParseo(ruta, f"sintaxis inválida cerca de la línea {linea}")
    logger.debug(f"Parseado {ruta} con gramática {nombre_idioma}")
    return ArbolFuente(arbol, codigo, nombre_idioma, ruta)


def extraer_script_vue(texto: str, ruta: str = '<memoria>') -> Optional[Tuple[str, str]]:
    """
    Devuelve (contenido, extensión) del primer bloque <script> con contenido
    de un componente Vue, o None si no hay.
    """
    if not texto.strip():
        return None
    try:
        soup = BeautifulSoup(texto, 'lxml')
    except FeatureNotFound:
        soup = BeautifulSoup(texto, 'html.parser')

    for script_tag in soup.find_all('script'):
        contenido = script_tag.string
        if not contenido or not contenido.strip():
            continue
        lang = (script_tag.get('lang') or '').strip().lower()
        extension = EXTENSION_POR_LANG_VUE.get(lang, '.js')
        logger.debug(f"Bloque <script lang='{lang or 'js'}'> encontrado en {ruta}")
        return str(contenido), extension
    logger.debug(f"Sin bloque <script> en {ruta}")
    return None


# --- Utilidades sobre nodos ---

def valor_cadena(arbol: ArbolFuente, nodo) -> Optional[str]:
    """Valor literal de un nodo 'string' (sin comillas), o None si no lo es."""
    if nodo is None or nodo.type != 'string':
        return None
    return arbol.texto(nodo)[1:-1]


def nombre_clave(arbol: ArbolFuente, nodo_clave) -> Optional[str]:
    """Nombre de la clave de un 'pair': identificador o literal de cadena."""
    if nodo_clave is None:
        return None
    if nodo_clave.type in ('property_identifier', 'identifier'):
        return arbol.texto(nodo_clave)
    if nodo_clave.type == 'string':
        return valor_cadena(arbol, nodo_clave)
    return None


def objeto_de_atributo_style(arbol: ArbolFuente, nodo_atributo):
    """Para `style={{ ... }}` devuelve el nodo 'object'; None en otro caso."""
    if nodo_atributo.type != 'jsx_attribute' or not nodo_atributo.named_children:
        return None
    nombre = nodo_atributo.named_children[0]
    if nombre.type != 'property_identifier' or arbol.texto(nombre) != 'style':
        return None
    if len(nodo_atributo.named_children) < 2:
        return None
    valor = nodo_atributo.named_children[1]
    if valor.type != 'jsx_expression' or not valor.named_children:
        return None
    expresion = valor.named_children[0]
    return expresion if expresion.type == 'object' else None


def pares_de_objeto(nodo_objeto) -> List[object]:
    return [hijo for hijo in nodo_objeto.named_children if hijo.type == 'pair']


def argumentos_llamada(nodo_llamada) -> List[object]:
    argumentos = nodo_llamada.child_by_field_name('arguments')
    if argumentos is None:
        return []
    return [a for a in argumentos.named_children if a.type != 'comment']
