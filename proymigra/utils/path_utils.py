# proymigra/utils/path_utils.py
import os
import logging
from typing import Dict, List, Optional, Tuple

from ..config import DESTINOS_RAIZ_FUENTES

# Obtener logger
logger = logging.getLogger(__name__)


def normalizar_ruta(ruta: str) -> str:
    """Normaliza separadores a '/' y elimina segmentos redundantes."""
    if ruta in ('', '.'):
        return ruta
    ruta_limpia = os.path.normpath(ruta).replace(os.sep, '/')
    if ruta.endswith('/') and not ruta_limpia.endswith('/') and len(ruta_limpia) > 1:
        ruta_limpia += '/'
    return ruta_limpia


def ruta_relativa_posix(ruta: str, base: str) -> str:
    return normalizar_ruta(os.path.relpath(ruta, base))


def es_relativa(especificador: str) -> bool:
    return especificador.startswith('./') or especificador.startswith('../')


def quitar_comodin(patron: str) -> str:
    """'@/*' -> '@/' ; 'src/*' -> 'src/' ; '~' -> '~'"""
    return patron[:-1] if patron.endswith('*') else patron


def primer_destino(destinos) -> Optional[str]:
    # tsconfig admite lista de destinos; se usa el primero
    if isinstance(destinos, str):
        return destinos
    if isinstance(destinos, (list, tuple)) and destinos:
        primero = destinos[0]
        return primero if isinstance(primero, str) else None
    return None


def resolver_alias(especificador: str, aliases: Dict[str, List[str]]) -> str:
    """
    Sustituye el prefijo de alias por el prefijo físico de su destino.
    Se recorren todos los alias en orden y cada coincidencia reescribe el resultado.
    Ej: {'@/*': ['src/*']} convierte '@/utils/foo' en 'src/utils/foo'.
    """
    resultado = especificador
    for alias, destinos in aliases.items():
        patron_alias = quitar_comodin(alias)
        destino = primer_destino(destinos)
        if destino is None or not patron_alias:
            continue
        if resultado.startswith(patron_alias):
            resultado = quitar_comodin(destino) + resultado[len(patron_alias):]
            logger.debug(f"Alias '{alias}' aplicado: '{especificador}' -> '{resultado}'")
    return resultado


def alias_raiz_fuentes(aliases: Dict[str, List[str]]) -> Optional[Tuple[str, str]]:
    """
    Devuelve (alias, prefijo) del primer alias cuyo destino apunta a la raíz 'src'.
    Ej: {'@/*': ['src/*']} -> ('@/*', '@/')
    """
    for alias, destinos in aliases.items():
        destino = primer_destino(destinos)
        if destino is None:
            continue
        destino_base = quitar_comodin(destino).rstrip('/')
        if destino_base in DESTINOS_RAIZ_FUENTES:
            prefijo = quitar_comodin(alias)
            if not prefijo.endswith('/'):
                prefijo += '/'
            return alias, prefijo
    return None
