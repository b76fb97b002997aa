# proymigra/ignore_handler.py
import os
from typing import Iterable, Optional, Tuple

from .utils.path_utils import normalizar_ruta


def esta_bajo_directorio(ruta_relativa: str, directorio: str) -> bool:
    """True si la ruta es el directorio o cuelga de él (comparación por segmentos)."""
    ruta = normalizar_ruta(ruta_relativa)
    base = normalizar_ruta(directorio).rstrip('/')
    if not base or base == '.':
        return True
    return ruta == base or ruta.startswith(base + '/')


def debe_ignorar(ruta_relativa: str, dirs_ignorar: Iterable[str]) -> Tuple[bool, Optional[str]]:
    """
    Comprueba si una entrada (archivo o directorio) debe saltarse.
    Coincide por prefijo de ruta o por nombre exacto de cualquier segmento.
    """
    ruta_normalizada = normalizar_ruta(ruta_relativa)
    segmentos = ruta_normalizada.split('/')
    nombre_base = os.path.basename(ruta_normalizada)

    for patron in dirs_ignorar:
        base_patron = normalizar_ruta(patron).rstrip('/')
        if not base_patron:
            continue
        # 1. Prefijo de ruta (ej: 'src/generated' ignora 'src/generated/x.js')
        if esta_bajo_directorio(ruta_normalizada, base_patron):
            return True, f"coincidencia_prefijo ({patron})"
        # 2. Nombre exacto de la entrada o de un directorio padre (ej: 'node_modules' anidado)
        if '/' not in base_patron and (nombre_base == base_patron or base_patron in segmentos[:-1]):
            return True, f"coincidencia_segmento ({patron})"

    return False, None # No ignorar
