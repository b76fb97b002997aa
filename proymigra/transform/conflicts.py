# proymigra/transform/conflicts.py
import os
import logging
import threading
from typing import Dict, Iterable, List, Optional, Tuple

from ..models import FileInfo, ProjectAnalysis
from ..utils.path_utils import normalizar_ruta

logger = logging.getLogger(__name__)

CATEGORIAS_CON_NOMBRE = ('component', 'page')


class MapaRenombres:
    """
    Mapa nombre original -> nombre desambiguado, compartido entre hilos.
    La comprobación y la inserción son atómicas (un único escritor a la vez).
    """

    def __init__(self, inicial: Optional[Dict[str, str]] = None):
        self._lock = threading.Lock()
        self._mapa: Dict[str, str] = dict(inicial or {})

    def obtener(self, nombre: str) -> Optional[str]:
        with self._lock:
            return self._mapa.get(nombre)

    def __contains__(self, nombre: str) -> bool:
        with self._lock:
            return nombre in self._mapa

    def __len__(self) -> int:
        with self._lock:
            return len(self._mapa)

    def registrar_si_ausente(self, nombre: str, nuevo_nombre: str) -> Tuple[bool, str]:
        """Devuelve (insertado, valor_vigente). Si ya existía, no se sobrescribe."""
        with self._lock:
            vigente = self._mapa.get(nombre)
            if vigente is not None:
                return False, vigente
            self._mapa[nombre] = nuevo_nombre
            return True, nuevo_nombre

    def snapshot(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._mapa)


def _reubicar(info: FileInfo, nuevo_nombre_base: str):
    """Cambia el nombre de archivo dentro del mismo directorio (solo relative_path / file_name)."""
    nuevo_archivo = f"{nuevo_nombre_base}{info['extension']}"
    directorio = os.path.dirname(info['relative_path'])
    info['relative_path'] = normalizar_ruta(os.path.join(directorio, nuevo_archivo)) if directorio else nuevo_archivo
    info['file_name'] = nuevo_archivo


def resolver_conflicto(info: FileInfo, analisis_a: ProjectAnalysis, renombres: MapaRenombres, sufijo: str) -> Optional[str]:
    """
    Desambigua un componente de B cuyo nombre ya existe en A.
    Devuelve el nombre vigente si el archivo se reubicó, o None.
    """
    nombre = info.get('component_name')
    if not nombre or nombre not in analisis_a['component_map']:
        return None

    ya_mapeado = renombres.obtener(nombre)
    if ya_mapeado is not None:
        # Desambiguado antes (otra ejecución o mapa del usuario): no se vuelve a renombrar
        logger.debug(f"    '{nombre}' ya figura en el mapa de renombres como '{ya_mapeado}'.")
        _reubicar(info, ya_mapeado)
        return ya_mapeado

    insertado, vigente = renombres.registrar_si_ausente(nombre, f"{nombre}{sufijo}")
    _reubicar(info, vigente)
    if insertado:
        logger.warning(f"    Renombrando '{nombre}' a '{vigente}' para evitar conflicto")
    return vigente


def resolver_conflictos(archivos: Iterable[FileInfo], analisis_a: ProjectAnalysis,
                        renombres: MapaRenombres, sufijo: str) -> List[Tuple[str, str]]:
    """
    Pasada síncrona previa a la migración en paralelo.
    Recorre en orden de ruta relativa; devuelve [(ruta original, ruta nueva)] de los reubicados.
    """
    reubicados: List[Tuple[str, str]] = []
    for info in sorted(archivos, key=lambda i: i['relative_path']):
        if info.get('category') not in CATEGORIAS_CON_NOMBRE:
            continue
        ruta_original = info['relative_path']
        if resolver_conflicto(info, analisis_a, renombres, sufijo) is not None:
            reubicados.append((ruta_original, info['relative_path']))
    if reubicados:
        logger.info(f"  {len(reubicados)} componente(s) reubicados por conflicto de nombre.")
    return reubicados
