# proymigra/transform/aesthetics.py
import copy
import logging
from typing import Any, Optional

from ..models import ProjectAnalysis

logger = logging.getLogger(__name__)


class EstrategiaEstetica:
    """
    Interfaz para decidir si un valor de estilo encaja con el perfil estético
    del proyecto destino y, si no, por qué sustituirlo.
    """
    nombre = 'base'

    def coincide(self, valor: str, perfil: str) -> bool:
        raise NotImplementedError

    def sustituir(self, valor: str, perfil: str) -> str:
        raise NotImplementedError


class EsteticaNula(EstrategiaEstetica):
    """Por defecto: todo valor coincide y la sustitución lo devuelve intacto."""
    nombre = 'nula'

    def coincide(self, valor: str, perfil: str) -> bool:
        return True

    def sustituir(self, valor: str, perfil: str) -> str:
        return valor


def resolver_estrategia(estrategia: Optional[Any]) -> EstrategiaEstetica:
    if estrategia is None:
        return EsteticaNula()
    if callable(getattr(estrategia, 'coincide', None)) and callable(getattr(estrategia, 'sustituir', None)):
        return estrategia
    raise TypeError(f"La estrategia estética {estrategia!r} debe definir coincide() y sustituir()")


def fusionar_esteticas(analisis_a: ProjectAnalysis, analisis_b: ProjectAnalysis) -> ProjectAnalysis:
    """Análisis de A con el perfil estético de B. Copia superficial: A no se modifica."""
    logger.info("    Fusionando estéticas (marcador de posición)")
    fusionado = copy.copy(analisis_a)
    fusionado['aesthetic_profile'] = analisis_b['aesthetic_profile']
    return fusionado
