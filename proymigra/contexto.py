# proymigra/contexto.py
import logging
from typing import Dict, Optional

from .models import MigrationOptions
from .registro import RegistroAuditoria
from .transform.aesthetics import EstrategiaEstetica, resolver_estrategia
from .transform.conflicts import MapaRenombres

logger = logging.getLogger(__name__)


class ContextoMigracion:
    """
    Estado explícito de una ejecución, pasado a cada etapa:
    opciones (solo lectura), mapa de renombres (único estado mutable compartido)
    y sumidero de auditoría.
    """

    def __init__(self, opciones: MigrationOptions,
                 renombres: Optional[MapaRenombres] = None,
                 auditoria: Optional[RegistroAuditoria] = None):
        self.opciones = opciones
        self.renombres = renombres if renombres is not None else MapaRenombres(opciones.component_name_mapping)
        self.auditoria = auditoria if auditoria is not None else RegistroAuditoria()
        self.estetica: EstrategiaEstetica = resolver_estrategia(opciones.aesthetic_strategy)
        # Componentes reubicados en esta ejecución: ruta original en B -> nuevo nombre base
        self.reubicados: Dict[str, str] = {}
        logger.debug(f"Contexto creado (estética: {getattr(self.estetica, 'nombre', type(self.estetica).__name__)})")
