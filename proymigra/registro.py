# proymigra/registro.py
import datetime
import logging
from typing import List, Optional

from .config import ETIQUETAS_NIVEL

NOMBRE_LOGGER_RAIZ = 'proymigra'


def configurar_logging(debug_mode: bool = False):
    """Configura el logger raíz. Se puede llamar varias veces."""
    log_level = logging.DEBUG if debug_mode else logging.INFO
    log_format = '%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s'
    # basicConfig solo actúa la primera vez: quitar handlers previos
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(level=log_level, format=log_format)


class RegistroAuditoria(logging.Handler):
    """
    Sumidero de auditoría en memoria (solo se añade, nunca se borra).
    Cada entrada: '[<timestamp ISO-8601>] [<NIVEL>] <mensaje>'.
    """

    def __init__(self, nivel: int = logging.INFO):
        super().__init__(level=nivel)
        self._entradas: List[str] = []
        self._registros: List[tuple] = [] # (etiqueta, mensaje)

    def emit(self, record: logging.LogRecord):
        try:
            mensaje = record.getMessage()
        except Exception:
            self.handleError(record)
            return
        etiqueta = ETIQUETAS_NIVEL.get(record.levelname, record.levelname)
        timestamp = datetime.datetime.fromtimestamp(record.created, datetime.timezone.utc).isoformat()
        # Handler.handle() ya toma self.lock alrededor de emit()
        self._entradas.append(f"[{timestamp}] [{etiqueta}] {mensaje}")
        self._registros.append((etiqueta, mensaje))

    def entradas(self) -> List[str]:
        with self.lock:
            return list(self._entradas)

    def mensajes(self, nivel: Optional[str] = None) -> List[str]:
        """Mensajes sin marca de tiempo, opcionalmente filtrados por etiqueta (INFO/WARN/ERROR)."""
        with self.lock:
            return [m for etiqueta, m in self._registros if nivel is None or etiqueta == nivel]

    def adjuntar(self, nombre_logger: str = NOMBRE_LOGGER_RAIZ):
        logger = logging.getLogger(nombre_logger)
        # Sin esto, con el raíz en WARNING (valor por defecto) no llegaría nada INFO
        if logger.getEffectiveLevel() > self.level:
            logger.setLevel(self.level)
        logger.addHandler(self)

    def separar(self, nombre_logger: str = NOMBRE_LOGGER_RAIZ):
        logging.getLogger(nombre_logger).removeHandler(self)
