# proymigra/errors.py
"""Tipos de error del pipeline de migración."""
from typing import Optional


class ErrorMigracion(Exception):
    """Base para todos los errores de proymigra."""


class ErrorConfiguracion(ErrorMigracion):
    """package.json / tsconfig.json ausente o mal formado. Se recupera con {}."""

    def __init__(self, ruta: str, detalle: str) -> None:
        super().__init__(f"No se pudo leer la configuración {ruta}: {detalle}")
        self.ruta = ruta


class ErrorParseo(ErrorMigracion):
    """Un archivo fuente no se pudo convertir en árbol sintáctico."""

    def __init__(self, ruta: str, detalle: str) -> None:
        super().__init__(f"Error de parseo en {ruta}: {detalle}")
        self.ruta = ruta


class ErrorParseoEstilo(ErrorMigracion):
    """Hoja de estilos mal formada."""

    def __init__(self, ruta: str, detalle: str) -> None:
        super().__init__(f"Error de parseo CSS en {ruta}: {detalle}")
        self.ruta = ruta


class ErrorTransformacion(ErrorMigracion):
    """Fallo al adaptar o escribir un archivo concreto. No aborta el lote."""

    def __init__(self, ruta: str, detalle: str, causa: Optional[BaseException] = None) -> None:
        super().__init__(f"Fallo al migrar {ruta}: {detalle}")
        self.ruta = ruta
        self.causa = causa


class ErrorFatal(ErrorMigracion):
    """No se puede analizar la raíz de un proyecto. Aborta la ejecución."""

    def __init__(self, ruta: str, detalle: str) -> None:
        super().__init__(f"Error fatal con {ruta}: {detalle}")
        self.ruta = ruta
