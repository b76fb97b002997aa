# proymigra/__init__.py
# Paquete principal: migración y armonización de proyectos frontend.

__version__ = "0.2.0"
