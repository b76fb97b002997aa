# proymigra/cli.py
import os
import argparse
import logging
from typing import List, Optional, Tuple, Union

import questionary
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .config import (
    EXTENSIONES_JS, ESTRATEGIAS_DISCREPANCIA, ESTRATEGIAS_ESTILO, MODOS_SALIDA, PERFILES_ESTETICOS,
)
from .config_manager import cargar_config, construir_opciones, guardar_config
from .models import EstadoMigracion, FileInfo, MigrationOptions, ResultadoMigracion
from .orchestrator import MigrationOrchestrator
from .registro import configurar_logging

logger = logging.getLogger(__name__)
console = Console()


def validar_directorio(ruta: str) -> Union[bool, str]:
    """Validador para questionary: True o un mensaje de error."""
    if not ruta:
        return "La ruta no puede estar vacía."
    ruta_abs = os.path.abspath(os.path.expanduser(ruta))
    if not os.path.exists(ruta_abs):
        return f"La ruta no existe: {ruta_abs}"
    if not os.path.isdir(ruta_abs):
        return f"La ruta no es un directorio: {ruta_abs}"
    return True


def transformador_marca_origen(ruta_origen: str):
    """Transformador que antepone un comentario de procedencia a los módulos JS/TS."""
    nombre_origen = os.path.basename(os.path.normpath(ruta_origen))

    def _marcar(contenido: str, info: FileInfo) -> str:
        if info.get('extension') not in EXTENSIONES_JS:
            return contenido
        return f"// Migrated from {nombre_origen}\n{contenido}"

    return _marcar


def crear_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="proymigra",
        description="Migra componentes, estilos y convenciones de un proyecto frontend (B) a otro (A).",
    )
    parser.add_argument("-s", "--source", help="Proyecto B (origen de los componentes).")
    parser.add_argument("-t", "--target", help="Proyecto A (destino de la migración).")
    parser.add_argument("--dry-run", action="store_true", default=None,
                        help="Calcula la migración sin escribir archivos.")
    parser.add_argument("--generate-tests", action="store_true", default=None,
                        help="Genera un test de humo por cada componente migrado.")
    parser.add_argument("--output-mode", choices=MODOS_SALIDA, default=None)
    parser.add_argument("--mismatch-strategy", choices=ESTRATEGIAS_DISCREPANCIA, default=None)
    parser.add_argument("--aesthetic", choices=PERFILES_ESTETICOS, default=None,
                        help="Perfil estético declarado.")
    parser.add_argument("--style-strategy", choices=ESTRATEGIAS_ESTILO, default=None)
    parser.add_argument("--style-prefix", default=None, help="Prefijo para la estrategia 'prefix-styles'.")
    parser.add_argument("--mark-origin", action="store_true",
                        help="Antepone '// Migrated from <B>' a cada módulo JS/TS migrado.")
    parser.add_argument("--workers", type=int, default=None, help="Archivos procesados en paralelo.")
    parser.add_argument("-i", "--interactive", action="store_true", help="Pide las rutas y opciones de forma interactiva.")
    parser.add_argument("--debug", action="store_true", default=None, help="Habilita logging DEBUG.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def pedir_rutas_interactivas(config: dict) -> Optional[Tuple[str, str]]:
    console.print(Panel("Paso 1: Proyecto B (origen)", style="bold green"))
    origen = questionary.text(
        "Ruta del proyecto origen:",
        default=config.get("last_source_dir") or "",
        validate=validar_directorio,
    ).ask()
    if origen is None:
        return None

    console.print(Panel("Paso 2: Proyecto A (destino)", style="bold green"))
    destino = questionary.text(
        "Ruta del proyecto destino:",
        default=config.get("last_target_dir") or "",
        validate=validar_directorio,
    ).ask()
    if destino is None:
        return None
    return os.path.abspath(os.path.expanduser(origen)), os.path.abspath(os.path.expanduser(destino))


def pedir_opciones_interactivas(args: argparse.Namespace) -> bool:
    """Completa en `args` lo que no vino por línea de comandos. False si se cancela."""
    console.print(Panel("Paso 3: Opciones de Migración", style="bold green"))
    if args.style_strategy is None:
        estrategia = questionary.select("Estrategia de estilos:", choices=list(ESTRATEGIAS_ESTILO), default='none').ask()
        if estrategia is None:
            return False
        args.style_strategy = estrategia
    if args.output_mode is None:
        modo = questionary.select("Modo de salida:", choices=list(MODOS_SALIDA), default='migrate').ask()
        if modo is None:
            return False
        args.output_mode = modo
    if args.generate_tests is None:
        generar = questionary.confirm("¿Generar tests para los componentes migrados?", default=False).ask()
        if generar is None:
            return False
        args.generate_tests = generar
    if args.dry_run is None:
        simular = questionary.confirm("¿Ejecutar en modo DRY RUN (sin escribir)?", default=True).ask()
        if simular is None:
            return False
        args.dry_run = simular
    return True


def mostrar_resumen(resultado: ResultadoMigracion, opciones: MigrationOptions):
    estado = resultado['estado']
    color = "green" if estado == EstadoMigracion.COMPLETADO.value else "red"
    console.print(Panel(f"Estado final: [bold {color}]{estado}[/bold {color}]\n"
                        f"Fases: {' -> '.join(resultado['historial_estados'])}",
                        title="Resumen de Migración", border_style=color))

    if resultado['escrituras']:
        titulo = "Escrituras planificadas (no realizadas)" if opciones.escrituras_suprimidas else "Archivos migrados"
        tabla = Table(title=titulo, show_header=True, header_style="bold magenta")
        tabla.add_column("Origen (B)", style="cyan", overflow="fold")
        tabla.add_column("Destino (A)", style="green", overflow="fold")
        for origen, destino in resultado['escrituras']:
            tabla.add_row(origen, destino)
        console.print(tabla)

    if resultado['renombres']:
        tabla = Table(title="Renombres de componentes", show_header=True, header_style="bold magenta")
        tabla.add_column("Original", style="yellow")
        tabla.add_column("Nuevo", style="green")
        for original, nuevo in sorted(resultado['renombres'].items()):
            tabla.add_row(original, nuevo)
        console.print(tabla)

    if resultado['fallos']:
        tabla = Table(title="Archivos con error", show_header=True, header_style="bold red")
        tabla.add_column("Archivo", style="cyan", overflow="fold")
        tabla.add_column("Error", style="red", overflow="fold")
        for ruta, mensaje in sorted(resultado['fallos'].items()):
            tabla.add_row(ruta, mensaje)
        console.print(tabla)


def main(argv: Optional[List[str]] = None) -> int:
    parser = crear_parser()
    args = parser.parse_args(argv)
    config = cargar_config()

    configurar_logging(args.debug if args.debug is not None else config.get("default_debug_mode", False))

    if args.interactive:
        rutas = pedir_rutas_interactivas(config)
        if rutas is None or not pedir_opciones_interactivas(args):
            console.print("[yellow]Operación cancelada.[/yellow]")
            return 1
        args.source, args.target = rutas
    elif not args.source or not args.target:
        parser.error("se requieren --source y --target (o use --interactive)")

    opciones = construir_opciones(
        config,
        dry_run=args.dry_run,
        generate_tests=args.generate_tests,
        output_mode=args.output_mode,
        mismatch_strategy=args.mismatch_strategy,
        aesthetic_profile=args.aesthetic,
        style_strategy=args.style_strategy,
        style_prefix=args.style_prefix,
        max_workers=args.workers,
        custom_transformer=transformador_marca_origen(args.source) if args.mark_origin else None,
    )

    console.print(f"\n[green]Migrando[/green] {args.source} [green]->[/green] {args.target}")
    orquestador = MigrationOrchestrator(args.target, args.source, opciones)
    resultado = orquestador.ejecutar()
    mostrar_resumen(resultado, opciones)

    config["last_source_dir"] = os.path.abspath(args.source)
    config["last_target_dir"] = os.path.abspath(args.target)
    guardar_config(config)

    return 0 if resultado['estado'] == EstadoMigracion.COMPLETADO.value else 1
