# proymigra/prototype.py
import os
import copy
import json
import logging
from typing import Any, Dict, List, Optional

from .config import ARCHIVO_PACKAGE_JSON, DIR_TESTS_GENERADOS
from .detection import dependencias_declaradas
from .errors import ErrorConfiguracion
from .models import FileInfo, MigrationOptions, ProjectAnalysis
from .transform.aesthetics import fusionar_esteticas
from .utils.file_utils import escribir_texto, leer_json

logger = logging.getLogger(__name__)

PACKAGE_JSON_PROTOTIPO_BASE = {"name": "prototype-app", "version": "1.0.0", "private": True, "dependencies": {}}

PLANTILLA_TEST = """import React from 'react';
import {{ render, screen }} from '@testing-library/react';
import {nombre} from '../{nombre}';

describe('{nombre}', () => {{
  it('renders without crashing', () => {{
    render(<{nombre} />);
    expect(screen.getByTestId('{nombre_minusculas}-container')).toBeInTheDocument();
  }});
}});
"""


def contenido_test_componente(nombre_componente: str) -> str:
    return PLANTILLA_TEST.format(nombre=nombre_componente, nombre_minusculas=nombre_componente.lower())


def ruta_test_componente(info: FileInfo, ruta_destino: str) -> str:
    """<dir del archivo migrado>/__tests__/<Nombre>.test<ext>"""
    nombre = os.path.splitext(info['file_name'])[0]
    return os.path.join(os.path.dirname(ruta_destino), DIR_TESTS_GENERADOS, f"{nombre}.test{info['extension']}")


def generar_test_componente(info: FileInfo, ruta_destino: str, opciones: MigrationOptions) -> Optional[str]:
    """Smoke test de React Testing Library junto al componente migrado. Devuelve la ruta escrita."""
    ruta_test = ruta_test_componente(info, ruta_destino)
    nombre = os.path.splitext(info['file_name'])[0]
    if opciones.escrituras_suprimidas:
        logger.info(f"    DRY RUN: Se generaría el test: {ruta_test}")
        return None
    escribir_texto(ruta_test, contenido_test_componente(nombre))
    logger.info(f"    Test generado: {ruta_test}")
    return ruta_test


def detectar_dependencias_faltantes(analisis_a: ProjectAnalysis, analisis_b: ProjectAnalysis) -> Dict[str, Any]:
    """Dependencias (y devDependencies) de B ausentes en A, con la versión declarada en B."""
    deps_a = dependencias_declaradas(analisis_a['package_json'])
    deps_b = dependencias_declaradas(analisis_b['package_json'])
    return {nombre: version for nombre, version in deps_b.items() if not deps_a.get(nombre)}


def _cargar_package_json_prototipo(ruta: str) -> Dict[str, Any]:
    try:
        datos = leer_json(ruta)
    except ErrorConfiguracion:
        logger.warning("      No se encontró package.json en el prototipo, se crea uno.")
        return copy.deepcopy(PACKAGE_JSON_PROTOTIPO_BASE)
    if not isinstance(datos.get('dependencies'), dict):
        datos['dependencies'] = {}
    return datos


def generar_prototipo(analisis_a: ProjectAnalysis, analisis_b: ProjectAnalysis, opciones: MigrationOptions) -> List[str]:
    """
    Prototipo con la estructura de A y la estética de B en <A>/<prototype_dir>.
    Solo se escribe package.json; la instalación de paquetes queda a cargo del usuario.
    """
    logger.info("Generando Prototipo Rápido")
    ruta_prototipo = os.path.join(analisis_a['root_path'], opciones.prototype_dir)
    fusionado = fusionar_esteticas(analisis_a, analisis_b)
    logger.info("    Renderizando prototipo (marcador de posición)")
    logger.info(f"    Configurando prototipo para {fusionado['framework']}")

    faltantes = detectar_dependencias_faltantes(analisis_a, analisis_b)
    if faltantes:
        logger.info(f"      Dependencias faltantes: {', '.join(faltantes)}")

    ruta_package = os.path.join(ruta_prototipo, ARCHIVO_PACKAGE_JSON)
    if opciones.escrituras_suprimidas:
        logger.info(f"  DRY RUN: Se generaría el prototipo en {ruta_prototipo}")
        return []

    os.makedirs(ruta_prototipo, exist_ok=True)
    package_json = _cargar_package_json_prototipo(ruta_package)
    package_json['dependencies'].update(faltantes)
    try:
        escribir_texto(ruta_package, json.dumps(package_json, indent=2))
        logger.info("      package.json del prototipo actualizado.")
    except OSError as e:
        logger.error(f"      Fallo al actualizar package.json del prototipo: {e}")
        return []

    if faltantes:
        logger.info(f"      Instale las dependencias con: npm install (en {ruta_prototipo})")
    logger.info(f"Prototipo generado en {ruta_prototipo}.")
    return [ruta_package]
