# proymigra/scanner.py
import os
import json
import logging
from typing import Dict, List

from . import config
from .analysis.css_parser import extraer_estilos_archivo
from .detection import cargar_alias, cargar_package_json, detectar_framework
from .errors import ErrorFatal
from .ignore_handler import debe_ignorar, esta_bajo_directorio
from .models import FileInfo, MigrationOptions, ProjectAnalysis
from .utils.path_utils import normalizar_ruta

logger = logging.getLogger(__name__) # Usa 'proymigra.scanner'


def _bajo_alguno(ruta_relativa: str, directorios) -> bool:
    return any(esta_bajo_directorio(ruta_relativa, d) for d in directorios)


def _es_pagina(ruta_relativa: str) -> bool:
    # Subcadena, no segmento: 'src/pages/x' y 'src/views/x' son páginas
    return any(segmento in ruta_relativa for segmento in config.SEGMENTOS_PAGINA)


def categorizar(ruta_relativa: str, extension: str, opciones: MigrationOptions) -> str:
    """Categoría de un archivo. Primera regla que coincide gana, en orden fijo."""
    if _bajo_alguno(ruta_relativa, opciones.component_dirs) and extension in config.EXTENSIONES_UI:
        return 'page' if _es_pagina(ruta_relativa) else 'component'
    if _bajo_alguno(ruta_relativa, opciones.util_dirs):
        return 'util'
    if _bajo_alguno(ruta_relativa, opciones.asset_dirs):
        return 'asset'
    if _bajo_alguno(ruta_relativa, opciones.config_dirs):
        return 'config'
    if extension in config.EXTENSIONES_ESTILO:
        return 'style'
    return 'other'


def _lanzar_error_recorrido(error: OSError):
    raise ErrorFatal(getattr(error, 'filename', None) or '?', f"No se pudo recorrer el directorio: {error}")


def escanear_proyecto(raiz_proyecto: str, opciones: MigrationOptions) -> ProjectAnalysis:
    """
    Recorre el árbol del proyecto, filtra y categoriza archivos, construye el
    índice de componentes y extrae estilos de las hojas encontradas.
    Raíz ilegible o errores de E/S durante el recorrido -> ErrorFatal.
    """
    raiz_proyecto = os.path.abspath(raiz_proyecto)
    logger.info(f"Analizando estructura del proyecto: {raiz_proyecto}")
    if not os.path.isdir(raiz_proyecto):
        raise ErrorFatal(raiz_proyecto, "no existe o no es un directorio")

    package_json = cargar_package_json(raiz_proyecto)
    framework = detectar_framework(package_json)
    aliases = cargar_alias(raiz_proyecto)
    logger.info(f"  Framework detectado: {framework or 'Desconocido'}")
    logger.info(f"  Alias de importación detectados: {json.dumps(aliases)}")

    extensiones_aceptadas = {e.lower() for e in opciones.file_extensions}
    archivos: List[FileInfo] = []
    categorizados: Dict[str, List[FileInfo]] = {c: [] for c in config.CATEGORIAS}
    mapa_componentes: Dict[str, FileInfo] = {}
    info_estilos = {}

    for raiz, directorios, nombres_archivo in os.walk(raiz_proyecto, topdown=True, onerror=_lanzar_error_recorrido):
        raiz_relativa = os.path.relpath(raiz, raiz_proyecto)
        if raiz_relativa == '.':
            raiz_relativa = ''

        # Filtrar directorios in situ y fijar el orden de descenso
        directorios.sort()
        for i in range(len(directorios) - 1, -1, -1):
            ruta_rel_dir = normalizar_ruta(os.path.join(raiz_relativa, directorios[i]))
            ignorar_dir, razon_dir = debe_ignorar(ruta_rel_dir, opciones.ignore_dirs)
            if ignorar_dir:
                logger.debug(f"Ignorando Directorio: {ruta_rel_dir}/ (Razón: {razon_dir})")
                del directorios[i]

        for nombre_archivo in sorted(nombres_archivo):
            ruta_relativa = normalizar_ruta(os.path.join(raiz_relativa, nombre_archivo))
            ignorar, razon = debe_ignorar(ruta_relativa, opciones.ignore_dirs)
            if ignorar:
                logger.debug(f"    -> Ignorando Archivo: {ruta_relativa} (Razón: {razon})")
                continue
            extension = os.path.splitext(nombre_archivo)[1].lower()
            if extension not in extensiones_aceptadas:
                continue

            ruta_completa = os.path.join(raiz, nombre_archivo)
            categoria = categorizar(ruta_relativa, extension, opciones)
            info: FileInfo = {
                "file_path": ruta_completa,
                "relative_path": ruta_relativa,
                "file_name": nombre_archivo,
                "extension": extension,
                "category": categoria,
            }
            if categoria in ('component', 'page'):
                nombre_componente = os.path.splitext(nombre_archivo)[0]
                info["component_name"] = nombre_componente
                if nombre_componente in mapa_componentes:
                    logger.debug(f"  Nombre de componente duplicado '{nombre_componente}': "
                                 f"{mapa_componentes[nombre_componente]['relative_path']} sustituido por {ruta_relativa}")
                mapa_componentes[nombre_componente] = info # Última escritura gana
            elif categoria == 'style':
                try:
                    info_estilos[ruta_relativa] = extraer_estilos_archivo(ruta_completa)
                except OSError as e:
                    raise ErrorFatal(ruta_completa, f"No se pudo leer la hoja de estilos: {e}") from e

            logger.debug(f"  Archivo encontrado: '{ruta_relativa}' -> {categoria}")
            archivos.append(info)
            categorizados[categoria].append(info)

    logger.info(f"  Encontrados {len(archivos)} archivos relevantes.")
    return ProjectAnalysis(
        root_path=raiz_proyecto,
        framework=framework,
        files=archivos,
        categorized_files=categorizados,
        component_map=mapa_componentes,
        dependency_graph={},
        architectural_patterns={},
        semantic_context={},
        style_info=info_estilos,
        aliases=aliases,
        package_json=package_json,
        aesthetic_profile=opciones.aesthetic_profile,
    )
