# proymigra/models.py
# Define estructuras de datos para mejorar la claridad y el tipado
from dataclasses import dataclass, field
from enum import Enum
from typing import TypedDict, List, Optional, Dict, Any, Callable, Tuple

from . import config


class FileInfo(TypedDict, total=False):
    file_path: str # Ruta absoluta
    relative_path: str # Relativa a la raíz del proyecto, separador '/'
    file_name: str
    extension: str # En minúsculas, con punto
    category: str # component | page | util | asset | config | style | other
    component_name: Optional[str] # Solo para component/page


class StyleRecord(TypedDict):
    file_path: str
    colors: List[str]
    font_families: List[str]
    font_sizes: List[str]
    properties: Dict[str, List[str]] # propiedad -> valores observados (sin duplicados)
    selectors: List[str]


class SemanticInsight(TypedDict):
    role: str # 'Component' | 'unknown'
    exported_entities: List[str]
    imported_entities: List[str]
    data_flow: List[str] # ej: 'Hook: useState'
    uses_hooks: bool
    inline_styles: List[str] # 'clave: valor; clave: valor'


class ProjectAnalysis(TypedDict):
    root_path: str
    framework: Optional[str]
    files: List[FileInfo]
    categorized_files: Dict[str, List[FileInfo]]
    component_map: Dict[str, FileInfo]
    dependency_graph: Dict[str, List[str]] # ruta relativa -> especificadores resueltos
    architectural_patterns: Dict[str, Any] # ej: {'redux': True, 'contextApi': ['App.jsx']}
    semantic_context: Dict[str, SemanticInsight]
    style_info: Dict[str, StyleRecord]
    aliases: Dict[str, List[str]]
    package_json: Dict[str, Any]
    aesthetic_profile: str


class CssVariant(Enum):
    """Variante de gramática CSS usada para parsear una hoja de estilos."""
    CSS = 'css'
    SCSS = 'scss'
    LESS = 'less'

    @classmethod
    def desde_extension(cls, extension: str) -> 'CssVariant':
        ext = extension.lower().lstrip('.')
        if ext == 'scss':
            return cls.SCSS
        if ext == 'less':
            return cls.LESS
        return cls.CSS


class EstadoMigracion(Enum):
    IDLE = 'Idle'
    ANALIZANDO_A = 'AnalyzingA'
    ANALIZANDO_B = 'AnalyzingB'
    MIGRANDO_COMPONENTES = 'MigratingComponents'
    ARMONIZANDO_RUTAS = 'HarmonizingRoutes'
    INTEGRANDO_ESTADO = 'IntegratingState'
    COMPARANDO_ESTILOS = 'ComparingStyles'
    GENERANDO_PROTOTIPO = 'GeneratingPrototype'
    COMPLETADO = 'Done'
    FALLIDO = 'Failed'


@dataclass(frozen=True)
class MigrationOptions:
    """Instantánea de configuración para una ejecución. Solo lectura."""
    component_dirs: Tuple[str, ...] = tuple(config.DIRS_COMPONENTES)
    util_dirs: Tuple[str, ...] = tuple(config.DIRS_UTILIDADES)
    asset_dirs: Tuple[str, ...] = tuple(config.DIRS_ASSETS)
    config_dirs: Tuple[str, ...] = tuple(config.DIRS_CONFIG)
    ignore_dirs: Tuple[str, ...] = tuple(config.DIRS_IGNORAR)
    file_extensions: Tuple[str, ...] = tuple(config.EXTENSIONES_ACEPTADAS)
    dry_run: bool = False
    # Mapa inicial; durante la ejecución vive en un MapaRenombres (ver transform/conflicts.py)
    component_name_mapping: Dict[str, str] = field(default_factory=dict)
    import_path_rewrites: Dict[str, str] = field(default_factory=dict)
    generate_tests: bool = False
    style_strategy: str = 'none'
    style_prefix: str = config.PREFIJO_ESTILO
    output_mode: str = 'migrate'
    aesthetic_profile: str = 'auto'
    mismatch_strategy: str = 'approximate'
    prototype_dir: str = config.DIR_PROTOTIPO
    conflict_suffix: str = config.SUFIJO_CONFLICTO
    custom_transformer: Optional[Callable[[str, FileInfo], str]] = None
    aesthetic_strategy: Optional[Any] = None # Ver transform/aesthetics.py
    max_workers: int = config.MAX_WORKERS
    file_timeout: float = config.TIMEOUT_ARCHIVO_SEGUNDOS

    @property
    def escrituras_suprimidas(self) -> bool:
        # 'diff' solo informa: se calcula todo pero no se escribe
        return self.dry_run or self.output_mode == 'diff'


class ResultadoMigracion(TypedDict):
    estado: str
    historial_estados: List[str]
    escrituras: List[Tuple[str, str]] # (ruta relativa origen, ruta destino) planificadas
    escritos: List[str] # Rutas efectivamente escritas
    renombres: Dict[str, str]
    fallos: Dict[str, str] # ruta relativa -> mensaje de error
