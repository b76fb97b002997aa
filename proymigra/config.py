# proymigra/config.py
from typing import Dict, List, Tuple

# --- Convenciones de Directorios (valores predeterminados, todos sobrescribibles) ---
DIRS_COMPONENTES = ['src/components', 'src/pages', 'src/views']
DIRS_UTILIDADES = ['src/utils', 'src/helpers', 'src/lib']
DIRS_ASSETS = ['src/assets', 'public']
DIRS_CONFIG = ['src/config', 'src/constants', 'src/services']
DIRS_IGNORAR = ['node_modules', '.git', 'dist', 'build', 'coverage']

EXTENSIONES_ACEPTADAS = [
    '.js', '.jsx', '.ts', '.tsx', '.vue', '.html',
    '.css', '.scss', '.less',
    '.json', '.svg', '.png', '.jpg', '.jpeg', '.gif',
]

# --- Familias de Extensiones ---
EXTENSIONES_UI = {'.js', '.jsx', '.ts', '.tsx', '.vue'} # Fuentes de componentes
EXTENSIONES_JS = {'.js', '.jsx', '.ts', '.tsx'} # Analizables con tree-sitter
EXTENSIONES_ESTILO = {'.css', '.scss', '.less'}
EXTENSIONES_BINARIAS = {'.png', '.jpg', '.jpeg', '.gif', '.ico', '.webp', '.woff', '.woff2', '.ttf', '.otf', '.eot'}

# Segmentos de ruta que convierten un componente en página
SEGMENTOS_PAGINA = ('pages', 'views')

CATEGORIAS = ['component', 'page', 'util', 'asset', 'config', 'style', 'other']

# --- Detección de Framework ---
# El orden ES significativo: la primera firma presente gana. Se sigue la tabla
# react, vue, angular, svelte, solid, vite, astro, remix, salvo que next, nuxt y
# gatsby suben justo delante de su framework base (next + react -> next).
FIRMAS_FRAMEWORK: List[Tuple[str, Tuple[str, ...]]] = [
    ('next', ('next',)),
    ('gatsby', ('gatsby',)),
    ('react', ('react', 'react-dom')),
    ('nuxt', ('nuxt',)),
    ('vue', ('vue',)),
    ('angular', ('@angular/core',)),
    ('svelte', ('svelte',)),
    ('solid', ('solid-js',)),
    ('vite', ('vite',)),
    ('astro', ('astro',)),
    ('remix', ('@remix-run/react',)),
]

# Frameworks cuyos componentes usan hooks (useX): React y los construidos sobre él
FRAMEWORKS_CON_HOOKS = ('react', 'next', 'gatsby', 'remix')

# Paquete de gestión de estado reconocido como patrón 'redux'
PAQUETE_REDUX = 'react-redux'

# --- Archivos de Proyecto ---
ARCHIVO_PACKAGE_JSON = "package.json"
ARCHIVO_TSCONFIG = "tsconfig.json"
DIR_FUENTES = "src"

# --- Salida ---
DIR_MIGRADOS = "components_migrated_from_B" # Bajo <proyectoA>/src
DIR_TESTS_GENERADOS = "__tests__"
DIR_PROTOTIPO = "prototypes/generated"
SUFIJO_CONFLICTO = "B"

# --- Opciones de Ejecución ---
ESTRATEGIAS_ESTILO = ('none', 'basic-mapping', 'prefix-styles')
PREFIJO_ESTILO = "migrated-"
MODOS_SALIDA = ('migrate', 'prototype', 'diff')
PERFILES_ESTETICOS = ('auto', 'minimalist', 'vibrant', 'custom')
ESTRATEGIAS_DISCREPANCIA = ('strict', 'approximate', 'fallback')

MAX_WORKERS = 4
TIMEOUT_ARCHIVO_SEGUNDOS = 30.0

MAX_TAMANO_MB_TEXTO = 5
MAX_TAMANO_BYTES_TEXTO = MAX_TAMANO_MB_TEXTO * 1024 * 1024

# Rutas de alias cuyo destino se considera "la raíz de fuentes"
DESTINOS_RAIZ_FUENTES = ('src', './src')

ETIQUETAS_NIVEL: Dict[str, str] = {
    'DEBUG': 'DEBUG',
    'INFO': 'INFO',
    'WARNING': 'WARN',
    'ERROR': 'ERROR',
    'CRITICAL': 'ERROR',
}
