# proymigra/orchestrator.py
import os
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeout
from typing import Dict, List, Optional, Tuple

from .analysis.analyzer import analizar_proyecto
from .config import DIR_FUENTES, DIR_MIGRADOS, EXTENSIONES_BINARIAS, EXTENSIONES_ESTILO, EXTENSIONES_JS
from .contexto import ContextoMigracion
from .errors import ErrorFatal, ErrorParseo, ErrorTransformacion
from .models import EstadoMigracion, FileInfo, MigrationOptions, ProjectAnalysis, ResultadoMigracion
from .prototype import generar_prototipo, generar_test_componente
from .registro import RegistroAuditoria
from .scanner import escanear_proyecto
from .transform.ast_adapter import adaptar_codigo
from .transform.conflicts import MapaRenombres, resolver_conflictos
from .transform.style_transformer import transformar_estilos_en_linea, transformar_hoja
from .utils.file_utils import copiar_binario, escribir_texto, leer_texto

logger = logging.getLogger(__name__) # Usa 'proymigra.orchestrator'

CATEGORIAS_A_MIGRAR = ('component', 'page', 'util', 'config')


def _unir_valores(style_info, clave: str) -> Dict[str, None]:
    valores: Dict[str, None] = {}
    for registro in style_info.values():
        if clave == 'properties':
            elementos = (registro.get('properties') or {}).keys()
        else:
            elementos = registro.get(clave) or []
        for elemento in elementos:
            valores[elemento] = None
    return valores


def comparar_estilos(analisis_a: ProjectAnalysis, analisis_b: ProjectAnalysis) -> Dict[str, Dict[str, List[str]]]:
    """Comunes / solo A / solo B para colores, fuentes, tamaños y propiedades (solo claves)."""
    logger.info("Comparando estilos entre Proyecto A y Proyecto B")
    informe: Dict[str, Dict[str, List[str]]] = {}
    etiquetas = {'colors': 'Colores', 'font_families': 'Familias Tipográficas',
                 'font_sizes': 'Tamaños de Fuente', 'properties': 'Propiedades CSS'}

    logger.info("  --- Informe de Comparación de Estilos ---")
    for clave, etiqueta in etiquetas.items():
        valores_a = _unir_valores(analisis_a['style_info'], clave)
        valores_b = _unir_valores(analisis_b['style_info'], clave)
        seccion = {
            'common': [v for v in valores_a if v in valores_b],
            'a_only': [v for v in valores_a if v not in valores_b],
            'b_only': [v for v in valores_b if v not in valores_a],
        }
        informe[clave] = seccion
        logger.info(f"  {etiqueta}: Comunes: {', '.join(seccion['common']) or 'None'}")
        logger.info(f"      Solo Proyecto A: {', '.join(seccion['a_only']) or 'None'}")
        logger.info(f"      Solo Proyecto B: {', '.join(seccion['b_only']) or 'None'}")
    logger.info("  --- Fin del Informe de Comparación de Estilos ---")
    return informe


class Cancelacion:
    """
    Bandera de cancelación de una tarea de migración.
    Empezar a escribir y cancelar se excluyen: gana quien llega primero.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._cancelada = False
        self._escribiendo = False

    def cancelar(self) -> bool:
        """True si la tarea quedó cancelada antes de tocar el disco."""
        with self._lock:
            if self._escribiendo:
                return False
            self._cancelada = True
            return True

    def iniciar_escritura(self) -> bool:
        with self._lock:
            if self._cancelada:
                return False
            self._escribiendo = True
            return True


class MigrationOrchestrator:
    """
    Máquina de estados de una migración de B (origen) hacia A (destino).
    El mapa de renombres sobrevive entre ejecuciones de la misma instancia.
    """

    def __init__(self, ruta_a: str, ruta_b: str, opciones: Optional[MigrationOptions] = None,
                 renombres: Optional[MapaRenombres] = None):
        self.ruta_a = os.path.abspath(ruta_a)
        self.ruta_b = os.path.abspath(ruta_b)
        self.opciones = opciones if opciones is not None else MigrationOptions()
        self.renombres = renombres if renombres is not None else MapaRenombres(self.opciones.component_name_mapping)
        self.analisis_a: Optional[ProjectAnalysis] = None
        self.analisis_b: Optional[ProjectAnalysis] = None
        self.estado = EstadoMigracion.IDLE
        self.historial: List[str] = []
        self.auditoria: Optional[RegistroAuditoria] = None

    def _transicion(self, estado: EstadoMigracion):
        self.estado = estado
        self.historial.append(estado.value)
        logger.debug(f"Estado -> {estado.value}")

    # --- Secuencia principal ---
    def ejecutar(self) -> ResultadoMigracion:
        self.auditoria = RegistroAuditoria()
        self.auditoria.adjuntar()
        contexto = ContextoMigracion(self.opciones, self.renombres, self.auditoria)
        self.historial = []
        self._transicion(EstadoMigracion.IDLE)

        resultado = ResultadoMigracion(
            estado=self.estado.value, historial_estados=[], escrituras=[],
            escritos=[], renombres={}, fallos={},
        )
        logger.info(f"Inicializando migración. Proyecto A: {self.ruta_a} | Proyecto B: {self.ruta_b}")
        if self.opciones.dry_run:
            logger.warning("Ejecutando en modo DRY RUN. No se modificará ningún archivo.")

        try:
            self._transicion(EstadoMigracion.ANALIZANDO_A)
            self.analisis_a = escanear_proyecto(self.ruta_a, self.opciones)
            analizar_proyecto(self.analisis_a)

            self._transicion(EstadoMigracion.ANALIZANDO_B)
            self.analisis_b = escanear_proyecto(self.ruta_b, self.opciones)
            analizar_proyecto(self.analisis_b)

            if self.analisis_a['framework'] != self.analisis_b['framework']:
                logger.warning(f"Frameworks distintos detectados (A: {self.analisis_a['framework']}, "
                               f"B: {self.analisis_b['framework']})")

            self._transicion(EstadoMigracion.MIGRANDO_COMPONENTES)
            self._migrar_componentes(contexto, resultado)

            self._transicion(EstadoMigracion.ARMONIZANDO_RUTAS)
            self._armonizar_rutas()

            self._transicion(EstadoMigracion.INTEGRANDO_ESTADO)
            self._integrar_estado()

            self._transicion(EstadoMigracion.COMPARANDO_ESTILOS)
            comparar_estilos(self.analisis_a, self.analisis_b)

            if self.opciones.output_mode == 'prototype':
                self._transicion(EstadoMigracion.GENERANDO_PROTOTIPO)
                resultado['escritos'].extend(generar_prototipo(self.analisis_a, self.analisis_b, self.opciones))
            elif self.opciones.output_mode == 'diff':
                logger.info("Diferencias reportadas. No se realizó migración en modo 'diff'.")

            self._transicion(EstadoMigracion.COMPLETADO)
            logger.info("--- Migración Completa ---")
        except ErrorFatal as e:
            logger.error(f"Error fatal: {e}")
            self._transicion(EstadoMigracion.FALLIDO)
        except Exception as e:
            logger.exception(f"Error inesperado en la secuencia de migración: {e}")
            self._transicion(EstadoMigracion.FALLIDO)
        finally:
            self.auditoria.separar()

        resultado['estado'] = self.estado.value
        resultado['historial_estados'] = list(self.historial)
        resultado['renombres'] = self.renombres.snapshot()
        return resultado

    # --- MigratingComponents ---
    def _planificar(self, contexto: ContextoMigracion) -> List[Tuple[str, FileInfo, str]]:
        """(ruta original, info, ruta destino) ordenados por ruta original, con renombres ya resueltos."""
        archivos: List[FileInfo] = []
        for categoria in CATEGORIAS_A_MIGRAR:
            archivos.extend(self.analisis_b['categorized_files'].get(categoria, []))
        originales = [(info['relative_path'], info) for info in archivos]

        reubicados = resolver_conflictos(archivos, self.analisis_a, self.renombres, self.opciones.conflict_suffix)
        contexto.reubicados = {
            antes: os.path.splitext(os.path.basename(despues))[0]
            for antes, despues in reubicados
        }

        base_destino = os.path.join(self.analisis_a['root_path'], DIR_FUENTES, DIR_MIGRADOS)
        plan = []
        for ruta_original, info in sorted(originales, key=lambda par: par[0]):
            destino = os.path.join(base_destino, *info['relative_path'].split('/'))
            plan.append((ruta_original, info, destino))
        return plan

    def _migrar_componentes(self, contexto: ContextoMigracion, resultado: ResultadoMigracion):
        logger.info("Iniciando Migración de Componentes")
        plan = self._planificar(contexto)
        resultado['escrituras'] = [(ruta_original, destino) for ruta_original, _, destino in plan]

        if not plan:
            logger.info("Sin archivos que migrar.")
            return

        trabajadores = max(1, self.opciones.max_workers)
        executor = ThreadPoolExecutor(max_workers=trabajadores)
        try:
            tareas = []
            for ruta_original, info, destino in plan:
                cancelacion = Cancelacion()
                futuro = executor.submit(self._procesar_archivo, info, destino, contexto, cancelacion)
                tareas.append((ruta_original, futuro, cancelacion))
            for ruta_original, futuro, cancelacion in tareas:
                try:
                    try:
                        escritos = futuro.result(timeout=self.opciones.file_timeout)
                    except FuturesTimeout:
                        if not cancelacion.cancelar():
                            # Ya estaba escribiendo: se espera a que termine para no mentir sobre el disco
                            escritos = futuro.result()
                        else:
                            mensaje = f"tiempo agotado ({self.opciones.file_timeout}s)"
                            logger.error(f"    Fallo al migrar {ruta_original}: {mensaje}")
                            resultado['fallos'][ruta_original] = mensaje
                            continue
                    resultado['escritos'].extend(escritos)
                except ErrorTransformacion as e:
                    logger.error(f"    {e}")
                    resultado['fallos'][ruta_original] = str(e)
        finally:
            # Una tarea colgada no debe bloquear el resto de la secuencia
            executor.shutdown(wait=False, cancel_futures=True)

        logger.info(f"Migración de Componentes completa ({len(plan) - len(resultado['fallos'])}/{len(plan)} archivos).")

    def _procesar_archivo(self, info: FileInfo, destino: str, contexto: ContextoMigracion,
                          cancelacion: Cancelacion) -> List[str]:
        try:
            return self._copiar_y_transformar(info, destino, contexto, cancelacion)
        except ErrorTransformacion:
            raise
        except Exception as e:
            raise ErrorTransformacion(info['relative_path'], str(e), causa=e) from e

    def _empezar_escritura(self, ruta: str, cancelacion: Cancelacion):
        if not cancelacion.iniciar_escritura():
            logger.debug(f"    {ruta}: tarea cancelada por tiempo agotado; no se escribe nada.")
            raise ErrorTransformacion(ruta, "cancelado tras agotar el tiempo")

    def _copiar_tal_cual(self, info: FileInfo, destino: str, opciones: MigrationOptions,
                         cancelacion: Cancelacion) -> List[str]:
        ruta = info['relative_path']
        self._empezar_escritura(ruta, cancelacion)
        if opciones.escrituras_suprimidas:
            logger.info(f"  DRY RUN: Se copiaría: {ruta} -> {destino}")
            return []
        copiar_binario(info['file_path'], destino)
        logger.info(f"  Copiado: {ruta} -> {destino}")
        return [destino]

    def _copiar_y_transformar(self, info: FileInfo, destino: str, contexto: ContextoMigracion,
                              cancelacion: Cancelacion) -> List[str]:
        opciones = contexto.opciones
        ruta = info['relative_path']
        extension = info['extension']
        escritos: List[str] = []

        if extension in EXTENSIONES_BINARIAS:
            return self._copiar_tal_cual(info, destino, opciones, cancelacion)

        estado, _, contenido = leer_texto(info['file_path'])
        if estado != "ok":
            logger.warning(f"    {ruta} no se puede leer como texto ({contenido}). Se copia sin transformar.")
            return self._copiar_tal_cual(info, destino, opciones, cancelacion)

        transformado = contenido
        if extension in EXTENSIONES_JS:
            logger.info(f"  Procesando {ruta} con transformaciones AST")
            try:
                transformado = adaptar_codigo(contenido, info, destino, self.analisis_a, self.analisis_b, contexto)
                transformado = transformar_estilos_en_linea(transformado, info, self.analisis_a, self.analisis_b, opciones)
            except ErrorParseo as e:
                logger.warning(f"    {e}. Se copia sin transformar.")
                transformado = contenido
        elif extension in EXTENSIONES_ESTILO:
            logger.info(f"  Procesando {ruta} con transformaciones de estilo")
            transformado = transformar_hoja(contenido, info, self.analisis_a, self.analisis_b, opciones)

        if opciones.custom_transformer is not None:
            try:
                transformado = opciones.custom_transformer(transformado, info)
                logger.info(f"    Transformación personalizada aplicada a {ruta}")
            except Exception as e:
                logger.error(f"    Error aplicando transformación personalizada en {ruta}: {e}")

        self._empezar_escritura(ruta, cancelacion)
        if opciones.escrituras_suprimidas:
            logger.info(f"  DRY RUN: Se copiaría y transformaría: {ruta} -> {destino}")
        else:
            escribir_texto(destino, transformado)
            logger.info(f"  Copiado y transformado: {ruta} -> {destino}")
            escritos.append(destino)

        if opciones.generate_tests and info.get('category') in ('component', 'page'):
            ruta_test = generar_test_componente(info, destino, opciones)
            if ruta_test:
                escritos.append(ruta_test)
        return escritos

    # --- Pasadas consultivas ---
    def _armonizar_rutas(self):
        logger.info("Armonizando Rutas (ejemplo específico de React)")
        if self.analisis_a['framework'] == 'react':
            logger.info("  Rutas sugeridas para el router del Proyecto A:")
            for pagina in self.analisis_b['categorized_files'].get('page', []):
                nombre = pagina['component_name']
                elemento = self.renombres.obtener(nombre) or nombre
                logger.info(f"    {{ path: '/{nombre.lower()}', element: <{elemento} /> }}")
        logger.info("Armonización de Rutas completa. Requiere integración manual.")

    def _integrar_estado(self):
        logger.info("Integrando Gestión de Estado (ejemplo con Redux)")
        if self.analisis_b['architectural_patterns'].get('redux'):
            logger.info("  Redux detectado en Proyecto B. Acciones sugeridas:")
            logger.info("    - Copiar store/reducers de Redux al directorio de store del Proyecto A")
            logger.info("    - Actualizar los imports de acciones a las convenciones del Proyecto A")
        logger.info("Integración de Gestión de Estado completa. Requiere integración manual.")


def ejecutar_migracion(ruta_a: str, ruta_b: str, opciones: Optional[MigrationOptions] = None) -> ResultadoMigracion:
    """Atajo: una ejecución con un orquestador nuevo."""
    return MigrationOrchestrator(ruta_a, ruta_b, opciones).ejecutar()
