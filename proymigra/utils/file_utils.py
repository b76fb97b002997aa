# proymigra/utils/file_utils.py
import codecs
import json
import logging
import os
import shutil
from typing import Any, Dict, List, Optional, Tuple

import chardet

from ..config import MAX_TAMANO_BYTES_TEXTO, MAX_TAMANO_MB_TEXTO
from ..errors import ErrorConfiguracion

logger = logging.getLogger(__name__)

# (estado, codificación, contenido | mensaje de error)
ReadResult = Tuple[str, Optional[str], str]


def _codificaciones_candidatas(ruta_completa: str, tamano_bytes: int) -> List[str]:
    codificacion_detectada: Optional[str] = None
    try:
        with open(ruta_completa, 'rb') as fb:
            fragmento = fb.read(min(tamano_bytes, 64 * 1024))
        resultado = chardet.detect(fragmento)
        confianza = resultado.get('confidence') or 0.0
        if resultado.get('encoding') and confianza >= 0.6:
            codificacion_detectada = resultado['encoding']
        logger.debug(f"Chardet detectó: {resultado.get('encoding')} (Confianza: {confianza:.2f})")
    except OSError as e:
        logger.warning(f"Error detectando codificación en {ruta_completa}: {e}")

    candidatas: List[str] = []
    for enc in ([codificacion_detectada] if codificacion_detectada else []) + ['utf-8', 'cp1252', 'latin-1']:
        if enc and enc.lower() not in (c.lower() for c in candidatas):
            candidatas.append(enc)
    return candidatas


def leer_texto(ruta_completa: str) -> ReadResult:
    """
    Lee un archivo de texto probando varias codificaciones.
    Devuelve ('ok', codificación, contenido) o (estado_error, None, mensaje).
    Los errores de E/S (permisos, archivo inexistente) se propagan.
    """
    tamano_bytes = os.path.getsize(ruta_completa)
    if tamano_bytes == 0:
        return "ok", "empty", ""
    if tamano_bytes > MAX_TAMANO_BYTES_TEXTO:
        msg = f"Tamaño ({tamano_bytes / 1024 / 1024:.2f} MB) excede límite ({MAX_TAMANO_MB_TEXTO} MB)"
        logger.warning(f"{msg} en archivo {ruta_completa}")
        return "too_large", None, msg

    candidatas = _codificaciones_candidatas(ruta_completa, tamano_bytes)
    for enc in candidatas:
        effective_enc = 'utf-8-sig' if enc.lower() in ('utf-8', 'ascii') else enc
        try:
            with codecs.open(ruta_completa, 'r', encoding=effective_enc, errors='strict') as f:
                contenido = f.read()
        except (UnicodeDecodeError, LookupError):
            logger.debug(f"Fallo de decodificación con {enc} en {ruta_completa}")
            continue
        if '\x00' in contenido[:1024]:
            msg_bin = "Archivo decodificado pero contiene bytes nulos, probablemente binario."
            logger.warning(f"{msg_bin} en archivo {ruta_completa}")
            return "read_error", enc, msg_bin
        # codecs.open no traduce saltos de línea
        return "ok", enc, contenido.replace('\r\n', '\n')

    msg = f"Fallo al decodificar con {', '.join(candidatas)}"
    logger.warning(f"Lectura fallida para {ruta_completa}. Error: {msg}")
    return "read_error", None, msg


def leer_json(ruta_completa: str) -> Dict[str, Any]:
    """Lee un documento JSON con objeto raíz. Cualquier fallo -> ErrorConfiguracion."""
    try:
        with open(ruta_completa, 'r', encoding='utf-8-sig') as f:
            datos = json.load(f)
    except FileNotFoundError:
        raise ErrorConfiguracion(ruta_completa, "no existe")
    except json.JSONDecodeError as e:
        raise ErrorConfiguracion(ruta_completa, f"JSON inválido ({e})")
    except (OSError, UnicodeDecodeError) as e:
        raise ErrorConfiguracion(ruta_completa, str(e))
    if not isinstance(datos, dict):
        raise ErrorConfiguracion(ruta_completa, "el documento no es un objeto JSON")
    return datos


def escribir_texto(ruta_destino: str, contenido: str):
    os.makedirs(os.path.dirname(ruta_destino), exist_ok=True)
    with open(ruta_destino, 'w', encoding='utf-8', newline='') as f:
        f.write(contenido)


def copiar_binario(ruta_origen: str, ruta_destino: str):
    os.makedirs(os.path.dirname(ruta_destino), exist_ok=True)
    shutil.copyfile(ruta_origen, ruta_destino)
