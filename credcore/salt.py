# --------------------------------------------------------------
# File: salt.py
# Description: Codificación de buffers aleatorios al alfabeto de bcrypt.
# --------------------------------------------------------------
"""Cadenas base64 con el orden de alfabeto que espera bcrypt."""

from __future__ import annotations

import base64
from typing import Dict, Optional

from credcore.entropy import RandomByteSource, default_source, raw_length_for

__all__ = [
    "BCRYPT64",
    "STANDARD64",
    "encode",
    "probe_base64_strings",
    "random_base64_string",
]

STANDARD64 = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
BCRYPT64 = "./ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"

_TO_BCRYPT = str.maketrans(STANDARD64, BCRYPT64)


def encode(buffer: bytes, required_length: int) -> str:
    """Convierte un buffer en una salt de `required_length` caracteres.

    Args:
        buffer (bytes): Bytes aleatorios de entrada.
        required_length (int): Longitud máxima de la cadena resultante.

    Returns:
        str: Base64 sin relleno, transliterado a `./A-Za-z0-9` y truncado.

    """

    encoded = base64.b64encode(buffer).decode("ascii").rstrip("=")
    return encoded.translate(_TO_BCRYPT)[:required_length]


def random_base64_string(
    required_length: int = 22,
    fast: bool = False,
    source: Optional[RandomByteSource] = None,
) -> str:
    """Genera una cadena aleatoria en el alfabeto de bcrypt.

    Args:
        required_length (int): Caracteres deseados.
        fast (bool): Usa el generador rápido; no apto para secretos.
        source (RandomByteSource | None): Fuente de bytes alternativa.

    Returns:
        str: Cadena de exactamente `required_length` caracteres.

    """

    source = source or default_source
    raw_length = required_length if fast else raw_length_for(required_length)
    return encode(source.generate(raw_length, fast=fast), required_length)


def probe_base64_strings(
    required_length: int = 22, source: Optional[RandomByteSource] = None
) -> Dict[str, str]:
    """Codifica la salida de cada proveedor de entropía para inspección."""

    source = source or default_source
    raw = source.probe(raw_length_for(required_length))
    return {
        name: encode(buffer, required_length) if buffer else "N/A"
        for name, buffer in raw.items()
    }
