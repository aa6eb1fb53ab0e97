# --------------------------------------------------------------
# File: entropy.py
# Description: Obtención de bytes aleatorios con cadena de proveedores.
# --------------------------------------------------------------
"""Fuente de bytes impredecibles con degradación controlada.

Los proveedores seguros se consultan en orden de preferencia y su salida se
combina mediante XOR en un acumulador, de modo que un resultado parcial nunca
se descarta: los proveedores posteriores y el generador pseudoaleatorio de
respaldo solo rellenan huecos. La ausencia de entropía segura nunca lanza
excepción; se registra y se recupera con el generador rápido.
"""

from __future__ import annotations

import logging
import os
import random
import secrets
from typing import Callable, Dict, Optional, Sequence, Tuple

__all__ = [
    "Provider",
    "RandomByteSource",
    "default_source",
    "dev_urandom",
    "os_getrandom",
    "raw_length_for",
    "secrets_token_bytes",
    "xor_fill",
]

logger = logging.getLogger(__name__)

Provider = Callable[[int], Tuple[bytes, bool]]

URANDOM_PATH = "/dev/urandom"


def raw_length_for(required_length: int) -> int:
    """Bytes en bruto necesarios para `required_length` caracteres base64."""

    return int(required_length * 3 / 4) + 1


def os_getrandom(length: int) -> Tuple[bytes, bool]:
    """Lee del CSPRNG del sistema mediante la llamada `getrandom`."""

    getrandom = getattr(os, "getrandom", None)
    if getrandom is None:
        return b"", False
    try:
        buffer = getrandom(length)
    except OSError:
        return b"", False
    return buffer, len(buffer) == length


def secrets_token_bytes(length: int) -> Tuple[bytes, bool]:
    """Obtiene bytes del CSPRNG expuesto por el módulo `secrets`."""

    try:
        buffer = secrets.token_bytes(length)
    except (OSError, NotImplementedError):
        return b"", False
    return buffer, len(buffer) == length


def dev_urandom(length: int, path: str = URANDOM_PATH) -> Tuple[bytes, bool]:
    """Lee directamente del dispositivo aleatorio del núcleo."""

    if not os.access(path, os.R_OK):
        return b"", False
    buffer = b""
    try:
        with open(path, "rb") as handler:
            while len(buffer) < length:
                chunk = handler.read(length - len(buffer))
                if not chunk:
                    break
                buffer += chunk
    except OSError:
        return buffer, False
    return buffer, len(buffer) >= length


def xor_fill(accumulator: bytes, chunk: bytes) -> bytes:
    """Combina `chunk` sobre `accumulator` sin perder bytes de ninguno.

    Args:
        accumulator (bytes): Entropía ya reunida.
        chunk (bytes): Nueva salida de un proveedor.

    Returns:
        bytes: XOR de la parte común seguido del resto del buffer más largo.

    """

    overlap = min(len(accumulator), len(chunk))
    mixed = bytes(a ^ b for a, b in zip(accumulator[:overlap], chunk[:overlap]))
    tail = accumulator[overlap:] if len(accumulator) > overlap else chunk[overlap:]
    return mixed + tail


DEFAULT_PROVIDERS: Tuple[Provider, ...] = (os_getrandom, secrets_token_bytes, dev_urandom)


class RandomByteSource:
    """Genera buffers de bytes aleatorios de longitud exacta.

    Args:
        providers (Sequence[Provider] | None): Proveedores seguros en orden de
            preferencia. Cada uno devuelve `(bytes, éxito)`.
        fast_rng (random.Random | None): Generador rápido no criptográfico
            usado como respaldo y en modo `fast`.

    """

    def __init__(
        self,
        providers: Optional[Sequence[Provider]] = None,
        fast_rng: Optional[random.Random] = None,
    ) -> None:
        self.providers: Tuple[Provider, ...] = tuple(
            DEFAULT_PROVIDERS if providers is None else providers
        )
        self.fast_rng = fast_rng or random.Random()

    def generate(self, length: int, fast: bool = False) -> bytes:
        """Devuelve exactamente `length` bytes aleatorios.

        Args:
            length (int): Número de bytes solicitados.
            fast (bool): Omite los proveedores seguros; solo para usos no secretos.

        Returns:
            bytes: Buffer recién generado, nunca reutilizado entre llamadas.

        """

        if length <= 0:
            return b""
        if fast:
            return self.fast_rng.randbytes(length)

        buffer = b""
        valid = False
        for provider in self.providers:
            chunk, ok = provider(length)
            buffer = xor_fill(buffer, chunk[:length])
            if ok and len(buffer) >= length:
                valid = True
                break

        if not valid or len(buffer) < length:
            logger.warning(
                "Entropía segura insuficiente (%d/%d bytes); se completa con generador rápido",
                len(buffer),
                length,
            )
            buffer = xor_fill(buffer, self.fast_rng.randbytes(length))
        return buffer

    def probe(self, length: int) -> Dict[str, bytes]:
        """Ejecuta todos los proveedores y devuelve la salida de cada uno.

        Solo para diagnóstico: permite comprobar qué proveedores están
        disponibles en el entorno. La clave `fast_rng` contiene el buffer
        acumulado tras el relleno pseudoaleatorio.
        """

        results: Dict[str, bytes] = {}
        buffer = b""
        for provider in self.providers:
            chunk, ok = provider(length)
            name = getattr(provider, "__name__", repr(provider))
            results[name] = chunk if ok else b""
            if chunk:
                buffer = chunk
        results["fast_rng"] = xor_fill(buffer[:length], self.fast_rng.randbytes(length))
        return results


default_source = RandomByteSource()
