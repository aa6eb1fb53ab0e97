# --------------------------------------------------------------
# File: random_strings.py
# Description: Cadenas aleatorias alfanuméricas, alfabéticas o numéricas.
# --------------------------------------------------------------
"""Cadenas aleatorias para tokens, códigos y similares."""

from __future__ import annotations

import random
import string
from typing import Iterable, Optional

from credcore.entropy import RandomByteSource
from credcore.errors import ConfigurationError
from credcore.models import AlnumOptions
from credcore.password_gen import generate_character_set
from credcore.salt import random_base64_string

__all__ = ["random_alnum", "random_alpha", "random_digits"]


def random_alpha(
    qty: int = 1,
    alphanumeric: bool = False,
    disallow: Iterable[str] = (),
    rng: Optional[random.Random] = None,
) -> str:
    """Caracteres alfabéticos (o alfanuméricos) pseudoaleatorios rápidos."""

    return generate_character_set(qty, alphanumeric, disallow, rng=rng)


def _allowed_alphabet(options: AlnumOptions) -> str:
    if options.allow:
        allowed = options.allow
    else:
        allowed = ""
        if options.alpha:
            if options.upper:
                allowed += string.ascii_uppercase
            if options.lower:
                allowed += string.ascii_lowercase
        if options.numeric:
            allowed += string.digits
    excluded = set(options.disallow)
    return "".join(char for char in allowed if char not in excluded)


def random_alnum(
    length: int = 0,
    options: Optional[AlnumOptions] = None,
    source: Optional[RandomByteSource] = None,
    rng: Optional[random.Random] = None,
) -> str:
    """Genera una cadena alfanumérica, por defecto criptográficamente segura.

    Args:
        length (int): Longitud requerida; `0` elige una al azar entre
            `min_length` y `max_length`.
        options (AlnumOptions | None): Alfabeto, exclusiones y modo rápido.
        source (RandomByteSource | None): Entropía para el modo seguro.
        rng (random.Random | None): Generador para el modo rápido y la longitud.

    Returns:
        str: Cadena de `length` caracteres del alfabeto permitido.

    Raises:
        ConfigurationError: Si las opciones no dejan caracteres disponibles.

    """

    options = options or AlnumOptions()
    rng = rng or random.Random()
    if length < 1:
        length = rng.randint(options.min_length, options.max_length)

    allowed = _allowed_alphabet(options)
    if not allowed:
        raise ConfigurationError("Las opciones indicadas no permiten generar ninguna cadena")

    # El modo seguro parte de base64 y solo conserva caracteres alfanuméricos.
    allow = options.allow
    fast = options.fast or (bool(allow) and not (allow.isascii() and allow.isalnum()))
    if fast:
        return "".join(rng.choice(allowed) for _ in range(length))

    value = ""
    while len(value) < length:
        base_length = length * 3 if len(allowed) < 50 else length * 2
        for char in random_base64_string(base_length, source=source):
            if char in allowed:
                value += char
                if len(value) >= length:
                    break
    return value


def random_digits(
    length: int = 0,
    options: Optional[AlnumOptions] = None,
    source: Optional[RandomByteSource] = None,
    rng: Optional[random.Random] = None,
) -> str:
    """Cadena de dígitos; acepta las mismas opciones que `random_alnum`."""

    options = (options or AlnumOptions()).model_copy(update={"alpha": False})
    return random_alnum(length, options, source=source, rng=rng)
