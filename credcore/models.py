# --------------------------------------------------------------
# File: models.py
# Description: Modelos de datos comunes del núcleo de credenciales.
# --------------------------------------------------------------
"""Modelos Pydantic para credenciales, configuración y restricciones."""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, Field, model_validator

DEFAULT_SYMBOLS: List[str] = [
    "@", "#", "$", "%", "^", "*", "_", "-", "+", "?", "(", ")", "!", ".", "=", "/",
]
DEFAULT_DISALLOW: List[str] = ["O", "0", "I", "1", "l"]


class AlgorithmChoice(str, Enum):
    """Algoritmo deducido de la forma de la salt; nunca se persiste."""

    ADAPTIVE_BLOWFISH = "blowfish"
    LEGACY_DIGEST = "legacy"
    UNSALTED_LEGACY = "unsalted"


class Credential(BaseModel):
    """Par persistido por la capa de almacenamiento.

    Attributes:
        salt (str): Salt por credencial; en formato bcrypt incluye prefijo,
            coste y los 22 caracteres de salt (29 en total).
        hash (str): Resultado del hash sin el prefijo de la salt.

    """

    salt: str = ""
    hash: str = ""


class MatchResult(BaseModel):
    """Resultado estructurado de una verificación.

    Attributes:
        matched (bool): Indica si el secreto coincide con el hash almacenado.
        should_rotate (bool): Coincidencia contra un formato heredado cuando
            el entorno ya admite bcrypt; conviene cambiar la contraseña.

    """

    matched: bool = False
    should_rotate: bool = False

    def __bool__(self) -> bool:
        return self.matched


class HashSettings(BaseModel):
    """Configuración global del cálculo de hashes.

    Attributes:
        auth_salt (str): Pepper compartido por todas las credenciales.
        hash_type (str): Digest heredado de `hashlib`; vacío implica md5 sin salt.
        bcrypt_cost (int): Factor de coste para nuevas salts bcrypt (04-31).
        adaptive (bool): Disponibilidad del hash adaptativo en este entorno.

    """

    auth_salt: str = ""
    hash_type: str = "sha1"
    bcrypt_cost: int = Field(default=11, ge=4, le=31)
    adaptive: bool = True


class PasswordConstraintSet(BaseModel):
    """Cuotas por clase de carácter para generar contraseñas.

    En los máximos, `0` significa sin límite y `-1` que la clase no se admite.
    """

    min_length: int = 7
    max_length: int = 15
    min_upper: int = 1
    max_upper: int = 3
    min_lower: int = 1
    min_digits: int = 1
    max_digits: int = 0
    min_symbols: int = 0
    max_symbols: int = 3
    use_symbols: List[str] = Field(default_factory=lambda: list(DEFAULT_SYMBOLS))
    disallow: List[str] = Field(default_factory=lambda: list(DEFAULT_DISALLOW))

    @model_validator(mode="after")
    def _check_lengths(self) -> "PasswordConstraintSet":
        if self.min_length < 2 or self.max_length < self.min_length:
            raise ValueError("Se requiere 2 <= min_length <= max_length")
        return self


class AlnumOptions(BaseModel):
    """Opciones de `random_alnum`.

    Si `allow` no está vacío sustituye a `alpha`, `upper`, `lower` y `numeric`.
    """

    fast: bool = False
    alpha: bool = True
    upper: bool = True
    lower: bool = True
    numeric: bool = True
    allow: str = ""
    disallow: List[str] = Field(default_factory=list)
    min_length: int = 10
    max_length: int = 40
