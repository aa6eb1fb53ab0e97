# --------------------------------------------------------------
# File: hasher.py
# Description: Cálculo y verificación de hashes de credenciales.
# --------------------------------------------------------------
"""Hash de contraseñas con bcrypt y compatibilidad con formatos heredados.

El algoritmo nunca se almacena: se deduce en cada cálculo a partir del
prefijo de la salt. Las salts bcrypt (`$2a`, `$2b`, `$2x`, `$2y`) seleccionan
el hash adaptativo; el resto usa el digest heredado configurado o, si no hay
ninguno, md5 sin salt para registros muy antiguos.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from typing import Optional

import bcrypt

from credcore.config import load_settings
from credcore.entropy import RandomByteSource, default_source
from credcore.errors import (
    ConfigurationError,
    MalformedCredentialError,
    UnsupportedAlgorithmError,
)
from credcore.models import AlgorithmChoice, Credential, HashSettings, MatchResult
from credcore.salt import encode, random_base64_string

__all__ = [
    "CredentialHasher",
    "choose_algorithm",
    "hash_blowfish",
    "hash_legacy_digest",
    "hash_unsalted",
    "is_adaptive",
]

logger = logging.getLogger(__name__)

BLOWFISH_PREFIXES = ("$2a", "$2b", "$2x", "$2y")
# "$2b$11$" más 22 caracteres de salt.
BLOWFISH_PREFIX_LENGTH = 29
MIN_SALT_LENGTH = 28
MIN_HASH_LENGTH = 29
# bcrypt solo procesa los primeros 72 bytes de la entrada.
BCRYPT_MAX_BYTES = 72
# 16 bytes codifican exactamente los 22 caracteres de salt de bcrypt.
BCRYPT_SALT_BYTES = 16


def is_adaptive(value: str) -> bool:
    """Indica si `value` empieza por un prefijo de bcrypt."""

    return value[:3] in BLOWFISH_PREFIXES


def choose_algorithm(salt: str, hash_type: str) -> AlgorithmChoice:
    """Deduce el algoritmo a partir de la salt y del digest configurado.

    Args:
        salt (str): Salt almacenada o recién generada.
        hash_type (str): Nombre del digest heredado; vacío si no hay ninguno.

    Returns:
        AlgorithmChoice: Variante que debe calcular el hash.

    """

    if is_adaptive(salt) or hash_type == AlgorithmChoice.ADAPTIVE_BLOWFISH.value:
        return AlgorithmChoice.ADAPTIVE_BLOWFISH
    if hash_type:
        return AlgorithmChoice.LEGACY_DIGEST
    return AlgorithmChoice.UNSALTED_LEGACY


def hash_blowfish(plaintext: str, salt: str, pepper: str) -> str:
    """Calcula el hash bcrypt de `plaintext + pepper` con la salt dada.

    Returns:
        str: Salida completa de crypt: prefijo de 29 caracteres más el hash.

    Raises:
        MalformedCredentialError: Si bcrypt rechaza la salt.

    """

    secret = (plaintext + pepper).encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.hashpw(secret, salt.encode("ascii")).decode("ascii")
    except (ValueError, UnicodeEncodeError) as exc:
        raise MalformedCredentialError(f"Salt bcrypt inválida: {exc}") from exc


def hash_legacy_digest(plaintext: str, salt: str, pepper: str, name: str) -> str:
    """Digest heredado con la contraseña partida en dos mitades.

    Construcción `salt + primera + pepper + segunda`, donde la primera mitad
    mide `len // 2 + 1` bytes. Se conserva solo para verificar hashes
    existentes; las credenciales nuevas usan bcrypt siempre que sea posible.
    """

    data = plaintext.encode("utf-8")
    split = len(data) // 2 + 1
    try:
        digest = hashlib.new(name)
    except ValueError as exc:
        raise UnsupportedAlgorithmError(name) from exc
    digest.update(salt.encode("utf-8") + data[:split] + pepper.encode("utf-8") + data[split:])
    return digest.hexdigest()


def hash_unsalted(plaintext: str) -> str:
    """md5 sin salt para registros anteriores a la introducción de salts."""

    return hashlib.md5(plaintext.encode("utf-8")).hexdigest()


class CredentialHasher:
    """Gestiona el par `{salt, hash}` de una credencial.

    Args:
        credential (Credential | None): Par cargado por la capa de persistencia.
        settings (HashSettings | None): Configuración; por defecto la del entorno.
        source (RandomByteSource | None): Fuente de entropía para nuevas salts.

    """

    def __init__(
        self,
        credential: Optional[Credential] = None,
        settings: Optional[HashSettings] = None,
        source: Optional[RandomByteSource] = None,
    ) -> None:
        self.credential = credential or Credential()
        self.settings = settings or load_settings()
        self.source = source
        self.changed = False

    def __str__(self) -> str:
        return self.credential.hash

    def supports_adaptive(self) -> bool:
        """Indica si el entorno puede calcular hashes bcrypt."""

        return self.settings.adaptive

    def is_adaptive(self, value: str = "") -> bool:
        """Comprueba el prefijo de `value` o, si está vacío, el de la salt."""

        return is_adaptive(value or self.credential.salt)

    def make_salt(self) -> str:
        """Genera una salt nueva adecuada a la capacidad del entorno."""

        if not self.supports_adaptive():
            legacy = random_base64_string(44, source=self.source)
            return hashlib.md5(legacy.encode("ascii")).hexdigest()
        cost = self.settings.bcrypt_cost
        raw = (self.source or default_source).generate(BCRYPT_SALT_BYTES)
        return f"$2b${cost:02d}${encode(raw, 22)}$"

    def ensure_salt(self) -> str:
        """Garantiza que la credencial tenga una salt válida y la devuelve.

        Raises:
            ConfigurationError: Si la credencial existente usa bcrypt y el
                entorno no lo admite.

        """

        salt = self.credential.salt
        if len(salt) < MIN_SALT_LENGTH:
            logger.debug("Salt ausente o demasiado corta; se genera una nueva")
            self.credential.salt = self.make_salt()
        elif is_adaptive(salt) and not self.supports_adaptive():
            if self.credential.hash:
                raise ConfigurationError(
                    "El entorno no admite bcrypt: la credencial se creó con "
                    "una versión más reciente"
                )
            logger.debug("Salt bcrypt sin soporte en el entorno; se regenera")
            self.credential.salt = self.make_salt()
        return self.credential.salt

    def _hash(self, plaintext: str, salt: str) -> str:
        algorithm = choose_algorithm(salt, self.settings.hash_type)
        logger.debug("Calculando hash con algoritmo %s", algorithm.value)
        pepper = self.settings.auth_salt

        if algorithm is AlgorithmChoice.ADAPTIVE_BLOWFISH:
            if not self.supports_adaptive():
                raise ConfigurationError(
                    "El entorno no admite bcrypt: ¿se generaron las contraseñas "
                    "en una versión más reciente?"
                )
            result = hash_blowfish(plaintext, salt, pepper)
        elif algorithm is AlgorithmChoice.LEGACY_DIGEST:
            result = hash_legacy_digest(plaintext, salt, pepper, self.settings.hash_type)
        else:
            result = hash_unsalted(plaintext)

        if not isinstance(result, str) or len(result) <= 13:
            raise ConfigurationError("No se ha podido generar el hash de la contraseña")
        return result

    def compute_hash(self, plaintext: str) -> str:
        """Calcula la salida en bruto para `plaintext` con la salt actual."""

        return self._hash(plaintext, self.ensure_salt())

    def _stored_form(self, raw: str) -> str:
        return raw[BLOWFISH_PREFIX_LENGTH:] if is_adaptive(raw) else raw

    def set_secret(self, plaintext: str) -> None:
        """Establece una nueva contraseña.

        Si la contraseña no cambia respecto al hash almacenado no se escribe
        nada. El par completo se calcula antes de asignarse a la credencial.

        Raises:
            TypeError: Si `plaintext` no es una cadena.
            ConfigurationError: Si el algoritmo requerido no está disponible.

        """

        if not isinstance(plaintext, str):
            raise TypeError("La contraseña debe ser una cadena")
        if not plaintext:
            return

        current = self.credential
        if current.salt and current.hash:
            stored_salt = current.salt
            try:
                unchanged = self._stored_form(self.compute_hash(plaintext)) == current.hash
            except MalformedCredentialError:
                unchanged = False
            finally:
                current.salt = stored_salt
            if unchanged:
                return

        salt = self.make_salt()
        raw = self._hash(plaintext, salt)
        if is_adaptive(raw):
            updated = Credential(
                salt=raw[:BLOWFISH_PREFIX_LENGTH], hash=raw[BLOWFISH_PREFIX_LENGTH:]
            )
        else:
            updated = Credential(salt=salt, hash=raw)

        self.credential.salt = updated.salt
        self.credential.hash = updated.hash
        self.changed = True

    def matches(self, plaintext: str) -> MatchResult:
        """Comprueba `plaintext` contra el hash almacenado.

        Una contraseña incorrecta y un registro corrupto devuelven el mismo
        resultado negativo. Si coincide un hash heredado en un entorno con
        bcrypt, `should_rotate` se activa.
        """

        if not plaintext or not self.credential.hash:
            return MatchResult()

        stored_salt = self.credential.salt
        try:
            raw = self.compute_hash(plaintext)
        except MalformedCredentialError:
            logger.debug("Salt almacenada ilegible; se considera no coincidente")
            return MatchResult()
        finally:
            self.credential.salt = stored_salt

        should_rotate = False
        if is_adaptive(raw):
            computed = raw[BLOWFISH_PREFIX_LENGTH:]
        else:
            computed = raw
            should_rotate = self.supports_adaptive()

        if len(computed) < MIN_HASH_LENGTH:
            return MatchResult()

        matched = hmac.compare_digest(
            computed.encode("utf-8"), self.credential.hash.encode("utf-8")
        )
        if matched and should_rotate:
            logger.warning("Credencial con formato heredado; se recomienda cambiar la contraseña")
        return MatchResult(matched=matched, should_rotate=matched and should_rotate)
