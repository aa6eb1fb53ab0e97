# --------------------------------------------------------------
# File: errors.py
# Description: Jerarquía de excepciones del núcleo de credenciales.
# --------------------------------------------------------------
"""Excepciones que detienen una operación de hash o de generación."""

from __future__ import annotations

__all__ = [
    "CredentialError",
    "ConfigurationError",
    "MalformedCredentialError",
    "UnsupportedAlgorithmError",
]


class CredentialError(Exception):
    """Error base del paquete con código numérico y mensaje legible."""

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


class ConfigurationError(CredentialError):
    """Configuración o entorno incapaz de producir un resultado válido."""

    def __init__(self, message: str, code: int = 1001) -> None:
        super().__init__(code, message)


class UnsupportedAlgorithmError(ConfigurationError):
    """El algoritmo de digest configurado no existe en `hashlib`."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Algoritmo de hash no soportado: {name!r}", code=1002)


class MalformedCredentialError(CredentialError):
    """La salt almacenada no puede interpretarse; se trata como no coincidencia."""

    def __init__(self, message: str = "Salt almacenada con formato inválido") -> None:
        super().__init__(1003, message)
