# --------------------------------------------------------------
# File: __init__.py
# Description: Exposición pública del núcleo de credenciales y aleatoriedad.
# --------------------------------------------------------------
"""Inicializa el paquete `credcore` y documenta sus módulos principales."""

__all__ = [
    "config",
    "entropy",
    "errors",
    "hasher",
    "models",
    "password_gen",
    "random_strings",
    "salt",
]
