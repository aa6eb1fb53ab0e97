# --------------------------------------------------------------
# File: config.py
# Description: Carga de la configuración de hash desde el entorno y .env.
# --------------------------------------------------------------
"""Parámetros globales: pepper, digest heredado y coste de bcrypt."""

from __future__ import annotations

import os

from dotenv import load_dotenv

from credcore.models import HashSettings

load_dotenv()

__all__ = ["load_settings"]


def _env_flag(name: str, default: str) -> bool:
    """Interpreta una variable de entorno como booleano."""

    return os.getenv(name, default).strip().lower() not in {"0", "false", "no", "off", ""}


def load_settings() -> HashSettings:
    """Construye la configuración de hash a partir de las variables de entorno.

    Returns:
        HashSettings: Pepper, algoritmo heredado, coste y disponibilidad de
        hash adaptativo leídos en el momento de la llamada.

    """

    return HashSettings(
        auth_salt=os.getenv("CREDCORE_AUTH_SALT", ""),
        hash_type=os.getenv("CREDCORE_HASH_TYPE", "sha1"),
        bcrypt_cost=int(os.getenv("CREDCORE_BCRYPT_COST", "11")),
        adaptive=_env_flag("CREDCORE_ADAPTIVE", "1"),
    )
