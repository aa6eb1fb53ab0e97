# --------------------------------------------------------------
# File: conftest.py
# Description: Fixtures compartidas para aislar la configuración del entorno.
# --------------------------------------------------------------

import random
from typing import Iterator

import pytest

from credcore.models import HashSettings

ENV_VARS = (
    "CREDCORE_AUTH_SALT",
    "CREDCORE_HASH_TYPE",
    "CREDCORE_BCRYPT_COST",
    "CREDCORE_ADAPTIVE",
)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch) -> Iterator[None]:
    """Elimina las variables CREDCORE_* para que cada prueba parta de cero.

    Args:
        monkeypatch (pytest.MonkeyPatch): Fixture para ajustar variables de entorno.

    Returns:
        Iterator[None]: Control del fixture autouse durante la ejecución de cada test.
    """
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def adaptive_settings() -> HashSettings:
    """Configuración con bcrypt de coste mínimo para acelerar las pruebas."""
    return HashSettings(auth_salt="pepper", hash_type="sha1", bcrypt_cost=4, adaptive=True)


@pytest.fixture
def legacy_settings() -> HashSettings:
    """Configuración de un entorno sin bcrypt con digest sha1."""
    return HashSettings(auth_salt="pepper", hash_type="sha1", bcrypt_cost=4, adaptive=False)


@pytest.fixture
def seeded_rng() -> random.Random:
    """Generador determinista para pruebas reproducibles."""
    return random.Random(1234)
