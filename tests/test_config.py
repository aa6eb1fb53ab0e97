# --------------------------------------------------------------
# File: test_config.py
# Description: Pruebas de la carga de configuración desde el entorno.
# --------------------------------------------------------------

import pytest
from pydantic import ValidationError

from credcore.config import load_settings


def test_defaults_without_environment():
    """Sin variables definidas se usan los valores por defecto.

    Returns:
        None: Las aserciones revisan cada campo.
    """
    settings = load_settings()
    assert settings.auth_salt == ""
    assert settings.hash_type == "sha1"
    assert settings.bcrypt_cost == 11
    assert settings.adaptive is True


def test_environment_overrides(monkeypatch):
    """Las variables CREDCORE_* sustituyen los valores por defecto.

    Args:
        monkeypatch (pytest.MonkeyPatch): Fixture para ajustar variables de entorno.

    Returns:
        None: Las aserciones revisan la configuración cargada.
    """
    monkeypatch.setenv("CREDCORE_AUTH_SALT", "s3cr3t")
    monkeypatch.setenv("CREDCORE_HASH_TYPE", "sha256")
    monkeypatch.setenv("CREDCORE_BCRYPT_COST", "12")
    monkeypatch.setenv("CREDCORE_ADAPTIVE", "off")
    settings = load_settings()
    assert settings.auth_salt == "s3cr3t"
    assert settings.hash_type == "sha256"
    assert settings.bcrypt_cost == 12
    assert settings.adaptive is False


def test_cost_out_of_range(monkeypatch):
    """Un coste bcrypt fuera de 04-31 se rechaza."""
    monkeypatch.setenv("CREDCORE_BCRYPT_COST", "3")
    with pytest.raises(ValidationError):
        load_settings()
