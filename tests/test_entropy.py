# --------------------------------------------------------------
# File: test_entropy.py
# Description: Pruebas de la cadena de proveedores de bytes aleatorios.
# --------------------------------------------------------------

import random

import pytest

from credcore.entropy import (
    RandomByteSource,
    dev_urandom,
    os_getrandom,
    raw_length_for,
    secrets_token_bytes,
    xor_fill,
)


def _failing(length):
    return b"", False


@pytest.mark.parametrize("length", [1, 16, 17, 64, 257])
def test_generate_returns_exact_length(length):
    """Comprueba que la salida tenga siempre la longitud solicitada.

    Args:
        length (int): Longitud parametrizada.

    Returns:
        None: Las aserciones validan el tamaño del buffer.
    """
    source = RandomByteSource()
    assert len(source.generate(length)) == length
    assert len(source.generate(length, fast=True)) == length


def test_generate_zero_length():
    """Una longitud nula devuelve un buffer vacío."""
    assert RandomByteSource().generate(0) == b""


def test_generate_never_repeats():
    """Verifica que no haya colisiones en 1000 extracciones de 16 bytes.

    Returns:
        None: Las aserciones comprueban la unicidad del muestreo.
    """
    source = RandomByteSource()
    seen = set()
    for _ in range(1000):
        buffer = source.generate(16)
        assert buffer not in seen
        seen.add(buffer)


def test_first_successful_provider_wins():
    """Tras un proveedor válido no se consultan los siguientes.

    Returns:
        None: Las aserciones revisan las llamadas registradas.
    """
    calls = []

    def first(length):
        calls.append("first")
        return b"\x01" * length, True

    def second(length):
        calls.append("second")
        return b"\x02" * length, True

    source = RandomByteSource(providers=[first, second])
    assert source.generate(8) == b"\x01" * 8
    assert calls == ["first"]


def test_fallback_when_no_provider_available():
    """Sin proveedores disponibles se recurre al generador rápido sin excepción.

    Returns:
        None: Se compara con la salida del mismo generador sembrado.
    """
    source = RandomByteSource(providers=[_failing, _failing], fast_rng=random.Random(7))
    assert source.generate(12) == random.Random(7).randbytes(12)


def test_partial_secure_buffer_is_supplemented():
    """Un buffer seguro incompleto se combina por XOR, nunca se descarta.

    Returns:
        None: Las aserciones comparan con la combinación esperada.
    """

    def partial(length):
        return b"\xff" * 4, False

    source = RandomByteSource(providers=[partial], fast_rng=random.Random(3))
    expected = xor_fill(b"\xff" * 4, random.Random(3).randbytes(10))
    result = source.generate(10)
    assert result == expected
    assert len(result) == 10


def test_partial_buffer_is_combined_with_later_provider():
    """La salida de un proveedor posterior se mezcla con la parcial previa.

    Returns:
        None: Las aserciones verifican el XOR del acumulador.
    """

    def partial(length):
        return b"\x0f" * 3, False

    def full(length):
        return b"\xf0" * length, True

    source = RandomByteSource(providers=[partial, full])
    assert source.generate(5) == b"\xff" * 3 + b"\xf0" * 2


def test_fast_mode_skips_secure_providers():
    """El modo rápido no consulta ningún proveedor seguro.

    Returns:
        None: Las aserciones confirman que no hubo llamadas.
    """
    calls = []

    def tracked(length):
        calls.append(length)
        return b"\x00" * length, True

    source = RandomByteSource(providers=[tracked], fast_rng=random.Random(5))
    assert source.generate(6, fast=True) == random.Random(5).randbytes(6)
    assert calls == []


def test_probe_collects_every_provider():
    """El modo diagnóstico ejecuta todos los proveedores.

    Returns:
        None: Las aserciones revisan las claves y valores devueltos.
    """

    def good(length):
        return b"\xaa" * length, True

    source = RandomByteSource(providers=[good, _failing])
    results = source.probe(8)
    assert list(results) == ["good", "_failing", "fast_rng"]
    assert results["good"] == b"\xaa" * 8
    assert results["_failing"] == b""
    assert len(results["fast_rng"]) == 8


def test_xor_fill_keeps_longest_tail():
    """El acumulador conserva los bytes sobrantes del buffer más largo."""
    assert xor_fill(b"\x01\x02", b"\x03\x04\x05") == b"\x02\x06\x05"
    assert xor_fill(b"\x01\x02\x03", b"\x01") == b"\x00\x02\x03"
    assert xor_fill(b"", b"\x09") == b"\x09"


def test_raw_length_for_oversizes_draw():
    """El número de bytes en bruto cubre la expansión de base64."""
    assert raw_length_for(22) == 17
    assert raw_length_for(44) == 34
    assert raw_length_for(1) == 1


def test_default_providers_shape():
    """Los proveedores por defecto devuelven tuplas `(bytes, bool)`.

    Returns:
        None: Las aserciones revisan el contrato de cada proveedor.
    """
    for provider in (os_getrandom, secrets_token_bytes, dev_urandom):
        buffer, ok = provider(16)
        assert isinstance(buffer, bytes)
        assert isinstance(ok, bool)
        if ok:
            assert len(buffer) == 16


def test_dev_urandom_missing_device(tmp_path):
    """Un dispositivo inexistente se reporta como fallo sin excepción.

    Args:
        tmp_path (Path): Carpeta temporal proporcionada por pytest.

    Returns:
        None: Las aserciones verifican el resultado vacío.
    """
    assert dev_urandom(8, path=str(tmp_path / "missing")) == (b"", False)
