# --------------------------------------------------------------
# File: password_gen.py
# Description: Generación de contraseñas legibles con cuotas por clase.
# --------------------------------------------------------------
"""Generador de contraseñas aleatorias a partir de una base segura.

La base se obtiene de una cadena base64 criptográficamente segura; después
cada paso ajusta una única clase de carácter (símbolos, mayúsculas,
minúsculas, dígitos) añadiendo o sustituyendo caracteres. No es un resolutor
de restricciones: los pasos no revisan cuotas ya satisfechas, por lo que los
máximos deben ser generosos respecto a los mínimos.
"""

from __future__ import annotations

import logging
import random
import re
import string
from typing import Callable, Dict, Iterable, List, Optional, Set

from credcore.entropy import RandomByteSource
from credcore.errors import ConfigurationError
from credcore.models import PasswordConstraintSet
from credcore.salt import random_base64_string

__all__ = ["PasswordSynthesizer", "both_cases", "char_class", "generate_character_set"]

logger = logging.getLogger(__name__)

BASE64_SYMBOLS = ("/", ".")
LETTER = re.compile(r"[A-Za-z]")
DIGIT = re.compile(r"[0-9]")


def both_cases(chars: Iterable[str]) -> Set[str]:
    """Devuelve los caracteres en mayúscula y minúscula."""

    result: Set[str] = set()
    for char in chars:
        result.add(char.lower())
        result.add(char.upper())
    return result


def char_class(char: str) -> str:
    """Clasifica un carácter ASCII como `upper`, `lower`, `digit` o `symbol`."""

    if "A" <= char <= "Z":
        return "upper"
    if "a" <= char <= "z":
        return "lower"
    if "0" <= char <= "9":
        return "digit"
    return "symbol"


def generate_character_set(
    count: int,
    allow_alphanumeric: bool = False,
    disallow: Iterable[str] = (),
    digits_only: bool = False,
    rng: Optional[random.Random] = None,
) -> str:
    """Muestreo rápido y uniforme sobre un alfabeto explícito.

    No es criptográficamente seguro; solo completa clases sobre una base que
    ya lo es.

    Args:
        count (int): Número de caracteres solicitados.
        allow_alphanumeric (bool): Añade dígitos al alfabeto de letras.
        disallow (Iterable[str]): Caracteres excluidos del alfabeto.
        digits_only (bool): Limita el alfabeto a dígitos.
        rng (random.Random | None): Generador a utilizar.

    Returns:
        str: Cadena de `count` caracteres.

    Raises:
        ConfigurationError: Si las exclusiones vacían el alfabeto.

    """

    if digits_only:
        alphabet = string.digits
    else:
        alphabet = string.ascii_letters + (string.digits if allow_alphanumeric else "")
    excluded = set(disallow)
    alphabet = "".join(char for char in alphabet if char not in excluded)
    if not alphabet:
        raise ConfigurationError("Las opciones indicadas no dejan caracteres disponibles")
    rng = rng or random.Random()
    return "".join(rng.choice(alphabet) for _ in range(count))


class PasswordSynthesizer:
    """Genera contraseñas que cumplen un `PasswordConstraintSet`.

    Args:
        source (RandomByteSource | None): Entropía para la base de la contraseña.
        rng (random.Random | None): Generador para longitud, símbolos y barajado.
        fast_rng (random.Random | None): Generador rápido para completar clases.

    """

    def __init__(
        self,
        source: Optional[RandomByteSource] = None,
        rng: Optional[random.Random] = None,
        fast_rng: Optional[random.Random] = None,
    ) -> None:
        self.source = source
        self.rng = rng or random.SystemRandom()
        self.fast_rng = fast_rng or random.Random()

    def generate_character_set(
        self,
        count: int,
        allow_alphanumeric: bool = False,
        disallow: Iterable[str] = (),
        digits_only: bool = False,
    ) -> str:
        """Variante de `generate_character_set` con el generador rápido propio."""

        return generate_character_set(
            count, allow_alphanumeric, disallow, digits_only=digits_only, rng=self.fast_rng
        )

    def _class_factory(self, klass: str, disallow: Set[str]) -> Callable[[], str]:
        if klass == "upper":
            return lambda: self.generate_character_set(1, False, disallow).upper()
        if klass == "lower":
            return lambda: self.generate_character_set(1, False, disallow).lower()
        return lambda: self.generate_character_set(1, disallow=disallow, digits_only=True)

    def _top_up(
        self,
        chars: List[str],
        klass: str,
        qty: int,
        target: int,
        minimums: Dict[str, int],
        disallow: Set[str],
    ) -> None:
        """Añade `qty` caracteres de `klass`, sustituyendo si ya se alcanzó `target`.

        Solo se sustituyen caracteres excluidos o de clases alfanuméricas que
        superan su mínimo; si no hay ninguno, se añade al final.
        """

        make = self._class_factory(klass, disallow)
        for _ in range(qty):
            donors: List[int] = []
            if len(chars) >= target:
                counts = {name: 0 for name in minimums}
                for char in chars:
                    if char_class(char) in counts and char not in disallow:
                        counts[char_class(char)] += 1
                for index, char in enumerate(chars):
                    other = char_class(char)
                    if other == "symbol":
                        continue
                    if char in disallow or (other != klass and counts[other] > minimums[other]):
                        donors.append(index)
            if donors:
                chars[self.rng.choice(donors)] = make()
            else:
                chars.append(make())

    def generate(self, constraints: Optional[PasswordConstraintSet] = None) -> str:
        """Genera una contraseña aleatoria legible.

        Args:
            constraints (PasswordConstraintSet | None): Cuotas por clase; por
                defecto 7-15 caracteres con al menos una mayúscula, una
                minúscula y un dígito, sin `O 0 I 1 l`.

        Returns:
            str: Contraseña generada.

        Raises:
            ConfigurationError: Si las exclusiones vacían algún alfabeto o dejan
                menos símbolos que `min_symbols`.

        """

        options = constraints or PasswordConstraintSet()
        disallow = both_cases(char for char in options.disallow if char.isalnum())
        disallow |= {char for char in options.disallow if not char.isalnum()}
        target = self.rng.randint(options.min_length, options.max_length)
        minimums = {
            "upper": max(options.min_upper, 0) if options.max_upper > -1 else 0,
            "lower": max(options.min_lower, 0),
            "digit": max(options.min_digits, 0),
        }

        # Cantidad de símbolos: se reserva su hueco antes de generar la base.
        symbols = [char for char in options.use_symbols if char not in disallow]
        num_symbols = 0
        if options.max_symbols > -1:
            if len(symbols) < options.min_symbols:
                raise ConfigurationError(
                    f"Solo hay {len(symbols)} símbolos permitidos y se exigen "
                    f"{options.min_symbols}"
                )
            upper_bound = target // 2 if options.max_symbols == 0 else options.max_symbols
            num_symbols = self.rng.randint(
                options.min_symbols, max(upper_bound, options.min_symbols)
            )
            room = target - max(sum(minimums.values()), 2)
            num_symbols = min(num_symbols, max(room, options.min_symbols), len(symbols))
        else:
            disallow |= set(BASE64_SYMBOLS)
        seed_length = max(target - num_symbols, 2)

        while True:
            value = random_base64_string(seed_length, source=self.source)
            if LETTER.search(value) and DIGIT.search(value):
                break

        for char in BASE64_SYMBOLS:
            while char in value:
                value = value.replace(char, self.generate_character_set(1, False, disallow), 1)

        self.rng.shuffle(symbols)
        value += "".join(symbols[:num_symbols])

        if options.max_upper > 0 or (options.min_upper > 0 and options.max_upper > -1):
            max_upper = options.max_upper or len(value) // 2
            num_upper = self.rng.randint(options.min_upper, max(max_upper, options.min_upper))
            chars = list(value.lower())
            for index, char in enumerate(chars):
                if not num_upper:
                    break
                upper = char.upper()
                if upper == char or upper in disallow:
                    continue
                chars[index] = upper
                num_upper -= 1
            if num_upper:
                self._top_up(chars, "upper", num_upper, target, minimums, disallow)
            value = "".join(chars)
        elif options.max_upper < 0:
            value = value.lower()

        chars = list(value)
        if options.min_lower > 0:
            have = sum(1 for char in chars if char_class(char) == "lower" and char not in disallow)
            if have < options.min_lower:
                self._top_up(chars, "lower", options.min_lower - have, target, minimums, disallow)

        if options.min_digits > 0:
            have = sum(1 for char in chars if char_class(char) == "digit" and char not in disallow)
            if have < options.min_digits:
                self._top_up(chars, "digit", options.min_digits - have, target, minimums, disallow)

        if options.max_digits > 0 or options.max_digits == -1:
            seen = 0
            for index, char in enumerate(chars):
                if char_class(char) != "digit":
                    continue
                seen += 1
                if seen > options.max_digits:
                    chars[index] = self.generate_character_set(1, False, disallow).lower()

        for index, char in enumerate(chars):
            if char not in disallow:
                continue
            klass = char_class(char)
            if klass == "symbol":
                klass = "lower"
            chars[index] = self._class_factory(klass, disallow)()

        self.rng.shuffle(chars)
        password = "".join(chars)
        logger.debug("Contraseña generada de %d caracteres", len(password))
        return password
