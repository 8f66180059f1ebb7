"""
Quantity and unit conversion for the MOAC native currency.

Quantities are exact rationals (fractions.Fraction). Integral quantities
round-trip losslessly between hex and decimal strings; the sign is kept
apart from the magnitude ("-0x1f").

Unit names map to integer scale factors over the smallest unit, sha:

    sha      1
    ksha     1e3        (femtomc)
    msha     1e6        (picomc)
    gsha     1e9        (nano, nanomc, xiao)
    micro    1e12       (micromc, sand)
    milli    1e15       (millimc)
    mc       1e18
    kmc      1e21       (grand)
    mmc      1e24
    gmc      1e27
    tmc      1e30
    nomc     0
"""

from __future__ import annotations

import re
import struct
from collections.abc import Iterator, Mapping
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from types import MappingProxyType
from typing import Union

from .errors import UnknownUnitError

Quantity = Fraction
QuantityLike = Union[int, float, str, Decimal, Fraction]

DEFAULT_UNIT = "mc"

UNITS: Mapping[str, str] = MappingProxyType({
    "Gsha": "1000000000",
    "Ksha": "1000",
    "Msha": "1000000",
    "femtomc": "1000",
    "gmc": "1000000000000000000000000000",
    "grand": "1000000000000000000000",
    "gsha": "1000000000",
    "kmc": "1000000000000000000000",
    "ksha": "1000",
    "mc": "1000000000000000000",
    "micro": "1000000000000",
    "micromc": "1000000000000",
    "milli": "1000000000000000",
    "millimc": "1000000000000000",
    "mmc": "1000000000000000000000000",
    "msha": "1000000",
    "nano": "1000000000",
    "nanomc": "1000000000",
    "nomc": "0",
    "picomc": "1000000",
    "sand": "1000000000000",
    "sha": "1",
    "tmc": "1000000000000000000000000000000",
    "xiao": "1000000000",
})

_HEX_DIGITS = re.compile(r"^[0-9a-fA-F]+$")
_DECIMAL = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


class Direction(str, Enum):
    TO_SMALLEST = "to_smallest"
    FROM_SMALLEST = "from_smallest"


class UnitTable(Mapping[str, int]):
    """Read-only, case-insensitive map of unit name to scale factor."""

    def __init__(self, units: Mapping[str, Union[str, int]], default_unit: str = DEFAULT_UNIT) -> None:
        self._units = MappingProxyType({name.lower(): int(value) for name, value in units.items()})
        self._default = default_unit.lower()
        if self._default not in self._units:
            raise UnknownUnitError(default_unit, self._units)

    @property
    def default_unit(self) -> str:
        return self._default

    def factor(self, unit: str) -> int:
        """
        Look up the scale factor for a unit name.

        The name is whitespace-trimmed and lowercased; an empty name means
        the primary unit.

        Raises:
            UnknownUnitError: If the unit is not in the table
        """
        name = (unit or "").strip().lower() or self._default
        try:
            return self._units[name]
        except KeyError:
            raise UnknownUnitError(unit, self._units) from None

    def __getitem__(self, unit: str) -> int:
        return self.factor(unit)

    def __iter__(self) -> Iterator[str]:
        return iter(self._units)

    def __len__(self) -> int:
        return len(self._units)


DEFAULT_UNIT_TABLE = UnitTable(UNITS)


def to_quantity(value: QuantityLike) -> Quantity:
    """
    Normalize a number or numeric string into an exact Quantity.

    Strings prefixed with "0x" or "-0x" are read as base-16 magnitudes and
    the sign is applied afterwards. Other strings are decimal ("12",
    "-0.5", "1e18").

    Raises:
        ValueError: If a string is not a valid hex or decimal number
        TypeError: If the value is not a supported numeric type
    """
    if isinstance(value, bool):
        raise TypeError("Booleans are not quantities")
    if isinstance(value, Fraction):
        return value
    if isinstance(value, int):
        return Fraction(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Not a finite quantity: {value}")
        return Fraction(value)
    if isinstance(value, float):
        return Fraction(repr(value))
    if isinstance(value, str):
        text = value.strip()
        negative = text.startswith("-")
        body = text[1:] if negative else text
        if body.startswith(("0x", "0X")):
            digits = body[2:]
            if not digits:
                return Fraction(0)
            if not _HEX_DIGITS.match(digits):
                raise ValueError(f"Invalid hex quantity: {value!r}")
            magnitude = int(digits, 16)
            return Fraction(-magnitude if negative else magnitude)
        if not _DECIMAL.match(text):
            raise ValueError(f"Invalid decimal quantity: {value!r}")
        return Fraction(Decimal(text))
    raise TypeError(f"Cannot convert {type(value).__name__} to a quantity")


def to_hex(value: QuantityLike) -> str:
    """
    Render a quantity as hex.

    Integral values give "0x<magnitude>" or "-0x<magnitude>" without
    leading zeros. Non-integral values give the bit pattern of the nearest
    float64, unprefixed, for compatibility with existing consumers.
    """
    quantity = to_quantity(value)
    if quantity.denominator == 1:
        number = quantity.numerator
        if number < 0:
            return f"-0x{-number:x}"
        return f"0x{number:x}"
    bits = struct.unpack(">Q", struct.pack(">d", float(quantity)))[0]
    return f"{bits:x}"


def to_decimal(value: QuantityLike) -> str:
    """Render a quantity as a base-10 string ("n/d" when not integral)."""
    quantity = to_quantity(value)
    if quantity.denominator == 1:
        return str(quantity.numerator)
    return f"{quantity.numerator}/{quantity.denominator}"


def format_quantity(value: QuantityLike) -> str:
    """Render a quantity in plain decimal notation when it terminates."""
    quantity = to_quantity(value)
    if quantity.denominator == 1:
        return str(quantity.numerator)

    rest = quantity.denominator
    twos = fives = 0
    while rest % 2 == 0:
        rest //= 2
        twos += 1
    while rest % 5 == 0:
        rest //= 5
        fives += 1
    if rest != 1:
        return to_decimal(quantity)

    places = max(twos, fives)
    scaled = abs(quantity.numerator) * 10 ** places // quantity.denominator
    digits = str(scaled).rjust(places + 1, "0")
    sign = "-" if quantity < 0 else ""
    return f"{sign}{digits[:-places]}.{digits[-places:]}"


class UnitConverter:
    """Unit conversion bound to one UnitTable."""

    def __init__(self, table: UnitTable = DEFAULT_UNIT_TABLE) -> None:
        self.table = table

    def convert(self, value: QuantityLike, unit: str, direction: Direction) -> Quantity:
        """
        Scale a quantity by a unit's factor.

        Args:
            value: Quantity to convert
            unit: Unit name (case-insensitive, empty means the primary unit)
            direction: TO_SMALLEST multiplies, FROM_SMALLEST divides

        Returns:
            Exact converted Quantity

        Raises:
            UnknownUnitError: If the unit name is not known
            ValueError: If dividing by a zero-scale unit
        """
        quantity = to_quantity(value)
        factor = self.table.factor(unit)
        if Direction(direction) is Direction.TO_SMALLEST:
            return quantity * factor
        if factor == 0:
            raise ValueError(f"Cannot convert from zero-scale unit {unit!r}")
        return quantity / factor

    def to_sha(self, value: QuantityLike, unit: str = DEFAULT_UNIT) -> str:
        return format_quantity(self.convert(value, unit, Direction.TO_SMALLEST))

    def from_sha(self, value: QuantityLike, unit: str = DEFAULT_UNIT) -> str:
        return format_quantity(self.convert(value, unit, Direction.FROM_SMALLEST))


_default_converter = UnitConverter()


def convert(value: QuantityLike, unit: str, direction: Direction) -> Quantity:
    return _default_converter.convert(value, unit, direction)


def to_sha(value: QuantityLike, unit: str = DEFAULT_UNIT) -> str:
    """Convert an amount of ``unit`` into sha, as a decimal string."""
    return _default_converter.to_sha(value, unit)


def from_sha(value: QuantityLike, unit: str = DEFAULT_UNIT) -> str:
    """Convert an amount of sha into ``unit``, as a decimal string."""
    return _default_converter.from_sha(value, unit)
