"""Byte unit constructors and size-string parsing.

Decimal units (KB, MB, GB, TB) are powers of 1000; binary units
(KiB, MiB, GiB, TiB) are powers of 1024. The single-letter suffixes
k/m/g/t follow the JVM flag convention and are binary.
"""

import re

from bundler.model.types import BundleConfigError, Bytes

_SIZE_RE = re.compile(r"^\s*(\d+)\s*([A-Za-z]*)\s*$")

# Suffix -> multiplier. Lookup is case-sensitive first, then by lowercase
# for the single-letter forms.
_UNITS: dict[str, int] = {
    "": 1,
    "B": 1,
    "KB": 1000,
    "MB": 1000 ** 2,
    "GB": 1000 ** 3,
    "TB": 1000 ** 4,
    "KiB": 1 << 10,
    "MiB": 1 << 20,
    "GiB": 1 << 30,
    "TiB": 1 << 40,
}

_SHORT_UNITS: dict[str, int] = {
    "k": 1 << 10,
    "m": 1 << 20,
    "g": 1 << 30,
    "t": 1 << 40,
}


def kilobytes(value: int) -> Bytes:
    return Bytes(value * 1000)


def megabytes(value: int) -> Bytes:
    return Bytes(value * 1000 ** 2)


def gigabytes(value: int) -> Bytes:
    return Bytes(value * 1000 ** 3)


def terabytes(value: int) -> Bytes:
    return Bytes(value * 1000 ** 4)


def kibibytes(value: int) -> Bytes:
    return Bytes(value << 10)


def mebibytes(value: int) -> Bytes:
    return Bytes(value << 20)


def gibibytes(value: int) -> Bytes:
    return Bytes(value << 30)


def tebibytes(value: int) -> Bytes:
    return Bytes(value << 40)


def parse_bytes(value: int | str) -> Bytes:
    """Parse a size such as ``512m``, ``2 GiB``, ``64MB`` or ``1048576``.

    Raises:
        BundleConfigError: If the value is negative or the unit is unknown.
    """
    if isinstance(value, bool):
        raise BundleConfigError(f"Invalid size: {value!r}")

    if isinstance(value, int):
        if value < 0:
            raise BundleConfigError(f"Size must not be negative (got {value})")
        return Bytes(value)

    match = _SIZE_RE.match(value)
    if not match:
        raise BundleConfigError(f"Invalid size: {value!r}")

    amount, unit = int(match.group(1)), match.group(2)
    if unit in _UNITS:
        return Bytes(amount * _UNITS[unit])
    if unit.lower() in _SHORT_UNITS:
        return Bytes(amount * _SHORT_UNITS[unit.lower()])

    raise BundleConfigError(f"Unknown size unit '{unit}' in {value!r}")
