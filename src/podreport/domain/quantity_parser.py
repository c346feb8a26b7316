"""Shared parsers for Kubernetes resource quantity strings."""

import math
import re
from decimal import Decimal, InvalidOperation

_QUANTITY_RE = re.compile(
    r"^(?P<number>[+-]?(?:\d+\.?\d*|\.\d+))"
    r"(?P<suffix>[eE][+-]?\d+|[KMGTPE]i|[numkMGTPE])?$"
)

_BINARY_SUFFIXES: dict[str, int] = {
    "Ki": 1024,
    "Mi": 1024**2,
    "Gi": 1024**3,
    "Ti": 1024**4,
    "Pi": 1024**5,
    "Ei": 1024**6,
}

_DECIMAL_SUFFIXES: dict[str, Decimal] = {
    "n": Decimal("1e-9"),
    "u": Decimal("1e-6"),
    "m": Decimal("1e-3"),
    "": Decimal(1),
    "k": Decimal("1e3"),
    "M": Decimal("1e6"),
    "G": Decimal("1e9"),
    "T": Decimal("1e12"),
    "P": Decimal("1e15"),
    "E": Decimal("1e18"),
}

_EMPTY_VALUES = {"", "0", "<none>"}


def is_unset(raw: object) -> bool:
    """Return whether a raw quantity is missing or textually zero."""
    return raw is None or str(raw).strip() in _EMPTY_VALUES


def parse_quantity(raw: object) -> Decimal:
    """Parse a Kubernetes quantity (``250m``, ``1.5Gi``, ``1e3``) into a Decimal."""
    if is_unset(raw):
        return Decimal(0)

    value = str(raw).strip()
    match = _QUANTITY_RE.match(value)
    if match is None:
        raise ValueError(f"invalid resource quantity: {value!r}")

    try:
        number = Decimal(match.group("number"))
    except InvalidOperation as exc:
        raise ValueError(f"invalid resource quantity: {value!r}") from exc

    suffix = match.group("suffix") or ""
    if suffix in _BINARY_SUFFIXES:
        return number * _BINARY_SUFFIXES[suffix]
    if suffix in _DECIMAL_SUFFIXES:
        return number * _DECIMAL_SUFFIXES[suffix]
    return number.scaleb(int(suffix[1:]))


def parse_cpu(cpu_str: object) -> int:
    """Parse CPU quantity and return millicores, rounding fractions up."""
    return math.ceil(parse_quantity(cpu_str) * 1000)


def parse_memory(memory_str: object) -> int:
    """Parse memory quantity and return bytes, rounding fractions up."""
    return math.ceil(parse_quantity(memory_str))
