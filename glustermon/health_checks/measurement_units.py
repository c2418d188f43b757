# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""Conversion between display units and the canonical capacity unit (KiB).

All capacity arithmetic is done on integer KiB. Only values rendered for
humans or perfdata are converted back into a display unit.
"""

import math
from typing import get_args, Literal, Optional

UNIT = Literal["%", "B", "K", "M", "G", "T", "P"]
UNITS = get_args(UNIT)

# powers of 1024 relative to KiB
_KIB_POWERS = {
    "K": 0,
    "M": 1,
    "G": 2,
    "T": 3,
    "P": 4,
}


class ThresholdError(ValueError):
    """A threshold is malformed or inconsistent with the other threshold."""


def normalize_unit(unit: str) -> str:
    """Upper-case `unit` and check that it is a known unit.

    >>> normalize_unit("g")
    'G'
    """
    normalized = unit.strip().upper()
    if normalized not in UNITS:
        raise ValueError(f"Unit {unit!r} is not one of {', '.join(UNITS)}.")
    return normalized


def canonical_multiplier(unit: str) -> int:
    """Number of KiB in one `unit`. Only absolute units of at least a KiB.

    >>> canonical_multiplier("G")
    1048576
    """
    try:
        return 1024 ** _KIB_POWERS[unit.upper()]
    except KeyError:
        raise ValueError(f"No KiB multiplier for unit {unit!r}.") from None


def to_canonical(unit: str, value: float, reference_total: int) -> int:
    """Convert `value` expressed in `unit` to KiB, truncating toward zero.

    `reference_total` (KiB) is only used for percentages. A percentage of an
    unknown (zero) total is 0.

    >>> to_canonical("%", 50, 1000)
    500
    >>> to_canonical("M", 10, 0)
    10240
    >>> to_canonical("b", 4096, 0)
    4
    """
    unit = normalize_unit(unit)
    if unit == "%":
        if reference_total == 0:
            return 0
        return int(value * reference_total / 100)
    if unit == "B":
        return int(value / 1024)
    return int(value * canonical_multiplier(unit))


def from_canonical(unit: str, value: int, reference_total: int) -> str:
    """Render a KiB `value` in `unit`.

    >>> from_canonical("%", 40, 1000)
    '4.0'
    >>> from_canonical("G", 1572864, 0)
    '1.500'
    >>> from_canonical("B", 2, 0)
    '2048'
    """
    unit = normalize_unit(unit)
    if unit == "%":
        if reference_total == 0:
            return "0.0"
        return f"{value * 100 / reference_total:.1f}"
    if unit == "B":
        return str(value * 1024)
    if unit == "K":
        return str(value)
    return f"{value / canonical_multiplier(unit):.3f}"


def is_percentage(raw: str) -> bool:
    return raw.strip().endswith("%")


def parse_threshold(raw: str, display_unit: str, reference_total: int) -> int:
    """Convert a threshold given on the command line to KiB.

    A trailing `%` makes the threshold relative to `reference_total`, anything
    else is read in `display_unit`.

    >>> parse_threshold("10%", "G", 1000)
    100
    >>> parse_threshold("2", "M", 0)
    2048
    """
    unit = "%" if is_percentage(raw) else display_unit
    return to_canonical(unit, threshold_number(raw), reference_total)


def threshold_number(raw: str) -> float:
    """The number of a threshold, without its `%` suffix.

    >>> threshold_number(" 12.5% ")
    12.5
    """
    raw = raw.strip()
    number = raw[:-1] if is_percentage(raw) else raw
    try:
        value = float(number)
    except ValueError:
        raise ThresholdError(f"Threshold {raw!r} is not a number.") from None
    if not math.isfinite(value) or value < 0:
        raise ThresholdError(f"Threshold {raw!r} must be a non-negative number.")
    return value


def check_threshold_pair(warning: Optional[str], critical: Optional[str]) -> None:
    """Raise `ThresholdError` unless both thresholds or neither are given."""
    if (warning is None) != (critical is None):
        raise ThresholdError(
            "The warning and critical thresholds must be given together."
        )
