"""Length conversions for figure sizing.

Everything is normalised through inches: ``px = in * dpi`` and ``in = px / dpi``.
"""
from __future__ import annotations

from typing import Optional

MM_PER_INCH = 25.4
CM_PER_INCH = 2.54

_ALIASES = {
    "in": "in",
    "inch": "in",
    "inches": "in",
    "cm": "cm",
    "centimeter": "cm",
    "centimeters": "cm",
    "mm": "mm",
    "millimeter": "mm",
    "millimeters": "mm",
    "px": "px",
    "pixel": "px",
    "pixels": "px",
}

LENGTH_UNITS = ("in", "cm", "mm")
UNITS = LENGTH_UNITS + ("px",)


def normalise_units(units: str) -> str:
    key = str(units).strip().lower()
    if key not in _ALIASES:
        raise ValueError(f"Unknown unit '{units}'; expected one of {list(UNITS)}")
    return _ALIASES[key]


def _check_dpi(dpi: float) -> float:
    dpi = float(dpi)
    if dpi <= 0:
        raise ValueError(f"dpi must be positive, got {dpi}")
    return dpi


def to_inches(value: Optional[float], units: str = "in", dpi: float = 300) -> Optional[float]:
    """Convert `value` given in `units` to inches. ``None`` passes through."""
    if value is None:
        return None
    u = normalise_units(units)
    value = float(value)
    if u == "in":
        return value
    if u == "cm":
        return value / CM_PER_INCH
    if u == "mm":
        return value / MM_PER_INCH
    return value / _check_dpi(dpi)


def to_pixels(value: Optional[float], units: str = "in", dpi: float = 300) -> Optional[int]:
    """Convert `value` given in `units` to a whole number of pixels."""
    if value is None:
        return None
    if normalise_units(units) == "px":
        return int(round(float(value)))
    return int(round(to_inches(value, units, dpi) * _check_dpi(dpi)))
