from __future__ import annotations

LENGTH_UNITS = ("cm", "mm", "inches")
WEIGHT_UNITS = ("kg", "lbs", "tons")

# metres per unit; unknown units fall through to metres
_LENGTH_FACTORS = {
    "cm": 0.01,
    "mm": 0.001,
    "inches": 0.0254,
    "m": 1.0,
}

# kilograms per unit; "tons" is the metric ton
_WEIGHT_FACTORS = {
    "lbs": 0.453592,
    "tons": 1000.0,
    "kg": 1.0,
}


def to_meters(value: float, unit: str) -> float:
    if unit == "cm":
        return value / 100
    if unit == "mm":
        return value / 1000
    if unit == "inches":
        return value * 0.0254
    return value


def to_kilograms(value: float, unit: str) -> float:
    if unit == "lbs":
        return value * 0.453592
    if unit == "tons":
        return value * 1000
    return value


def to_cbm(length: float, width: float, height: float, unit: str) -> float:
    return to_meters(length, unit) * to_meters(width, unit) * to_meters(height, unit)


def convert_length(value: float, from_unit: str, to_unit: str) -> float:
    meters = to_meters(value, from_unit)
    return meters / _LENGTH_FACTORS.get(to_unit, 1.0)


def convert_weight(value: float, from_unit: str, to_unit: str) -> float:
    kilograms = to_kilograms(value, from_unit)
    return kilograms / _WEIGHT_FACTORS.get(to_unit, 1.0)


def density_kg_per_cbm(weight_kg: float, cbm: float) -> float:
    if cbm <= 0:
        return 0.0
    return weight_kg / cbm
