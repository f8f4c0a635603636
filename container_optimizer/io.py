from __future__ import annotations

import io
import math
from typing import Mapping

import pandas as pd

from container_optimizer.models import BoxSpec
from container_optimizer.units import LENGTH_UNITS, WEIGHT_UNITS

REQUIRED_COLUMNS = [
    "length",
    "width",
    "height",
    "weight",
]

OPTIONAL_COLUMNS = {
    "unit": "cm",
    "weight_unit": "kg",
    "quantity": 1,
}

MAX_QTY = 100000

COLUMN_ALIASES = {
    "l": "length",
    "length": "length",
    "panjang": "length",
    "w": "width",
    "width": "width",
    "lebar": "width",
    "h": "height",
    "height": "height",
    "tinggi": "height",
    "gross": "weight",
    "weight": "weight",
    "berat": "weight",
    "unit": "unit",
    "dimensionunit": "unit",
    "weightunit": "weight_unit",
    "qty": "quantity",
    "quantity": "quantity",
    "jumlah": "quantity",
}


class BoxInputError(ValueError):
    pass


def _normalize_column_name(name: str) -> str:
    return "".join(ch for ch in str(name).strip() if ch.isalnum()).lower()


def _apply_column_aliases(df: pd.DataFrame) -> pd.DataFrame:
    rename_map: dict[str, str] = {}
    for col in df.columns:
        target = COLUMN_ALIASES.get(_normalize_column_name(col))
        if target:
            rename_map[col] = target
    if rename_map:
        df = df.rename(columns=rename_map)
    return df


def _is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and pd.isna(value):
        return True
    return isinstance(value, str) and not value.strip()


def _parse_quantity(value) -> int | None:
    try:
        number = float(value)
        qty = int(number)
    except (TypeError, ValueError, OverflowError):
        return None
    if number != qty:
        return None
    return qty


def validate_box_fields(raw: Mapping) -> dict[str, str]:
    """Check form values before they reach the optimizer.

    Returns a mapping of field name to message; an empty mapping means the
    values can be turned into a ``BoxSpec``.
    """
    errors: dict[str, str] = {}
    for name in REQUIRED_COLUMNS:
        value = raw.get(name)
        if _is_blank(value):
            errors[name] = f"{name} is required"
            continue
        try:
            number = float(value)
        except (TypeError, ValueError):
            errors[name] = f"{name} value '{value}' is not a number"
            continue
        if not math.isfinite(number):
            errors[name] = f"{name} value '{value}' is not a finite number"
        elif not number > 0:
            errors[name] = f"{name} must be greater than 0"
    unit = raw.get("unit", OPTIONAL_COLUMNS["unit"])
    if unit not in LENGTH_UNITS:
        errors["unit"] = f"unit must be one of {', '.join(LENGTH_UNITS)}"
    weight_unit = raw.get("weight_unit", OPTIONAL_COLUMNS["weight_unit"])
    if weight_unit not in WEIGHT_UNITS:
        errors["weight_unit"] = f"weight_unit must be one of {', '.join(WEIGHT_UNITS)}"
    quantity = raw.get("quantity")
    if not _is_blank(quantity):
        qty = _parse_quantity(quantity)
        if qty is None:
            errors["quantity"] = f"quantity value '{quantity}' is not an integer"
        else:
            if qty < 1:
                errors["quantity"] = "quantity must be at least 1"
            elif qty > MAX_QTY:
                errors["quantity"] = f"quantity exceeds the limit ({MAX_QTY})"
    return errors


def parse_box_spec(raw: Mapping) -> BoxSpec:
    errors = validate_box_fields(raw)
    if errors:
        raise BoxInputError(next(iter(errors.values())))
    quantity = raw.get("quantity")
    return BoxSpec(
        length=float(raw["length"]),
        width=float(raw["width"]),
        height=float(raw["height"]),
        weight=float(raw["weight"]),
        unit=raw.get("unit", OPTIONAL_COLUMNS["unit"]),
        weight_unit=raw.get("weight_unit", OPTIONAL_COLUMNS["weight_unit"]),
        quantity=1 if _is_blank(quantity) else _parse_quantity(quantity),
    )


def load_box_csv(content: str) -> pd.DataFrame:
    data = pd.read_csv(io.StringIO(content))
    return _apply_column_aliases(data)


def ensure_columns(df: pd.DataFrame) -> pd.DataFrame:
    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise BoxInputError(f"missing required columns: {', '.join(missing)}")
    for col, default in OPTIONAL_COLUMNS.items():
        if col not in df.columns:
            df[col] = default
    return df


def normalize_box_rows(df: pd.DataFrame) -> list[BoxSpec]:
    df = ensure_columns(df.copy())
    boxes: list[BoxSpec] = []
    for idx, row in df.iterrows():
        row_no = idx + 1
        values = {key: row.get(key) for key in REQUIRED_COLUMNS + list(OPTIONAL_COLUMNS)}
        for key, default in OPTIONAL_COLUMNS.items():
            if _is_blank(values[key]):
                values[key] = default
            elif key != "quantity":
                values[key] = str(values[key]).strip()
        try:
            boxes.append(parse_box_spec(values))
        except BoxInputError as exc:
            raise BoxInputError(f"{exc} (row {row_no})") from exc
    return boxes
