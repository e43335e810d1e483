"""Normalize captured amounts into canonical quantities and units."""

from recipeparser.normalize.units import (
    UNICODE_FRACTIONS,
    UNIT_ALIASES,
    AmountPayload,
    can_convert,
    convert_amount,
    lookup_unit,
    normalize_amount,
    parse_quantity,
    resolve_unit,
    unit_kind,
)

__all__ = [
    "UNICODE_FRACTIONS",
    "UNIT_ALIASES",
    "AmountPayload",
    "can_convert",
    "convert_amount",
    "lookup_unit",
    "normalize_amount",
    "parse_quantity",
    "resolve_unit",
    "unit_kind",
]
