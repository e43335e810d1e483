"""Unit vocabulary, quantity resolution and unit conversion utilities."""

from dataclasses import dataclass

from recipeparser.logging_config import get_logger
from recipeparser.schemas import Amount, UnitKind, UnitType

logger = get_logger(__name__)


# =============================================================================
# Unit Tables
# =============================================================================

# Surface forms (lower case, no trailing period) -> unit
UNIT_ALIASES: dict[str, UnitType] = {
    # US customary volume
    "cup": UnitType.CUP,
    "cups": UnitType.CUP,
    "c": UnitType.CUP,
    "cp": UnitType.CUP,
    "teaspoon": UnitType.TEASPOON,
    "teaspoons": UnitType.TEASPOON,
    "tsp": UnitType.TEASPOON,
    "tsps": UnitType.TEASPOON,
    "tablespoon": UnitType.TABLESPOON,
    "tablespoons": UnitType.TABLESPOON,
    "tbsp": UnitType.TABLESPOON,
    "tbsps": UnitType.TABLESPOON,
    "tbs": UnitType.TABLESPOON,
    "tbl": UnitType.TABLESPOON,
    "fl oz": UnitType.FLUID_OUNCE,
    "fluid ounce": UnitType.FLUID_OUNCE,
    "fluid ounces": UnitType.FLUID_OUNCE,
    "pint": UnitType.PINT,
    "pints": UnitType.PINT,
    "pt": UnitType.PINT,
    "quart": UnitType.QUART,
    "quarts": UnitType.QUART,
    "qt": UnitType.QUART,
    "gallon": UnitType.GALLON,
    "gallons": UnitType.GALLON,
    "gal": UnitType.GALLON,
    # Metric volume
    "ml": UnitType.MILLILITER,
    "milliliter": UnitType.MILLILITER,
    "milliliters": UnitType.MILLILITER,
    "millilitre": UnitType.MILLILITER,
    "millilitres": UnitType.MILLILITER,
    "cl": UnitType.CENTILITER,
    "centiliter": UnitType.CENTILITER,
    "centiliters": UnitType.CENTILITER,
    "dl": UnitType.DECILITER,
    "deciliter": UnitType.DECILITER,
    "deciliters": UnitType.DECILITER,
    "l": UnitType.LITER,
    "liter": UnitType.LITER,
    "liters": UnitType.LITER,
    "litre": UnitType.LITER,
    "litres": UnitType.LITER,
    # Weight
    "mg": UnitType.MILLIGRAM,
    "milligram": UnitType.MILLIGRAM,
    "milligrams": UnitType.MILLIGRAM,
    "g": UnitType.GRAM,
    "gr": UnitType.GRAM,
    "gram": UnitType.GRAM,
    "grams": UnitType.GRAM,
    "kg": UnitType.KILOGRAM,
    "kilogram": UnitType.KILOGRAM,
    "kilograms": UnitType.KILOGRAM,
    "oz": UnitType.OUNCE,
    "ounce": UnitType.OUNCE,
    "ounces": UnitType.OUNCE,
    "lb": UnitType.POUND,
    "lbs": UnitType.POUND,
    "pound": UnitType.POUND,
    "pounds": UnitType.POUND,
    # Count-like
    "pinch": UnitType.PINCH,
    "pinches": UnitType.PINCH,
    "dash": UnitType.DASH,
    "dashes": UnitType.DASH,
    "clove": UnitType.CLOVE,
    "cloves": UnitType.CLOVE,
    "slice": UnitType.SLICE,
    "slices": UnitType.SLICE,
    "can": UnitType.CAN,
    "cans": UnitType.CAN,
    "stick": UnitType.STICK,
    "sticks": UnitType.STICK,
    "package": UnitType.PACKAGE,
    "packages": UnitType.PACKAGE,
    "pkg": UnitType.PACKAGE,
    "piece": UnitType.PIECE,
    "pieces": UnitType.PIECE,
    "pc": UnitType.PIECE,
    "pcs": UnitType.PIECE,
}

# Longest alias measured in words; the tokenizer tries this many words first
MAX_ALIAS_WORDS = max(len(alias.split()) for alias in UNIT_ALIASES)

# Unit -> (kind, factor to the kind's base unit: ml, g or count)
UNIT_FACTORS: dict[UnitType, tuple[UnitKind, float]] = {
    UnitType.CUP: (UnitKind.VOLUME, 236.588),
    UnitType.TEASPOON: (UnitKind.VOLUME, 4.929),
    UnitType.TABLESPOON: (UnitKind.VOLUME, 14.787),
    UnitType.FLUID_OUNCE: (UnitKind.VOLUME, 29.574),
    UnitType.PINT: (UnitKind.VOLUME, 473.176),
    UnitType.QUART: (UnitKind.VOLUME, 946.353),
    UnitType.GALLON: (UnitKind.VOLUME, 3785.41),
    UnitType.MILLILITER: (UnitKind.VOLUME, 1.0),
    UnitType.CENTILITER: (UnitKind.VOLUME, 10.0),
    UnitType.DECILITER: (UnitKind.VOLUME, 100.0),
    UnitType.LITER: (UnitKind.VOLUME, 1000.0),
    UnitType.MILLIGRAM: (UnitKind.WEIGHT, 0.001),
    UnitType.GRAM: (UnitKind.WEIGHT, 1.0),
    UnitType.KILOGRAM: (UnitKind.WEIGHT, 1000.0),
    UnitType.OUNCE: (UnitKind.WEIGHT, 28.3495),
    UnitType.POUND: (UnitKind.WEIGHT, 453.592),
    UnitType.PINCH: (UnitKind.COUNT, 1.0),
    UnitType.DASH: (UnitKind.COUNT, 1.0),
    UnitType.CLOVE: (UnitKind.COUNT, 1.0),
    UnitType.SLICE: (UnitKind.COUNT, 1.0),
    UnitType.CAN: (UnitKind.COUNT, 1.0),
    UnitType.STICK: (UnitKind.COUNT, 1.0),
    UnitType.PACKAGE: (UnitKind.COUNT, 1.0),
    UnitType.PIECE: (UnitKind.COUNT, 1.0),
}

# Unicode vulgar fraction glyphs -> value
UNICODE_FRACTIONS: dict[str, float] = {
    "½": 1 / 2,
    "⅓": 1 / 3,
    "⅔": 2 / 3,
    "¼": 1 / 4,
    "¾": 3 / 4,
    "⅕": 1 / 5,
    "⅖": 2 / 5,
    "⅗": 3 / 5,
    "⅘": 4 / 5,
    "⅙": 1 / 6,
    "⅚": 5 / 6,
    "⅐": 1 / 7,
    "⅛": 1 / 8,
    "⅜": 3 / 8,
    "⅝": 5 / 8,
    "⅞": 7 / 8,
    "⅑": 1 / 9,
    "⅒": 1 / 10,
}

DEFAULT_UNIT = UnitType.PIECE


@dataclass(frozen=True)
class AmountPayload:
    """Numeric and unit pieces of an amount, as captured from the text."""

    whole: str | None = None  # integer or decimal literal
    numerator: str | None = None
    denominator: str | None = None
    glyph: str | None = None  # unicode vulgar fraction
    unit: str | None = None  # raw unit word


def _check_unit_tables() -> None:
    """Fail at import time if a unit has no conversion entry."""
    missing = [unit for unit in UnitType if unit not in UNIT_FACTORS]
    if missing:
        raise RuntimeError(f"Units without conversion factors: {missing}")


_check_unit_tables()


# =============================================================================
# Resolution
# =============================================================================


def _alias_key(word: str) -> str:
    return " ".join(word.lower().strip().rstrip(".").split())


def lookup_unit(word: str) -> UnitType | None:
    """
    Look up a unit word in the alias table.

    Matching is case-insensitive, ignores a trailing period and collapses
    inner whitespace. Only exact alias hits resolve; prefixes never do.
    """
    if not word:
        return None
    return UNIT_ALIASES.get(_alias_key(word))


def resolve_unit(word: str | None) -> UnitType:
    """Resolve a unit word, falling back to PIECE for a miss or no word."""
    if word is None:
        return DEFAULT_UNIT
    return lookup_unit(word) or DEFAULT_UNIT


def parse_quantity(payload: AmountPayload) -> float:
    """
    Resolve the numeric pieces of an amount payload into a float.

    Handles:
    - "2" (integer)
    - "1.5" (decimal)
    - "1/2" (fraction)
    - "½" (unicode glyph)
    - "1 1/2", "1 ½" (mixed numbers, summed)
    """
    quantity = 0.0
    if payload.whole is not None:
        quantity += float(payload.whole)
    if payload.numerator is not None and payload.denominator is not None:
        # float division so very long digit runs give inf instead of raising
        denominator = float(payload.denominator)
        if denominator:
            quantity += float(payload.numerator) / denominator
    if payload.glyph is not None:
        quantity += UNICODE_FRACTIONS.get(payload.glyph, 0.0)
    return quantity


def normalize_amount(value: AmountPayload | Amount) -> Amount:
    """
    Normalize an amount payload into a canonical Amount.

    Passing an Amount returns it unchanged, so normalizing twice is the same
    as normalizing once.
    """
    if isinstance(value, Amount):
        return value
    return Amount(quantity=parse_quantity(value), unit=resolve_unit(value.unit))


# =============================================================================
# Conversion
# =============================================================================


def unit_kind(unit: UnitType) -> UnitKind:
    """Get the kind (volume, weight, count) of a unit."""
    return UNIT_FACTORS[unit][0]


def can_convert(unit1: UnitType, unit2: UnitType) -> bool:
    """
    Check if two units can be converted into each other.

    Volume and weight units convert within their kind. Count units are only
    interchangeable with themselves.
    """
    if unit1 == unit2:
        return True
    kind1, kind2 = unit_kind(unit1), unit_kind(unit2)
    return kind1 == kind2 and kind1 != UnitKind.COUNT


def convert_amount(amount: Amount, unit: UnitType | str) -> Amount:
    """
    Convert an amount to another unit of the same kind.

    Raises:
        ValueError: If the units cannot be converted into each other.
    """
    target = unit if isinstance(unit, UnitType) else UnitType(unit)
    if not can_convert(amount.unit, target):
        raise ValueError(f"Cannot convert {amount.unit.value} to {target.value}")
    if amount.unit == target:
        return amount

    _, source_factor = UNIT_FACTORS[amount.unit]
    _, target_factor = UNIT_FACTORS[target]
    converted = amount.quantity * source_factor / target_factor
    logger.debug(f"Converted {amount.quantity} {amount.unit.value} to {converted} {target.value}")
    return Amount(quantity=converted, unit=target)
