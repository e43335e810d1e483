"""Result schemas handed to consumers of the parser."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class UnitKind(str, Enum):
    """Physical dimension of a unit."""

    VOLUME = "volume"
    WEIGHT = "weight"
    COUNT = "count"


class UnitType(str, Enum):
    """Closed set of measurement units an amount can resolve to."""

    # Volume
    CUP = "CUP"
    TEASPOON = "TEASPOON"
    TABLESPOON = "TABLESPOON"
    FLUID_OUNCE = "FLUID_OUNCE"
    PINT = "PINT"
    QUART = "QUART"
    GALLON = "GALLON"
    MILLILITER = "MILLILITER"
    CENTILITER = "CENTILITER"
    DECILITER = "DECILITER"
    LITER = "LITER"
    # Weight
    MILLIGRAM = "MILLIGRAM"
    GRAM = "GRAM"
    KILOGRAM = "KILOGRAM"
    OUNCE = "OUNCE"
    POUND = "POUND"
    # Count
    PINCH = "PINCH"
    DASH = "DASH"
    CLOVE = "CLOVE"
    SLICE = "SLICE"
    CAN = "CAN"
    STICK = "STICK"
    PACKAGE = "PACKAGE"
    PIECE = "PIECE"


class Amount(BaseModel):
    """Canonical quantity and unit of one ingredient line."""

    model_config = ConfigDict(frozen=True)

    quantity: float
    unit: UnitType = UnitType.PIECE


class IngredientEntry(BaseModel):
    """One ingredient line of a recipe."""

    model_config = ConfigDict(frozen=True)

    amount: Amount
    ingredient: str = Field(min_length=1)
    section: str | None = Field(
        default=None,
        exclude=True,
        description="Name of the enclosing subsection, e.g. 'dough'",
    )


class IngredientsRecipe(BaseModel):
    """The ingredients of a recipe, in document order."""

    model_config = ConfigDict(frozen=True)

    type: Literal["ingredients"] = "ingredients"
    ingredients: list[IngredientEntry] = Field(default_factory=list)

    def by_section(self) -> dict[str | None, list[IngredientEntry]]:
        """Group ingredients by subsection name; None holds ungrouped items."""
        grouped: dict[str | None, list[IngredientEntry]] = {}
        for entry in self.ingredients:
            grouped.setdefault(entry.section, []).append(entry)
        return grouped
