"""Turn a parsed syntax tree into the ingredients result."""

from dataclasses import dataclass

from recipeparser.grammar.nodes import Sections
from recipeparser.grammar.parser import ParseError, parse
from recipeparser.lexer.tokens import LexError
from recipeparser.logging_config import get_logger
from recipeparser.normalize.units import AmountPayload, normalize_amount
from recipeparser.schemas import IngredientEntry, IngredientsRecipe

logger = get_logger(__name__)


@dataclass(frozen=True)
class RecipeResult:
    recipe: IngredientsRecipe
    errors: tuple[LexError, ...]
    parse_errors: tuple[ParseError, ...]


def build_recipe(tree: Sections) -> IngredientsRecipe:
    """
    Walk the ingredient items of a tree in document order.

    Each amount token's payload goes through the normalizer and the
    ingredient words are joined with single spaces.
    """
    entries = []
    for section, item in tree.ingredient_items():
        payload = item.amount.payload
        if not isinstance(payload, AmountPayload):
            payload = AmountPayload()
        entries.append(
            IngredientEntry(
                amount=normalize_amount(payload),
                ingredient=item.ingredient.text,
                section=section.name if section is not None else None,
            )
        )
    return IngredientsRecipe(ingredients=entries)


def to_recipe(text: str) -> RecipeResult:
    """Parse recipe text into its ingredients and the errors met on the way."""
    result = parse(text)
    recipe = build_recipe(result.tree)
    logger.debug(f"Extracted {len(recipe.ingredients)} ingredients")
    return RecipeResult(recipe=recipe, errors=result.errors, parse_errors=result.parse_errors)
