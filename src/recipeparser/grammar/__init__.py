"""Grammar engine assembling tokens into a syntax tree."""

from recipeparser.grammar.nodes import Ingredient, IngredientItem, Section, Sections, SyntaxTree
from recipeparser.grammar.parser import ParseError, ParseResult, RecipeParser, parse

__all__ = [
    "Ingredient",
    "IngredientItem",
    "ParseError",
    "ParseResult",
    "RecipeParser",
    "Section",
    "Sections",
    "SyntaxTree",
    "parse",
]
