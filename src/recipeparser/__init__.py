"""Extract quantities, units and ingredient names from free-form recipe text."""

from recipeparser.grammar import (
    Ingredient,
    IngredientItem,
    ParseError,
    ParseResult,
    RecipeParser,
    Section,
    Sections,
    SyntaxTree,
    parse,
)
from recipeparser.lexer import (
    HeaderCategory,
    LexError,
    Mode,
    Token,
    Tokenizer,
    TokenType,
    tokenize,
)
from recipeparser.normalize import convert_amount, normalize_amount
from recipeparser.recipe import RecipeResult, build_recipe, to_recipe
from recipeparser.schemas import Amount, IngredientEntry, IngredientsRecipe, UnitKind, UnitType

__all__ = [
    # Tokenizer
    "HeaderCategory",
    "LexError",
    "Mode",
    "Token",
    "TokenType",
    "Tokenizer",
    "tokenize",
    # Grammar
    "Ingredient",
    "IngredientItem",
    "ParseError",
    "ParseResult",
    "RecipeParser",
    "Section",
    "Sections",
    "SyntaxTree",
    "parse",
    # Normalization
    "Amount",
    "UnitKind",
    "UnitType",
    "convert_amount",
    "normalize_amount",
    # Results
    "IngredientEntry",
    "IngredientsRecipe",
    "RecipeResult",
    "build_recipe",
    "to_recipe",
]
