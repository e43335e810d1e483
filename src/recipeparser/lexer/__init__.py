"""Tokenizer turning recipe text into a typed token stream."""

from recipeparser.lexer.tokenizer import Tokenizer, lex_error_message, tokenize
from recipeparser.lexer.tokens import (
    HeaderCategory,
    HeaderPayload,
    LexError,
    Mode,
    Token,
    TokenType,
)

__all__ = [
    "HeaderCategory",
    "HeaderPayload",
    "LexError",
    "Mode",
    "Token",
    "TokenType",
    "Tokenizer",
    "lex_error_message",
    "tokenize",
]
