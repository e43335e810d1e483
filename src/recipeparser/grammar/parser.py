"""Recursive-descent grammar engine building the recipe syntax tree.

Grammar (one token of lookahead everywhere):

    sections        := ( INGREDIENTS-header ingredients
                       | STEPS-header <opaque step text>
                       | ingredients )+
    ingredients     := ( section | ingredient_item )+
    section         := SECTION-header ingredient_item+
    ingredient_item := ListItemId? Amount ingredient
    ingredient      := Word+

Structural errors are collected, never raised. Recovery skips the offending
token and retries the enclosing repetition; a repetition stops as soon as an
iteration consumes nothing.
"""

import threading
from dataclasses import dataclass

from recipeparser.grammar.nodes import Ingredient, IngredientItem, Section, Sections
from recipeparser.lexer.tokenizer import Tokenizer
from recipeparser.lexer.tokens import HeaderCategory, HeaderPayload, LexError, Token, TokenType
from recipeparser.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ParseError:
    """A grammar rule could not match at a position."""

    offset: int
    line: int
    column: int
    length: int
    message: str
    rule: str


@dataclass(frozen=True)
class ParseResult:
    tree: Sections
    tokens: tuple[Token, ...]
    errors: tuple[LexError, ...]
    parse_errors: tuple[ParseError, ...]

    @property
    def ok(self) -> bool:
        """True when neither lexical nor structural errors were recorded."""
        return not self.errors and not self.parse_errors


def _header_category(token: Token | None) -> HeaderCategory | None:
    if token is None or token.kind != TokenType.SECTION_HEADER:
        return None
    if isinstance(token.payload, HeaderPayload):
        return token.payload.category
    return None


def _starts_item(token: Token | None) -> bool:
    return token is not None and token.kind in (TokenType.LIST_ITEM_ID, TokenType.AMOUNT)


def _describe(token: Token | None) -> str:
    if token is None:
        return "end of input"
    return f"{token.kind.value} '{token.text}'"


class RecipeParser:
    """
    Grammar engine over a token list.

    Holds its position and error list as instance state, so an instance must
    not be shared between threads without serializing access. parse_tokens()
    resets that state before consuming anything.
    """

    def __init__(self) -> None:
        self.reset()

    def reset(self, tokens: list[Token] | tuple[Token, ...] = ()) -> None:
        self._tokens = tuple(tokens)
        self._pos = 0
        self._errors: list[ParseError] = []

    def parse_tokens(self, tokens: list[Token] | tuple[Token, ...]) -> tuple[Sections, list[ParseError]]:
        """Build the syntax tree; returns it with any structural errors."""
        self.reset(tokens)
        tree = self.sections()
        return tree, list(self._errors)

    # =========================================================================
    # Token access
    # =========================================================================

    def _la(self) -> Token | None:
        """One-token lookahead."""
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _consume(self) -> Token:
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def _error(self, expected: str, rule: str) -> None:
        token = self._la()
        message = f"expected {expected} but found {_describe(token)}"
        if token is not None:
            error = ParseError(token.offset, token.line, token.column, token.length, message, rule)
        elif self._tokens:
            last = self._tokens[-1]
            error = ParseError(last.end, last.line, last.column + last.length, 0, message, rule)
        else:
            error = ParseError(0, 1, 1, 0, message, rule)
        self._errors.append(error)
        logger.debug(f"Structural error in {rule} at line {error.line}, column {error.column}: {message}")

    def _skip(self) -> None:
        skipped = self._consume()
        logger.debug(f"Skipping {_describe(skipped)} at offset {skipped.offset}")

    # =========================================================================
    # Rules
    # =========================================================================

    def sections(self) -> Sections:
        """Top rule: one or more document-level sections."""
        children: list[Section | IngredientItem] = []
        headers: list[Token] = []

        if self._la() is None:
            self._error("at least one section", "sections")

        while (token := self._la()) is not None:
            start = self._pos
            category = _header_category(token)

            if category == HeaderCategory.INGREDIENTS:
                headers.append(self._consume())
                children.extend(self.ingredients())
            elif category == HeaderCategory.STEPS:
                headers.append(self.steps())
            elif category == HeaderCategory.SECTION or _starts_item(token):
                # ingredients without a leading "Ingredients" header
                children.extend(self.ingredients())
            else:
                self._error("an ingredients or steps section", "sections")
                self._skip()

            if self._pos == start:
                break

        return Sections(children=tuple(children), headers=tuple(headers))

    def ingredients(self) -> list[Section | IngredientItem]:
        """One or more subsections or ingredient items, up to the next document header."""
        children: list[Section | IngredientItem] = []

        while (token := self._la()) is not None:
            start = self._pos
            category = _header_category(token)

            if category == HeaderCategory.SECTION:
                section = self.section()
                if section is not None:
                    children.append(section)
            elif category is not None:
                break
            elif _starts_item(token):
                item = self.ingredient_item()
                if item is not None:
                    children.append(item)
            else:
                self._error("an ingredient item", "ingredients")
                self._skip()

            if self._pos == start:
                break

        if not children:
            self._error("at least one ingredient item", "ingredients")
        return children

    def section(self) -> Section | None:
        """A subsection header followed by one or more ingredient items."""
        header = self._consume()
        items: list[IngredientItem] = []

        while (token := self._la()) is not None and _header_category(token) is None:
            start = self._pos
            if _starts_item(token):
                item = self.ingredient_item()
                if item is not None:
                    items.append(item)
            else:
                self._error("an ingredient item", "section")
                self._skip()

            if self._pos == start:
                break

        if not items:
            self._error(f"at least one ingredient item after '{header.text}'", "section")
            return None
        return Section(header=header, items=tuple(items))

    def ingredient_item(self) -> IngredientItem | None:
        """Optional list item id, then an amount, then the ingredient words."""
        list_item_id = None
        if (token := self._la()) is not None and token.kind == TokenType.LIST_ITEM_ID:
            list_item_id = self._consume()

        token = self._la()
        if token is None or token.kind != TokenType.AMOUNT:
            self._error("an amount", "ingredient_item")
            return None
        amount = self._consume()

        ingredient = self.ingredient()
        if ingredient is None:
            return None
        return IngredientItem(amount=amount, ingredient=ingredient, list_item_id=list_item_id)

    def ingredient(self) -> Ingredient | None:
        """Words up to the next non-word token."""
        words: list[Token] = []
        while (token := self._la()) is not None and token.kind == TokenType.WORD:
            words.append(self._consume())

        if not words:
            self._error("an ingredient name", "ingredient")
            return None
        return Ingredient(words=tuple(words))

    def steps(self) -> Token:
        """Consume a steps header and its text up to the next document header."""
        header = self._consume()
        skipped = 0
        while (token := self._la()) is not None:
            category = _header_category(token)
            if category is not None and category.is_document_level:
                break
            self._consume()
            skipped += 1
        logger.debug(f"Passed over {skipped} tokens of step text after '{header.text}'")
        return header


# =============================================================================
# Entry point
# =============================================================================

_engine_lock = threading.Lock()
_tokenizer = Tokenizer()
_parser = RecipeParser()


def parse(text: str) -> ParseResult:
    """
    Tokenize text and build its syntax tree.

    Uses one shared engine that is reset before every call; calls are
    serialized. Never raises for any input string.
    """
    with _engine_lock:
        _tokenizer.reset()
        _parser.reset()
        tokens, errors = _tokenizer.tokenize(text)
        tree, parse_errors = _parser.parse_tokens(tokens)

    if errors or parse_errors:
        logger.info(
            f"Parsed recipe text with {len(errors)} lexical and "
            f"{len(parse_errors)} structural errors"
        )
    return ParseResult(
        tree=tree,
        tokens=tuple(tokens),
        errors=tuple(errors),
        parse_errors=tuple(parse_errors),
    )
