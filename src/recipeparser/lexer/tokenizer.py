"""Mode-switching tokenizer for recipe text."""

from recipeparser.lexer.matchers import MODE_MATCHERS, TokenMatch, next_mode
from recipeparser.lexer.tokens import HeaderPayload, LexError, Mode, Token, TokenType
from recipeparser.logging_config import get_logger

logger = get_logger(__name__)


def lex_error_message(substring: str, offset: int) -> str:
    return (
        f"unexpected character: ->{substring}<- at offset: {offset}, "
        f"skipped {len(substring)} characters."
    )


class Tokenizer:
    """
    Scan recipe text into tokens.

    The active mode is instance state: a section header switches it and it
    holds until the next header. Characters that no pattern of the active
    mode recognizes are collected into runs and reported as LexErrors; the
    scan itself never fails.

    An instance is not safe for concurrent use. Every call to tokenize()
    resets the scan state before reading any input.
    """

    def __init__(self) -> None:
        self.reset()

    def reset(self, text: str = "") -> None:
        """Clear mode, position and collected output."""
        self.mode = Mode.UNCLASSIFIED
        self._text = text
        self._pos = 0
        self._line = 1
        self._column = 1
        self._line_start = True
        self._tokens: list[Token] = []
        self._errors: list[LexError] = []
        self._run: tuple[int, int, int] | None = None  # offset, line, column

    def tokenize(self, text: str) -> tuple[list[Token], list[LexError]]:
        """
        Tokenize text.

        Returns:
            Tuple of (tokens, errors), both in offset order.
        """
        self.reset(text)

        while self._pos < len(text):
            if text[self._pos].isspace():
                self._flush_run()
                self._advance(1)
                continue

            match = self._match()
            if match is None:
                if self._run is None:
                    self._run = (self._pos, self._line, self._column)
                self._advance(1)
                continue

            self._flush_run()
            self._emit(match)

        self._flush_run()
        logger.debug(
            f"Tokenized {len(text)} characters into {len(self._tokens)} tokens "
            f"with {len(self._errors)} lexical errors"
        )
        return list(self._tokens), list(self._errors)

    def _match(self) -> TokenMatch | None:
        for matcher in MODE_MATCHERS[self.mode]:
            match = matcher(self._text, self._pos, self._line_start)
            if match is not None and match.length > 0:
                return match
        return None

    def _emit(self, match: TokenMatch) -> None:
        token = Token(
            kind=match.kind,
            text=self._text[self._pos : self._pos + match.length],
            offset=self._pos,
            line=self._line,
            column=self._column,
            length=match.length,
            payload=match.payload,
        )
        self._tokens.append(token)
        self._advance(match.length)

        if token.kind == TokenType.SECTION_HEADER and isinstance(token.payload, HeaderPayload):
            mode = next_mode(self.mode, token.payload)
            if mode != self.mode:
                logger.debug(f"Switching mode {self.mode.value} -> {mode.value} at line {token.line}")
            self.mode = mode

    def _flush_run(self) -> None:
        if self._run is None:
            return
        offset, line, column = self._run
        substring = self._text[offset : self._pos]
        error = LexError(
            offset=offset,
            line=line,
            column=column,
            length=len(substring),
            message=lex_error_message(substring, offset),
        )
        self._errors.append(error)
        self._run = None
        logger.debug(f"Skipped unrecognized input at line {line}, column {column}: {substring!r}")

    def _advance(self, count: int) -> None:
        for char in self._text[self._pos : self._pos + count]:
            if char == "\n":
                self._line += 1
                self._column = 1
                self._line_start = True
            else:
                self._column += 1
                if not char.isspace():
                    self._line_start = False
        self._pos += count


def tokenize(text: str) -> tuple[list[Token], list[LexError]]:
    """Tokenize text with a fresh Tokenizer."""
    return Tokenizer().tokenize(text)
