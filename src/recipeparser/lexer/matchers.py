"""Token patterns and the order in which each scanner mode tries them."""

import re
from collections.abc import Callable
from dataclasses import dataclass

from recipeparser.lexer.tokens import HeaderCategory, HeaderPayload, Mode, TokenType
from recipeparser.normalize.units import (
    MAX_ALIAS_WORDS,
    UNICODE_FRACTIONS,
    AmountPayload,
    lookup_unit,
)

# =============================================================================
# Building Blocks
# =============================================================================

GLYPHS = "".join(UNICODE_FRACTIONS)

# A letter: a word character that is not a digit, underscore or fraction glyph
LETTER = rf"[^\W\d_{GLYPHS}]"
WORD = rf"{LETTER}(?:{LETTER}|['’-])*"
HEADER_WORDS = rf"{WORD}(?:[ \t]+{WORD}){{0,3}}"

# Only trailing blanks may follow a header on its line
LINE_END = r"(?=[ \t\r]*(?:\n|\Z))"

WORD_PUNCTUATION = "'’-"


def _letter_run_end(text: str, start: int, end: int) -> int:
    """
    End of the leading run of letters and word punctuation in text[start:end].

    The LETTER class still admits numeric characters such as "²" or "①"
    that are neither letters nor decimal digits; the run stops at them.
    """
    pos = start
    while pos < end and (text[pos].isalpha() or (pos > start and text[pos] in WORD_PUNCTUATION)):
        pos += 1
    return pos


@dataclass(frozen=True)
class TokenMatch:
    kind: TokenType
    length: int
    payload: HeaderPayload | AmountPayload | None = None


Matcher = Callable[[str, int, bool], TokenMatch | None]


# =============================================================================
# Section Headers
# =============================================================================

INGREDIENTS_HEADER = re.compile(
    r"(?P<name>ingredients?|ingredient list|what you(?:'ll| will)? need|you(?:'ll| will) need)"
    r"(?:[ \t]*:)?" + LINE_END,
    re.IGNORECASE,
)

STEPS_HEADER = re.compile(
    r"(?P<name>steps|directions|instructions|method|preparation)(?:[ \t]*:)?" + LINE_END,
    re.IGNORECASE,
)

# "For the dough", "for the sauce:", "Topping:"
SECTION_HEADER = re.compile(
    rf"(?:for(?:[ \t]+the)?[ \t]+(?P<for_name>{HEADER_WORDS})(?:[ \t]*:)?"
    rf"|(?P<name>{HEADER_WORDS})[ \t]*:)" + LINE_END,
    re.IGNORECASE,
)

HEADER_PATTERNS: tuple[tuple[HeaderCategory, re.Pattern[str]], ...] = (
    (HeaderCategory.INGREDIENTS, INGREDIENTS_HEADER),
    (HeaderCategory.STEPS, STEPS_HEADER),
    (HeaderCategory.SECTION, SECTION_HEADER),
)


def _is_name_word(word: str) -> bool:
    return _letter_run_end(word, 0, len(word)) == len(word)


def match_section_header(text: str, pos: int, line_start: bool) -> TokenMatch | None:
    """Match a whole-line section header; only tried at the start of a line."""
    if not line_start:
        return None
    for category, pattern in HEADER_PATTERNS:
        match = pattern.match(text, pos)
        if match:
            name = match.groupdict().get("for_name") or match.group("name")
            if any(not _is_name_word(word) for word in name.split()):
                continue
            payload = HeaderPayload(category=category, name=" ".join(name.lower().split()))
            return TokenMatch(TokenType.SECTION_HEADER, match.end() - pos, payload)
    return None


# =============================================================================
# List Item Markers
# =============================================================================

# "-", "*", "•", "1.", "2)", "(3)", "a.", "b)", "(c)"; must be followed by a blank
LIST_ITEM_ID = re.compile(r"(?:[-*•]|\(?(?:\d{1,3}|[A-Za-z])[.)])(?=[ \t])")


def match_list_item_id(text: str, pos: int, line_start: bool) -> TokenMatch | None:
    """Match a bullet or enumeration marker at the start of a line."""
    if not line_start:
        return None
    match = LIST_ITEM_ID.match(text, pos)
    if match:
        return TokenMatch(TokenType.LIST_ITEM_ID, match.end() - pos)
    return None


# =============================================================================
# Amounts
# =============================================================================

APPROXIMATION = re.compile(r"(?:~|approximately|approx\.?|about|around|ca\.)[ \t]*", re.IGNORECASE)

DENOMINATOR = r"0*[1-9]\d*"

# Tried in order; the first hit wins
NUMBER_PATTERNS: tuple[re.Pattern[str], ...] = (
    # mixed number with a textual fraction: "1 1/2"
    re.compile(rf"(?P<whole>\d+)[ \t]+(?P<numerator>\d+)/(?P<denominator>{DENOMINATOR})"),
    # mixed number with a glyph: "1 ½", "1½"
    re.compile(rf"(?P<whole>\d+)[ \t]*(?P<glyph>[{GLYPHS}])"),
    # decimal: "1.5"
    re.compile(r"(?P<whole>\d+\.\d+)"),
    # fraction: "3/4"
    re.compile(rf"(?P<numerator>\d+)/(?P<denominator>{DENOMINATOR})"),
    # glyph: "¾"
    re.compile(rf"(?P<glyph>[{GLYPHS}])"),
    # integer: "2"
    re.compile(r"(?P<whole>\d+)"),
)

UNIT_CANDIDATES: tuple[re.Pattern[str], ...] = tuple(
    re.compile(rf"[ \t]*(?P<unit>{LETTER}+(?:[ \t]+{LETTER}+){{{count - 1}}})(?P<period>\.)?")
    for count in range(MAX_ALIAS_WORDS, 0, -1)
)

WORD_CONTINUATION = re.compile(r"[\w'’-]")


def _match_unit(text: str, pos: int) -> tuple[str, int] | None:
    """Match a unit alias starting at pos; returns the unit word and its end."""
    for pattern in UNIT_CANDIDATES:
        match = pattern.match(text, pos)
        if not match:
            continue
        unit_end = match.end("unit")
        if unit_end < len(text) and WORD_CONTINUATION.match(text, unit_end):
            continue
        if lookup_unit(match.group("unit")) is not None:
            return match.group("unit"), match.end()
    return None


def match_amount(text: str, pos: int, line_start: bool) -> TokenMatch | None:
    """
    Match a quantity with an optional unit.

    An approximation marker ("~", "about", ...) is consumed but not kept. A
    word after the number is only consumed when it is an exact unit alias.
    """
    start = pos
    marker = APPROXIMATION.match(text, pos)
    if marker:
        pos = marker.end()

    for pattern in NUMBER_PATTERNS:
        number = pattern.match(text, pos)
        if number:
            break
    else:
        return None

    groups = number.groupdict()
    unit = None
    end = number.end()
    unit_match = _match_unit(text, end)
    if unit_match:
        unit, end = unit_match

    payload = AmountPayload(
        whole=groups.get("whole"),
        numerator=groups.get("numerator"),
        denominator=groups.get("denominator"),
        glyph=groups.get("glyph"),
        unit=unit,
    )
    return TokenMatch(TokenType.AMOUNT, end - start, payload)


# =============================================================================
# Words
# =============================================================================

INGREDIENT_WORD = re.compile(WORD)

# In step text anything that is not blank is a word
STEP_WORD = re.compile(r"\S+")


def match_word(text: str, pos: int, line_start: bool) -> TokenMatch | None:
    match = INGREDIENT_WORD.match(text, pos)
    if match:
        end = _letter_run_end(text, pos, match.end())
        if end > pos:
            return TokenMatch(TokenType.WORD, end - pos)
    return None


def match_step_word(text: str, pos: int, line_start: bool) -> TokenMatch | None:
    match = STEP_WORD.match(text, pos)
    if match:
        return TokenMatch(TokenType.WORD, match.end() - pos)
    return None


# =============================================================================
# Mode Tables
# =============================================================================

MODE_MATCHERS: dict[Mode, tuple[Matcher, ...]] = {
    Mode.UNCLASSIFIED: (match_section_header, match_list_item_id, match_amount, match_word),
    Mode.INGREDIENTS: (match_section_header, match_list_item_id, match_amount, match_word),
    Mode.STEPS: (match_section_header, match_list_item_id, match_step_word),
}


def next_mode(mode: Mode, header: HeaderPayload) -> Mode:
    """Mode that holds after a section header until the next one."""
    if header.category == HeaderCategory.INGREDIENTS:
        return Mode.INGREDIENTS
    if header.category == HeaderCategory.STEPS:
        return Mode.STEPS
    if mode == Mode.UNCLASSIFIED:
        return Mode.INGREDIENTS
    return mode
