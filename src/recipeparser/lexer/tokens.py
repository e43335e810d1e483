"""Token vocabulary produced by the tokenizer."""

from dataclasses import dataclass
from enum import Enum

from recipeparser.normalize.units import AmountPayload


class TokenType(str, Enum):
    SECTION_HEADER = "SectionHeader"
    LIST_ITEM_ID = "ListItemId"
    AMOUNT = "Amount"
    WORD = "Word"


class Mode(str, Enum):
    """Scanner modes; the active mode decides which patterns are tried."""

    UNCLASSIFIED = "unclassified"
    INGREDIENTS = "ingredients"
    STEPS = "steps"


class HeaderCategory(str, Enum):
    """What a section header introduces."""

    INGREDIENTS = "ingredients"  # document level
    STEPS = "steps"  # document level
    SECTION = "section"  # ingredient subsection, e.g. "For the dough:"

    @property
    def is_document_level(self) -> bool:
        return self is not HeaderCategory.SECTION


@dataclass(frozen=True)
class HeaderPayload:
    category: HeaderCategory
    name: str


@dataclass(frozen=True)
class Token:
    kind: TokenType
    text: str
    offset: int
    line: int
    column: int
    length: int
    payload: HeaderPayload | AmountPayload | None = None

    @property
    def end(self) -> int:
        return self.offset + self.length


@dataclass(frozen=True)
class LexError:
    offset: int
    line: int
    column: int
    length: int
    message: str

    @property
    def end(self) -> int:
        return self.offset + self.length
