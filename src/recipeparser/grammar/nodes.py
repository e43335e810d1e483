"""Concrete syntax tree nodes.

Each node owns its children; the tree holds no back references. Node order
follows document order.
"""

from dataclasses import dataclass, field

from recipeparser.lexer.tokens import HeaderPayload, Token


@dataclass(frozen=True)
class Ingredient:
    """One or more words naming the ingredient, e.g. "all-purpose flour"."""

    words: tuple[Token, ...]

    @property
    def text(self) -> str:
        return " ".join(word.text for word in self.words)


@dataclass(frozen=True)
class IngredientItem:
    """[list item id] amount ingredient"""

    amount: Token
    ingredient: Ingredient
    list_item_id: Token | None = None


@dataclass(frozen=True)
class Section:
    """A subsection header and the items under it, e.g. "For the dough:"."""

    header: Token
    items: tuple[IngredientItem, ...]

    @property
    def name(self) -> str:
        if isinstance(self.header.payload, HeaderPayload):
            return self.header.payload.name
        return self.header.text


@dataclass(frozen=True)
class Sections:
    """Root of the tree.

    `children` holds ingredient items and subsections; `headers` holds the
    document-level headers (ingredients, steps) that were consumed.
    """

    children: tuple[Section | IngredientItem, ...] = ()
    headers: tuple[Token, ...] = field(default=())

    def ingredient_items(self) -> list[tuple[Section | None, IngredientItem]]:
        """All items in document order, paired with their enclosing section."""
        items: list[tuple[Section | None, IngredientItem]] = []
        for child in self.children:
            if isinstance(child, Section):
                items.extend((child, item) for item in child.items)
            else:
                items.append((None, child))
        return items


SyntaxTree = Sections
