"""Tests for the grammar engine and the parse entry point."""

import pytest

from recipeparser.grammar import (
    IngredientItem,
    ParseResult,
    RecipeParser,
    Section,
    Sections,
    parse,
)
from recipeparser.lexer import HeaderCategory, TokenType, tokenize


def item_names(tree: Sections) -> list[str]:
    return [item.ingredient.text for _, item in tree.ingredient_items()]


def assert_no_orphans(tree: Sections) -> None:
    for child in tree.children:
        if isinstance(child, Section):
            assert child.items, "empty section in tree"
            assert child.header.kind == TokenType.SECTION_HEADER
    for _, item in tree.ingredient_items():
        assert item.amount.kind == TokenType.AMOUNT
        assert item.ingredient.words
        assert all(word.kind == TokenType.WORD for word in item.ingredient.words)


# =============================================================================
# Tree shape
# =============================================================================


class TestTreeShape:
    """Tests for the shape of well-formed trees."""

    def test_flat_items(self, simple_recipe):
        """Test a document with no headers at all."""
        result = parse(simple_recipe)

        assert result.parse_errors == ()
        assert all(isinstance(child, IngredientItem) for child in result.tree.children)
        assert item_names(result.tree) == [
            "all-purpose flour",
            "vanilla extract",
            "milk",
            "egg",
        ]
        assert_no_orphans(result.tree)

    def test_subsections_are_siblings(self, sectioned_recipe):
        """Test that a new subsection header starts a sibling section."""
        result = parse(sectioned_recipe)

        assert result.errors == ()
        assert result.parse_errors == ()
        sections = result.tree.children
        assert [type(child) for child in sections] == [Section, Section]
        assert [section.name for section in sections] == ["dough", "sauce"]
        assert [len(section.items) for section in sections] == [3, 2]
        assert sections[1].items[0].list_item_id.text == "1."
        assert result.tree.headers[0].payload.category == HeaderCategory.INGREDIENTS
        assert_no_orphans(result.tree)

    def test_items_before_first_subsection(self):
        """Test flat items followed by a subsection."""
        result = parse("Ingredients\n1 egg\nFor the glaze:\n1 cup icing sugar")

        assert result.parse_errors == ()
        first, second = result.tree.children
        assert isinstance(first, IngredientItem)
        assert isinstance(second, Section)
        assert second.items[0].ingredient.text == "icing sugar"

    def test_list_item_id_is_kept(self):
        """Test the optional list marker on an item."""
        result = parse("1. 2 cups flour\n3 eggs")

        first, second = result.tree.children
        assert first.list_item_id.text == "1."
        assert second.list_item_id is None

    def test_document_order(self):
        """Test that node order follows the input."""
        text = "For the a:\n1 egg\n2 eggs\nFor the b:\n3 eggs\n4 cups milk"
        result = parse(text)

        offsets = [item.amount.offset for _, item in result.tree.ingredient_items()]
        assert offsets == sorted(offsets)
        assert len(offsets) == 4


# =============================================================================
# Mode switching
# =============================================================================


class TestSteps:
    """Tests for the steps placeholder branch."""

    def test_lines_after_steps_header_are_excluded(self):
        """Test that ingredient-looking lines after steps are not items."""
        text = "Ingredients\n1 cup flour\n2 eggs\nSteps\n1 cup sugar\nMix well"
        result = parse(text)

        assert result.parse_errors == ()
        assert item_names(result.tree) == ["flour", "eggs"]
        assert [header.payload.category for header in result.tree.headers] == [
            HeaderCategory.INGREDIENTS,
            HeaderCategory.STEPS,
        ]

    def test_ingredients_after_steps(self):
        """Test an ingredients block that follows the steps."""
        result = parse("Steps\nMix.\nFor the topping:\nstir it\nIngredients\n1 cup milk")

        assert result.parse_errors == ()
        assert item_names(result.tree) == ["milk"]

    def test_full_recipe(self, full_recipe):
        """Test ingredients plus directions."""
        result = parse(full_recipe)

        assert result.ok
        assert item_names(result.tree) == ["sugar", "butter", "large eggs"]


# =============================================================================
# Structural errors
# =============================================================================


class TestStructuralErrors:
    """Tests for recovery from structural errors."""

    def test_empty_input(self):
        """Test that empty input reports a missing section."""
        result = parse("")

        assert result.tree == Sections()
        assert len(result.parse_errors) == 1
        error = result.parse_errors[0]
        assert error.message == "expected at least one section but found end of input"
        assert (error.offset, error.line, error.column, error.length) == (0, 1, 1, 0)

    def test_amount_without_ingredient(self):
        """Test an amount followed directly by another amount."""
        result = parse("1 cup\n2 eggs")

        assert item_names(result.tree) == ["eggs"]
        assert len(result.parse_errors) == 1
        error = result.parse_errors[0]
        assert error.rule == "ingredient"
        assert error.message == "expected an ingredient name but found Amount '2'"
        assert error.line == 2

    def test_amount_at_end_of_input(self):
        """Test the error position at end of input."""
        result = parse("2 eggs\n3")

        assert item_names(result.tree) == ["eggs"]
        error = result.parse_errors[0]
        assert error.message == "expected an ingredient name but found end of input"
        assert (error.offset, error.line, error.column, error.length) == (8, 2, 2, 0)

    def test_marker_without_amount(self):
        """Test skip-and-retry after a list marker with no amount."""
        result = parse("- salt\n1 cup milk")

        assert item_names(result.tree) == ["milk"]
        assert [error.rule for error in result.parse_errors] == ["ingredient_item", "ingredients"]
        assert result.parse_errors[0].message == "expected an amount but found Word 'salt'"

    def test_empty_section_is_dropped(self):
        """Test that a header with no items never becomes a section."""
        result = parse("For the dough:\nFor the sauce:\n1 cup tomatoes")

        assert [child.name for child in result.tree.children] == ["sauce"]
        assert len(result.parse_errors) == 1
        assert result.parse_errors[0].rule == "section"
        assert result.parse_errors[0].message == (
            "expected at least one ingredient item after 'For the dough:' "
            "but found SectionHeader 'For the sauce:'"
        )

    def test_stray_words_inside_section(self):
        """Test that recovery keeps later items in their section."""
        result = parse("For the dough:\nknead well\n2 cups flour")

        (section,) = result.tree.children
        assert [item.ingredient.text for item in section.items] == ["flour"]
        assert [error.rule for error in result.parse_errors] == ["section", "section"]

    def test_leading_words(self):
        """Test words before any section."""
        result = parse("Notes\n1 cup milk")

        assert item_names(result.tree) == ["milk"]
        assert len(result.parse_errors) == 1
        assert result.parse_errors[0].rule == "sections"

    def test_ingredients_header_without_items(self):
        """Test an ingredients block that is immediately closed."""
        result = parse("Ingredients\nSteps\nStir")

        assert result.tree.children == ()
        assert len(result.parse_errors) == 1
        assert result.parse_errors[0].message == (
            "expected at least one ingredient item but found SectionHeader 'Steps'"
        )

    @pytest.mark.parametrize(
        "text",
        [
            "salt pepper",
            "- - -",
            "1 2 3 4",
            "For the a:\nFor the b:\n",
            "Ingredients\nIngredients\n1 egg",
            ":: ;; ,,",
        ],
    )
    def test_malformed_input_terminates(self, text):
        """Test that recovery always finishes and keeps invariants."""
        result = parse(text)

        assert isinstance(result, ParseResult)
        assert_no_orphans(result.tree)


# =============================================================================
# Engine state
# =============================================================================


class TestEngine:
    """Tests for parser instances and the shared entry point."""

    def test_parser_resets_between_calls(self):
        """Test that errors and position do not leak across calls."""
        parser = RecipeParser()
        bad_tokens, _ = tokenize("1 cup")
        good_tokens, _ = tokenize("1 cup milk")

        _, errors = parser.parse_tokens(bad_tokens)
        assert [error.rule for error in errors] == ["ingredient", "ingredients"]

        tree, errors = parser.parse_tokens(good_tokens)
        assert errors == []
        assert item_names(tree) == ["milk"]

    def test_parse_is_deterministic(self, sectioned_recipe):
        """Test identical input yields identical output."""
        assert parse(sectioned_recipe) == parse(sectioned_recipe)

    def test_shared_engine_does_not_leak_mode(self):
        """Test that a steps document does not affect the next parse."""
        parse("Steps\nbake 1 cup")
        result = parse("1 cup milk")

        assert item_names(result.tree) == ["milk"]

    def test_result_is_immutable(self, simple_recipe):
        """Test that returned collections are tuples."""
        result = parse(simple_recipe)

        assert isinstance(result.tokens, tuple)
        assert isinstance(result.errors, tuple)
        assert isinstance(result.tree.children, tuple)
