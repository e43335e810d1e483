"""Pytest configuration and shared fixtures."""

import logging

import pytest

from recipeparser.config import get_settings

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow running")


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handlers and levels installed by configure_logging()."""
    yield
    package_logger = logging.getLogger("recipeparser")
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    get_settings.cache_clear()


# =============================================================================
# Recipe Text Fixtures
# =============================================================================


@pytest.fixture
def simple_recipe():
    """Four ingredient lines, indented, with one stray comma on line 2."""
    return (
        "1 1/2 cp all-purpose flour\n"
        "        1 tsp vanilla extract,\n"
        "        1 cup milk\n"
        "        1 egg"
    )


@pytest.fixture
def sectioned_recipe():
    """Ingredients grouped under subsection headers."""
    return (
        "Ingredients\n"
        "For the dough:\n"
        "- 2 cups bread flour\n"
        "- 1 tsp salt\n"
        "- 3/4 cup warm water\n"
        "\n"
        "For the sauce:\n"
        "1. 1 can crushed tomatoes\n"
        "2. 2 cloves garlic\n"
    )


@pytest.fixture
def full_recipe():
    """Ingredients followed by steps that mention amounts."""
    return (
        "Ingredients:\n"
        "2 cups sugar\n"
        "½ cup butter\n"
        "2 large eggs\n"
        "\n"
        "Directions:\n"
        "1. Cream the butter with 1 cup sugar.\n"
        "2. Add 2 eggs, beat for 3 minutes & bake at 350°F.\n"
    )
