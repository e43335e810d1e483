"""Command line front-end: parse a recipe file and print its ingredients as JSON.

Run with: recipeparser recipe.txt
Show the token stream with: recipeparser recipe.txt --tokens
Read from stdin with: cat recipe.txt | recipeparser -
"""

import argparse
import json
import sys
from dataclasses import asdict
from typing import Any

from recipeparser.grammar.parser import parse
from recipeparser.lexer.tokens import Token
from recipeparser.logging_config import LoggingContext, configure_logging, get_logger
from recipeparser.recipe import build_recipe

logger = get_logger(__name__)


def _token_to_dict(token: Token) -> dict[str, Any]:
    data = asdict(token)
    data["kind"] = token.kind.value
    if token.payload is not None:
        data["payload"] = {
            key: (value.value if hasattr(value, "value") else value)
            for key, value in asdict(token.payload).items()
        }
    return data


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="recipeparser",
        description="Extract quantities, units and ingredient names from recipe text",
    )
    parser.add_argument(
        "file",
        type=argparse.FileType("r", encoding="utf-8"),
        help="Recipe text file, or - for stdin",
    )
    parser.add_argument("--tokens", "-t", action="store_true", help="Print the token stream")
    parser.add_argument(
        "--show-errors", "-e", action="store_true", help="Include lexical and structural errors"
    )
    parser.add_argument("--log-level", "-l", type=str, default=None, help="Log level (DEBUG, INFO, ...)")
    return parser


def run(argv: list[str] | None = None) -> dict[str, Any]:
    """Parse the arguments, parse the file and return the printable output."""
    args = build_parser().parse_args(argv)
    configure_logging(log_level=args.log_level)

    with args.file as handle:
        text = handle.read()
        source = getattr(handle, "name", "<stdin>")

    with LoggingContext(source=source):
        result = parse(text)
        recipe = build_recipe(result.tree)
        logger.info(f"Found {len(recipe.ingredients)} ingredients")

    output: dict[str, Any] = {"recipe": recipe.model_dump(mode="json")}
    if args.tokens:
        output["tokens"] = [_token_to_dict(token) for token in result.tokens]
    if args.show_errors:
        output["errors"] = [asdict(error) for error in result.errors]
        output["parse_errors"] = [asdict(error) for error in result.parse_errors]
    return output


def main(argv: list[str] | None = None) -> int:
    output = run(argv)
    json.dump(output, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
