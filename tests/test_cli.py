"""Tests for the command line front-end."""

import io
import json

import pytest

from recipeparser.cli import build_parser, main, run


@pytest.fixture
def recipe_file(tmp_path, simple_recipe):
    path = tmp_path / "pancakes.txt"
    path.write_text(simple_recipe, encoding="utf-8")
    return path


class TestRun:
    """Tests for run()."""

    def test_recipe_only(self, recipe_file):
        """Test default output holds just the recipe."""
        output = run([str(recipe_file)])

        assert set(output) == {"recipe"}
        assert output["recipe"]["type"] == "ingredients"
        assert output["recipe"]["ingredients"][0] == {
            "amount": {"quantity": 1.5, "unit": "CUP"},
            "ingredient": "all-purpose flour",
        }

    def test_show_errors(self, recipe_file):
        """Test lexical and structural errors in the output."""
        output = run([str(recipe_file), "--show-errors"])

        assert output["parse_errors"] == []
        (error,) = output["errors"]
        assert error["offset"] == 56
        assert error["line"] == 2
        assert error["column"] == 30

    def test_tokens(self, recipe_file):
        """Test the token stream in the output."""
        output = run([str(recipe_file), "-t"])

        first = output["tokens"][0]
        assert first["kind"] == "Amount"
        assert first["text"] == "1 1/2 cp"
        assert first["payload"]["unit"] == "cp"

    def test_header_payload_is_serializable(self, tmp_path):
        """Test header categories are written as plain values."""
        path = tmp_path / "bread.txt"
        path.write_text("For the dough:\n2 cups flour\n", encoding="utf-8")

        output = run([str(path), "--tokens"])

        assert output["tokens"][0]["kind"] == "SectionHeader"
        assert output["tokens"][0]["payload"]["name"] == "dough"
        json.dumps(output)

    def test_stdin(self, monkeypatch):
        """Test reading from stdin with '-'."""
        monkeypatch.setattr("sys.stdin", io.StringIO("2 eggs\n"))

        output = run(["-"])

        assert output["recipe"]["ingredients"] == [
            {"amount": {"quantity": 2.0, "unit": "PIECE"}, "ingredient": "eggs"}
        ]


class TestMain:
    """Tests for main()."""

    def test_prints_json(self, recipe_file, capsys):
        """Test JSON on stdout and exit code zero."""
        assert main([str(recipe_file), "--log-level", "warning"]) == 0

        captured = capsys.readouterr()
        data = json.loads(captured.out)
        assert [entry["ingredient"] for entry in data["recipe"]["ingredients"]] == [
            "all-purpose flour",
            "vanilla extract",
            "milk",
            "egg",
        ]

    def test_missing_file(self, tmp_path):
        """Test argparse rejects a missing file."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([str(tmp_path / "missing.txt")])
