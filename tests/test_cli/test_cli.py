"""Tests for the extcss CLI commands."""
from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from extcss import __version__
from extcss.cli.main import cli
from extcss.selector import parse_selector
from extcss.stylesheet import parse_stylesheet

FIXTURES = Path(__file__).parent.parent / "fixtures"


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


class TestCLIGroup:
    def test_help(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "compile extended CSS selectors and stylesheets" in result.output

    def test_lists_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        for command in ("parse", "inspect", "stylesheet", "validate"):
            assert command in result.output

    def test_global_options(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        assert "--max-depth" in result.output
        assert "--verbose" in result.output

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_max_depth_must_be_positive(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--max-depth", "0", "parse", "div"])
        assert result.exit_code != 0


# ---------------------------------------------------------------------------
# parse / inspect
# ---------------------------------------------------------------------------


class TestParseCommand:
    def test_prints_ast_json(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["parse", "div:has(> img)"])
        assert result.exit_code == 0
        assert json.loads(result.output) == parse_selector("div:has(> img)").to_dict()

    def test_indent(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["parse", "--indent", "0", "div"])
        assert result.exit_code == 0
        assert json.loads(result.output)["type"] == "SelectorList"

    def test_non_ascii_argument(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["parse", "p:contains(Реклама)"])
        assert result.exit_code == 0
        assert "Реклама" in result.output

    def test_syntax_error(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["parse", "div:has(span"])
        assert result.exit_code == 1
        assert "Parse error" in result.output
        assert "Unbalanced brackets" in result.output

    def test_max_depth_applied(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--max-depth", "1", "parse", "div:not(:not(a))"])
        assert result.exit_code == 1
        assert "maximum depth of 1" in result.output


class TestInspectCommand:
    def test_tree(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["inspect", "div:has(> img):contains(ad)"])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "SelectorList",
            "  Selector",
            "    RegularSelector 'div'",
            "    ExtendedSelector",
            "      RelativePseudoClass :has",
            "        SelectorList",
            "          Selector",
            "            RegularSelector '> img'",
            "    ExtendedSelector",
            "      AbsolutePseudoClass :contains(ad)",
        ]

    def test_policy_violation(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["inspect", "a:has(b:has(c))"])
        assert result.exit_code == 1
        assert "Parse error" in result.output


# ---------------------------------------------------------------------------
# stylesheet / validate
# ---------------------------------------------------------------------------


class TestStylesheetCommand:
    def test_fixture(self, runner: CliRunner) -> None:
        path = FIXTURES / "filters.css"
        result = runner.invoke(cli, ["stylesheet", str(path)])
        assert result.exit_code == 0
        expected = [r.to_dict() for r in parse_stylesheet(path.read_text())]
        assert json.loads(result.output) == expected

    def test_remove_rule(self, runner: CliRunner, tmp_path: Path) -> None:
        css = tmp_path / "rules.css"
        css.write_text(".ad:remove()\n")
        result = runner.invoke(cli, ["stylesheet", str(css)])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data[0]["selector"] == ".ad"
        assert data[0]["style"] == {"remove": "true"}

    def test_invalid_file(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["stylesheet", str(FIXTURES / "invalid.css")])
        assert result.exit_code == 1
        assert "Parse error" in result.output

    def test_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["stylesheet", str(tmp_path / "absent.css")])
        assert result.exit_code != 0


class TestValidateCommand:
    def test_valid(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["validate", str(FIXTURES / "filters.css")])
        assert result.exit_code == 0
        assert "OK: filters.css is valid (3 rule(s))" in result.output

    def test_rule_summary(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["validate", str(FIXTURES / "filters.css")])
        lines = result.output.splitlines()
        assert "  div.banner:has(> img)  2 declaration(s)" in lines
        assert "  .ad:contains(/promo/)  1 declaration(s)  debug=true" in lines
        assert "  #sidebar > .sponsored  remove" in lines

    def test_invalid(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["validate", str(FIXTURES / "invalid.css")])
        assert result.exit_code == 1
        assert "not allowed inside upper :has" in result.output

    def test_stylesheet_error(self, runner: CliRunner, tmp_path: Path) -> None:
        css = tmp_path / "broken.css"
        css.write_text("div { display: none; } span")
        result = runner.invoke(cli, ["validate", str(css)])
        assert result.exit_code == 1
        assert "no style or remove" in result.output
