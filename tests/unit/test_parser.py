"""Tests for parsing configs out of stylesheet text."""

from __future__ import annotations

import pytest

from breakout_grid.errors import ConfigFormatError, ParseError
from breakout_grid.generator import export_config_block, generate_css
from breakout_grid.parser import FORMAT_ERROR_MESSAGE, parse_config, scan_declarations
from breakout_grid.schema import GridConfig, default_config

CUSTOM = GridConfig.from_flat(
    {
        "contentMax": "60rem",
        "defaultCol": "feature",
        "popoutWidth": "6.5rem",
        "gapScale.lg": "5.5vw",
        "breakoutScale": "4vw",
        "breakpoints.lg": "960",
    }
)


class TestRoundTrip:
    def test_generated_stylesheet(self) -> None:
        assert parse_config(generate_css(CUSTOM, "1.0.0")) == CUSTOM.complete()

    def test_default_stylesheet(self) -> None:
        assert parse_config(generate_css()) == default_config()
        assert parse_config(generate_css()).get("contentMin") == "50rem"

    def test_exported_block(self) -> None:
        assert parse_config(export_config_block(CUSTOM)) == CUSTOM.complete()

    def test_export_is_idempotent(self) -> None:
        block = export_config_block(CUSTOM)
        assert export_config_block(parse_config(block)) == block


class TestParseConfig:
    def test_single_declaration(self) -> None:
        config = parse_config("--content-min: 50rem;")
        assert config.to_flat() == {"contentMin": "50rem"}

    def test_last_declaration_wins(self) -> None:
        config = parse_config("--base-gap: 1rem;\n--base-gap: 2rem;")
        assert config.get("baseGap") == "2rem"

    def test_whitespace_tolerant(self) -> None:
        config = parse_config("  --base-gap :   2rem ;  ")
        assert config.get("baseGap") == "2rem"

    def test_commented_breakpoint(self) -> None:
        config = parse_config("/* --breakpoint-xl: 1440px; */")
        assert config.get("breakpoints.xl") == "1440"

    def test_unknown_variables_ignored(self) -> None:
        config = parse_config("--brand-color: red;\n--max-gap: 12rem;")
        assert config.to_flat() == {"maxGap": "12rem"}

    def test_missing_semicolon_at_end(self) -> None:
        assert parse_config("--max-gap: 12rem").get("maxGap") == "12rem"


class TestParseErrors:
    def test_plain_text_rejected(self) -> None:
        with pytest.raises(ConfigFormatError) as exc_info:
            parse_config("hello world")
        assert exc_info.value.message == FORMAT_ERROR_MESSAGE

    def test_only_unknown_variables_rejected(self) -> None:
        with pytest.raises(ConfigFormatError):
            parse_config(":root { --brand-color: red; }")

    def test_empty_input_rejected(self) -> None:
        with pytest.raises(ParseError):
            parse_config("   ")


class TestScanDeclarations:
    def test_includes_commented_declarations(self) -> None:
        text = "--a: 1;\n/* --b: 2px; */"
        assert list(scan_declarations(text)) == [("--a", "1"), ("--b", "2px")]
