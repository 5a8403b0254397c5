"""Tests for building the stylesheet and checking version tags."""

from __future__ import annotations

from pathlib import Path

from breakout_grid.build import CheckStatus, build_css, read_embedded_version, verify_versions
from breakout_grid.generator import generate_css
from breakout_grid.schema import GridConfig


class TestBuildCss:
    def test_writes_file_and_parents(self, tmp_path: Path) -> None:
        output = tmp_path / "dist" / "css" / "_objects.breakout-grid.css"
        assert build_css(output, version="1.2.0") == output
        assert output.read_text(encoding="utf-8") == generate_css(version="1.2.0")

    def test_uses_config(self, tmp_path: Path) -> None:
        output = tmp_path / "grid.css"
        build_css(output, GridConfig.from_flat({"maxGap": "10rem"}))
        assert "  --max-gap: 10rem;" in output.read_text(encoding="utf-8")


class TestReadEmbeddedVersion:
    def test_generated_header(self) -> None:
        assert read_embedded_version(generate_css(version="3.1.4")) == "3.1.4"

    def test_no_header(self) -> None:
        assert read_embedded_version(".a { color: red; }") is None


class TestVerifyVersions:
    def test_ok(self, tmp_path: Path) -> None:
        path = build_css(tmp_path / "grid.css", version="1.2.0")
        [result] = verify_versions([path], "1.2.0")
        assert result.ok
        assert result.found == "1.2.0"

    def test_mismatch(self, tmp_path: Path) -> None:
        path = build_css(tmp_path / "grid.css", version="1.1.0")
        [result] = verify_versions([path], "1.2.0")
        assert result.status == CheckStatus.MISMATCH
        assert result.detail == "Expected 1.2.0, found 1.1.0"

    def test_missing_version(self, tmp_path: Path) -> None:
        path = tmp_path / "grid.css"
        path.write_text("/* hand written */")
        [result] = verify_versions([path], "1.2.0")
        assert result.status == CheckStatus.MISSING_VERSION
        assert not result.ok

    def test_unreadable(self, tmp_path: Path) -> None:
        [result] = verify_versions([tmp_path / "missing.css"], "1.2.0")
        assert result.status == CheckStatus.UNREADABLE

    def test_checks_every_path(self, tmp_path: Path) -> None:
        good = build_css(tmp_path / "a.css", version="1.2.0")
        bad = build_css(tmp_path / "b.css", version="1.0.0")
        results = verify_versions([good, bad], "1.2.0")
        assert [r.ok for r in results] == [True, False]
