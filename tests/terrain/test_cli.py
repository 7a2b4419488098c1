"""Tests for the map generation command line."""

import pytest

from mapgen.terrain.cli import build_parser, main

SMALL = ["--width", "80", "--height", "80", "--num-x", "8", "--num-y", "8"]


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self) -> None:
        """Unset options stay None so the config decides."""
        args = build_parser().parse_args([])
        assert args.config is None
        assert args.width is None
        assert args.shape is None
        assert not args.no_rivers

    def test_rejects_unknown_shape(self) -> None:
        """Shape must be a known strategy."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--shape", "hexagon"])


class TestMain:
    """Tests for the CLI entry point."""

    def test_small_map(self, capsys: pytest.CaptureFixture[str]) -> None:
        """A small map generates and prints its summary."""
        assert main(SMALL + ["--seed", "7"]) == 0
        out = capsys.readouterr().out
        assert "Generation complete" in out
        assert "Grid: 8x8 tiles of 10x10" in out
        assert "Sites: 64, corners: 81, edges: 144" in out
        assert "Biomes:" in out

    def test_invalid_dimensions(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Indivisible dimensions exit with an error."""
        assert main(["--width", "81", "--height", "80", "--num-x", "8", "--num-y", "8"]) == 1
        assert "Error" in capsys.readouterr().err

    def test_missing_config(self, capsys: pytest.CaptureFixture[str]) -> None:
        """An unknown preset exits with an error."""
        assert main(["--config", "no-such-preset"]) == 1
        assert "not found" in capsys.readouterr().err

    def test_preset_with_overrides(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Command-line sizes override the loaded preset."""
        assert main(["--config", "default"] + SMALL) == 0
        assert "Sites: 64" in capsys.readouterr().out

    def test_shape_override(self, capsys: pytest.CaptureFixture[str]) -> None:
        """The shape flag switches strategy."""
        assert main(SMALL + ["--shape", "cellular"]) == 0
        assert "cellular" in capsys.readouterr().out

    def test_no_rivers(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Skipping rivers leaves no river corners."""
        assert main(SMALL + ["--no-rivers"]) == 0
        assert "River corners: 0" in capsys.readouterr().out
