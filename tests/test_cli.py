"""
Command-Line Tests for calmap.

Tests cover end-to-end processing of table files.
"""

import pytest

from calmap.cli import main
from calmap.data_input.table_io import load_table, save_table


@pytest.fixture
def run_cli(tmp_path, monkeypatch, restore_root_logger):
    """Run the command line with an isolated configuration."""
    for name in ("CALMAP_COLOR_SCHEME", "CALMAP_WINDOW_SIZE", "CALMAP_SIGMA",
                 "CALMAP_WITH_HEADINGS", "CALMAP_SKIP_HEADINGS",
                 "LOG_LEVEL", "LOG_FILE", "LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    config_path = str(tmp_path / "no-config.yaml")

    def run(*argv):
        return main([*argv, "--config", config_path])

    return run


def _write(tmp_path, grid, name="map.csv"):
    path = tmp_path / name
    save_table(grid, path)
    return str(path)


class TestCli:
    """Test the calmap command."""

    def test_bilinear_smoothing(self, tmp_path, run_cli, grid_3x3):
        """Test smoothing writes the output table."""
        source = _write(tmp_path, grid_3x3)
        output = tmp_path / "smoothed.csv"

        assert run_cli(source, "--smooth", "bilinear", "-o", str(output)) == 0
        assert load_table(output)[1][1] == "5.00"

    def test_fill_blanks(self, tmp_path, run_cli):
        """Test blank filling writes the estimate."""
        source = _write(tmp_path, [["1", "", "3"]])
        output = tmp_path / "filled.xlsx"

        assert run_cli(source, "--fill-blanks", "-o", str(output)) == 0
        assert load_table(output) == [["1", "2.0", "3"]]

    def test_headings_skipped(self, tmp_path, run_cli, headed_grid):
        """Test heading cells are left untouched."""
        source = _write(tmp_path, headed_grid)
        output = tmp_path / "out.csv"

        assert run_cli(
            source, "--smooth", "moving-average", "--window", "3",
            "--with-headings", "both", "--skip-headings", "-o", str(output),
        ) == 0
        result = load_table(output)
        assert result[0] == headed_grid[0]
        assert [row[0] for row in result] == [row[0] for row in headed_grid]
        assert result[1][1] == "25.00"

    def test_colors_printed(self, tmp_path, run_cli, capsys):
        """Test color lines for each numeric cell."""
        source = _write(tmp_path, [["1", "2"], ["3", "4"]])

        assert run_cli(source, "--colors", "THERMAL") == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 4
        assert lines[0] == "0\t0\t1\t#0000ff\t#ffffff"
        assert lines[-1] == "1\t1\t4\t#ff0000\t#ffffff"

    def test_unknown_scheme(self, tmp_path, run_cli):
        """Test an unknown scheme fails with exit code 1."""
        source = _write(tmp_path, [["1", "2"]])
        assert run_cli(source, "--colors", "SEPIA") == 1

    def test_unsupported_file(self, tmp_path, run_cli):
        """Test an unsupported input file fails with exit code 1."""
        path = tmp_path / "map.txt"
        path.write_text("1,2\n")
        assert run_cli(str(path)) == 1

    def test_missing_file(self, tmp_path, run_cli):
        """Test a missing input file fails with exit code 1."""
        assert run_cli(str(tmp_path / "absent.csv")) == 1
