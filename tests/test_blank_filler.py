"""
Blank Filling Tests for calmap.

Tests cover:
- Inverse-distance weighting from the four axis directions
- Output precision
- Labels blocking the search
- Mask confinement, ragged rows and repeat application
"""

import copy

from calmap.data_input.cell_parser import is_blank
from calmap.data_input.grid import Mask, ParsedGrid
from calmap.smoothing.blank_filler import auto_fill_blanks, find_nearest_value


class TestAutoFillBlanks:
    """Test blank-cell filling."""

    def test_single_row(self):
        """Test equal-distance neighbors average evenly."""
        assert auto_fill_blanks([["10", "", "30"]]) == [["10", "20.0", "30"]]

    def test_inverse_distance_weights(self):
        """Test nearer cells weigh more and filled cells are not reused."""
        result = auto_fill_blanks([["10", "", "", "40"]])
        # (10 * 1 + 40 * 1/2) / 1.5 and (10 * 1/2 + 40 * 1) / 1.5
        assert result == [["10", "20.0", "30.0", "40"]]

    def test_four_directions(self, grid_3x3):
        """Test vertical and horizontal neighbors all contribute."""
        grid = copy.deepcopy(grid_3x3)
        grid[1][1] = ""
        assert auto_fill_blanks(grid)[1][1] == "5.0"

    def test_precision_from_sources(self):
        """Test the widest source precision is used, ties rounding up."""
        result = auto_fill_blanks([["1.25", "", "5"]])
        assert result[0][1] == "3.13"

    def test_label_blocks_direction(self):
        """Test a label ends the search in its direction."""
        result = auto_fill_blanks([["10", "N/A", "", "30"]])
        assert result == [["10", "N/A", "30.0", "30"]]

    def test_unreachable_blank_stays(self):
        """Test blanks without a numeric source are left blank."""
        assert auto_fill_blanks([["", ""]]) == [["", ""]]
        assert auto_fill_blanks([["abc", "", "abc"]]) == [["abc", "", "abc"]]

    def test_nbsp_and_markup_blanks(self):
        """Test non-breaking-space and markup-only cells are filled."""
        result = auto_fill_blanks([["2", "&nbsp;", "<p></p>", "8"]])
        assert result == [["2", "4.0", "6.0", "8"]]

    def test_non_blank_cells_untouched(self, fuel_map):
        """Test numbers and labels are returned unchanged."""
        result = auto_fill_blanks(fuel_map, Mask(True, True))
        for i, row in enumerate(fuel_map):
            for j, raw in enumerate(row):
                if not is_blank(raw):
                    assert result[i][j] is raw

    def test_fuel_map(self, fuel_map):
        """Test filling the sample fuel map."""
        result = auto_fill_blanks(fuel_map, Mask(True, True))
        # Up: heading excluded; down 13.5, left 12.0, right 14.25, all at distance 1
        assert result[1][3] == "13.25"
        # Up 11.0 and right 14.0 at distance 1; left is a heading
        assert result[3][1] == "12.5"

    def test_mask_excludes_headings(self):
        """Test heading cells are neither sources nor filled."""
        grid = [
            ["", "100", "200"],
            ["1000", "10", ""],
            ["2000", "", "30"],
        ]
        result = auto_fill_blanks(grid, Mask(skip_first_row=True, skip_first_column=True))
        assert result[0][0] == ""
        assert result[1][2] == "20.0"
        assert result[2][1] == "20.0"

    def test_ragged_rows(self):
        """Test missing cells of short rows end the search."""
        assert auto_fill_blanks([["1", "", "3"], ["4"]]) == [["1", "2.0", "3"], ["4"]]
        assert auto_fill_blanks([["1", "2"], [""]]) == [["1", "2"], ["1.0"]]

    def test_repeat_application(self, fuel_map):
        """Test a second pass changes nothing once every blank is filled."""
        once = auto_fill_blanks(fuel_map, Mask(True, True))
        assert not any(is_blank(cell) for row in once[1:] for cell in row[1:])
        assert auto_fill_blanks(once, Mask(True, True)) == once

    def test_input_not_modified(self, fuel_map):
        """Test the input grid is left untouched."""
        original = copy.deepcopy(fuel_map)
        auto_fill_blanks(fuel_map)
        assert fuel_map == original

    def test_empty_grid(self):
        """Test an empty grid comes back empty."""
        assert auto_fill_blanks([]) == []

    def test_overflowing_estimate_stays_blank(self):
        """Test a blank whose weighted sum overflows is left empty."""
        grid = [["1.7e308", "", "1.7e308"], ["1", "", "3"]]
        assert auto_fill_blanks(grid) == [["1.7e308", "", "1.7e308"], ["1", "2.0", "3"]]


class TestFindNearestValue:
    """Test the directional search."""

    def test_distance_and_precision(self):
        """Test the search reports steps taken and source precision."""
        parsed = ParsedGrid.from_rows([["", "", "", "7.25"]])
        neighbor = find_nearest_value(parsed, 0, 0, (0, 1), Mask())
        assert neighbor.value == 7.25
        assert neighbor.distance == 3
        assert neighbor.decimal_places == 2

    def test_edge_of_grid(self):
        """Test a search leaving the grid finds nothing."""
        parsed = ParsedGrid.from_rows([["", "5"]])
        assert find_nearest_value(parsed, 0, 0, (0, -1), Mask()) is None
        assert find_nearest_value(parsed, 0, 0, (-1, 0), Mask()) is None
