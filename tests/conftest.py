"""
Pytest Configuration and Fixtures for calmap Tests.

This module provides shared fixtures for all tests.
"""

import logging
import sys
from pathlib import Path
from typing import List

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


# =============================================================================
# SAMPLE GRID FIXTURES
# =============================================================================

@pytest.fixture
def grid_3x3() -> List[List[str]]:
    """Plain 3x3 grid of integers 1..9."""
    return [
        ["1", "2", "3"],
        ["4", "5", "6"],
        ["7", "8", "9"],
    ]


@pytest.fixture
def headed_grid() -> List[List[str]]:
    """2x2 map with numeric heading row (RPM) and heading column (load)."""
    return [
        ["0", "1000", "2000"],
        ["20", "10", "20"],
        ["40", "30", "40"],
    ]


@pytest.fixture
def fuel_map() -> List[List[str]]:
    """Fuel map with labels, markup, blanks and mixed precision."""
    return [
        ["Load/RPM", "1000", "2000", "3000", "4000"],
        ["20", "10.5", "<b>12.0</b>", "", "14.25"],
        ["40", "11.0", "N/A", "13.5", "15.0"],
        ["60", "&nbsp;", "14.0", "15.5", "16.75"],
    ]


@pytest.fixture
def integer_grid() -> List[List[str]]:
    """Integer-valued 6x7 grid with labels and blanks scattered through it."""
    return [
        ["3", "8", "1", "label", "6", "2", "9"],
        ["7", "", "4", "5", "1", "8", "3"],
        ["2", "6", "9", "3", "x", "4", "7"],
        ["5", "1", "8", "2", "6", "", "4"],
        ["9", "3", "n/a", "7", "5", "1", "8"],
        ["4", "7", "2", "6", "3", "9", "1"],
    ]


# =============================================================================
# LOGGING FIXTURES
# =============================================================================

@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after a test reconfigures them."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
