"""
Unit tests for swatch ranking and deduplication.
"""

import pytest

from hexpalette.services.colors.quantizer import Swatch
from hexpalette.services.colors.ranking import rank_swatches, sort_by_prominence


class TestRankSwatches:
    """Test ordering, dedup and truncation"""

    def test_sorts_by_population(self):
        """Test most populous swatch comes first"""
        swatches = [
            Swatch((0, 255, 0), 50),
            Swatch((255, 0, 0), 200),
            Swatch((0, 0, 255), 100),
        ]
        assert rank_swatches(swatches, 5) == ["#FF0000", "#0000FF", "#00FF00"]

    def test_ties_break_by_packed_rgb(self):
        """Test equal populations order by numeric RGB ascending"""
        swatches = [
            Swatch((255, 255, 0), 10),
            Swatch((0, 0, 255), 10),
            Swatch((255, 0, 0), 10),
        ]
        assert rank_swatches(swatches, 5) == ["#0000FF", "#FF0000", "#FFFF00"]

    def test_deduplicates_keeping_first(self):
        """Test duplicate hex values collapse to the most populous occurrence"""
        swatches = [
            Swatch((0x11, 0x22, 0x33), 10),
            Swatch((0x11, 0x22, 0x33), 5),
            Swatch((0x44, 0x55, 0x66), 7),
        ]
        assert rank_swatches(swatches, 5) == ["#112233", "#445566"]

    def test_truncates(self):
        swatches = [Swatch((i, 0, 0), 100 - i) for i in range(10)]
        ranked = rank_swatches(swatches, 5)
        assert ranked == ["#000000", "#010000", "#020000", "#030000", "#040000"]

    def test_empty(self):
        assert rank_swatches([], 5) == []

    def test_zero_size(self):
        assert rank_swatches([Swatch((1, 1, 1), 1)], 0) == []

    def test_negative_size(self):
        with pytest.raises(ValueError):
            rank_swatches([], -1)


class TestSortByProminence:
    """Test the shared sort key"""

    def test_stable_for_any_input_order(self):
        swatches = [Swatch((3, 0, 0), 5), Swatch((1, 0, 0), 5), Swatch((2, 0, 0), 9)]
        expected = [Swatch((2, 0, 0), 9), Swatch((1, 0, 0), 5), Swatch((3, 0, 0), 5)]
        assert sort_by_prominence(swatches) == expected
        assert sort_by_prominence(reversed(swatches)) == expected
