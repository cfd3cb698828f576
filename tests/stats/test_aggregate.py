"""Tests for statistics aggregation."""

import math

import pytest

from hash_graph_analyzer.stats import ComponentStatistics, random_mapping_baseline, summarize


class TestSummarize:
    """Test cases for summarize."""

    def test_basic_statistics(self) -> None:
        stats = summarize([1, 2, 3, 6], [2, 4, 9])
        assert stats.component_count == 3
        assert stats.tail_samples == 4
        assert stats.tail_avg == pytest.approx(3.0)
        assert stats.tail_median == pytest.approx(2.5)
        assert stats.tail_max == 6
        assert stats.cycle_samples == 3
        assert stats.cycle_min == 2
        assert stats.cycle_avg == pytest.approx(5.0)
        assert stats.cycle_median == pytest.approx(4.0)
        assert stats.cycle_max == 9

    def test_explicit_component_count(self) -> None:
        stats = summarize([], [1, 1], component_count=7)
        assert stats.component_count == 7

    def test_empty_samples_default_to_zero(self) -> None:
        assert summarize([], []) == ComponentStatistics(0)

    def test_empty_tails_only(self) -> None:
        stats = summarize([], [2, 2, 2])
        assert stats.tail_avg == 0
        assert stats.tail_max == 0
        assert stats.cycle_min == 2

    def test_accepts_generators(self) -> None:
        stats = summarize((x for x in [4]), (x for x in [1]))
        assert (stats.tail_max, stats.cycle_max) == (4, 1)


class TestRandomMappingBaseline:
    """Test cases for random_mapping_baseline."""

    def test_values_for_16_bits(self) -> None:
        n = 1 << 16
        base = random_mapping_baseline(n)
        assert base.tail_length == pytest.approx(math.sqrt(math.pi * n / 8))
        assert base.cycle_length == base.tail_length
        assert base.rho_length == pytest.approx(2 * base.tail_length)
        assert base.component_count == pytest.approx(8 * math.log(2))
        assert base.longest_cycle == pytest.approx(0.78248 * 256)

    def test_rejects_empty_domain(self) -> None:
        with pytest.raises(ValueError):
            random_mapping_baseline(0)
