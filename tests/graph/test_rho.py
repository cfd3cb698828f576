"""Tests for Floyd rho detection."""

from hash_graph_analyzer.graph.rho import cycle_entry, detect_many, detect_rho, iterate, walk
from hash_graph_analyzer.graph.types import RhoShape


def lcg(x: int) -> int:
    return (x * 5 + 1) % 256


class TestDetectRho:
    """Test cases for detect_rho."""

    def test_full_period_lcg(self) -> None:
        """x -> 5x + 1 mod 256 satisfies Hull-Dobell: one cycle through every node."""
        assert detect_rho(0, lcg) == RhoShape(0, 256)
        assert detect_rho(123, lcg) == RhoShape(0, 256)

    def test_self_loop(self) -> None:
        mapping = {0: 0, 1: 0, 2: 1}
        assert detect_rho(0, mapping.__getitem__) == RhoShape(0, 1)
        assert detect_rho(2, mapping.__getitem__) == RhoShape(2, 1)

    def test_rho_shape(self) -> None:
        """0 -> 1 -> 2 -> 3 -> 4 -> 2: tail of 2, cycle of 3."""
        mapping = {0: 1, 1: 2, 2: 3, 3: 4, 4: 2}
        shape = detect_rho(0, mapping.__getitem__)
        assert shape == RhoShape(2, 3)
        assert shape.rho_length == 5
        assert cycle_entry(0, shape, mapping.__getitem__) == 2

    def test_start_on_cycle_has_no_tail(self) -> None:
        mapping = {0: 1, 1: 2, 2: 3, 3: 4, 4: 2}
        assert detect_rho(3, mapping.__getitem__) == RhoShape(0, 3)

    def test_two_cycle(self) -> None:
        assert detect_rho(6, lambda x: x ^ 1) == RhoShape(0, 2)

    def test_long_tail_into_fixed_point(self) -> None:
        # Halving reaches 0 after bit_length(x) steps.
        assert detect_rho(200, lambda x: x // 2) == RhoShape(8, 1)

    def test_cycle_returns_to_itself(self) -> None:
        mapping = {0: 5, 5: 6, 6: 7, 7: 8, 8: 6}
        step = mapping.__getitem__
        shape = detect_rho(0, step)
        entry = cycle_entry(0, shape, step)
        assert iterate(step, entry, shape.cycle_length) == entry

    def test_replay_visits_distinct_nodes(self) -> None:
        mapping = {0: 1, 1: 2, 2: 3, 3: 4, 4: 2}
        step = mapping.__getitem__
        shape = detect_rho(0, step)
        path = list(walk(step, 0, shape.rho_length))
        assert path == [0, 1, 2, 3, 4]
        assert step(path[-1]) in path


def test_detect_many_preserves_order() -> None:
    shapes = detect_many(lambda x: x // 2, [1, 0, 4])
    assert shapes == [RhoShape(1, 1), RhoShape(0, 1), RhoShape(3, 1)]


def test_iterate_zero_steps() -> None:
    assert iterate(lcg, 17, 0) == 17
