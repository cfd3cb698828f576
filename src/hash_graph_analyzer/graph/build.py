"""Edge table construction for the whole domain."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TypeAlias

import numpy as np

from hash_graph_analyzer.graph.types import Node, StepFunction

IndexRange: TypeAlias = tuple[int, int]


@dataclass(frozen=True, eq=False)
class EdgeTable:
    """
    Materialized x -> H(x) map for every node of the domain.

    Targets are held in one int64 array, so the table costs 8 bytes per node
    and pickles compactly into worker processes. Calling the table looks an
    edge up, so it can stand in for the oracle as the step function of any
    walk.
    """

    targets: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "targets", np.asarray(self.targets, dtype=np.int64))

    @classmethod
    def from_chunks(cls, chunks: Iterable[Sequence[int]]) -> "EdgeTable":
        """Concatenate ordered per-range results into one table."""
        arrays = [np.asarray(chunk, dtype=np.int64) for chunk in chunks]
        if not arrays:
            return cls(np.empty(0, dtype=np.int64))
        return cls(np.concatenate(arrays))

    def __call__(self, x: Node) -> Node:
        return int(self.targets[x])

    def __len__(self) -> int:
        return len(self.targets)

    def items(self) -> Iterable[tuple[Node, Node]]:
        return enumerate(self.targets.tolist())


def split_range(size: int, chunks: int) -> list[IndexRange]:
    """Split ``[0, size)`` into at most ``chunks`` contiguous, ordered ranges."""
    if size <= 0:
        return []
    chunks = max(1, min(chunks, size))
    bounds = np.linspace(0, size, chunks + 1, dtype=np.int64)
    return [
        (int(lo), int(hi)) for lo, hi in zip(bounds[:-1], bounds[1:], strict=True) if hi > lo
    ]


def hash_range(step: StepFunction, bounds: IndexRange) -> list[Node]:
    """Evaluate ``step`` over one contiguous index range."""
    lo, hi = bounds
    return [step(x) for x in range(lo, hi)]


def build_in_degree(targets: Sequence[int], size: int) -> np.ndarray:
    """Count, for every node, how many nodes map onto it."""
    return np.bincount(np.asarray(targets, dtype=np.int64), minlength=size)


def terminal_nodes(in_degree: np.ndarray) -> list[Node]:
    """Nodes nobody maps onto: genuine tail leaves, never on a cycle."""
    return np.flatnonzero(in_degree == 0).tolist()
