"""Reduction of tail and cycle samples to summary statistics."""

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, slots=True)
class ComponentStatistics:
    """Domain-wide summary of the discovered rho shapes."""

    component_count: int
    tail_samples: int = 0
    tail_avg: float = 0.0
    tail_median: float = 0.0
    tail_max: int = 0
    cycle_samples: int = 0
    cycle_min: int = 0
    cycle_avg: float = 0.0
    cycle_median: float = 0.0
    cycle_max: int = 0


def _as_array(values: Iterable[int]) -> np.ndarray:
    return np.fromiter(values, dtype=np.int64)


def summarize(
    tail_lengths: Iterable[int],
    cycle_lengths: Iterable[int],
    component_count: int | None = None,
) -> ComponentStatistics:
    """
    Summarize tail and cycle samples.

    The two samples may differ in size since tails and cycles can be sampled
    from different representatives. An empty sample yields 0 for each of its
    statistics. ``component_count`` defaults to the number of cycle samples.
    """
    tails = _as_array(tail_lengths)
    cycles = _as_array(cycle_lengths)
    if component_count is None:
        component_count = int(cycles.size)

    fields: dict[str, int | float] = {}
    if tails.size:
        fields.update(
            tail_samples=int(tails.size),
            tail_avg=float(tails.mean()),
            tail_median=float(np.median(tails)),
            tail_max=int(tails.max()),
        )
    if cycles.size:
        fields.update(
            cycle_samples=int(cycles.size),
            cycle_min=int(cycles.min()),
            cycle_avg=float(cycles.mean()),
            cycle_median=float(np.median(cycles)),
            cycle_max=int(cycles.max()),
        )
    return ComponentStatistics(component_count, **fields)
