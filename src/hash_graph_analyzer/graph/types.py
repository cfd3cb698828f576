"""Shared type definitions for functional graph analysis."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeAlias

Node: TypeAlias = int
StepFunction: TypeAlias = Callable[[Node], Node]
DigestFunction: TypeAlias = Callable[[bytes], bytes]


@dataclass(frozen=True, slots=True)
class RhoShape:
    """Tail and cycle length of the rho reached from one start node."""

    tail_length: int
    cycle_length: int

    @property
    def rho_length(self) -> int:
        return self.tail_length + self.cycle_length


@dataclass(frozen=True, slots=True)
class ComponentStat:
    """One entry per discovered component.

    The tail length is the one measured from the node that triggered the
    discovery, not necessarily the longest tail in the component.
    """

    tail_length: int
    cycle_length: int


@dataclass(frozen=True, slots=True)
class NodeClassification:
    """Label attached to every node in full-labeling mode."""

    tail_length: int
    cycle_length: int
    component_id: int
