"""Constant-memory rho detection (Floyd's tortoise and hare)."""

from collections.abc import Iterator, Sequence

from hash_graph_analyzer.graph.types import Node, RhoShape, StepFunction


def detect_rho(start: Node, step: StepFunction) -> RhoShape:
    """
    Measure the rho reached from ``start`` under the map ``step``.

    Three phases:
    1. Tortoise moves one step, hare two, until they meet inside the cycle.
    2. Tortoise restarts at ``start``; both move one step until they meet at
       the cycle entry. The number of steps is the tail length (mu).
    3. One pointer walks around the cycle back to the entry. The number of
       steps is the cycle length (lambda), at least 1.

    Only a handful of integers are kept regardless of path length. The tail
    length is measured from ``start`` and is 0 when ``start`` is on the cycle.
    """
    tortoise = step(start)
    hare = step(tortoise)
    while tortoise != hare:
        tortoise = step(tortoise)
        hare = step(step(hare))

    tail_length = 0
    tortoise = start
    while tortoise != hare:
        tortoise = step(tortoise)
        hare = step(hare)
        tail_length += 1

    cycle_length = 1
    hare = step(tortoise)
    while tortoise != hare:
        hare = step(hare)
        cycle_length += 1

    return RhoShape(tail_length, cycle_length)


def iterate(step: StepFunction, start: Node, count: int) -> Node:
    """Apply ``step`` to ``start`` ``count`` times."""
    node = start
    for _ in range(count):
        node = step(node)
    return node


def walk(step: StepFunction, start: Node, count: int) -> Iterator[Node]:
    """Yield ``start`` and the nodes after it, ``count`` nodes in total."""
    node = start
    for _ in range(count):
        yield node
        node = step(node)


def cycle_entry(start: Node, shape: RhoShape, step: StepFunction) -> Node:
    """Return the first node on the cycle reached from ``start``."""
    return iterate(step, start, shape.tail_length)


def detect_many(step: StepFunction, starts: Sequence[Node]) -> list[RhoShape]:
    """Run ``detect_rho`` from every start, preserving order."""
    return [detect_rho(start, step) for start in starts]
