"""Per-node classification map for the full-labeling strategy."""

import threading
from collections.abc import Iterable, Iterator

from hash_graph_analyzer.graph.types import ComponentStat, Node, NodeClassification


class LabelRegistry:
    """
    Maps every visited node to its ``NodeClassification``.

    Labels are write-once: ``claim_path`` only stamps nodes that carry no label
    yet, under a lock, so callers sharing one registry between threads can
    never label the same node twice. The bundled driver claims from a single
    thread. Memory grows with one entry per node of the domain.
    """

    def __init__(self) -> None:
        self._labels: dict[Node, NodeClassification] = {}
        self._components: list[ComponentStat] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._labels)

    def __contains__(self, node: object) -> bool:
        return node in self._labels

    def get(self, node: Node) -> NodeClassification | None:
        return self._labels.get(node)

    def items(self) -> Iterator[tuple[Node, NodeClassification]]:
        return iter(sorted(self._labels.items()))

    @property
    def components(self) -> list[ComponentStat]:
        """One stat per discovered component, in discovery order."""
        return list(self._components)

    def component_count(self) -> int:
        return len(self._components)

    def claim_path(
        self,
        path: Iterable[Node],
        tail_length: int,
        cycle_length: int,
    ) -> tuple[int, int]:
        """
        Stamp the unlabeled prefix of ``path`` with one shared classification.

        Walking stops at the first node that already carries a label; the
        stamped nodes then join that node's component. If no labeled node is
        reached, a new component id is allocated and its ``ComponentStat``
        recorded.

        Returns ``(component_id, nodes_labeled)``.
        """
        with self._lock:
            fresh: list[Node] = []
            component_id: int | None = None
            for node in path:
                existing = self._labels.get(node)
                if existing is not None:
                    component_id = existing.component_id
                    break
                fresh.append(node)

            if component_id is None:
                component_id = len(self._components)
                self._components.append(ComponentStat(tail_length, cycle_length))

            label = NodeClassification(tail_length, cycle_length, component_id)
            for node in fresh:
                self._labels[node] = label
            return component_id, len(fresh)
