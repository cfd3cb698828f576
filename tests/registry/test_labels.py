"""Tests for the full-labeling registry."""

import threading

from hash_graph_analyzer.graph.types import ComponentStat, NodeClassification
from hash_graph_analyzer.registry import LabelRegistry


class TestLabelRegistry:
    """Test cases for LabelRegistry."""

    def test_new_path_opens_component(self) -> None:
        registry = LabelRegistry()
        component_id, labeled = registry.claim_path([0, 1, 2, 3], 2, 2)
        assert (component_id, labeled) == (0, 4)
        assert registry.component_count() == 1
        assert registry.components == [ComponentStat(2, 2)]
        assert registry.get(1) == NodeClassification(2, 2, 0)
        assert 3 in registry
        assert len(registry) == 4

    def test_path_into_labeled_node_joins_component(self) -> None:
        registry = LabelRegistry()
        registry.claim_path([0, 1, 2], 0, 3)
        component_id, labeled = registry.claim_path([7, 8, 1, 2, 0], 2, 3)
        assert (component_id, labeled) == (0, 2)
        assert registry.component_count() == 1
        assert registry.get(8) == NodeClassification(2, 3, 0)

    def test_labels_are_never_overwritten(self) -> None:
        registry = LabelRegistry()
        registry.claim_path([5], 0, 1)
        registry.claim_path([9, 5], 1, 1)
        assert registry.get(5) == NodeClassification(0, 1, 0)

    def test_items_sorted_by_node(self) -> None:
        registry = LabelRegistry()
        registry.claim_path([3, 1, 2], 0, 3)
        assert [node for node, _ in registry.items()] == [1, 2, 3]

    def test_concurrent_claims_label_each_node_once(self) -> None:
        registry = LabelRegistry()
        # Every path ends on the shared cycle 0 <-> 1.
        paths = [[100 + i, 0, 1] for i in range(50)]

        threads = [
            threading.Thread(target=registry.claim_path, args=(path, 1, 2)) for path in paths
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(registry) == 52
        assert registry.component_count() == 1
        assert {label.component_id for _, label in registry.items()} == {0}
