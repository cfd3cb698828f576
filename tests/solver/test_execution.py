"""Tests for execution-policy helpers."""

import operator
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor

import pytest

from hash_graph_analyzer.errors import InvalidConfiguration
from hash_graph_analyzer.graph.build import hash_range
from hash_graph_analyzer.solver import execution


def _apply_step(step, item: int) -> int:
    return step(item)


def test_executor_override_modes(monkeypatch) -> None:
    monkeypatch.setenv(execution.HG_EXECUTOR_ENV, "serial")
    policy = execution.select_policy()
    assert (policy.name, policy.executor_class, policy.overridden) == ("serial", None, True)

    monkeypatch.setenv(execution.HG_EXECUTOR_ENV, " Threads ")
    assert execution.select_policy().executor_class is ThreadPoolExecutor

    monkeypatch.setenv(execution.HG_EXECUTOR_ENV, "processes")
    assert execution.select_policy().executor_class is ProcessPoolExecutor


def test_executor_auto_policy(monkeypatch) -> None:
    monkeypatch.delenv(execution.HG_EXECUTOR_ENV, raising=False)

    monkeypatch.setattr(execution, "is_gil_enabled", lambda: True)
    policy = execution.select_policy()
    assert (policy.name, policy.overridden) == ("processes", False)
    assert policy.describe() == "executor=processes, GIL=enabled"

    monkeypatch.setattr(execution, "is_gil_enabled", lambda: False)
    assert execution.select_policy().name == "threads"


def test_explicit_environ_mapping() -> None:
    policy = execution.select_policy({execution.HG_EXECUTOR_ENV: "serial"})
    assert policy.describe().startswith("executor=serial via HG_EXECUTOR")


def test_unknown_override_rejected(monkeypatch) -> None:
    monkeypatch.setenv(execution.HG_EXECUTOR_ENV, "gpu")
    with pytest.raises(InvalidConfiguration):
        execution.select_policy()


class TestStepPool:
    """Test cases for StepPool."""

    def test_serial_and_threads_agree(self) -> None:
        items = list(range(20))
        with execution.StepPool(None, None, lambda x: x + 100) as pool:
            serial = pool.map(_apply_step, items)
        with execution.StepPool(ThreadPoolExecutor, 4, lambda x: x + 100) as pool:
            threaded = pool.map(_apply_step, items)
            # The installed step serves every map while the pool is open.
            again = pool.map(_apply_step, [1, 2])
        assert serial == threaded == [x + 100 for x in items]
        assert again == [101, 102]

    def test_processes_receive_step(self) -> None:
        with execution.StepPool(ProcessPoolExecutor, 2, operator.neg) as pool:
            assert pool.map(hash_range, [(0, 2), (2, 4)]) == [[0, -1], [-2, -3]]


def test_batched_list() -> None:
    assert execution.batched_list([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]
    assert execution.batched_list([], 3) == []
