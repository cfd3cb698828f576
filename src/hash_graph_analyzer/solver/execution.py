"""Execution policy and the worker pool that walks the functional graph."""

import os
import sys
from collections.abc import Callable, Iterable, Mapping, Sequence
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
from typing import TypeAlias, TypeVar

from hash_graph_analyzer.errors import InvalidConfiguration
from hash_graph_analyzer.graph.types import StepFunction

ExecutorClass: TypeAlias = type[ThreadPoolExecutor] | type[ProcessPoolExecutor] | None

T = TypeVar("T")
R = TypeVar("R")

# Environment variable to override executor selection.
HG_EXECUTOR_ENV = "HG_EXECUTOR"

# Policy name -> executor class; None runs tasks on the calling thread.
EXECUTOR_POLICIES: dict[str, ExecutorClass] = {
    "serial": None,
    "threads": ThreadPoolExecutor,
    "processes": ProcessPoolExecutor,
}


def is_gil_enabled() -> bool:
    """Check if GIL is enabled."""
    try:
        return sys._is_gil_enabled()
    except AttributeError:
        return True


@dataclass(frozen=True, slots=True)
class ExecutionPolicy:
    name: str
    executor_class: ExecutorClass
    overridden: bool = False

    def describe(self) -> str:
        gil = "enabled" if is_gil_enabled() else "disabled"
        source = f" via {HG_EXECUTOR_ENV}" if self.overridden else ""
        return f"executor={self.name}{source}, GIL={gil}"


def select_policy(environ: Mapping[str, str] | None = None) -> ExecutionPolicy:
    """
    Pick the executor for a scan.

    An ``HG_EXECUTOR`` value of "serial", "threads" or "processes" wins; any
    other non-empty value is a configuration error. Without an override,
    processes are used while the GIL is enabled and threads otherwise.
    """
    if environ is None:
        environ = os.environ
    override = environ.get(HG_EXECUTOR_ENV, "").strip().lower()

    if override:
        if override not in EXECUTOR_POLICIES:
            choices = ", ".join(EXECUTOR_POLICIES)
            raise InvalidConfiguration(
                f"{HG_EXECUTOR_ENV}={override!r} is not one of: {choices}"
            )
        return ExecutionPolicy(override, EXECUTOR_POLICIES[override], overridden=True)

    name = "processes" if is_gil_enabled() else "threads"
    return ExecutionPolicy(name, EXECUTOR_POLICIES[name])


# Step function installed once per worker by the pool initializer.
_worker_step: StepFunction | None = None


def _install_worker_step(step: StepFunction) -> None:
    global _worker_step
    _worker_step = step


def _run_with_worker_step(task: Callable[[StepFunction, T], R], item: T) -> R:
    if _worker_step is None:
        raise RuntimeError("worker step function was not installed")
    return task(_worker_step, item)


class StepPool:
    """
    Worker pool bound to one step function.

    The step is shipped to each worker once, through the pool initializer,
    and stays installed for every ``map`` issued while the pool is open.
    Tasks must be module-level functions ``task(step, item)`` when a process
    pool is used. Thread pools share one installed step, so two pools must
    not be open at the same time in one process.
    """

    def __init__(self, executor_class: ExecutorClass, workers: int | None, step: StepFunction):
        self.step = step
        self._executor_class = executor_class
        self._workers = workers
        self._executor: Executor | None = None

    def __enter__(self) -> "StepPool":
        if self._executor_class is not None:
            self._executor = self._executor_class(
                max_workers=self._workers,
                initializer=_install_worker_step,
                initargs=(self.step,),
            )
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._executor is not None:
            self._executor.shutdown()
            self._executor = None

    def map(self, task: Callable[[StepFunction, T], R], items: Iterable[T]) -> list[R]:
        """Run ``task(step, item)`` for every item, results in input order."""
        if self._executor is None:
            return [task(self.step, item) for item in items]
        return list(self._executor.map(partial(_run_with_worker_step, task), items))


def batched_list(items: Sequence[T], size: int) -> list[Sequence[T]]:
    """Split ``items`` into consecutive slices of at most ``size`` elements."""
    return [items[i : i + size] for i in range(0, len(items), size)]
