import logging
import sys
import time
from collections.abc import Sequence
from dataclasses import dataclass

from hash_graph_analyzer.config import HARD_MAX_DOMAIN_BITS, AnalyzerConfig, Strategy
from hash_graph_analyzer.errors import DomainOverflow, InvalidConfiguration
from hash_graph_analyzer.graph.build import (
    EdgeTable,
    build_in_degree,
    hash_range,
    split_range,
    terminal_nodes,
)
from hash_graph_analyzer.graph.oracle import TruncatedHashOracle
from hash_graph_analyzer.graph.rho import detect_many, walk
from hash_graph_analyzer.graph.types import ComponentStat, Node, RhoShape, StepFunction
from hash_graph_analyzer.registry import DisjointSet, LabelRegistry
from hash_graph_analyzer.solver.execution import (
    ExecutionPolicy,
    StepPool,
    batched_list,
    select_policy,
)
from hash_graph_analyzer.stats import (
    ComponentStatistics,
    RandomMappingBaseline,
    random_mapping_baseline,
    summarize,
)

logger = logging.getLogger(__name__)

# Nodes hashed per task during the edge pass.
EDGE_RANGE_SIZE = 4096

# Start nodes per rho detection task.
DETECT_BATCH_SIZE = 256

# Domain slice whose unlabeled starts are measured together in full labeling.
LABELING_WINDOW = 16 * DETECT_BATCH_SIZE

# What each strategy's tail sample is measured from.
TAIL_SAMPLE_SOURCE = {
    Strategy.DISJOINT_SET: "in-degree-0 nodes",
    Strategy.FULL_LABELING: "discovery starts",
}


@dataclass
class AnalysisReport:
    """Everything one scan of the domain produced."""

    config: AnalyzerConfig
    statistics: ComponentStatistics
    baseline: RandomMappingBaseline
    components: list[ComponentStat]
    mapping: EdgeTable | None = None
    labels: LabelRegistry | None = None


def ensure_feasible_domain(bits: int, max_domain_bits: int) -> int:
    """Return the domain size 2**bits, or raise DomainOverflow if it cannot be scanned."""
    limit = min(max_domain_bits, HARD_MAX_DOMAIN_BITS)
    size = 1 << bits
    if bits > limit or size > sys.maxsize:
        raise DomainOverflow(
            f"domain of 2**{bits} nodes exceeds the scannable limit of 2**{limit}"
        )
    return size


def ensure_oracle_matches(oracle: StepFunction, bits: int) -> None:
    """Reject an injected oracle whose output width differs from the domain."""
    oracle_bits = getattr(oracle, "bits", bits)
    if oracle_bits != bits:
        raise InvalidConfiguration(
            f"oracle maps onto 2**{oracle_bits} nodes but the domain has 2**{bits}"
        )


def build_edge_table(pool: StepPool, size: int) -> EdgeTable:
    """Hash every node of ``[0, size)``, one contiguous range per task."""
    ranges = split_range(size, -(-size // EDGE_RANGE_SIZE))
    return EdgeTable.from_chunks(pool.map(hash_range, ranges))


def detect_from(pool: StepPool, starts: Sequence[Node]) -> list[RhoShape]:
    """Run rho detection from every start in parallel batches, preserving order."""
    shapes: list[RhoShape] = []
    for batch in pool.map(detect_many, batched_list(starts, DETECT_BATCH_SIZE)):
        shapes.extend(batch)
    return shapes


def scan_disjoint_set(
    table: EdgeTable,
    pool: StepPool,
) -> tuple[ComponentStatistics, list[ComponentStat]]:
    """
    Union every edge, then sample tails from terminal nodes and cycles from
    one representative per set.

    Unions run on the calling thread; only the rho detection fans out.
    """
    size = len(table)
    forest = DisjointSet(size)
    for x, y in table.items():
        forest.union(x, y)
    in_degree = build_in_degree(table.targets, size)

    terminals = terminal_nodes(in_degree)
    representatives = [first for _, first in forest.representatives()]
    logger.debug(
        "Union-find done: %d components, %d terminal nodes",
        forest.count(),
        len(terminals),
    )

    tail_shapes = detect_from(pool, terminals)
    cycle_shapes = detect_from(pool, representatives)

    components = [ComponentStat(s.tail_length, s.cycle_length) for s in cycle_shapes]
    statistics = summarize(
        (s.tail_length for s in tail_shapes),
        (c.cycle_length for c in components),
        component_count=forest.count(),
    )
    return statistics, components


def scan_full_labeling(
    size: int,
    pool: StepPool,
    registry: LabelRegistry,
) -> tuple[ComponentStatistics, list[ComponentStat]]:
    """
    Label every node of ``[0, size)`` in domain order.

    Each unlabeled start is measured, then its walk of ``mu + lambda`` nodes
    is stamped with that start's (mu, lambda). Intermediate nodes therefore
    carry the start's tail length rather than their own distance to the cycle.

    The domain is processed in windows: the unlabeled starts of a window are
    measured on the pool, then claimed in domain order, skipping starts an
    earlier claim in the same window has already labeled. A start's shape
    does not depend on the registry, so the labels match a serial scan.
    """
    for lo in range(0, size, LABELING_WINDOW):
        starts = [x for x in range(lo, min(lo + LABELING_WINDOW, size)) if x not in registry]
        shapes = detect_from(pool, starts)
        for start, shape in zip(starts, shapes, strict=True):
            if start in registry:
                continue
            registry.claim_path(
                walk(pool.step, start, shape.rho_length),
                shape.tail_length,
                shape.cycle_length,
            )

    components = registry.components
    statistics = summarize(
        (c.tail_length for c in components),
        (c.cycle_length for c in components),
    )
    return statistics, components


def _log_start(config: AnalyzerConfig, size: int, policy: ExecutionPolicy) -> None:
    workers = "auto" if config.workers is None else config.workers
    logger.info(
        "Starting: bits=%d, nodes=%d, strategy=%s, digest=%s, workers=%s, %s",
        config.bits,
        size,
        config.strategy,
        config.digest_name,
        workers,
        policy.describe(),
    )


def _log_timings(timings: dict[str, float], total: float) -> None:
    measured = sum(timings.values())
    if measured > 0:
        breakdown = ", ".join(
            f"{name}={seconds:.2f}s ({100 * seconds / measured:.0f}%)"
            for name, seconds in timings.items()
        )
        logger.debug("Timing breakdown: %s", breakdown)
    logger.debug("Total wall time %.2fs", total)


def analyze(
    config: AnalyzerConfig | None = None,
    oracle: StepFunction | None = None,
) -> AnalysisReport:
    """
    Characterize the functional graph of the truncated hash over [0, 2**bits).

    Passes:
    1. Hash the whole domain into an edge table (parallel, ordered)
    2. Attribute nodes to components (disjoint-set or full labeling)
    3. Reduce tail and cycle samples to statistics
    """
    total_start = time.perf_counter()
    if config is None:
        config = AnalyzerConfig()

    size = ensure_feasible_domain(config.bits, config.max_domain_bits)
    if oracle is None:
        oracle = TruncatedHashOracle(config.bits, config.digest_name)
    ensure_oracle_matches(oracle, config.bits)

    policy = select_policy()
    _log_start(config, size, policy)
    timings: dict[str, float] = {}

    # Pass 1: edge table. Disjoint-set always needs it for the unions.
    table: EdgeTable | None = None
    if config.strategy is Strategy.DISJOINT_SET or config.tabulate or config.include_mapping:
        pass_start = time.perf_counter()
        with StepPool(policy.executor_class, config.workers, oracle) as pool:
            table = build_edge_table(pool, size)
        timings["edges"] = time.perf_counter() - pass_start
        logger.info("Pass 1 done: %d edges hashed in %.2fs", len(table), timings["edges"])

    step: StepFunction = table if config.tabulate and table is not None else oracle

    # Pass 2: component attribution.
    pass_start = time.perf_counter()
    labels: LabelRegistry | None = None
    with StepPool(policy.executor_class, config.workers, step) as pool:
        if config.strategy is Strategy.DISJOINT_SET:
            statistics, components = scan_disjoint_set(table, pool)
        else:
            labels = LabelRegistry()
            statistics, components = scan_full_labeling(size, pool, labels)
    timings["components"] = time.perf_counter() - pass_start
    logger.info(
        "Pass 2 done: %d components found in %.2fs",
        statistics.component_count,
        timings["components"],
    )

    _log_timings(timings, time.perf_counter() - total_start)
    logger.info(
        "Result: %d components, max tail %d, max cycle %d",
        statistics.component_count,
        statistics.tail_max,
        statistics.cycle_max,
    )

    return AnalysisReport(
        config=config,
        statistics=statistics,
        baseline=random_mapping_baseline(size),
        components=components,
        mapping=table if config.include_mapping else None,
        labels=labels,
    )


def format_report(report: AnalysisReport) -> list[str]:
    """
    Render the summary lines printed by the command line.

    The baseline tail is the expectation for a uniformly chosen node. The
    measured tail sample is not uniform (leaves or discovery starts), so the
    tail line names its source.
    """
    stats = report.statistics
    base = report.baseline
    source = TAIL_SAMPLE_SOURCE[report.config.strategy]
    return [
        f"Total Components: {stats.component_count}",
        f"Tail Lengths: Avg={stats.tail_avg:.2f} Max={stats.tail_max} (from {source})",
        f"Cycle Lengths: Min={stats.cycle_min} Avg={stats.cycle_avg:.2f} Max={stats.cycle_max}",
        (
            f"Random Mapping (N={base.domain_size}): Components={base.component_count:.2f} "
            f"NodeTail={base.tail_length:.2f} Cycle={base.cycle_length:.2f} "
            f"MaxTail={base.longest_tail:.2f} MaxCycle={base.longest_cycle:.2f}"
        ),
    ]


def main_analyze(
    config: AnalyzerConfig | None = None,
    dump_mapping: bool = False,
    dump_labels: bool = False,
) -> AnalysisReport:
    """Main entry point that prints the report to stdout."""
    report = analyze(config)

    for line in format_report(report):
        print(line)

    if dump_mapping and report.mapping is not None:
        for x, y in report.mapping.items():
            print(f"{x} -> {y}")

    if dump_labels and report.labels is not None:
        for node, label in report.labels.items():
            print(
                f"{node}: tail={label.tail_length} cycle={label.cycle_length} "
                f"component={label.component_id}"
            )

    return report
