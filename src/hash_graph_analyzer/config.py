"""Analyzer configuration."""

from dataclasses import dataclass
from enum import StrEnum

from hash_graph_analyzer.errors import InvalidConfiguration
from hash_graph_analyzer.graph.oracle import DEFAULT_DIGEST, digest_bits, validate_bits

DEFAULT_BITS = 16

# Largest domain the driver will scan unless told otherwise. At 2**24 nodes the
# edge table and union-find arrays already take a few hundred MB.
DEFAULT_MAX_DOMAIN_BITS = 24

# Domain-sized arrays are int64 and node ids must fit a machine index.
HARD_MAX_DOMAIN_BITS = 62


class Strategy(StrEnum):
    """How the driver attributes nodes to components."""

    DISJOINT_SET = "disjoint-set"
    FULL_LABELING = "full-labeling"


@dataclass(frozen=True)
class AnalyzerConfig:
    """
    Validated analyzer settings.

    ``bits`` is checked against the digest's native output size here, before
    any scanning. Whether ``2**bits`` is small enough to scan is checked
    separately by the driver against ``max_domain_bits``.
    """

    bits: int = DEFAULT_BITS
    strategy: Strategy = Strategy.DISJOINT_SET
    digest_name: str = DEFAULT_DIGEST
    tabulate: bool = True
    include_mapping: bool = False
    max_domain_bits: int = DEFAULT_MAX_DOMAIN_BITS
    workers: int | None = None

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "strategy", Strategy(self.strategy))
        except ValueError as exc:
            choices = ", ".join(s.value for s in Strategy)
            raise InvalidConfiguration(
                f"unknown strategy {self.strategy!r}, expected one of: {choices}"
            ) from exc

        validate_bits(self.bits, digest_bits(self.digest_name))

        if not 0 < self.max_domain_bits <= HARD_MAX_DOMAIN_BITS:
            raise InvalidConfiguration(
                f"max_domain_bits must be in 1..{HARD_MAX_DOMAIN_BITS}, "
                f"got {self.max_domain_bits}"
            )

        if self.workers is not None and self.workers < 1:
            raise InvalidConfiguration(f"workers must be positive, got {self.workers}")

    @property
    def domain_size(self) -> int:
        return 1 << self.bits
