"""Expected rho statistics of a uniformly random mapping.

Asymptotics from Flajolet and Odlyzko, "Random Mapping Statistics" (1990).
Comparing them with the measured statistics shows how far the truncated hash
departs from an ideal random function.
"""

import math
from dataclasses import dataclass

# Limits of E[longest cycle] / sqrt(n) and E[longest tail] / sqrt(n).
LONGEST_CYCLE_CONSTANT = 0.78248
LONGEST_TAIL_CONSTANT = 1.73746


@dataclass(frozen=True, slots=True)
class RandomMappingBaseline:
    domain_size: int
    component_count: float
    tail_length: float
    cycle_length: float
    rho_length: float
    longest_cycle: float
    longest_tail: float


def random_mapping_baseline(domain_size: int) -> RandomMappingBaseline:
    """Expected values for a random mapping on ``domain_size`` points."""
    if domain_size <= 0:
        raise ValueError(f"domain_size must be positive, got {domain_size}")

    root_n = math.sqrt(domain_size)
    return RandomMappingBaseline(
        domain_size=domain_size,
        component_count=0.5 * math.log(domain_size),
        tail_length=math.sqrt(math.pi * domain_size / 8),
        cycle_length=math.sqrt(math.pi * domain_size / 8),
        rho_length=math.sqrt(math.pi * domain_size / 2),
        longest_cycle=LONGEST_CYCLE_CONSTANT * root_n,
        longest_tail=LONGEST_TAIL_CONSTANT * root_n,
    )
