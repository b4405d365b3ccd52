from collections import Counter
from dataclasses import replace

from .intrusion import Config, EndCondition, Simulator


def run_many(config: Config, runs: int) -> Counter[EndCondition]:
    """Run `runs` silent simulations and count how each one ended.

    If the configuration has a seed, run i uses seed + i, so a batch is repeatable.
    """

    outcomes: Counter[EndCondition] = Counter()
    for i in range(runs):
        run_config: Config = config if config.seed is None else replace(config, seed=config.seed + i)
        outcomes[Simulator(run_config, None).simulate()] += 1
    return outcomes


def outcome_rates(outcomes: Counter[EndCondition]) -> dict[EndCondition, float]:
    """Fraction of runs ending with each end condition (0 for the ones never reached)."""

    total: int = sum(outcomes.values())
    if total == 0:
        return {condition: 0.0 for condition in EndCondition}
    return {condition: outcomes[condition] / total for condition in EndCondition}
