"""Simulation settings used by the command line driver."""

from dataclasses import dataclass
from typing import Optional

from .core.rules import NEIGHBOR_COUNTERS, LifeRule, NeighborCounter, RuleFn, standard_rule

DEFAULT_RULE = 'B3/S23'


@dataclass
class SimulationConfig:
    """Settings for a driver run.

    ``live_char``/``dead_char`` only affect the animation; pattern files
    always use 'O' and '.'.
    """

    width: int = 50
    height: int = 50
    density: float = 0.5           # Live probability for random grids
    seed: Optional[int] = None
    delay: float = 0.2             # Seconds between frames
    generations: Optional[int] = None  # None runs until interrupted
    topology: str = 'torus'
    rule: str = DEFAULT_RULE
    mutate: bool = True            # step_mut (True) or step (False)
    live_char: str = 'O'
    dead_char: str = ' '

    def __post_init__(self):
        """Validate settings after construction."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Grid dimensions must be positive")

        if not 0.0 <= self.density <= 1.0:
            raise ValueError("density must be between 0.0 and 1.0")

        if self.delay < 0:
            raise ValueError("delay must be non-negative")

        if self.generations is not None and self.generations < 0:
            raise ValueError("generations must be non-negative")

        if self.topology not in NEIGHBOR_COUNTERS:
            raise ValueError(f"Unknown topology {self.topology!r}, expected one of: "
                             f"{', '.join(sorted(NEIGHBOR_COUNTERS))}")

        if len(self.live_char) != 1 or len(self.dead_char) != 1:
            raise ValueError("live_char and dead_char must be single characters")

        # Fail early on a malformed rulestring
        self.rule_fn()

    def neighbor_counter(self) -> NeighborCounter:
        return NEIGHBOR_COUNTERS[self.topology]

    def rule_fn(self) -> RuleFn:
        """Resolve the rulestring, using the plain function for standard Conway rules."""
        rule = LifeRule.from_rulestring(self.rule)
        if rule == LifeRule.standard():
            return standard_rule
        return rule
