"""Monte Carlo driver: repeat the gauntlet and aggregate the outcomes."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Sequence
import logging
import time

from .exceptions import ConfigurationError
from .fleet import Fleet
from .multi_battle import MultiBattle

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    victory_probability: Dict[str, float] = field(default_factory=dict)
    draw_probability: float = 0.0
    # Survivors per ship type, averaged over the iterations the fleet won
    expected_survivors: Dict[str, Dict[str, float]] = field(default_factory=dict)
    iterations: int = 0
    time_taken: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "victory_probability": dict(self.victory_probability),
            "draw_probability": self.draw_probability,
            "expected_survivors": {k: dict(v) for k, v in self.expected_survivors.items()},
            "iterations": self.iterations,
            "time_taken": self.time_taken,
        }


class CombatSimulator:
    def simulate(self, fleets: Sequence[Fleet], iterations: int) -> SimulationResult:
        """Run ``iterations`` independent gauntlets over ``fleets``.

        Fleets are reset before every iteration, so the same objects can be
        passed to repeated calls.  They must not be shared with another
        simulation running at the same time.
        """
        if iterations < 1:
            raise ConfigurationError(f"iterations must be at least 1, got {iterations}")

        wins: Dict[str, int] = {fleet.name: 0 for fleet in fleets}
        survivors: Dict[str, Dict[str, int]] = {fleet.name: {} for fleet in fleets}
        draws = 0

        start = time.perf_counter()
        for _ in range(iterations):
            for fleet in fleets:
                fleet.reset()
            gauntlet = MultiBattle(fleets)
            gauntlet.run()
            remaining = gauntlet.get_remaining_fleets()
            if not remaining:
                draws += 1
                continue
            winner = remaining[0]
            wins[winner.name] += 1
            tally = survivors[winner.name]
            for ship in winner.get_living_ships():
                tally[ship.type.value] = tally.get(ship.type.value, 0) + 1
        elapsed = time.perf_counter() - start

        result = SimulationResult(
            victory_probability={name: count / iterations for name, count in wins.items()},
            draw_probability=draws / iterations,
            expected_survivors={
                name: {t: n / wins[name] for t, n in tally.items()} if wins[name] else {}
                for name, tally in survivors.items()
            },
            iterations=iterations,
            time_taken=elapsed,
        )
        logger.info(
            "simulated %d iteration(s) over %d fleet(s) in %.3fs: %s, draw %.3f",
            iterations,
            len(fleets),
            elapsed,
            ", ".join(f"{k} {v:.3f}" for k, v in result.victory_probability.items()),
            result.draw_probability,
        )
        return result


__all__ = ["CombatSimulator", "SimulationResult"]
