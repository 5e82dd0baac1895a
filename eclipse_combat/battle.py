"""Single bout between an attacking and a defending fleet.

Timing follows the rulebook: every missile volley resolves first, by
descending initiative, then engagement rounds repeat the cannon volleys in the
same order until one side is gone.  At equal initiative the defender fires
first.  Ships regenerate hull after every full round.  If neither side can
still shoot, or :data:`~eclipse_combat.constants.MAX_ROUNDS` pass, the
defender holds the hex.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, List, Optional, Sequence
import logging

from .constants import HIT, MAX_ROUNDS
from .fleet import Fleet
from .ship import Ship, Shot

logger = logging.getLogger(__name__)


class BattleOutcome(str, Enum):
    ATTACKER = "attacker"
    DEFENDER = "defender"
    DRAW = "draw"


@dataclass
class BattleResult:
    outcome: BattleOutcome
    victors: List[Ship] = field(default_factory=list)


@dataclass(eq=False)
class Phase:
    """One firing slot of one fleet, repeated every round for cannons."""

    ships: List[Ship]
    initiative: int
    shooting_fleet: Fleet
    target_fleet: Fleet
    missile_phase: bool = False

    def has_living_ships(self) -> bool:
        return any(ship.is_alive() for ship in self.ships)


class Battle:
    def __init__(self, attacker: Fleet, defender: Fleet, max_rounds: int = MAX_ROUNDS):
        self.attacker = attacker
        self.defender = defender
        self.max_rounds = max_rounds
        self.rounds = 0

    # ----- Public API -----

    def fight(self) -> BattleResult:
        self.rounds = 0
        result = self._check_outcome()
        if result is None:
            result = self._run()
        logger.debug(
            "%s attacks %s: %s after %d round(s), %d victor(s)",
            self.attacker.name,
            self.defender.name,
            result.outcome.value,
            self.rounds,
            len(result.victors),
        )
        return result

    # ----- Scheduling -----

    def build_phases(self) -> List[Phase]:
        """Firing order for the whole bout: missiles, then cannons."""
        phases: List[Phase] = []
        # Defender listed first so the stable sort lets it win initiative ties
        for fleet, opponent in ((self.defender, self.attacker), (self.attacker, self.defender)):
            with_missiles = fleet.has_missiles()
            for initiative in fleet.get_initiatives():
                at_initiative = [s for s in fleet.ships if s.initiative == initiative]
                phases.append(Phase(at_initiative, initiative, fleet, opponent))
                if with_missiles:
                    launchers = [s for s in at_initiative if s.has_missiles()]
                    if launchers:
                        phases.append(Phase(launchers, initiative, fleet, opponent, missile_phase=True))
        phases.sort(key=lambda p: (not p.missile_phase, -p.initiative))
        return phases

    # ----- State machine -----

    def _run(self) -> BattleResult:
        queue: Deque[Phase] = deque(self.build_phases())

        while queue and queue[0].missile_phase:
            phase = queue.popleft()
            result = self._fire_missiles(phase, queue)
            if result is not None:
                return result

        cannon_phases = list(queue)
        while self.rounds < self.max_rounds:
            self.rounds += 1
            next_round: List[Phase] = []
            for index, phase in enumerate(cannon_phases):
                if not phase.has_living_ships():
                    continue
                next_round.append(phase)
                result = self._fire_cannons(phase, cannon_phases[index + 1:])
                if result is not None:
                    return result
            cannon_phases = next_round

            self.attacker.heal()
            self.defender.heal()
            if not self.attacker.has_cannons() and not self.defender.has_cannons():
                return self._stalemate()
        return self._stalemate()

    def _fire_missiles(self, phase: Phase, upcoming: Sequence[Phase]) -> Optional[BattleResult]:
        shooter, target = phase.shooting_fleet, phase.target_fleet
        shots = shooter.shoot_missiles_for_initiative(
            phase.initiative, target.get_min_shield(), phase.ships
        )
        shooter.assign_damage(shots, target.get_living_ships(), list(upcoming))
        return self._check_outcome()

    def _fire_cannons(self, phase: Phase, upcoming: Sequence[Phase]) -> Optional[BattleResult]:
        shooter, target = phase.shooting_fleet, phase.target_fleet
        shots: List[Shot] = shooter.shoot_cannons_for_initiative(
            phase.initiative, target.get_min_shield(), phase.ships
        )
        rifts = shooter.shoot_rift_cannons_for_initiative(phase.initiative, phase.ships)
        shooter.assign_rift_self_damage(rifts)
        shots.extend(Shot(HIT, 0, r.target_damage) for r in rifts if r.target_damage > 0)
        shooter.assign_damage(shots, target.get_living_ships(), upcoming)
        return self._check_outcome()

    def _check_outcome(self) -> Optional[BattleResult]:
        attacker_alive = self.attacker.is_alive()
        defender_alive = self.defender.is_alive()
        if not attacker_alive and not defender_alive:
            return BattleResult(BattleOutcome.DRAW, [])
        if not attacker_alive:
            return BattleResult(BattleOutcome.DEFENDER, self.defender.get_living_ships())
        if not defender_alive:
            return BattleResult(BattleOutcome.ATTACKER, self.attacker.get_living_ships())
        return None

    def _stalemate(self) -> BattleResult:
        return BattleResult(BattleOutcome.DEFENDER, self.defender.get_living_ships())


__all__ = ["Battle", "BattleOutcome", "BattleResult", "Phase"]
