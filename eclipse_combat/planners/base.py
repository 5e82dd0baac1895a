"""Damage planner interface shared by the NPC and DPS-removal strategies."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Sequence

from ..constants import HIT
from ..ship import Ship, Shot

if TYPE_CHECKING:
    from ..battle import Phase


@dataclass
class Plan:
    """Candidate damage distribution over a sorted list of ships."""

    score: float
    all_destroyed: bool
    damage_assignments: List[int] = field(default_factory=list)


def _shot_sort_key(shot: Shot):
    # Natural hits land on anything, so they are placed last where they can
    # fill whatever the conditional hits could not.
    if shot.roll == HIT:
        return (1, 0, -shot.damage)
    return (0, shot.roll + shot.computers, -shot.damage)


class DamagePlanner(ABC):
    """Scores damage assignments and orders the search for the solver."""

    @abstractmethod
    def evaluate(
        self,
        ships: Sequence[Ship],
        remaining_hp: Sequence[int],
        damage_assignments: List[int],
        upcoming_phases: Sequence["Phase"] = (),
    ) -> Plan:
        ...

    @abstractmethod
    def optimally_sort_ships(
        self, ships: Sequence[Ship], upcoming_phases: Sequence["Phase"] = ()
    ) -> List[Ship]:
        ...

    def optimally_sort_shots(self, shots: Sequence[Shot]) -> List[Shot]:
        return sorted(shots, key=_shot_sort_key)

    def calculate_max_score(
        self,
        sorted_ships: Sequence[Ship],
        shots: Sequence[Shot],
        remaining_hp: Sequence[int],
        upcoming_phases: Sequence["Phase"] = (),
    ) -> float:
        """Greedy upper bound on the score any assignment of ``shots`` can reach.

        The pool of damage is first spent on ships it can destroy outright, in
        planner order.  Whatever is left is spread over the ships the sweep
        skipped.
        """
        if not shots:
            return 0
        pool = sum(shot.damage for shot in shots)
        min_damage = min(shot.damage for shot in shots)
        assignments = [0] * len(sorted_ships)
        ships_left = False
        for i, hp in enumerate(remaining_hp):
            if pool >= hp:
                assignments[i] = hp
                overkill = max(0, min_damage - hp)
                pool -= hp + overkill
                if pool <= 0:
                    break
            else:
                ships_left = True
        if pool > 0 and ships_left:
            for i, hp in enumerate(remaining_hp):
                if assignments[i] == 0:
                    damage = min(pool, hp)
                    assignments[i] = damage
                    pool -= damage
                    if pool <= 0:
                        break
        return self.evaluate(sorted_ships, remaining_hp, assignments, upcoming_phases).score


__all__ = ["DamagePlanner", "Plan"]
