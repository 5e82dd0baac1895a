"""Damage assignment solver.

Given the shots that survived the firer's own filtering and the ships that
could receive them, :func:`assign_damage` searches every way of handing each
shot to a ship it actually hits and applies the distribution that scores best
under the chosen :class:`~eclipse_combat.planners.DamagePlanner`.

The search is a depth-first backtrack over shots.  Two things keep it
tractable: sub-problems are memoized on the shot index plus the multiset of
ship states, and a branch that destroys every target or reaches the greedy
upper bound ends the search at once.
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Sequence, Tuple
import logging

from .planners import DamagePlanner, DpsRemovalDamagePlanner, NpcDamagePlanner, Plan
from .ship import Ship, Shot

if TYPE_CHECKING:
    from .battle import Phase

logger = logging.getLogger(__name__)


class DamageType(str, Enum):
    NPC = "npc"
    DPS = "dps"


_NPC_PLANNER = NpcDamagePlanner()


def planner_for(damage_type: DamageType, ships: Iterable[Ship] = ()) -> DamagePlanner:
    if damage_type == DamageType.DPS:
        return DpsRemovalDamagePlanner(ships)
    return _NPC_PLANNER


MemoKey = Tuple[int, Tuple[Tuple[str, int, int, int], ...]]


class _Search:
    def __init__(
        self,
        planner: DamagePlanner,
        ships: List[Ship],
        can_damage: List[List[int]],
        remaining_hp: List[int],
        max_score: float,
        upcoming_phases: Sequence["Phase"],
    ):
        self.planner = planner
        self.ships = ships
        self.can_damage = can_damage
        self.remaining_hp = remaining_hp
        self.max_score = max_score
        self.upcoming_phases = upcoming_phases
        self.assignments = [0] * len(ships)
        self.memo: Dict[MemoKey, Plan] = {}

    def _memo_key(self, shot_idx: int) -> MemoKey:
        signature = sorted(
            (ship.type.value, ship.max_hp(), ship.shields, max(0, hp - assigned))
            for ship, hp, assigned in zip(self.ships, self.remaining_hp, self.assignments)
        )
        return shot_idx, tuple(signature)

    def solve(self, shot_idx: int = 0) -> Plan:
        if shot_idx == len(self.can_damage):
            return self.planner.evaluate(
                self.ships, self.remaining_hp, list(self.assignments), self.upcoming_phases
            )
        key = self._memo_key(shot_idx)
        cached = self.memo.get(key)
        if cached is not None:
            return cached

        best: Optional[Plan] = None
        for ship_idx, damage in enumerate(self.can_damage[shot_idx]):
            if damage == 0:
                continue
            self.assignments[ship_idx] += damage
            plan = self.solve(shot_idx + 1)
            self.assignments[ship_idx] -= damage
            if plan.all_destroyed or plan.score >= self.max_score:
                return plan
            if best is None or plan.score > best.score:
                best = plan
        if best is None:
            # Nothing this shot can hit; it is wasted
            best = self.solve(shot_idx + 1)
        self.memo[key] = best
        return best


def assign_damage(
    shots: Sequence[Shot],
    target_ships: Sequence[Ship],
    damage_type: DamageType = DamageType.NPC,
    upcoming_phases: Sequence["Phase"] = (),
    planner: Optional[DamagePlanner] = None,
) -> Optional[Plan]:
    """Apply ``shots`` to ``target_ships`` in the best-scoring way.

    Args:
        shots: Shots to distribute. Each goes whole to one ship it hits.
        target_ships: Candidate ships; dead ones are ignored.
        damage_type: Selects the planner when ``planner`` is not given.
        upcoming_phases: Remaining firing phases, consulted by the DPS planner
            to value ships that still have missiles to launch.
        planner: Explicit planner instance overriding ``damage_type``.

    Returns:
        The applied plan (indices follow the planner's ship ordering), or
        ``None`` when nothing could be assigned.
    """
    ships = [ship for ship in target_ships if ship.is_alive()]
    if not ships or not shots:
        return None
    if planner is None:
        planner = planner_for(damage_type, ships)

    sorted_ships = planner.optimally_sort_ships(ships, upcoming_phases)
    sorted_shots = planner.optimally_sort_shots(shots)
    can_damage = [
        [shot.damage if ship.shot_hits(shot) else 0 for ship in sorted_ships]
        for shot in sorted_shots
    ]
    remaining_hp = [ship.remaining_hp() for ship in sorted_ships]

    max_score = planner.calculate_max_score(sorted_ships, sorted_shots, remaining_hp, upcoming_phases)
    if max_score == 0:
        logger.debug("no damage assignable for %d shots", len(shots))
        return None

    search = _Search(planner, sorted_ships, can_damage, remaining_hp, max_score, upcoming_phases)
    plan = search.solve()

    for ship, planned in zip(sorted_ships, plan.damage_assignments):
        # Summed shots can overshoot a ship's remaining hull
        damage = min(planned, ship.remaining_hp())
        if damage > 0:
            ship.take_damage(damage)
    return plan


__all__ = ["DamageType", "assign_damage", "planner_for"]
