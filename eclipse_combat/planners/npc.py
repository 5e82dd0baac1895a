"""Static-priority damage planner.

NPC ships follow the rulebook instruction to hit the biggest ship they can
destroy, and the rift cannon uses the same rule for self-damage.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Sequence

from ..ship import Ship, ShipType
from .base import DamagePlanner, Plan

if TYPE_CHECKING:
    from ..battle import Phase


DAMAGE_PRIORITY: Dict[ShipType, int] = {
    ShipType.DREADNOUGHT: 0,
    ShipType.ORBITAL: 1,
    ShipType.CRUISER: 3,
    ShipType.STARBASE: 5,
    ShipType.INTERCEPTOR: 8,
    ShipType.GCDS: 9,
    ShipType.GUARDIAN: 10,
    ShipType.ANCIENT: 11,
}

MAX_PRIORITY = max(DAMAGE_PRIORITY.values())

DAMAGE_PRIORITY_WEIGHT: Dict[ShipType, int] = {
    ship_type: 1 << (MAX_PRIORITY - priority)
    for ship_type, priority in DAMAGE_PRIORITY.items()
}

KILL_WEIGHT = 1 << 20


class NpcDamagePlanner(DamagePlanner):
    def evaluate(
        self,
        ships: Sequence[Ship],
        remaining_hp: Sequence[int],
        damage_assignments: List[int],
        upcoming_phases: Sequence["Phase"] = (),
    ) -> Plan:
        all_destroyed = True
        score = 0
        for ship, hp, damage in zip(ships, remaining_hp, damage_assignments):
            weight = DAMAGE_PRIORITY_WEIGHT[ship.type]
            if damage == 0:
                all_destroyed = False
                continue
            if hp > damage:
                all_destroyed = False
                # Finishing off wounded ships beats spreading damage
                score += weight + 2 ** (ship.max_hp() - (hp - damage))
            else:
                score += weight * KILL_WEIGHT
        return Plan(score, all_destroyed, damage_assignments)

    def optimally_sort_ships(
        self, ships: Sequence[Ship], upcoming_phases: Sequence["Phase"] = ()
    ) -> List[Ship]:
        return sorted(ships, key=lambda s: (DAMAGE_PRIORITY[s.type], s.remaining_hp()))


__all__ = ["DAMAGE_PRIORITY", "KILL_WEIGHT", "NpcDamagePlanner"]
