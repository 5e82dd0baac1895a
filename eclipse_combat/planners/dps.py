"""Threat-removal damage planner used by player-controlled fleets.

Ships are valued by the damage they can still put out: cannons and rift
cannons always, missiles only while one of their missile volleys is still
pending.  Destroying the largest source of incoming damage first is the
closest cheap approximation of how a human player assigns hits.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Iterable, List, Sequence

from ..constants import TOTAL_RIFT_DIE_DAMAGE, WEAPON_DAMAGE
from ..ship import Ship, ShipType
from .base import DamagePlanner, Plan

if TYPE_CHECKING:
    from ..battle import Phase


# Tiebreak only; mirrors reputation value of each kill
DAMAGE_PRIORITY: Dict[ShipType, int] = {
    ShipType.DREADNOUGHT: 0,
    ShipType.GCDS: 1,
    ShipType.CRUISER: 2,
    ShipType.GUARDIAN: 3,
    ShipType.STARBASE: 4,
    ShipType.INTERCEPTOR: 5,
    ShipType.ORBITAL: 6,
    ShipType.ANCIENT: 7,
}

KILL_WEIGHT = 10_000

MIN_PRIORITY = 0.1


@dataclass(frozen=True)
class ShipThreat:
    total: int
    cannons: int


def ship_threat(ship: Ship) -> ShipThreat:
    multiplier = ship.computers + 1
    rift = ship.rift * TOTAL_RIFT_DIE_DAMAGE
    cannons = multiplier * sum(WEAPON_DAMAGE[w] * n for w, n in ship.cannons.items())
    missiles = multiplier * sum(WEAPON_DAMAGE[w] * n for w, n in ship.missiles.items())
    return ShipThreat(total=rift + cannons + missiles, cannons=rift + cannons)


class DpsRemovalDamagePlanner(DamagePlanner):
    def __init__(self, ships: Iterable[Ship] = ()):
        # One entry per ship type; ships of a type share a blueprint
        self._threats: Dict[ShipType, ShipThreat] = {}
        for ship in ships:
            self._threats.setdefault(ship.type, ship_threat(ship))

    def _threat(self, ship: Ship) -> ShipThreat:
        threat = self._threats.get(ship.type)
        if threat is None:
            threat = self._threats[ship.type] = ship_threat(ship)
        return threat

    def ship_priority(self, ship: Ship, upcoming_phases: Sequence["Phase"] = ()) -> int:
        threat = self._threat(ship)
        for phase in upcoming_phases:
            if not phase.missile_phase:
                break
            if any(s is ship for s in phase.ships):
                return threat.total
        return threat.cannons

    def evaluate(
        self,
        ships: Sequence[Ship],
        remaining_hp: Sequence[int],
        damage_assignments: List[int],
        upcoming_phases: Sequence["Phase"] = (),
    ) -> Plan:
        all_destroyed = True
        score = 0.0
        for ship, hp, damage in zip(ships, remaining_hp, damage_assignments):
            if damage == 0:
                all_destroyed = False
                continue
            weight = max(MIN_PRIORITY, self.ship_priority(ship, upcoming_phases))
            if hp > damage:
                all_destroyed = False
                score += weight + 2 ** (ship.max_hp() - (hp - damage))
            else:
                score += weight * KILL_WEIGHT
        return Plan(score, all_destroyed, damage_assignments)

    def optimally_sort_ships(
        self, ships: Sequence[Ship], upcoming_phases: Sequence["Phase"] = ()
    ) -> List[Ship]:
        def key(ship: Ship):
            return (
                -self.ship_priority(ship, upcoming_phases),
                ship.remaining_hp(),
                -ship.computers,
                ship.initiative,
                DAMAGE_PRIORITY[ship.type],
            )

        return sorted(ships, key=key)


__all__ = [
    "DpsRemovalDamagePlanner",
    "KILL_WEIGHT",
    "MIN_PRIORITY",
    "ShipThreat",
    "ship_threat",
]
