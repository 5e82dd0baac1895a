"""One side of a battle: an ordered collection of ships sharing an owner."""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Set

from .constants import HIT
from .damage import DamageType, assign_damage
from .planners import Plan
from .ship import RiftShot, Ship, Shot

if TYPE_CHECKING:
    from .battle import Phase


class Fleet:
    def __init__(self, name: str, ships: Iterable[Ship], antimatter_splitter: bool = False):
        self.name = name
        self.ships: List[Ship] = list(ships)
        self.antimatter_splitter = antimatter_splitter
        self.damage_type = (
            DamageType.DPS if any(s.is_player_ship() for s in self.ships) else DamageType.NPC
        )
        # Start-of-fleet facts; membership never changes after construction
        self._started_with_cannons = any(s.has_cannons() for s in self.ships)
        self._started_with_missiles = any(s.has_missiles() for s in self.ships)
        shields = {s.shields for s in self.ships}
        self._mixed_shields = len(shields) > 1
        self._start_min_shield = min(shields) if shields else 0

    def __repr__(self) -> str:
        return f"Fleet({self.name!r}, ships={len(self.ships)}, alive={len(self.get_living_ships())})"

    # ----- Queries -----

    def get_initiatives(self) -> Set[int]:
        return {ship.initiative for ship in self.ships}

    def get_living_ships(self) -> List[Ship]:
        return [ship for ship in self.ships if ship.is_alive()]

    def is_alive(self) -> bool:
        return any(ship.is_alive() for ship in self.ships)

    def has_cannons(self) -> bool:
        if not self._started_with_cannons:
            return False
        return any(ship.has_cannons() for ship in self.get_living_ships())

    def has_missiles(self) -> bool:
        if not self._started_with_missiles:
            return False
        return any(ship.has_missiles() for ship in self.get_living_ships())

    def get_min_shield(self) -> int:
        if not self._mixed_shields:
            return self._start_min_shield
        living = self.get_living_ships()
        if not living:
            return self._start_min_shield
        return min(ship.shields for ship in living)

    # ----- Firing -----

    def _firing_ships(self, initiative: int, ships: Optional[Sequence[Ship]]) -> List[Ship]:
        pool = self.ships if ships is None else ships
        return [s for s in pool if s.is_alive() and s.initiative == initiative]

    def shoot_missiles_for_initiative(
        self, initiative: int, min_shield: int = 0, ships: Optional[Sequence[Ship]] = None
    ) -> List[Shot]:
        shots: List[Shot] = []
        for ship in self._firing_ships(initiative, ships):
            shots.extend(ship.shoot_missiles(min_shield))
        return shots

    def shoot_cannons_for_initiative(
        self, initiative: int, min_shield: int = 0, ships: Optional[Sequence[Ship]] = None
    ) -> List[Shot]:
        shots: List[Shot] = []
        for ship in self._firing_ships(initiative, ships):
            shots.extend(ship.shoot_cannons(self.antimatter_splitter, min_shield))
        return shots

    def shoot_rift_cannons_for_initiative(
        self, initiative: int, ships: Optional[Sequence[Ship]] = None
    ) -> List[RiftShot]:
        shots: List[RiftShot] = []
        for ship in self._firing_ships(initiative, ships):
            shots.extend(ship.shoot_rift_cannon())
        return shots

    # ----- Damage -----

    def assign_damage(
        self,
        shots: Sequence[Shot],
        target_ships: Sequence[Ship],
        upcoming_phases: Sequence["Phase"] = (),
    ) -> Optional[Plan]:
        """Distribute this fleet's ``shots`` over ``target_ships``.

        Player fleets pick targets by threat removal, NPC fleets by their
        fixed priority table.
        """
        return assign_damage(shots, target_ships, self.damage_type, upcoming_phases)

    def assign_rift_self_damage(self, rift_shots: Sequence[RiftShot]) -> Optional[Plan]:
        """Apply rift backlash to this fleet's own rift-capable ships.

        The biggest rift ship soaks it regardless of who controls the fleet.
        """
        shots = [Shot(HIT, 0, r.self_damage) for r in rift_shots if r.self_damage > 0]
        if not shots:
            return None
        rift_ships = [s for s in self.get_living_ships() if s.rift > 0]
        return assign_damage(shots, rift_ships, DamageType.NPC)

    def heal(self) -> None:
        for ship in self.ships:
            ship.apply_healing()

    def reset(self) -> None:
        for ship in self.ships:
            ship.reset_damage()


__all__ = ["Fleet"]
