"""Single combatants and the shots they produce.

A :class:`Ship` owns its stats, weapon counts and accumulated damage.  It rolls
its own dice (through an injectable ``roll`` callable so tests can force
results) and answers whether an incoming :class:`Shot` hits it.  Deciding
*which* ship a shot lands on is left to :mod:`eclipse_combat.damage`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Mapping, Optional, TypedDict
import random

from .constants import (
    HIT,
    HIT_AFTER_MODIFIERS,
    MISS,
    NUM_SIDES,
    RIFT_MISS_2,
    RIFT_SELF_DAMAGE,
    WEAPON_DAMAGE,
)


class ShipType(str, Enum):
    INTERCEPTOR = "Interceptor"
    CRUISER = "Cruiser"
    DREADNOUGHT = "Dreadnought"
    STARBASE = "Starbase"
    ORBITAL = "Orbital"
    ANCIENT = "Ancient"
    GUARDIAN = "Guardian"
    GCDS = "GCDS"


class WeaponType(str, Enum):
    ION = "ion"
    PLASMA = "plasma"
    SOLITON = "soliton"
    ANTIMATTER = "antimatter"


NPC_TYPES = frozenset({ShipType.ANCIENT, ShipType.GUARDIAN, ShipType.GCDS})


@dataclass(frozen=True)
class Shot:
    """One resolved weapon die, before the target's shields are applied."""

    roll: int
    computers: int
    damage: int


@dataclass(frozen=True)
class RiftShot:
    self_damage: int
    target_damage: int


class ShipConfig(TypedDict, total=False):
    hull: int
    computers: int
    shields: int
    initiative: int
    cannons: Mapping[str, int]
    missiles: Mapping[str, int]
    rift: int
    heal: int


def roll_d6() -> int:
    return random.randint(1, NUM_SIDES)


def _weapon_counts(counts: Optional[Mapping[str, int]] = None) -> Dict[str, int]:
    counts = counts or {}
    return {w.value: int(counts.get(w.value, 0)) for w in WeaponType}


def parse_ship_type(value: object) -> ShipType:
    """Accept a :class:`ShipType`, its value or its member name (any case)."""

    if isinstance(value, ShipType):
        return value
    text = str(value).strip()
    for ship_type in ShipType:
        if text.lower() in (ship_type.value.lower(), ship_type.name.lower()):
            return ship_type
    # Common spelling in the rulebook translations
    if text.lower() == "dreadnaught":
        return ShipType.DREADNOUGHT
    raise ValueError(f"unknown ship type: {value!r}")


@dataclass(eq=False)
class Ship:
    """Runtime representation of a single ship in combat."""

    type: ShipType
    hull: int = 0
    computers: int = 0
    shields: int = 0
    initiative: int = 0
    cannons: Dict[str, int] = field(default_factory=_weapon_counts)
    missiles: Dict[str, int] = field(default_factory=_weapon_counts)
    rift: int = 0
    heal: int = 0
    roll: Callable[[], int] = field(default=roll_d6, repr=False)
    damage: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.type = parse_ship_type(self.type)
        self.cannons = _weapon_counts(self.cannons)
        self.missiles = _weapon_counts(self.missiles)

    @classmethod
    def from_config(
        cls,
        ship_type: ShipType | str,
        config: Optional[ShipConfig] = None,
        roll: Callable[[], int] = roll_d6,
    ) -> "Ship":
        config = config or {}
        return cls(
            type=parse_ship_type(ship_type),
            hull=int(config.get("hull", 0)),
            computers=int(config.get("computers", 0)),
            shields=int(config.get("shields", 0)),
            initiative=int(config.get("initiative", 0)),
            cannons=_weapon_counts(config.get("cannons")),
            missiles=_weapon_counts(config.get("missiles")),
            rift=int(config.get("rift", 0)),
            heal=int(config.get("heal", 0)),
            roll=roll,
        )

    # ----- Classification -----

    def is_player_ship(self) -> bool:
        return self.type not in NPC_TYPES

    def has_cannons(self) -> bool:
        return any(count > 0 for count in self.cannons.values()) or self.rift > 0

    def has_missiles(self) -> bool:
        return any(count > 0 for count in self.missiles.values())

    # ----- Firing -----

    def shoot_cannons(self, antimatter_splitter: bool = False, min_shield: int = 0) -> List[Shot]:
        return self._roll_weapons(self.cannons, antimatter_splitter, min_shield)

    def shoot_missiles(self, min_shield: int = 0) -> List[Shot]:
        return self._roll_weapons(self.missiles, False, min_shield)

    def _roll_weapons(
        self, weapons: Mapping[str, int], antimatter_splitter: bool, min_shield: int
    ) -> List[Shot]:
        shots: List[Shot] = []
        for weapon, count in weapons.items():
            damage = WEAPON_DAMAGE[weapon]
            for _ in range(count):
                roll = self.roll()
                if roll == MISS:
                    continue
                # Cannot hit even the weakest shield in the target fleet
                if roll != HIT and roll + self.computers - min_shield < HIT_AFTER_MODIFIERS:
                    continue
                if weapon == WeaponType.ANTIMATTER and antimatter_splitter:
                    shots.extend(Shot(roll, self.computers, 1) for _ in range(damage))
                else:
                    shots.append(Shot(roll, self.computers, damage))
        return shots

    def shoot_rift_cannon(self) -> List[RiftShot]:
        """Roll every rift cannon.

        Faces: 1 hurts the firer, 2 and 3 do nothing, 4 and 5 deal 1 and 2 to
        the target, 6 deals 3 to the target and 1 to the firer.
        """
        shots: List[RiftShot] = []
        for _ in range(self.rift):
            roll = self.roll()
            self_damage = 1 if roll in (RIFT_SELF_DAMAGE, HIT) else 0
            target_damage = max(0, roll - RIFT_MISS_2)
            if self_damage or target_damage:
                shots.append(RiftShot(self_damage, target_damage))
        return shots

    def shot_hits(self, shot: Shot) -> bool:
        if shot.roll == MISS:
            return False
        if shot.roll == HIT:
            return True
        return shot.roll + shot.computers - self.shields >= HIT_AFTER_MODIFIERS

    def shot_kills(self, shot: Shot) -> bool:
        return self.shot_hits(shot) and shot.damage >= self.remaining_hp()

    # ----- Damage state -----

    def max_hp(self) -> int:
        return self.hull + 1

    def remaining_hp(self) -> int:
        return max(0, self.max_hp() - self.damage)

    def is_alive(self) -> bool:
        return self.remaining_hp() > 0

    def take_damage(self, amount: int) -> None:
        self.damage += amount

    def reset_damage(self) -> None:
        self.damage = 0

    def apply_healing(self) -> None:
        if self.heal > 0 and self.is_alive():
            self.damage = max(0, self.damage - self.heal)


__all__ = [
    "NPC_TYPES",
    "RiftShot",
    "Ship",
    "ShipConfig",
    "ShipType",
    "Shot",
    "WeaponType",
    "parse_ship_type",
    "roll_d6",
]
