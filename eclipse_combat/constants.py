"""Dice and weapon constants for Eclipse ship combat."""
from __future__ import annotations

# Die faces with fixed meaning
HIT = 6
MISS = 1
RIFT_SELF_DAMAGE = 1
RIFT_MISS_1 = 2
RIFT_MISS_2 = 3
NUM_SIDES = 6

# roll + computers - shields must reach this for a non-natural roll to hit
HIT_AFTER_MODIFIERS = 6

# Sum of target damage over all six rift die faces
TOTAL_RIFT_DIE_DAMAGE = 6

MAX_ROUNDS = 100

WEAPON_DAMAGE = {
    "ion": 1,
    "plasma": 2,
    "soliton": 3,
    "antimatter": 4,
}


def guaranteed_hit() -> int:
    return HIT


def guaranteed_miss() -> int:
    return MISS


def rift_self_damage() -> int:
    return RIFT_SELF_DAMAGE


def rift_miss() -> int:
    return RIFT_MISS_1


__all__ = [
    "HIT",
    "MISS",
    "RIFT_SELF_DAMAGE",
    "RIFT_MISS_1",
    "RIFT_MISS_2",
    "NUM_SIDES",
    "HIT_AFTER_MODIFIERS",
    "TOTAL_RIFT_DIE_DAMAGE",
    "MAX_ROUNDS",
    "WEAPON_DAMAGE",
    "guaranteed_hit",
    "guaranteed_miss",
    "rift_self_damage",
    "rift_miss",
]
