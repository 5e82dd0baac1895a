"""Damage planners: scoring strategies consumed by the damage solver."""

from .base import DamagePlanner, Plan
from .dps import DpsRemovalDamagePlanner
from .npc import NpcDamagePlanner

__all__ = ["DamagePlanner", "DpsRemovalDamagePlanner", "NpcDamagePlanner", "Plan"]
