"""Eclipse combat: Monte Carlo odds for fleet-vs-fleet battles."""

from importlib import import_module
from typing import Any

__version__ = "0.1.0"
__all__ = [
    "Battle",
    "BattleOutcome",
    "BattleResult",
    "CombatSimulator",
    "ConfigurationError",
    "DamageType",
    "EclipseCombatError",
    "Fleet",
    "MultiBattle",
    "Phase",
    "RiftShot",
    "Ship",
    "ShipType",
    "Shot",
    "SimulationResult",
    "WeaponType",
    "assign_damage",
    "build_scenario",
    "load_configs",
    "__version__",
]

_EXPORTS = {
    "Battle": ("battle", "Battle"),
    "BattleOutcome": ("battle", "BattleOutcome"),
    "BattleResult": ("battle", "BattleResult"),
    "Phase": ("battle", "Phase"),
    "CombatSimulator": ("simulator", "CombatSimulator"),
    "SimulationResult": ("simulator", "SimulationResult"),
    "ConfigurationError": ("exceptions", "ConfigurationError"),
    "EclipseCombatError": ("exceptions", "EclipseCombatError"),
    "DamageType": ("damage", "DamageType"),
    "assign_damage": ("damage", "assign_damage"),
    "Fleet": ("fleet", "Fleet"),
    "MultiBattle": ("multi_battle", "MultiBattle"),
    "RiftShot": ("ship", "RiftShot"),
    "Ship": ("ship", "Ship"),
    "ShipType": ("ship", "ShipType"),
    "Shot": ("ship", "Shot"),
    "WeaponType": ("ship", "WeaponType"),
    "build_scenario": ("config", "build_scenario"),
    "load_configs": ("config", "load_configs"),
}


def __getattr__(name: str) -> Any:
    if name in _EXPORTS:
        module_name, attr_name = _EXPORTS[name]
        module = import_module(f".{module_name}", __name__)
        attr = getattr(module, attr_name)
        globals()[name] = attr
        return attr
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


def __dir__() -> list[str]:
    return sorted(set(list(globals().keys()) + list(__all__)))
