"""Scenario configuration: fleet files, env overrides and fleet construction.

Files are YAML (JSON is accepted too, being valid YAML) and are deep-merged in
the order given.  A merged config looks like::

    iterations: 5000
    seed: 7
    fleets:
      - name: Defender
        ships:
          - {type: Cruiser, quantity: 2, initiative: 2, cannons: {ion: 1}}
      - name: Attacker
        antimatter_splitter: true
        ships:
          - {type: Dreadnought, hull: 2, cannons: {antimatter: 1}}

Fleets are listed in order of arrival in the hex; the last one attacks first.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional
import os
import random

import yaml

from .constants import NUM_SIDES
from .exceptions import ConfigurationError
from .fleet import Fleet
from .ship import Ship, ShipConfig, WeaponType, parse_ship_type, roll_d6

DEFAULT_ITERATIONS = 5000
ENV_PREFIX = "ECLIPSE_COMBAT__"

_STAT_KEYS = ("hull", "computers", "shields", "initiative", "rift", "heal")
_WEAPONS = {w.value for w in WeaponType}


def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(a)
    for k, v in (b or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _load_one(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigurationError(f"cannot read config {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"cannot parse config {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"config {path} must contain a mapping at top level")
    return data


def load_configs(paths: Iterable[str] | None) -> Dict[str, Any]:
    cfg: Dict[str, Any] = {}
    for p in (paths or []):
        cfg = _deep_merge(cfg, _load_one(p))
    return cfg


def env_overrides(prefix: str = ENV_PREFIX) -> Dict[str, Any]:
    # Nested via double underscores: ECLIPSE_COMBAT__ITERATIONS=500
    out: Dict[str, Any] = {}
    for k, v in os.environ.items():
        if not k.startswith(prefix):
            continue
        parts = k[len(prefix):].split("__")
        cur = out
        for i, part in enumerate(parts):
            key = part.lower()
            if i == len(parts) - 1:
                cur[key] = _coerce(v)
            else:
                cur = cur.setdefault(key, {})
    return out


def _coerce(s: str) -> Any:
    t = s.strip().lower()
    if t in ("true", "false"):
        return t == "true"
    try:
        if "." in t:
            return float(t)
        return int(t)
    except ValueError:
        return s


def apply_cli_overrides(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    return _deep_merge(base, overrides or {})


# ----- Fleet construction -----


def _non_negative(value: Any, what: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{what} must be an integer, got {value!r}") from exc
    if number < 0:
        raise ConfigurationError(f"{what} must not be negative, got {number}")
    return number


def _weapons(entry: Any, what: str) -> Dict[str, int]:
    if entry is None:
        return {}
    if not isinstance(entry, Mapping):
        raise ConfigurationError(f"{what} must be a mapping of weapon to count")
    out: Dict[str, int] = {}
    for weapon, count in entry.items():
        name = str(weapon).lower()
        if name not in _WEAPONS:
            raise ConfigurationError(f"{what}: unknown weapon {weapon!r}")
        out[name] = _non_negative(count, f"{what}.{name}")
    return out


def ship_config_from_dict(entry: Mapping[str, Any], where: str = "ship") -> ShipConfig:
    config: ShipConfig = {}
    for key in _STAT_KEYS:
        if key in entry:
            config[key] = _non_negative(entry[key], f"{where}.{key}")
    config["cannons"] = _weapons(entry.get("cannons"), f"{where}.cannons")
    config["missiles"] = _weapons(entry.get("missiles"), f"{where}.missiles")
    return config


def build_fleet(
    entry: Mapping[str, Any],
    roll: Callable[[], int] = roll_d6,
    index: int = 0,
) -> Fleet:
    if not isinstance(entry, Mapping):
        raise ConfigurationError(f"fleets[{index}] must be a mapping")
    name = str(entry.get("name") or f"Fleet {index + 1}")
    ships: List[Ship] = []
    for j, ship_entry in enumerate(entry.get("ships") or []):
        where = f"{name}.ships[{j}]"
        if not isinstance(ship_entry, Mapping):
            raise ConfigurationError(f"{where} must be a mapping")
        try:
            ship_type = parse_ship_type(ship_entry.get("type"))
        except ValueError as exc:
            raise ConfigurationError(f"{where}: {exc}") from exc
        quantity = _non_negative(ship_entry.get("quantity", 1), f"{where}.quantity")
        config = ship_config_from_dict(ship_entry, where)
        ships.extend(Ship.from_config(ship_type, config, roll) for _ in range(quantity))
    return Fleet(name, ships, antimatter_splitter=bool(entry.get("antimatter_splitter", False)))


def make_roller(seed: Optional[int]) -> Callable[[], int]:
    """Die source for a scenario; seeded runs are reproducible."""
    if seed is None:
        return roll_d6
    return partial(random.Random(seed).randint, 1, NUM_SIDES)


def build_fleets(cfg: Mapping[str, Any], roll: Optional[Callable[[], int]] = None) -> List[Fleet]:
    entries = cfg.get("fleets")
    if not isinstance(entries, list) or not entries:
        raise ConfigurationError("config must define a non-empty 'fleets' list")
    if roll is None:
        roll = make_roller(cfg.get("seed"))
    return [build_fleet(entry, roll, i) for i, entry in enumerate(entries)]


@dataclass
class Scenario:
    fleets: List[Fleet] = field(default_factory=list)
    iterations: int = DEFAULT_ITERATIONS
    seed: Optional[int] = None


def build_scenario(cfg: Mapping[str, Any]) -> Scenario:
    seed = cfg.get("seed")
    if seed is not None:
        seed = _non_negative(seed, "seed")
    iterations = _non_negative(cfg.get("iterations", DEFAULT_ITERATIONS), "iterations")
    if iterations < 1:
        raise ConfigurationError("iterations must be at least 1")
    fleets = build_fleets(cfg, make_roller(seed))
    if len(fleets) < 2:
        raise ConfigurationError("a scenario needs at least 2 fleets")
    return Scenario(fleets=fleets, iterations=iterations, seed=seed)


__all__ = [
    "DEFAULT_ITERATIONS",
    "ENV_PREFIX",
    "Scenario",
    "apply_cli_overrides",
    "build_fleet",
    "build_fleets",
    "build_scenario",
    "env_overrides",
    "load_configs",
    "make_roller",
    "ship_config_from_dict",
]
