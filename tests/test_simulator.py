from itertools import cycle

import pytest

from eclipse_combat.exceptions import ConfigurationError
from eclipse_combat.fleet import Fleet
from eclipse_combat.ship import Ship, ShipType
from eclipse_combat.simulator import CombatSimulator


def always(value: int):
    return lambda: value


def test_strongest_fleet_always_wins():
    strong = Fleet("Strong", [Ship(ShipType.DREADNOUGHT, hull=5, cannons={"plasma": 3}, roll=always(6))])
    medium = Fleet("Medium", [Ship(ShipType.INTERCEPTOR, hull=1, roll=always(1))])
    weak = Fleet("Weak", [Ship(ShipType.INTERCEPTOR, roll=always(1))])

    result = CombatSimulator().simulate([strong, medium, weak], 100)

    assert result.victory_probability == {"Strong": 1.0, "Medium": 0.0, "Weak": 0.0}
    assert result.draw_probability == 0.0
    assert result.expected_survivors["Strong"] == {"Dreadnought": 1.0}
    assert result.expected_survivors["Medium"] == {}
    assert result.iterations == 100
    assert result.time_taken >= 0


def test_expected_survivors_by_type():
    mixed = Fleet("Mixed", [
        Ship(ShipType.INTERCEPTOR, cannons={"ion": 1}, roll=always(6)),
        Ship(ShipType.CRUISER, hull=2, cannons={"plasma": 2}, roll=always(6)),
        Ship(ShipType.DREADNOUGHT, hull=3, cannons={"antimatter": 2}, roll=always(6)),
    ])
    weak = Fleet("Weak", [Ship(ShipType.INTERCEPTOR, roll=always(1))])
    result = CombatSimulator().simulate([mixed, weak], 20)
    assert result.expected_survivors["Mixed"] == {
        "Interceptor": 1.0,
        "Cruiser": 1.0,
        "Dreadnought": 1.0,
    }


def test_mutual_destruction_is_a_draw():
    defender = Fleet("Defender", [Ship(ShipType.INTERCEPTOR, hull=2, roll=always(1))])
    attacker = Fleet("Attacker", [Ship(ShipType.INTERCEPTOR, rift=1, roll=always(6))])
    result = CombatSimulator().simulate([defender, attacker], 10)
    assert result.draw_probability == 1.0
    assert result.victory_probability == {"Defender": 0.0, "Attacker": 0.0}
    assert result.expected_survivors == {"Defender": {}, "Attacker": {}}


def test_survivors_are_averaged_over_wins_only():
    defender_rolls = cycle([6, 1])
    defender = Fleet("Defender", [
        Ship(ShipType.CRUISER, cannons={"ion": 1}, roll=lambda: next(defender_rolls)),
    ])
    attacker = Fleet("Attacker", [Ship(ShipType.INTERCEPTOR, cannons={"ion": 1}, roll=always(6))])

    result = CombatSimulator().simulate([defender, attacker], 100)

    assert result.victory_probability == {"Defender": 0.5, "Attacker": 0.5}
    assert result.expected_survivors == {
        "Defender": {"Cruiser": 1.0},
        "Attacker": {"Interceptor": 1.0},
    }
    assert sum(result.victory_probability.values()) + result.draw_probability == pytest.approx(1.0)


def test_fleets_are_reset_between_runs():
    defender = Fleet("Defender", [Ship(ShipType.INTERCEPTOR, hull=1, roll=always(1))])
    attacker = Fleet("Attacker", [Ship(ShipType.INTERCEPTOR, cannons={"ion": 2}, roll=always(6))])
    simulator = CombatSimulator()
    first = simulator.simulate([defender, attacker], 5)
    second = simulator.simulate([defender, attacker], 5)
    assert first.victory_probability == second.victory_probability == {"Defender": 0.0, "Attacker": 1.0}


def test_rejects_non_positive_iterations():
    fleets = [Fleet("A", [Ship(ShipType.INTERCEPTOR)]), Fleet("B", [Ship(ShipType.INTERCEPTOR)])]
    with pytest.raises(ConfigurationError):
        CombatSimulator().simulate(fleets, 0)


def test_result_serializes():
    fleets = [
        Fleet("A", [Ship(ShipType.INTERCEPTOR, roll=always(1))]),
        Fleet("B", [Ship(ShipType.INTERCEPTOR, cannons={"ion": 1}, roll=always(6))]),
    ]
    data = CombatSimulator().simulate(fleets, 3).to_dict()
    assert set(data) == {
        "victory_probability",
        "draw_probability",
        "expected_survivors",
        "iterations",
        "time_taken",
    }
    assert data["expected_survivors"]["B"] == {"Interceptor": 1.0}
