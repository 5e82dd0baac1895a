import pytest

from eclipse_combat.battle import BattleOutcome
from eclipse_combat.exceptions import ConfigurationError
from eclipse_combat.fleet import Fleet
from eclipse_combat.multi_battle import MultiBattle
from eclipse_combat.ship import Ship, ShipType


def always(value: int):
    return lambda: value


def fleet(name: str, **kw) -> Fleet:
    kw.setdefault("roll", always(6))
    return Fleet(name, [Ship(ShipType.INTERCEPTOR, **kw)])


def test_requires_two_fleets():
    with pytest.raises(ConfigurationError, match="at least 2 fleets"):
        MultiBattle([fleet("Alone")])
    with pytest.raises(ConfigurationError):
        MultiBattle([])


def test_latest_arrival_attacks():
    defender = fleet("First", hull=1, roll=always(1))
    attacker = fleet("Second", cannons={"ion": 2})
    gauntlet = MultiBattle([defender, attacker])
    results = gauntlet.run()
    assert [r.outcome for r in results] == [BattleOutcome.ATTACKER]
    assert len(results[0].victors) == 1
    assert gauntlet.get_remaining_fleets() == [attacker]


def test_winner_takes_on_the_next_fleet():
    x = fleet("X", initiative=1, cannons={"plasma": 1})
    y = fleet("Y", hull=1)
    z = fleet("Z", cannons={"ion": 2})
    gauntlet = MultiBattle([x, y, z])
    results = gauntlet.run()
    assert [r.outcome for r in results] == [BattleOutcome.ATTACKER, BattleOutcome.DEFENDER]
    assert gauntlet.get_remaining_fleets() == [x]


def test_draw_removes_both_fleets():
    c = fleet("C")
    b = fleet("B", hull=2, roll=always(1))
    a = fleet("A", rift=1)
    gauntlet = MultiBattle([c, b, a])
    results = gauntlet.run()
    assert [r.outcome for r in results] == [BattleOutcome.DRAW]
    assert gauntlet.get_remaining_fleets() == [c]


def test_everyone_destroyed():
    gauntlet = MultiBattle([fleet("B", hull=2, roll=always(1)), fleet("A", rift=1)])
    gauntlet.run()
    assert gauntlet.get_remaining_fleets() == []


def test_stalemate_keeps_the_defender():
    c = fleet("C", cannons={"ion": 1})
    b = fleet("B")
    a = fleet("A")
    gauntlet = MultiBattle([c, b, a])
    results = gauntlet.run()
    assert [r.outcome for r in results] == [BattleOutcome.DEFENDER, BattleOutcome.DEFENDER]
    assert gauntlet.get_remaining_fleets() == [c]


def test_damage_carries_into_the_next_battle():
    x = fleet("X", hull=2, cannons={"ion": 1})
    y = fleet("Y", hull=1, cannons={"ion": 1})
    z = fleet("Z", hull=3, cannons={"ion": 2})
    gauntlet = MultiBattle([x, y, z])
    results = gauntlet.run()
    assert [r.outcome for r in results] == [BattleOutcome.ATTACKER, BattleOutcome.ATTACKER]
    assert z.ships[0].remaining_hp() == 1


def test_input_list_is_not_mutated():
    fleets = [fleet("B", hull=1, roll=always(1)), fleet("A", cannons={"ion": 2})]
    MultiBattle(fleets).run()
    assert len(fleets) == 2
