import pytest

from eclipse_combat.constants import (
    HIT,
    MISS,
    WEAPON_DAMAGE,
    guaranteed_hit,
    guaranteed_miss,
    rift_miss,
    rift_self_damage,
)
from eclipse_combat.ship import RiftShot, Ship, ShipType, Shot, parse_ship_type


def always(value: int):
    return lambda: value


def test_remaining_hp_tracks_damage():
    ship = Ship(ShipType.CRUISER, hull=2)
    assert ship.remaining_hp() == 3
    ship.take_damage(1)
    assert ship.remaining_hp() == 2 and ship.is_alive()
    ship.take_damage(5)
    assert ship.remaining_hp() == 0
    assert not ship.is_alive()


def test_reset_damage_restores_full_hull():
    ship = Ship(ShipType.DREADNOUGHT, hull=3)
    ship.take_damage(10)
    ship.reset_damage()
    assert ship.remaining_hp() == 4


def test_healing_clamps_and_skips_dead_ships():
    ship = Ship(ShipType.STARBASE, hull=3, heal=2)
    ship.take_damage(1)
    ship.apply_healing()
    assert ship.remaining_hp() == 4

    dead = Ship(ShipType.INTERCEPTOR, hull=0, heal=2)
    dead.take_damage(1)
    dead.apply_healing()
    assert not dead.is_alive()


def test_natural_six_always_hits_and_natural_one_always_misses():
    fortress = Ship(ShipType.STARBASE, shields=10)
    assert fortress.shot_hits(Shot(roll=HIT, computers=0, damage=1))
    naked = Ship(ShipType.INTERCEPTOR)
    assert not naked.shot_hits(Shot(roll=MISS, computers=10, damage=1))


def test_computers_and_shields_modify_the_roll():
    shot = Shot(roll=4, computers=2, damage=1)
    assert Ship(ShipType.CRUISER, shields=0).shot_hits(shot)
    assert not Ship(ShipType.CRUISER, shields=1).shot_hits(shot)


@pytest.mark.parametrize("weapon", ["ion", "plasma", "soliton", "antimatter"])
def test_cannons_roll_one_die_per_weapon(weapon):
    ship = Ship(ShipType.INTERCEPTOR, computers=1, cannons={weapon: 2}, roll=always(6))
    shots = ship.shoot_cannons()
    assert shots == [Shot(6, 1, WEAPON_DAMAGE[weapon])] * 2


def test_missiles_use_missile_counts():
    ship = Ship(ShipType.INTERCEPTOR, missiles={"plasma": 1, "ion": 1}, cannons={"soliton": 3}, roll=always(6))
    assert sorted(s.damage for s in ship.shoot_missiles()) == [1, 2]


def test_antimatter_splitter_splits_cannons_only():
    ship = Ship(
        ShipType.DREADNOUGHT,
        cannons={"antimatter": 1},
        missiles={"antimatter": 1},
        roll=always(6),
    )
    assert ship.shoot_cannons(antimatter_splitter=True) == [Shot(6, 0, 1)] * 4
    assert ship.shoot_cannons(antimatter_splitter=False) == [Shot(6, 0, 4)]
    assert ship.shoot_missiles() == [Shot(6, 0, 4)]


def test_hopeless_rolls_are_dropped():
    ship = Ship(ShipType.CRUISER, cannons={"ion": 1}, roll=always(MISS))
    assert ship.shoot_cannons() == []

    plain = Ship(ShipType.CRUISER, cannons={"ion": 1}, roll=always(5))
    assert plain.shoot_cannons() == []
    aimed = Ship(ShipType.CRUISER, computers=1, cannons={"ion": 1}, roll=always(5))
    assert aimed.shoot_cannons() == [Shot(5, 1, 1)]
    # The weakest shield in the target fleet raises the bar
    assert aimed.shoot_cannons(min_shield=1) == []


@pytest.mark.parametrize(
    "roll, expected",
    [
        (1, [RiftShot(self_damage=1, target_damage=0)]),
        (2, []),
        (3, []),
        (4, [RiftShot(self_damage=0, target_damage=1)]),
        (5, [RiftShot(self_damage=0, target_damage=2)]),
        (6, [RiftShot(self_damage=1, target_damage=3)]),
    ],
)
def test_rift_cannon_faces(roll, expected):
    ship = Ship(ShipType.DREADNOUGHT, rift=1, roll=always(roll))
    assert ship.shoot_rift_cannon() == expected


@pytest.mark.parametrize(
    "ship_type, expected",
    [
        (ShipType.INTERCEPTOR, True),
        (ShipType.CRUISER, True),
        (ShipType.DREADNOUGHT, True),
        (ShipType.STARBASE, True),
        (ShipType.ORBITAL, True),
        (ShipType.ANCIENT, False),
        (ShipType.GUARDIAN, False),
        (ShipType.GCDS, False),
    ],
)
def test_is_player_ship(ship_type, expected):
    assert Ship(ship_type).is_player_ship() is expected


def test_weapon_presence():
    assert Ship(ShipType.ANCIENT, rift=1).has_cannons()
    assert not Ship(ShipType.ANCIENT, missiles={"ion": 2}).has_cannons()
    assert Ship(ShipType.ANCIENT, missiles={"ion": 2}).has_missiles()
    assert not Ship(ShipType.ANCIENT).has_missiles()


def test_from_config_fills_defaults():
    ship = Ship.from_config("cruiser", {"hull": 1, "cannons": {"plasma": 1}}, roll=always(3))
    assert ship.type is ShipType.CRUISER
    assert ship.cannons == {"ion": 0, "plasma": 1, "soliton": 0, "antimatter": 0}
    assert ship.missiles["ion"] == 0
    assert ship.initiative == 0 and ship.shields == 0
    assert ship.roll() == 3


def test_parse_ship_type_accepts_names_and_values():
    assert parse_ship_type("GCDS") is ShipType.GCDS
    assert parse_ship_type("dreadnaught") is ShipType.DREADNOUGHT
    assert parse_ship_type(ShipType.ORBITAL) is ShipType.ORBITAL
    with pytest.raises(ValueError):
        parse_ship_type("battlestar")


def test_shot_kills_needs_hit_and_enough_damage():
    cruiser = Ship(ShipType.CRUISER, hull=1)
    assert cruiser.shot_kills(Shot(HIT, 0, 2))
    assert not cruiser.shot_kills(Shot(HIT, 0, 1))
    assert not Ship(ShipType.INTERCEPTOR, shields=3).shot_kills(Shot(4, 0, 4))


def test_fixed_dice_helpers():
    gunner = Ship(ShipType.CRUISER, cannons={"ion": 1}, roll=guaranteed_hit)
    assert gunner.shoot_cannons() == [Shot(HIT, 0, 1)]
    assert Ship(ShipType.CRUISER, cannons={"ion": 1}, roll=guaranteed_miss).shoot_cannons() == []
    assert Ship(ShipType.CRUISER, rift=1, roll=rift_miss).shoot_rift_cannon() == []
    assert Ship(ShipType.CRUISER, rift=1, roll=rift_self_damage).shoot_rift_cannon() == [RiftShot(1, 0)]
