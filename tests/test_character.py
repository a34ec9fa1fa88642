import math
import random

import pytest

from knifegame.character import (
    ARENA_CENTER,
    ARENA_RADIUS,
    Character,
    Key,
    Mob,
    Player,
)
from knifegame.props import PropKind


@pytest.fixture
def char():
    return Character(random.Random(1))


def test_initial_state(char):
    assert char.knife_count == 4
    assert char.knife_radius == 120
    assert char.health == 100
    assert char.speed == 3
    assert char.aim_range == 500
    assert 0 <= char.id < 1_000_000


def test_push_knife_grows_radius_and_caps(char):
    char.push_knife()
    assert char.knife_radius > 120
    for _ in range(100):
        char.push_knife()
    assert char.knife_radius == 200


def test_pop_knife_restores_radius_and_stops_at_zero(char):
    for _ in range(6):
        char.push_knife()
    for _ in range(6):
        char.pop_knife()
    assert char.knife_radius == 120
    for _ in range(10):
        char.pop_knife()
    assert char.knife_count == 0
    assert char.knife_radius == 120


def test_add_health_only_pickup_amount_and_capped(char):
    char.drop_health(50)
    before = char.health
    char.add_health(10)
    assert char.health == before
    char.add_health(20)
    assert char.health == before + 20
    for _ in range(5):
        char.add_health(20)
    assert char.health == 100


def test_drop_health_flashes_then_restores(char):
    char.drop_health(10)
    assert char.opacity == pytest.approx(0.3)
    char.tick(200)
    assert char.opacity == pytest.approx(1.0)
    assert not char.dead


def test_fatal_damage_kills_and_ignores_input(char):
    deaths = []
    char.died.connect(lambda: deaths.append(True))
    char.drop_health(100)
    assert char.dead
    assert deaths == [True]
    char.key_press(Key.D)
    assert char.pressed_keys == set()
    x = char.x
    char.tick(100)
    assert char.x == x


def test_handle_pick(char):
    char.handle_pick(PropKind.KNIFE)
    assert char.knife_count == 5
    char.drop_health(40)
    hp = char.health
    char.handle_pick(PropKind.HEALTH)
    assert char.health == hp + 20
    char.handle_pick(PropKind.BOOTS)
    assert char.high_speed
    assert char.speed == 6


def test_boots_expire_and_do_not_stack(char):
    char.picked_boots()
    char.picked_boots()
    assert char.speed == 6
    char.tick(5000)
    assert char.speed == 3
    assert not char.high_speed


def test_be_hit_uses_knives_first(char):
    char.be_hit()
    assert char.knife_count == 3
    assert char.health == 100
    for _ in range(3):
        char.be_hit()
    char.be_hit()
    assert char.knife_count == 0
    assert char.health == 80


def test_shoot_hits_target_after_delay():
    shooter = Character(random.Random(2))
    target = Character(random.Random(3))
    thrown = []
    shooter.knife_thrown.connect(lambda: thrown.append(1))
    shooter.aim_target = target
    shooter.shoot()
    assert shooter.knife_count == 3
    assert target.knife_count == 4
    assert not shooter.ready_to_attack
    assert thrown == [1]
    shooter.shoot()
    assert thrown == [1]
    shooter.tick(150)
    assert target.knife_count == 3
    assert shooter.ready_to_attack


def test_shoot_without_target_does_nothing(char):
    char.shoot()
    assert char.knife_count == 4
    assert char.ready_to_attack


def test_movement_right(char):
    moved = []
    char.position_changed.connect(lambda: moved.append(1))
    char.key_press(Key.D)
    assert char.animating
    char.tick(16)
    assert char.pos == (3.0, 0.0)
    assert moved == [1]


def test_diagonal_movement_is_normalised(char):
    char.key_press(Key.A)
    char.key_press(Key.W)
    char.tick(16)
    assert math.hypot(char.x, char.y) == pytest.approx(char.speed)
    assert char.x < 0 and char.y < 0


def test_key_release_stops_animation(char):
    char.key_press(Key.S)
    char.key_release(Key.S)
    assert not char.animating
    char.tick(100)
    assert char.pos == (0.0, 0.0)


def test_constrain_position():
    char = Character(random.Random(4))
    cx, cy = ARENA_CENTER
    x, y = char.constrain_position(cx + 5000, cy - 3000)
    assert math.hypot(x - cx, y - cy) == pytest.approx(ARENA_RADIUS)
    assert char.constrain_position(cx + 10, cy + 10) == (cx + 10, cy + 10)


def test_pos_clamped_only_inside_scene(char):
    char.pos = (10000.0, 1420.0)
    assert char.x == 10000.0
    char.scene = object()
    char.pos = (10000.0, 1420.0)
    assert char.pos == pytest.approx((1420.0 + ARENA_RADIUS, 1420.0))


def test_give_knife_refills_up_to_four(char):
    char.pop_knife()
    char.pop_knife()
    char.tick(3000)
    assert char.knife_count == 3
    char.tick(30000)
    assert char.knife_count == 4


def test_hearts_follow_health(char):
    char.drop_health(40)
    char.tick(1000)
    assert char.hearts == char.health // 20


def test_rotation_stays_in_range(char):
    char.tick(5000)
    assert 0 <= char.rotation_angle < 360


def test_bounding_center_inside_rect(char):
    char.pos = (100.0, 200.0)
    left, top, width, height = char.bounding_rect()
    assert char.bounding_center() == (100.0 + left + width / 2, 200.0 + top + height / 2)


def test_negative_tick_raises(char):
    with pytest.raises(ValueError):
        char.tick(-1)


def test_player_is_character():
    player = Player(random.Random(5))
    assert isinstance(player, Character)
    assert player.knife_count == 4


def test_mob_holds_a_movement_key_and_moves():
    mob = Mob(random.Random(6))
    assert len(mob.pressed_keys) == 1
    assert mob.pressed_keys <= {Key.A, Key.S, Key.D, Key.W}
    mob.tick(16)
    assert mob.pos != (0.0, 0.0)


def test_mob_shoots_on_timer():
    mob = Mob(random.Random(7))
    target = Character(random.Random(8))
    mob.aim_target = target
    before = mob.knife_count
    mob.tick(1000)
    assert mob.knife_count == before - 1
    mob.tick(150)
    assert target.knife_count == 3


def test_mob_death_reported_once():
    mob = Mob(random.Random(9))
    reported = []
    mob.mob_died.connect(reported.append)
    mob.aim_target = Character(random.Random(10))
    mob.drop_health(100)
    assert mob.dead
    knives = mob.knife_count
    mob.tick(5000)
    assert reported == [mob.id]
    mob.tick(20000)
    assert reported == [mob.id]
    assert mob.knife_count == knives