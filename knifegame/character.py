"""Characters of the arena: the shared fighter logic, the player and the AI mobs."""

from __future__ import annotations

import itertools
import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from knifegame.props import PropKind

INITIAL_KNIFE_COUNT = 4
INITIAL_KNIFE_RADIUS = 120
MAX_KNIFE_RADIUS = 200
KNIFE_RADIUS_STEP = 5
MAX_HEALTH = 100
HEALTH_PER_HEART = 20
HEALTH_PICKUP = 20
HIT_DAMAGE = 20
BASE_SPEED = 3
AIM_RANGE = 500

ARENA_CENTER = (1420.0, 1420.0)
ARENA_RADIUS = 900.0

MOVE_INTERVAL_MS = 16
ROTATE_INTERVAL_MS = 10
ROTATE_STEP_DEG = 2.0
GIVE_KNIFE_INTERVAL_MS = 3000
BOOTS_DURATION_MS = 5000
ATTACK_COOLDOWN_MS = 100
HIT_FLASH_MS = 200
HIT_FLASH_OPACITY = 0.3
KNIFE_HIT_DELAY_MS = 150
MOB_SHOOT_INTERVAL_MS = 1000
MOB_KEY_HOLD_MS = (1000, 5000)

BOUNDING_RECT = (-170.0, -180.0, 500.0, 500.0)

Point = tuple[float, float]
Rect = tuple[float, float, float, float]


class Key(Enum):
    """Keys a character reacts to."""

    A = "a"
    D = "d"
    W = "w"
    S = "s"
    C = "c"
    X = "x"
    SPACE = "space"


_DIRECTIONS = {
    Key.A: (-1.0, 0.0),
    Key.D: (1.0, 0.0),
    Key.W: (0.0, -1.0),
    Key.S: (0.0, 1.0),
}


class _Signal:
    """A list of callbacks invoked together."""

    def __init__(self) -> None:
        self._slots: list[Callable[..., object]] = []

    def connect(self, slot: Callable[..., object]) -> None:
        self._slots.append(slot)

    def emit(self, *args: object) -> None:
        for slot in list(self._slots):
            slot(*args)


@dataclass(eq=False)
class _Timer:
    interval: float
    callback: Callable[[], None]
    single_shot: bool = False
    due: Optional[float] = None
    seq: int = 0


class Character:
    """A fighter carrying orbiting knives, driven by pressed keys and timers."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self._clock = 0.0
        self._seq = itertools.count()
        self._timers: list[_Timer] = []

        self.x = 0.0
        self.y = 0.0
        self.scene: object | None = None

        self.dead = False
        self.animating = False
        self.pressed_keys: set[Key] = set()

        self.health = MAX_HEALTH
        self.hearts = MAX_HEALTH // HEALTH_PER_HEART
        self.knife_count = INITIAL_KNIFE_COUNT
        self.knife_radius = INITIAL_KNIFE_RADIUS
        self.rotation_angle = 0.0
        self.opacity = 1.0

        self.speed = BASE_SPEED
        self.high_speed = False

        self.aim_range = AIM_RANGE
        self.aim_target: Character | None = None
        self.ready_to_attack = True
        self.id = self._rng.randrange(1_000_000)

        self.position_changed = _Signal()
        self.died = _Signal()
        self.knife_thrown = _Signal()

        self._rotate_timer = self._add_timer(ROTATE_INTERVAL_MS, self._rotate)
        self._move_timer = self._add_timer(MOVE_INTERVAL_MS, self._on_move_timer)
        self._speed_timer = self._add_timer(BOOTS_DURATION_MS, self.speed_finished)
        self._give_knife_timer = self._add_timer(
            GIVE_KNIFE_INTERVAL_MS, self._handle_give_knife
        )
        self._cooldown_timer = self._add_timer(ATTACK_COOLDOWN_MS, self._cooldown_over)

        self._start(self._rotate_timer)
        self._start(self._move_timer)
        self._start(self._give_knife_timer)

    # -- timing -----------------------------------------------------------

    def _add_timer(self, interval: float, callback: Callable[[], None]) -> _Timer:
        timer = _Timer(interval, callback)
        self._timers.append(timer)
        return timer

    def _start(self, timer: _Timer, interval: float | None = None) -> None:
        if interval is not None:
            timer.interval = interval
        timer.due = self._clock + timer.interval
        timer.seq = next(self._seq)

    @staticmethod
    def _stop(timer: _Timer) -> None:
        timer.due = None

    def _schedule(self, delay_ms: float, callback: Callable[[], None]) -> None:
        timer = _Timer(delay_ms, callback, single_shot=True)
        self._timers.append(timer)
        self._start(timer)

    def tick(self, dt_ms: float) -> None:
        """Advance the character's clock, firing every timer that falls due."""
        if dt_ms < 0:
            raise ValueError("dt_ms must not be negative")
        end = self._clock + dt_ms
        while True:
            due = [t for t in self._timers if t.due is not None and t.due <= end]
            if not due:
                break
            timer = min(due, key=lambda t: (t.due, t.seq))
            self._clock = timer.due
            if timer.single_shot:
                timer.due = None
                self._timers.remove(timer)
            else:
                timer.due += timer.interval
                timer.seq = next(self._seq)
            timer.callback()
        self._clock = end

    # -- position ---------------------------------------------------------

    @property
    def pos(self) -> Point:
        return (self.x, self.y)

    @pos.setter
    def pos(self, value: Point) -> None:
        x, y = float(value[0]), float(value[1])
        if self.scene is not None:
            x, y = self.constrain_position(x, y)
        self.x, self.y = x, y

    def constrain_position(self, x: float, y: float) -> Point:
        """Pull a position back onto the arena circle when it lies outside it."""
        cx, cy = ARENA_CENTER
        dx, dy = x - cx, y - cy
        distance = math.hypot(dx, dy)
        if distance > ARENA_RADIUS:
            scale = ARENA_RADIUS / distance
            return (cx + dx * scale, cy + dy * scale)
        return (x, y)

    def bounding_rect(self) -> Rect:
        """Rectangle (left, top, width, height) in the character's own coordinates."""
        return BOUNDING_RECT

    def bounding_center(self) -> Point:
        """Centre of the bounding rectangle in scene coordinates."""
        left, top, width, height = BOUNDING_RECT
        return (self.x + left + width / 2, self.y + top + height / 2)

    # -- input ------------------------------------------------------------

    def key_press(self, key: Key) -> None:
        """Start holding *key*."""
        if self.dead:
            return
        self.animating = True
        self.pressed_keys.add(key)

    def key_release(self, key: Key) -> None:
        """Stop holding *key*."""
        if self.dead:
            return
        self.pressed_keys.discard(key)
        if not self.pressed_keys:
            self.animating = False

    def _on_move_timer(self) -> None:
        dx = dy = 0.0
        for key in list(self.pressed_keys):
            if key in _DIRECTIONS:
                step_x, step_y = _DIRECTIONS[key]
                dx += step_x
                dy += step_y
            elif key is Key.C:
                self.drop_health(1)
            elif key is Key.X:
                self.pop_knife()
            elif key is Key.SPACE:
                self.shoot()
        if dx or dy:
            length = math.hypot(dx, dy)
            self.pos = (self.x + self.speed * dx / length, self.y + self.speed * dy / length)
            self.position_changed.emit()
        self._control_hearts()

    def _rotate(self) -> None:
        self.rotation_angle += ROTATE_STEP_DEG
        if self.rotation_angle >= 360:
            self.rotation_angle -= 360

    def _control_hearts(self) -> None:
        wanted = int(self.health / HEALTH_PER_HEART)
        if wanted < self.hearts:
            self.hearts -= 1
        elif wanted > self.hearts:
            self.hearts += 1

    # -- knives -----------------------------------------------------------

    def _update_knife_radius(self) -> None:
        if self.knife_count > INITIAL_KNIFE_COUNT:
            radius = KNIFE_RADIUS_STEP * (self.knife_count - INITIAL_KNIFE_COUNT)
            radius += INITIAL_KNIFE_RADIUS
        else:
            radius = INITIAL_KNIFE_RADIUS
        self.knife_radius = min(radius, MAX_KNIFE_RADIUS)

    @property
    def near_attack_range(self) -> int:
        return self.knife_radius

    def push_knife(self) -> None:
        """Add one orbiting knife."""
        self.knife_count += 1
        self._update_knife_radius()

    def pop_knife(self) -> None:
        """Remove one orbiting knife, if any."""
        if self.knife_count > 0:
            self.knife_count -= 1
        self._update_knife_radius()

    def _handle_give_knife(self) -> None:
        if self.knife_count < INITIAL_KNIFE_COUNT:
            self.push_knife()

    # -- health -----------------------------------------------------------

    def add_health(self, amount: int) -> None:
        """Heal by a health pickup; only the pickup amount has an effect."""
        if amount == HEALTH_PICKUP:
            self.health = min(self.health + HEALTH_PICKUP, MAX_HEALTH)

    def drop_health(self, amount: int) -> None:
        """Take damage; die when health runs out, otherwise flash briefly."""
        self.health -= amount
        if self.health <= 0:
            self._die()
            return
        self.opacity = HIT_FLASH_OPACITY
        self._schedule(HIT_FLASH_MS, self._restore_opacity)

    def _restore_opacity(self) -> None:
        self.opacity = 1.0

    def _die(self) -> None:
        self.dead = True
        self._stop(self._move_timer)
        self._stop(self._rotate_timer)
        self._stop(self._give_knife_timer)
        self.died.emit()

    # -- pickups ----------------------------------------------------------

    def picked_boots(self) -> None:
        """Double the speed for a while."""
        self._start(self._speed_timer, BOOTS_DURATION_MS)
        if not self.high_speed:
            self.speed *= 2
        self.high_speed = True

    def speed_finished(self) -> None:
        """End the boots speed bonus."""
        if self.high_speed:
            self.speed //= 2
        self.high_speed = False

    def handle_pick(self, prop_id: int) -> None:
        """React to picking up a prop of kind *prop_id*."""
        if prop_id == PropKind.KNIFE:
            self.push_knife()
        elif prop_id == PropKind.HEALTH:
            self.add_health(HEALTH_PICKUP)
        elif prop_id == PropKind.BOOTS:
            self.picked_boots()

    # -- combat -----------------------------------------------------------

    def be_hit(self) -> None:
        """Lose a knife, or health when no knife is left."""
        if self.knife_count:
            self.pop_knife()
        else:
            self.drop_health(HIT_DAMAGE)

    def shoot(self) -> None:
        """Throw a knife at the aim target; it lands a moment later."""
        if not self.ready_to_attack:
            return
        target = self.aim_target
        if not (self.knife_count and target is not None):
            return
        self.be_hit()
        self._schedule(KNIFE_HIT_DELAY_MS, target.be_hit)
        self._start(self._cooldown_timer, ATTACK_COOLDOWN_MS)
        self.knife_thrown.emit()
        self.ready_to_attack = False

    def _cooldown_over(self) -> None:
        self.ready_to_attack = True
        self._stop(self._cooldown_timer)


class Player(Character):
    """The character steered from the keyboard."""


class Mob(Character):
    """A computer-controlled character that wanders and shoots on its own."""

    def __init__(self, rng: random.Random | None = None) -> None:
        super().__init__(rng)
        self.mob_died = _Signal()
        self._mob_is_dead = False
        self.random_move()
        self._shoot_timer = self._add_timer(MOB_SHOOT_INTERVAL_MS, self.shoot)
        self._start(self._shoot_timer)
        self.died.connect(lambda: self._stop(self._shoot_timer))

    def random_move(self) -> None:
        """Hold a random movement key for a random while, then pick again."""
        if self.dead and not self._mob_is_dead:
            self.mob_died.emit(self.id)
            self._mob_is_dead = True
        if self.dead:
            return
        key = (Key.A, Key.S, Key.D, Key.W)[self._rng.randrange(4)]
        self.pressed_keys.add(key)
        delay = self._rng.randint(*MOB_KEY_HOLD_MS)

        def release() -> None:
            self.pressed_keys.discard(key)
            self.random_move()

        self._schedule(delay, release)