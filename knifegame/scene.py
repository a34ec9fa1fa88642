"""The arena scene: item bookkeeping, pickups, melee contact, aiming and win tracking."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

from knifegame.aimline import AimLine
from knifegame.character import Character, Mob, Player
from knifegame.props import Prop

AI_COUNT = 5
SCENE_SIZE = 3000
BACKGROUND_SIZE = 1800
BACKGROUND_POS = ((SCENE_SIZE - BACKGROUND_SIZE) // 2, (SCENE_SIZE - BACKGROUND_SIZE) // 2)

PICK_DISTANCE = 50.0
KILL_CREDIT_RANGE = 500.0

PICK_CHECK_INTERVAL_MS = 10
CONTACT_CHECK_INTERVAL_MS = 500
AIM_INTERVAL_MS = 16
AIM_FAST_INTERVAL_MS = 10

Point = tuple[float, float]


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
    due: float
    order: int


def _scene_center(item: object) -> Point:
    if isinstance(item, Character):
        return item.bounding_center()
    left, top, width, height = item.bounding_rect()
    x = getattr(item, "x", 0.0)
    y = getattr(item, "y", 0.0)
    return (x + left + width / 2, y + top + height / 2)


class Scene:
    """Holds every arena item and runs the periodic game checks."""

    def __init__(self) -> None:
        self.width = float(SCENE_SIZE)
        self.height = float(SCENE_SIZE)
        self.background_pos = BACKGROUND_POS
        self._items: list[object] = []
        self._clock = 0.0

        self.prop_picked = _Signal()
        self.player_won = _Signal()

        self.kill_num = 0
        self.cur_ai_num = AI_COUNT

        self.aim_line = AimLine(is_player=True)
        self.add_item(self.aim_line)
        self.aim_lines: list[AimLine] = []
        for _ in range(AI_COUNT):
            line = AimLine()
            self.aim_lines.append(line)
            self.add_item(line)

        self._timers = [
            _Timer(PICK_CHECK_INTERVAL_MS, self.check_distance, PICK_CHECK_INTERVAL_MS, 0),
            _Timer(
                CONTACT_CHECK_INTERVAL_MS,
                self.check_character_distance,
                CONTACT_CHECK_INTERVAL_MS,
                1,
            ),
        ]
        self._aim_timer = _Timer(AIM_INTERVAL_MS, self._on_aim_timer, AIM_INTERVAL_MS, 2)
        self._timers.append(self._aim_timer)

    # -- items ------------------------------------------------------------

    def add_item(self, item: object) -> object:
        """Place *item* in the scene and return it."""
        if any(existing is item for existing in self._items):
            return item
        self._items.append(item)
        if isinstance(item, Character):
            item.scene = self
        elif isinstance(item, Prop):
            self.prop_picked.connect(item.handle_picked)
        return item

    def items(self) -> list[object]:
        """All items, topmost (most recently added) first."""
        return list(reversed(self._items))

    @property
    def characters(self) -> list[Character]:
        return [item for item in self.items() if isinstance(item, Character)]

    @property
    def props(self) -> list[Prop]:
        return [item for item in self.items() if isinstance(item, Prop)]

    # -- geometry ---------------------------------------------------------

    def items_close(self, a: object, b: object, threshold: float) -> bool:
        """True when the centres of *a* and *b* lie closer than *threshold*."""
        ax, ay = _scene_center(a)
        bx, by = _scene_center(b)
        dx, dy = ax - bx, ay - by
        return dx * dx + dy * dy < threshold * threshold

    def char_distance_squared(self, a: Character, b: Character) -> int:
        """Squared distance between two characters' centres, truncated to an integer."""
        ax, ay = a.bounding_center()
        bx, by = b.bounding_center()
        dx, dy = ax - bx, ay - by
        return int(dx * dx + dy * dy)

    # -- game logic -------------------------------------------------------

    def handle_mob_death(self, mob_id: int) -> None:
        """Count a fallen mob, credit the player with a kill when nearby, detect a win."""
        self.cur_ai_num -= 1
        characters = self.characters
        target = next((c for c in characters if c.id == mob_id), None)
        if target is not None:
            tx, ty = target.pos
            for player in (c for c in characters if isinstance(c, Player)):
                px, py = player.pos
                if math.hypot(tx - px, ty - py) <= KILL_CREDIT_RANGE:
                    self.kill_num += 1
                    break
        if self.cur_ai_num == 0:
            self.player_won.emit()

    def check_distance(self) -> None:
        """Let every character pick up the props it touches."""
        characters = self.characters
        if not characters:
            return
        props = self.props
        for character in characters:
            for prop in props:
                if self.items_close(character, prop, PICK_DISTANCE):
                    if not prop.picked:
                        character.handle_pick(prop.kind)
                    self.prop_picked.emit(prop)

    def check_character_distance(self) -> None:
        """Hit, at most once each, every living pair whose knife rings overlap."""
        characters = self.characters
        processed: set[int] = set()
        for index, first in enumerate(characters):
            for second in characters[index + 1:]:
                threshold = first.near_attack_range + second.near_attack_range
                if (
                    self.items_close(first, second, threshold)
                    and not first.dead
                    and not second.dead
                ):
                    for fighter in (first, second):
                        if id(fighter) not in processed:
                            fighter.be_hit()
                            processed.add(id(fighter))

    def update_aim_targets(self) -> None:
        """Point every character at its nearest living rival within aim range."""
        characters = self.characters
        for shooter in characters:
            limit = shooter.aim_range * shooter.aim_range
            best = limit
            for other in characters:
                if other is shooter:
                    continue
                if shooter.dead or other.dead:
                    continue
                distance = self.char_distance_squared(shooter, other)
                if distance < best:
                    best = distance
                    shooter.aim_target = other
            if best == limit:
                shooter.aim_target = None
        if characters:
            self._aim_timer.interval = AIM_FAST_INTERVAL_MS
            self._aim_timer.due = self._clock + AIM_FAST_INTERVAL_MS

    def reset_aim_lines(self) -> None:
        """Move the aim lines to follow their characters and targets."""
        items = self.items()
        player = next((item for item in items if isinstance(item, Player)), None)
        if player is not None:
            self.aim_line.set_start(player.pos)
            target = player.aim_target
            self.aim_line.set_end(target.pos if target is not None else player.pos)

        characters = [item for item in items if isinstance(item, Character)]
        for character in characters[:AI_COUNT]:
            for line in self.aim_lines:
                if line.id == character.id:
                    line.set_start(character.pos)
                    target = character.aim_target
                    line.set_end(target.pos if target is not None else character.pos)

    # -- timing -----------------------------------------------------------

    def _on_aim_timer(self) -> None:
        self.update_aim_targets()
        self.reset_aim_lines()

    def _advance_children(self, delta: float) -> None:
        if delta <= 0:
            return
        for character in self.characters:
            character.tick(delta)
        for line in (self.aim_line, *self.aim_lines):
            line.update(delta)

    def tick(self, dt_ms: float) -> None:
        """Advance the scene, its characters and its aim lines by *dt_ms*."""
        if dt_ms < 0:
            raise ValueError("dt_ms must not be negative")
        end = self._clock + dt_ms
        while True:
            timer = min(self._timers, key=lambda t: (t.due, t.order))
            if timer.due > end:
                break
            self._advance_children(timer.due - self._clock)
            self._clock = timer.due
            timer.due += timer.interval
            timer.callback()
        self._advance_children(end - self._clock)
        self._clock = end


__all__ = ["Scene", "Mob"]