"""Collectable props, decorative bushes and their random placement in the arena."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Protocol, Union

ARENA_CENTRE = (1500.0, 1500.0)

KNIFE_COUNT = 50
HEALTH_COUNT = 7
BOOTS_COUNT = 7
BUSH_COUNT = 3

KNIFE_SPAWN_RADIUS = 900
ITEM_SPAWN_RADIUS = 850
BUSH_SPAWN_RADIUS = 600

PROP_SIZE = (100, 100)
BUSH_SIZE = (300, 300)


class PropKind(IntEnum):
    """Identifiers of the collectable prop kinds."""

    KNIFE = 1472
    HEALTH = 1842
    BOOTS = 1253


PROP_IMAGES = {
    PropKind.KNIFE: "figs/knife.jpg",
    PropKind.HEALTH: "figs/healt_bottle.jpg",
    PropKind.BOOTS: "figs/boots.jpg",
}
BUSH_IMAGE = "figs/bush.jpg"

Point = tuple[float, float]
Rect = tuple[float, float, float, float]


@dataclass(eq=False)
class Prop:
    """A pickable item lying in the arena; it turns invisible once picked."""

    image_path: str = ""
    kind: Union[PropKind, int] = 0
    size: tuple[int, int] = PROP_SIZE
    x: float = 0.0
    y: float = 0.0
    picked: bool = False

    @property
    def pos(self) -> Point:
        return (self.x, self.y)

    @pos.setter
    def pos(self, value: Point) -> None:
        self.x, self.y = value

    @property
    def visible(self) -> bool:
        return not self.picked

    def handle_picked(self, prop: "Prop") -> bool:
        """Mark this prop as picked if *prop* is this very prop; return True on change."""
        if prop is self and not self.picked:
            self.picked = True
            return True
        return False

    def bounding_rect(self) -> Rect:
        """Rectangle (left, top, width, height) in the prop's own coordinates."""
        width, height = self.size
        return (0.0, 0.0, float(width), float(height))


@dataclass(eq=False)
class Bush:
    """A decorative bush drawn over the arena."""

    image_path: str = BUSH_IMAGE
    size: tuple[int, int] = BUSH_SIZE
    x: float = 0.0
    y: float = 0.0

    @property
    def pos(self) -> Point:
        return (self.x, self.y)

    @pos.setter
    def pos(self, value: Point) -> None:
        self.x, self.y = value

    def bounding_rect(self) -> Rect:
        """Rectangle (left, top, width, height) in the bush's own coordinates."""
        width, height = self.size
        return (0.0, 0.0, float(width), float(height))


class _ItemSink(Protocol):
    def add_item(self, item: object) -> object: ...


def random_position(radius: float, rng: random.Random | None = None) -> tuple[int, int]:
    """Return a uniformly distributed integer point inside a disc around the arena centre."""
    if radius < 0:
        raise ValueError("radius must not be negative")
    rng = rng or random.Random()
    angle = rng.random() * 2 * math.pi
    r = radius * math.sqrt(rng.random())
    cx, cy = ARENA_CENTRE
    return (int(cx + r * math.cos(angle)), int(cy + r * math.sin(angle)))


def populate(scene: _ItemSink, rng: random.Random | None = None) -> list[Prop | Bush]:
    """Scatter knives, health bottles, boots and bushes over *scene*; return them."""
    rng = rng or random.Random()
    spawns = (
        (PropKind.KNIFE, KNIFE_COUNT, KNIFE_SPAWN_RADIUS),
        (PropKind.HEALTH, HEALTH_COUNT, ITEM_SPAWN_RADIUS),
        (PropKind.BOOTS, BOOTS_COUNT, ITEM_SPAWN_RADIUS),
    )
    created: list[Prop | Bush] = []
    for kind, count, radius in spawns:
        for _ in range(count):
            prop = Prop(PROP_IMAGES[kind], kind)
            scene.add_item(prop)
            prop.pos = random_position(radius, rng)
            created.append(prop)
    for _ in range(BUSH_COUNT):
        bush = Bush()
        scene.add_item(bush)
        bush.pos = random_position(BUSH_SPAWN_RADIUS, rng)
        created.append(bush)
    return created