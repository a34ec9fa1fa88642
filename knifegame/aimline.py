"""Aim lines between characters and the thrown-knife animation along them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

CENTER_BIAS = 80.0
PEN_WIDTH = 5
GLOW_WIDTH = 8
AIM_LINE_Z = 9999999
KNIFE_FLIGHT_MS = 150

Point = tuple[float, float]
Rect = tuple[float, float, float, float]


def _line_angle(start: Point, end: Point) -> float:
    """Angle in degrees, counter-clockwise from the x axis with y pointing down."""
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    if dx == 0 and dy == 0:
        return 0.0
    return math.degrees(math.atan2(-dy, dx)) % 360.0


@dataclass
class KnifeAnimation:
    """A knife flying linearly from *start* to *end* over *duration_ms*."""

    start: Point
    end: Point
    duration_ms: float = KNIFE_FLIGHT_MS
    elapsed_ms: float = 0.0

    @property
    def rotation(self) -> float:
        return -_line_angle(self.start, self.end) + 90

    @property
    def finished(self) -> bool:
        return self.elapsed_ms >= self.duration_ms

    def position(self) -> Point:
        """Current knife position."""
        t = 1.0 if self.duration_ms <= 0 else min(self.elapsed_ms / self.duration_ms, 1.0)
        return (
            self.start[0] + (self.end[0] - self.start[0]) * t,
            self.start[1] + (self.end[1] - self.start[1]) * t,
        )

    def advance(self, dt_ms: float) -> bool:
        """Move time forward by *dt_ms*; return True once the flight is over."""
        if dt_ms < 0:
            raise ValueError("dt_ms must not be negative")
        self.elapsed_ms = min(self.elapsed_ms + dt_ms, self.duration_ms)
        return self.finished


@dataclass
class AimLine:
    """A dashed line from a character to its aim target."""

    start: Point = (0.0, 0.0)
    end: Point = (0.0, 0.0)
    id: int = 0
    is_player: bool = False
    pen_width: float = PEN_WIDTH
    z_value: int = AIM_LINE_Z
    animations: list[KnifeAnimation] = field(default_factory=list)

    def set_start(self, point: Point) -> None:
        """Set the start from a character position, shifted to its centre."""
        self.start = (point[0] + CENTER_BIAS, point[1] + CENTER_BIAS)

    def set_end(self, point: Point) -> None:
        """Set the end from a character position, shifted to its centre."""
        self.end = (point[0] + CENTER_BIAS, point[1] + CENTER_BIAS)

    def set_line(self, start: Point, end: Point) -> None:
        """Set both ends exactly as given."""
        self.start = (float(start[0]), float(start[1]))
        self.end = (float(end[0]), float(end[1]))

    def bounding_rect(self) -> Rect:
        """Rectangle (left, top, width, height) covering the line and its pen."""
        extra = self.pen_width / 2.0
        left = min(self.start[0], self.end[0]) - extra
        top = min(self.start[1], self.end[1]) - extra
        width = abs(self.end[0] - self.start[0]) + 2 * extra
        height = abs(self.end[1] - self.start[1]) + 2 * extra
        return (left, top, max(width, 1.0), max(height, 1.0))

    def create_knife_animation(self) -> KnifeAnimation:
        """Launch a knife along the current line."""
        animation = KnifeAnimation(self.start, self.end)
        self.animations.append(animation)
        return animation

    def update(self, dt_ms: float) -> None:
        """Advance running knife animations and drop the finished ones."""
        self.animations = [a for a in self.animations if not a.advance(dt_ms)]