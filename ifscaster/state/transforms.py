# ifscaster/state/transforms.py
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, List, Tuple

from ifscaster.errors import EmptySetError, InvalidSelectionError

if TYPE_CHECKING:
    from ifscaster.render.canvas import Renderer

Vec2 = Tuple[float, float]
Triangle = Tuple[Vec2, Vec2, Vec2]
Color = Tuple[int, int, int]

DEFAULT_SCALE = 0.5
DEFAULT_SCALE_RATE = 1.1
DEFAULT_ROTATION_STEP = 0.1 * math.pi

# Control point glyph sizes, in canvas units per unit of scale.
MARKER_DIAMETER = 30.0
MARKER_ARM = 60.0

MARKER_COLOR: Color = (120, 200, 240)
ACTIVE_MARKER_COLOR: Color = (240, 210, 80)


def wrap_angle(angle: float) -> float:
    """Bring an angle one step back into [-pi, pi).

    Only a single 2*pi correction is applied; callers move the angle by less
    than a full turn at a time.
    """
    if angle >= math.pi:
        angle -= 2.0 * math.pi
    elif angle < -math.pi:
        angle += 2.0 * math.pi
    return angle


@dataclass
class Transformation:
    """Similarity map: scale and rotate about a fixed point."""

    fixed_point: Vec2
    scale_factor: float = DEFAULT_SCALE
    rotate_factor: float = 0.0
    scale_rate: float = DEFAULT_SCALE_RATE
    rotation_step: float = DEFAULT_ROTATION_STEP

    def apply(self, p: Vec2) -> Vec2:
        fx, fy = self.fixed_point
        dx = (p[0] - fx) * self.scale_factor
        dy = (p[1] - fy) * self.scale_factor
        c = math.cos(self.rotate_factor)
        s = math.sin(self.rotate_factor)
        return (fx + dx * c - dy * s, fy + dx * s + dy * c)

    def apply_all(self, points: Triangle) -> Triangle:
        a, b, c = points
        return (self.apply(a), self.apply(b), self.apply(c))

    # --- parameter edits ---

    def increase_scale(self) -> bool:
        """Grow the scale while it stays contractive. Returns True if it changed."""
        if self.scale_factor >= 1.0:
            return False
        grown = self.scale_factor * self.scale_rate
        if grown >= 1.0:
            return False
        self.scale_factor = grown
        return True

    def decrease_scale(self) -> None:
        # No floor: repeated shrinking is allowed to approach zero.
        self.scale_factor /= self.scale_rate

    def increase_rotation(self) -> None:
        self.rotate_factor = wrap_angle(self.rotate_factor + self.rotation_step)

    def decrease_rotation(self) -> None:
        self.rotate_factor = wrap_angle(self.rotate_factor - self.rotation_step)

    # --- drawing ---

    def render(self, renderer: "Renderer", active: bool = False) -> None:
        """
        Draw the control glyph: a disc whose size tracks the scale, and an
        arm pointing along the rotation whose length also tracks the scale.
        """
        color = ACTIVE_MARKER_COLOR if active else MARKER_COLOR
        fx, fy = self.fixed_point
        renderer.draw_filled_circle(self.fixed_point, MARKER_DIAMETER * self.scale_factor, color)
        arm = MARKER_ARM * self.scale_factor
        tip = (
            fx + arm * math.cos(self.rotate_factor),
            fy + arm * math.sin(self.rotate_factor),
        )
        renderer.draw_line(self.fixed_point, tip, color)


@dataclass
class TransformationSet:
    """
    Ordered transformations plus the active selection.

    Insertion order is the branch order of the generated fractal, so it is
    never rearranged.
    """

    items: List[Transformation] = field(default_factory=list)
    active_index: int = 0
    default_scale: float = DEFAULT_SCALE
    scale_rate: float = DEFAULT_SCALE_RATE
    rotation_step: float = DEFAULT_ROTATION_STEP

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Transformation]:
        return iter(self.items)

    def __getitem__(self, idx: int) -> Transformation:
        return self.items[idx]

    def add(self, fixed_point: Vec2) -> Transformation:
        t = Transformation(
            fixed_point=(float(fixed_point[0]), float(fixed_point[1])),
            scale_factor=self.default_scale,
            rotate_factor=0.0,
            scale_rate=self.scale_rate,
            rotation_step=self.rotation_step,
        )
        self.items.append(t)
        return t

    def active(self) -> Transformation:
        if not 0 <= self.active_index < len(self.items):
            raise InvalidSelectionError(
                f"active index {self.active_index} out of range for {len(self.items)} transformations"
            )
        return self.items[self.active_index]

    def remove_active(self) -> Transformation:
        """Drop the active transformation and select the first one again."""
        if len(self.items) <= 1:
            raise EmptySetError("cannot remove the last remaining transformation")
        self.active()  # validates the index before mutating
        removed = self.items.pop(self.active_index)
        self.active_index = 0
        return removed

    def set_active_by_proximity(self, p: Vec2, threshold: float) -> bool:
        """
        Select the transformation whose fixed point is within threshold of p.

        Every match is selected in turn, so when several points are in range
        the last one in set order wins. Returns False and keeps the current
        selection if nothing is in range.
        """
        px, py = p
        found = False
        for idx, t in enumerate(self.items):
            fx, fy = t.fixed_point
            if math.hypot(px - fx, py - fy) < threshold:
                self.active_index = idx
                found = True
        return found

    def base_polygon(self) -> Triangle:
        """First three fixed points, repeated cyclically if fewer remain."""
        if not self.items:
            raise EmptySetError("no transformations to seed the base polygon")
        pts = [t.fixed_point for t in self.items[:3]]
        n = len(pts)
        return (pts[0], pts[1 % n], pts[2 % n])

    def clear(self) -> None:
        self.items.clear()
        self.active_index = 0


def default_fixed_points(width: float, height: float) -> List[Vec2]:
    """Center-top, lower-left quarter, lower-right three-quarter."""
    return [
        (width / 2.0, height / 4.0),
        (width / 4.0, height * 3.0 / 4.0),
        (width * 3.0 / 4.0, height * 3.0 / 4.0),
    ]
