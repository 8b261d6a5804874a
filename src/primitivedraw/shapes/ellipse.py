"""Rotated filled ellipses."""

from typing import ClassVar, Literal

import numpy as np

from primitivedraw.geometry import (
    clamp, gaussian_offset, mutate_point, random_point, rotate_points, unique_pixels,
)
from primitivedraw.models import Point
from primitivedraw.shapes.base import BaseShape

# Semi-axes must stay below this fraction of the canvas's longest side.
MAX_AXIS_FRACTION = 0.1


class Ellipse(BaseShape):
    family: Literal["ellipse"] = "ellipse"
    center: Point
    a: int
    b: int
    angle: int  # degrees, 0-359

    PARAMETER_COUNT: ClassVar[int] = 4

    @classmethod
    def random(cls, width, height, border_extension, rng):
        upper = max(2, max(width, height) // 10)

        ellipse = cls(
            center=random_point(width, height, rng),
            a=int(rng.integers(1, upper)),
            b=int(rng.integers(1, upper)),
            angle=int(rng.integers(0, 360)),
        )
        return ellipse.mutate(width, height, rng)

    def is_valid(self, width, height):
        limit = max(width, height) * MAX_AXIS_FRACTION
        return self.a < limit and self.b < limit

    def perturb(self, index, width, height, rng):
        longest = max(width, height, 1)
        if index == 0:
            update = {"center": mutate_point(self.center, width, height, rng)}
        elif index == 1:
            update = {"a": clamp(self.a + gaussian_offset(rng), 1, longest)}
        elif index == 2:
            update = {"b": clamp(self.b + gaussian_offset(rng), 1, longest)}
        else:
            update = {"angle": int(rng.integers(0, 360))}
        return self.model_copy(update=update)

    def pixels(self):
        grid_x, grid_y = np.meshgrid(
            np.arange(self.center.x - self.a, self.center.x + self.a + 1, dtype=np.int64),
            np.arange(self.center.y - self.b, self.center.y + self.b + 1, dtype=np.int64),
            indexing="ij",
        )
        xs = grid_x.ravel()
        ys = grid_y.ravel()

        dx = (xs - self.center.x).astype(np.float64)
        dy = (ys - self.center.y).astype(np.float64)
        inside = (dx * dx) / (self.a * self.a) + (dy * dy) / (self.b * self.b) <= 1.0

        xs, ys = rotate_points(xs[inside], ys[inside], self.center, self.angle)
        return unique_pixels(xs, ys)

    def scaled(self, factor):
        return self.model_copy(update={
            "center": Point(x=int(self.center.x * factor), y=int(self.center.y * factor)),
            "a": max(1, int(self.a * factor)),
            "b": max(1, int(self.b * factor)),
        })
