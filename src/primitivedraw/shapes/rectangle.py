"""Rotated rectangles."""

from typing import ClassVar, Literal

import numpy as np

from primitivedraw.geometry import (
    clamp, gaussian_offset, mutate_point, random_point, rotate_points, unique_pixels,
)
from primitivedraw.models import Point
from primitivedraw.shapes.base import BaseShape

MIN_SIDE = 5


class Rectangle(BaseShape):
    family: Literal["rectangle"] = "rectangle"
    center: Point
    width: int
    height: int
    angle: int  # degrees, 0-359

    PARAMETER_COUNT: ClassVar[int] = 4

    @classmethod
    def random(cls, width, height, border_extension, rng):
        longest = max(width, height)
        upper = max(MIN_SIDE + 1, longest // 2)

        rect = cls(
            center=random_point(width, height, rng),
            width=int(rng.integers(MIN_SIDE, upper)),
            height=int(rng.integers(MIN_SIDE, upper)),
            angle=int(rng.integers(0, 360)),
        )
        return rect.mutate(width, height, rng)

    def perturb(self, index, width, height, rng):
        longest = max(width, height, MIN_SIDE)
        if index == 0:
            update = {"center": mutate_point(self.center, width, height, rng)}
        elif index == 1:
            update = {"width": clamp(self.width + gaussian_offset(rng), MIN_SIDE, longest)}
        elif index == 2:
            update = {"height": clamp(self.height + gaussian_offset(rng), MIN_SIDE, longest)}
        else:
            # The angle is redrawn outright rather than nudged
            update = {"angle": int(rng.integers(0, 360))}
        return self.model_copy(update=update)

    def pixels(self):
        half_w = self.width // 2
        half_h = self.height // 2
        grid_x, grid_y = np.meshgrid(
            np.arange(self.center.x - half_w, self.center.x + half_w + 1, dtype=np.int64),
            np.arange(self.center.y - half_h, self.center.y + half_h + 1, dtype=np.int64),
            indexing="ij",
        )
        xs, ys = rotate_points(grid_x.ravel(), grid_y.ravel(), self.center, self.angle)
        return unique_pixels(xs, ys)

    def scaled(self, factor):
        return self.model_copy(update={
            "center": Point(x=int(self.center.x * factor), y=int(self.center.y * factor)),
            "width": int(self.width * factor),
            "height": int(self.height * factor),
        })
