"""Filled triangles."""

from typing import ClassVar, Literal, Tuple

import numpy as np

from primitivedraw.geometry import (
    angle_between, mutate_point, random_point, random_point_in_radius,
)
from primitivedraw.models import Point
from primitivedraw.shapes.base import BaseShape


def orient_2d(p0, p1, xs, ys):
    """
    Edge function of the line ``p0 -> p1`` evaluated at ``(xs, ys)``.

    Positive on one side, negative on the other, zero on the line.
    """
    return (p1.x - p0.x) * (ys - p0.y) - (p1.y - p0.y) * (xs - p0.x)


class Triangle(BaseShape):
    family: Literal["triangle"] = "triangle"
    vertices: Tuple[Point, Point, Point]

    PARAMETER_COUNT: ClassVar[int] = 3
    MIN_ANGLE: ClassVar[float] = 15.0

    @classmethod
    def random(cls, width, height, border_extension, rng):
        p0 = random_point(width, height, rng)
        p1 = random_point_in_radius(p0, border_extension, rng)
        p2 = random_point_in_radius(p0, border_extension, rng)

        return cls(vertices=(p0, p1, p2)).mutate(width, height, rng)

    def is_valid(self, width, height):
        """No repeated vertex and every interior angle above ``MIN_ANGLE``."""
        p0, p1, p2 = self.vertices
        if p0 == p1 or p0 == p2 or p1 == p2:
            return False
        return (
            angle_between(p0, p1, p2) > self.MIN_ANGLE
            and angle_between(p1, p2, p0) > self.MIN_ANGLE
            and angle_between(p2, p0, p1) > self.MIN_ANGLE
        )

    def perturb(self, index, width, height, rng):
        vertices = list(self.vertices)
        vertices[index] = mutate_point(vertices[index], width, height, rng)
        return self.model_copy(update={"vertices": tuple(vertices)})

    def bounding_box(self):
        xs = [p.x for p in self.vertices]
        ys = [p.y for p in self.vertices]
        return min(xs), min(ys), max(xs), max(ys)

    def pixels(self):
        min_x, min_y, max_x, max_y = self.bounding_box()
        grid_x, grid_y = np.meshgrid(
            np.arange(min_x, max_x + 1, dtype=np.int64),
            np.arange(min_y, max_y + 1, dtype=np.int64),
            indexing="ij",
        )
        xs = grid_x.ravel()
        ys = grid_y.ravel()

        # Fixed vertex order: x descending, then y ascending
        p0, p1, p2 = sorted(self.vertices, key=lambda p: (-p.x, p.y))

        w0 = orient_2d(p1, p2, xs, ys)
        w1 = orient_2d(p2, p0, xs, ys)
        w2 = orient_2d(p0, p1, xs, ys)

        inside = ((w0 >= 0) & (w1 >= 0) & (w2 >= 0)) | ((w0 <= 0) & (w1 <= 0) & (w2 <= 0))
        return np.column_stack([xs[inside], ys[inside]])

    def scaled(self, factor):
        vertices = tuple(
            Point(x=int(p.x * factor), y=int(p.y * factor)) for p in self.vertices
        )
        return self.model_copy(update={"vertices": vertices})
