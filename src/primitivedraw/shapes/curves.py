"""
One-pixel-wide quadratic and cubic Bezier curves.

Both families are rasterized the same way: the curve is sampled at a number
of evenly spaced parameters that grows with its estimated length, samples are
snapped to the nearest pixel and consecutive samples joined by a Bresenham
walk.
"""

import math
from typing import ClassVar, Literal

import numpy as np

from primitivedraw.geometry import (
    line_pixels, mutate_point, random_point, random_point_in_radius,
    round_half_away, squared_distance, unique_pixels,
)
from primitivedraw.models import Point
from primitivedraw.shapes.base import BaseShape


def _chord_length(points):
    """Sum of the straight distances between consecutive control points."""
    return sum(
        math.hypot(b.x - a.x, b.y - a.y) for a, b in zip(points, points[1:])
    )


def segment_count(length):
    """Line segments used to draw a curve of roughly ``length`` pixels."""
    # Hyperbola keeps short curves from collapsing to a single segment
    return max(1, int(math.sqrt(length * length + 800.0) / 8.0))


def walk_samples(xs, ys):
    """Join consecutive sample points with Bresenham lines."""
    xs = round_half_away(xs).tolist()
    ys = round_half_away(ys).tolist()

    pixels = []
    for i in range(len(xs) - 1):
        pixels.extend(line_pixels(xs[i], ys[i], xs[i + 1], ys[i + 1]))

    if not pixels:
        return unique_pixels([], [])
    px, py = zip(*pixels)
    return unique_pixels(px, py)


def _scale_point(point, factor):
    return Point(x=int(point.x * factor), y=int(point.y * factor))


class QuadraticCurve(BaseShape):
    family: Literal["quadratic"] = "quadratic"
    start: Point
    control: Point
    end: Point

    PARAMETER_COUNT: ClassVar[int] = 3

    @classmethod
    def random(cls, width, height, border_extension, rng):
        start = random_point(width, height, rng)
        control = random_point_in_radius(start, border_extension, rng)
        end = random_point_in_radius(start, border_extension, rng)

        return cls(start=start, control=control, end=end).mutate(width, height, rng)

    def is_valid(self, width, height):
        """The end points must be further apart than either of them is from the control."""
        d_start_end = squared_distance(self.start, self.end)
        return (
            d_start_end > squared_distance(self.start, self.control)
            and d_start_end > squared_distance(self.control, self.end)
        )

    def perturb(self, index, width, height, rng):
        name = ("start", "end", "control")[index]
        point = mutate_point(getattr(self, name), width, height, rng)
        return self.model_copy(update={name: point})

    def pixels(self):
        n = segment_count(_chord_length([self.start, self.control, self.end]))
        t = np.arange(n + 1, dtype=np.float64) / n
        mt = 1.0 - t

        xs = self.start.x * mt * mt + 2.0 * self.control.x * mt * t + self.end.x * t * t
        ys = self.start.y * mt * mt + 2.0 * self.control.y * mt * t + self.end.y * t * t
        return walk_samples(xs, ys)

    def scaled(self, factor):
        return self.model_copy(update={
            "start": _scale_point(self.start, factor),
            "control": _scale_point(self.control, factor),
            "end": _scale_point(self.end, factor),
        })


class CubicCurve(BaseShape):
    family: Literal["cubic"] = "cubic"
    start: Point
    control1: Point
    control2: Point
    end: Point

    PARAMETER_COUNT: ClassVar[int] = 4

    @classmethod
    def random(cls, width, height, border_extension, rng):
        start = random_point(width, height, rng)
        control1 = random_point_in_radius(start, border_extension, rng)
        control2 = random_point_in_radius(start, border_extension, rng)
        end = random_point_in_radius(start, border_extension, rng)

        curve = cls(start=start, control1=control1, control2=control2, end=end)
        return curve.mutate(width, height, rng)

    # No validity rule: any four points make an acceptable cubic.

    def perturb(self, index, width, height, rng):
        name = ("start", "end", "control1", "control2")[index]
        point = mutate_point(getattr(self, name), width, height, rng)
        return self.model_copy(update={name: point})

    def pixels(self):
        n = segment_count(_chord_length([self.start, self.control1, self.control2, self.end]))
        t = np.arange(n + 1, dtype=np.float64) / n
        mt = 1.0 - t

        b0 = mt * mt * mt
        b1 = 3.0 * mt * mt * t
        b2 = 3.0 * mt * t * t
        b3 = t * t * t

        xs = self.start.x * b0 + self.control1.x * b1 + self.control2.x * b2 + self.end.x * b3
        ys = self.start.y * b0 + self.control1.y * b1 + self.control2.y * b2 + self.end.y * b3
        return walk_samples(xs, ys)

    def scaled(self, factor):
        return self.model_copy(update={
            "start": _scale_point(self.start, factor),
            "control1": _scale_point(self.control1, factor),
            "control2": _scale_point(self.control2, factor),
            "end": _scale_point(self.end, factor),
        })
