"""
Geometry helpers for shape generation and rasterization.

All randomness comes from a caller-supplied ``numpy.random.Generator`` so a
whole run is reproducible from a single seed.
"""

import math
import time

import numpy as np

from primitivedraw.models import Point
from primitivedraw.tracer import get_tracer

# Standard deviation of every positional / size perturbation.
MUTATION_SIGMA = 16.0

# How far outside the canvas a mutated point may wander.
POINT_MARGIN = 5


def clamp(value, lo, hi):
    return max(lo, min(hi, value))


def resolve_seed(seed):
    """
    Turn a configured seed into the one actually used.

    A seed of 0 means "pick one from the clock"; the chosen seed is reported
    through the tracer so the run can be replayed.
    """
    if seed == 0:
        seed = time.time_ns() & 0xFFFFFFFFFFFFFFFF
        get_tracer().event("Derived seed from clock", seed=seed)
    return seed


def make_rng(seed):
    """Create the generator for one run."""
    return np.random.default_rng(resolve_seed(seed))


def gaussian_offset(rng):
    """Gaussian step (mean 0, sd 16) truncated toward zero."""
    return int(rng.normal(0.0, MUTATION_SIGMA))


def rotate_point(point, center, angle):
    """
    Rotate ``point`` about ``center`` by ``angle`` degrees.

    Resulting coordinates are truncated, not rounded.
    """
    cos_a = math.cos(math.radians(angle))
    sin_a = math.sin(math.radians(angle))

    dx = point.x - center.x
    dy = point.y - center.y

    new_x = dx * cos_a - dy * sin_a
    new_y = dx * sin_a + dy * cos_a

    return Point(x=int(new_x) + center.x, y=int(new_y) + center.y)


def rotate_points(xs, ys, center, angle):
    """Vectorized ``rotate_point`` over integer coordinate arrays."""
    cos_a = math.cos(math.radians(angle))
    sin_a = math.sin(math.radians(angle))

    dx = xs - center.x
    dy = ys - center.y

    new_x = np.trunc(dx * cos_a - dy * sin_a).astype(np.int64)
    new_y = np.trunc(dx * sin_a + dy * cos_a).astype(np.int64)

    return new_x + center.x, new_y + center.y


def random_point(width, height, rng):
    """Uniform point in ``[0, width) x [0, height)``."""
    x = int(rng.integers(0, width))
    y = int(rng.integers(0, height))
    return Point(x=x, y=y)


def random_point_in_radius(origin, radius, rng):
    """Uniform point in the half-open square of side ``2 * radius`` around ``origin``."""
    x = int(rng.integers(origin.x - radius, origin.x + radius))
    y = int(rng.integers(origin.y - radius, origin.y + radius))
    return Point(x=x, y=y)


def mutate_point(point, width, height, rng):
    """Jitter both coordinates, keeping them within ``POINT_MARGIN`` of the canvas."""
    x = clamp(point.x + gaussian_offset(rng), -POINT_MARGIN, width + POINT_MARGIN)
    y = clamp(point.y + gaussian_offset(rng), -POINT_MARGIN, height + POINT_MARGIN)
    return Point(x=x, y=y)


def angle_between(vertex, p2, p3):
    """Angle in degrees at ``vertex`` between the rays to ``p2`` and ``p3``."""
    dx1 = p2.x - vertex.x
    dy1 = p2.y - vertex.y
    dx2 = p3.x - vertex.x
    dy2 = p3.y - vertex.y

    d1 = math.hypot(dx1, dy1)
    d2 = math.hypot(dx2, dy2)
    if d1 == 0 or d2 == 0:
        return 0.0

    dot = (dx1 * dx2 + dy1 * dy2) / (d1 * d2)
    return math.degrees(math.acos(clamp(dot, -1.0, 1.0)))


def squared_distance(p1, p2):
    dx = p1.x - p2.x
    dy = p1.y - p2.y
    return dx * dx + dy * dy


def round_half_away(values):
    """Round to nearest integer, halves away from zero."""
    return (np.sign(values) * np.floor(np.abs(values) + 0.5)).astype(np.int64)


def line_pixels(x0, y0, x1, y1):
    """
    Bresenham walk from ``(x0, y0)`` to ``(x1, y1)``, both ends included.

    Returns a list of ``(x, y)`` tuples.
    """
    pixels = []
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    x, y = x0, y0
    while True:
        pixels.append((x, y))
        if x == x1 and y == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x += sx
        if e2 <= dx:
            err += dx
            y += sy

    return pixels


def unique_pixels(xs, ys):
    """
    Stack coordinates into an ``(N, 2)`` array of unique ``(x, y)`` rows.

    Rows come back sorted by x, then y.
    """
    if len(xs) == 0:
        return np.empty((0, 2), dtype=np.int64)
    pts = np.column_stack([np.asarray(xs, dtype=np.int64), np.asarray(ys, dtype=np.int64)])
    return np.unique(pts, axis=0)
