"""
RGBA canvas operations: creation, alpha-blended painting, averaging, scoring.

A canvas is a ``numpy.ndarray`` of shape ``(height, width, 4)`` and dtype
``uint8``. Painting treats the destination as opaque: only RGB is blended and
the destination alpha channel is left as it was.
"""

import math

import numpy as np

from primitivedraw.models import SHAPE_ALPHA, TRANSPARENT, Color


def new_canvas(width, height, color):
    """Create a canvas filled with ``color``."""
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = color.as_tuple()
    return canvas


def _in_bounds(canvas, pixels):
    """Return the x and y columns of ``pixels`` that fall inside ``canvas``."""
    height, width = canvas.shape[:2]
    if len(pixels) == 0:
        empty = np.empty(0, dtype=np.int64)
        return empty, empty
    xs = pixels[:, 0]
    ys = pixels[:, 1]
    mask = (xs >= 0) & (xs < width) & (ys >= 0) & (ys < height)
    return xs[mask], ys[mask]


def composite(canvas, pixels, color):
    """
    Blend ``color`` over each listed pixel of a copy of ``canvas``.

    ``pixels`` is an ``(N, 2)`` array of unique ``(x, y)`` rows; rows outside
    the canvas are skipped. Returns the new canvas.
    """
    output = canvas.copy()
    xs, ys = _in_bounds(canvas, pixels)
    if len(xs) == 0:
        return output

    alpha = color.a / 255.0
    src = np.array([color.r, color.g, color.b], dtype=np.float64)
    dst = output[ys, xs, :3].astype(np.float64)

    blended = src * alpha + dst * (1.0 - alpha)
    output[ys, xs, :3] = np.clip(np.rint(blended), 0, 255).astype(np.uint8)
    return output


def average_color(canvas):
    """Mean RGB over the whole canvas; alpha is always ``SHAPE_ALPHA``."""
    rgb = canvas[:, :, :3].reshape(-1, 3).astype(np.int64)
    if len(rgb) == 0:
        return TRANSPARENT
    r, g, b = (rgb.sum(axis=0) // len(rgb)).tolist()
    return Color(r=r, g=g, b=b, a=SHAPE_ALPHA)


def average_color_at(canvas, pixels):
    """
    Mean RGB of ``canvas`` over the in-bounds subset of ``pixels``.

    Returns a transparent black color when no pixel lands on the canvas.
    """
    xs, ys = _in_bounds(canvas, pixels)
    if len(xs) == 0:
        return TRANSPARENT

    rgb = canvas[ys, xs, :3].astype(np.int64)
    r, g, b = (rgb.sum(axis=0) // len(rgb)).tolist()
    return Color(r=r, g=g, b=b, a=SHAPE_ALPHA)


def score(target, approximation):
    """
    Root-mean-square difference over every pixel and all four channels.

    Lower is better; 0 means identical canvases.
    """
    if target.shape != approximation.shape:
        raise ValueError(
            f"Cannot score canvases of different shapes: {target.shape} vs {approximation.shape}"
        )
    if target.size == 0:
        return 0.0

    diff = target.astype(np.int64) - approximation.astype(np.int64)
    return math.sqrt(float(np.sum(diff * diff)) / diff.size)


def to_rgba(img):
    """
    Normalize a decoded image (gray, RGB or RGBA, uint8) to an RGBA canvas.
    """
    if img.ndim == 2:
        img = np.stack([img, img, img], axis=-1)
    if img.shape[2] == 3:
        alpha = np.full(img.shape[:2] + (1,), 255, dtype=np.uint8)
        img = np.concatenate([img, alpha], axis=-1)
    return np.ascontiguousarray(img.astype(np.uint8))
