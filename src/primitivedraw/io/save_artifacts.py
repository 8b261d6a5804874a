"""
Output writers for primitivedraw.

Handles raster images, SVG documents and JSON scene files, and decides which
writer an output path needs from its extension.
"""

import json
import os

import cv2

from primitivedraw.errors import UnsupportedFormatError
from primitivedraw.tracer import get_tracer

RASTER_EXTENSIONS = (".png", ".jpg", ".jpeg", ".bmp", ".tif", ".tiff", ".webp")

OUTPUT_SVG = "svg"
OUTPUT_RASTER = "raster"
OUTPUT_JSON = "json"


def output_kind(path):
    """
    Classify an output path by extension.

    Raises UnsupportedFormatError for extensions without a writer.
    """
    ext = os.path.splitext(path)[1].lower()
    if ext == ".svg":
        return OUTPUT_SVG
    if ext == ".json":
        return OUTPUT_JSON
    if ext in RASTER_EXTENSIONS:
        return OUTPUT_RASTER
    if not ext:
        raise UnsupportedFormatError(f"Can't save to {path} (no extension found)")
    raise UnsupportedFormatError(f"Invalid save file type {ext!r} for {path}")


def ensure_dir(path):
    """Create directory if it does not exist."""
    if path:
        os.makedirs(path, exist_ok=True)


def save_image(img, path):
    """
    Save an RGBA canvas to disk.

    The alpha channel is dropped; OpenCV picks the encoder from the extension.
    """
    tracer = get_tracer()

    img_bgr = cv2.cvtColor(img, cv2.COLOR_RGBA2BGR)

    ensure_dir(os.path.dirname(path))
    if not cv2.imwrite(path, img_bgr):
        raise OSError(f"Failed to write image: {path}")
    tracer.event(f"Saved image: {path}")


def save_json(data, path, indent=2):
    """
    Save a dictionary or Pydantic model to JSON.
    """
    tracer = get_tracer()

    ensure_dir(os.path.dirname(path))

    if hasattr(data, "model_dump"):
        data = data.model_dump(mode="json")

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent)

    tracer.event(f"Saved JSON: {path}")


def save_svg(svg_content, path):
    """
    Save SVG content to file.
    """
    tracer = get_tracer()

    ensure_dir(os.path.dirname(path))

    if hasattr(svg_content, "tostring"):
        content = svg_content.tostring()
    else:
        content = str(svg_content)

    with open(path, "w", encoding="utf-8") as f:
        f.write(content)

    tracer.event(f"Saved SVG: {path}")
