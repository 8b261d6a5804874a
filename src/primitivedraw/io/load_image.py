"""
Image loading for primitivedraw.

Decodes any format OpenCV understands and normalizes it to an RGBA canvas.
"""

import os

import cv2
import numpy as np

from primitivedraw.raster import to_rgba
from primitivedraw.tracer import get_tracer, trace


@trace(label="load_image")
def load_image(path):
    """
    Load an image from disk.

    Returns a tuple of (image, metadata) where:
    - image: RGBA uint8 numpy array (H, W, 4)
    - metadata: dict with width, height, channels, source_path

    Raises FileNotFoundError if path does not exist.
    Raises ValueError if image cannot be decoded.
    """
    tracer = get_tracer()

    if not os.path.exists(path):
        raise FileNotFoundError(f"Image not found: {path}")

    img = cv2.imread(path, cv2.IMREAD_UNCHANGED)

    if img is None:
        raise ValueError(f"Failed to load image: {path}")

    # 16-bit inputs are reduced to 8 bits per channel
    if img.dtype == np.uint16:
        img = (img // 257).astype(np.uint8)

    channels = 1 if img.ndim == 2 else img.shape[2]
    if channels == 3:
        img = cv2.cvtColor(img, cv2.COLOR_BGR2RGB)
    elif channels == 4:
        img = cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)

    rgba = to_rgba(img)
    height, width = rgba.shape[:2]

    tracer.event(f"Loaded image: {width}x{height}, channels={channels}")

    metadata = {
        "width": width,
        "height": height,
        "channels": channels,
        "source_path": os.path.abspath(path),
    }

    return rgba, metadata
