"""Pytest fixtures for primitivedraw tests."""

import os
import tempfile

import cv2
import numpy as np
import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def rng():
    """Seeded generator so shape tests are repeatable."""
    return np.random.default_rng(1234)


@pytest.fixture
def gradient_image():
    """RGBA canvas with a horizontal red ramp and a vertical blue ramp."""
    height, width = 24, 32
    img = np.zeros((height, width, 4), dtype=np.uint8)
    img[:, :, 0] = np.linspace(0, 255, width, dtype=np.uint8)[None, :]
    img[:, :, 2] = np.linspace(0, 255, height, dtype=np.uint8)[:, None]
    img[:, :, 3] = 255
    return img


@pytest.fixture
def blocks_image():
    """White image with a dark filled rectangle and circle."""
    img = np.ones((60, 80, 3), dtype=np.uint8) * 255
    cv2.rectangle(img, (8, 10), (35, 45), (20, 20, 20), -1)
    cv2.circle(img, (58, 30), 12, (200, 40, 40), -1)
    return img


@pytest.fixture
def synthetic_input_file(temp_dir, blocks_image):
    """Write the blocks image to disk for pipeline tests."""
    path = os.path.join(temp_dir, "test_input.png")
    cv2.imwrite(path, cv2.cvtColor(blocks_image, cv2.COLOR_RGB2BGR))
    return path
