"""Tests for hill climbing, the session and the run loop."""

import numpy as np
import pytest

from primitivedraw.geometry import make_rng
from primitivedraw.models import Color, ShapeFamily
from primitivedraw.optimizer import add_shape, climb
from primitivedraw.raster import new_canvas, score
from primitivedraw.runner import run
from primitivedraw.scene import Scene
from primitivedraw.session import ImageSession
from primitivedraw.shapes.registry import MIXED_ORDER
from primitivedraw.shapes.triangle import Triangle

BLACK = Color(r=0, g=0, b=0, a=255)


def _session(image, background=BLACK):
    return ImageSession.from_image(image, scale_to=0, background=background)


class TestClimb:
    """Tests for single-shape hill climbing."""

    def test_history_never_increases(self, gradient_image, rng):
        """Test that the best score only ever goes down."""
        base = new_canvas(32, 24, BLACK)
        start = Triangle.random(32, 24, 6, rng)

        result = climb(gradient_image, base, start, 15, rng)

        assert len(result.history) >= 16
        assert all(b <= a for a, b in zip(result.history, result.history[1:]))
        assert result.history[-1] == result.score

    def test_result_canvas_matches_shape(self, gradient_image, rng):
        """Test that the returned canvas is the best shape painted on the base."""
        base = new_canvas(32, 24, BLACK)
        start = Triangle.random(32, 24, 6, rng)

        result = climb(gradient_image, base, start, 10, rng)

        assert np.array_equal(result.canvas, result.shape.composite_onto(base))
        assert result.score == score(gradient_image, result.canvas)

    def test_base_untouched(self, gradient_image, rng):
        """Test that climbing never writes into the base canvas."""
        base = new_canvas(32, 24, BLACK)
        before = base.copy()

        climb(gradient_image, base, Triangle.random(32, 24, 6, rng), 10, rng)

        assert np.array_equal(base, before)


class TestAddShape:
    """Tests for committing or rejecting one searched shape."""

    def test_rejected_shape_leaves_session_unchanged(self, rng):
        """Test that a search that cannot improve changes nothing."""
        target = new_canvas(10, 10, BLACK)
        session = _session(target)
        before = session.approximation.copy()

        added = add_shape(session, ShapeFamily.TRIANGLE, 5, rng)

        assert added is False
        assert session.shapes == []
        assert np.array_equal(session.approximation, before)

    def test_accepted_shape_lowers_score(self, gradient_image, rng):
        """Test that each committed shape strictly lowers the score."""
        session = _session(gradient_image)

        previous = session.score()
        for _ in range(5):
            if add_shape(session, ShapeFamily.RECTANGLE, 10, rng):
                assert session.score() < previous
                previous = session.score()

        assert len(session.shapes) >= 1

    def test_approximation_matches_repaint(self, gradient_image, rng):
        """Test that the approximation equals the background plus every shape."""
        session = _session(gradient_image)
        run(session, 4, 8, "mixed", rng, max_failed_attempts=20)

        canvas = new_canvas(session.width, session.height, session.background)
        for shape in session.shapes:
            canvas = shape.composite_onto(canvas)

        assert np.array_equal(canvas, session.approximation)
        assert np.array_equal(session.render(), session.approximation)


class TestSession:
    """Tests for session construction."""

    def test_default_background_is_average(self, gradient_image):
        """Test that the background defaults to the image's average color."""
        session = ImageSession.from_image(gradient_image, scale_to=0)

        assert session.background.a == 128
        assert session.approximation[0, 0, 3] == 128

    def test_scale_to_longest_side(self, gradient_image):
        """Test that the search canvas is resized to the requested size."""
        session = ImageSession.from_image(gradient_image, scale_to=16, background=BLACK)

        assert (session.width, session.height) == (16, 12)
        assert session.scale == pytest.approx(0.5)
        assert session.original_size == (32, 24)

    def test_non_positive_scale_keeps_size(self, gradient_image):
        """Test that scale_to <= 0 keeps the original resolution."""
        session = ImageSession.from_image(gradient_image, scale_to=-1, background=BLACK)

        assert (session.width, session.height) == (32, 24)
        assert session.scale == 1.0

    def test_render_at_original_size(self, gradient_image, rng):
        """Test that rendering uses the original image size."""
        session = ImageSession.from_image(gradient_image, scale_to=16, background=BLACK)
        run(session, 2, 5, "triangle", rng, max_failed_attempts=20)

        assert session.render().shape == (24, 32, 4)

    def test_scene_round_trip(self, gradient_image, rng):
        """Test that a scene survives JSON serialization with shape types intact."""
        session = _session(gradient_image)
        run(session, 5, 5, "mixed", rng, max_failed_attempts=20)
        scene = session.to_scene(seed=7)

        restored = Scene.model_validate_json(scene.model_dump_json())

        assert restored == scene
        assert [type(s) for s in restored.shapes] == [type(s) for s in session.shapes]


class TestRun:
    """Tests for the top-level search loop."""

    def test_same_seed_same_result(self, gradient_image):
        """Test that a run is fully determined by its seed."""
        results = []
        for _ in range(2):
            session = _session(gradient_image)
            run(session, 3, 10, "mixed", make_rng(42), max_failed_attempts=20)
            results.append(session)

        assert results[0].shapes == results[1].shapes
        assert np.array_equal(results[0].approximation, results[1].approximation)

    def test_tiny_image_deterministic(self):
        """Test determinism on a 2x2 image."""
        img = np.array(
            [[[255, 0, 0, 255], [0, 255, 0, 255]],
             [[0, 0, 255, 255], [255, 255, 255, 255]]],
            dtype=np.uint8,
        )

        shapes = []
        for _ in range(2):
            session = _session(img)
            run(session, 2, 10, "triangle", make_rng(42), max_failed_attempts=10)
            shapes.append(session.shapes)

        assert shapes[0] == shapes[1]

    def test_stops_after_failed_attempts(self, rng):
        """Test that the loop gives up after consecutive rejected searches."""
        target = new_canvas(12, 12, BLACK)
        session = _session(target)

        added = run(session, 5, 3, "ellipse", rng, max_failed_attempts=3)

        assert added == 0
        assert session.shapes == []

    def test_mixed_families(self, gradient_image, rng):
        """Test that a mixed run only uses known families."""
        session = _session(gradient_image)
        run(session, 6, 5, "mixed", rng, max_failed_attempts=20)

        families = {ShapeFamily(s.family) for s in session.shapes}
        assert families <= set(MIXED_ORDER)

    def test_single_family(self, gradient_image, rng):
        """Test that a single-family run adds only that family."""
        session = _session(gradient_image)
        added = run(session, 3, 5, "cubic", rng, max_failed_attempts=20)

        assert added == len(session.shapes)
        assert all(s.family == "cubic" for s in session.shapes)

    def test_uniform_image_single_triangle(self):
        """Test that one triangle on a 2x2 uniform image is reproducible."""
        img = np.full((2, 2, 4), (90, 140, 200, 255), dtype=np.uint8)

        results = []
        for _ in range(2):
            session = _session(img)
            added = run(session, 1, 10, "triangle", make_rng(42), max_failed_attempts=10)
            results.append((added, session.shapes))

        assert results[0] == results[1]
        assert results[0][0] == 1

        triangle = results[0][1][0]
        assert isinstance(triangle, Triangle)
        assert triangle.color == Color(r=90, g=140, b=200, a=128)
        assert triangle.is_valid(2, 2)

        painted = {tuple(px) for px in session.approximation.reshape(-1, 4).tolist()}
        assert painted <= {(45, 70, 100, 255), (0, 0, 0, 255)}
        assert (45, 70, 100, 255) in painted
