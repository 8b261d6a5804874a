"""
The image session: target, evolving approximation and the accepted shapes.
"""

import cv2

from primitivedraw.raster import average_color, new_canvas, score
from primitivedraw.scene import Scene
from primitivedraw.tracer import get_tracer

# How far from the first random point a new shape's other points may start.
BORDER_EXTENSION = 6


class ImageSession:
    """
    Working state of one approximation run.

    The approximation always equals the background canvas with every
    accepted shape painted over it in list order. Shapes are only ever
    appended, through ``commit``.
    """

    def __init__(self, target, background, scale=1.0, original_size=None,
                 border_extension=BORDER_EXTENSION):
        height, width = target.shape[:2]
        self.target = target
        self.background = background
        self.scale = scale
        self.original_size = original_size or (width, height)
        self.border_extension = border_extension
        self.approximation = new_canvas(width, height, background)
        self.shapes = []

    @classmethod
    def from_image(cls, image, scale_to=0, background=None,
                   border_extension=BORDER_EXTENSION):
        """
        Create a session from an RGBA canvas.

        The search canvas is resized (nearest neighbour) so its longest side
        is ``scale_to`` pixels; ``scale_to <= 0`` keeps the original size.
        Without an explicit background the original image's average color
        is used.
        """
        original_height, original_width = image.shape[:2]

        if background is None:
            background = average_color(image)

        if scale_to > 0:
            scale = scale_to / max(original_width, original_height)
        else:
            scale = 1.0

        new_width = max(1, int(original_width * scale))
        new_height = max(1, int(original_height * scale))

        if (new_width, new_height) == (original_width, original_height):
            target = image.copy()
        else:
            target = cv2.resize(image, (new_width, new_height), interpolation=cv2.INTER_NEAREST)

        get_tracer().event(
            f"Session {original_width}x{original_height} -> {new_width}x{new_height}",
            scale=scale,
            background=background.hex,
        )

        return cls(
            target,
            background,
            scale=scale,
            original_size=(original_width, original_height),
            border_extension=border_extension,
        )

    @property
    def width(self):
        return self.target.shape[1]

    @property
    def height(self):
        return self.target.shape[0]

    def score(self):
        """Current RMS difference between target and approximation."""
        return score(self.target, self.approximation)

    def commit(self, shape, canvas):
        """Accept ``shape``; ``canvas`` is the approximation with it painted on."""
        self.approximation = canvas
        self.shapes.append(shape)
        get_tracer().event(f"Accepted shape #{len(self.shapes)}", level="DEBUG", shape=shape)

    def render(self):
        """Repaint every accepted shape at the original resolution."""
        width, height = self.original_size
        inverse = 1.0 / self.scale

        canvas = new_canvas(width, height, self.background)
        for shape in self.shapes:
            canvas = shape.scaled(inverse).composite_onto(canvas)
        return canvas

    def to_scene(self, seed=None):
        """Snapshot the session as a serializable Scene."""
        width, height = self.original_size
        return Scene(
            width=width,
            height=height,
            working_width=self.width,
            working_height=self.height,
            scale=self.scale,
            background=self.background,
            seed=seed,
            score=self.score(),
            shapes=list(self.shapes),
        )
