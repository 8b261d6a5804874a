"""
The closed set of shape families and dispatch by family or selector.
"""

from typing import Annotated, Union

from pydantic import Field

from primitivedraw.models import MIXED, ShapeFamily
from primitivedraw.shapes.curves import CubicCurve, QuadraticCurve
from primitivedraw.shapes.ellipse import Ellipse
from primitivedraw.shapes.rectangle import Rectangle
from primitivedraw.shapes.triangle import Triangle

SHAPE_TYPES = {
    ShapeFamily.TRIANGLE: Triangle,
    ShapeFamily.RECTANGLE: Rectangle,
    ShapeFamily.ELLIPSE: Ellipse,
    ShapeFamily.QUADRATIC: QuadraticCurve,
    ShapeFamily.CUBIC: CubicCurve,
}

# Draw order for the "mixed" selector.
MIXED_ORDER = [
    ShapeFamily.TRIANGLE,
    ShapeFamily.QUADRATIC,
    ShapeFamily.CUBIC,
    ShapeFamily.RECTANGLE,
    ShapeFamily.ELLIPSE,
]

Shape = Annotated[
    Union[Triangle, Rectangle, Ellipse, QuadraticCurve, CubicCurve],
    Field(discriminator="family"),
]


def random_shape(family, width, height, border_extension, rng):
    """Generate a valid random shape of ``family``."""
    return SHAPE_TYPES[ShapeFamily(family)].random(width, height, border_extension, rng)


def choose_family(selection, rng):
    """
    Resolve one attempt's family.

    ``selection`` is a ShapeFamily or ``MIXED``; mixed draws uniformly.
    """
    if selection == MIXED:
        return MIXED_ORDER[int(rng.integers(0, len(MIXED_ORDER)))]
    return ShapeFamily(selection)
