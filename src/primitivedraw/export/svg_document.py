"""
SVG export for primitivedraw.

Builds an svgwrite document at the original image size: a background
rectangle followed by one element per accepted shape in paint order.
Working-space coordinates are multiplied by the inverse scale and truncated.
"""

import svgwrite

from primitivedraw.models import ShapeFamily
from primitivedraw.tracer import get_tracer, trace


def format_number(value):
    """Render a float without a trailing ``.0`` when it is integral."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_opacity(color):
    return f"{color.opacity:.5f}"


def _triangle_element(dwg, shape, scale):
    scaled = shape.scaled(scale)
    return dwg.polygon(
        points=[(p.x, p.y) for p in scaled.vertices],
        fill=shape.color.hex,
        fill_opacity=format_opacity(shape.color),
    )


def _rectangle_element(dwg, shape, scale):
    center_x = int(shape.center.x * scale)
    center_y = int(shape.center.y * scale)
    width = shape.width * scale
    height = shape.height * scale

    x = center_x - int(width) // 2
    y = center_y - int(height) // 2

    rotate = " ".join([
        str(shape.angle),
        format_number(x + width / 2.0),
        format_number(y + height / 2.0),
    ])
    return dwg.rect(
        insert=(x, y),
        size=(format_number(width), format_number(height)),
        fill=shape.color.hex,
        fill_opacity=format_opacity(shape.color),
        transform=f"rotate({rotate})",
    )


def _ellipse_element(dwg, shape, scale):
    center_x = int(shape.center.x * scale)
    center_y = int(shape.center.y * scale)
    return dwg.ellipse(
        center=(center_x, center_y),
        r=(format_number(shape.a * scale), format_number(shape.b * scale)),
        fill=shape.color.hex,
        fill_opacity=format_opacity(shape.color),
        transform=f"rotate({shape.angle} {center_x} {center_y})",
    )


def _curve_path(dwg, d, shape, scale):
    return dwg.path(
        d=d,
        fill="none",
        stroke=shape.color.hex,
        stroke_opacity=format_opacity(shape.color),
        stroke_width=format_number(scale / 2.0),
    )


def _quadratic_element(dwg, shape, scale):
    s = shape.scaled(scale)
    d = f"M{s.start.x} {s.start.y} Q{s.control.x} {s.control.y}, {s.end.x} {s.end.y}"
    return _curve_path(dwg, d, shape, scale)


def _cubic_element(dwg, shape, scale):
    s = shape.scaled(scale)
    d = (
        f"M{s.start.x} {s.start.y} "
        f"C{s.control1.x} {s.control1.y}, {s.control2.x} {s.control2.y}, {s.end.x} {s.end.y}"
    )
    return _curve_path(dwg, d, shape, scale)


SHAPE_EMITTERS = {
    ShapeFamily.TRIANGLE: _triangle_element,
    ShapeFamily.RECTANGLE: _rectangle_element,
    ShapeFamily.ELLIPSE: _ellipse_element,
    ShapeFamily.QUADRATIC: _quadratic_element,
    ShapeFamily.CUBIC: _cubic_element,
}


def shape_element(dwg, shape, scale):
    """SVG element for one shape, coordinates multiplied by ``scale``."""
    return SHAPE_EMITTERS[ShapeFamily(shape.family)](dwg, shape, scale)


@trace(label="build_svg")
def build_svg(session):
    """
    Create the SVG document for a session.

    Returns:
        svgwrite.Drawing object
    """
    tracer = get_tracer()

    width, height = session.original_size
    inverse = 1.0 / session.scale

    dwg = svgwrite.Drawing(size=(width, height), profile="full", debug=False)
    dwg.add(dwg.rect(insert=(0, 0), size=(width, height), fill=session.background.hex))

    group = dwg.g()
    for shape in session.shapes:
        group.add(shape_element(dwg, shape, inverse))
    dwg.add(group)

    tracer.event(f"SVG built with {len(session.shapes)} shapes")

    return dwg
