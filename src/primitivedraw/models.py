"""
Value types shared by every layer of primitivedraw.

Points and colors are frozen pydantic models so shapes built from them are
hashable, comparable and serialize straight into the scene document.
"""

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from primitivedraw.errors import UnknownShapeFamilyError

# Alpha carried by every fitted shape color.
SHAPE_ALPHA = 128

MIXED = "mixed"

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{6})$")


class Point(BaseModel):
    """Integer pixel coordinate in working space."""
    x: int
    y: int

    model_config = ConfigDict(frozen=True, extra="forbid")

    def as_tuple(self):
        return (self.x, self.y)


class Color(BaseModel):
    """8-bit RGBA color."""
    r: int = Field(default=0, ge=0, le=255)
    g: int = Field(default=0, ge=0, le=255)
    b: int = Field(default=0, ge=0, le=255)
    a: int = Field(default=255, ge=0, le=255)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def hex(self):
        """Color as an upper-case ``#RRGGBB`` string (alpha dropped)."""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    @property
    def opacity(self):
        return self.a / 255.0

    def as_tuple(self):
        return (self.r, self.g, self.b, self.a)

    @classmethod
    def from_hex(cls, text):
        """
        Parse six hex digits (optionally prefixed with ``#``) as an opaque color.

        Raises ValueError for anything else.
        """
        match = _HEX_COLOR.match(text.strip()) if isinstance(text, str) else None
        if match is None:
            raise ValueError(f"Invalid background color {text!r}: expected RRGGBB")
        digits = match.group(1)
        return cls(
            r=int(digits[0:2], 16),
            g=int(digits[2:4], 16),
            b=int(digits[4:6], 16),
            a=255,
        )


TRANSPARENT = Color(r=0, g=0, b=0, a=0)


class ShapeFamily(str, Enum):
    """The fixed set of primitive families."""
    TRIANGLE = "triangle"
    RECTANGLE = "rectangle"
    ELLIPSE = "ellipse"
    QUADRATIC = "quadratic"
    CUBIC = "cubic"

    @classmethod
    def from_selector(cls, selector):
        """
        Resolve a selector string to a family, or to ``MIXED``.

        Matching is case-insensitive. Raises UnknownShapeFamilyError.
        """
        if isinstance(selector, cls):
            return selector
        name = str(selector).strip().lower()
        if name == MIXED:
            return MIXED
        for family in cls:
            if family.value == name:
                return family
        choices = ", ".join([f.value for f in cls] + [MIXED])
        raise UnknownShapeFamilyError(
            f"Unsupported shape {selector!r} (choose from: {choices})"
        )
