"""
Pydantic document describing a finished approximation.

Written as JSON next to (or instead of) the SVG and raster outputs.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from primitivedraw.models import Color
from primitivedraw.shapes.registry import Shape


class Scene(BaseModel):
    """Accepted shapes in paint order plus what is needed to redraw them."""
    width: int            # original image size
    height: int
    working_width: int    # search canvas size
    working_height: int
    scale: float
    background: Color
    seed: Optional[int] = None
    score: float = 0.0
    shapes: List[Shape] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")
