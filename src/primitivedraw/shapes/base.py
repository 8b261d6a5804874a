"""
Behaviour shared by every primitive family.

Shapes are frozen pydantic models: mutating or recoloring one returns a new
value, so the optimizer can keep a candidate and a best-so-far side by side.
A family only has to supply its geometry (``pixels``), its validity rule,
a single-parameter perturbation and coordinate scaling.
"""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from primitivedraw.errors import GenerationExhausted
from primitivedraw.models import SHAPE_ALPHA, Color, Point
from primitivedraw.raster import average_color_at, composite

# Budget for bringing a mutated shape back into a valid state.
MAX_MUTATION_ATTEMPTS = 100_000


class BaseShape(BaseModel):
    """Common capability set: mutate, rasterize, paint, fit color."""
    color: Color = Field(default_factory=lambda: Color(r=0, g=0, b=0, a=SHAPE_ALPHA))

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Number of independently mutable parameters.
    PARAMETER_COUNT: ClassVar[int] = 1

    def is_valid(self, width, height):
        return True

    def perturb(self, index, width, height, rng):
        """Return a copy with parameter ``index`` perturbed."""
        raise NotImplementedError

    def pixels(self):
        """Covered pixels as a sorted ``(N, 2)`` array of unique ``(x, y)`` rows."""
        raise NotImplementedError

    def scaled(self, factor):
        """Copy with every coordinate and size multiplied by ``factor`` and truncated."""
        raise NotImplementedError

    def mutate(self, width, height, rng, max_attempts=MAX_MUTATION_ATTEMPTS):
        """
        Perturb one randomly chosen parameter until the shape is valid.

        Perturbations accumulate across attempts. Raises GenerationExhausted
        once ``max_attempts`` perturbations have all left the shape invalid.
        """
        shape = self
        for _ in range(max_attempts):
            index = int(rng.integers(0, self.PARAMETER_COUNT))
            shape = shape.perturb(index, width, height, rng)
            if shape.is_valid(width, height):
                return shape

        raise GenerationExhausted(self.family, max_attempts)

    def enumerate_pixels(self):
        """Covered pixels as a list of Points, sorted by x then y."""
        return [Point(x=x, y=y) for x, y in self.pixels().tolist()]

    def composite_onto(self, canvas):
        """Paint this shape over a copy of ``canvas``."""
        return composite(canvas, self.pixels(), self.color)

    def fit_color(self, target):
        """Copy colored with the average of ``target`` under this shape."""
        return self.model_copy(update={"color": average_color_at(target, self.pixels())})
