"""
Top-level search loop: keep adding shapes until the requested count is met.
"""

from primitivedraw.models import MIXED, ShapeFamily
from primitivedraw.optimizer import add_shape
from primitivedraw.shapes.registry import choose_family
from primitivedraw.tracer import get_tracer, trace


@trace(label="run_search")
def run(session, shape_count, max_age, selection, rng, max_failed_attempts=0):
    """
    Add ``shape_count`` shapes to ``session``.

    Args:
        session: ImageSession to extend
        shape_count: number of shapes to accept
        max_age: hill-climbing patience per shape
        selection: family name, ShapeFamily or "mixed"
        rng: numpy Generator shared by the whole run
        max_failed_attempts: stop after this many consecutive rejected
            searches; 0 keeps trying forever

    Returns:
        number of shapes actually added
    """
    tracer = get_tracer()
    selection = ShapeFamily.from_selector(selection)

    added = 0
    failures = 0
    while added < shape_count:
        family = choose_family(selection, rng)

        if add_shape(session, family, max_age, rng):
            added += 1
            failures = 0
            if tracer.is_enabled_for("INFO"):
                tracer.event(f"Added #{added}", family=family.value, score=session.score())
            continue

        failures += 1
        tracer.event(f"Failed to add shape (#{added + 1})", level="DEBUG", family=family.value)

        if max_failed_attempts and failures >= max_failed_attempts:
            tracer.event(
                f"Stopping after {failures} consecutive rejected shapes",
                level="WARN",
                added=added,
                requested=shape_count,
            )
            break

    if selection == MIXED:
        counts = {}
        for shape in session.shapes[len(session.shapes) - added:]:
            counts[shape.family] = counts.get(shape.family, 0) + 1
        tracer.event("Mixed run family counts", counts=counts)

    return added
