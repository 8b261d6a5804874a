"""
Greedy hill climbing for a single shape.

Every trial paints the candidate on a fresh copy of the committed
approximation, so a rejected candidate never touches session state. Only a
search whose best result beats the session's current score is committed.
"""

from dataclasses import dataclass, field
from typing import Any, List

import numpy as np

from primitivedraw.raster import score
from primitivedraw.shapes.registry import random_shape
from primitivedraw.tracer import get_tracer


@dataclass
class ClimbResult:
    """Outcome of one hill-climbing search."""
    shape: Any
    score: float
    canvas: np.ndarray
    history: List[float] = field(default_factory=list)  # best score after each step


def climb(target, base, shape, max_age, rng):
    """
    Improve ``shape`` by random mutation until ``max_age`` consecutive
    mutations fail to lower the score.

    Args:
        target: canvas being approximated
        base: committed approximation every trial is painted onto
        shape: starting shape (its color is refit against ``target``)
        max_age: patience, in non-improving mutations
        rng: numpy Generator

    Returns:
        ClimbResult with the best shape, its score and painted canvas
    """
    height, width = target.shape[:2]

    best_shape = shape.fit_color(target)
    best_canvas = best_shape.composite_onto(base)
    best_score = score(target, best_canvas)
    history = [best_score]

    current = best_shape
    age = 0
    while age < max_age:
        candidate = current.mutate(width, height, rng).fit_color(target)
        trial_canvas = candidate.composite_onto(base)
        trial_score = score(target, trial_canvas)

        if trial_score < best_score:
            best_shape = candidate
            best_canvas = trial_canvas
            best_score = trial_score
            current = candidate
            age = 0
        else:
            current = best_shape
            age += 1

        history.append(best_score)

    return ClimbResult(shape=best_shape, score=best_score, canvas=best_canvas, history=history)


def add_shape(session, family, max_age, rng):
    """
    Search for one new shape of ``family`` and commit it if it helps.

    Returns True when a shape was appended to the session, False when the
    best candidate did not beat the current approximation (session state
    is then unchanged).
    """
    tracer = get_tracer()

    shape = random_shape(family, session.width, session.height, session.border_extension, rng)
    result = climb(session.target, session.approximation, shape, max_age, rng)

    tracer.event(
        "Search finished",
        level="DEBUG",
        family=result.shape.family,
        steps=len(result.history) - 1,
        best=result.score,
    )

    if result.score < session.score():
        session.commit(result.shape, result.canvas)
        return True
    return False
