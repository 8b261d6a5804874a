"""
Main orchestrator for primitivedraw.

Loads the source image, runs the shape search and writes every requested
output.
"""

from primitivedraw.config import load_config
from primitivedraw.export.svg_document import build_svg
from primitivedraw.geometry import make_rng, resolve_seed
from primitivedraw.io.load_image import load_image
from primitivedraw.io.save_artifacts import (
    OUTPUT_JSON, OUTPUT_RASTER, OUTPUT_SVG, output_kind, save_image, save_json, save_svg,
)
from primitivedraw.models import Color, ShapeFamily
from primitivedraw.runner import run
from primitivedraw.session import ImageSession
from primitivedraw.tracer import get_tracer, trace


@trace(label="run_primitive", arg_names=("input_path", "output_paths"))
def run_primitive(input_path, output_paths, config=None, config_path=None):
    """
    Approximate one image with shapes and save the results.

    Args:
        input_path: source image file
        output_paths: list of .svg / raster / .json paths to write
        config: PrimitiveConfig object (optional)
        config_path: path to YAML config file (optional)

    Returns:
        the finished ImageSession
    """
    tracer = get_tracer()

    if config is None:
        config = load_config(config_path)
    search = config.search

    # Reject bad arguments before spending time on the search
    for path in output_paths:
        output_kind(path)
    selection = ShapeFamily.from_selector(search.shape)
    background = Color.from_hex(search.background) if search.background else None

    rgba, metadata = load_image(input_path)
    tracer.event(
        f"Source {metadata['source_path']}",
        width=metadata["width"],
        height=metadata["height"],
        channels=metadata["channels"],
    )

    session = ImageSession.from_image(
        rgba,
        scale_to=search.scale_to,
        background=background,
        border_extension=search.border_extension,
    )
    seed = resolve_seed(search.seed)
    rng = make_rng(seed)

    with tracer.span("search", module="pipeline", shapes=search.shape_count, shape=search.shape):
        added = run(
            session,
            search.shape_count,
            search.max_age,
            selection,
            rng,
            max_failed_attempts=search.max_failed_attempts,
        )

    tracer.event(f"Search complete: {added} shapes", score=session.score())

    with tracer.span("export", module="pipeline"):
        save_outputs(session, output_paths, seed=seed)

    return session


def save_outputs(session, output_paths, seed=None):
    """Write the session to each path using the writer its extension selects."""
    for path in output_paths:
        kind = output_kind(path)
        if kind == OUTPUT_SVG:
            save_svg(build_svg(session), path)
        elif kind == OUTPUT_RASTER:
            save_image(session.render(), path)
        elif kind == OUTPUT_JSON:
            save_json(session.to_scene(seed=seed), path)
