"""
Command-line interface for primitivedraw.

Provides commands for approximating an image and writing a config template.
"""

import argparse
import sys

from primitivedraw.config import load_config, save_default_config
from primitivedraw.tracer import configure_tracer, get_tracer


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="primitivedraw",
        description="Approximate images with semi-transparent geometric primitives",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Run command
    run_parser = subparsers.add_parser("run", help="Approximate an image")
    run_parser.add_argument(
        "--input", "-i",
        required=True,
        help="Image to approximate (.png, .jpg, .bmp, .tif, ...)",
    )
    run_parser.add_argument(
        "--output", "-o",
        nargs="+",
        required=True,
        help="Output files (.svg, .json, or a raster format such as .png)",
    )
    run_parser.add_argument(
        "-n",
        type=int,
        default=None,
        help="Number of shapes to add",
    )
    run_parser.add_argument(
        "--max-age",
        type=int,
        default=None,
        help="Maximum age for each hill climbing attempt",
    )
    run_parser.add_argument(
        "--scale-to",
        type=int,
        default=None,
        help="Scale the image's largest dimension to this size; <= 0 prevents scaling",
    )
    run_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed; 0 picks a seed based on the time",
    )
    run_parser.add_argument(
        "--shape",
        default=None,
        help="triangle, rectangle, ellipse, quadratic, cubic or mixed",
    )
    run_parser.add_argument(
        "--max-failed-attempts",
        type=int,
        default=None,
        help="Stop after this many consecutive rejected shapes (0 = never)",
    )
    run_parser.add_argument(
        "--background",
        default=None,
        help="Background color as RRGGBB (default: average image color)",
    )
    run_parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML configuration file",
    )
    run_parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable runtime tracing",
    )
    run_parser.add_argument(
        "--trace-level",
        default=None,
        choices=["ERROR", "WARN", "INFO", "DEBUG"],
        help="Trace log level",
    )
    run_parser.add_argument(
        "--trace-file",
        default=None,
        help="Path to write trace logs",
    )
    run_parser.add_argument(
        "--trace-json",
        action="store_true",
        help="Emit trace records as JSON lines",
    )
    run_parser.add_argument(
        "-v",
        action="count",
        default=0,
        help="Verbosity (-v progress, -vv every search)",
    )

    # Init config command
    init_parser = subparsers.add_parser("init-config", help="Create default config file")
    init_parser.add_argument(
        "--out", "-o",
        default="primitivedraw_config.yaml",
        help="Output path for config file",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "run":
        return handle_run(args)
    elif args.command == "init-config":
        return handle_init_config(args)

    return 0


def apply_overrides(config, args):
    """Copy flags given on the command line over the loaded configuration."""
    search = config.search
    overrides = {
        "shape_count": args.n,
        "max_age": args.max_age,
        "scale_to": args.scale_to,
        "seed": args.seed,
        "shape": args.shape,
        "background": args.background,
        "max_failed_attempts": args.max_failed_attempts,
    }
    for key, value in overrides.items():
        if value is not None:
            setattr(search, key, value)

    tracing = config.tracing
    if args.trace or args.v:
        tracing.enabled = True
    if args.v >= 2:
        tracing.level = "DEBUG"
    if args.trace_level:
        tracing.level = args.trace_level
    if args.trace_file:
        tracing.file_path = args.trace_file
    if args.trace_json:
        tracing.json_output = True

    return config


def handle_run(args):
    """Handle the run command."""
    config = apply_overrides(load_config(args.config), args)

    configure_tracer(
        enabled=config.tracing.enabled,
        level=config.tracing.level,
        file_path=config.tracing.file_path,
        json_output=config.tracing.json_output,
    )

    tracer = get_tracer()

    try:
        from primitivedraw.pipeline import run_primitive

        with tracer.span("cli_run", module="cli"):
            session = run_primitive(args.input, args.output, config=config)

        print("\nApproximation completed.")
        print(f"  Shapes: {len(session.shapes)}")
        print(f"  Score: {session.score():.4f}")
        print("\nOutputs saved:")
        for path in args.output:
            print(f"  - {path}")

        return 0

    except Exception as e:
        tracer.event(f"Run failed: {str(e)}", level="ERROR")
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1

    finally:
        tracer.config.close()


def handle_init_config(args):
    """Handle the init-config command."""
    save_default_config(args.out)
    print(f"Default configuration saved to: {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
