"""Command-line interface for the color utilities."""

import argparse
import logging
import sys
from typing import List, Optional

from visual_colors import defaults
from visual_colors.colors import (
    calculate_highlight_color,
    create_linear_color_scale,
    hex_blend,
    hex_to_rgb_string,
    normalize_to_hex_string,
    parse_color_string,
    rotate,
    shade_color,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def create_argument_parser(
    luminance_threshold: float = defaults.LUMINANCE_THRESHOLD,
    delta: float = defaults.HIGHLIGHT_DELTA,
    log_level: str = defaults.LOG_LEVEL,
    log_file: Optional[str] = defaults.LOG_FILE,
) -> argparse.ArgumentParser:
    """
    Create and configure the CLI argument parser.

    Args:
        luminance_threshold: Default luminance threshold for `highlight`
        delta: Default delta for `highlight`
        log_level: Default logging level
        log_file: Default log file, `None` logs to stderr

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Convert, blend and shade colors for charts."
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=log_level,
        help="Logging level (e.g. 'DEBUG', 'INFO')",
    )
    parser.add_argument(
        "--log-file", type=str, default=log_file, help="Path to the log file"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    normalize = subparsers.add_parser("normalize", help="Convert a color to #RRGGBB")
    normalize.add_argument("color", type=str)

    rotate_parser = subparsers.add_parser("rotate", help="Rotate the hue of a color")
    rotate_parser.add_argument("color", type=str)
    rotate_parser.add_argument(
        "factor", type=float, help="Fraction of a full turn (0.25 is 90 degrees)"
    )

    blend = subparsers.add_parser("blend", help="Overlay a color over a background")
    blend.add_argument("fore_color", type=str)
    blend.add_argument("opacity", type=float)
    blend.add_argument("back_color", type=str)

    shade = subparsers.add_parser("shade", help="Lighten or darken a hex color")
    shade.add_argument("color", type=str)
    shade.add_argument(
        "percent", type=float, help="Positive lightens, negative darkens"
    )

    highlight = subparsers.add_parser(
        "highlight", help="Calculate the highlight color of a color"
    )
    highlight.add_argument("color", type=str)
    highlight.add_argument(
        "--threshold",
        type=float,
        default=luminance_threshold,
        help="Colors darker than this get brighter, others darker",
    )
    highlight.add_argument(
        "--delta", type=float, default=delta, help="Change of the HSV value"
    )

    to_rgb = subparsers.add_parser("to-rgb", help="Convert a hex color to rgb()/rgba()")
    to_rgb.add_argument("color", type=str)
    to_rgb.add_argument("--transparency", type=float, default=None)

    scale = subparsers.add_parser("scale", help="Map numbers onto a linear color scale")
    scale.add_argument(
        "--domain", type=float, nargs="+", required=True, help="Ascending breakpoints"
    )
    scale.add_argument(
        "--range",
        dest="range_",
        type=str,
        nargs="+",
        required=True,
        help="One color per breakpoint",
    )
    scale.add_argument(
        "--clamp", action="store_true", help="Return the end colors beyond the domain"
    )
    scale.add_argument("values", type=float, nargs="+")

    return parser


def run_command(args: argparse.Namespace) -> List[Optional[str]]:
    """Run the parsed command, returning one result per input (`None` on failure)."""
    match args.command:
        case "normalize":
            return [normalize_to_hex_string(args.color)]
        case "rotate":
            return [rotate(args.color, args.factor)]
        case "blend":
            return [hex_blend(args.fore_color, args.opacity, args.back_color)]
        case "shade":
            return [shade_color(args.color, args.percent)]
        case "highlight":
            rgb = parse_color_string(args.color)
            if rgb is None:
                return [None]
            return [calculate_highlight_color(rgb, args.threshold, args.delta)]
        case "to-rgb":
            return [hex_to_rgb_string(args.color, args.transparency) or None]
        case "scale":
            if len(args.domain) != len(args.range_):
                logger.error("--domain and --range need the same number of entries")
                return [None]
            scale = create_linear_color_scale(args.domain, args.range_, args.clamp)
            return [scale(value) for value in args.values]
        case _:
            raise ValueError(f"Unknown command {args.command!r}")


def main(argv: Optional[List[str]] = None) -> int:
    args = create_argument_parser().parse_args(argv)

    logging.basicConfig(
        filename=args.log_file, encoding="utf-8", level=args.log_level
    )

    exit_code = 0
    for result in run_command(args):
        if result is None:
            logger.warning(f"Could not compute a color for {args.command!r}")
            exit_code = 1
            continue
        print(result)

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
