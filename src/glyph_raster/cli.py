"""CLI entry point: render a line of text to an image file."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List

from dotenv import load_dotenv

from .glyphs import build_default_table, load_glyph_table
from .render_text import LayoutParams, render_text, save_image

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments; layout defaults come from the environment."""
    parser = argparse.ArgumentParser(description="Render text with vector glyphs to an image.")
    parser.add_argument(
        "--text",
        default="ABC",
        help="Text to render on a single line.",
    )
    parser.add_argument(
        "--output",
        default="output.png",
        help="Image file to write; the format follows the extension.",
    )
    parser.add_argument(
        "--glyph-size",
        type=int,
        default=_env_int("GLYPH_RASTER_GLYPH_SIZE", 32),
        help="Nominal em size in pixels before scaling.",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=_env_int("GLYPH_RASTER_SCALE", 3),
        help="Integer upscaling factor.",
    )
    parser.add_argument(
        "--spacing",
        type=int,
        default=_env_int("GLYPH_RASTER_SPACING", 4),
        help="Gap in pixels after every character cell.",
    )
    parser.add_argument(
        "--glyph-table",
        default=None,
        help="JSON file of hand-authored glyph paths (defaults to the built-in table).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug).",
    )
    return parser.parse_args(argv)


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main(argv: List[str] | None = None) -> None:
    load_dotenv()
    try:
        args = parse_args(argv)
    except ValueError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(2)
    configure_logging(args.verbose)

    try:
        layout = LayoutParams(glyph_size=args.glyph_size, scale=args.scale, spacing=args.spacing)
        if args.glyph_table:
            table = load_glyph_table(Path(args.glyph_table).expanduser().resolve())
        else:
            table = build_default_table()
        image = render_text(table, args.text, layout)
        output_path = save_image(image, Path(args.output).expanduser())
    except (OSError, ValueError) as exc:
        logger.debug("render failed", exc_info=True)
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    print(f"Image saved as {output_path}")


if __name__ == "__main__":
    main()
