from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from PIL import Image

from .glyphs import Glyph, GlyphTable, QuadCurve, Segment
from .rasterize import CURVE_SAMPLES, PAPER, draw_quad_curve, draw_segment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutParams:
    glyph_size: int = 32
    scale: int = 3
    spacing: int = 4

    def __post_init__(self) -> None:
        if self.glyph_size <= 0:
            raise ValueError(f"glyph_size must be positive, got {self.glyph_size}")
        if self.scale <= 0:
            raise ValueError(f"scale must be positive, got {self.scale}")
        if self.spacing < 0:
            raise ValueError(f"spacing must not be negative, got {self.spacing}")

    @property
    def em_px(self) -> int:
        return self.glyph_size * self.scale

    @property
    def cell_width(self) -> int:
        return self.em_px + self.spacing

    @property
    def cell_height(self) -> int:
        return self.em_px

    def canvas_size(self, char_count: int) -> Tuple[int, int]:
        return self.cell_width * char_count, self.cell_height

    def cell_range(self, index: int) -> Tuple[int, int]:
        """Half-open x-range of cell ``index``, trailing spacing included."""
        start = index * self.cell_width
        return start, start + self.cell_width

    def to_device(self, value: float, offset: int) -> int:
        # Truncates toward zero, never rounds.
        return int(offset + value * self.em_px)


def render_glyph(
    glyph: Glyph,
    image: Image.Image,
    x_offset: int,
    y_offset: int,
    layout: LayoutParams,
    curve_samples: int = CURVE_SAMPLES,
) -> None:
    """Transform each primitive of ``glyph`` to device pixels and draw it."""
    for primitive in glyph.primitives:
        if isinstance(primitive, Segment):
            draw_segment(
                image,
                layout.to_device(primitive.x1, x_offset),
                layout.to_device(primitive.y1, y_offset),
                layout.to_device(primitive.x2, x_offset),
                layout.to_device(primitive.y2, y_offset),
            )
        elif isinstance(primitive, QuadCurve):
            draw_quad_curve(
                image,
                layout.to_device(primitive.x1, x_offset),
                layout.to_device(primitive.y1, y_offset),
                layout.to_device(primitive.cx, x_offset),
                layout.to_device(primitive.cy, y_offset),
                layout.to_device(primitive.x2, x_offset),
                layout.to_device(primitive.y2, y_offset),
                samples=curve_samples,
            )
        else:
            raise TypeError(f"unsupported primitive {primitive!r}")


def render_text(
    table: GlyphTable,
    text: str,
    layout: LayoutParams | None = None,
    curve_samples: int = CURVE_SAMPLES,
) -> Image.Image:
    """Render ``text`` on a single line, one fixed-width cell per character.

    Characters missing from ``table`` leave their cell white. Empty text
    gives a zero-width canvas.
    """
    layout = layout or LayoutParams()
    width, height = layout.canvas_size(len(text))
    canvas = Image.new("RGB", (width, height), color=PAPER)
    logger.info("rendering %d characters onto %dx%d canvas", len(text), width, height)

    for index, char in enumerate(text):
        glyph = table.lookup(char)
        if glyph is None:
            logger.debug("no glyph for %r at index %d; leaving cell blank", char, index)
            continue
        if glyph.is_blank:
            continue
        x_offset, _ = layout.cell_range(index)
        render_glyph(glyph, canvas, x_offset, 0, layout, curve_samples=curve_samples)

    return canvas


def save_image(image: Image.Image, output_path: Path) -> Path:
    width, height = image.size
    if width <= 0 or height <= 0:
        raise ValueError(f"Cannot save empty canvas width={width} height={height}")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(output_path)
    return output_path
