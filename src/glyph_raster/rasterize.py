"""Scan conversion of segments and quadratic curves onto an RGB canvas.

Coordinates are integer device pixels. Anything that falls outside the
canvas is dropped pixel by pixel; clipping is never an error.
"""

from __future__ import annotations

from typing import Iterator, Tuple

from PIL import Image

INK = (0, 0, 0)
PAPER = (255, 255, 255)

CURVE_SAMPLES = 101


def iter_segment_pixels(x1: int, y1: int, x2: int, y2: int) -> Iterator[Tuple[int, int]]:
    """Yield the Bresenham pixels from one endpoint to the other, both included.

    Endpoints are traversed from the smaller ``(x, y)`` so that swapping them
    yields the same pixel set.
    """
    # Swapped endpoints must plot the same pixels, so always walk from the smaller end.
    # The plain walk from (x2, y2) differs on some slopes.
    if (x2, y2) < (x1, y1):
        x1, y1, x2, y2 = x2, y2, x1, y1

    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = dx - dy

    x, y = x1, y1
    while True:
        yield x, y
        if x == x2 and y == y2:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy


def iter_quad_curve_points(
    x1: float,
    y1: float,
    cx: float,
    cy: float,
    x2: float,
    y2: float,
    samples: int = CURVE_SAMPLES,
) -> Iterator[Tuple[float, float]]:
    """Sample B(t) at ``samples`` evenly spaced t in [0, 1], endpoints included.

    Samples are computed in double precision; single-precision sampling can
    truncate a few points of the same curve to neighbouring pixels.
    """
    if samples < 2:
        raise ValueError(f"samples must be at least 2, got {samples}")
    last = samples - 1
    for i in range(samples):
        t = i / last
        u = 1.0 - t
        x = u * u * x1 + 2.0 * u * t * cx + t * t * x2
        y = u * u * y1 + 2.0 * u * t * cy + t * t * y2
        yield x, y


def draw_segment(image: Image.Image, x1: int, y1: int, x2: int, y2: int) -> None:
    width, height = image.size
    for x, y in iter_segment_pixels(x1, y1, x2, y2):
        if 0 <= x < width and 0 <= y < height:
            image.putpixel((x, y), INK)


def draw_quad_curve(
    image: Image.Image,
    x1: int,
    y1: int,
    cx: int,
    cy: int,
    x2: int,
    y2: int,
    samples: int = CURVE_SAMPLES,
) -> None:
    # Point sampling only; consecutive samples are not joined.
    width, height = image.size
    for x, y in iter_quad_curve_points(x1, y1, cx, cy, x2, y2, samples=samples):
        if 0.0 <= x < width and 0.0 <= y < height:
            image.putpixel((int(x), int(y)), INK)
