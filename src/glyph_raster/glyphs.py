"""Glyph primitives, glyphs and the character-to-glyph table."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Tuple, Union

from svgpathtools import Line, QuadraticBezier, parse_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Segment:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class QuadCurve:
    x1: float
    y1: float
    cx: float
    cy: float
    x2: float
    y2: float


Primitive = Union[Segment, QuadCurve]


@dataclass(frozen=True)
class Glyph:
    primitives: Tuple[Primitive, ...]
    width: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "primitives", tuple(self.primitives))

    @property
    def is_blank(self) -> bool:
        return not self.primitives


class GlyphTable:
    """Read-only mapping from a single character to its Glyph.

    A lookup miss is not an error: ``lookup`` returns None and the caller
    renders a blank cell.
    """

    def __init__(self, glyphs: Mapping[str, Glyph]):
        for char in glyphs:
            if len(char) != 1:
                raise ValueError(f"glyph table keys must be single characters, got {char!r}")
        self._glyphs: Mapping[str, Glyph] = MappingProxyType(dict(glyphs))

    def lookup(self, char: str) -> Glyph | None:
        return self._glyphs.get(char)

    def __contains__(self, char: object) -> bool:
        return char in self._glyphs

    def __len__(self) -> int:
        return len(self._glyphs)

    def __iter__(self) -> Iterator[str]:
        return iter(self._glyphs)


def build_default_table() -> GlyphTable:
    """Built-in glyphs for 'A', 'B' and 'C'."""
    return GlyphTable(
        {
            "A": Glyph(
                (
                    Segment(0.0, 1.0, 0.5, 0.0),
                    Segment(0.5, 0.0, 1.0, 1.0),
                    Segment(0.25, 0.5, 0.75, 0.5),
                ),
                width=1.0,
            ),
            "B": Glyph(
                (
                    Segment(0.0, 0.0, 0.0, 1.0),
                    Segment(0.0, 0.0, 0.8, 0.0),
                    QuadCurve(0.8, 0.0, 1.0, 0.25, 0.8, 0.5),
                    Segment(0.0, 0.5, 0.8, 0.5),
                    QuadCurve(0.8, 0.5, 1.0, 0.75, 0.8, 1.0),
                    Segment(0.8, 1.0, 0.0, 1.0),
                ),
                width=1.0,
            ),
            "C": Glyph(
                (
                    # top bowl
                    QuadCurve(0.8, 0.18, 0.5, 0.018, 0.18, 0.5),
                    # bottom bowl
                    QuadCurve(0.18, 0.5, 0.5, 0.88, 0.8, 0.72),
                ),
                width=1.0,
            ),
        }
    )


def iter_path_primitives(path_data: str) -> Iterator[Primitive]:
    """Convert SVG path data in glyph space into primitives.

    Straight commands become Segments and quadratic commands become
    QuadCurves. Cubic curves and arcs have no primitive and are rejected.
    """
    if not path_data.strip():
        return
    for seg in parse_path(path_data):
        if isinstance(seg, Line):
            yield Segment(seg.start.real, seg.start.imag, seg.end.real, seg.end.imag)
        elif isinstance(seg, QuadraticBezier):
            yield QuadCurve(
                seg.start.real,
                seg.start.imag,
                seg.control.real,
                seg.control.imag,
                seg.end.real,
                seg.end.imag,
            )
        else:
            raise ValueError(f"unsupported path segment {type(seg).__name__} in {path_data!r}")


def iter_glyph_entries(table_data: dict) -> Iterator[Tuple[str, Glyph]]:
    glyphs = table_data.get("glyphs", {})
    if not isinstance(glyphs, dict):
        raise ValueError("'glyphs' must be an object mapping characters to glyph entries")
    for char, payload in glyphs.items():
        if not isinstance(payload, dict):
            logger.debug("skipping glyph entry %r: not an object", char)
            continue
        if payload.get("type", "path") != "path":
            logger.debug("skipping glyph entry %r: type %r", char, payload.get("type"))
            continue
        path_data = payload.get("path") or ""
        if not isinstance(path_data, str):
            raise ValueError(f"glyph {char!r}: path must be a string")
        try:
            width = float(payload.get("advanceWidth", 1.0))
        except (TypeError, ValueError):
            raise ValueError(f"glyph {char!r}: advanceWidth must be a number") from None
        yield char, Glyph(tuple(iter_path_primitives(path_data)), width=width)


def load_glyph_table(table_path: Path) -> GlyphTable:
    """Load a hand-authored glyph table from a JSON file."""
    if not table_path.exists():
        raise FileNotFoundError(f"missing glyph table at {table_path}")
    table_data = json.loads(table_path.read_text())
    if not isinstance(table_data, dict):
        raise ValueError(f"Unexpected glyph table format in {table_path}")

    entries: Dict[str, Glyph] = dict(iter_glyph_entries(table_data))
    logger.info("loaded %d glyphs from %s", len(entries), table_path)
    return GlyphTable(entries)
