"""Colour strategy for rendered hashtags.

A Palette is handed to the exporter that needs it; there is no global
colour scheme. A hashtag's stable hash picks its colour, so the same tag
gets the same colour in every render.
"""

from __future__ import annotations

from typing import Sequence

from microdot.graph.labels import HashTag

WHITE = "#ffffff"
BLACK = "#000000"
SEARCH_RESULT_FILL = "#d0cccc"

DEFAULT_COLORS = (
    "#8dd3c7",
    "#ffffb3",
    "#bebada",
    "#fb8072",
    "#80b1d3",
    "#fdb462",
    "#b3de69",
    "#fccde5",
    "#d9d9d9",
    "#bc80bd",
    "#ccebc5",
    "#ffed6f",
)


class Palette:
    """An ordered list of fill colours indexed modulo its length."""

    def __init__(self, colors: Sequence[str] = DEFAULT_COLORS) -> None:
        self.colors = tuple(colors)

    @property
    def stroke_color(self) -> str:
        return BLACK

    def fill_color(self, index: int) -> str:
        if not self.colors:
            return WHITE
        return self.colors[index % len(self.colors)]

    def tag_color(self, tag: HashTag) -> str:
        return self.fill_color(tag.stable_hash())

    def __repr__(self) -> str:
        return f"Palette({len(self.colors)} colors)"
