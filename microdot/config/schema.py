"""Configuration schema for microdot, validated with Pydantic.

Unknown keys are rejected so that a misspelt option fails loudly instead of
silently falling back to its default.
"""

import re
from typing import List

from pydantic import BaseModel, Field, field_validator

from microdot.export.dot import DisplayMode
from microdot.export.palette import DEFAULT_COLORS

_HEX_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


class MicrodotConfig(BaseModel):
    """Settings shared by the command-line tools.

    Attributes:
        cost_variable: Label variable read by path and cost analysis.
        display_mode: Whether DOT renders show ids (interactive) or not.
        wrap_width: Column at which node text is wrapped in DOT renders.
        palette: Fill colours indexed by hashtag hash.
        left_right: Initial direction for graphs that do not exist yet.
    """

    cost_variable: str = Field(default="cost", min_length=1)
    display_mode: DisplayMode = DisplayMode.INTERACTIVE
    wrap_width: int = Field(default=40, ge=10, le=200)
    palette: List[str] = Field(default_factory=lambda: list(DEFAULT_COLORS))
    left_right: bool = False

    model_config = {"extra": "forbid"}

    @field_validator("cost_variable")
    @classmethod
    def validate_cost_variable(cls, v: str) -> str:
        """Strip a leading ``$`` so both ``cost`` and ``$cost`` work."""
        name = v[1:] if v.startswith("$") else v
        if not name:
            raise ValueError("cost_variable must name a variable")
        return name

    @field_validator("palette")
    @classmethod
    def validate_palette(cls, v: List[str]) -> List[str]:
        """Ensure every palette entry is a ``#rrggbb`` colour."""
        for color in v:
            if not _HEX_COLOR_RE.match(color):
                raise ValueError(f"Invalid palette colour: {color!r}")
        return [color.lower() for color in v]

    @classmethod
    def default(cls) -> "MicrodotConfig":
        return cls()
