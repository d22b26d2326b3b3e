"""
Configuration resolver.

Turns the directive map collected by the preprocessor into a Config record.
Unknown keys are ignored and bad values fall back to defaults; the only
directive-level error (a missing value) is raised earlier by the
preprocessor.
"""

import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .styles import (
    BUILTIN_STYLES,
    Direction,
    Style,
    parse_custom_style,
    parse_direction,
)

logger = logging.getLogger(__name__)

DEFAULT_FILL = ("#eee8d5", "#fdf6e3", "#eee8d5", "#fdf6e3")

RANKERS = ("network-simplex", "tight-tree", "longest-path")

# directive key -> (Config field, default)
NUMERIC_DIRECTIVES = {
    "arrowSize": ("arrow_size", 1.0),
    "bendSize": ("bend_size", 0.3),
    "gutter": ("gutter", 5.0),
    "edgeMargin": ("edge_margin", 0.0),
    "fontSize": ("font_size", 12.0),
    "leading": ("leading", 1.25),
    "lineWidth": ("line_width", 3.0),
    "padding": ("padding", 8.0),
    "spacing": ("spacing", 40.0),
    "zoom": ("zoom", 1.0),
}

STRING_DIRECTIVES = {
    "background": ("background", "transparent"),
    "font": ("font", "Helvetica"),
    "stroke": ("stroke", "#33322E"),
    "title": ("title", ""),
}


@dataclass(frozen=True)
class Config:
    """
    Fully resolved rendering and layout configuration.

    The layout engine reads direction, ranker, acyclicer, spacing, gutter,
    edge_margin, gravity, arrow_size and bend_size. The renderer reads the
    rest, looking up styles by upper-cased classifier type.
    """

    arrow_size: float = 1.0
    bend_size: float = 0.3
    direction: Direction = Direction.TOP_TO_BOTTOM
    gutter: float = 5.0
    edge_margin: float = 0.0
    gravity: float = 1.0
    edges: str = "rounded"
    fill: Tuple[str, ...] = DEFAULT_FILL
    background: str = "transparent"
    fill_arrows: bool = False
    font: str = "Helvetica"
    font_size: float = 12.0
    leading: float = 1.25
    line_width: float = 3.0
    padding: float = 8.0
    spacing: float = 40.0
    stroke: str = "#33322E"
    title: str = ""
    zoom: float = 1.0
    acyclicer: Optional[str] = None
    ranker: str = "network-simplex"
    styles: Mapping[str, Style] = field(
        default_factory=lambda: MappingProxyType(dict(BUILTIN_STYLES)), hash=False
    )

    def style_for(self, classifier_type: str) -> Optional[Style]:
        """Look up the style for a classifier type, case-insensitively."""
        return self.styles.get(classifier_type.upper())


def _to_number(value: Optional[str]) -> Optional[float]:
    # float() accepts digit-group underscores, directive numbers do not
    if value is None or "_" in value:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_number(value: Optional[str], default: float) -> float:
    """
    Parse a numeric directive value.

    Missing, unparsable, non-finite and zero values all yield the default.
    """
    number = _to_number(value)
    if not number:
        return default
    return number


def parse_gravity(value: Optional[str]) -> float:
    """Like parse_number(), except an explicit zero is kept."""
    number = _to_number(value)
    if number is None:
        return 1.0
    return number


def parse_ranker(word: Optional[str]) -> str:
    if word in RANKERS:
        return word
    return "network-simplex"


class ConfigResolver:
    """
    Resolves directive maps into Config records.

    Args:
        styles: Built-in style table merged under the user styles. The table
            is only read, never modified.
    """

    def __init__(self, styles: Optional[Mapping[str, Style]] = None):
        self.styles = BUILTIN_STYLES if styles is None else styles

    def resolve(self, directives: Mapping[str, str]) -> Config:
        """
        Build a Config from a directive map.

        Args:
            directives: Mapping of directive key to value, as produced by the
                preprocessor.

        Returns:
            Config with every field resolved.
        """
        d = directives
        values = {}
        for key, (name, default) in NUMERIC_DIRECTIVES.items():
            values[name] = parse_number(d.get(key), default)
        for key, (name, default) in STRING_DIRECTIVES.items():
            values[name] = d.get(key) or default

        config = Config(
            direction=parse_direction(d.get("direction")),
            gravity=parse_gravity(d.get("gravity")),
            edges="hard" if d.get("edges") == "hard" else "rounded",
            fill=tuple(d["fill"].split(";")) if d.get("fill") else DEFAULT_FILL,
            fill_arrows=d.get("fillArrows") == "true",
            acyclicer="greedy" if d.get("acyclicer") == "greedy" else None,
            ranker=parse_ranker(d.get("ranker")),
            styles=self._merge_styles(d),
            **values,
        )
        logger.debug(
            "Resolved config from %d directives (%d styles)",
            len(d),
            len(config.styles),
        )
        return config

    def _merge_styles(self, directives: Mapping[str, str]) -> Mapping[str, Style]:
        styles = dict(self.styles)
        for key, definition in directives.items():
            if not key.startswith("."):
                continue
            name = key[1:].upper()
            if name in self.styles:
                logger.debug("Style %r overrides a built-in style", name)
            styles[name] = parse_custom_style(definition)
        return MappingProxyType(styles)


def resolve_config(
    directives: Mapping[str, str], styles: Optional[Mapping[str, Style]] = None
) -> Config:
    """
    Convenience function to resolve a directive map.

    Args:
        directives: Mapping of directive key to value
        styles: Optional built-in style table (defaults to BUILTIN_STYLES)

    Returns:
        Config
    """
    return ConfigResolver(styles).resolve(directives)
