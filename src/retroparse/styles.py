"""
Classifier styles.

A Style bundles the visual attributes a renderer needs for one classifier
type. Built-in styles cover the standard classifier types; documents add or
override styles with directives such as::

    #.Service: bold fill=#8f8 visual=roundrect

The definition string is tokenized once by StyleDefinition and then mapped
onto a Style by parse_custom_style().
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional


class Direction(str, Enum):
    """Flow direction understood by the layout engine."""

    TOP_TO_BOTTOM = "TB"
    LEFT_TO_RIGHT = "LR"


def parse_direction(word: Optional[str]) -> Direction:
    """Map a directive word to a Direction: "right" is LR, anything else TB."""
    if word == "right":
        return Direction.LEFT_TO_RIGHT
    return Direction.TOP_TO_BOTTOM


@dataclass(frozen=True)
class Style:
    """
    Visual attributes for a classifier type.

    Attributes:
        bold: Render the title in bold.
        underline: Underline the title.
        italic: Render the title in italics.
        dashed: Draw the outline dashed.
        empty: Draw the shape without its text compartments.
        center: Center text horizontally.
        fill: Fill color, or None for the document default.
        stroke: Stroke color, or None for the document default.
        visual: Name of the shape to draw, e.g. "class" or "database".
        direction: Layout direction for nested compartments.
    """

    bold: bool = False
    underline: bool = False
    italic: bool = False
    dashed: bool = False
    empty: bool = False
    center: bool = True
    fill: Optional[str] = None
    stroke: Optional[str] = None
    visual: str = "class"
    direction: Direction = Direction.TOP_TO_BOTTOM


@dataclass
class StyleDefinition:
    """
    Tokenized style definition.

    Attributes:
        flags: Bare keyword flags, True when the keyword occurs anywhere in
            the definition text (substring match, as in "bold" or "dashed").
        values: ``key=value`` settings; when a key occurs more than once the
            last occurrence wins. Empty values are dropped.
    """

    FLAGS = ("bold", "underline", "italic", "dashed", "empty")
    KEYS = ("align", "fill", "stroke", "visual", "direction")

    # key=value where value runs up to the next space; matches of
    # different keys may overlap
    VALUE_PATTERNS = {key: re.compile(key + r"=([^ ]*)") for key in KEYS}

    flags: Dict[str, bool] = field(default_factory=dict)
    values: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def parse(cls, text: str) -> "StyleDefinition":
        flags = {flag: flag in text for flag in cls.FLAGS}
        values: Dict[str, str] = {}
        for key, pattern in cls.VALUE_PATTERNS.items():
            found = [match.group(1) for match in pattern.finditer(text)]
            if found and found[-1]:
                values[key] = found[-1]
        return cls(flags=flags, values=values)

    def flag(self, name: str) -> bool:
        return self.flags.get(name, False)

    def value(self, key: str) -> Optional[str]:
        return self.values.get(key)


def parse_custom_style(text: str) -> Style:
    """
    Parse a free-form style definition into a Style.

    Args:
        text: Definition string, e.g. "bold dashed fill=#fff align=left"

    Returns:
        Style with unspecified attributes at their defaults.
    """
    definition = StyleDefinition.parse(text)
    return Style(
        bold=definition.flag("bold"),
        underline=definition.flag("underline"),
        italic=definition.flag("italic"),
        dashed=definition.flag("dashed"),
        empty=definition.flag("empty"),
        center=definition.value("align") != "left",
        fill=definition.value("fill"),
        stroke=definition.value("stroke"),
        visual=definition.value("visual") or "class",
        direction=parse_direction(definition.value("direction")),
    )


# Read-only; resolvers copy it into a fresh dict per call.
BUILTIN_STYLES: Mapping[str, Style] = MappingProxyType(
    {
        "ABSTRACT": Style(italic=True, visual="class"),
        "ACTOR": Style(visual="actor"),
        "CHOICE": Style(visual="rhomb"),
        "CLASS": Style(bold=True, visual="class"),
        "DATABASE": Style(bold=True, visual="database"),
        "END": Style(empty=True, visual="end"),
        "FRAME": Style(center=False, visual="frame"),
        "HIDDEN": Style(empty=True, visual="hidden"),
        "INPUT": Style(visual="input"),
        "INSTANCE": Style(underline=True, visual="class"),
        "LABEL": Style(visual="none"),
        "NOTE": Style(center=False, visual="note"),
        "PACKAGE": Style(center=False, visual="package"),
        "RECEIVER": Style(center=False, visual="receiver"),
        "REFERENCE": Style(dashed=True, visual="class"),
        "SENDER": Style(center=False, visual="sender"),
        "START": Style(empty=True, visual="start"),
        "STATE": Style(visual="roundrect"),
        "SYNC_BAR": Style(empty=True, visual="sync"),
        "TABLE": Style(bold=True, visual="table"),
        "TRANSCEIVER": Style(center=False, visual="transceiver"),
        "USECASE": Style(visual="ellipse"),
    }
)
