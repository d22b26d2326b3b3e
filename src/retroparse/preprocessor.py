"""
Preprocessor module for diagram parsing.

Splits source text into lines, pulls out ``#key:value`` directives, blanks
out comment lines and hands the remaining text to the grammar. Blanked lines
keep their slot so grammar error positions still match the source.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

logger = logging.getLogger(__name__)


class ParseError(Exception):
    """Raised when input parsing fails."""

    pass


class MalformedDirectiveError(ParseError):
    """
    Raised for a directive line without a ``:``-separated value.

    Attributes:
        line_number: 1-based line number of the offending directive.
    """

    def __init__(self, line_number: int):
        super().__init__(f"line {line_number}: Malformed directive")
        self.line_number = line_number


@dataclass(frozen=True)
class Line:
    """A source line with its 0-based index."""

    index: int
    text: str

    @property
    def number(self) -> int:
        """1-based line number, as used in error messages."""
        return self.index + 1

    @property
    def is_directive(self) -> bool:
        return self.text[:1] == "#"

    @property
    def is_comment(self) -> bool:
        return self.text.strip()[:2] == "//"


@dataclass
class PreprocessResult:
    """Result of preprocessing source text."""

    lines: List[Line] = field(default_factory=list)
    directives: Dict[str, str] = field(default_factory=dict)
    diagram_text: str = ""

    @property
    def is_empty(self) -> bool:
        """True when no line carries diagram content."""
        return not self.diagram_text.strip("\n")


class Preprocessor:
    """Separates directives and comments from diagram content."""

    def process(self, source: str) -> PreprocessResult:
        """
        Preprocess source text.

        Args:
            source: Raw diagram source, newline separated.

        Returns:
            PreprocessResult with the directive map and the cleaned text.
            The cleaned text has exactly as many lines as the source.

        Raises:
            MalformedDirectiveError: If a directive has no value.
        """
        lines = [Line(index, text) for index, text in enumerate(source.split("\n"))]

        directives: Dict[str, str] = {}
        for line in lines:
            if not line.is_directive:
                continue
            key, value = self._parse_directive(line)
            if key in directives:
                logger.debug(
                    "Line %d: directive %r overrides earlier value", line.number, key
                )
            directives[key] = value

        diagram_text = "\n".join(self._compilable(line) for line in lines)
        logger.debug(
            "Preprocessed %d lines, %d directives", len(lines), len(directives)
        )
        return PreprocessResult(
            lines=lines, directives=directives, diagram_text=diagram_text
        )

    def _parse_directive(self, line: Line) -> Tuple[str, str]:
        # Only the second field is the value: "#title:a:b" yields "a".
        tokens = line.text[1:].split(":")
        if len(tokens) < 2:
            raise MalformedDirectiveError(line.number)
        return tokens[0].strip(), tokens[1].strip()

    def _compilable(self, line: Line) -> str:
        if line.is_directive or line.is_comment:
            return ""
        return line.text.strip()


def preprocess(source: str) -> PreprocessResult:
    """
    Convenience function to preprocess diagram source.

    Args:
        source: Raw diagram source

    Returns:
        PreprocessResult
    """
    return Preprocessor().process(source)
