"""
Main diagram parsing module.

Combines preprocessing, the grammar, canonicalization and configuration
resolution into a single call:

    source -> Preprocessor -> {directives, cleaned text}
    cleaned text -> grammar -> raw tree -> SyntaxCanonicalizer -> root
    directives -> ConfigResolver -> config
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Protocol, Union

from .canonicalizer import SyntaxCanonicalizer
from .config import Config, ConfigResolver
from .models import Compartment, RawCompartment
from .preprocessor import Preprocessor
from .styles import Style
from .tracer import ParseTrace

logger = logging.getLogger(__name__)

RawTree = Union[RawCompartment, Mapping[str, Any]]


class GrammarAdapter(Protocol):
    """Protocol for grammar objects that turn cleaned text into a raw tree."""

    def parse(self, text: str) -> RawTree:
        """Parse cleaned diagram text. Errors propagate to the caller."""
        ...


@dataclass(frozen=True)
class ParsedDiagram:
    """
    Result of parsing a diagram.

    Attributes:
        root: Canonical root compartment
        config: Resolved configuration
        trace: Stage snapshots when parsed with debug=True, else None
    """

    root: Compartment
    config: Config
    trace: Optional[ParseTrace] = None


class DiagramParser:
    """
    Parse diagram source into a canonical tree and a configuration.

    Example:
        >>> parser = DiagramParser(my_grammar)
        >>> diagram = parser.parse('''
        ...     #direction: right
        ...     [A] -> [B]
        ... ''')
        >>> diagram.config.direction
        <Direction.LEFT_TO_RIGHT: 'LR'>

    A DiagramParser holds no per-call state, so one instance can serve
    concurrent callers.
    """

    def __init__(
        self,
        grammar: Union[GrammarAdapter, Callable[[str], RawTree]],
        styles: Optional[Mapping[str, Style]] = None,
    ):
        """
        Initialize the parser.

        Args:
            grammar: Object with a parse(text) method, or a plain callable,
                returning a RawCompartment or its mapping form.
            styles: Built-in style table (defaults to BUILTIN_STYLES)
        """
        if hasattr(grammar, "parse"):
            self._grammar_parse = grammar.parse
        elif callable(grammar):
            self._grammar_parse = grammar
        else:
            raise TypeError("grammar must be callable or have a parse() method")

        self.preprocessor = Preprocessor()
        self.canonicalizer = SyntaxCanonicalizer()
        self.config_resolver = ConfigResolver(styles)

    def parse(self, source: str, debug: bool = False) -> ParsedDiagram:
        """
        Parse diagram source.

        Args:
            source: Diagram source text
            debug: Record a ParseTrace on the result

        Returns:
            ParsedDiagram

        Raises:
            MalformedDirectiveError: If a directive line has no value.
            Any exception raised by the grammar, unchanged.
        """
        trace = ParseTrace(source=source) if debug else None

        pre = self.preprocessor.process(source)
        if trace is not None:
            trace.add_stage(
                "preprocess",
                {
                    "lines": len(pre.lines),
                    "directives": dict(pre.directives),
                    "empty": pre.is_empty,
                },
            )

        if pre.is_empty:
            logger.debug("No diagram content, skipping grammar")
            root = Compartment.empty()
        else:
            raw = self._run_grammar(pre.diagram_text)
            if trace is not None:
                trace.add_stage(
                    "grammar",
                    {"nodes": len(raw.nodes), "rels": len(raw.rels)},
                )
            root = self.canonicalizer.canonicalize(raw)
            if trace is not None:
                trace.add_stage(
                    "canonicalize",
                    {
                        "classifiers": [c.name for c in root.classifiers],
                        "relations": [r.id for r in root.all_relations()],
                    },
                )

        config = self.config_resolver.resolve(pre.directives)
        if trace is not None:
            trace.add_stage(
                "configure",
                {
                    "direction": config.direction.value,
                    "ranker": config.ranker,
                    "user_styles": sorted(
                        k[1:].upper() for k in pre.directives if k.startswith(".")
                    ),
                },
            )

        return ParsedDiagram(root=root, config=config, trace=trace)

    def _run_grammar(self, text: str) -> RawCompartment:
        raw = self._grammar_parse(text)
        if isinstance(raw, RawCompartment):
            return raw
        if isinstance(raw, Mapping):
            return RawCompartment.from_dict(raw)
        raise TypeError(
            f"grammar returned {type(raw).__name__}, "
            "expected RawCompartment or mapping"
        )


def parse_diagram(
    source: str,
    grammar: Union[GrammarAdapter, Callable[[str], RawTree]],
    styles: Optional[Mapping[str, Style]] = None,
) -> ParsedDiagram:
    """
    Convenience function to parse diagram source.

    Args:
        source: Diagram source text
        grammar: Grammar adapter or callable
        styles: Optional built-in style table

    Returns:
        ParsedDiagram
    """
    return DiagramParser(grammar, styles).parse(source)
