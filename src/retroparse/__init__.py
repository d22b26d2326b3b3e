"""
RetroParse - diagram source canonicalization

A Python library that turns textual diagram source into a canonical tree of
compartments, classifiers and relations plus a fully resolved rendering
configuration, ready for a layout engine.

Example:
    >>> from retroparse import DiagramParser
    >>> parser = DiagramParser(my_grammar)
    >>> diagram = parser.parse('''
    ...     #fontSize: 14
    ...     [A] -> [B]
    ... ''')
    >>> diagram.config.font_size
    14.0

Debug Mode Example:
    >>> diagram = parser.parse("[A] -> [B]", debug=True)
    >>> print(diagram.trace.summary())
"""

from .canonicalizer import SyntaxCanonicalizer, canonicalize
from .config import Config, ConfigResolver, resolve_config
from .graph import build_graph, find_cycles, has_cycles
from .models import (
    Classifier,
    Compartment,
    Label,
    RawClassifier,
    RawCompartment,
    RawRelation,
    Relation,
)
from .pipeline import DiagramParser, GrammarAdapter, ParsedDiagram, parse_diagram
from .preprocessor import (
    Line,
    MalformedDirectiveError,
    ParseError,
    PreprocessResult,
    Preprocessor,
    preprocess,
)
from .styles import (
    BUILTIN_STYLES,
    Direction,
    Style,
    StyleDefinition,
    parse_custom_style,
)
from .tracer import ParseTrace, PipelineStage

__version__ = "0.1.0"

__all__ = [
    # Main API
    "DiagramParser",
    "ParsedDiagram",
    "GrammarAdapter",
    "parse_diagram",
    # Preprocessor
    "Preprocessor",
    "PreprocessResult",
    "Line",
    "ParseError",
    "MalformedDirectiveError",
    "preprocess",
    # Trees
    "RawCompartment",
    "RawClassifier",
    "RawRelation",
    "Compartment",
    "Classifier",
    "Relation",
    "Label",
    "SyntaxCanonicalizer",
    "canonicalize",
    # Config
    "Config",
    "ConfigResolver",
    "resolve_config",
    "Style",
    "StyleDefinition",
    "Direction",
    "BUILTIN_STYLES",
    "parse_custom_style",
    # Graph
    "build_graph",
    "has_cycles",
    "find_cycles",
    # Debug/Tracing
    "ParseTrace",
    "PipelineStage",
]
