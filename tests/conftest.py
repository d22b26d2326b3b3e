"""Pytest configuration and shared fixtures for RetroParse tests."""

import pytest

from retroparse import (
    DiagramParser,
    RawClassifier,
    RawCompartment,
    RawRelation,
    Style,
)


class FakeGrammar:
    """
    Deterministic stand-in for a real grammar.

    Each non-empty line ``A -> B`` becomes a relation and ``[Name]`` becomes a
    class classifier in a flat root compartment. Every call is recorded.
    """

    def __init__(self):
        self.calls = []

    def parse(self, text):
        self.calls.append(text)
        root = RawCompartment()
        for line in text.split("\n"):
            if not line:
                continue
            if line.startswith("[") and line.endswith("]"):
                root.nodes.append(RawClassifier("CLASS", line[1:-1]))
            elif "->" in line:
                start, end = (part.strip() for part in line.split("->"))
                root.rels.append(RawRelation("->", start, end))
            else:
                root.lines.append(line)
        return root


class FixedGrammar:
    """Grammar that ignores its input and returns a prepared tree."""

    def __init__(self, tree):
        self.tree = tree
        self.calls = []

    def parse(self, text):
        self.calls.append(text)
        return self.tree


@pytest.fixture
def fake_grammar():
    """Line based fake grammar."""
    return FakeGrammar()


@pytest.fixture
def parser(fake_grammar):
    """DiagramParser wired to the fake grammar."""
    return DiagramParser(fake_grammar)


@pytest.fixture
def minimal_styles():
    """A one-entry built-in style table."""
    return {"CLASS": Style(bold=True)}


@pytest.fixture
def nested_tree():
    """
    Root with two relations and a package holding one more.

    Pre-order numbering: root relations 0 and 1, nested relation 2.
    """
    return RawCompartment.from_dict(
        {
            "lines": ["title"],
            "nodes": [
                {
                    "type": "PACKAGE",
                    "name": "Pkg",
                    "parts": [
                        {"lines": ["Pkg"]},
                        {"rels": [{"assoc": "->", "start": "X", "end": "Y"}]},
                    ],
                }
            ],
            "rels": [
                {"assoc": "->", "start": "A", "end": "B"},
                {"assoc": "->", "start": "B", "end": "C"},
            ],
        }
    )


@pytest.fixture
def fixed_grammar():
    """Factory for grammars that return a prepared tree."""
    return FixedGrammar
