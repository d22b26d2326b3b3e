"""
Data models for diagram parsing.

This module contains the dataclasses that flow through the parsing pipeline.
There are two families:

Raw parse tree (what the grammar adapter returns):
    RawCompartment: Lines, classifiers and relations of one compartment.
    RawClassifier: A named node whose body is a list of raw compartments.
    RawRelation: A link between two named endpoints.

Canonical tree (what the layout stage consumes):
    Compartment: Deduplicated compartment, recursively nested.
    Classifier: Deduplicated classifier with canonical compartments.
    Relation: Relation with a document-unique id and wrapped labels.
    Label: Text of one end of a relation.

Canonical records are frozen and use tuples for their sequences, so a tree
produced by one parse can be shared freely.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Mapping, Tuple


@dataclass
class RawRelation:
    """
    Relation as produced by the grammar.

    Attributes:
        assoc: Association kind, e.g. "->" or "-:>".
        start: Name of the start classifier.
        end: Name of the end classifier.
        start_label: Label text at the start end (may be empty).
        end_label: Label text at the end end (may be empty).
    """

    assoc: str
    start: str
    end: str
    start_label: str = ""
    end_label: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RawRelation":
        """Build from the mapping form emitted by generated grammars."""
        return cls(
            assoc=data["assoc"],
            start=data["start"],
            end=data["end"],
            start_label=data.get("startLabel", data.get("start_label", "")),
            end_label=data.get("endLabel", data.get("end_label", "")),
        )


@dataclass
class RawClassifier:
    """Classifier as produced by the grammar."""

    type: str
    name: str
    parts: List["RawCompartment"] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RawClassifier":
        return cls(
            type=data["type"],
            name=data["name"],
            parts=[RawCompartment.from_dict(p) for p in data.get("parts", [])],
        )


@dataclass
class RawCompartment:
    """
    Compartment as produced by the grammar.

    The root of every raw parse tree is a RawCompartment. Nesting happens
    through RawClassifier.parts.
    """

    lines: List[str] = field(default_factory=list)
    nodes: List[RawClassifier] = field(default_factory=list)
    rels: List[RawRelation] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RawCompartment":
        """
        Build a raw tree from nested mappings and lists.

        Parser generators usually emit plain JSON-like structures with the
        keys ``lines``, ``nodes`` and ``rels``; this converts them
        recursively. Missing keys are treated as empty.
        """
        return cls(
            lines=list(data.get("lines", [])),
            nodes=[RawClassifier.from_dict(n) for n in data.get("nodes", [])],
            rels=[RawRelation.from_dict(r) for r in data.get("rels", [])],
        )


@dataclass(frozen=True)
class Label:
    """Text attached to one end of a relation."""

    text: str


@dataclass(frozen=True)
class Relation:
    """
    Canonical relation.

    Attributes:
        id: Document-unique id, assigned in pre-order traversal order.
        assoc: Association kind.
        start: Name of the start classifier.
        end: Name of the end classifier.
        start_label: Label at the start end.
        end_label: Label at the end end.
    """

    id: int
    assoc: str
    start: str
    end: str
    start_label: Label
    end_label: Label

    @property
    def endpoints(self) -> Tuple[str, str]:
        """The (start, end) pair that identifies this relation."""
        return (self.start, self.end)


@dataclass(frozen=True)
class Classifier:
    """Canonical classifier: a named node with nested compartments."""

    type: str
    name: str
    compartments: Tuple["Compartment", ...] = ()

    @property
    def title(self) -> str:
        """First line of the first compartment, or the name if there is none."""
        if self.compartments and self.compartments[0].lines:
            return self.compartments[0].lines[0]
        return self.name


@dataclass(frozen=True)
class Compartment:
    """
    Canonical compartment.

    Invariants:
        - no two classifiers share a name
        - no two relations in the whole tree share a (start, end) pair
    """

    lines: Tuple[str, ...] = ()
    classifiers: Tuple[Classifier, ...] = ()
    relations: Tuple[Relation, ...] = ()

    @classmethod
    def empty(cls) -> "Compartment":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not (self.lines or self.classifiers or self.relations)

    def walk(self) -> Iterator["Compartment"]:
        """Yield this compartment and every nested compartment, pre-order."""
        yield self
        for classifier in self.classifiers:
            for compartment in classifier.compartments:
                yield from compartment.walk()

    def all_relations(self) -> List[Relation]:
        """All relations of the tree, ordered by id."""
        relations = [r for c in self.walk() for r in c.relations]
        return sorted(relations, key=lambda r: r.id)

    def find_classifier(self, name: str) -> "Classifier":
        """
        Return the direct child classifier with the given name.

        Raises:
            KeyError: If no direct child has that name.
        """
        for classifier in self.classifiers:
            if classifier.name == name:
                return classifier
        raise KeyError(name)
