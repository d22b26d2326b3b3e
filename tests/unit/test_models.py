"""Unit tests for the models module."""

import dataclasses

import pytest

from retroparse.models import (
    Classifier,
    Compartment,
    Label,
    RawClassifier,
    RawCompartment,
    RawRelation,
    Relation,
)


class TestFromDict:
    """Tests for building raw trees from mappings."""

    def test_relation_camel_case_labels(self):
        """Test relation labels read from camelCase keys."""
        rel = RawRelation.from_dict(
            {"assoc": "->", "start": "A", "end": "B", "startLabel": "1", "endLabel": "*"}
        )
        assert rel == RawRelation("->", "A", "B", "1", "*")

    def test_relation_missing_labels(self):
        """Test missing labels default to empty text."""
        rel = RawRelation.from_dict({"assoc": "--", "start": "A", "end": "B"})
        assert rel.start_label == ""
        assert rel.end_label == ""

    def test_relation_missing_endpoint(self):
        """Test that a missing endpoint raises KeyError."""
        with pytest.raises(KeyError):
            RawRelation.from_dict({"assoc": "->", "start": "A"})

    def test_nested_compartment(self, nested_tree):
        """Test building a nested raw tree."""
        assert nested_tree.lines == ["title"]
        assert len(nested_tree.rels) == 2
        pkg = nested_tree.nodes[0]
        assert isinstance(pkg, RawClassifier)
        assert pkg.type == "PACKAGE"
        assert len(pkg.parts) == 2
        assert pkg.parts[1].rels[0].start == "X"

    def test_missing_keys_are_empty(self):
        """Test missing compartment keys give empty lists."""
        assert RawCompartment.from_dict({}) == RawCompartment()


class TestCanonicalRecords:
    """Tests for canonical records."""

    def make_relation(self, id, start="A", end="B"):
        return Relation(id, "->", start, end, Label(""), Label(""))

    def test_compartment_is_frozen(self):
        """Test canonical compartments are immutable."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            Compartment().lines = ("x",)

    def test_empty(self):
        """Test the empty compartment."""
        assert Compartment.empty().is_empty
        assert not Compartment(lines=("x",)).is_empty

    def test_relation_endpoints(self):
        """Test the endpoints pair of a relation."""
        assert self.make_relation(0).endpoints == ("A", "B")

    def test_walk_is_pre_order(self):
        """Test walk visits compartments in pre-order."""
        inner = Compartment(lines=("inner",))
        middle = Compartment(
            lines=("middle",), classifiers=(Classifier("PACKAGE", "P", (inner,)),)
        )
        root = Compartment(
            lines=("root",), classifiers=(Classifier("PACKAGE", "M", (middle,)),)
        )
        assert [c.lines[0] for c in root.walk()] == ["root", "middle", "inner"]

    def test_all_relations_sorted_by_id(self):
        """Test all_relations collects nested relations by id."""
        nested = Compartment(relations=(self.make_relation(0, "X", "Y"),))
        root = Compartment(
            classifiers=(Classifier("PACKAGE", "P", (nested,)),),
            relations=(self.make_relation(1),),
        )
        assert [r.id for r in root.all_relations()] == [0, 1]

    def test_find_classifier(self):
        """Test finding a direct child classifier by name."""
        root = Compartment(classifiers=(Classifier("CLASS", "A"),))
        assert root.find_classifier("A").type == "CLASS"
        with pytest.raises(KeyError):
            root.find_classifier("B")

    def test_classifier_title(self):
        """Test classifier title falls back to the name."""
        titled = Classifier("CLASS", "a", (Compartment(lines=("A Title",)),))
        assert titled.title == "A Title"
        assert Classifier("CLASS", "a").title == "a"
