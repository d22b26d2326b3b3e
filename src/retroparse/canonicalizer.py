"""
Syntax canonicalizer.

Turns the raw parse tree returned by the grammar into the canonical tree the
layout stage consumes:

1. Relations get ids in pre-order over compartments. A compartment's own
   relations are numbered before any nested compartment is visited.
2. Sibling classifiers are deduplicated by name. The classifier with the most
   compartments wins; ties go to the one that appears first.
3. Relations are deduplicated by (start, end). The relation with the lowest
   id wins, across the whole document.
"""

import itertools
import logging
from typing import Dict, Iterator, List, Set, Tuple

from .models import (
    Classifier,
    Compartment,
    Label,
    RawClassifier,
    RawCompartment,
    Relation,
)

logger = logging.getLogger(__name__)


class SyntaxCanonicalizer:
    """
    Canonicalizes raw parse trees.

    The canonicalizer keeps no state between calls: the relation id counter is
    created inside canonicalize(), so every call numbers from zero and a single
    instance may be shared between threads.
    """

    def canonicalize(self, root: RawCompartment) -> Compartment:
        """
        Canonicalize a raw parse tree.

        Args:
            root: Root compartment returned by the grammar.

        Returns:
            Canonical root compartment.
        """
        ids = itertools.count()
        tree = self._transform_compartment(root, ids)
        survivors = self._first_relation_ids(tree)
        return self._prune_relations(tree, survivors)

    def _transform_compartment(
        self, raw: RawCompartment, ids: Iterator[int]
    ) -> Compartment:
        relations = [
            Relation(
                id=next(ids),
                assoc=rel.assoc,
                start=rel.start,
                end=rel.end,
                start_label=Label(rel.start_label),
                end_label=Label(rel.end_label),
            )
            for rel in raw.rels
        ]

        classifiers = [self._transform_classifier(node, ids) for node in raw.nodes]
        # sorted() is stable, so equally rich classifiers keep document order
        classifiers = sorted(classifiers, key=lambda c: -len(c.compartments))

        return Compartment(
            lines=tuple(raw.lines),
            classifiers=tuple(self._unique_classifiers(classifiers)),
            relations=tuple(self._unique_relations(relations)),
        )

    def _transform_classifier(
        self, raw: RawClassifier, ids: Iterator[int]
    ) -> Classifier:
        compartments = tuple(
            self._transform_compartment(part, ids) for part in raw.parts
        )
        return Classifier(type=raw.type, name=raw.name, compartments=compartments)

    def _unique_classifiers(self, classifiers: List[Classifier]) -> List[Classifier]:
        seen: Set[str] = set()
        unique = []
        for classifier in classifiers:
            if classifier.name in seen:
                logger.debug("Dropping duplicate classifier %r", classifier.name)
                continue
            seen.add(classifier.name)
            unique.append(classifier)
        return unique

    def _unique_relations(self, relations: List[Relation]) -> List[Relation]:
        seen: Set[Tuple[str, str]] = set()
        unique = []
        for relation in relations:
            if relation.endpoints in seen:
                logger.debug(
                    "Dropping duplicate relation %s -> %s (id %d)",
                    relation.start,
                    relation.end,
                    relation.id,
                )
                continue
            seen.add(relation.endpoints)
            unique.append(relation)
        return unique

    def _first_relation_ids(self, tree: Compartment) -> Set[int]:
        """Ids of the lowest-numbered relation for every endpoint pair."""
        first: Dict[Tuple[str, str], int] = {}
        for compartment in tree.walk():
            for relation in compartment.relations:
                current = first.get(relation.endpoints)
                if current is None or relation.id < current:
                    first[relation.endpoints] = relation.id
        return set(first.values())

    def _prune_relations(self, tree: Compartment, keep: Set[int]) -> Compartment:
        relations = tuple(r for r in tree.relations if r.id in keep)
        if len(relations) != len(tree.relations):
            logger.debug(
                "Dropping %d relation(s) duplicated in another compartment",
                len(tree.relations) - len(relations),
            )
        classifiers = tuple(
            Classifier(
                type=c.type,
                name=c.name,
                compartments=tuple(
                    self._prune_relations(part, keep) for part in c.compartments
                ),
            )
            for c in tree.classifiers
        )
        return Compartment(
            lines=tree.lines, classifiers=classifiers, relations=relations
        )


def canonicalize(root: RawCompartment) -> Compartment:
    """
    Convenience function to canonicalize a raw parse tree.

    Args:
        root: Root compartment returned by the grammar

    Returns:
        Canonical root compartment
    """
    return SyntaxCanonicalizer().canonicalize(root)
