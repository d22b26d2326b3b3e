"""
Graph view of a canonical compartment.

The layout engine works on a networkx directed graph: classifiers become
nodes and relations become edges. Relation endpoints that are not declared
as classifiers still become nodes, with type None.
"""

from typing import List

import networkx as nx

from .models import Compartment


def build_graph(compartment: Compartment, recursive: bool = False) -> nx.DiGraph:
    """
    Build a directed graph from a compartment.

    Args:
        compartment: Canonical compartment
        recursive: Also add classifiers and relations from nested
            compartments

    Returns:
        networkx.DiGraph. Node attributes: type, compartments. Edge
        attributes: id, assoc, start_label, end_label.
    """
    graph = nx.DiGraph()
    compartments = compartment.walk() if recursive else [compartment]
    for part in compartments:
        for classifier in part.classifiers:
            if classifier.name not in graph:
                graph.add_node(
                    classifier.name,
                    type=classifier.type,
                    compartments=len(classifier.compartments),
                )
        for relation in part.relations:
            for endpoint in relation.endpoints:
                if endpoint not in graph:
                    graph.add_node(endpoint, type=None, compartments=0)
            graph.add_edge(
                relation.start,
                relation.end,
                id=relation.id,
                assoc=relation.assoc,
                start_label=relation.start_label.text,
                end_label=relation.end_label.text,
            )
    return graph


def has_cycles(graph: nx.DiGraph) -> bool:
    """Check whether the graph contains a cycle."""
    return not nx.is_directed_acyclic_graph(graph)


def find_cycles(graph: nx.DiGraph) -> List[List[str]]:
    """List the simple cycles of the graph."""
    return [list(cycle) for cycle in nx.simple_cycles(graph)]
