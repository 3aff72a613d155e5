"""Dependency graph construction and PageRank ranking."""

from __future__ import annotations

import networkx as nx

from classmap.models import AnalysisResult


def build_graph(result: AnalysisResult) -> nx.MultiDiGraph:
    """Build a namespace graph from an analysis result.

    Nodes are namespace identifiers. Each reference whose endpoints are
    both registered namespaces becomes one edge labeled with its kind;
    references to anything else (framework base classes, unknown mixins)
    are skipped.

    Args:
        result: The populated AnalysisResult.

    Returns:
        The namespace MultiDiGraph.
    """
    graph = nx.MultiDiGraph()
    for namespace in result.namespaces:
        graph.add_node(
            namespace.identifier,
            kind=namespace.kind.value,
            file=namespace.file,
            declared_parent=namespace.declared_parent,
        )

    for reference in result.references:
        if reference.source not in graph or reference.target not in graph:
            continue
        graph.add_edge(reference.source, reference.target, label=reference.kind.value)

    return graph


def rank_namespaces(graph: nx.MultiDiGraph) -> dict[str, float]:
    """Apply PageRank to the graph.

    Namespaces that many others subclass, include or associate with rank
    highest. Without edges every node gets the same rank.

    Args:
        graph: The namespace MultiDiGraph.

    Returns:
        Mapping of identifier to rank.
    """
    if graph.number_of_nodes() == 0:
        return {}
    if graph.number_of_edges() == 0:
        uniform = 1.0 / graph.number_of_nodes()
        return {node: uniform for node in graph.nodes}
    return nx.pagerank(graph, alpha=0.85)
