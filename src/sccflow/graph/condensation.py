"""Condensation: collapse each SCC of a graph into a single node.

Given the SCC partition, every original edge (u, v, w) maps to
(comp(u), comp(v), w).  Edges inside one component (self-loops
included) are dropped, and parallel edges between the same pair of
components are merged into one.  The result is a DAG: a cycle between
components would mean those components are mutually reachable and
should have been a single SCC.

Two flavours:
  condense           -- membership only, weights ignored (all 1)
  condense_weighted  -- each merged edge keeps the MINIMUM weight of the
                        original edges it replaces, i.e. the cheapest
                        way to step from one component to the other

Both emit condensed edges in first-seen order (source vertices
ascending, adjacency order within a vertex), so the two graphs have the
same adjacency ordering and the topological order computed on one is
valid and reproducible for the other.
"""
from __future__ import annotations

from typing import Sequence

from sccflow.graph.adjacency import Graph
from sccflow.graph.scc import component_index


def _cross_edges(graph: Graph, components: Sequence[Sequence[int]]) -> dict[tuple[int, int], int]:
    """Collect (a, b) -> min weight over edges crossing between components."""
    comp_of = component_index(components, graph.node_count)
    best: dict[tuple[int, int], int] = {}
    for u, v, w in graph.edges():
        a = comp_of[u]
        b = comp_of[v]
        if a == b:
            continue
        key = (a, b)
        prev = best.get(key)
        if prev is None or w < prev:
            best[key] = w
    return best


def condense(graph: Graph, components: Sequence[Sequence[int]]) -> Graph:
    """Unweighted condensation DAG of *graph* under *components*."""
    best = _cross_edges(graph, components)
    return Graph(len(components), list(best))


def condense_weighted(graph: Graph, components: Sequence[Sequence[int]]) -> Graph:
    """Weighted condensation DAG; parallel edges keep the minimum weight."""
    best = _cross_edges(graph, components)
    return Graph(len(components), [(a, b, w) for (a, b), w in best.items()])
