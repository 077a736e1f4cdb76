"""Directed weighted graph over integer vertices, using adjacency lists.

Vertices are the integers 0..n-1.  Each vertex owns a tuple of outgoing
(destination, weight) pairs kept in the order the edges were supplied,
because traversal order downstream (Tarjan's DFS, Kahn's queue) follows
adjacency order and the outputs must be reproducible.  A parallel
in-degree array is computed once so Kahn's algorithm does not need a
full scan to seed its queue.

The graph is built once and never mutated.  Every stage of the pipeline
(SCC, condensation, topological order, DAG paths) reads the same
instance, which is what makes independent runs safe to parallelize.

Edge weights follow the loader convention: a weight of 0 (or a missing
weight) means "unspecified" and is stored as 1.
"""
from __future__ import annotations

from typing import Iterable, Iterator, Sequence

DEFAULT_WEIGHT = 1


class InvalidGraphError(ValueError):
    """Raised when a graph description references vertices outside [0, n)."""


def normalize_weight(w: int | None) -> int:
    """Map an unspecified (None or 0) weight to DEFAULT_WEIGHT."""
    if w is None or w == 0:
        return DEFAULT_WEIGHT
    return int(w)


def _is_vertex_id(x: object) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)


class Graph:
    """Immutable directed graph with weighted adjacency lists.

    Build it from a vertex count and an edge list; edges may be given as
    (u, v) or (u, v, w) tuples.
    """

    __slots__ = ("_n", "_adj", "_in_deg", "_edge_count")

    def __init__(self, n: int, edges: Iterable[Sequence[int]] = ()) -> None:
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise InvalidGraphError(f"Vertex count must be a non-negative int, got {n!r}")
        adj: list[list[tuple[int, int]]] = [[] for _ in range(n)]
        in_deg = [0] * n
        count = 0
        for idx, edge in enumerate(edges):
            if len(edge) == 2:
                u, v = edge
                w = None
            elif len(edge) == 3:
                u, v, w = edge
            else:
                raise InvalidGraphError(
                    f"Edge #{idx} must be (u, v) or (u, v, w), got {edge!r}"
                )
            if not (_is_vertex_id(u) and _is_vertex_id(v)):
                raise InvalidGraphError(
                    f"Edge #{idx} endpoints must be ints, got {u!r} -> {v!r}"
                )
            if not (0 <= u < n and 0 <= v < n):
                raise InvalidGraphError(
                    f"Edge #{idx} ({u} -> {v}) references a vertex outside [0, {n})"
                )
            adj[u].append((v, normalize_weight(w)))
            in_deg[v] += 1
            count += 1
        self._n = n
        self._adj: tuple[tuple[tuple[int, int], ...], ...] = tuple(
            tuple(out) for out in adj
        )
        self._in_deg: tuple[int, ...] = tuple(in_deg)
        self._edge_count = count

    @classmethod
    def from_adjacency(cls, adj: Sequence[Sequence[int]]) -> Graph:
        """Build an unweighted graph from adj[v] = [successors of v]."""
        return cls(len(adj), ((u, v) for u, succs in enumerate(adj) for v in succs))

    # ---- queries ---------------------------------------------------------

    def successors(self, node: int) -> list[int]:
        """Direct successors in adjacency order (duplicates kept)."""
        return [v for v, _ in self._adj[node]]

    def weighted(self, node: int) -> tuple[tuple[int, int], ...]:
        """Outgoing (destination, weight) pairs in adjacency order."""
        return self._adj[node]

    def has_edge(self, src: int, dst: int) -> bool:
        if not 0 <= src < self._n:
            return False
        return any(v == dst for v, _ in self._adj[src])

    def in_degree(self, node: int) -> int:
        return self._in_deg[node]

    def nodes(self) -> Iterator[int]:
        return iter(range(self._n))

    def edges(self) -> Iterator[tuple[int, int, int]]:
        """All edges as (u, v, w), grouped by source in ascending order."""
        for u, out in enumerate(self._adj):
            for v, w in out:
                yield u, v, w

    @property
    def node_count(self) -> int:
        return self._n

    @property
    def edge_count(self) -> int:
        return self._edge_count

    # ---- dunder ----------------------------------------------------------

    def __len__(self) -> int:
        return self._n

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented
        return self._n == other._n and self._adj == other._adj

    def __hash__(self) -> int:
        return hash((self._n, self._adj))

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count}, edges={self.edge_count})"
