"""Single-source shortest and longest paths on a weighted DAG.

Both solvers are the same dynamic program: walk nodes in topological
order, and for each reachable node relax its outgoing edges.  Because
every predecessor of a node comes earlier in the order, a node's
distance is final by the time it is used as a relaxation source.  That
gives O(V + E) with negative weights allowed, no heap needed.

Unreachable nodes keep a sentinel distance rather than float('inf'),
so distance arrays stay integer-valued:

  INF      -- shortest: not reachable from the source
  NEG_INF  -- longest: not reachable from the source

Python integers do not overflow, so sentinel arithmetic cannot wrap,
but callers must still compare against the sentinels before treating a
distance as a real path length.

The longest-path solver also records, for each improved node, the
predecessor that produced the improvement.  Comparison is strict (>),
so on ties the first predecessor found in topological order wins and
path reconstruction is deterministic.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from sccflow.graph.adjacency import Graph, InvalidGraphError
from sccflow.graph.metrics import StageMetrics

INF = 2**62
NEG_INF = -INF
NO_PARENT = -1


@dataclass(frozen=True, slots=True)
class ShortestPaths:
    """Minimum distance from *source* to every node (INF if unreachable)."""
    source: int
    dist: tuple[int, ...]

    def reachable(self, node: int) -> bool:
        return self.dist[node] != INF


@dataclass(frozen=True, slots=True)
class LongestPaths:
    """Maximum distance from *source* plus the parent pointers behind it."""
    source: int
    dist: tuple[int, ...]
    parent: tuple[int, ...]

    def reachable(self, node: int) -> bool:
        return self.dist[node] != NEG_INF


def _check_source(source: int, graph: Graph) -> None:
    if not 0 <= source < graph.node_count:
        raise InvalidGraphError(
            f"Source node {source} outside [0, {graph.node_count})"
        )


def shortest_from(
    source: int,
    order: Sequence[int],
    graph: Graph,
    metrics: StageMetrics | None = None,
) -> ShortestPaths:
    """Shortest distance from *source* along edges of the DAG *graph*.

    *order* must be a topological order of *graph*.
    """
    _check_source(source, graph)
    m = metrics if metrics is not None else StageMetrics()
    dist = [INF] * graph.node_count
    dist[source] = 0

    with m.timed():
        for v in order:
            if dist[v] == INF:
                continue
            for to, w in graph.weighted(v):
                nd = dist[v] + w
                if nd < dist[to]:
                    dist[to] = nd
                    m.inc_relax()
    return ShortestPaths(source=source, dist=tuple(dist))


def longest_from(
    source: int,
    order: Sequence[int],
    graph: Graph,
    metrics: StageMetrics | None = None,
) -> LongestPaths:
    """Longest (critical) distance from *source* in the DAG *graph*.

    *order* must be a topological order of *graph*.
    """
    _check_source(source, graph)
    m = metrics if metrics is not None else StageMetrics()
    dist = [NEG_INF] * graph.node_count
    parent = [NO_PARENT] * graph.node_count
    dist[source] = 0

    with m.timed():
        for v in order:
            if dist[v] == NEG_INF:
                continue
            for to, w in graph.weighted(v):
                nd = dist[v] + w
                if nd > dist[to]:
                    dist[to] = nd
                    parent[to] = v
                    m.inc_relax()
    return LongestPaths(source=source, dist=tuple(dist), parent=tuple(parent))


def rebuild_path(target: int, result: LongestPaths) -> list[int]:
    """Walk parent pointers back from *target* and return source..target.

    If *target* is unreachable the result is just [target]; check
    result.reachable(target) before trusting it.
    """
    path = [target]
    cur = target
    while result.parent[cur] != NO_PARENT:
        cur = result.parent[cur]
        path.append(cur)
    path.reverse()
    return path


def critical_target(result: LongestPaths) -> int | None:
    """Node with the largest finite longest-distance.

    Ties go to the lowest node id.  Returns None when no node is
    reachable (only possible for an empty graph).
    """
    best = NEG_INF
    target: int | None = None
    for node, d in enumerate(result.dist):
        if d > best:
            best = d
            target = node
    return target


def path_weight(graph: Graph, path: Sequence[int]) -> int:
    """Sum of edge weights along consecutive pairs of *path*.

    Where parallel edges exist the cheapest is used.  Raises
    InvalidGraphError if two consecutive nodes are not adjacent.
    """
    total = 0
    for a, b in zip(path, path[1:]):
        weights = [w for to, w in graph.weighted(a) if to == b]
        if not weights:
            raise InvalidGraphError(f"No edge {a} -> {b} on path {path!r}")
        total += min(weights)
    return total
