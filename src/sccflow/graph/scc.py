"""Strongly connected components via Tarjan's algorithm.

Tarjan's algorithm finds every SCC in a single depth-first pass.  Each
vertex gets a discovery index and a low-link: the smallest discovery
index reachable from its DFS subtree through at most one back edge to
a vertex still on the membership stack.  When a vertex finishes with
low-link == its own index, it is the root of an SCC, and everything
above it on the membership stack (inclusive) is popped as one
component.

The textbook version is recursive.  A chain of 100k vertices would
blow through Python's recursion limit long before that, so the DFS
here keeps its own frame stack: each frame is [vertex, cursor] where
cursor is the position in the vertex's adjacency list.  Advancing the
cursor and pushing a child frame is the "recursive call"; popping a
frame and folding its low-link into the parent is the "return".

Ordering rules (these make the output reproducible):
  - roots are picked in ascending vertex id
  - successors are explored in adjacency-list order
  - component ids are assigned in completion order, which is a reverse
    topological order of the condensation
  - members of a component are listed in the order they leave the stack
"""
from __future__ import annotations

from typing import Sequence

from sccflow.graph.adjacency import Graph, InvalidGraphError
from sccflow.graph.metrics import StageMetrics

UNVISITED = -1


def tarjan_scc(graph: Graph, metrics: StageMetrics | None = None) -> list[list[int]]:
    """Partition the vertices of *graph* into strongly connected components.

    Returns a list of components; a component's id is its position in
    the list.  *metrics* (if given) is timed around the whole run and
    its dfs_ops counter is bumped once per discovered vertex.
    """
    m = metrics if metrics is not None else StageMetrics()
    n = graph.node_count
    index = [UNVISITED] * n
    low = [0] * n
    on_stack = [False] * n
    members: list[int] = []
    comps: list[list[int]] = []
    counter = 0

    with m.timed():
        for root in range(n):
            if index[root] != UNVISITED:
                continue

            index[root] = low[root] = counter
            counter += 1
            members.append(root)
            on_stack[root] = True
            m.inc_dfs()
            frames: list[list[int]] = [[root, 0]]

            while frames:
                frame = frames[-1]
                v = frame[0]
                out = graph.weighted(v)
                if frame[1] < len(out):
                    to = out[frame[1]][0]
                    frame[1] += 1
                    if index[to] == UNVISITED:
                        index[to] = low[to] = counter
                        counter += 1
                        members.append(to)
                        on_stack[to] = True
                        m.inc_dfs()
                        frames.append([to, 0])
                    elif on_stack[to] and index[to] < low[v]:
                        low[v] = index[to]
                    continue

                # all successors of v explored: "return" from v
                frames.pop()
                if low[v] == index[v]:
                    comp: list[int] = []
                    while True:
                        x = members.pop()
                        on_stack[x] = False
                        comp.append(x)
                        if x == v:
                            break
                    comps.append(comp)
                if frames:
                    parent = frames[-1][0]
                    if low[v] < low[parent]:
                        low[parent] = low[v]
    return comps


def component_index(components: Sequence[Sequence[int]], n: int) -> list[int]:
    """Map each vertex to the id of the component containing it.

    Raises InvalidGraphError if *components* is not a partition of
    [0, n): a vertex missing, listed twice, or out of range.
    """
    comp_of = [UNVISITED] * n
    for cid, comp in enumerate(components):
        for v in comp:
            if not 0 <= v < n:
                raise InvalidGraphError(
                    f"Component {cid} contains vertex {v} outside [0, {n})"
                )
            if comp_of[v] != UNVISITED:
                raise InvalidGraphError(
                    f"Vertex {v} appears in components {comp_of[v]} and {cid}"
                )
            comp_of[v] = cid
    missing = [v for v in range(n) if comp_of[v] == UNVISITED]
    if missing:
        raise InvalidGraphError(
            f"{len(missing)} vertex(es) not assigned to any component, "
            f"first is {missing[0]}"
        )
    return comp_of


def expand_order(order: Sequence[int], components: Sequence[Sequence[int]]) -> list[int]:
    """Expand a component order into an order over original vertices.

    Each component contributes its members (in member order) at the
    position the component holds in *order*.
    """
    result: list[int] = []
    for cid in order:
        result.extend(components[cid])
    return result
