"""Topological sort via Kahn's algorithm (BFS with in-degree tracking).

The pipeline only ever sorts condensation graphs, which are acyclic by
construction.  If Kahn's algorithm nevertheless comes up short, the
SCC or condensation stage broke its contract.  That is reported as a
CyclicDependencyError, a PipelineInvariantError, so callers can tell a
bug in the core apart from bad input (InvalidGraphError).

The algorithm:
  1.  Compute in-degree for every node.
  2.  Seed a FIFO queue with all in-degree-0 nodes in ascending id.
  3.  Pop a node, append it to the result, decrement in-degree of its
      successors in adjacency order.  Any successor whose in-degree
      drops to 0 joins the back of the queue.
  4.  If the result contains all nodes, the graph is a DAG.
      Otherwise there is at least one cycle.

Tie-break: among nodes eligible at the same time, whichever became
eligible first goes first; seeds are ordered by id.  Downstream
snapshots depend on this exact order, so keep the queue a plain FIFO.
"""
from __future__ import annotations

from collections import deque

from sccflow.graph.adjacency import Graph
from sccflow.graph.metrics import StageMetrics


class PipelineInvariantError(RuntimeError):
    """An internal consistency check of the pipeline failed."""


class CyclicDependencyError(PipelineInvariantError):
    """Raised when topological sort encounters a cycle."""

    def __init__(self, remaining_nodes: list[int]) -> None:
        self.remaining_nodes = remaining_nodes
        super().__init__(
            f"Cycle detected: {len(remaining_nodes)} node(s) could not be "
            f"ordered; the input graph was expected to be acyclic"
        )


def topological_sort(graph: Graph, metrics: StageMetrics | None = None) -> list[int]:
    """Return nodes in an order where every edge points forward.

    *metrics* counts each enqueue (seeding included) and each dequeue
    in topo_ops.  Raises CyclicDependencyError if the graph has a cycle.
    """
    m = metrics if metrics is not None else StageMetrics()
    with m.timed():
        in_deg = [graph.in_degree(v) for v in graph.nodes()]

        q: deque[int] = deque()
        for node, deg in enumerate(in_deg):
            if deg == 0:
                q.append(node)
                m.inc_topo()

        result: list[int] = []
        while q:
            node = q.popleft()
            m.inc_topo()
            result.append(node)
            for succ in graph.successors(node):
                in_deg[succ] -= 1
                if in_deg[succ] == 0:
                    q.append(succ)
                    m.inc_topo()

    if len(result) != graph.node_count:
        placed = set(result)
        remaining = [n for n in graph.nodes() if n not in placed]
        raise CyclicDependencyError(remaining)

    return result
