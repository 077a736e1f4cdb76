"""End-to-end analysis: SCC -> condensation -> topological order -> DAG paths.

analyze() chains the four algorithms over one graph and keeps every
intermediate result plus one StageMetrics per stage.  A PipelineRun is
built once and treated as read-only; nothing in it is shared with any
other run, so runs over different datasets can go to a thread or
process pool without locking.

The source vertex is given in original vertex ids and mapped to the
component containing it; all distances, the order and the critical path
are in component ids.  Use vertex_order (or expand_order) to get back to
original vertices.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sccflow.graph.adjacency import Graph, InvalidGraphError
from sccflow.graph.condensation import condense, condense_weighted
from sccflow.graph.dag_paths import (
    NO_PARENT,
    LongestPaths,
    ShortestPaths,
    critical_target,
    longest_from,
    rebuild_path,
    shortest_from,
)
from sccflow.graph.metrics import StageMetrics
from sccflow.graph.scc import component_index, expand_order, tarjan_scc
from sccflow.graph.topological import PipelineInvariantError, topological_sort

log = logging.getLogger(__name__)

# Column order of a persisted run record.  Downstream tooling reads
# these by position, so append new fields only at the end.
RECORD_FIELDS = (
    "vertices",
    "edges",
    "scc_count",
    "scc_time",
    "scc_visits",
    "topo_time",
    "topo_ops",
    "shortest_time",
    "shortest_relax_ops",
    "longest_time",
    "longest_relax_ops",
    "longest_max",
)


@dataclass(frozen=True, slots=True)
class SCCRun:
    """Result of the SCC-only mode."""
    graph: Graph
    components: tuple[tuple[int, ...], ...]
    metrics: StageMetrics

    @property
    def scc_count(self) -> int:
        return len(self.components)


@dataclass(frozen=True, slots=True)
class PipelineRun:
    """Everything one pass of the pipeline produced."""
    graph: Graph
    components: tuple[tuple[int, ...], ...]
    component_of: tuple[int, ...]
    condensed: Graph
    order: tuple[int, ...]
    source: int | None
    source_component: int | None
    shortest: ShortestPaths
    longest: LongestPaths
    critical_path: tuple[int, ...]
    critical_length: int | None
    scc_metrics: StageMetrics
    topo_metrics: StageMetrics
    shortest_metrics: StageMetrics
    longest_metrics: StageMetrics

    @property
    def scc_count(self) -> int:
        return len(self.components)

    @property
    def vertex_order(self) -> list[int]:
        """Original vertices, component by component, in topological order."""
        return expand_order(self.order, self.components)

    @property
    def longest_max(self) -> int:
        """Largest finite longest-path distance, 0 if nothing is reachable."""
        return self.critical_length if self.critical_length is not None else 0

    def record(self) -> dict[str, int | float]:
        """Flat metrics record keyed (and ordered) by RECORD_FIELDS."""
        values = (
            self.graph.node_count,
            self.graph.edge_count,
            self.scc_count,
            self.scc_metrics.elapsed_ms,
            self.scc_metrics.dfs_ops,
            self.topo_metrics.elapsed_ms,
            self.topo_metrics.topo_ops,
            self.shortest_metrics.elapsed_ms,
            self.shortest_metrics.relax_ops,
            self.longest_metrics.elapsed_ms,
            self.longest_metrics.relax_ops,
            self.longest_max,
        )
        return dict(zip(RECORD_FIELDS, values))


def analyze_scc(graph: Graph) -> SCCRun:
    """Run only the SCC stage."""
    metrics = StageMetrics()
    components = tuple(tuple(c) for c in tarjan_scc(graph, metrics))
    log.debug("SCC: %d component(s) from %r, %r", len(components), graph, metrics)
    return SCCRun(graph=graph, components=components, metrics=metrics)


def analyze(graph: Graph, source: int | None = None) -> PipelineRun:
    """Run the full pipeline on *graph* from original vertex *source*.

    An absent *source* means vertex 0.  An explicit *source* must be a
    vertex of the graph or InvalidGraphError is raised before any stage
    runs; only an empty graph with no source given yields empty results
    without error.  A PipelineInvariantError from any stage is
    propagated unchanged.
    """
    n = graph.node_count
    if source is not None and not 0 <= source < n:
        raise InvalidGraphError(f"Source vertex {source} outside [0, {n})")
    if source is None and n > 0:
        source = 0

    scc_run = analyze_scc(graph)
    components = scc_run.components
    comp_of = tuple(component_index(components, n))

    dag = condense(graph, components)
    dag_w = condense_weighted(graph, components)
    log.debug("Condensed to %r", dag_w)

    topo_m = StageMetrics()
    order = tuple(topological_sort(dag, topo_m))
    log.debug("Topological order over %d node(s), %r", len(order), topo_m)

    short_m = StageMetrics()
    long_m = StageMetrics()
    if n == 0:
        return PipelineRun(
            graph=graph,
            components=components,
            component_of=comp_of,
            condensed=dag_w,
            order=order,
            source=None,
            source_component=None,
            shortest=ShortestPaths(source=NO_PARENT, dist=()),
            longest=LongestPaths(source=NO_PARENT, dist=(), parent=()),
            critical_path=(),
            critical_length=None,
            scc_metrics=scc_run.metrics,
            topo_metrics=topo_m,
            shortest_metrics=short_m,
            longest_metrics=long_m,
        )

    src_comp = comp_of[source]
    shortest = shortest_from(src_comp, order, dag_w, short_m)
    longest = longest_from(src_comp, order, dag_w, long_m)
    log.debug("DAG paths from component %d: shortest %r, longest %r",
              src_comp, short_m, long_m)

    target = critical_target(longest)
    if target is None:
        raise PipelineInvariantError(
            f"Source component {src_comp} has no finite longest distance"
        )
    path = tuple(rebuild_path(target, longest))

    return PipelineRun(
        graph=graph,
        components=components,
        component_of=comp_of,
        condensed=dag_w,
        order=order,
        source=source,
        source_component=src_comp,
        shortest=shortest,
        longest=longest,
        critical_path=path,
        critical_length=longest.dist[target],
        scc_metrics=scc_run.metrics,
        topo_metrics=topo_m,
        shortest_metrics=short_m,
        longest_metrics=long_m,
    )
