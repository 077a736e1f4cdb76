"""Graph algorithms: SCC, condensation, topological order, DAG paths."""

from sccflow.graph.adjacency import Graph, InvalidGraphError
from sccflow.graph.condensation import condense, condense_weighted
from sccflow.graph.dag_paths import (
    INF,
    NEG_INF,
    NO_PARENT,
    LongestPaths,
    ShortestPaths,
    critical_target,
    longest_from,
    path_weight,
    rebuild_path,
    shortest_from,
)
from sccflow.graph.metrics import StageMetrics
from sccflow.graph.pipeline import (
    RECORD_FIELDS,
    PipelineRun,
    SCCRun,
    analyze,
    analyze_scc,
)
from sccflow.graph.scc import component_index, expand_order, tarjan_scc
from sccflow.graph.topological import (
    CyclicDependencyError,
    PipelineInvariantError,
    topological_sort,
)

__all__ = [
    "CyclicDependencyError",
    "Graph",
    "INF",
    "InvalidGraphError",
    "LongestPaths",
    "NEG_INF",
    "NO_PARENT",
    "PipelineInvariantError",
    "PipelineRun",
    "RECORD_FIELDS",
    "SCCRun",
    "ShortestPaths",
    "StageMetrics",
    "analyze",
    "analyze_scc",
    "component_index",
    "condense",
    "condense_weighted",
    "critical_target",
    "expand_order",
    "longest_from",
    "path_weight",
    "rebuild_path",
    "shortest_from",
    "tarjan_scc",
    "topological_sort",
]
