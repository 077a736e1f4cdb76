"""Tests for DAG shortest/longest paths and critical path reconstruction."""
from __future__ import annotations

import pytest

from sccflow.graph.adjacency import Graph, InvalidGraphError
from sccflow.graph.condensation import condense_weighted
from sccflow.graph.dag_paths import (
    INF,
    NEG_INF,
    NO_PARENT,
    LongestPaths,
    critical_target,
    longest_from,
    path_weight,
    rebuild_path,
    shortest_from,
)
from sccflow.graph.metrics import StageMetrics
from sccflow.graph.scc import component_index, tarjan_scc
from sccflow.graph.topological import topological_sort


def _solve(g: Graph, source: int = 0):
    order = topological_sort(g)
    return order, shortest_from(source, order, g), longest_from(source, order, g)


class TestShortestFrom:
    def test_linear(self, linear_graph: Graph) -> None:
        _, short, _ = _solve(linear_graph)
        assert short.dist == (0, 1, 4, 6)
        assert short.source == 0

    def test_diamond_takes_cheaper_branch(self, diamond_graph: Graph) -> None:
        _, short, _ = _solve(diamond_graph)
        assert short.dist == (0, 1, 5, 2)

    def test_unreachable_keeps_sentinel(self, linear_graph: Graph) -> None:
        _, short, _ = _solve(linear_graph, source=2)
        assert short.dist == (INF, INF, 0, 2)
        assert not short.reachable(0)
        assert short.reachable(3)

    def test_negative_weights(self) -> None:
        g = Graph(3, [(0, 1, 5), (0, 2, 2), (2, 1, -4)])
        _, short, _ = _solve(g)
        assert short.dist == (0, -2, 2)

    def test_source_out_of_range(self, linear_graph: Graph) -> None:
        order = topological_sort(linear_graph)
        with pytest.raises(InvalidGraphError, match="Source node 4"):
            shortest_from(4, order, linear_graph)

    def test_relax_ops(self, diamond_graph: Graph) -> None:
        m = StageMetrics()
        order = topological_sort(diamond_graph)
        shortest_from(0, order, diamond_graph, m)
        # 0->1, 0->2, 1->3 improve; 2->3 (6) does not beat 2
        assert m.relax_ops == 3

    def test_upper_bound_property(self, generated_suite) -> None:
        """dist[b] <= dist[a] + w for every edge out of a reachable node."""
        for ds in generated_suite:
            comps = tarjan_scc(ds.graph)
            dag = condense_weighted(ds.graph, comps)
            order = topological_sort(dag)
            src = component_index(comps, ds.graph.node_count)[ds.source]
            short = shortest_from(src, order, dag)
            for a, b, w in dag.edges():
                if short.reachable(a):
                    assert short.dist[b] <= short.dist[a] + w, ds.name
            # every reachable non-source node is tight on some incoming edge
            for node in range(dag.node_count):
                if node == src or not short.reachable(node):
                    continue
                assert any(
                    short.reachable(a) and short.dist[a] + w == short.dist[node]
                    for a, b, w in dag.edges() if b == node
                ), ds.name


class TestLongestFrom:
    def test_linear(self, linear_graph: Graph) -> None:
        _, _, long = _solve(linear_graph)
        assert long.dist == (0, 1, 4, 6)
        assert long.parent == (NO_PARENT, 0, 1, 2)

    def test_diamond_takes_heavier_branch(self, diamond_graph: Graph) -> None:
        _, _, long = _solve(diamond_graph)
        assert long.dist == (0, 1, 5, 6)
        assert long.parent[3] == 2

    def test_source_has_no_parent(self, diamond_graph: Graph) -> None:
        _, _, long = _solve(diamond_graph)
        assert long.parent[0] == NO_PARENT

    def test_tie_keeps_first_predecessor(self) -> None:
        g = Graph(4, [(0, 1, 2), (0, 2, 2), (1, 3, 1), (2, 3, 1)])
        _, _, long = _solve(g)
        assert long.dist[3] == 3
        assert long.parent[3] == 1

    def test_unreachable_keeps_sentinel(self) -> None:
        g = Graph(3, [(1, 2, 4)])
        _, _, long = _solve(g)
        assert long.dist == (0, NEG_INF, NEG_INF)
        assert long.parent == (NO_PARENT, NO_PARENT, NO_PARENT)
        assert not long.reachable(2)

    def test_relax_ops(self, diamond_graph: Graph) -> None:
        m = StageMetrics()
        order = topological_sort(diamond_graph)
        longest_from(0, order, diamond_graph, m)
        # 0->1, 0->2, 1->3 (2), 2->3 (6)
        assert m.relax_ops == 4

    def test_lower_bound_property(self, generated_suite) -> None:
        """dist[b] >= dist[a] + w whenever a is reachable."""
        for ds in generated_suite:
            comps = tarjan_scc(ds.graph)
            dag = condense_weighted(ds.graph, comps)
            order = topological_sort(dag)
            src = component_index(comps, ds.graph.node_count)[ds.source]
            long = longest_from(src, order, dag)
            for a, b, w in dag.edges():
                if long.reachable(a):
                    assert long.dist[b] >= long.dist[a] + w, ds.name


class TestRebuildPath:
    def test_linear(self, linear_graph: Graph) -> None:
        _, _, long = _solve(linear_graph)
        assert rebuild_path(3, long) == [0, 1, 2, 3]

    def test_source_only(self, linear_graph: Graph) -> None:
        _, _, long = _solve(linear_graph)
        assert rebuild_path(0, long) == [0]

    def test_unreachable_target(self) -> None:
        g = Graph(3, [(1, 2, 4)])
        _, _, long = _solve(g)
        assert rebuild_path(2, long) == [2]

    def test_path_weight_matches_distance(self, generated_suite) -> None:
        for ds in generated_suite:
            comps = tarjan_scc(ds.graph)
            dag = condense_weighted(ds.graph, comps)
            order = topological_sort(dag)
            src = component_index(comps, ds.graph.node_count)[ds.source]
            long = longest_from(src, order, dag)
            for node in range(dag.node_count):
                if not long.reachable(node):
                    continue
                path = rebuild_path(node, long)
                assert path[0] == src, ds.name
                assert path_weight(dag, path) == long.dist[node], ds.name


class TestCriticalTarget:
    def test_picks_maximum(self, diamond_graph: Graph) -> None:
        _, _, long = _solve(diamond_graph)
        assert critical_target(long) == 3

    def test_tie_goes_to_lowest_id(self) -> None:
        g = Graph(3, [(0, 1, 3), (0, 2, 3)])
        _, _, long = _solve(g)
        assert critical_target(long) == 1

    def test_ignores_unreachable(self) -> None:
        g = Graph(3, [(1, 2, 100)])
        _, _, long = _solve(g)
        assert critical_target(long) == 0

    def test_nothing_to_pick(self) -> None:
        empty = LongestPaths(source=NO_PARENT, dist=(), parent=())
        assert critical_target(empty) is None


class TestPathWeight:
    def test_sum(self, linear_graph: Graph) -> None:
        assert path_weight(linear_graph, [0, 1, 2, 3]) == 6

    def test_single_node(self, linear_graph: Graph) -> None:
        assert path_weight(linear_graph, [2]) == 0

    def test_parallel_edges_use_minimum(self) -> None:
        g = Graph(2, [(0, 1, 5), (0, 1, 2)])
        assert path_weight(g, [0, 1]) == 2

    def test_missing_edge(self, linear_graph: Graph) -> None:
        with pytest.raises(InvalidGraphError, match="No edge 0 -> 2"):
            path_weight(linear_graph, [0, 2])
