"""Shared fixtures for the sccflow tests."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from sccflow.graph.adjacency import Graph
from sccflow.profiling.load_generator import LoadGenerator

SEED = 42


@pytest.fixture
def empty_graph() -> Graph:
    return Graph(0)


@pytest.fixture
def cycle_tail_graph() -> Graph:
    """
    0 -> 1 -> 2 -> 0   (one SCC)
    2 -(2)-> 3 -(1)-> 4
    """
    return Graph(5, [(0, 1, 1), (1, 2, 1), (2, 0, 1), (2, 3, 2), (3, 4, 1)])


@pytest.fixture
def linear_graph() -> Graph:
    """0 -> 1 -> 2 -> 3, weights 1, 3, 2"""
    return Graph(4, [(0, 1, 1), (1, 2, 3), (2, 3, 2)])


@pytest.fixture
def diamond_graph() -> Graph:
    """
    0 -(1)-> 1 -(1)-> 3
    0 -(5)-> 2 -(1)-> 3
    """
    return Graph(4, [(0, 1, 1), (0, 2, 5), (1, 3, 1), (2, 3, 1)])


@pytest.fixture
def wide_dag() -> Graph:
    """Root 0 with 10 children, each with 2 grandchildren (all leaves)."""
    edges = []
    nxt = 11
    for i in range(1, 11):
        edges.append((0, i, i))
        for _ in range(2):
            edges.append((i, nxt, 1))
            nxt += 1
    return Graph(nxt, edges)


@pytest.fixture
def generated_suite():
    return LoadGenerator(seed=SEED).standard_suite()


@pytest.fixture
def dataset_dir(tmp_path: Path) -> Path:
    """A directory holding two small datasets and a stale output.json."""
    (tmp_path / "a_cycle.json").write_text(json.dumps({
        "directed": True,
        "n": 5,
        "edges": [
            {"u": 0, "v": 1, "w": 1}, {"u": 1, "v": 2, "w": 1},
            {"u": 2, "v": 0, "w": 1}, {"u": 2, "v": 3, "w": 2},
            {"u": 3, "v": 4, "w": 1},
        ],
        "source": 0,
        "weight_model": "edge",
    }))
    (tmp_path / "b_chain.json").write_text(json.dumps({
        "n": 3,
        "edges": [{"u": 0, "v": 1, "w": 0}, {"u": 1, "v": 2}],
    }))
    (tmp_path / "output.json").write_text(json.dumps({"results": []}))
    return tmp_path
