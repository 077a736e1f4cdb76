"""Generate random directed graphs with a controllable amount of cyclic structure.

Graph shape:
  - a hidden random permutation of the n vertices acts as a "true"
    topological order; every base edge points forward in it, so the
    base graph is a DAG
  - each pair (i, j) with i before j gets an edge with probability
    edge_prob, capped at max_out_degree edges per vertex
  - num_cycles planted cycles of 2..max_cycle_len vertices are added on
    top, each closing a loop and therefore merging its vertices into
    one SCC
  - self_loops vertices get a u -> u edge (still singleton SCCs)
  - weights are uniform in [1, max_weight]

Datasets from the same seed are identical, which the batch tests rely
on to compare runs.
"""
from __future__ import annotations

import math
import random
import sys

from sccflow.dataset import Dataset
from sccflow.graph.adjacency import Graph

# (label, n range, edge probability) for the standard benchmark suite
_SUITE = [
    ("small", (6, 10), 0.25),
    ("medium", (10, 20), 0.15),
    ("large", (20, 50), 0.08),
]


class LoadGenerator:
    """Seeded generator of Dataset objects for benchmarks and tests."""

    __slots__ = ("_rng", "_max_weight", "_max_out_degree", "_weight_model")

    def __init__(
        self,
        seed: int = 42,
        max_weight: int = 10,
        max_out_degree: int = 4,
        weight_model: str = "edge",
    ) -> None:
        if max_weight < 1:
            raise ValueError("max_weight must be >= 1")
        self._rng = random.Random(seed)
        self._max_weight = max_weight
        self._max_out_degree = max_out_degree
        self._weight_model = weight_model

    def _weight(self) -> int:
        return self._rng.randint(1, self._max_weight)

    def _next_index(self, j: int, p: float) -> int:
        """Index of the next success after *j* in a run of Bernoulli(p) trials.

        Geometric skip, so sparse graphs cost O(edges) rather than O(n^2).
        """
        if p >= 1.0:
            return j + 1
        if p <= 0.0:
            return sys.maxsize
        u = 1.0 - self._rng.random()  # (0, 1]
        return j + 1 + int(math.log(u) / math.log(1.0 - p))

    def generate(
        self,
        n: int,
        edge_prob: float = 0.2,
        num_cycles: int = 0,
        max_cycle_len: int = 4,
        self_loops: int = 0,
        name: str = "generated.json",
    ) -> Dataset:
        """Build one dataset with *n* vertices."""
        rng = self._rng
        perm = list(range(n))
        rng.shuffle(perm)

        edges: list[tuple[int, int, int]] = []
        for i in range(n):
            out = 0
            j = self._next_index(i, edge_prob)
            while j < n and out < self._max_out_degree:
                edges.append((perm[i], perm[j], self._weight()))
                out += 1
                j = self._next_index(j, edge_prob)

        if n >= 2:
            for _ in range(num_cycles):
                size = rng.randint(2, min(max_cycle_len, n))
                ring = rng.sample(range(n), size)
                for a, b in zip(ring, ring[1:] + ring[:1]):
                    edges.append((a, b, self._weight()))

        for v in rng.sample(range(n), min(self_loops, n)):
            edges.append((v, v, self._weight()))

        source = rng.randrange(n) if n > 0 else None
        return Dataset(
            name=name,
            graph=Graph(n, edges),
            source=source,
            weight_model=self._weight_model,
        )

    def standard_suite(self, per_size: int = 3) -> list[Dataset]:
        """small/medium/large datasets, mixing pure DAGs and cyclic graphs."""
        datasets: list[Dataset] = []
        for label, (lo, hi), prob in _SUITE:
            for k in range(per_size):
                n = self._rng.randint(lo, hi)
                # first of each size is a pure DAG, the rest carry cycles
                cycles = 0 if k == 0 else self._rng.randint(1, 1 + n // 8)
                datasets.append(self.generate(
                    n,
                    edge_prob=prob,
                    num_cycles=cycles,
                    self_loops=k % 2,
                    name=f"{label}{k + 1}.json",
                ))
        return datasets
