"""Per-stage timing and operation counters.

Every algorithm in this package takes an optional StageMetrics and
bumps the counter that matters for it:

  dfs_ops    -- vertex discoveries in Tarjan's DFS
  topo_ops   -- queue pushes and pops in Kahn's algorithm
  relax_ops  -- successful relaxations in the DAG path solvers

The recorder is passed in explicitly rather than living in a module
global, so two pipeline runs on different threads never share counters.
A fresh instance is created for each stage of each run.
"""
from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator


@dataclass(slots=True)
class StageMetrics:
    """Elapsed time and operation counts for one stage invocation."""
    elapsed_ns: int = 0
    dfs_ops: int = 0
    topo_ops: int = 0
    relax_ops: int = 0
    _started_ns: int | None = None

    def start(self) -> None:
        self._started_ns = time.perf_counter_ns()

    def stop(self) -> None:
        if self._started_ns is None:
            raise RuntimeError("stop() called before start()")
        self.elapsed_ns = time.perf_counter_ns() - self._started_ns
        self._started_ns = None

    @contextmanager
    def timed(self) -> Iterator[StageMetrics]:
        """Bracket a block with start()/stop()."""
        self.start()
        try:
            yield self
        finally:
            self.stop()

    def inc_dfs(self) -> None:
        self.dfs_ops += 1

    def inc_topo(self) -> None:
        self.topo_ops += 1

    def inc_relax(self) -> None:
        self.relax_ops += 1

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed_ns / 1_000_000

    def __repr__(self) -> str:
        return (
            f"StageMetrics(time_ms={self.elapsed_ms:.3f}, dfs_ops={self.dfs_ops}, "
            f"topo_ops={self.topo_ops}, relax_ops={self.relax_ops})"
        )
