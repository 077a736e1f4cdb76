"""Report generation for pipeline runs and batch results.

Text reports for the three CLI modes (scc, topo, dagsp), a fixed-width
table for batch rows, and CSV/JSON writers.  Persisted column order is
file, then RECORD_FIELDS in order, then weight_model; tooling that reads
metrics.csv depends on it.
"""
from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Sequence

from sccflow.graph.dag_paths import INF, NEG_INF
from sccflow.graph.pipeline import RECORD_FIELDS, PipelineRun, SCCRun
from sccflow.profiling.harness import BatchRow

CSV_FIELDS = ("file",) + RECORD_FIELDS + ("weight_model",)


def _fmt_dist(d: int) -> str:
    if d == INF:
        return "INF"
    if d == NEG_INF:
        return "-INF"
    return str(d)


def format_scc(run: SCCRun) -> str:
    lines = [f"SCC count = {run.scc_count}"]
    for cid, comp in enumerate(run.components):
        lines.append(f"{cid}: {list(comp)}")
    lines.append(f"Time: {run.metrics.elapsed_ms:.3f} ms, DFS visits: {run.metrics.dfs_ops}")
    return "\n".join(lines)


def format_topo(run: PipelineRun) -> str:
    return "\n".join([
        f"Topo (components): {list(run.order)}",
        f"Derived tasks: {run.vertex_order}",
        f"Time: {run.topo_metrics.elapsed_ms:.3f} ms, queue ops: {run.topo_metrics.topo_ops}",
    ])


def format_dagsp(run: PipelineRun) -> str:
    if run.source_component is None:
        return "Empty graph: no distances"
    lines = [
        f"Source vertex {run.source} -> component {run.source_component}",
        "Shortest distances: [" + ", ".join(_fmt_dist(d) for d in run.shortest.dist) + "]",
        "Longest distances: [" + ", ".join(_fmt_dist(d) for d in run.longest.dist) + "]",
        f"Critical path (components): {list(run.critical_path)}",
        f"Critical length: {run.critical_length}",
    ]
    return "\n".join(lines)


def row_dict(row: BatchRow) -> dict[str, object]:
    """Flatten a BatchRow into CSV_FIELDS order (weight_model omitted if unset)."""
    out: dict[str, object] = {"file": row.file}
    out.update(row.record)
    if row.weight_model is not None:
        out["weight_model"] = row.weight_model
    return out


def format_table(rows: Sequence[BatchRow]) -> str:
    """Fixed-width summary of batch rows."""
    header = (
        f"{'File':<16} {'V':>6} {'E':>7} {'SCC':>6} {'SCC ms':>9} "
        f"{'Topo ms':>9} {'Short ms':>9} {'Long ms':>9} {'Max':>8}"
    )
    lines = [header, "-" * len(header)]
    for row in rows:
        r = row.record
        lines.append(
            f"{row.file:<16} {r['vertices']:>6} {r['edges']:>7} {r['scc_count']:>6} "
            f"{r['scc_time']:>9.3f} {r['topo_time']:>9.3f} "
            f"{r['shortest_time']:>9.3f} {r['longest_time']:>9.3f} "
            f"{r['longest_max']:>8}"
        )
    return "\n".join(lines)


def write_csv(rows: Sequence[BatchRow], path: str | Path) -> None:
    with open(path, "w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=CSV_FIELDS, restval="")
        writer.writeheader()
        for row in rows:
            writer.writerow(row_dict(row))


def write_json(rows: Sequence[BatchRow], path: str | Path) -> None:
    doc = {"results": [row_dict(row) for row in rows]}
    Path(path).write_text(json.dumps(doc, indent=2), encoding="utf-8")
