"""Batch harness, dataset generation and reports for sccflow."""

from sccflow.profiling.harness import BatchRow, run_batch, run_dataset
from sccflow.profiling.load_generator import LoadGenerator
from sccflow.profiling.report import (
    CSV_FIELDS,
    format_dagsp,
    format_scc,
    format_table,
    format_topo,
    write_csv,
    write_json,
)

__all__ = [
    "BatchRow",
    "CSV_FIELDS",
    "LoadGenerator",
    "format_dagsp",
    "format_scc",
    "format_table",
    "format_topo",
    "run_batch",
    "run_dataset",
    "write_csv",
    "write_json",
]
