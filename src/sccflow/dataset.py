"""JSON dataset loading.

A dataset file looks like:

    {
      "directed": true,
      "n": 5,
      "edges": [{"u": 0, "v": 1, "w": 3}, {"u": 1, "v": 2}],
      "source": 0,
      "weight_model": "edge"
    }

"w" is optional and 0 means "unspecified" (stored as 1, see
sccflow.graph.adjacency).  "source" defaults to 0, or to None for an
empty graph; an explicit source must name a vertex.  "directed" and
"weight_model" are carried through untouched for reports; the
algorithms always treat the graph as directed.

Everything is validated here, before any algorithm runs, so a bad file
surfaces as a DatasetError rather than an IndexError deep in Tarjan.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from sccflow.graph.adjacency import Graph, InvalidGraphError

log = logging.getLogger(__name__)

# the batch harness writes its results next to the inputs
OUTPUT_NAME = "output.json"


class DatasetError(InvalidGraphError):
    """Raised for a malformed or inconsistent dataset document."""


@dataclass(frozen=True, slots=True)
class Dataset:
    """A graph plus the run parameters that came with it."""
    name: str
    graph: Graph
    source: int | None = None
    directed: bool = True
    weight_model: str | None = None


def _int_field(obj: Mapping[str, Any], key: str, where: str) -> int:
    if key not in obj:
        raise DatasetError(f"{where}: missing required field {key!r}")
    value = obj[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise DatasetError(f"{where}: field {key!r} must be an integer, got {value!r}")
    return value


def parse_dataset(doc: Mapping[str, Any], name: str = "<memory>") -> Dataset:
    """Validate a decoded dataset document and build its Graph."""
    if not isinstance(doc, Mapping):
        raise DatasetError(f"{name}: top level must be a JSON object")

    n = _int_field(doc, "n", name)
    if n < 0:
        raise DatasetError(f"{name}: vertex count must be non-negative, got {n}")

    raw_edges = doc.get("edges", [])
    if not isinstance(raw_edges, list):
        raise DatasetError(f"{name}: 'edges' must be a list")

    edges: list[tuple[int, int, int]] = []
    for i, e in enumerate(raw_edges):
        where = f"{name}: edge #{i}"
        if not isinstance(e, Mapping):
            raise DatasetError(f"{where} must be an object with u, v[, w]")
        u = _int_field(e, "u", where)
        v = _int_field(e, "v", where)
        w = _int_field(e, "w", where) if "w" in e else 0
        edges.append((u, v, w))

    source = doc.get("source")
    if source is None:
        # absent means vertex 0; an empty graph has no vertex 0
        source = 0 if n > 0 else None
    elif isinstance(source, bool) or not isinstance(source, int):
        raise DatasetError(f"{name}: 'source' must be an integer, got {source!r}")
    elif not 0 <= source < n:
        raise DatasetError(f"{name}: source vertex {source} outside [0, {n})")

    weight_model = doc.get("weight_model")
    if weight_model is not None and not isinstance(weight_model, str):
        raise DatasetError(f"{name}: 'weight_model' must be a string")

    try:
        graph = Graph(n, edges)
    except InvalidGraphError as exc:
        raise DatasetError(f"{name}: {exc}") from exc

    return Dataset(
        name=name,
        graph=graph,
        source=source,
        directed=bool(doc.get("directed", True)),
        weight_model=weight_model,
    )


def load_dataset(path: str | Path) -> Dataset:
    """Read and validate one dataset file."""
    path = Path(path)
    try:
        doc = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise DatasetError(f"{path.name}: invalid JSON ({exc})") from exc
    except OSError as exc:
        raise DatasetError(f"{path}: cannot read dataset ({exc.strerror})") from exc
    ds = parse_dataset(doc, name=path.name)
    log.debug("Loaded %s: %r, source=%s", path, ds.graph, ds.source)
    return ds


def dataset_to_dict(ds: Dataset) -> dict[str, Any]:
    """Inverse of parse_dataset, used when writing generated datasets."""
    doc: dict[str, Any] = {
        "directed": ds.directed,
        "n": ds.graph.node_count,
        "edges": [{"u": u, "v": v, "w": w} for u, v, w in ds.graph.edges()],
    }
    if ds.source is not None:
        doc["source"] = ds.source
    if ds.weight_model is not None:
        doc["weight_model"] = ds.weight_model
    return doc


def save_dataset(ds: Dataset, path: str | Path) -> None:
    Path(path).write_text(json.dumps(dataset_to_dict(ds), indent=2), encoding="utf-8")


def discover_datasets(directory: str | Path) -> list[Path]:
    """Dataset files in *directory*, sorted by name, excluding harness output."""
    root = Path(directory)
    if not root.is_dir():
        raise DatasetError(f"{root} is not a directory")
    return sorted(p for p in root.glob("*.json") if p.name != OUTPUT_NAME)
