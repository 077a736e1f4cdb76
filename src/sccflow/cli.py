"""sccflow CLI entry point.

Usage: uv run sccflow [command]

  scc <file>                 strongly connected components only
  topo <file>                component order plus derived vertex order
  dagsp <file> [source]      shortest/longest distances and critical path
  batch <dir>                run every dataset in a directory
  generate <dir>             write a seeded benchmark suite

Exit status: 0 on success, 2 for invalid input, 3 for an internal
consistency failure in the pipeline.
"""
import argparse
import logging
import sys
from pathlib import Path

from sccflow.graph.adjacency import InvalidGraphError
from sccflow.graph.topological import PipelineInvariantError

EXIT_INVALID_INPUT = 2
EXIT_INTERNAL_ERROR = 3

log = logging.getLogger(__name__)


def _add_mode_parsers(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser("scc", help="Print strongly connected components.")
    p.add_argument("file", type=Path, help="Dataset JSON file")

    p = subparsers.add_parser(
        "topo", help="Print the topological order of the condensation.",
    )
    p.add_argument("file", type=Path, help="Dataset JSON file")

    p = subparsers.add_parser(
        "dagsp", help="Print DAG shortest/longest distances and the critical path.",
    )
    p.add_argument("file", type=Path, help="Dataset JSON file")
    p.add_argument(
        "source", type=int, nargs="?", default=None,
        help="Source vertex (default: dataset's 'source', else 0)",
    )


def _add_batch_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "batch", help="Run the full pipeline on every dataset in a directory.",
    )
    p.add_argument("directory", type=Path, help="Directory of *.json datasets")
    p.add_argument("--csv", type=Path, default=None, help="Write metrics CSV here")
    p.add_argument("--json", type=Path, default=None, help="Write metrics JSON here")
    p.add_argument(
        "--workers", type=int, default=1,
        help="Run datasets on N threads (default: 1)",
    )
    p.add_argument(
        "--cprofile", action="store_true",
        help="Enable cProfile and print top functions per dataset.",
    )


def _add_generate_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "generate", help="Write the seeded small/medium/large dataset suite.",
    )
    p.add_argument("directory", type=Path, help="Output directory")
    p.add_argument(
        "--per-size", type=int, default=3,
        help="Datasets per size class (default: 3)",
    )
    p.add_argument(
        "--max-weight", type=int, default=10,
        help="Largest edge weight (default: 10)",
    )
    p.add_argument(
        "--seed", type=int, default=42,
        help="RNG seed for reproducible datasets (default: 42)",
    )


def _run_mode(args: argparse.Namespace) -> None:
    from sccflow.dataset import load_dataset
    from sccflow.graph.pipeline import analyze, analyze_scc
    from sccflow.profiling.report import format_dagsp, format_scc, format_topo

    ds = load_dataset(args.file)
    if args.command == "scc":
        print(format_scc(analyze_scc(ds.graph)))
    elif args.command == "topo":
        print(format_topo(analyze(ds.graph, ds.source)))
    else:
        source = ds.source if args.source is None else args.source
        print(format_dagsp(analyze(ds.graph, source)))


def _run_batch(args: argparse.Namespace) -> None:
    from sccflow.dataset import discover_datasets
    from sccflow.profiling.harness import run_batch
    from sccflow.profiling.report import format_table, write_csv, write_json

    paths = discover_datasets(args.directory)
    rows = run_batch(paths, profile=args.cprofile, workers=args.workers)
    print(format_table(rows))
    if args.csv is not None:
        write_csv(rows, args.csv)
        log.info("Wrote %s", args.csv)
    if args.json is not None:
        write_json(rows, args.json)
        log.info("Wrote %s", args.json)
    for row in rows:
        if row.cprofile_stats:
            print()
            print(f"--- cProfile top functions: {row.file} ---")
            print(row.cprofile_stats)


def _run_generate(args: argparse.Namespace) -> None:
    from sccflow.dataset import save_dataset
    from sccflow.profiling.load_generator import LoadGenerator

    args.directory.mkdir(parents=True, exist_ok=True)
    gen = LoadGenerator(seed=args.seed, max_weight=args.max_weight)
    for ds in gen.standard_suite(per_size=args.per_size):
        save_dataset(ds, args.directory / ds.name)
        print(f"{ds.name}: {ds.graph!r}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="sccflow",
        description="SCC condensation, topological order and DAG critical paths.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command")

    _add_mode_parsers(subparsers)
    _add_batch_parser(subparsers)
    _add_generate_parser(subparsers)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.command is None:
        parser.print_help()
        return 0
    if args.command == "batch":
        # argparse exits with status 2, the same as EXIT_INVALID_INPUT
        if args.workers < 1:
            parser.error("--workers must be at least 1")
        if args.cprofile and args.workers > 1:
            parser.error("--cprofile cannot be combined with --workers > 1")

    try:
        if args.command in ("scc", "topo", "dagsp"):
            _run_mode(args)
        elif args.command == "batch":
            _run_batch(args)
        elif args.command == "generate":
            _run_generate(args)
    except InvalidGraphError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except PipelineInvariantError as exc:
        log.exception("Internal pipeline failure")
        print(f"internal error: {exc}", file=sys.stderr)
        return EXIT_INTERNAL_ERROR
    return 0


if __name__ == "__main__":
    sys.exit(main())
