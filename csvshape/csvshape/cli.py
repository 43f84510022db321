from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Sequence
from pathlib import Path

from csvshape.errors import CsvShapeError
from csvshape.io import FileFormat, discover_csv_files, output_path_for_file, write_records
from csvshape.mapping import MappingEngine
from csvshape.shape import RecordShape


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="csvshape",
        description="Load CSV files into typed records or derive record shapes from headers.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    load = subparsers.add_parser("load", help="Load CSV rows into records of a given shape.")
    load.add_argument(
        "input_path",
        type=Path,
        help="Path to a file or folder containing CSV(.gz) files.",
    )
    load.add_argument(
        "--shape",
        type=Path,
        required=True,
        metavar="PATH",
        help='JSON object mapping column names to types, e.g. {"age": "int"}.',
    )
    load.add_argument(
        "--rename-map",
        type=Path,
        default=None,
        metavar="PATH",
        help="Optional JSON object mapping original header names to override names.",
    )
    load.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        metavar="PATH",
        help="Optional destination folder for the loaded records.",
    )
    load.add_argument(
        "--output-format",
        type=FileFormat,
        choices=list(FileFormat),
        default=FileFormat.CSV,
        help="Output file format (default: csv).",
    )

    synthesize = subparsers.add_parser(
        "synthesize", help="Derive a string-only record shape from a CSV header row."
    )
    synthesize.add_argument("input_path", type=Path, help="Path to a CSV(.gz) file.")
    synthesize.add_argument(
        "--export",
        type=Path,
        default=None,
        metavar="PATH",
        help="Optional path to write the shape as a JSON type table.",
    )

    types = subparsers.add_parser("types", help="Report each column's type for a shape.")
    types.add_argument("--shape", type=Path, required=True, metavar="PATH")
    types.add_argument("--rename-map", type=Path, default=None, metavar="PATH")
    return parser


def _read_json_object(parser: argparse.ArgumentParser, path: Path) -> dict[str, str]:
    if not path.exists():
        parser.error(f"File not found: {path}")
    data = json.loads(path.read_text())
    if not isinstance(data, dict):
        parser.error(f"Expected a JSON object in {path}")
    return {str(key): str(value) for key, value in data.items()}


def _build_engine(parser: argparse.ArgumentParser, rename_map: Path | None) -> MappingEngine:
    engine = MappingEngine()
    if rename_map is not None:
        engine.set_rename_map(_read_json_object(parser, rename_map))
    return engine


def _run_load(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    input_path: Path = args.input_path
    output_dir: Path | None = args.output_dir
    output_format: FileFormat = args.output_format

    files = discover_csv_files(input_path)
    if not files:
        parser.error("No supported input files found (.csv, .csv.gz).")

    shape = RecordShape.from_types(_read_json_object(parser, args.shape))
    engine = _build_engine(parser, args.rename_map)
    if args.rename_map is not None:
        print(f"Loaded rename map from: {args.rename_map}")

    for input_file in files:
        records = engine.load_csv(input_file, shape)
        if output_dir is None:
            print(f"Loaded: {input_file} ({len(records)} record(s))")
            continue
        destination = output_path_for_file(
            input_file=input_file,
            input_root=input_path,
            output_root=output_dir,
            output_format=output_format,
        )
        write_records(records, destination)
        print(f"Loaded: {input_file} -> {destination} ({len(records)} record(s))")

    print(f"Done. Loaded {len(files)} file(s).")
    return 0


def _run_synthesize(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    input_path: Path = args.input_path
    if not input_path.is_file() or not discover_csv_files(input_path):
        parser.error(f"Not a supported input file (.csv, .csv.gz): {input_path}")

    shape = MappingEngine().synthesize_csv(input_path)
    for descriptor in shape:
        print(f"{descriptor.logical_name}\t{descriptor.external_name}\t{descriptor.type_name}")

    if args.export is not None:
        args.export.parent.mkdir(parents=True, exist_ok=True)
        args.export.write_text(json.dumps(shape.to_types(), indent=2))
        print(f"Shape written to: {args.export}")
    return 0


def _run_types(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    shape = RecordShape.from_types(_read_json_object(parser, args.shape))
    engine = _build_engine(parser, args.rename_map)
    print(json.dumps(engine.report_types(shape), indent=2))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.command == "load":
            return _run_load(parser, args)
        if args.command == "synthesize":
            return _run_synthesize(parser, args)
        return _run_types(parser, args)
    except CsvShapeError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    raise SystemExit(main())
