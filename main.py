import argparse
import json
import sys
from pathlib import Path
from typing import Any

from exercises import (
    ExerciseSchemaError,
    UniversalExercise,
    explain,
    is_canonical,
    summarize,
)
from log import cli_logger, configure_logging
from ui import InspectorUI

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_DATA_PATH = DATA_DIR / "legacy_exercises.json"

log = cli_logger()


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        description="Inspect how legacy exercise records normalize and project"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Log level: DEBUG, INFO, WARNING, ERROR (default: WARNING)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON lines on stderr",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    detect_parser = subparsers.add_parser("detect", help="Detect record archetypes")
    detect_parser.add_argument("file", type=Path, help="JSON file of records")

    normalize_parser = subparsers.add_parser(
        "normalize", help="Print canonical documents"
    )
    normalize_parser.add_argument("file", type=Path, help="JSON file of records")
    normalize_parser.add_argument(
        "--json", action="store_true", help="Print raw JSON instead of panels"
    )

    project_parser = subparsers.add_parser(
        "project", help="Print renderer projections"
    )
    project_parser.add_argument("file", type=Path, help="JSON file of records")
    project_parser.add_argument(
        "--example",
        action="store_true",
        help="Project the embedded example instead of the exercise",
    )
    project_parser.add_argument(
        "--json", action="store_true", help="Print raw JSON instead of panels"
    )

    report_parser = subparsers.add_parser(
        "report", help="Convert every record and summarize the results"
    )
    report_parser.add_argument(
        "file",
        type=Path,
        nargs="?",
        default=DEFAULT_DATA_PATH,
        help=f"JSON file of records (default: {DEFAULT_DATA_PATH.name})",
    )

    return parser


def load_records(path: Path) -> list[tuple[str, Any]]:
    """Load (name, record) pairs from a JSON file.

    The file holds a single record, a list of records, or an object
    mapping names to records.
    """
    with open(path, encoding="utf-8") as f:
        payload = json.load(f)

    if isinstance(payload, list):
        return [(f"#{i}", record) for i, record in enumerate(payload, 1)]

    if (
        isinstance(payload, dict)
        and payload
        and not is_canonical(payload)
        and all(isinstance(value, dict) for value in payload.values())
    ):
        return list(payload.items())

    return [(path.stem, payload)]


def dump_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def run_detect(ui: InspectorUI, records: list[tuple[str, Any]]) -> int:
    rows = []
    for name, record in records:
        tag, rule = explain(record)
        rows.append((name, tag.value, rule))
    ui.show_detections(rows)
    return 0


def run_normalize(ui: InspectorUI, records: list[tuple[str, Any]], as_json: bool) -> int:
    failures = 0
    documents = []
    for name, record in records:
        try:
            exercise = UniversalExercise(record)
        except (ExerciseSchemaError, ValueError) as e:
            failures += 1
            ui.show_error(f"{name}: {e}")
            continue

        if as_json:
            documents.append(exercise.data)
        else:
            ui.show_document(exercise.document, title=name)

    if as_json:
        dump_json(documents[0] if len(records) == 1 and documents else documents)
    return 1 if failures else 0


def run_project(
    ui: InspectorUI,
    records: list[tuple[str, Any]],
    example: bool,
    as_json: bool,
) -> int:
    failures = 0
    projections = []
    for name, record in records:
        try:
            exercise = UniversalExercise(record)
            if example:
                projection = exercise.get_example_for_renderer()
            else:
                projection = exercise.get_for_renderer()
        except (ExerciseSchemaError, ValueError) as e:
            failures += 1
            ui.show_error(f"{name}: {e}")
            continue

        if as_json:
            projections.append(projection)
        elif projection is None:
            ui.show_info(f"{name}: no example")
        else:
            title = f"{name} (example)" if example else name
            ui.show_projection(projection, title=title)

    if as_json:
        dump_json(projections[0] if len(records) == 1 and projections else projections)
    return 1 if failures else 0


def run_report(ui: InspectorUI, records: list[tuple[str, Any]]) -> int:
    summaries = [summarize(name, record) for name, record in records]
    failed = ui.show_report(summaries)
    return 1 if failed else 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point with CLI routing."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(level=args.log_level, json_logs=args.json_logs)
    ui = InspectorUI()

    command = args.command or "report"
    path = getattr(args, "file", DEFAULT_DATA_PATH)

    try:
        records = load_records(path)
    except FileNotFoundError:
        ui.show_error(f"File not found: {path}")
        return 2
    except json.JSONDecodeError as e:
        ui.show_error(f"Invalid JSON in {path}: {e}")
        return 2

    log.info("records_loaded", path=str(path), count=len(records), command=command)

    if command == "detect":
        return run_detect(ui, records)
    if command == "normalize":
        return run_normalize(ui, records, args.json)
    if command == "project":
        return run_project(ui, records, args.example, args.json)
    return run_report(ui, records)


if __name__ == "__main__":
    sys.exit(main())
