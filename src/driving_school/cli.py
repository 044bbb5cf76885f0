"""
Driving school scheduling command line.

Works on a JSON snapshot with "students", "instructors", "vehicles" and
"lessons" lists, as exported from the school's store.

Usage:
    driving-school --data DATA.json slots --instructor ID --date YYYY-MM-DD
    driving-school --data DATA.json validate --request REQUEST.json
    driving-school --data DATA.json book --request REQUEST.json [--dry-run]
    driving-school --data DATA.json week --instructor ID --date YYYY-MM-DD

Examples:
    # Free slots of an instructor
    driving-school --data school.json slots --instructor instructor_1 --date 2025-10-15

    # Book a lesson and write it back to the snapshot
    driving-school --data school.json book --request request.json

    # Export a vehicle's week to CSV
    driving-school --data school.json week --vehicle vehicle_1 --date 2025-10-15 --export csv

    # Use the data file from the environment
    export SCHOOL_DATA_FILE=school.json
    driving-school slots --instructor instructor_1 --date 2025-10-15
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .repository.interfaces import RepositoryError
from .repository.memory import InMemoryRepository
from .services.lesson_service import LessonService
from .utils.config import Config
from .utils.di_container import DIContainer, TABLES, configure_default_services
from .utils.file_utils import (
    generate_filename,
    load_json,
    save_csv,
    save_json,
    week_grid_frame,
)
from .utils.logger import setup_logger
from .validation.booking_validator import validate_booking


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="driving-school",
        description="Driving school lesson scheduling",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        "--data",
        help="JSON snapshot file (overrides SCHOOL_DATA_FILE env var)"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: LOG_LEVEL env var or INFO)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    slots = subparsers.add_parser("slots", help="List free slots of an instructor")
    slots.add_argument("--instructor", required=True, help="Instructor id")
    slots.add_argument("--date", required=True, help="Date in YYYY-MM-DD format")
    slots.add_argument("--exclude", help="Lesson being edited (its slot stays free)")
    slots.add_argument("--export", choices=["json", "csv"], help="Export the result")

    validate = subparsers.add_parser("validate", help="Validate a booking request")
    validate.add_argument("--request", required=True, help="Request JSON file or inline JSON")
    validate.add_argument("--editing", help="Id of the lesson being edited")

    book = subparsers.add_parser("book", help="Schedule a lesson")
    book.add_argument("--request", required=True, help="Request JSON file or inline JSON")
    book.add_argument("--lesson", help="Edit this lesson instead of creating one")
    book.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate only; do not write the snapshot"
    )

    week = subparsers.add_parser("week", help="Show a weekly schedule")
    resource = week.add_mutually_exclusive_group(required=True)
    resource.add_argument("--instructor", help="Instructor id")
    resource.add_argument("--vehicle", help="Vehicle id")
    week.add_argument("--date", required=True, help="Any day of the week (YYYY-MM-DD)")
    week.add_argument("--export", choices=["json", "csv"], help="Export the grid")

    return parser.parse_args(argv)


def load_request(value: str) -> Dict[str, Any]:
    """
    Load a booking request from a JSON file path or an inline JSON object.

    Raises:
        ValueError: If the value is neither
    """
    path = Path(value)
    if path.suffix.lower() == ".json" and path.exists():
        data = load_json(path)
        if data is None:
            raise ValueError(f"Could not read request file: {value}")
        return data

    try:
        data = json.loads(value)
    except json.JSONDecodeError as e:
        raise ValueError(f"Request is neither a JSON file nor JSON: {e}")
    if not isinstance(data, dict):
        raise ValueError("Request must be a JSON object")
    return data


def write_snapshot(container: DIContainer, data_file: Path) -> bool:
    """Write every table back to the snapshot file."""
    snapshot = {}
    for table in TABLES:
        repository: InMemoryRepository = container.resolve(table)
        snapshot[table] = repository.list().unwrap()
    return save_json(snapshot, data_file)


def display_field_errors(field_errors: Dict[str, str]):
    print("\nThe request has problems:")
    print("-" * 60)
    for field_name, message in field_errors.items():
        print(f"  {field_name:15s} {message}")
    print("-" * 60)


def cmd_slots(args, service: LessonService, config: Config) -> int:
    result = service.available_slots(args.instructor, args.date, args.exclude)
    if result.is_failure:
        print(f"ERROR: {result.message}")
        return 1

    slots = result.value
    if not slots:
        print(f"No free slots for {args.instructor} on {args.date}")
    else:
        print(f"Free slots for {args.instructor} on {args.date}:")
        for slot in slots:
            print(f"  {slot}")

    if args.export:
        filename = generate_filename(f"slots_{args.instructor}", args.export)
        path = config.output_dir / "exports" / filename
        rows = [{"instructor_id": args.instructor, "date": args.date, "time": s} for s in slots]
        saved = save_json(rows, path) if args.export == "json" else save_csv(rows, path)
        if not saved:
            print(f"ERROR: Failed to export {path}")
            return 1
        print(f"\nExported to: {path}")

    return 0


def cmd_validate(args, service: LessonService) -> int:
    request = load_request(args.request)
    loaded = service.load_context(args.editing)
    if loaded.is_failure:
        print(f"ERROR: {loaded.message}")
        return 1

    field_errors = validate_booking(request, loaded.value)
    if field_errors:
        display_field_errors(field_errors)
        return 1

    print("✓ Request is valid")
    return 0


def cmd_book(args, service: LessonService, container: DIContainer, data_file: Path) -> int:
    request = load_request(args.request)

    if args.dry_run:
        print("\n*** DRY RUN MODE ***\n")
        return cmd_validate(
            argparse.Namespace(request=args.request, editing=args.lesson),
            service
        )

    if args.lesson:
        outcome = service.update_lesson(args.lesson, request)
    else:
        outcome = service.schedule_lesson(request)

    if outcome.is_rejected:
        display_field_errors(outcome.field_errors)
        return 1

    if not outcome.is_booked:
        print(f"ERROR: {outcome.error_message}")
        return 1

    lesson = outcome.lesson
    print(
        f"✓ Lesson {lesson['id']} scheduled: {lesson['date']} {lesson['time']} "
        f"({lesson['duration']}min, {lesson['type']})"
    )

    if not write_snapshot(container, data_file):
        print(f"ERROR: Failed to write {data_file}")
        return 1
    return 0


def cmd_week(args, service: LessonService, config: Config) -> int:
    resource_type = "instructor" if args.instructor else "vehicle"
    resource_id = args.instructor or args.vehicle

    result = service.week_schedule(resource_type, resource_id, args.date)
    if result.is_failure:
        print(f"ERROR: {result.message}")
        return 1

    days = [day.to_dict() for day in result.value]
    frame = week_grid_frame(days)
    print(f"\n{config.school_name}: Week of {days[0]['date']} - {resource_type} {resource_id}")
    print("=" * 60)
    print(frame.to_string())

    if args.export:
        filename = generate_filename(f"week_{resource_id}", args.export)
        path = config.output_dir / "exports" / filename
        if args.export == "json":
            saved = save_json(days, path)
        else:
            saved = save_csv(frame, path, index=True)
        if not saved:
            print(f"ERROR: Failed to export {path}")
            return 1
        print(f"\nExported to: {path}")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function."""
    args = parse_arguments(argv)
    logger = logging.getLogger("driving_school")

    try:
        config = Config()
        logger = setup_logger(
            level=getattr(logging, args.log_level or config.log_level, logging.INFO),
            log_file=config.log_file
        )

        config.validate()
        config.create_output_directories()

        data_file = Path(args.data) if args.data else config.data_file
        if data_file is None:
            print("ERROR: No data file. Use --data or set SCHOOL_DATA_FILE")
            return 1

        snapshot = load_json(data_file)
        if snapshot is None:
            print(f"ERROR: Could not load data file: {data_file}")
            return 1

        container = DIContainer()
        configure_default_services(container, snapshot=snapshot, config=config)
        service = container.resolve(LessonService)

        if args.command == "slots":
            return cmd_slots(args, service, config)
        if args.command == "validate":
            return cmd_validate(args, service)
        if args.command == "book":
            return cmd_book(args, service, container, data_file)
        return cmd_week(args, service, config)

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130

    except RepositoryError as e:
        logger.error(f"Store error: {e}")
        print(f"ERROR: {e}")
        return 1

    except ValueError as e:
        logger.error(f"{e}")
        print(f"ERROR: {e}")
        return 1

    except OSError as e:
        logger.error(f"File error: {e}")
        print(f"ERROR: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
