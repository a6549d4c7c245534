import argparse
import json
from pathlib import Path

from .env import get_settings, load_alias_file, load_env

from . import __version__
from .ingest import ingest_records
from .logger import get_logger
from .ordering import archived_last, sort_by_status
from .records import StoreError, load_records, save_records
from .schema import validate_record, validate_record_strict
from .status import CanonicalStatus, configure_aliases, default_resolver, iter_aliases


def _load_or_exit(path: Path) -> list:
    try:
        return load_records(path)
    except StoreError as e:
        raise SystemExit(str(e))


def cmd_normalize(args: argparse.Namespace) -> None:
    resolver = default_resolver()
    for raw in args.values:
        status = resolver.normalize(raw)
        print(f"{raw!r} -> {status.value} (rank {resolver.rank(status)})")


def cmd_aliases(args: argparse.Namespace) -> None:
    only = None
    if args.status:
        only = default_resolver().normalize(args.status)
        if only is CanonicalStatus.UNKNOWN:
            raise SystemExit(f"Unknown status: {args.status}. Use one of {CanonicalStatus.choices()}")
    for status, aliases in iter_aliases():
        if only is not None and status is not only:
            continue
        if status is CanonicalStatus.UNKNOWN:
            continue
        print(f"{status.value}: {', '.join(aliases)}")


def cmd_validate(args: argparse.Namespace) -> None:
    records = _load_or_exit(Path(args.input))
    invalid = 0
    for index, record in enumerate(records):
        if args.strict:
            _, errors = validate_record_strict(record)
        else:
            errors = validate_record(record)
        if errors:
            invalid += 1
            print(f"Record {index} invalid:")
            for e in errors:
                print(f" - {e}")
    if invalid:
        raise SystemExit(2)
    print(f"Valid ({len(records)} records)")


def cmd_ingest(args: argparse.Namespace) -> None:
    records = _load_or_exit(Path(args.input))
    normalized, report = ingest_records(records)
    if args.output:
        save_records(Path(args.output), normalized)
        print(f"Wrote {len(normalized)} records to {args.output}")
    print(
        f"Done. total={report['total']} ingested={report['ingested']} "
        f"recognized={report['recognized']} unrecognized={report['unrecognized']} "
        f"invalid={report['invalid']}"
    )
    for entry in report["errors"]:
        print(f"[validation_error] record {entry['index']} - {entry['errors']}")
    get_logger().log_metrics_summary()


def cmd_sort(args: argparse.Namespace) -> None:
    loaded = _load_or_exit(Path(args.input))
    records = [r for r in loaded if isinstance(r, dict)]
    skipped = len(loaded) - len(records)
    if skipped:
        get_logger().warning("Skipping non-object entries", skipped=skipped, input=args.input)
    if args.archived_last:
        ordered = archived_last(records, field=args.by)
    else:
        ordered = sort_by_status(records, field=args.by)
    print(json.dumps(ordered, indent=2, ensure_ascii=False))


def main():
    # Load .env if present (STATUSKIT_LOG_LEVEL, STATUSKIT_ALIASES_FILE, etc.)
    load_env()
    try:
        settings = get_settings()
    except ValueError as e:
        raise SystemExit(str(e))
    logger = get_logger(
        level=settings.log_level,
        log_dir=settings.log_dir,
        enable_file=settings.log_to_file,
    )
    if settings.aliases_file is not None:
        try:
            configure_aliases(load_alias_file(settings.aliases_file))
        except ValueError as e:
            raise SystemExit(str(e))
        logger.debug("Loaded extra aliases", path=str(settings.aliases_file))

    parser = argparse.ArgumentParser(prog="statuskit", description="Status canonicalization and ranking")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    nrm = subparsers.add_parser("normalize", help="Resolve raw status labels to canonical statuses")
    nrm.add_argument("values", nargs="+", help="Raw status labels")
    nrm.set_defaults(func=cmd_normalize)

    als = subparsers.add_parser("aliases", help="Show the alias table grouped by canonical status")
    als.add_argument("--status", help="Only show aliases for this status")
    als.set_defaults(func=cmd_aliases)

    val = subparsers.add_parser("validate", help="Validate a records JSON file")
    val.add_argument("--input", required=True, help="Path to records JSON input")
    val.add_argument("--strict", action="store_true", help="Also reject unrecognized statuses")
    val.set_defaults(func=cmd_validate)

    ing = subparsers.add_parser("ingest", help="Normalize the statuses of a records JSON file")
    ing.add_argument("--input", required=True, help="Path to records JSON input")
    ing.add_argument("--output", help="Write normalized records to this path")
    ing.set_defaults(func=cmd_ingest)

    srt = subparsers.add_parser("sort", help="Print records ordered by status rank")
    srt.add_argument("--input", required=True, help="Path to records JSON input")
    srt.add_argument("--by", default="status", help="Field holding the raw status (default: status)")
    srt.add_argument("--archived-last", action="store_true", help="Only move archived records to the end")
    srt.set_defaults(func=cmd_sort)

    args = parser.parse_args()

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
