"""
Ingestion of imported records.

Validates each record, resolves its raw status to a canonical one and keeps
the original label alongside, so unrecognized upstream values stay visible.
Invalid records are reported and skipped, never raised.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .logger import get_logger
from .records import diff_dict
from .schema import validate_record
from .status import CanonicalStatus, StatusResolver, default_resolver


def ingest_record(record: Mapping[str, Any], resolver: Optional[StatusResolver] = None) -> Dict[str, Any]:
    """
    Normalize the status of a single record.

    Args:
        record: Record with an optional raw `status`
        resolver: Resolver to use (default: process-wide resolver)

    Returns:
        A copy of the record with `status` set to the canonical value,
        `raw_status` holding the original and `status_rank` the sort key
    """
    logger = get_logger()
    resolver = resolver or default_resolver()

    raw = record.get("status")
    status = resolver.normalize(raw)
    logger.record_normalization(raw, status.value)

    normalized = dict(record)
    normalized["status"] = status.value
    normalized["raw_status"] = raw
    normalized["status_rank"] = resolver.rank(status)

    if status is CanonicalStatus.UNKNOWN:
        logger.debug("Unrecognized status", record_id=record.get("id"), raw_status=raw)
    else:
        logger.debug("Normalized status", record_id=record.get("id"), changes=diff_dict(dict(record), normalized))
    return normalized


def ingest_records(
    records: Iterable[Mapping[str, Any]],
    resolver: Optional[StatusResolver] = None,
) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
    """
    Validate and normalize a batch of records.

    Returns:
        Tuple of (normalized records, report). The report counts total,
        ingested, recognized, unrecognized and invalid records, and lists
        validation errors by input index.
    """
    logger = get_logger()
    resolver = resolver or default_resolver()

    normalized: List[Dict[str, Any]] = []
    report: Dict[str, Any] = {
        "total": 0,
        "ingested": 0,
        "recognized": 0,
        "unrecognized": 0,
        "invalid": 0,
        "errors": [],
    }

    for index, record in enumerate(records):
        report["total"] += 1
        errors = validate_record(record)
        if errors:
            # Log but don't crash - report and skip
            report["invalid"] += 1
            report["errors"].append({"index": index, "errors": errors})
            logger.record_invalid()
            logger.warning("Skipping invalid record", index=index, errors=errors)
            continue

        item = ingest_record(record, resolver)
        normalized.append(item)
        report["ingested"] += 1
        if item["status"] == CanonicalStatus.UNKNOWN.value:
            report["unrecognized"] += 1
        else:
            report["recognized"] += 1

    logger.info(
        f"Ingest complete: {report['ingested']} ingested, {report['invalid']} invalid",
        total=report["total"],
        recognized=report["recognized"],
        unrecognized=report["unrecognized"],
    )
    return normalized, report
