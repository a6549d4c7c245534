"""
Status-based ordering for record lists.

Records are mappings or plain objects carrying a raw status under `field`.
A missing field counts as absent input and resolves to UNKNOWN.

Every function here preserves input order within a rank, so callers get a
deterministic result from a stable secondary key or from the original order.
"""

from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterable, List, Optional

from .status import CanonicalStatus, StatusResolver, default_resolver, statuses_by_rank


def _status_of(record: Any, field: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(field)
    return getattr(record, field, None)


def sort_by_status(
    records: Iterable[Any],
    field: str = "status",
    secondary: Optional[Callable[[Any], Any]] = None,
    resolver: Optional[StatusResolver] = None,
) -> List[Any]:
    """
    Sort records by the rank of their normalized status.

    Args:
        records: Records to sort (not modified)
        field: Key or attribute holding the raw status
        secondary: Optional tie-break key applied within a rank
        resolver: Resolver to use (default: process-wide resolver)

    Returns:
        New list ordered by (rank, secondary); original order breaks
        any remaining ties
    """
    resolver = resolver or default_resolver()
    if secondary is None:
        return sorted(records, key=lambda r: resolver.sort_key(_status_of(r, field)))
    return sorted(records, key=lambda r: (resolver.sort_key(_status_of(r, field)), secondary(r)))


def archived_last(
    records: Iterable[Any],
    field: str = "status",
    resolver: Optional[StatusResolver] = None,
) -> List[Any]:
    """Move archived records to the end, keeping both groups in original order."""
    resolver = resolver or default_resolver()
    kept: List[Any] = []
    archived: List[Any] = []
    for record in records:
        if resolver.normalize(_status_of(record, field)) is CanonicalStatus.ARCHIVED:
            archived.append(record)
        else:
            kept.append(record)
    return kept + archived


def filter_by_status(
    records: Iterable[Any],
    *statuses: Any,
    field: str = "status",
    resolver: Optional[StatusResolver] = None,
) -> List[Any]:
    """Keep records whose status normalizes to one of `statuses` (raw labels accepted)."""
    resolver = resolver or default_resolver()
    wanted = {resolver.normalize(s) for s in statuses}
    return [r for r in records if resolver.normalize(_status_of(r, field)) in wanted]


def group_by_status(
    records: Iterable[Any],
    field: str = "status",
    resolver: Optional[StatusResolver] = None,
) -> Dict[CanonicalStatus, List[Any]]:
    """Bucket records by canonical status. Every status is present, in rank order."""
    resolver = resolver or default_resolver()
    groups: Dict[CanonicalStatus, List[Any]] = {s: [] for s in statuses_by_rank(resolver)}
    for record in records:
        groups[resolver.normalize(_status_of(record, field))].append(record)
    return groups


def status_counts(
    records: Iterable[Any],
    field: str = "status",
    resolver: Optional[StatusResolver] = None,
) -> Dict[CanonicalStatus, int]:
    return {s: len(rs) for s, rs in group_by_status(records, field, resolver).items()}
