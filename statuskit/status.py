"""
Canonical statuses and the resolver that maps raw labels onto them.

Raw labels arrive from user input, imported records and third-party
integrations. They are reduced to one of five canonical statuses through an
exact-match alias table, and each canonical status carries a fixed rank used
as a sort key by list views.

Both tables are immutable once a resolver is built. Reconfiguring the
process-wide default builds a new resolver and swaps it in under a lock.
"""

import threading
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .normalize import StatusInput, status_text


class CanonicalStatus(str, Enum):
    """Closed set of statuses every raw label is reduced to."""
    ACTIVE = "active"
    PENDING = "pending"
    COMPLETED = "completed"
    ARCHIVED = "archived"
    UNKNOWN = "unknown"

    @classmethod
    def choices(cls) -> list:
        """Values a user can pick. UNKNOWN is a fallback, not a choice."""
        return [e.value for e in cls if e is not cls.UNKNOWN]

    @classmethod
    def display_labels(cls) -> dict:
        return {
            cls.ACTIVE.value: "Active",
            cls.PENDING.value: "Pending",
            cls.COMPLETED.value: "Completed",
            cls.ARCHIVED.value: "Archived",
            cls.UNKNOWN.value: "Unknown",
        }


ACTIVE_ALIASES = {"active", "act", "in_progress", "inprogress", "in progress", "ongoing", "started"}
PENDING_ALIASES = {"pending", "todo", "to_do", "planned", "backlog"}
COMPLETED_ALIASES = {"completed", "done", "finished", "closed"}
ARCHIVED_ALIASES = {"archived", "archive", "removed", "deleted"}

ALIAS_FAMILIES = {
    CanonicalStatus.ACTIVE: ACTIVE_ALIASES,
    CanonicalStatus.PENDING: PENDING_ALIASES,
    CanonicalStatus.COMPLETED: COMPLETED_ALIASES,
    CanonicalStatus.ARCHIVED: ARCHIVED_ALIASES,
}

DEFAULT_ALIASES = {
    alias: status
    for status, aliases in ALIAS_FAMILIES.items()
    for alias in aliases
}

# Lower rank sorts first. PENDING and UNKNOWN intentionally share a rank.
DEFAULT_RANKS = {
    CanonicalStatus.ACTIVE: 0,
    CanonicalStatus.PENDING: 1,
    CanonicalStatus.COMPLETED: 2,
    CanonicalStatus.ARCHIVED: 3,
    CanonicalStatus.UNKNOWN: 1,
}


def to_canonical(value: Any) -> CanonicalStatus:
    """
    Interpret a configuration value as a canonical status.

    Accepts a CanonicalStatus member, its value or its name (any case).
    Unlike StatusResolver.normalize this is strict: configuration is trusted
    code, so a typo should fail loudly.

    Raises:
        ValueError: If value does not name a canonical status
    """
    if isinstance(value, CanonicalStatus):
        return value
    text = status_text(value)
    if text:
        for status in CanonicalStatus:
            if text == status.value or text == status.name.lower():
                return status
    raise ValueError(
        f"Invalid canonical status {value!r} (use one of {[s.value for s in CanonicalStatus]})"
    )


def _build_alias_table(aliases: Mapping[Any, Any]) -> Mapping[str, CanonicalStatus]:
    table: Dict[str, CanonicalStatus] = {}
    for alias, status in aliases.items():
        key = status_text(alias)
        if not key:
            raise ValueError(f"Alias must be non-empty text: {alias!r}")
        table[key] = to_canonical(status)
    return MappingProxyType(table)


def _build_rank_table(ranks: Optional[Mapping[Any, int]]) -> Mapping[CanonicalStatus, int]:
    table: Dict[CanonicalStatus, int] = dict(DEFAULT_RANKS)
    for status, rank in (ranks or {}).items():
        if isinstance(rank, bool) or not isinstance(rank, int) or rank < 0:
            raise ValueError(f"Rank for {status!r} must be a non-negative integer, got {rank!r}")
        table[to_canonical(status)] = rank
    return MappingProxyType(table)


class StatusResolver:
    """
    Maps raw status input to a CanonicalStatus and canonical statuses to ranks.

    Instances are immutable and safe to share between threads.
    """

    __slots__ = ("_aliases", "_ranks")

    def __init__(
        self,
        aliases: Optional[Mapping[Any, Any]] = None,
        ranks: Optional[Mapping[Any, int]] = None,
    ):
        """
        Build a resolver.

        Args:
            aliases: Alias -> status mapping (default: built-in alias families).
                Keys are trimmed and lower-cased.
            ranks: Status -> rank overrides merged over the default ranks

        Raises:
            ValueError: If an alias is empty or a status or rank is invalid
        """
        self._aliases = _build_alias_table(DEFAULT_ALIASES if aliases is None else aliases)
        self._ranks = _build_rank_table(ranks)

    @property
    def aliases(self) -> Mapping[str, CanonicalStatus]:
        return self._aliases

    @property
    def ranks(self) -> Mapping[CanonicalStatus, int]:
        return self._ranks

    def normalize(self, raw: StatusInput) -> CanonicalStatus:
        """
        Reduce a raw status to a canonical one.

        The value is coerced to text, trimmed and lower-cased, then looked up
        exactly in the alias table. Absent, empty or unrecognized input maps
        to UNKNOWN. Never raises.
        """
        key = status_text(raw)
        if not key:
            return CanonicalStatus.UNKNOWN
        return self._aliases.get(key, CanonicalStatus.UNKNOWN)

    def rank(self, status: Any) -> int:
        """Sort priority for a canonical status. Anything else ranks as UNKNOWN."""
        fallback = self._ranks[CanonicalStatus.UNKNOWN]
        try:
            return self._ranks.get(status, fallback)
        except TypeError:
            # Unhashable input
            return fallback

    def sort_key(self, raw: StatusInput) -> int:
        return self.rank(self.normalize(raw))

    def aliases_for(self, status: Any) -> List[str]:
        return sorted(alias for alias, target in self._aliases.items() if target == status)

    def with_aliases(self, extra: Mapping[Any, Any]) -> "StatusResolver":
        """Return a new resolver whose alias table is this one overlaid by extra."""
        merged: Dict[Any, Any] = dict(self._aliases)
        merged.update(extra)
        return StatusResolver(aliases=merged, ranks=self._ranks)

    def __repr__(self) -> str:
        return f"StatusResolver(aliases={len(self._aliases)}, ranks={dict((s.value, r) for s, r in self._ranks.items())})"


# Process-wide default, built once at import
_default_resolver = StatusResolver()
_resolver_lock = threading.Lock()


def default_resolver() -> StatusResolver:
    return _default_resolver


def configure_aliases(extra: Mapping[Any, Any]) -> StatusResolver:
    """
    Overlay extra aliases on the process-wide resolver.

    The new resolver is fully built before it replaces the old one, so
    concurrent readers see either the old table or the new one.

    Args:
        extra: Alias -> status mapping

    Returns:
        The resolver now installed as default
    """
    global _default_resolver

    with _resolver_lock:
        _default_resolver = _default_resolver.with_aliases(extra)
        return _default_resolver


def reset_resolver() -> None:
    """Restore the built-in resolver (useful for testing)."""
    global _default_resolver

    with _resolver_lock:
        _default_resolver = StatusResolver()


def normalize_status(raw: StatusInput) -> CanonicalStatus:
    return _default_resolver.normalize(raw)


def status_to_rank(status: Any) -> int:
    return _default_resolver.rank(status)


def statuses_by_rank(resolver: Optional[StatusResolver] = None) -> List[CanonicalStatus]:
    """All canonical statuses ordered by rank, declaration order breaking ties."""
    resolver = resolver or _default_resolver
    return sorted(CanonicalStatus, key=resolver.rank)


def iter_aliases(resolver: Optional[StatusResolver] = None) -> Iterable[tuple]:
    """Yield (status, aliases) pairs in rank order."""
    resolver = resolver or _default_resolver
    for status in statuses_by_rank(resolver):
        yield status, resolver.aliases_for(status)
