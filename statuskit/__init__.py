"""Status canonicalization and ranking for task and project lists."""

from .labels import get_status_label, status_options
from .status import (
    CanonicalStatus,
    StatusResolver,
    configure_aliases,
    default_resolver,
    normalize_status,
    reset_resolver,
    status_to_rank,
)

__version__ = "0.1.0"

__all__ = [
    "CanonicalStatus",
    "StatusResolver",
    "configure_aliases",
    "default_resolver",
    "get_status_label",
    "normalize_status",
    "reset_resolver",
    "status_options",
    "status_to_rank",
    "__version__",
]
