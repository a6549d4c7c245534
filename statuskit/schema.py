from typing import Any, Dict, List, Optional, Tuple

from .status import CanonicalStatus, StatusResolver, default_resolver

TITLE_MAX_LENGTH = 200
STATUS_TYPES = (str, int, float)


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _valid_id(v: Any) -> bool:
    if isinstance(v, bool):
        return False
    return isinstance(v, int) or _is_non_empty_str(v)


def validate_record(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    An unrecognized status is not an error here; it resolves to unknown.
    """
    errors: List[str] = []

    if not isinstance(data, dict):
        return ["Record must be a JSON object"]

    if "id" not in data:
        errors.append("Missing required field: id")
    elif not _valid_id(data["id"]):
        errors.append("Field 'id' must be an integer or a non-empty string")

    if "title" not in data:
        errors.append("Missing required field: title")
    elif not _is_non_empty_str(data["title"]):
        errors.append("Field 'title' must be a non-empty string")
    elif len(data["title"].strip()) > TITLE_MAX_LENGTH:
        errors.append(f"Field 'title' exceeds maximum length of {TITLE_MAX_LENGTH}")

    status = data.get("status")
    if status is not None and (isinstance(status, bool) or not isinstance(status, STATUS_TYPES)):
        errors.append("Field 'status' must be a string, number, or null if provided")

    return errors


def validate_record_strict(
    data: Dict[str, Any],
    resolver: Optional[StatusResolver] = None,
) -> Tuple[bool, List[str]]:
    """Like validate_record, but the status must resolve to a known canonical status."""
    errors = validate_record(data)
    if errors:
        return False, errors

    status = (resolver or default_resolver()).normalize(data.get("status"))
    if status is CanonicalStatus.UNKNOWN:
        errors.append(f"Unrecognized status: {data.get('status')!r}")

    return not errors, errors
