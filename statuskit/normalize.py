from enum import Enum
from typing import Any, Optional, Union

# Raw status values accepted from upstream sources.
StatusInput = Union[str, int, float, bytes, Enum, None]


def fold_text(s: str) -> str:
    return s.strip().lower()


def status_text(raw: Any) -> Optional[str]:
    """
    Coerce a raw status value to the folded string used for alias lookup.

    Enum members contribute their value and bytes are decoded as UTF-8.
    Returns None for absent input or values that cannot be rendered as text.
    """
    if raw is None:
        return None
    if isinstance(raw, Enum):
        raw = raw.value
        if raw is None:
            return None
    if isinstance(raw, (bytes, bytearray)):
        raw = bytes(raw).decode("utf-8", errors="replace")
    try:
        text = raw if isinstance(raw, str) else str(raw)
        return fold_text(text)
    except Exception:
        return None
