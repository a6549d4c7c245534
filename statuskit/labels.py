"""
Display labels and selectable options for canonical statuses.
Text-only, render-agnostic.
"""

from typing import Dict, List, Optional

from .normalize import StatusInput
from .status import CanonicalStatus, StatusResolver, default_resolver

STATUS_DESCRIPTIONS = {
    CanonicalStatus.ACTIVE.value: "Task is currently being worked on",
    CanonicalStatus.PENDING.value: "Task is ready to be started",
    CanonicalStatus.COMPLETED.value: "Task is completed",
    CanonicalStatus.ARCHIVED.value: "Task is archived and hidden from active lists",
    CanonicalStatus.UNKNOWN.value: "Status was not recognized",
}


def get_status_label(raw: StatusInput, resolver: Optional[StatusResolver] = None) -> str:
    """Get display label for any raw status."""
    status = (resolver or default_resolver()).normalize(raw)
    return CanonicalStatus.display_labels()[status.value]


def status_options() -> List[Dict[str, str]]:
    """Options for a status picker, in declaration order."""
    labels = CanonicalStatus.display_labels()
    return [
        {"value": value, "label": labels[value], "description": STATUS_DESCRIPTIONS[value]}
        for value in CanonicalStatus.choices()
    ]
