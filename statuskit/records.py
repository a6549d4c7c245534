import json
from pathlib import Path
from typing import Any, Dict, List


class StoreError(ValueError):
    """Raised when a records file cannot be read or has the wrong shape."""
    pass


def load_records(path: Path) -> List[Dict[str, Any]]:
    if not path.exists():
        raise StoreError(f"Input file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            content = f.read().strip()
            if not content:
                return []
            data = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError, IOError) as e:
        raise StoreError(f"Could not read records from {path}: {e}") from e
    # A single object is accepted as a one-record file
    if isinstance(data, dict):
        return [data]
    if not isinstance(data, list):
        raise StoreError(f"Expected a JSON array of records in {path}")
    return data


def save_records(path: Path, records: List[Dict[str, Any]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(records, f, indent=2, ensure_ascii=False)


def diff_dict(old: Dict[str, Any], new: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    changed = {}
    keys = set(old.keys()) | set(new.keys())
    for k in keys:
        ov = old.get(k)
        nv = new.get(k)
        if ov != nv:
            changed[k] = {"old": ov, "new": nv}
    return changed
