from __future__ import annotations

from typing import Any, Tuple

DATA_FIELD = "data"


def extract_data(snapshot: Any) -> Tuple[bool, Any]:
    """Return ``(True, value)`` when the snapshot carries a ``data`` field.

    Accepts any decoded JSON element. Header records and non-object elements
    yield ``(False, None)`` so callers can skip them. A present ``data: null``
    is a value.
    """
    if isinstance(snapshot, dict) and DATA_FIELD in snapshot:
        return True, snapshot[DATA_FIELD]
    return False, None
