from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

# One element of a result sequence as returned by the store.
ResultSnapshot = Dict[str, Any]


@dataclass(frozen=True)
class LatestResult:
    """Most recent ``data`` value of a query.

    ``data`` may itself be ``None`` when the store recorded a JSON null; absence
    of any result is expressed by not returning a LatestResult at all.
    """

    query_id: str
    data: Any
