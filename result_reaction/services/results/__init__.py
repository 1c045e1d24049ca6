"""Result view package.

Structure:
- client.py: capability for reading result history from the external store
- query.py: read-only query layer draining client sequences into data values
- mappers.py: extraction of ``data`` from result snapshots
- dto.py: transport objects
- exceptions.py: error taxonomy, each error carrying its HTTP status
"""

from result_reaction.services.results.client import (
    HttpResultViewClient,
    ResultViewClient,
)
from result_reaction.services.results.dto import LatestResult, ResultSnapshot
from result_reaction.services.results.exceptions import (
    NoResultError,
    NotFoundError,
    ResultViewError,
    StoreRequestError,
    UpstreamError,
    UpstreamTimeoutError,
)
from result_reaction.services.results.query import ResultViewQuery

__all__ = [
    "HttpResultViewClient",
    "LatestResult",
    "NoResultError",
    "NotFoundError",
    "ResultSnapshot",
    "ResultViewClient",
    "ResultViewError",
    "ResultViewQuery",
    "StoreRequestError",
    "UpstreamError",
    "UpstreamTimeoutError",
]
