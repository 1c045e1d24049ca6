class ResultViewError(Exception):
    """Base exception for result view retrieval."""

    status_code = 500

    def __init__(self, message: str, query_id: str = None):
        super().__init__(message)
        self.query_id = query_id


class NotFoundError(ResultViewError):
    """The store has no such query or container."""

    status_code = 404


class NoResultError(ResultViewError):
    """A latest result was requested but the query has none."""

    status_code = 404


class StoreRequestError(ResultViewError):
    """The store rejected the request, e.g. a malformed timestamp."""

    status_code = 400


class UpstreamError(ResultViewError):
    """Communication with the store failed."""

    status_code = 502


class UpstreamTimeoutError(UpstreamError):
    """The store did not answer within the request deadline."""

    status_code = 504
