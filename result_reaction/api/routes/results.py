"""
Result view API routes.
"""

import logging
from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, Request

from result_reaction.schemas import ERROR_RESPONSES
from result_reaction.services.results.exceptions import NoResultError, ResultViewError
from result_reaction.services.results.query import ResultViewQuery

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["results"],
    responses=ERROR_RESPONSES,
)


def get_result_view_query(request: Request) -> ResultViewQuery:
    """Build a query object from the application's container."""
    return request.app.state.container.get_result_view_query()


def _to_http_exception(error: ResultViewError) -> HTTPException:
    return HTTPException(status_code=error.status_code, detail=str(error))


@router.get("/{query_id}")
async def get_current_result(
    query_id: str,
    query: ResultViewQuery = Depends(get_result_view_query),
) -> Any:
    """
    Get the latest result of a query.

    Args:
        query_id: Query identifier

    Returns:
        The ``data`` value of the most recent result snapshot
    """
    try:
        logger.info(f"Retrieving the current result set for {query_id}")
        latest = await query.get_latest(query_id)
        if latest is None:
            raise NoResultError(
                f"No result available for query: {query_id}", query_id=query_id
            )
        logger.debug(f"Result for {query_id}: {latest.data}")
        return latest.data

    except ResultViewError as e:
        logger.warning(f"[CurrentResult] {query_id}: {type(e).__name__}: {str(e)}")
        raise _to_http_exception(e)
    except Exception as e:
        logger.exception(f"Error retrieving current result for {query_id}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Server error: {str(e)}")


@router.get("/{query_id}/all")
async def get_all_results(
    query_id: str,
    query: ResultViewQuery = Depends(get_result_view_query),
) -> List[Any]:
    """Get every stored result of a query, oldest first."""
    try:
        logger.info(f"Getting all results for {query_id}")
        results = await query.get_all(query_id)
        logger.debug(f"Retrieved {len(results)} results for {query_id}")
        return results

    except ResultViewError as e:
        logger.warning(f"[AllResults] {query_id}: {type(e).__name__}: {str(e)}")
        raise _to_http_exception(e)
    except Exception as e:
        logger.exception(f"Error retrieving all results for {query_id}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Server error: {str(e)}")


# ts is in the format of "2023-04-20T00:00:00"; the store validates it.
@router.get("/{query_id}/{ts}")
async def get_result_at_timestamp(
    query_id: str,
    ts: str,
    query: ResultViewQuery = Depends(get_result_view_query),
) -> List[Any]:
    """Get the results of a query as known at ``ts``."""
    try:
        logger.info(f"Result set for {query_id} at {ts}")
        results = await query.get_at_timestamp(query_id, ts)
        logger.debug(f"Retrieved {len(results)} results for {query_id} at {ts}")
        return results

    except ResultViewError as e:
        logger.warning(
            f"[ResultAtTimestamp] {query_id}@{ts}: {type(e).__name__}: {str(e)}"
        )
        raise _to_http_exception(e)
    except Exception as e:
        logger.exception(f"Error retrieving result for {query_id} at {ts}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Server error: {str(e)}")
