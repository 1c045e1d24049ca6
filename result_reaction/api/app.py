"""
FastAPI application serving materialized query results.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from result_reaction import __version__
from result_reaction.api.routes.results import router as results_router
from result_reaction.infrastructure.container import Container
from result_reaction.infrastructure.data.config import ReactionConfig
from result_reaction.services.results.client import ResultViewClient

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO"):
    """Configure root logging for the process."""
    logging.basicConfig(level=getattr(logging, level.upper()), format=LOG_FORMAT)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: Container = app.state.container
    config = container.config
    logger.info(
        f"Result reaction starting (container={config.query_container_id}, "
        f"view service={config.view_service_url})"
    )
    container.get_result_view_client()

    yield

    logger.info("Shutting down result view client.")
    await container.close()


def create_app(
    config: Optional[ReactionConfig] = None,
    result_view_client: Optional[ResultViewClient] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        config: Process configuration, defaults to ``ReactionConfig()``
        result_view_client: Client to read results with; the HTTP client
            built from ``config`` is used when omitted

    Returns:
        Configured FastAPI application
    """
    config = config or ReactionConfig()
    configure_logging(config.log_level)

    app = FastAPI(
        title="Result Reaction API",
        description="Read API over materialized query results.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.container = Container(config, result_view_client=result_view_client)
    app.include_router(results_router)

    return app
