"""
Serve the result reaction API.

The app listens on the sidecar port and the application port at once. Both
servers share one application instance; only the first runs its lifespan.

Usage:
    python -m result_reaction.run_server
"""

import asyncio
import logging
from typing import List

import uvicorn
from fastapi import FastAPI

from result_reaction.api.app import configure_logging, create_app
from result_reaction.infrastructure.config.settings import Settings
from result_reaction.infrastructure.data.config import ReactionConfig

logger = logging.getLogger(__name__)


def build_servers(app: FastAPI, config: ReactionConfig) -> List[uvicorn.Server]:
    """Create one uvicorn server per configured port."""
    servers = []
    for index, port in enumerate(config.ports):
        server_config = uvicorn.Config(
            app,
            host=config.host,
            port=port,
            log_level=config.log_level.lower(),
            lifespan="on" if index == 0 else "off",
        )
        servers.append(uvicorn.Server(server_config))
    return servers


async def serve(app: FastAPI, config: ReactionConfig):
    servers = build_servers(app, config)
    logger.info(f"Serving on {config.host} ports {', '.join(map(str, config.ports))}")
    await asyncio.gather(*(server.serve() for server in servers))


def main():
    config = Settings().load_config()
    configure_logging(config.log_level)
    app = create_app(config)
    asyncio.run(serve(app, config))


if __name__ == "__main__":
    main()
