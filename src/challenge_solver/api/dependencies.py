"""Dependency injection configuration for the FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - No global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

import httpx
from fastapi import Depends, FastAPI, Request

from challenge_solver.config import settings
from challenge_solver.handlers import RelayHandler
from challenge_solver.utils.logger import configure_logging

logger = logging.getLogger(__name__)


def get_relay_handler(request: Request) -> RelayHandler:
    """Dependency injection for RelayHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The RelayHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "relay_handler", None)
    if handler is None:
        raise RuntimeError("RelayHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Creates the upstream httpx client and the relay handler, stores them in
    app.state, and closes the client on shutdown.
    """
    configure_logging(settings.log_level)

    client = httpx.AsyncClient(timeout=settings.http_timeout)
    app.state.http_client = client
    app.state.relay_handler = RelayHandler(client=client)
    logger.info("Relay forwarding to %s", settings.upstream_completion_url)

    yield

    await client.aclose()
    del app.state.relay_handler
    del app.state.http_client
    logger.info("Relay shut down")


# Type alias for cleaner dependency injection
RelayDep = Annotated[RelayHandler, Depends(get_relay_handler)]
