"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

import httpx
from fastapi import Depends, FastAPI, Request

from site_analysis.config import configure_logging, settings
from site_analysis.handlers import CheckHandler
from site_analysis.repositories import create_cache_store
from site_analysis.services import CheckService

logger = logging.getLogger(__name__)


def get_check_service(request: Request) -> CheckService:
    """Dependency injection for CheckService from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The CheckService instance from app.state

    Raises:
        RuntimeError: If service is not initialized
    """
    service = getattr(request.app.state, "check_service", None)
    if service is None:
        raise RuntimeError("CheckService not initialized. Check lifespan setup.")
    return service


def get_handler(request: Request) -> CheckHandler:
    """Dependency injection for CheckHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The CheckHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "check_handler", None)
    if handler is None:
        raise RuntimeError("CheckHandler not initialized. Check lifespan setup.")
    return handler


def create_http_client() -> httpx.AsyncClient:
    """Build the shared outbound client for upstream calls."""
    kwargs = {"headers": {"User-Agent": settings.http_user_agent}}
    if settings.http_timeout is not None:
        kwargs["timeout"] = settings.http_timeout
    return httpx.AsyncClient(**kwargs)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores them in app.state unless a test
    already placed a service there:
    1. Repository (cache store) - chosen by CACHE_BACKEND
    2. Service (business logic) - stored in app.state.check_service
    3. Handler (HTTP responses) - stored in app.state.check_handler

    Cleanup:
        Closes the outbound HTTP client and removes state on shutdown
    """
    configure_logging()

    service = getattr(app.state, "check_service", None)
    if service is None:
        service = CheckService.create(
            repository=create_cache_store(),
            http_client=create_http_client(),
        )
    app.state.check_service = service
    app.state.check_handler = CheckHandler(check_service=service)

    logger.info("Cache backend: %s", settings.cache_backend)
    logger.info("Checks: %s", ", ".join(service.checks))
    if not service.is_healthy():
        logger.warning("Cache store is not reachable; checks will run uncached")

    yield

    await service.close()
    del app.state.check_handler
    del app.state.check_service
    logger.info("Check service shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[CheckHandler, Depends(get_handler)]
ServiceDep = Annotated[CheckService, Depends(get_check_service)]
