#!/usr/bin/env python3
"""
Nucleus - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Builds the client (auth, dispatch, storage)
3. Runs the internal API server

All business logic is in the modules, following black box principles.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import List, Optional

import redis.asyncio as redis
import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Header, HTTPException, Request
from fastapi.responses import JSONResponse

from nucleus import __version__
from nucleus.client import NucleusClient, build_client
from nucleus.config import Settings, load_settings
from nucleus.events import RESERVED_EVENTS
from nucleus.logging_config import configure_logging, get_logging_config
from nucleus.modules.api import (
    CommandInfo,
    CommandRequest,
    CommandResponse,
    EventRequest,
    EventResponse,
    ReplyModel,
)
from nucleus.modules.dispatch import Interaction
from nucleus.modules.storage import connect

logger = logging.getLogger(__name__)

AUTH_HEADER = "X-Nucleus-Auth"


def get_client(request: Request) -> NucleusClient:
    """Return the client built at startup."""
    client = getattr(request.app.state, "client", None)
    if client is None:
        raise HTTPException(503, "Service not initialized")
    return client


async def verify_token(
    request: Request,
    x_nucleus_auth: Optional[str] = Header(
        None, alias=AUTH_HEADER, description="Rotating internal API token"
    ),
) -> str:
    """Reject the request unless it carries a currently valid token."""
    client = get_client(request)
    result = client.auth.authenticate(x_nucleus_auth)
    if not result.ok:
        raise HTTPException(401, "Unauthorized")
    return result.identity


router = APIRouter(prefix="/api", dependencies=[Depends(verify_token)])


@router.get("/commands", response_model=List[CommandInfo])
async def list_commands(client: NucleusClient = Depends(get_client)):
    """
    List registered commands.

    Returns:
        200: Command names and descriptions
        401: Unauthorized
    """
    return [
        CommandInfo(name=handler.name, description=handler.description)
        for handler in client.registry.commands().values()
    ]


@router.post("/commands/{name}", response_model=CommandResponse)
async def run_command(
    name: str,
    request: CommandRequest,
    client: NucleusClient = Depends(get_client),
):
    """
    Run a command and return the replies it produced.

    Unknown commands are ignored and reported with handled=false.

    Returns:
        200: Command dispatched (or ignored)
        401: Unauthorized
    """
    interaction = Interaction(
        command_name=name,
        user_id=request.user_id,
        guild_id=request.guild_id,
        options=request.options,
    )

    task = client.dispatcher.dispatch(name, interaction)
    if task is None:
        return CommandResponse(command=name, handled=False, ok=True)

    # Shielded: a disconnecting caller must not cancel the handler
    outcome = await asyncio.shield(task)
    return CommandResponse(
        command=name,
        handled=True,
        ok=outcome.ok,
        replies=[ReplyModel(**asdict(reply)) for reply in interaction.replies],
    )


@router.post("/events/{event}", response_model=EventResponse, status_code=202)
async def emit_event(
    event: str,
    request: EventRequest,
    client: NucleusClient = Depends(get_client),
):
    """
    Announce a lifecycle event to its subscribers without waiting for them.

    Returns:
        202: Event accepted
        401: Unauthorized
        403: Event is reserved for the application
    """
    if event in RESERVED_EVENTS:
        raise HTTPException(403, "Event cannot be emitted externally")

    tasks = client.dispatcher.emit(event, *request.args)
    return EventResponse(event=event, subscribers=len(tasks))


def create_app(
    settings: Optional[Settings] = None,
    client: Optional[NucleusClient] = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        settings: Application settings (loaded from environment at startup if omitted)
        client: Pre-built client; when omitted one is built at startup

    Returns:
        Configured FastAPI app
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting Nucleus API...")

        if app.state.client is None:
            app_settings = settings or load_settings()
            redis_client = connect(app_settings.storage.redis_url)
            app.state.client = build_client(app_settings, redis_client)

        app.state.client.dispatcher.emit("ready")
        logger.info("Nucleus API started successfully")

        yield

        logger.info("Shutting down Nucleus API...")
        await app.state.client.teardown()
        logger.info("Nucleus API shutdown complete")

    app = FastAPI(
        title="Nucleus API",
        description="Nucleus - internal bot API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.client = client
    app.include_router(router, tags=["dispatch"])

    @app.get("/healthz")
    async def healthz():
        """
        Minimal unauthenticated liveness check.

        Returns:
            200: Service is running
        """
        return {"status": "ok"}

    @app.get("/health")
    async def health_check(request: Request):
        """
        Health check including storage connectivity.

        Returns:
            200: Service healthy
            503: Service unhealthy
        """
        nucleus_client = getattr(request.app.state, "client", None)
        if nucleus_client is None:
            return JSONResponse(
                status_code=503, content={"status": "unhealthy", "modules": "not initialized"}
            )

        try:
            if nucleus_client.redis is not None:
                await nucleus_client.redis.ping()
                redis_status = "connected"
            else:
                redis_status = "disconnected"
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return JSONResponse(status_code=503, content={"status": "unhealthy", "error": str(e)})

        if redis_status != "connected":
            return JSONResponse(
                status_code=503, content={"status": "unhealthy", "redis": redis_status}
            )
        return {
            "status": "healthy",
            "redis": redis_status,
            "commands": len(nucleus_client.registry.commands()),
            "pending_handlers": nucleus_client.dispatcher.pending,
            "version": __version__,
        }

    @app.exception_handler(redis.ConnectionError)
    async def redis_error_handler(request, exc):
        """Handle Redis connection errors."""
        logger.error(f"Redis connection error: {exc}")
        return JSONResponse(status_code=503, content={"error": "Database connection failed"})

    @app.exception_handler(ValueError)
    async def validation_error_handler(request, exc):
        """Handle validation errors."""
        logger.error(f"Validation error: {exc}")
        return JSONResponse(status_code=400, content={"error": str(exc)})

    return app


app = create_app()


def main() -> None:
    settings = load_settings()
    configure_logging(settings.logging.level)

    uvicorn.run(
        create_app(settings),
        host=settings.api.host,
        port=settings.api.port,
        log_level=settings.logging.level.lower(),
        log_config=get_logging_config(settings.logging.level),
    )


if __name__ == "__main__":
    main()
