"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
error rendering, and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.routes import router as solve_router
from src.models.schemas import ErrorResponse
from src.relay.config import RelayConfig, get_relay_config
from src.relay.errors import RelayError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    config: RelayConfig = app.state.config
    # Startup
    logger.info(f"Starting HomeworkHelper API (model={config.model_name})...")
    if not config.has_api_key:
        logger.warning("DEEPSEEK_API_KEY is not set; /api/solve will answer 500")
    yield
    # Shutdown
    logger.info("Shutting down HomeworkHelper API...")


async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    """Render a RelayError as a structured ErrorResponse."""
    logger.warning(f"{request.url.path} -> {exc.status_code}: {exc.error}")
    body = ErrorResponse(error=exc.error, details=exc.details)
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
    )


def create_app(config: RelayConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Relay configuration. Loads from environment if not provided.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="HomeworkHelper API",
        description=(
            "Relays homework questions to the DeepSeek chat-completion API "
            "with a step-by-step tutoring prompt and returns the answer text."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    application.state.config = config or get_relay_config()

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.add_exception_handler(RelayError, relay_error_handler)
    application.include_router(solve_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "homework-helper"}

    return application


app = create_app()
