"""
Sentinel Grid - Border Sector Risk Intelligence
API Module - FastAPI Application

Main FastAPI application with CORS, routes and error mapping, plus a
background server wrapper.
"""

import logging
import threading
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from sentinel.api.routes import (
    status_router,
    grid_router,
    alerts_router,
    chat_router
)
from sentinel.api.routes.status import APP_VERSION
from sentinel.api.state import set_pipeline
from sentinel.config import APIConfig
from sentinel.exceptions import InvalidSectorError
from sentinel.pipeline.grid_pipeline import GridRefreshPipeline

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000",
    "http://127.0.0.1:3000",
)


async def invalid_sector_handler(request: Request, exc: InvalidSectorError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "sector_id": exc.sector_id}
    )


def create_app(
    pipeline: Optional[GridRefreshPipeline] = None,
    config: Optional[APIConfig] = None
) -> FastAPI:
    """
    Create FastAPI application.

    Args:
        pipeline: Pipeline to serve (a default one is built lazily if omitted)
        config: API configuration

    Returns:
        Configured FastAPI app
    """
    config = config or APIConfig()

    if pipeline is not None:
        set_pipeline(pipeline)

    app = FastAPI(
        title="Sentinel Grid API",
        description="Border sector risk fusion, autonomous alerting and threat-aware routing",
        version=APP_VERSION
    )

    app.add_exception_handler(InvalidSectorError, invalid_sector_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(DEFAULT_CORS_ORIGINS),
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.include_router(status_router)
    app.include_router(grid_router)
    app.include_router(alerts_router)
    app.include_router(chat_router)

    @app.get("/")
    async def root():
        """API root endpoint."""
        return {
            "name": "Sentinel Grid API",
            "version": APP_VERSION,
            "endpoints": {
                "status": "/status",
                "grid": "/grid",
                "decisions": "/decisions",
                "alerts": "/alerts",
                "reports": "/reports",
                "route": "/route",
                "chat": "/chat",
                "docs": "/docs"
            }
        }

    logger.info(f"FastAPI app created (host={config.host}, port={config.port})")
    return app


class APIServer:
    """
    API server wrapper for background execution.

    Runs the FastAPI server in a background thread alongside the
    refresh pipeline.

    Example:
        >>> server = APIServer(pipeline)
        >>> server.start()
        >>> server.stop()
    """

    def __init__(
        self,
        pipeline: Optional[GridRefreshPipeline] = None,
        config: Optional[APIConfig] = None
    ):
        self._config = config or APIConfig()
        self._app = create_app(pipeline, self._config)
        self._thread: Optional[threading.Thread] = None
        self._server: Optional[uvicorn.Server] = None
        self._running = False

    @property
    def app(self) -> FastAPI:
        return self._app

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Start the API server in a background thread."""
        if self._running:
            logger.warning("API server already running")
            return

        self._server = uvicorn.Server(uvicorn.Config(
            self._app,
            host=self._config.host,
            port=self._config.port,
            log_level="warning",
            access_log=False
        ))

        self._thread = threading.Thread(
            target=self._server.run,
            daemon=True,
            name="Sentinel-API"
        )
        self._thread.start()
        self._running = True

        logger.info(
            f"API server started at http://{self._config.host}:{self._config.port}"
        )

    def stop(self) -> None:
        """Stop the API server."""
        if not self._running:
            return

        if self._server:
            self._server.should_exit = True

        self._running = False
        logger.info("API server stopped")

    def __repr__(self) -> str:
        return (
            f"APIServer(host={self._config.host}, "
            f"port={self._config.port}, "
            f"running={self._running})"
        )


# Module-level app instance for standalone uvicorn usage:
# uvicorn sentinel.api.app:app --reload
app = create_app()
