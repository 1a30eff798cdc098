"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import Response

from config_fetcher import __version__
from config_fetcher.api.dependencies import request_path
from config_fetcher.api.routes import configs_router
from config_fetcher.core.config import Settings, get_settings
from config_fetcher.core.errors import ConfigFetcherError
from config_fetcher.core.logging import configure_logging, structured_log
from config_fetcher.core.telemetry import init_telemetry, instrument_fastapi
from config_fetcher.services.proxy import AssignmentProxy, node_id_from_path


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: configure logging and telemetry, build the assignment proxy."""
    if app.state.settings is None:
        app.state.settings = get_settings()
    settings = app.state.settings
    configure_logging(settings.log_level)
    init_telemetry(project_id=settings.gcp_project_id)
    app.state.proxy = AssignmentProxy.from_settings(settings)
    yield
    # Assignments are not persisted; nothing to flush


async def config_fetcher_error_handler(request: Request, exc: ConfigFetcherError) -> Response:
    """Log the failure with its node id; the caller only sees a bare 500."""
    structured_log(
        "ERROR",
        f"failed to serve config for {node_id_from_path(request_path(request))!r}",
        node_id=node_id_from_path(request_path(request)),
        operation="config.serve",
        metadata=exc.details,
        error={"type": exc.error_code, "message": exc.message},
    )
    return Response(status_code=500)


async def unhandled_error_handler(request: Request, exc: Exception) -> Response:
    """Bare 500 for failures outside the config route; the server logs the traceback."""
    return Response(status_code=500)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the app. Without explicit settings they are read from the environment at startup."""
    app = FastAPI(
        title="NordVPN Config Fetcher",
        description="Hands each node a unique recommended VPN hostname and proxies its config file",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.include_router(configs_router)
    app.add_exception_handler(ConfigFetcherError, config_fetcher_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
    instrument_fastapi(app)
    return app


app = create_app()
