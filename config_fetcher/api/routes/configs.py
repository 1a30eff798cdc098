"""Catch-all config route: GET /{node id}."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from config_fetcher.api.dependencies import get_app_settings, get_proxy, request_path
from config_fetcher.core.config import Settings
from config_fetcher.core.errors import ConfigFetcherError
from config_fetcher.services.proxy import AssignmentProxy

router = APIRouter(tags=["configs"])


@router.get("/{node_path:path}", response_class=Response)
async def serve_config(
    request: Request,
    proxy: Annotated[AssignmentProxy, Depends(get_proxy)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> Response:
    """
    The whole path, trimmed of slashes, is the node id.
    Errors propagate to the app exception handler (500, empty body).
    """
    try:
        data = await proxy.handle_request(request_path(request))
    except ConfigFetcherError:
        raise
    except Exception as e:
        # Typed here so it is handled and logged once, with its node id
        raise ConfigFetcherError(f"unexpected failure: {e}", error_code=type(e).__name__) from e
    return Response(content=data, media_type=settings.config_media_type)
