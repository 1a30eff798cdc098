"""API route modules."""

from config_fetcher.api.routes.configs import router as configs_router

__all__ = ["configs_router"]
