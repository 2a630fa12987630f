"""
FastAPI Application Entry Point
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI

from leadcaller import __version__
from leadcaller.api.dependencies import Services, build_services
from leadcaller.api.routes import api_router
from leadcaller.core.config import Settings, load_settings
from leadcaller.core.logging import configure_logging
from leadcaller.core.request_logging import RequestLoggingMiddleware
from leadcaller.core.validation import validate_providers_on_startup

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan.
    
    Startup fails with ConfigurationError when required credentials are
    missing, so the server never serves with partial configuration.
    """
    settings: Settings = app.state.services.settings
    logger.info("Starting Lead Caller...")
    
    validate_providers_on_startup(settings)
    
    logger.info(f"Webhook base URL: {settings.base_url}")
    logger.info("Lead Caller started successfully")
    
    yield
    
    logger.info("Lead Caller shutdown complete")


def create_app(
    settings: Optional[Settings] = None,
    services: Optional[Services] = None
) -> FastAPI:
    """Create the FastAPI application."""
    if services is None:
        services = build_services(settings or load_settings())
    
    app = FastAPI(
        title="Lead Caller",
        description="Outbound AI voice calls with CRM outcome tagging",
        version=__version__,
        lifespan=lifespan
    )
    app.state.services = services
    
    app.add_middleware(RequestLoggingMiddleware)
    app.include_router(api_router)
    
    return app


def main() -> None:
    """Run the server. uvicorn exits if startup validation fails."""
    import uvicorn
    
    settings = load_settings()
    configure_logging(settings.log_level)
    
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
