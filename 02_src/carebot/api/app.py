"""FastAPI application setup."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..app import Application, IApplication
from ..logging_config import get_logger
from .routes import control, observability, webhook

logger = get_logger(__name__)

# Global application instance
_app: Application | None = None


def get_app() -> Application:
    """Get the global application instance."""
    global _app
    if not _app:
        _app = Application()
    return _app


def create_fastapi_app(application: IApplication | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    application = application or get_app()

    @asynccontextmanager
    async def lifespan(fastapi_app: FastAPI):
        await application.start()
        sim_instance = control.get_sim_instance()
        if sim_instance and hasattr(sim_instance, "set_tracker"):
            tracker = getattr(application, "_tracker", None)
            if tracker:
                sim_instance.set_tracker(tracker)
        yield
        sim_instance = control.get_sim_instance()
        if sim_instance:
            await sim_instance.stop()
        await application.stop()

    fastapi_app = FastAPI(
        title="Care Bot API",
        description="WhatsApp conversation engine for healthcare products",
        version="0.1.0",
        lifespan=lifespan,
    )

    fastapi_app.include_router(webhook.create_webhook_router(application))
    fastapi_app.include_router(control.create_control_router(application))
    fastapi_app.include_router(observability.create_observability_router(application))

    return fastapi_app
