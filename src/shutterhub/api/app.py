"""FastAPI application factory."""

from fastapi import FastAPI

from shutterhub.api.billing import router as billing_router
from shutterhub.api.content import router as content_router
from shutterhub.api.instant import router as instant_router
from shutterhub.api.jobs import router as jobs_router
from shutterhub.api.photographers import router as photographers_router
from shutterhub.app_logging import configure_logging
from shutterhub.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()

    app = FastAPI(title="ShutterHub")
    app.state.container = container

    app.include_router(instant_router)
    app.include_router(photographers_router)
    app.include_router(content_router)
    app.include_router(billing_router)
    app.include_router(jobs_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
