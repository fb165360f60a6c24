"""FastAPI application factory."""
from fastapi import FastAPI

from ridefile.api.routes import rides
from ridefile.config import get_settings


def create_app() -> FastAPI:
    """Build and return the FastAPI app."""
    settings = get_settings()

    app = FastAPI(
        title=settings.api_title,
        description="GPX/TCX ride file ingestion",
        version="0.1.0",
    )

    app.include_router(rides.router, prefix="/rides", tags=["rides"])

    return app


# Module-level app instance for uvicorn
app = create_app()
