# storesearch/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from . import __version__
from .catalog import search_router
from .catalog.search import Search
from .config import SearchSettings


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )


def create_app(search: Optional[Search] = None, settings: Optional[SearchSettings] = None) -> FastAPI:
    """Build the API.  A ``Search`` passed in is used as is and left open on shutdown."""
    settings = settings or SearchSettings.from_env()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = None
        if not hasattr(app.state, "search"):
            owned = app.state.search = Search(settings)
        try:
            yield
        finally:
            if owned is not None:
                await owned.aclose()

    app = FastAPI(
        title="StoreSearch",
        description="Search the store catalog and follow the outcome of the current search.",
        version=__version__,
        lifespan=lifespan,
    )
    if search is not None:
        app.state.search = search

    # Quick liveness check
    @app.get("/")
    def health_check():
        return {"status": "ok"}

    app.include_router(search_router)
    return app


app = create_app()
