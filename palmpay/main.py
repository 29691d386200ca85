from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from palmpay import __version__
from palmpay.core.config import Settings, get_settings
from palmpay.core.container import build_container
from palmpay.core.logging import configure_logging
from palmpay.interfaces.http import create_api_router
from palmpay.interfaces.ws import routes as websocket_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = app.state.container
    await container.init_infrastructure()
    yield
    await container.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.project_name,
        description="Palm Pay peer-to-peer payments server",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.container = build_container(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(create_api_router(settings.api_prefix))
    app.include_router(websocket_routes.router)

    @app.get("/health", include_in_schema=False)
    async def health() -> dict:
        return {"status": "ok", "version": __version__}

    return app


app = create_app()
