from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tictactoe.api.routes import router
from tictactoe.game_store import SessionRegistry
from tictactoe.infra.settings import Settings, load_settings

APP_NAME = "tictactoe-server"
APP_VERSION = "0.1.0"

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()

    # Configure logging
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(title=APP_NAME, version=APP_VERSION)
    app.state.settings = settings
    # One registry per process, handed to routes through get_registry().
    app.state.registry = SessionRegistry(id_prefix=settings.session_id_prefix)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.include_router(router)

    @app.get("/info")
    async def info() -> dict[str, str]:
        return {"name": APP_NAME, "version": APP_VERSION}

    logger.info("app created session_id_prefix=%s cors_origins=%s", settings.session_id_prefix, settings.cors_origins)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = app.state.settings
    uvicorn.run(app, host=_settings.host, port=_settings.port)
