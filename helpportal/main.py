# helpportal/main.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session, sessionmaker

from . import __version__
from .chat_service.routes import build_router as build_chat_router
from .request_service.routes import build_router as build_request_router
from .shared import config
from .shared.database import init_db, make_engine, make_session_factory
from .user_service.routes import build_router as build_user_router

logger = logging.getLogger("helpportal")

SERVICES = ("users", "requests", "chat")


def create_app(SessionLocal: Optional[sessionmaker[Session]] = None) -> FastAPI:
    """
    Build the portal API.

    SessionLocal is the store every service router writes through. When it
    is not given, one is created from DATABASE_URL and the tables are created.
    """
    if SessionLocal is None:
        engine = make_engine(config.database_url())
        init_db(engine)
        SessionLocal = make_session_factory(engine)
        logger.info("Using database %s", engine.url.render_as_string(hide_password=True))

    app = FastAPI(title="Neighborhood Help Portal", version=__version__)

    origins = config.cors_origins()
    allow_credentials = True
    if origins == ["*"]:
        # Browsers reject "*" with credentials
        allow_credentials = False

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(build_user_router(SessionLocal), prefix="/users", tags=["Users"])
    app.include_router(build_request_router(SessionLocal), prefix="/requests", tags=["Requests"])
    app.include_router(build_chat_router(SessionLocal), prefix="/chat", tags=["Chat"])

    @app.get("/health", operation_id="health_check", tags=["Health"])
    async def health_check():
        return {"status": "healthy", "service": "helpportal"}

    @app.get("/", operation_id="root", tags=["Root"])
    async def root():
        return {
            "service": "Neighborhood Help Portal",
            "version": __version__,
            "available_services": list(SERVICES),
            "docs": "/docs",
            "openapi": "/openapi.json",
        }

    return app


def run() -> None:
    import uvicorn

    logging.basicConfig(level=config.log_level())
    uvicorn.run(create_app(), host="0.0.0.0", port=config.port())


if __name__ == "__main__":
    run()
