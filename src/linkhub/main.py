# src/linkhub/main.py
"""Main entry point for the linkhub application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from linkhub.api import auth_router, posts_router
from linkhub.api.errors import register_error_handlers
from linkhub.api.middleware import access_log
from linkhub.core.logging import configure_logging
from linkhub.core.settings import Settings, get_settings
from linkhub.db.session import build_engine, build_session_factory, create_tables
from linkhub.repositories.post_memory import PostMemoryRepository
from linkhub.repositories.post_mongo import PostMongoRepository
from linkhub.repositories.post_repo import PostRepository
from linkhub.repositories.user_repo import (
    UserMemoryRepository,
    UserRepository,
    UserSQLRepository,
)
from linkhub.services.session import SessionManager

logger = logging.getLogger(__name__)


def build_post_repo(settings: Settings) -> PostRepository:
    """Return the post repository selected by ``POST_BACKEND``."""
    if settings.post_backend == "mongo":
        return PostMongoRepository.from_settings(settings)
    return PostMemoryRepository()


def create_app(
    settings: Settings | None = None,
    *,
    post_repo: PostRepository | None = None,
    user_repo: UserRepository | None = None,
    session_manager: SessionManager | None = None,
) -> FastAPI:
    """Build the application and wire its storage.

    Any collaborator passed in is used as is; the others are built from
    ``settings``.
    """
    settings = settings or get_settings()

    if session_manager is None or (user_repo is None and settings.user_backend == "sql"):
        engine = build_engine(settings)
        create_tables(engine)
        session_factory = build_session_factory(engine)
        if session_manager is None:
            session_manager = SessionManager.from_settings(settings, session_factory)
        if user_repo is None and settings.user_backend == "sql":
            user_repo = UserSQLRepository(session_factory)
    if user_repo is None:
        user_repo = UserMemoryRepository()
    if post_repo is None:
        post_repo = build_post_repo(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Link aggregation and discussion API",
        version=settings.app_version,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.post_repo = post_repo
    app.state.user_repo = user_repo
    app.state.session_manager = session_manager

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    app.middleware("http")(access_log)
    register_error_handlers(app)

    app.include_router(auth_router, prefix="/api")
    app.include_router(posts_router, prefix="/api")

    @app.get("/health")
    def health_check() -> dict[str, str]:
        """Health check endpoint to verify the service is running."""
        return {"status": "ok"}

    logger.info(
        "built app: posts=%s users=%s",
        type(post_repo).__name__,
        type(user_repo).__name__,
    )
    return app


def main() -> None:
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    app = create_app(settings)
    logger.info("starting server on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
