import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.domain.exceptions import StorageUnavailableError
from app.infrastructure.database import engine, initialize_database
from app.infrastructure.notifications import NotificationDispatcher, SessionRegistry
from app.infrastructure.security import user_id_from_token
from app.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schema on startup and release pooled connections on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StorageUnavailableError)
    async def storage_unavailable_handler(request: Request, exc: StorageUnavailableError):
        logger.error("Storage failure on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Server error"},
        )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="DEMS API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.client_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    registry = SessionRegistry(
        token_decoder=user_id_from_token,
        send_timeout=settings.push_timeout_seconds,
    )
    app.state.session_registry = registry
    app.state.notification_dispatcher = NotificationDispatcher(registry)

    register_exception_handlers(app)
    register_routes(app)
    return app


app = create_app()
