import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from redis.exceptions import ConnectionError

from src.common.exceptions import (
    InvalidCursorException,
    RepositoryUnavailableException,
    ResourceNotFoundException,
    invalid_cursor_handler,
    repository_unavailable_handler,
    resource_not_found_handler,
    unexpected_exception_handler,
    redis_connection_exception_handler,
    validation_exception_handler,
    service_unavailable_response,
    internal_error_response,
    validation_error_response,
)
from src.common.opentelemetry import setup_opentelemetry
from src.common.redis import create_redis_client
from src.config import get_settings
from src.content.dependencies import create_content_client
from src.posts.dependencies import create_static_generator
from src.posts.router import router as posts_router
from src.healthcheck.router import router as health_router

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.redis_client = create_redis_client(settings.REDIS_URL)
    app.state.content_client = create_content_client(settings)
    app.state.static_generator = create_static_generator(
        content_client=app.state.content_client,
        redis_client=app.state.redis_client,
        settings=settings,
    )

    if settings.PRERENDER_ON_STARTUP:
        try:
            await app.state.static_generator.build()
        except (
            RepositoryUnavailableException,
            InvalidCursorException,
            ConnectionError,
        ):
            logger.exception("Static build failed, pages will be generated on demand")

    yield

    await app.state.static_generator.shutdown()
    await app.state.content_client.close()
    app.state.redis_client.close()


app = FastAPI(
    title=settings.API_NAME,
    summary=settings.API_SUMMARY,
    lifespan=lifespan,
    responses={
        **service_unavailable_response,
        **internal_error_response,
        **validation_error_response,
    },
    version=settings.APP_VERSION,
)

if settings.OTEL_ENABLED:
    setup_opentelemetry(settings.OTEL_SERVICE_NAME, app)

if settings.CORS_ENABLED:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.exception_handler(RequestValidationError)(validation_exception_handler)
app.exception_handler(ResourceNotFoundException)(resource_not_found_handler)
app.exception_handler(RepositoryUnavailableException)(repository_unavailable_handler)
app.exception_handler(InvalidCursorException)(invalid_cursor_handler)
app.exception_handler(ConnectionError)(redis_connection_exception_handler)
app.exception_handler(Exception)(unexpected_exception_handler)


app.include_router(health_router)
app.include_router(posts_router)
