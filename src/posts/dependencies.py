from fastapi import Request

from src.config import Settings
from src.content.client import ContentClient
from src.lock.service import LockService
from src.common.redis import RedisClient
from src.posts.generation import StaticGenerator
from src.render_cache.redis.store import RedisRenderCache


def create_static_generator(
    *,
    content_client: ContentClient,
    redis_client: RedisClient,
    settings: Settings,
) -> StaticGenerator:
    return StaticGenerator(
        client=content_client,
        render_cache=RedisRenderCache(
            redis_client=redis_client,
            key_prefix=settings.RENDER_CACHE_NAMESPACE,
        ),
        lock_service=LockService(redis_client=redis_client),
        document_type=settings.CONTENT_DOCUMENT_TYPE,
        listing_page_size=settings.LISTING_PAGE_SIZE,
        paths_page_size=settings.PATHS_PAGE_SIZE,
        revalidate_seconds=settings.REVALIDATE_SECONDS,
        date_locale=settings.DATE_LOCALE,
        lock_timeout=settings.GENERATION_LOCK_TIMEOUT,
    )


def get_static_generator(request: Request) -> StaticGenerator:
    return request.app.state.static_generator
