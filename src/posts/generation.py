import asyncio
import logging
from datetime import timedelta

from src.common.current_datetime import get_current_datetime
from src.common.exceptions import (
    RepositoryUnavailableException,
    ResourceLockedException,
    ResourceNotFoundException,
    ResourceType,
)
from src.content.client import ContentClient
from src.lock.service import LockService
from src.posts.rendering import render_index_page, render_post_page
from src.posts.schemas import FallbackPage, IndexPage, PostPage
from src.render_cache.base import RenderCache
from src.render_cache.schemas import CachedRender, RenderKind

logger = logging.getLogger(__name__)

LISTING_FIELDS = ["title", "subtitle", "author"]
PATH_FIELDS = ["title"]
INDEX_KEY = "home"


class StaticGenerator:
    """Pre-renders the index and post pages and keeps post renders fresh.

    Post renders are served from the cache until ``revalidate_seconds`` have
    elapsed since they were generated. The first request after that gets the
    stale render while a regeneration runs in the background. Posts that were
    never generated are rendered on their first request.
    """

    def __init__(
        self,
        *,
        client: ContentClient,
        render_cache: RenderCache,
        lock_service: LockService,
        document_type: str,
        listing_page_size: int,
        paths_page_size: int,
        revalidate_seconds: int,
        date_locale: str,
        lock_timeout: int = 60,
    ):
        self.client = client
        self.render_cache = render_cache
        self.lock_service = lock_service
        self.document_type = document_type
        self.listing_page_size = listing_page_size
        self.paths_page_size = paths_page_size
        self.revalidate_seconds = revalidate_seconds
        self.date_locale = date_locale
        self.lock_timeout = lock_timeout
        self._regenerations: dict[str, asyncio.Task[None]] = {}

    @property
    def pending_regenerations(self) -> list[asyncio.Task[None]]:
        return list(self._regenerations.values())

    async def enumerate_paths(self) -> list[str]:
        posts = await self.client.query_all(
            self.document_type,
            fetch_fields=PATH_FIELDS,
            page_size=self.paths_page_size,
        )
        return [post.uid for post in posts if post.uid]

    async def render_index(self) -> IndexPage:
        listing = await self.client.query_listing(
            self.document_type,
            fetch_fields=LISTING_FIELDS,
            page_size=self.listing_page_size,
        )
        return render_index_page(listing, self.date_locale)

    async def render_post(self, uid: str) -> PostPage:
        post = await self.client.get_by_uid(self.document_type, uid)
        return render_post_page(post, self.date_locale)

    async def generate_index(self) -> IndexPage:
        index_page = await self.render_index()
        self.render_cache.set_render(
            RenderKind.INDEX,
            INDEX_KEY,
            index_page.model_dump(mode="json"),
            generated_at=get_current_datetime(),
        )
        return index_page

    async def generate_post(self, uid: str) -> PostPage:
        lock = self.lock_service.acquire_lock(
            f"render:{RenderKind.POST.value}:{uid}",
            timeout=self.lock_timeout,
            resource_type=ResourceType.PAGE,
        )
        try:
            post_page = await self.render_post(uid)
            self.render_cache.set_render(
                RenderKind.POST,
                uid,
                post_page.model_dump(mode="json"),
                generated_at=get_current_datetime(),
            )
            logger.info(f"Generated page for post '{uid}'")
            return post_page
        finally:
            self.lock_service.release_lock(lock)

    async def build(self) -> list[str]:
        logger.info("Building static pages...")

        await self.generate_index()

        generated: list[str] = []
        for uid in await self.enumerate_paths():
            try:
                await self.generate_post(uid)
                generated.append(uid)
            except ResourceNotFoundException:
                logger.warning(f"Post '{uid}' disappeared during build, skipping")
            except ResourceLockedException:
                logger.info(f"Post '{uid}' is being generated elsewhere, skipping")

        logger.info(f"Built {len(generated)} post pages")
        return generated

    def is_stale(self, render: CachedRender) -> bool:
        age = get_current_datetime() - render.generated_at
        return age >= timedelta(seconds=self.revalidate_seconds)

    async def get_index_page(self) -> IndexPage:
        cached = self.render_cache.get_render(RenderKind.INDEX, INDEX_KEY)
        if cached:
            return IndexPage.model_validate(cached.payload)
        return await self.generate_index()

    async def get_post_page(self, uid: str) -> PostPage | FallbackPage:
        cached = self.render_cache.get_render(RenderKind.POST, uid)

        if cached is None:
            try:
                return await self.generate_post(uid)
            except ResourceLockedException:
                return FallbackPage(uid=uid)

        if self.is_stale(cached):
            self._schedule_regeneration(uid)

        return PostPage.model_validate(cached.payload)

    def _schedule_regeneration(self, uid: str) -> None:
        if uid in self._regenerations:
            return

        task = asyncio.create_task(self._regenerate(uid))
        self._regenerations[uid] = task
        task.add_done_callback(lambda _: self._regenerations.pop(uid, None))

    async def _regenerate(self, uid: str) -> None:
        try:
            await self.generate_post(uid)
        except ResourceLockedException:
            logger.debug(f"Post '{uid}' is already being regenerated")
        except ResourceNotFoundException:
            logger.warning(f"Post '{uid}' no longer exists, dropping its render")
            self.render_cache.delete_render(RenderKind.POST, uid)
        except RepositoryUnavailableException:
            logger.exception(f"Failed to regenerate post '{uid}', serving stale render")
        except Exception:
            logger.exception(f"Unexpected error regenerating post '{uid}'")

    async def shutdown(self) -> None:
        pending = self.pending_regenerations
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
