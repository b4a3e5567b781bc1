import asyncio
import logging

from src.content.client import ContentClient
from src.content.schemas import ListingPage
from src.posts.dates import format_summary
from src.posts.schemas import FormattedPostSummary, IndexPage

logger = logging.getLogger(__name__)


class PostsPagination:
    """Accumulates listing pages fetched on demand, in fetch order.

    Posts are only ever appended. Once the cursor is absent no further fetch
    is issued. Overlapping ``load_more`` calls are serialized: a call issued
    while another is pending waits for it and continues from the cursor it
    produced.
    """

    def __init__(
        self,
        client: ContentClient,
        *,
        posts: list[FormattedPostSummary],
        next_page: str | None,
        page: int = 1,
        date_locale: str,
    ):
        self.client = client
        self.date_locale = date_locale
        self._posts = list(posts)
        self._next_page = next_page
        self._page = page
        self._lock = asyncio.Lock()

    @classmethod
    def from_listing(
        cls, client: ContentClient, listing: ListingPage, *, date_locale: str
    ) -> "PostsPagination":
        return cls(
            client,
            posts=[format_summary(post, date_locale) for post in listing.results],
            next_page=listing.next_page,
            page=listing.page,
            date_locale=date_locale,
        )

    @classmethod
    def from_index(
        cls, client: ContentClient, index_page: IndexPage, *, date_locale: str
    ) -> "PostsPagination":
        return cls(
            client,
            posts=index_page.posts,
            next_page=index_page.next_page,
            page=index_page.page,
            date_locale=date_locale,
        )

    @property
    def posts(self) -> tuple[FormattedPostSummary, ...]:
        return tuple(self._posts)

    @property
    def next_page(self) -> str | None:
        return self._next_page

    @property
    def page(self) -> int:
        return self._page

    @property
    def has_more(self) -> bool:
        return bool(self._next_page)

    @property
    def is_loading(self) -> bool:
        return self._lock.locked()

    async def load_more(self) -> list[FormattedPostSummary]:
        async with self._lock:
            if not self._next_page:
                return []

            listing = await self.client.fetch_next_page(self._next_page)
            new_posts = [
                format_summary(post, self.date_locale) for post in listing.results
            ]

            self._posts.extend(new_posts)
            self._next_page = listing.next_page
            self._page = listing.page

            logger.debug(
                f"Merged page {self._page} ({len(new_posts)} posts, {len(self._posts)} total)"
            )
            return new_posts
