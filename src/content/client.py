import asyncio
import logging
import re
from types import TracebackType
from typing import Any, Type, TypeVar
from urllib.parse import urlparse
from aiohttp import ClientError, ClientSession
from pydantic import BaseModel, ValidationError

from src.common.exceptions import (
    InvalidCursorException,
    RepositoryUnavailableException,
    ResourceNotFoundException,
    ResourceType,
)
from src.content.schemas import (
    ApiRoot,
    ListingPage,
    Post,
    PostSummary,
    SearchResponse,
)


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Statuses the search endpoint answers with when a continuation URL points at
# a ref or page that no longer exists.
INVALID_CURSOR_STATUSES = (400, 404, 410)

# Characters a document uid may contain; anything else cannot match a post
UID_PATTERN = re.compile(r"[A-Za-z0-9._~-]+")


class ContentClient:
    def __init__(
        self,
        *,
        api_endpoint: str,
        access_token: str | None,
        user_agent: str,
        concurrent_requests: int,
    ):
        self.api_endpoint = api_endpoint.rstrip("/")
        self.access_token = access_token
        self.session: ClientSession = ClientSession(
            headers={
                "Accept": "application/json",
                "User-Agent": user_agent,
            }
        )
        self.semaphore = asyncio.Semaphore(concurrent_requests)

    async def __aenter__(self):
        return self

    async def __aexit__(
        self, exc_type: Type[Exception], exc: Exception, tb: TracebackType
    ):
        await self.close()

    async def close(self) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    @property
    def search_url(self) -> str:
        return f"{self.api_endpoint}/documents/search"

    def _auth_params(self) -> dict[str, str]:
        if self.access_token:
            return {"access_token": self.access_token}
        return {}

    async def request(
        self,
        url: str,
        params: dict[str, str] | None = None,
        cursor: str | None = None,
    ) -> Any:
        async with self.semaphore:
            try:
                async with self.session.get(url, params=params) as response:
                    if cursor is not None and response.status in INVALID_CURSOR_STATUSES:
                        raise InvalidCursorException(cursor)
                    elif response.status in (401, 403):
                        raise RepositoryUnavailableException(
                            f"Access to content repository at {url} was denied"
                        )
                    elif response.status >= 400:
                        raise RepositoryUnavailableException(
                            f"Content repository answered {response.status} for {url}"
                        )
                    return await response.json()
            except (InvalidCursorException, RepositoryUnavailableException) as e:
                raise e
            except (ClientError, asyncio.TimeoutError) as e:
                logger.exception("HTTP request failed")
                raise RepositoryUnavailableException(
                    f"Failed to reach content repository at {url}"
                ) from e
            except ValueError as e:
                raise RepositoryUnavailableException(
                    f"Malformed response from content repository at {url}"
                ) from e

    def _parse(self, model: Type[ModelT], data: Any) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(f"Unexpected {model.__name__} payload: {e}")
            raise RepositoryUnavailableException(
                "Malformed response from content repository"
            ) from e

    def _to_listing_page(self, data: Any) -> ListingPage:
        search = self._parse(SearchResponse, data)
        return ListingPage(
            results=[self._parse(PostSummary, result) for result in search.results],
            next_page=search.next_page,
            page=search.page,
        )

    async def get_master_ref(self) -> str:
        data = await self.request(self.api_endpoint, params=self._auth_params())
        api = self._parse(ApiRoot, data)
        for ref in api.refs:
            if ref.isMasterRef:
                return ref.ref
        raise RepositoryUnavailableException("Content repository has no master ref")

    async def query_listing(
        self,
        document_type: str,
        fetch_fields: list[str] | None = None,
        page_size: int = 20,
        page: int = 1,
    ) -> ListingPage:
        ref = await self.get_master_ref()

        params = {
            "ref": ref,
            "q": f'[[at(document.type,"{document_type}")]]',
            "pageSize": str(page_size),
            "page": str(page),
            **self._auth_params(),
        }
        if fetch_fields:
            params["fetch"] = ",".join(
                f"{document_type}.{field}" for field in fetch_fields
            )

        data = await self.request(self.search_url, params=params)
        return self._to_listing_page(data)

    async def fetch_next_page(self, cursor: str) -> ListingPage:
        parsed = urlparse(cursor)
        endpoint = urlparse(self.search_url)
        if (parsed.scheme, parsed.netloc, parsed.path) != (
            endpoint.scheme,
            endpoint.netloc,
            endpoint.path,
        ):
            raise InvalidCursorException(cursor)

        data = await self.request(cursor, cursor=cursor)
        return self._to_listing_page(data)

    async def query_all(
        self,
        document_type: str,
        fetch_fields: list[str] | None = None,
        page_size: int = 100,
    ) -> list[PostSummary]:
        logger.info(f"Fetching every '{document_type}' document")

        listing = await self.query_listing(
            document_type, fetch_fields=fetch_fields, page_size=page_size
        )
        documents = list(listing.results)

        while listing.next_page:
            listing = await self.fetch_next_page(listing.next_page)
            documents.extend(listing.results)

        logger.info(f"Fetched {len(documents)} '{document_type}' documents")
        return documents

    async def get_by_uid(self, document_type: str, uid: str) -> Post:
        if not UID_PATTERN.fullmatch(uid):
            raise ResourceNotFoundException(ResourceType.POST, uid)

        ref = await self.get_master_ref()

        params = {
            "ref": ref,
            "q": f'[[at(my.{document_type}.uid,"{uid}")]]',
            "pageSize": "1",
            **self._auth_params(),
        }

        data = await self.request(self.search_url, params=params)
        search = self._parse(SearchResponse, data)

        if not search.results:
            raise ResourceNotFoundException(ResourceType.POST, uid)

        return self._parse(Post, search.results[0])
