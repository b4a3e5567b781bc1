from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from src.common.exceptions import (
    ResourceType,
    invalid_cursor_response,
    resource_not_found_response,
)
from src.config import Settings, get_settings
from src.content.client import ContentClient
from src.content.dependencies import get_content_client
from src.posts.dependencies import get_static_generator
from src.posts.generation import StaticGenerator
from src.posts.pagination import PostsPagination
from src.posts.schemas import (
    FallbackPage,
    IndexPage,
    ListingPageResponse,
    PostPage,
    PostPaths,
)


router = APIRouter(
    prefix="/posts",
    tags=["Posts"],
)


@router.get("")
async def get_index(
    generator: StaticGenerator = Depends(get_static_generator),
) -> IndexPage:
    return await generator.get_index_page()


@router.get("/more", responses={**invalid_cursor_response})
async def get_more_posts(
    cursor: str = Query(description="The next_page value of the previous page"),
    content_client: ContentClient = Depends(get_content_client),
    settings: Settings = Depends(get_settings),
) -> ListingPageResponse:
    pagination = PostsPagination(
        content_client, posts=[], next_page=cursor, date_locale=settings.DATE_LOCALE
    )
    new_posts = await pagination.load_more()

    return ListingPageResponse(
        results=new_posts, next_page=pagination.next_page, page=pagination.page
    )


@router.get("/paths")
async def get_post_paths(
    generator: StaticGenerator = Depends(get_static_generator),
) -> PostPaths:
    return PostPaths(paths=await generator.enumerate_paths())


@router.get(
    "/{uid}",
    response_model=PostPage,
    responses={
        202: {"model": FallbackPage, "description": "Page is being generated"},
        **resource_not_found_response(ResourceType.POST),
    },
)
async def get_post(
    uid: str,
    generator: StaticGenerator = Depends(get_static_generator),
):
    page = await generator.get_post_page(uid)

    if isinstance(page, FallbackPage):
        return JSONResponse(
            status_code=status.HTTP_202_ACCEPTED, content=page.model_dump()
        )

    return page
