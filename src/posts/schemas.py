from datetime import datetime
from typing import Literal
from pydantic import BaseModel

from src.content.schemas import PostSummary


class FormattedPostSummary(PostSummary):
    formatted_publication_date: str | None = None


class ListingPageResponse(BaseModel):
    results: list[FormattedPostSummary]
    next_page: str | None = None
    page: int


class IndexPage(BaseModel):
    posts: list[FormattedPostSummary]
    next_page: str | None = None
    page: int = 1


class PostContentSection(BaseModel):
    heading: str | None = None
    html: str


class PostPage(BaseModel):
    uid: str
    title: str
    author: str
    banner_url: str | None = None
    first_publication_date: datetime | None = None
    formatted_publication_date: str | None = None
    reading_time: int
    reading_time_label: str
    content: list[PostContentSection]


class FallbackPage(BaseModel):
    uid: str
    status: Literal["loading"] = "loading"
    message: str = "Carregando..."


class PostPaths(BaseModel):
    paths: list[str]
