from datetime import datetime
from typing import Any
from pydantic import BaseModel, Field, field_validator

PUBLICATION_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def parse_publication_date(v: Any) -> Any:
    # The repository sends offsets without a colon, e.g. "+0000"
    if isinstance(v, str):
        try:
            return datetime.strptime(v, PUBLICATION_DATE_FORMAT)
        except ValueError:
            return v
    return v


class PostSummaryData(BaseModel):
    title: str = ""
    subtitle: str = ""
    author: str = ""


class PostSummary(BaseModel):
    uid: str | None = None
    first_publication_date: datetime | None = None
    data: PostSummaryData = Field(default_factory=PostSummaryData)

    @field_validator("first_publication_date", mode="before")
    def parse_first_publication_date(cls, v: Any):
        return parse_publication_date(v)


class ContentBlock(BaseModel):
    heading: str | None = None
    body: list[dict[str, Any]] = Field(default_factory=list)

    @field_validator("body", mode="before")
    def default_empty_body(cls, v: Any):
        return v if v is not None else []


class Banner(BaseModel):
    url: str | None = None
    alt: str | None = None


class PostData(PostSummaryData):
    banner: Banner = Field(default_factory=Banner)
    content: list[ContentBlock] = Field(default_factory=list)

    @field_validator("banner", mode="before")
    def default_empty_banner(cls, v: Any):
        return v if v is not None else {}

    @field_validator("content", mode="before")
    def default_empty_content(cls, v: Any):
        return v if v is not None else []


class Post(BaseModel):
    uid: str
    first_publication_date: datetime | None = None
    data: PostData

    @field_validator("first_publication_date", mode="before")
    def parse_first_publication_date(cls, v: Any):
        return parse_publication_date(v)


class ListingPage(BaseModel):
    results: list[PostSummary]
    next_page: str | None = None
    page: int = 1


class SearchResponse(BaseModel):
    """Raw search payload; results are kept as dicts until projected."""

    page: int = 1
    results_per_page: int | None = None
    total_results_size: int | None = None
    total_pages: int | None = None
    next_page: str | None = None
    prev_page: str | None = None
    results: list[dict[str, Any]]


class Ref(BaseModel):
    id: str
    ref: str
    label: str | None = None
    isMasterRef: bool = False


class ApiRoot(BaseModel):
    refs: list[Ref]
