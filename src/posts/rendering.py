from src.content.richtext import as_html
from src.content.schemas import ListingPage, Post
from src.posts.dates import format_publication_date, format_summary
from src.posts.reading_time import estimate_reading_time, format_reading_time
from src.posts.schemas import (
    IndexPage,
    PostContentSection,
    PostPage,
)


def render_index_page(listing: ListingPage, date_locale: str) -> IndexPage:
    return IndexPage(
        posts=[format_summary(post, date_locale) for post in listing.results],
        next_page=listing.next_page,
        page=listing.page,
    )


def render_post_page(post: Post, date_locale: str) -> PostPage:
    reading_time = estimate_reading_time(post.data.content)

    return PostPage(
        uid=post.uid,
        title=post.data.title,
        author=post.data.author,
        banner_url=post.data.banner.url,
        first_publication_date=post.first_publication_date,
        formatted_publication_date=format_publication_date(
            post.first_publication_date, date_locale
        ),
        reading_time=reading_time,
        reading_time_label=format_reading_time(reading_time),
        content=[
            PostContentSection(heading=block.heading, html=as_html(block.body))
            for block in post.data.content
        ],
    )
