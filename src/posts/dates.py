from datetime import datetime
from babel.dates import format_date

from src.content.schemas import PostSummary
from src.posts.schemas import FormattedPostSummary


def format_publication_date(value: datetime | None, locale: str) -> str | None:
    """Formats a publication date as ``dd MMM yyyy`` in the given locale.

    Some locales abbreviate months with a trailing period ("mar." in pt_BR);
    it is dropped so every locale renders as "15 mar 2021".
    """
    if value is None:
        return None

    day = format_date(value, "dd", locale=locale)
    month = format_date(value, "MMM", locale=locale).rstrip(".")
    year = format_date(value, "yyyy", locale=locale)
    return f"{day} {month} {year}"


def format_summary(summary: PostSummary, locale: str) -> FormattedPostSummary:
    return FormattedPostSummary(
        **summary.model_dump(),
        formatted_publication_date=format_publication_date(
            summary.first_publication_date, locale
        ),
    )
