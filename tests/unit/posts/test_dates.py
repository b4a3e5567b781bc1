from datetime import datetime, timezone

from src.content.schemas import PostSummary
from src.posts.dates import format_publication_date, format_summary


def test_format_publication_date() -> None:
    value = datetime(2021, 3, 25, 19, 25, 28, tzinfo=timezone.utc)
    assert format_publication_date(value, "en_US") == "25 Mar 2021"
    assert format_publication_date(value, "pt_BR") == "25 mar 2021"


def test_format_publication_date_unpublished() -> None:
    assert format_publication_date(None, "pt_BR") is None


def test_format_summary_keeps_raw_timestamp() -> None:
    summary = PostSummary.model_validate(
        {
            "uid": "como-utilizar-hooks",
            "first_publication_date": "2021-03-15T19:25:28+0000",
            "data": {"title": "Como utilizar Hooks", "subtitle": "", "author": "Joseph"},
        }
    )

    formatted = format_summary(summary, "en_US")

    assert formatted.first_publication_date == datetime(
        2021, 3, 15, 19, 25, 28, tzinfo=timezone.utc
    )
    assert formatted.formatted_publication_date == "15 Mar 2021"
    assert formatted.data == summary.data


def test_format_publication_date_drops_abbreviation_period() -> None:
    value = datetime(2021, 2, 5, 8, 0, 0, tzinfo=timezone.utc)

    formatted = format_publication_date(value, "pt_BR")

    assert formatted == "05 fev 2021"
    assert "." not in formatted
