from typing import Any

import pytest


@pytest.fixture
def sample_post_payload() -> dict[str, Any]:
    return {
        "id": "YBxCwRAAACMAnDaK",
        "uid": "como-utilizar-hooks",
        "type": "posts",
        "first_publication_date": "2021-03-15T19:25:28+0000",
        "data": {
            "title": "Como utilizar Hooks",
            "subtitle": "Pensando em sincronização em vez de ciclos de vida",
            "author": "Joseph Oliveira",
            "banner": {"url": "https://images.prismic.io/banner.png", "alt": None},
            "content": [
                {
                    "heading": "Proin et varius",
                    "body": [
                        {
                            "type": "paragraph",
                            "text": "Lorem ipsum dolor sit amet",
                            "spans": [{"start": 0, "end": 5, "type": "strong"}],
                        }
                    ],
                },
                {
                    "heading": None,
                    "body": [
                        {"type": "list-item", "text": "first item", "spans": []},
                        {"type": "list-item", "text": "second item", "spans": []},
                    ],
                },
            ],
        },
    }


@pytest.fixture
def sample_summary_payload() -> dict[str, Any]:
    return {
        "id": "YBxCwRAAACMAnDaK",
        "uid": "como-utilizar-hooks",
        "type": "posts",
        "first_publication_date": "2021-03-15T19:25:28+0000",
        "data": {
            "title": "Como utilizar Hooks",
            "subtitle": "Pensando em sincronização em vez de ciclos de vida",
            "author": "Joseph Oliveira",
        },
    }


@pytest.fixture
def sample_search_payload(sample_summary_payload: dict[str, Any]) -> dict[str, Any]:
    return {
        "page": 1,
        "results_per_page": 1,
        "results_size": 1,
        "total_results_size": 2,
        "total_pages": 2,
        "next_page": "https://blog.cdn.prismic.io/api/v2/documents/search?ref=REF123&page=2&pageSize=1",
        "prev_page": None,
        "results": [sample_summary_payload],
    }


@pytest.fixture
def api_root_payload() -> dict[str, Any]:
    return {
        "refs": [
            {"id": "master", "ref": "REF123", "label": "Master", "isMasterRef": True},
            {"id": "preview", "ref": "PREVIEW", "label": "Preview"},
        ]
    }
