import json
from datetime import datetime, timezone

import pytest
from pytest_mock import MockerFixture

from src.common.redis import RedisClient
from src.render_cache.redis.store import RedisRenderCache
from src.render_cache.schemas import RenderKind

GENERATED_AT = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def mock_redis_client(mocker: MockerFixture) -> RedisClient:
    return mocker.Mock(spec=RedisClient)


@pytest.fixture
def render_cache(mock_redis_client: RedisClient) -> RedisRenderCache:
    return RedisRenderCache(redis_client=mock_redis_client, key_prefix="render_cache")


def test_set_render(
    render_cache: RedisRenderCache, mock_redis_client: RedisClient
) -> None:
    payload = {"uid": "como-utilizar-hooks", "title": "Como utilizar Hooks"}

    render = render_cache.set_render(
        RenderKind.POST, "como-utilizar-hooks", payload, generated_at=GENERATED_AT
    )

    assert render.payload == payload
    assert render.generated_at == GENERATED_AT
    mock_redis_client.hset.assert_called_once_with(  # type: ignore
        "render_cache:post:como-utilizar-hooks",
        mapping={
            "payload": json.dumps(payload),
            "generated_at": "2024-01-01T12:00:00+00:00",
        },
    )


def test_get_render(
    render_cache: RedisRenderCache, mock_redis_client: RedisClient
) -> None:
    mock_redis_client.hgetall.return_value = {  # type: ignore
        "payload": '{"posts": [], "next_page": null, "page": 1}',
        "generated_at": "2024-01-01T12:00:00+00:00",
    }

    render = render_cache.get_render(RenderKind.INDEX, "home")

    assert render is not None
    assert render.kind == RenderKind.INDEX
    assert render.key == "home"
    assert render.payload == {"posts": [], "next_page": None, "page": 1}
    assert render.generated_at == GENERATED_AT
    mock_redis_client.hgetall.assert_called_once_with("render_cache:index:home")  # type: ignore


def test_get_render_missing(
    render_cache: RedisRenderCache, mock_redis_client: RedisClient
) -> None:
    mock_redis_client.hgetall.return_value = {}  # type: ignore
    assert render_cache.get_render(RenderKind.POST, "missing") is None


def test_delete_render(
    render_cache: RedisRenderCache, mock_redis_client: RedisClient
) -> None:
    render_cache.delete_render(RenderKind.POST, "como-utilizar-hooks")
    mock_redis_client.delete.assert_called_once_with(  # type: ignore
        "render_cache:post:como-utilizar-hooks"
    )
