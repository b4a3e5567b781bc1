from typing import Generator

import pytest
from fastapi.testclient import TestClient
from pytest_mock import MockerFixture
from redis.exceptions import ConnectionError

from src.common.exceptions import RepositoryUnavailableException
from src.common.redis import RedisClient, get_redis_client
from src.content.client import ContentClient
from src.content.dependencies import get_content_client
from src.main import app


@pytest.fixture
def mock_redis_client(mocker: MockerFixture) -> RedisClient:
    return mocker.Mock(spec=RedisClient)


@pytest.fixture
def mock_content_client(mocker: MockerFixture) -> ContentClient:
    client = mocker.Mock(spec=ContentClient)
    client.get_master_ref.return_value = "REF123"
    return client


@pytest.fixture
def test_client(
    mock_redis_client: RedisClient, mock_content_client: ContentClient
) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_redis_client] = lambda: mock_redis_client
    app.dependency_overrides[get_content_client] = lambda: mock_content_client
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_healthcheck_ok(test_client: TestClient) -> None:
    response = test_client.get("/healthcheck")

    assert response.status_code == 200
    assert response.json() == {
        "api": {"status": "ok"},
        "redis": {"status": "ok"},
        "content_repository": {"status": "ok"},
    }


def test_healthcheck_redis_down(
    test_client: TestClient, mock_redis_client: RedisClient
) -> None:
    mock_redis_client.ping.side_effect = ConnectionError("Connection refused")  # type: ignore

    response = test_client.get("/healthcheck")

    assert response.status_code == 503
    assert response.json()["redis"] == {
        "status": "error",
        "message": "Connection refused",
    }
    assert response.json()["content_repository"] == {"status": "ok"}


def test_healthcheck_content_repository_down(
    test_client: TestClient, mock_content_client: ContentClient
) -> None:
    mock_content_client.get_master_ref.side_effect = RepositoryUnavailableException()  # type: ignore

    response = test_client.get("/healthcheck")

    assert response.status_code == 503
    assert response.json()["content_repository"] == {
        "status": "error",
        "message": "Content repository is unavailable",
    }
