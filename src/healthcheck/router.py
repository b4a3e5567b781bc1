from typing import Any
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.common.redis import RedisClient, get_redis_client
from src.content.client import ContentClient
from src.content.dependencies import get_content_client

router = APIRouter()


@router.get(
    "/healthcheck",
    tags=["Healthcheck"],
    status_code=status.HTTP_200_OK,
    responses={
        200: {
            "description": "Healthcheck status",
            "content": {
                "application/json": {
                    "example": {
                        "api": {"status": "ok"},
                        "redis": {"status": "ok"},
                        "content_repository": {"status": "ok"},
                    }
                }
            },
        },
        503: {
            "description": "Service unavailable",
            "content": {
                "application/json": {
                    "example": {
                        "api": {"status": "ok"},
                        "redis": {"status": "error", "message": "Connection error"},
                        "content_repository": {
                            "status": "error",
                            "message": "Failed to reach content repository",
                        },
                    }
                }
            },
        },
    },
)
async def healthcheck(
    redis_client: RedisClient = Depends(get_redis_client),
    content_client: ContentClient = Depends(get_content_client),
) -> JSONResponse:
    health_status: dict[str, Any] = {
        "api": {"status": "ok"},
        "redis": {"status": "ok"},
        "content_repository": {"status": "ok"},
    }
    has_error = False

    # Check Redis connection
    try:
        redis_client.ping()
    except Exception as e:
        health_status["redis"].update({"status": "error", "message": str(e)})
        has_error = True

    # Check the content repository answers with a master ref
    try:
        await content_client.get_master_ref()
    except Exception as e:
        health_status["content_repository"].update(
            {"status": "error", "message": str(e)}
        )
        has_error = True

    if has_error:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=health_status
        )

    return JSONResponse(status_code=status.HTTP_200_OK, content=health_status)
