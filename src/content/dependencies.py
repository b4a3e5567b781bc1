from fastapi import Request

from src.config import Settings
from src.content.client import ContentClient


def create_content_client(settings: Settings) -> ContentClient:
    return ContentClient(
        api_endpoint=settings.CONTENT_API_ENDPOINT,
        access_token=settings.CONTENT_ACCESS_TOKEN,
        user_agent=settings.USER_AGENT,
        concurrent_requests=settings.MAX_CONCURRENT_REQUESTS,
    )


def get_content_client(request: Request) -> ContentClient:
    return request.app.state.content_client
