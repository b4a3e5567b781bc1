import json
from datetime import datetime
from typing import Any

from src.common.redis import RedisClient
from src.render_cache.base import RenderCache
from src.render_cache.schemas import CachedRender, RenderKind


class RedisRenderCache(RenderCache):
    def __init__(self, *, redis_client: RedisClient, key_prefix: str):
        self.client = redis_client
        self.key_prefix = key_prefix

    def _get_render_key(self, kind: RenderKind, key: str) -> str:
        return f"{self.key_prefix}:{kind.value}:{key}"

    def get_render(self, kind: RenderKind, key: str) -> CachedRender | None:
        render = self.client.hgetall(self._get_render_key(kind, key))
        if not render:
            return None

        return CachedRender(
            kind=kind,
            key=key,
            payload=json.loads(render["payload"]),
            generated_at=datetime.fromisoformat(render["generated_at"]),
        )

    def set_render(
        self,
        kind: RenderKind,
        key: str,
        payload: dict[str, Any],
        generated_at: datetime,
    ) -> CachedRender:
        self.client.hset(
            self._get_render_key(kind, key),
            mapping={
                "payload": json.dumps(payload),
                "generated_at": generated_at.isoformat(),
            },
        )

        return CachedRender(
            kind=kind, key=key, payload=payload, generated_at=generated_at
        )

    def delete_render(self, kind: RenderKind, key: str) -> None:
        self.client.delete(self._get_render_key(kind, key))
