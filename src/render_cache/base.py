from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from src.render_cache.schemas import CachedRender, RenderKind


class RenderCache(ABC):
    @abstractmethod
    def get_render(self, kind: RenderKind, key: str) -> CachedRender | None:
        pass

    @abstractmethod
    def set_render(
        self,
        kind: RenderKind,
        key: str,
        payload: dict[str, Any],
        generated_at: datetime,
    ) -> CachedRender:
        pass

    @abstractmethod
    def delete_render(self, kind: RenderKind, key: str) -> None:
        pass
