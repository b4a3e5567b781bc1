from datetime import datetime
from enum import Enum
from typing import Any
from pydantic import BaseModel


class RenderKind(str, Enum):
    INDEX = "index"
    POST = "post"


class CachedRender(BaseModel):
    kind: RenderKind
    key: str
    payload: dict[str, Any]
    generated_at: datetime
