import logging
from redis.lock import Lock
from redis.exceptions import LockError

from src.common.redis import RedisClient
from src.common.exceptions import ResourceLockedException, ResourceType

logger = logging.getLogger(__name__)


class LockService:
    def __init__(self, redis_client: RedisClient) -> None:
        self.redis_client = redis_client

    def acquire_lock(
        self,
        lock_name: str,
        timeout: int = 60,
        resource_type: ResourceType | None = None,
    ) -> Lock:
        lock = self.redis_client.lock(f"lock:{lock_name}", timeout=timeout)
        if lock.acquire(blocking=False):
            return lock
        raise ResourceLockedException(resource_type, lock_name)

    def release_lock(self, lock: Lock) -> None:
        try:
            lock.release()
        except LockError:
            logger.exception("Error releasing lock")
