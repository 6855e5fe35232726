import json
import logging
from typing import Optional, Any

import redis

from app.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# Create Redis client
redis_client = redis.from_url(settings.REDIS_URL, decode_responses=True)


class KeyValueStorage:
    """
    Redis-backed key-value storage for the catalog slot.

    Plays the role of browser local storage: one string value per key,
    written in full on every save. Storage errors never propagate; reads
    report them as a missing value and writes report them as ``False``.
    """

    def __init__(self, client: redis.Redis = None):
        self.client = client or redis_client

    def get_item(self, key: str) -> Optional[Any]:
        """
        Read and decode a JSON value.

        Args:
            key: Storage key (e.g., 'products_v1')

        Returns:
            Decoded value, or None if missing, unreadable or malformed
        """
        try:
            value = self.client.get(key)
        except redis.RedisError as e:
            logger.warning(f"Could not read storage key '{key}': {e}")
            return None

        if value is None:
            return None

        try:
            return json.loads(value)
        except json.JSONDecodeError:
            logger.warning(f"Discarding malformed value stored under '{key}'")
            return None

    def set_item(self, key: str, value: Any) -> bool:
        """
        Serialize a value to JSON and store it.

        Returns:
            True if successful, False otherwise
        """
        try:
            serialized = json.dumps(value)
            self.client.set(key, serialized)
            return True
        except (redis.RedisError, TypeError) as e:
            logger.warning(f"Could not persist storage key '{key}': {e}")
            return False

    def remove_item(self, key: str) -> bool:
        """Delete a key. Returns True if the call reached storage."""
        try:
            self.client.delete(key)
            return True
        except redis.RedisError as e:
            logger.warning(f"Could not remove storage key '{key}': {e}")
            return False

    def ping(self) -> bool:
        """Check whether storage is reachable."""
        try:
            return bool(self.client.ping())
        except redis.RedisError:
            return False
