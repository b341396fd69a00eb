"""
Key-value persistence for client state (cart, session)
Values are JSON-serializable structures; every backend serializes with json
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional, Protocol

import redis

from . import config

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Storage port used by the cart and session stores"""

    def get(self, key: str) -> Optional[Any]: ...

    def set(self, key: str, value: Any) -> bool: ...

    def delete(self, key: str) -> bool: ...


class MemoryStore:
    """In-process store; values are JSON round-tripped so callers never share references"""

    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def set(self, key: str, value: Any) -> bool:
        self._data[key] = json.dumps(value)
        return True

    def delete(self, key: str) -> bool:
        self._data.pop(key, None)
        return True


class FileStore:
    """Single JSON document on disk holding every key, rewritten atomically"""

    def __init__(self, path: str):
        self.path = Path(path).expanduser()

    def _read_all(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"⚠️ Unreadable storage file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"⚠️ Storage file {self.path} is not a JSON object, ignoring it")
            return {}
        return data

    def _write_all(self, data: dict) -> bool:
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".fixzep-", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.replace(tmp_name, self.path)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"❌ Storage write error for {self.path}: {e}")
            if tmp_name is not None and os.path.exists(tmp_name):
                os.remove(tmp_name)
            return False

    def get(self, key: str) -> Optional[Any]:
        return self._read_all().get(key)

    def set(self, key: str, value: Any) -> bool:
        data = self._read_all()
        data[key] = value
        ok = self._write_all(data)
        if ok:
            logger.debug(f"✅ Storage SET: {key}")
        return ok

    def delete(self, key: str) -> bool:
        data = self._read_all()
        if key not in data:
            return True
        del data[key]
        return self._write_all(data)


class RedisStore:
    """Redis-backed store with automatic serialization; no TTL, keys live until cleared"""

    def __init__(self, client: Optional[redis.Redis] = None, prefix: str = ""):
        self.redis_client = client
        self.prefix = prefix

    def _get_client(self):
        """Lazy load Redis client"""
        if self.redis_client is None:
            try:
                self.redis_client = get_redis_client()
            except Exception as e:
                logger.warning(f"⚠️ Redis storage unavailable: {e}")
                return None
        return self.redis_client

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get(self, key: str) -> Optional[Any]:
        client = self._get_client()
        if not client:
            return None

        try:
            value = client.get(self._key(key))
            if value is None:
                return None
            return json.loads(value)
        except (redis.RedisError, ValueError) as e:
            logger.error(f"❌ Storage get error for {key}: {e}")
            return None

    def set(self, key: str, value: Any) -> bool:
        client = self._get_client()
        if not client:
            return False

        try:
            client.set(self._key(key), json.dumps(value))
            logger.debug(f"✅ Storage SET: {key}")
            return True
        except redis.RedisError as e:
            logger.error(f"❌ Storage set error for {key}: {e}")
            return False

    def delete(self, key: str) -> bool:
        client = self._get_client()
        if not client:
            return False

        try:
            client.delete(self._key(key))
            return True
        except redis.RedisError as e:
            logger.error(f"❌ Storage delete error for {key}: {e}")
            return False


def get_redis_client() -> redis.Redis:
    """Create a Redis client from REDIS_URL"""
    if not config.REDIS_URL:
        raise RuntimeError("REDIS_URL is not set")

    if "@" in config.REDIS_URL:
        url_parts = config.REDIS_URL.split("@")
        protocol = url_parts[0].split(":")[0]
        masked_url = f"{protocol}:****@{url_parts[1]}"
    else:
        masked_url = "****"
    logger.info(f"📡 Using Redis URL connection: {masked_url}")

    client = redis.from_url(
        config.REDIS_URL,
        decode_responses=True,
        socket_connect_timeout=15,
        socket_timeout=30,
        retry_on_timeout=True,
        health_check_interval=30,
    )
    client.ping()
    logger.info("Redis connected successfully via URL")
    return client


def create_store(backend: Optional[str] = None) -> KeyValueStore:
    """Build the configured storage backend"""
    backend = (backend or config.STORAGE_BACKEND).lower()
    if backend == "memory":
        return MemoryStore()
    if backend == "redis":
        return RedisStore(prefix=config.STORAGE_PREFIX)
    if backend == "file":
        return FileStore(config.STORAGE_PATH)
    raise ValueError(f"Unknown storage backend '{backend}'")
