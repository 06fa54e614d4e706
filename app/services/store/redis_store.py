from typing import TypeVar

import redis.asyncio as redis
from loguru import logger
from pydantic import BaseModel, ValidationError

from app.core.config import settings
from app.models.profile import Experience, Project, User
from app.services.store.base import ProfileStore

RecordT = TypeVar("RecordT", bound=BaseModel)

KIND_USER = "user"
KIND_PROJECT = "project"
KIND_EXPERIENCE = "experience"


class RedisStore(ProfileStore):
    """
    Redis-backed store.

    Each record is a JSON document under "{prefix}{kind}:{id}". Listing scans
    the kind's key space, so it is meant for modest data sets.
    """

    SCAN_BATCH = 500

    def __init__(self, client: redis.Redis | None = None, key_prefix: str | None = None) -> None:
        self._client = client
        self.key_prefix = key_prefix if key_prefix is not None else settings.REDIS_KEY_PREFIX
        if client is None and not settings.REDIS_URL:
            logger.warning("REDIS_URL is not set. Store operations will fail until configured.")

    async def _get_client(self) -> redis.Redis:
        if self._client is None:
            logger.info("Creating Redis client for RedisStore")
            self._client = redis.from_url(
                settings.REDIS_URL,
                decode_responses=True,
                encoding="utf-8",
                socket_connect_timeout=5,
                socket_timeout=5,
                max_connections=settings.REDIS_MAX_CONNECTIONS,
                health_check_interval=30,
                socket_keepalive=True,
            )
        return self._client

    def _format_key(self, kind: str, record_id: int) -> str:
        return f"{self.key_prefix}{kind}:{record_id}"

    def _decode(self, model: type[RecordT], key: str, raw: str | None) -> RecordT | None:
        if not raw:
            return None
        try:
            return model.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning(f"Ignoring malformed record at '{key}': {exc}")
            return None

    async def _get(self, model: type[RecordT], kind: str, record_id: int) -> RecordT | None:
        client = await self._get_client()
        key = self._format_key(kind, record_id)
        return self._decode(model, key, await client.get(key))

    async def _list(self, model: type[RecordT], kind: str) -> list[RecordT]:
        client = await self._get_client()
        keys = [key async for key in client.scan_iter(match=f"{self.key_prefix}{kind}:*", count=self.SCAN_BATCH)]
        records = []
        for start in range(0, len(keys), self.SCAN_BATCH):
            batch = keys[start : start + self.SCAN_BATCH]
            for key, raw in zip(batch, await client.mget(batch)):
                record = self._decode(model, key, raw)
                if record is None:
                    continue
                if record.id is None:
                    logger.warning(f"Ignoring record without id at '{key}'")
                    continue
                records.append(record)
        return sorted(records, key=lambda record: record.id)

    async def _save(self, kind: str, record: BaseModel, record_id: int) -> None:
        client = await self._get_client()
        await client.set(self._format_key(kind, record_id), record.model_dump_json())

    async def get_user(self, user_id: int) -> User | None:
        return await self._get(User, KIND_USER, user_id)

    async def list_users(self) -> list[User]:
        return await self._list(User, KIND_USER)

    async def get_project(self, project_id: int) -> Project | None:
        return await self._get(Project, KIND_PROJECT, project_id)

    async def list_experiences(self) -> list[Experience]:
        return await self._list(Experience, KIND_EXPERIENCE)

    async def save_user(self, user: User) -> None:
        if user.id is None:
            raise ValueError("Cannot store a user without an id")
        await self._save(KIND_USER, user, user.id)

    async def save_project(self, project: Project) -> None:
        await self._save(KIND_PROJECT, project, project.id)

    async def save_experience(self, experience: Experience) -> None:
        await self._save(KIND_EXPERIENCE, experience, experience.id)

    async def close(self) -> None:
        """Close and disconnect the Redis client"""
        if self._client is not None:
            try:
                await self._client.aclose()
                logger.info("RedisStore client closed")
            except (redis.RedisError, OSError) as exc:
                logger.warning(f"Failed to close RedisStore client: {exc}")
            finally:
                self._client = None
