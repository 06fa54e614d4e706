import asyncio
from fnmatch import fnmatchcase

import pytest
import redis

from app.models.profile import Experience, Project, User
from app.services.store.memory import InMemoryStore


class FakeRedis:
    def __init__(self):
        self.store: dict[str, str] = {}
        self.closed = False

    async def get(self, key: str) -> str | None:
        return self.store.get(key)

    async def set(self, key: str, value: str) -> bool:
        self.store[key] = value
        return True

    async def mget(self, keys: list[str]) -> list[str | None]:
        return [self.store.get(key) for key in keys]

    async def scan_iter(self, match: str | None = None, count: int | None = None):
        for key in list(self.store):
            if match is None or fnmatchcase(key, match):
                yield key

    async def aclose(self) -> None:
        self.closed = True


class PooledFakeRedis(FakeRedis):
    """FakeRedis that fails like a capped connection pool when too many commands overlap."""

    def __init__(self, max_connections: int):
        super().__init__()
        self.max_connections = max_connections
        self.in_flight = 0
        self.peak = 0

    async def _checkout(self) -> None:
        if self.in_flight >= self.max_connections:
            raise redis.exceptions.ConnectionError("Too many connections")
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        await asyncio.sleep(0)

    async def get(self, key: str) -> str | None:
        await self._checkout()
        try:
            return await super().get(key)
        finally:
            self.in_flight -= 1

    async def mget(self, keys: list[str]) -> list[str | None]:
        await self._checkout()
        try:
            return await super().mget(keys)
        finally:
            self.in_flight -= 1


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def pooled_redis():
    return PooledFakeRedis(max_connections=20)


USERS = [
    User(id=1, email="ann@example.com", first_name="Ann", last_name="Lee", confirmed_project=True),
    User(id=2, email="bob@example.com", first_name="Bob", last_name="Ray", confirmed_project=True),
    User(id=3, email="cid@example.com", first_name="Cid", last_name=None, confirmed_project=False),
]

PROJECTS = [
    Project(
        id=10,
        name="Ledger",
        confirmed=True,
        industry="Fintech",
        company="Acme",
        liked_user_ids=(1, 2, 1, 3),
        created_by=1,
    ),
    Project(id=20, name="Clinic", confirmed=False, industry="Health", company="Medi", created_by=3),
]

EXPERIENCES = [
    Experience(id=100, user_id=1, project_id=10, role="Lead", skills="Go", tools="Docker", project_creator=True),
    Experience(id=101, user_id=1, project_id=20, role="Developer", skills="Python"),
    Experience(id=102, user_id=2, project_id=10, role="Developer", skills="go", tools=""),
    Experience(id=103, user_id=3, project_id=20, skills="Rust", project_creator=True),
]


@pytest.fixture
def seeded_store():
    store = InMemoryStore()
    store._users = {user.id: user for user in USERS}
    store._projects = {project.id: project for project in PROJECTS}
    store._experiences = {exp.id: exp for exp in EXPERIENCES}
    return store
