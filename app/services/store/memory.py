import json
from pathlib import Path
from typing import TypeVar

from loguru import logger
from pydantic import ValidationError

from app.models.profile import Experience, Project, User
from app.services.store.base import ProfileStore

RecordT = TypeVar("RecordT", User, Project, Experience)


def _load_records(model: type[RecordT], raws: list[dict], kind: str) -> dict[int, RecordT]:
    """Validate seed records, skipping malformed ones and ones without an id."""
    records = {}
    for raw in raws:
        try:
            record = model.model_validate(raw)
        except ValidationError as exc:
            logger.warning(f"Ignoring malformed {kind} seed record: {exc}")
            continue
        if record.id is None:
            logger.warning(f"Ignoring {kind} seed record without id")
            continue
        records[record.id] = record
    return records


class InMemoryStore(ProfileStore):
    """Dict-backed store. Records live for the lifetime of the process."""

    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._projects: dict[int, Project] = {}
        self._experiences: dict[int, Experience] = {}

    @classmethod
    def from_json(cls, path: str | Path) -> "InMemoryStore":
        """
        Load a store from a JSON seed file.

        Expected shape: {"users": [...], "projects": [...], "experiences": [...]}
        """
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        store = cls()
        store._users = _load_records(User, data.get("users", []), "user")
        store._projects = _load_records(Project, data.get("projects", []), "project")
        store._experiences = _load_records(Experience, data.get("experiences", []), "experience")
        logger.info(
            f"Seeded in-memory store from {path}: {len(store._users)} users, "
            f"{len(store._projects)} projects, {len(store._experiences)} experiences"
        )
        return store

    async def get_user(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    async def list_users(self) -> list[User]:
        return [self._users[key] for key in sorted(self._users)]

    async def get_project(self, project_id: int) -> Project | None:
        return self._projects.get(project_id)

    async def list_experiences(self) -> list[Experience]:
        return [self._experiences[key] for key in sorted(self._experiences)]

    async def save_user(self, user: User) -> None:
        if user.id is None:
            raise ValueError("Cannot store a user without an id")
        self._users[user.id] = user

    async def save_project(self, project: Project) -> None:
        self._projects[project.id] = project

    async def save_experience(self, experience: Experience) -> None:
        self._experiences[experience.id] = experience
