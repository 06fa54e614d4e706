from abc import ABC, abstractmethod

from app.models.profile import Experience, Project, User


class ProfileStore(ABC):
    """
    Read interface the profile core consumes, plus the plain saves used for seeding.
    """

    @abstractmethod
    async def get_user(self, user_id: int) -> User | None:
        pass

    @abstractmethod
    async def list_users(self) -> list[User]:
        pass

    @abstractmethod
    async def get_project(self, project_id: int) -> Project | None:
        pass

    @abstractmethod
    async def list_experiences(self) -> list[Experience]:
        """Every experience record, ordered by id."""
        pass

    async def list_experiences_for_user(self, user_id: int | None) -> list[Experience]:
        if user_id is None:
            return []
        return [exp for exp in await self.list_experiences() if exp.user_id == user_id]

    async def list_experiences_for_project(self, project_id: int) -> list[Experience]:
        return [exp for exp in await self.list_experiences() if exp.project_id == project_id]

    @abstractmethod
    async def save_user(self, user: User) -> None:
        pass

    @abstractmethod
    async def save_project(self, project: Project) -> None:
        pass

    @abstractmethod
    async def save_experience(self, experience: Experience) -> None:
        pass

    async def close(self) -> None:
        """Release any held connections."""
        return None
