import asyncio
from collections import defaultdict
from collections.abc import Awaitable
from typing import TypeVar

from loguru import logger

from app.core.config import settings
from app.core.exceptions import ProjectNotFoundError, UserNotFoundError
from app.models.profile import Experience, ProfileProjection, Project, ProjectMember, PropertyQuery, User
from app.services.profile.builder import ProfileBuilder
from app.services.profile.scorer import ReputationScorer
from app.services.profile.search import ProfileSearch
from app.services.store.base import ProfileStore

T = TypeVar("T")


class ProfileService:
    """
    Calling-layer facade over the profile core.

    Fetches everything a request needs from the store first, then runs the
    pure builder, scorer and search over in-memory snapshots. The experience
    set is read once per request and sliced in memory.
    """

    def __init__(self, store: ProfileStore, max_concurrency: int | None = None):
        self.store = store
        self.builder = ProfileBuilder()
        self.scorer = ReputationScorer()
        self.search = ProfileSearch()
        # Limit concurrent record reads so the Redis pool is never exhausted
        self._sem = asyncio.Semaphore(max_concurrency or settings.STORE_MAX_CONCURRENCY)

    async def get_profile(self, user_id: int) -> ProfileProjection:
        user = await self._require_user(user_id)
        experiences = await self.store.list_experiences()
        profiles = await self._build_profiles([user], experiences)
        return profiles[0]

    async def get_user_score(self, user_id: int) -> int:
        user = await self._require_user(user_id)
        experiences = await self.store.list_experiences()
        own = [exp for exp in experiences if exp.user_id == user.id]
        projects = await self._load_projects(own)
        members = await self._load_members(self._confirmed_ids(projects), experiences)
        return self._score_user(user, own, projects, members, {})

    async def get_project_score(self, project_id: int) -> int:
        project = await self.store.get_project(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        members = await self._load_members([project_id], await self.store.list_experiences())
        score = self.scorer.score_project(project, members.__getitem__)
        logger.debug(f"Project {project_id} scored {score}")
        return score

    async def search_profiles(
        self,
        name: str | None = None,
        query: PropertyQuery | None = None,
        profiles: list[ProfileProjection] | None = None,
    ) -> list[ProfileProjection]:
        """
        Search profiles by name and properties.

        Args:
            name: Substring of "first last", ignored when empty
            query: Property predicates, ignored when empty
            profiles: Candidate profiles; built for every stored user when omitted

        Returns:
            Matching profiles in candidate order
        """
        if profiles is None:
            users = await self.store.list_users()
            profiles = await self._build_profiles(users, await self.store.list_experiences())

        result = self.search.search(profiles, name, query)
        logger.debug(f"Profile search matched {len(result)} of {len(profiles)} profiles")
        return result

    async def _require_user(self, user_id: int) -> User:
        user = await self.store.get_user(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def _limited(self, call: Awaitable[T]) -> T:
        async with self._sem:
            return await call

    async def _build_profiles(self, users: list[User], experiences: list[Experience]) -> list[ProfileProjection]:
        by_user: dict[int, list[Experience]] = defaultdict(list)
        for exp in experiences:
            by_user[exp.user_id].append(exp)

        # Users without identity get no experiences; the builder returns an empty projection
        own_lists = [by_user.get(user.id, []) if user.id is not None else [] for user in users]
        projects = await self._load_projects([exp for own in own_lists for exp in own])
        members = await self._load_members(self._confirmed_ids(projects), experiences)

        project_scores: dict[int, int] = {}
        profiles = []
        for user, own in zip(users, own_lists):
            rating = self._score_user(user, own, projects, members, project_scores)
            profiles.append(self.builder.build_profile(user, own, projects.__getitem__, rating=rating))
        return profiles

    def _score_user(
        self,
        user: User,
        experiences: list[Experience],
        projects: dict[int, Project],
        members: dict[int, list[ProjectMember]],
        project_scores: dict[int, int],
    ) -> int:
        def project_scorer(project: Project) -> int:
            if project.id not in project_scores:
                project_scores[project.id] = self.scorer.score_project(project, members.__getitem__)
            return project_scores[project.id]

        score = self.scorer.score_user(user, experiences, projects.__getitem__, project_scorer)
        logger.debug(f"User {user.id} scored {score} across {len(experiences)} experiences")
        return score

    @staticmethod
    def _confirmed_ids(projects: dict[int, Project]) -> list[int]:
        return [project.id for project in projects.values() if project.confirmed]

    async def _load_projects(self, experiences: list[Experience]) -> dict[int, Project]:
        project_ids = list(dict.fromkeys(exp.project_id for exp in experiences))
        results = await asyncio.gather(*[self._limited(self.store.get_project(pid)) for pid in project_ids])

        projects = {}
        for project_id, project in zip(project_ids, results):
            if project is None:
                raise ProjectNotFoundError(project_id)
            projects[project_id] = project
        return projects

    async def _load_members(
        self, project_ids: list[int], experiences: list[Experience]
    ) -> dict[int, list[ProjectMember]]:
        """Resolve each project's experiences with the owning user's confirmation state."""
        if not project_ids:
            return {}

        wanted = set(project_ids)
        by_project: dict[int, list[Experience]] = {pid: [] for pid in project_ids}
        for exp in experiences:
            if exp.project_id in wanted:
                by_project[exp.project_id].append(exp)

        user_ids = list(dict.fromkeys(exp.user_id for exps in by_project.values() for exp in exps))
        owners = await asyncio.gather(*[self._limited(self.store.get_user(uid)) for uid in user_ids])

        confirmed_by_user = {}
        for user_id, owner in zip(user_ids, owners):
            if owner is None:
                logger.warning(f"Experience owner {user_id} is missing; treating membership as unconfirmed")
            confirmed_by_user[user_id] = bool(owner and owner.confirmed_project)

        return {
            project_id: [ProjectMember(experience=exp, confirmed=confirmed_by_user[exp.user_id]) for exp in exps]
            for project_id, exps in by_project.items()
        }
