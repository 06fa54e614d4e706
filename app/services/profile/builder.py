from collections.abc import Callable, Iterable

from loguru import logger

from app.models.profile import Experience, ProfileProjection, ProfileProperty, Project, User
from app.services.profile.constants import (
    PROPERTY_COMPANY,
    PROPERTY_INDUSTRY,
    PROPERTY_ROLE,
    PROPERTY_SKILL,
    PROPERTY_TOOL,
)

ProjectLookup = Callable[[int], Project]


class ProfileBuilder:
    """
    Builds a profile projection by folding a user's experiences.

    Design principles:
    - Pure fold: one pass over experiences, no shared state
    - One entry per property kind per experience×project pair
    - Entries are unique by exact triple, never by value alone
    """

    def build_profile(
        self,
        user: User,
        experiences: Iterable[Experience],
        project_lookup: ProjectLookup,
        rating: int = 0,
    ) -> ProfileProjection:
        """
        Build profile projection for a user.

        Args:
            user: Owner of the experiences
            experiences: All experience records of the user, in display order
            project_lookup: Resolves a project id to its Project
            rating: Reputation score to attach to the projection

        Returns:
            Immutable ProfileProjection
        """
        if user.id is None:
            logger.debug("Skipping aggregation for user without identity")
            return ProfileProjection(user=user, rating=rating)

        collected: dict[str, dict[ProfileProperty, None]] = {
            PROPERTY_SKILL: {},
            PROPERTY_TOOL: {},
            PROPERTY_INDUSTRY: {},
            PROPERTY_COMPANY: {},
            PROPERTY_ROLE: {},
        }

        for experience in experiences:
            project = project_lookup(experience.project_id)
            self._accumulate(collected, experience, project)

        return ProfileProjection(
            user=user,
            rating=rating,
            skills=tuple(collected[PROPERTY_SKILL]),
            tools=tuple(collected[PROPERTY_TOOL]),
            industries=tuple(collected[PROPERTY_INDUSTRY]),
            companies=tuple(collected[PROPERTY_COMPANY]),
            roles=tuple(collected[PROPERTY_ROLE]),
        )

    @staticmethod
    def _accumulate(
        collected: dict[str, dict[ProfileProperty, None]],
        experience: Experience,
        project: Project,
    ) -> None:
        values = {
            PROPERTY_SKILL: experience.skills,
            PROPERTY_TOOL: experience.tools,
            PROPERTY_INDUSTRY: project.industry,
            PROPERTY_COMPANY: project.company,
            PROPERTY_ROLE: experience.role,
        }
        for kind, value in values.items():
            if not value or not value.strip():
                continue
            entry = ProfileProperty(property=value, experience_id=experience.id, project_id=project.id)
            # dict keys keep insertion order and drop exact duplicates
            collected[kind].setdefault(entry, None)
