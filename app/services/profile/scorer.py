from collections import Counter
from collections.abc import Callable, Iterable

from app.models.profile import Experience, Project, ProjectMember, User
from app.services.profile.constants import (
    SCORE_CONFIRMED_MEMBER,
    SCORE_CONFIRMED_MEMBERSHIP,
    SCORE_CONFIRMED_PROJECT,
    SCORE_SINGLE_LIKE,
)

ProjectLookup = Callable[[int], Project]
ProjectScorer = Callable[[Project], int]
MembersLookup = Callable[[int], Iterable[ProjectMember]]


class ReputationScorer:
    """
    Computes integer reputation scores for users and projects.

    Pure functions over supplied data; all inputs are resolved by the caller.
    """

    @staticmethod
    def score_user(
        user: User,
        experiences: Iterable[Experience],
        project_lookup: ProjectLookup,
        project_scorer: ProjectScorer,
    ) -> int:
        """
        Score a user.

        One point for a confirmed membership, plus the score of the project
        behind every experience whose project is confirmed. Several
        experiences on the same confirmed project each add its score.

        Args:
            user: User to score
            experiences: All experience records of the user
            project_lookup: Resolves a project id to its Project
            project_scorer: Scores a single project

        Returns:
            Non-negative score
        """
        score = SCORE_CONFIRMED_MEMBERSHIP if user.confirmed_project else 0

        for experience in experiences:
            project = project_lookup(experience.project_id)
            if project.confirmed:
                score += project_scorer(project)

        return score

    @staticmethod
    def score_project(project: Project, members_lookup: MembersLookup) -> int:
        """
        Score a project.

        Args:
            project: Project to score
            members_lookup: Returns the members of a project id with their confirmation state

        Returns:
            Non-negative score
        """
        score = SCORE_CONFIRMED_PROJECT if project.confirmed else 0
        score += sum(SCORE_CONFIRMED_MEMBER for member in members_lookup(project.id) if member.confirmed)
        score += ReputationScorer.count_single_likes(project.liked_user_ids) * SCORE_SINGLE_LIKE
        return score

    @staticmethod
    def count_single_likes(liked_user_ids: Iterable[int]) -> int:
        """Count liked-user ids that occur exactly once. Repeated ids count zero."""
        counts = Counter(liked_user_ids)
        return sum(1 for occurrences in counts.values() if occurrences == 1)
