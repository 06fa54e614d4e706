"""
Profile System - aggregation, reputation scoring and search.

The builder, scorer and search are pure computations over data the caller
has already fetched. ProfileService does the fetching.
"""

from app.services.profile.builder import ProfileBuilder
from app.services.profile.scorer import ReputationScorer
from app.services.profile.search import ProfileSearch
from app.services.profile.service import ProfileService

__all__ = [
    "ProfileBuilder",
    "ReputationScorer",
    "ProfileSearch",
    "ProfileService",
]
