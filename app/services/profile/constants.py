from typing import Final

# Property collections on a profile projection, in search-predicate order
PROPERTY_SKILL: Final[str] = "skills"
PROPERTY_COMPANY: Final[str] = "companies"
PROPERTY_INDUSTRY: Final[str] = "industries"
PROPERTY_TOOL: Final[str] = "tools"
PROPERTY_ROLE: Final[str] = "roles"

# PropertyQuery field -> ProfileProjection collection
QUERY_FIELD_TO_PROPERTY: Final[dict[str, str]] = {
    "skill": PROPERTY_SKILL,
    "company": PROPERTY_COMPANY,
    "industry": PROPERTY_INDUSTRY,
    "tool": PROPERTY_TOOL,
    "role": PROPERTY_ROLE,
}

# Reputation increments
SCORE_CONFIRMED_MEMBERSHIP: Final[int] = 1  # user has a confirmed project membership
SCORE_CONFIRMED_PROJECT: Final[int] = 1  # project itself is confirmed
SCORE_CONFIRMED_MEMBER: Final[int] = 1  # per member whose owner is confirmed
SCORE_SINGLE_LIKE: Final[int] = 1  # per liked-user id occurring exactly once
