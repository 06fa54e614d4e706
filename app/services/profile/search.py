from app.models.profile import ProfileProjection, PropertyQuery
from app.services.profile.constants import QUERY_FIELD_TO_PROPERTY


class ProfileSearch:
    """
    Filters profile projections by name and by property predicates.

    Every filter returns a new list in input order; inputs are never mutated.
    """

    @staticmethod
    def filter_by_name(profiles: list[ProfileProjection], name: str | None) -> list[ProfileProjection]:
        """
        Case-insensitive substring match against "first last".

        An empty query returns the input unchanged. Users without both a
        first and last name never match a non-empty query.
        """
        if not name:
            return profiles

        needle = name.lower()
        filtered = []
        for profile in profiles:
            full_name = profile.user.full_name
            if full_name and needle in full_name.lower():
                filtered.append(profile)
        return filtered

    @staticmethod
    def filter_by_properties(profiles: list[ProfileProjection], query: PropertyQuery) -> list[ProfileProjection]:
        """
        Keep profiles matching every non-empty predicate in the query.

        A predicate matches when any entry of the corresponding collection
        equals the requested value, ignoring case.
        """
        if query.is_empty:
            return profiles

        filtered = profiles
        for field, collection in QUERY_FIELD_TO_PROPERTY.items():
            value = getattr(query, field)
            if not value:
                continue
            filtered = ProfileSearch._filter_property(filtered, collection, value)
        return filtered

    @staticmethod
    def search(
        profiles: list[ProfileProjection], name: str | None, query: PropertyQuery | None = None
    ) -> list[ProfileProjection]:
        """Apply the name filter, then the property filter."""
        result = ProfileSearch.filter_by_name(profiles, name)
        if query is not None:
            result = ProfileSearch.filter_by_properties(result, query)
        return result

    @staticmethod
    def _filter_property(
        profiles: list[ProfileProjection], collection: str, value: str
    ) -> list[ProfileProjection]:
        wanted = value.lower()
        return [
            profile
            for profile in profiles
            if any(entry.property.lower() == wanted for entry in getattr(profile, collection))
        ]
