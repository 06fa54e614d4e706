import pytest

from app.models.profile import ProfileProjection, ProfileProperty, PropertyQuery, User
from app.services.profile.search import ProfileSearch


def _prop(value: str, exp_id: int = 1) -> ProfileProperty:
    return ProfileProperty(property=value, experience_id=exp_id, project_id=exp_id)


@pytest.fixture
def profiles() -> list[ProfileProjection]:
    return [
        ProfileProjection(
            user=User(id=1, first_name="Ann", last_name="Lee"),
            skills=(_prop("Go"), _prop("SQL", 2)),
            roles=(_prop("Lead"),),
            companies=(_prop("Acme"),),
        ),
        ProfileProjection(
            user=User(id=2, first_name="Bob", last_name="Ray"),
            skills=(_prop("go"),),
            roles=(_prop("Developer"),),
            industries=(_prop("Fintech"),),
        ),
        ProfileProjection(
            user=User(id=3, first_name="Annika", last_name=None),
            skills=(_prop("Rust"),),
            tools=(_prop("Docker"),),
        ),
    ]


def _ids(result: list[ProfileProjection]) -> list[int]:
    return [profile.user.id for profile in result]


def test_empty_name_returns_input_unchanged(profiles):
    assert ProfileSearch.filter_by_name(profiles, "") is profiles
    assert ProfileSearch.filter_by_name(profiles, None) is profiles


def test_name_search_is_case_insensitive_substring(profiles):
    assert _ids(ProfileSearch.filter_by_name(profiles, "ann l")) == [1]
    assert _ids(ProfileSearch.filter_by_name(profiles, "RAY")) == [2]


def test_name_search_skips_users_without_full_name(profiles):
    assert _ids(ProfileSearch.filter_by_name(profiles, "ann")) == [1]


def test_empty_property_query_returns_input_unchanged(profiles):
    query = PropertyQuery(skill="", company="", industry="", tool="", role="")

    assert ProfileSearch.filter_by_properties(profiles, query) is profiles


def test_property_match_ignores_case_and_keeps_order(profiles):
    result = ProfileSearch.filter_by_properties(profiles, PropertyQuery(skill="GO"))

    assert _ids(result) == [1, 2]


def test_property_predicates_are_conjunctive(profiles):
    broad = ProfileSearch.filter_by_properties(profiles, PropertyQuery(skill="Go"))
    narrow = ProfileSearch.filter_by_properties(profiles, PropertyQuery(skill="Go", role="Lead"))

    assert _ids(narrow) == [1]
    assert set(_ids(narrow)) <= set(_ids(broad))


def test_property_match_requires_whole_value(profiles):
    assert ProfileSearch.filter_by_properties(profiles, PropertyQuery(tool="Dock")) == []
    assert _ids(ProfileSearch.filter_by_properties(profiles, PropertyQuery(tool="docker"))) == [3]


def test_search_combines_name_and_properties(profiles):
    result = ProfileSearch.search(profiles, "bob", PropertyQuery(industry="fintech"))
    assert _ids(result) == [2]

    assert ProfileSearch.search(profiles, "ann", PropertyQuery(industry="fintech")) == []


def test_filters_do_not_mutate_input(profiles):
    snapshot = list(profiles)

    ProfileSearch.filter_by_properties(profiles, PropertyQuery(company="acme"))
    ProfileSearch.filter_by_name(profiles, "bob")

    assert profiles == snapshot


def test_predicate_order_does_not_change_result(profiles):
    combined = ProfileSearch.filter_by_properties(profiles, PropertyQuery(skill="go", company="acme", role="lead"))

    orders = [
        [PropertyQuery(skill="go"), PropertyQuery(company="acme"), PropertyQuery(role="lead")],
        [PropertyQuery(role="lead"), PropertyQuery(skill="go"), PropertyQuery(company="acme")],
        [PropertyQuery(company="acme"), PropertyQuery(role="lead"), PropertyQuery(skill="go")],
    ]
    for order in orders:
        chained = profiles
        for query in order:
            chained = ProfileSearch.filter_by_properties(chained, query)
        assert chained == combined

    assert _ids(combined) == [1]


def test_case_matching_uses_plain_lowercase():
    profile = ProfileProjection(
        user=User(id=9, first_name="Jörg", last_name="Straße"),
        companies=(_prop("Straße"),),
    )

    assert ProfileSearch.filter_by_properties([profile], PropertyQuery(company="STRASSE")) == []
    assert ProfileSearch.filter_by_properties([profile], PropertyQuery(company="STRAßE")) == [profile]
    assert ProfileSearch.filter_by_name([profile], "jörg strasse") == []
    assert ProfileSearch.filter_by_name([profile], "JÖRG STRA") == [profile]
