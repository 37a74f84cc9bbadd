import pytest

from analytics.community import (
    INVALID_DATE,
    aggregate_contributions,
    build_profile,
    display_name_for,
    filter_members,
    sort_members,
)


def by_email(members):
    return {m.email: m for m in members}


def test_aggregate_counts_and_dates(seeded_store):
    members = by_email(aggregate_contributions(seeded_store.rows("strategies"), seeded_store.rows("datasets")))
    assert set(members) == {"jane.doe@example.com", "bob_smith7@example.com", "carol@example.com"}

    jane = members["jane.doe@example.com"]
    assert (jane.strategies, jane.datasets, jane.total_contributions) == (2, 0, 2)
    assert jane.joined_date == "2025-01-10T09:00:00+00:00"
    assert jane.last_active == "2025-03-01T12:00:00+00:00"
    assert jane.display_name == "Jane Doe"

    bob = members["bob_smith7@example.com"]
    assert (bob.strategies, bob.datasets) == (1, 1)
    assert bob.last_active == "2025-04-01T10:00:00+00:00"
    assert bob.display_name == "Bob Smith"


def test_rows_without_author_are_ignored():
    members = aggregate_contributions([{"author_email": None}, {"created_at": "2025-01-01"}], [])
    assert members == []


def test_malformed_timestamp_marks_both_dates_invalid():
    rows = [
        {"author_email": "a@x.com", "created_at": "2025-01-01T00:00:00Z"},
        {"author_email": "a@x.com", "created_at": "yesterday-ish"},
    ]
    (member,) = aggregate_contributions(rows, [])
    assert member.joined_date == INVALID_DATE
    assert member.last_active == INVALID_DATE


def test_display_name():
    assert display_name_for("jane.doe42@x.com") == "Jane Doe"
    assert display_name_for("a__b-c@x.com") == "A B C"
    assert display_name_for("1234@x.com") == ""


def test_sort_options(seeded_store):
    members = aggregate_contributions(seeded_store.rows("strategies"), seeded_store.rows("datasets"))
    assert [m.email for m in sort_members(members, "contributions")][2] == "carol@example.com"
    assert sort_members(members, "datasets")[0].email == "bob_smith7@example.com"
    assert sort_members(members, "recent")[0].email == "bob_smith7@example.com"
    assert [m.display_name for m in sort_members(members, "name")] == ["Bob Smith", "Carol", "Jane Doe"]
    with pytest.raises(ValueError):
        sort_members(members, "stars")


def test_sort_is_stable_for_ties(seeded_store):
    members = aggregate_contributions(seeded_store.rows("strategies"), seeded_store.rows("datasets"))
    ranked = sort_members(members, "contributions")
    # jane and bob both have 2; incoming order is kept
    assert [m.email for m in ranked[:2]] == ["jane.doe@example.com", "bob_smith7@example.com"]


def test_filter_members(seeded_store):
    members = aggregate_contributions(seeded_store.rows("strategies"), seeded_store.rows("datasets"))
    assert {m.email for m in filter_members(members, only="datasets")} == {"bob_smith7@example.com", "carol@example.com"}
    assert [m.email for m in filter_members(members, search="DOE")] == ["jane.doe@example.com"]
    assert filter_members(members, search="nobody") == []


def test_build_profile_for_unknown_author(seeded_store):
    profile = build_profile("ghost@example.com", seeded_store.rows("strategies"), seeded_store.rows("datasets"))
    assert profile.member.total_contributions == 0
    assert profile.strategies == [] and profile.datasets == []
    assert profile.as_dict()["display_name"] == "Ghost"


def test_display_name_edge_cases():
    assert display_name_for("trader@x.com") == "Trader"
    assert display_name_for("@domain.com") == ""
