"""Tests for the badge catalog and assignments."""

import pytest
from fastapi import HTTPException

from linkbio.modules.badges.schemas import BadgeCreate, BadgeUpdate
from linkbio.modules.badges.service import BadgeService


@pytest.fixture
def service(supabase):
    return BadgeService(supabase)


@pytest.fixture
def badge(service):
    return service.create_badge(BadgeCreate(name="Early", icon="star", tooltip="Joined early"))


def test_assign_embeds_catalog_entry(service, badge, make_user):
    alice = make_user("alice")
    service.assign_badge(alice.id, badge.id)

    badges = service.list_user_badges(alice.id)

    assert len(badges) == 1
    assert badges[0].badge.name == "Early"
    assert badges[0].is_displayed is True


def test_duplicate_assignment_conflicts(service, badge, make_user):
    alice = make_user("alice")
    service.assign_badge(alice.id, badge.id)

    with pytest.raises(HTTPException) as exc_info:
        service.assign_badge(alice.id, badge.id)

    assert exc_info.value.status_code == 409
    assert len(service.list_user_badges(alice.id)) == 1


def test_duplicate_assignment_race_conflicts(supabase, service, badge, make_user):
    alice = make_user("alice")
    # The other request inserted between our pre-check and our insert
    supabase.seed("user_badges", user_id=alice.id, badge_id=badge.id)
    original_table = supabase.table
    calls = {"n": 0}

    def table_hiding_first_lookup(name):
        query = original_table(name)
        if name == "user_badges" and calls["n"] == 0:
            calls["n"] += 1
            query.eq("user_id", "nobody")
        return query

    supabase.table = table_hiding_first_lookup

    with pytest.raises(HTTPException) as exc_info:
        service.assign_badge(alice.id, badge.id)
    assert exc_info.value.status_code == 409


def test_assign_unknown_badge(service, make_user):
    alice = make_user("alice")

    with pytest.raises(HTTPException) as exc_info:
        service.assign_badge(alice.id, "missing")
    assert exc_info.value.status_code == 404


def test_hidden_badges_are_excluded_from_public_list(service, badge, make_user):
    other = service.create_badge(BadgeCreate(name="Supporter", icon="heart", is_premium=True))
    alice = make_user("alice")
    service.assign_badge(alice.id, badge.id)
    service.assign_badge(alice.id, other.id)

    service.set_display(alice.id, badge.id, False)

    shown = service.list_user_badges(alice.id, displayed_only=True)
    assert [b.badge_id for b in shown] == [other.id]


def test_set_display_requires_ownership(service, badge, make_user):
    alice = make_user("alice")

    with pytest.raises(HTTPException) as exc_info:
        service.set_display(alice.id, badge.id, False)
    assert exc_info.value.status_code == 404


def test_update_and_delete_badge(service, badge, make_user):
    alice = make_user("alice")
    service.assign_badge(alice.id, badge.id)

    assert service.update_badge(badge.id, BadgeUpdate(tooltip="Day one")).tooltip == "Day one"

    assert service.delete_badge(badge.id) is True
    assert service.list_badges() == []
    assert service.list_user_badges(alice.id) == []


def test_revoke_badge(service, badge, make_user):
    alice = make_user("alice")
    service.assign_badge(alice.id, badge.id)

    assert service.revoke_badge(alice.id, badge.id) is True
    with pytest.raises(HTTPException) as exc_info:
        service.revoke_badge(alice.id, badge.id)
    assert exc_info.value.status_code == 404
