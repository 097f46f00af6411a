"""Tests for invite code lifecycle and redemption."""

from concurrent.futures import ThreadPoolExecutor

import pytest
from fastapi import HTTPException

from linkbio.modules.invites.schemas import InviteCodeCreate, InviteCodeState
from linkbio.modules.invites.service import INVITE_CHARSET, InviteCodeService, generate_invite_code


@pytest.fixture
def service(supabase):
    return InviteCodeService(supabase)


class TestInviteCodeState:
    @pytest.mark.parametrize(
        "uses_left, max_uses, expected",
        [
            (3, 3, InviteCodeState.UNUSED),
            (2, 3, InviteCodeState.PARTIALLY_USED),
            (1, 3, InviteCodeState.PARTIALLY_USED),
            (0, 3, InviteCodeState.EXHAUSTED),
            (1, 1, InviteCodeState.UNUSED),
            (0, 1, InviteCodeState.EXHAUSTED),
        ],
    )
    def test_state_from_counts(self, uses_left, max_uses, expected):
        assert InviteCodeState.of(uses_left, max_uses) == expected

    def test_response_exposes_state(self, supabase, service):
        supabase.seed("invite_codes", code="MULTI", uses_left=2, max_uses=5)

        code = service.find_redeemable("MULTI")

        assert code.state == InviteCodeState.PARTIALLY_USED
        assert code.model_dump()["state"] == InviteCodeState.PARTIALLY_USED


class TestRedeem:
    def test_uses_left_is_monotonic_and_never_negative(self, supabase, service):
        supabase.seed("invite_codes", code="THREE", uses_left=3, max_uses=3)

        results = [service.redeem("THREE", f"user-{i}") for i in range(5)]

        assert results == [True, True, True, False, False]
        row = supabase.rows("invite_codes")[0]
        assert row["uses_left"] == 0
        assert row["used_by"] == "user-2"

    def test_exhausted_code_is_not_redeemable(self, supabase, service, invite_code):
        assert service.redeem("ABC123", "user-1") is True

        assert service.find_redeemable("ABC123") is None
        assert service.redeem("ABC123", "user-2") is False

    def test_concurrent_redemptions_of_last_use(self, supabase, service, invite_code):
        with ThreadPoolExecutor(max_workers=2) as pool:
            results = list(pool.map(lambda uid: service.redeem("ABC123", uid), ["user-a", "user-b"]))

        assert sorted(results) == [False, True]
        assert supabase.rows("invite_codes")[0]["uses_left"] == 0

    def test_find_redeemable_does_not_normalize(self, supabase, service, invite_code):
        assert service.find_redeemable(" ABC123") is None
        assert service.find_redeemable("abc123") is None
        assert service.find_redeemable("ABC123").code == "ABC123"


class TestAdminOperations:
    def test_generated_code_starts_unused(self, supabase, service):
        code = service.generate(InviteCodeCreate(max_uses=5), created_by="admin-1")

        assert code.uses_left == code.max_uses == 5
        assert code.state == InviteCodeState.UNUSED
        assert code.created_by == "admin-1"
        assert len(code.code) == 8
        assert set(code.code) <= set(INVITE_CHARSET)

    def test_generate_retries_on_collision(self, supabase, service, monkeypatch):
        supabase.seed("invite_codes", code="TAKEN000")
        candidates = iter(["TAKEN000", "FRESH000"])
        monkeypatch.setattr(
            "linkbio.modules.invites.service.generate_invite_code", lambda: next(candidates)
        )

        code = service.generate(InviteCodeCreate(), created_by="admin-1")

        assert code.code == "FRESH000"

    def test_delete_exhausted_code(self, supabase, service, invite_code):
        service.redeem("ABC123", "user-1")

        assert service.delete_code(invite_code["id"]) is True
        assert supabase.rows("invite_codes") == []

    def test_delete_unknown_code(self, service):
        with pytest.raises(HTTPException) as exc_info:
            service.delete_code("missing")
        assert exc_info.value.status_code == 404

    def test_list_codes_includes_exhausted(self, supabase, service):
        supabase.seed("invite_codes", code="USED", uses_left=0, max_uses=1)
        supabase.seed("invite_codes", code="FRESH", uses_left=1, max_uses=1)

        codes = {c.code: c.state for c in service.list_codes()}

        assert codes == {"USED": InviteCodeState.EXHAUSTED, "FRESH": InviteCodeState.UNUSED}

    def test_generate_invite_code_length(self):
        assert len(generate_invite_code(12)) == 12
