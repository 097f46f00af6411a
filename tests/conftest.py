from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from linkbio.main import app
from linkbio.core.limiter import limiter
from linkbio.database.supabase_client import get_supabase, get_service_supabase
from linkbio.modules.auth.service import clear_user_cache
from tests.fakes import FakeSupabase


@pytest.fixture
def supabase():
    return FakeSupabase()


@pytest.fixture(autouse=True)
def _fresh_auth_cache():
    clear_user_cache()
    yield
    clear_user_cache()


@pytest.fixture
def client(supabase):
    app.dependency_overrides[get_supabase] = lambda: supabase
    app.dependency_overrides[get_service_supabase] = lambda: supabase
    was_enabled = limiter.enabled
    limiter.enabled = False
    with TestClient(app) as test_client:
        yield test_client
    limiter.enabled = was_enabled
    app.dependency_overrides.clear()


@pytest.fixture
def invite_code(supabase):
    return supabase.seed("invite_codes", code="ABC123", uses_left=1, max_uses=1)


@pytest.fixture
def make_user(supabase):
    """Factory for a fully provisioned user with a valid bearer token."""

    def _make_user(username: str = "alice", is_admin: bool = False, email: str = None):
        user = supabase.auth.create_user(email or f"{username}@example.com")
        profile = supabase.seed(
            "profiles", user_id=user.id, username=username, display_name=username, is_admin=is_admin
        )
        supabase.seed("visual_settings", user_id=user.id)
        token = supabase.auth.issue_token(user.id)
        return SimpleNamespace(
            id=user.id,
            email=user.email,
            profile=profile,
            token=token,
            headers={"Authorization": f"Bearer {token}"},
        )

    return _make_user
