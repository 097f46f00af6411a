from fastapi import APIRouter, Depends, Request
from linkbio.database.supabase_client import get_supabase, get_service_supabase
from linkbio.config import settings
from linkbio.core.limiter import limiter
from linkbio.core.session import SessionContext
from linkbio.modules.auth.schemas import (
    LoginRequest, RefreshRequest, RegisterRequest, TokenResponse, RegisterResponse
)
from linkbio.modules.auth.service import AuthService
from linkbio.modules.registration.service import RegistrationService
from linkbio.modules.profiles.service import ProfileService
from linkbio.core.dependencies import get_auth_service, get_session_context
from supabase import Client
from typing import Optional

router = APIRouter(prefix="/auth", tags=["auth"])


def get_registration_service(
    supabase: Client = Depends(get_supabase),
    admin_client: Optional[Client] = Depends(get_service_supabase)
) -> RegistrationService:
    return RegistrationService(supabase, admin_client)


@router.post("/register", response_model=RegisterResponse, status_code=201)
@limiter.limit(settings.register_rate_limit)
async def register(
    request: Request,
    register_data: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service)
):
    """Register with an invite code; the client signs in afterwards"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    refresh_data: RefreshRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Exchange a refresh token for a new access token"""
    return SessionContext(service).refresh(refresh_data.refresh_token)


@router.post("/logout", status_code=200)
async def logout(context: SessionContext = Depends(get_session_context)):
    """Logout and invalidate token"""
    context.end()
    return {"message": "Logged out successfully"}


@router.get("/me")
async def get_current_user(
    context: SessionContext = Depends(get_session_context),
    supabase: Client = Depends(get_supabase)
):
    """Get current authenticated user with their profile (for frontend UI)."""
    profile = ProfileService(supabase).find_by_user_id(context.user_id)
    return {
        **context.user,
        "profile": profile.model_dump(mode="json") if profile else None,
        "is_admin": bool(profile and profile.is_admin)
    }
