from fastapi import APIRouter, Depends, Query
from linkbio.database.supabase_client import get_supabase
from linkbio.core.usernames import normalize_username
from linkbio.modules.profiles.schemas import (
    ProfileUpdate, ProfileResponse, UsernameAvailability, PublicProfileResponse
)
from linkbio.modules.profiles.service import ProfileService
from linkbio.modules.visuals.service import VisualSettingsService
from linkbio.modules.links.service import LinkService
from linkbio.modules.badges.service import BadgeService
from linkbio.core.dependencies import get_current_user_id, get_optional_user
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_profile_service(supabase: Client = Depends(get_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    current_user: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    return service.get_by_user_id(current_user["id"])


@router.put("/me", response_model=ProfileResponse)
async def update_my_profile(
    profile_data: ProfileUpdate,
    current_user: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    """Update display name, username, bio or avatar"""
    return service.update_profile(current_user["id"], profile_data)


@router.get("/username-availability", response_model=UsernameAvailability)
async def check_username_availability(
    username: str = Query(..., min_length=1),
    current_user: Optional[Dict] = Depends(get_optional_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Check a username; a signed-in caller's own name is reported as available"""
    user_id = current_user["id"] if current_user else None
    normalized = normalize_username(username)
    available = bool(normalized) and service.check_username(normalized, user_id)
    return UsernameAvailability(username=normalized, available=available)


@router.get("/{username}", response_model=PublicProfileResponse)
async def get_public_profile(
    username: str,
    supabase: Client = Depends(get_supabase),
    service: ProfileService = Depends(get_profile_service)
):
    """Public profile page data: enabled links and displayed badges only"""
    profile = service.get_by_username(username)
    visual_settings = VisualSettingsService(supabase).find(profile.user_id)
    links = LinkService(supabase).list_links(profile.user_id, enabled_only=True)
    badges = BadgeService(supabase).list_user_badges(profile.user_id, displayed_only=True)
    return PublicProfileResponse(
        profile=profile,
        visual_settings=visual_settings,
        links=links,
        badges=badges
    )
