from fastapi import APIRouter, Depends
from linkbio.database.supabase_client import get_supabase
from linkbio.modules.badges.schemas import (
    BadgeCreate, BadgeUpdate, BadgeResponse,
    UserBadgeAssign, UserBadgeDisplayUpdate, UserBadgeResponse
)
from linkbio.modules.badges.service import BadgeService
from linkbio.core.dependencies import get_current_user_id, require_admin
from supabase import Client
from typing import List, Dict

router = APIRouter(tags=["badges"])


def get_badge_service(supabase: Client = Depends(get_supabase)) -> BadgeService:
    return BadgeService(supabase)


@router.get("/badges", response_model=List[BadgeResponse])
async def list_badges(service: BadgeService = Depends(get_badge_service)):
    """Public badge catalog"""
    return service.list_badges()


@router.get("/badges/me", response_model=List[UserBadgeResponse])
async def list_my_badges(
    current_user: Dict = Depends(get_current_user_id),
    service: BadgeService = Depends(get_badge_service)
):
    """Badges the caller owns, displayed or not"""
    return service.list_user_badges(current_user["id"])


@router.patch("/badges/me/{badge_id}", response_model=UserBadgeResponse)
async def set_badge_display(
    badge_id: str,
    display_data: UserBadgeDisplayUpdate,
    current_user: Dict = Depends(get_current_user_id),
    service: BadgeService = Depends(get_badge_service)
):
    """Show or hide an owned badge on the public profile"""
    return service.set_display(current_user["id"], badge_id, display_data.is_displayed)


@router.post("/admin/badges", response_model=BadgeResponse, status_code=201)
async def create_badge(
    badge_data: BadgeCreate,
    admin: Dict = Depends(require_admin),
    service: BadgeService = Depends(get_badge_service)
):
    return service.create_badge(badge_data)


@router.put("/admin/badges/{badge_id}", response_model=BadgeResponse)
async def update_badge(
    badge_id: str,
    badge_data: BadgeUpdate,
    admin: Dict = Depends(require_admin),
    service: BadgeService = Depends(get_badge_service)
):
    return service.update_badge(badge_id, badge_data)


@router.delete("/admin/badges/{badge_id}", status_code=204)
async def delete_badge(
    badge_id: str,
    admin: Dict = Depends(require_admin),
    service: BadgeService = Depends(get_badge_service)
):
    """Delete a badge along with all of its assignments"""
    service.delete_badge(badge_id)
    return None


@router.get("/admin/users/{user_id}/badges", response_model=List[UserBadgeResponse])
async def list_user_badges(
    user_id: str,
    admin: Dict = Depends(require_admin),
    service: BadgeService = Depends(get_badge_service)
):
    return service.list_user_badges(user_id)


@router.post("/admin/users/{user_id}/badges", response_model=UserBadgeResponse, status_code=201)
async def assign_badge(
    user_id: str,
    assign_data: UserBadgeAssign,
    admin: Dict = Depends(require_admin),
    service: BadgeService = Depends(get_badge_service)
):
    """Assign a badge to a user (409 if they already have it)"""
    return service.assign_badge(user_id, assign_data.badge_id)


@router.delete("/admin/users/{user_id}/badges/{badge_id}", status_code=204)
async def revoke_badge(
    user_id: str,
    badge_id: str,
    admin: Dict = Depends(require_admin),
    service: BadgeService = Depends(get_badge_service)
):
    service.revoke_badge(user_id, badge_id)
    return None
