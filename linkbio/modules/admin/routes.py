from fastapi import APIRouter, Depends, HTTPException
from linkbio.database.supabase_client import get_supabase
from linkbio.modules.admin.schemas import AdminFlagUpdate, AdminStats
from linkbio.modules.admin.service import AdminService
from linkbio.modules.profiles.schemas import ProfileResponse
from linkbio.modules.profiles.service import ProfileService
from linkbio.core.dependencies import require_admin
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/admin", tags=["admin"])


def get_admin_service(supabase: Client = Depends(get_supabase)) -> AdminService:
    return AdminService(supabase)


def get_profile_service(supabase: Client = Depends(get_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("/stats", response_model=AdminStats)
async def get_stats(
    admin: Dict = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    return service.get_stats()


@router.get("/users", response_model=List[ProfileResponse])
async def list_users(
    limit: int = 50,
    offset: int = 0,
    admin: Dict = Depends(require_admin),
    service: ProfileService = Depends(get_profile_service)
):
    """List all profiles"""
    return service.list_profiles(limit=limit, offset=offset)


@router.put("/users/{user_id}/admin", response_model=ProfileResponse)
async def set_admin_flag(
    user_id: str,
    flag: AdminFlagUpdate,
    admin: Dict = Depends(require_admin),
    service: ProfileService = Depends(get_profile_service)
):
    """Grant or revoke admin rights"""
    if user_id == admin["id"] and not flag.is_admin:
        raise HTTPException(status_code=400, detail="Admins cannot revoke their own admin rights")
    return service.set_admin(user_id, flag.is_admin)
