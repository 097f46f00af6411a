from fastapi import APIRouter, Depends
from linkbio.database.supabase_client import get_supabase
from linkbio.modules.visuals.schemas import VisualSettingsUpdate, VisualSettingsResponse
from linkbio.modules.visuals.service import VisualSettingsService
from linkbio.core.dependencies import get_current_user_id
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/visuals", tags=["visuals"])


def get_visuals_service(supabase: Client = Depends(get_supabase)) -> VisualSettingsService:
    return VisualSettingsService(supabase)


@router.get("/me", response_model=VisualSettingsResponse)
async def get_my_visual_settings(
    current_user: Dict = Depends(get_current_user_id),
    service: VisualSettingsService = Depends(get_visuals_service)
):
    """Get the caller's background, audio and effect settings"""
    return service.get(current_user["id"])


@router.put("/me", response_model=VisualSettingsResponse)
async def update_my_visual_settings(
    settings_data: VisualSettingsUpdate,
    current_user: Dict = Depends(get_current_user_id),
    service: VisualSettingsService = Depends(get_visuals_service)
):
    """Update the caller's visual settings"""
    return service.update(current_user["id"], settings_data)
