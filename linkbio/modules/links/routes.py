from fastapi import APIRouter, Depends
from linkbio.database.supabase_client import get_supabase
from linkbio.modules.links.schemas import LinkCreate, LinkUpdate, LinkResponse
from linkbio.modules.links.service import LinkService
from linkbio.modules.links.smart_links import SMART_LINKS, SmartLink
from linkbio.core.dependencies import get_current_user_id
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/links", tags=["links"])


def get_link_service(supabase: Client = Depends(get_supabase)) -> LinkService:
    return LinkService(supabase)


@router.get("/platforms", response_model=List[SmartLink])
async def list_platforms():
    """Supported smart link platforms and how their URLs are built"""
    return list(SMART_LINKS.values())


@router.get("", response_model=List[LinkResponse])
async def list_my_links(
    current_user: Dict = Depends(get_current_user_id),
    service: LinkService = Depends(get_link_service)
):
    """List the caller's links, including disabled ones"""
    return service.list_links(current_user["id"])


@router.post("", response_model=LinkResponse, status_code=201)
async def add_link(
    link_data: LinkCreate,
    current_user: Dict = Depends(get_current_user_id),
    service: LinkService = Depends(get_link_service)
):
    """Add a link from a raw URL or a platform handle"""
    return service.add_link(current_user["id"], link_data)


@router.put("/{link_id}", response_model=LinkResponse)
async def update_link(
    link_id: str,
    link_data: LinkUpdate,
    current_user: Dict = Depends(get_current_user_id),
    service: LinkService = Depends(get_link_service)
):
    """Update one of the caller's links"""
    return service.update_link(current_user["id"], link_id, link_data)


@router.delete("/{link_id}", status_code=204)
async def delete_link(
    link_id: str,
    current_user: Dict = Depends(get_current_user_id),
    service: LinkService = Depends(get_link_service)
):
    """Delete one of the caller's links"""
    service.delete_link(current_user["id"], link_id)
    return None
