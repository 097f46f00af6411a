from fastapi import APIRouter, Depends
from linkbio.database.supabase_client import get_supabase
from linkbio.modules.invites.schemas import InviteCodeCreate, InviteCodeResponse
from linkbio.modules.invites.service import InviteCodeService
from linkbio.core.dependencies import require_admin
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/admin/invite-codes", tags=["invite-codes"])


def get_invite_service(supabase: Client = Depends(get_supabase)) -> InviteCodeService:
    return InviteCodeService(supabase)


@router.get("", response_model=List[InviteCodeResponse])
async def list_invite_codes(
    admin: Dict = Depends(require_admin),
    service: InviteCodeService = Depends(get_invite_service)
):
    """List every invite code with its state"""
    return service.list_codes()


@router.post("", response_model=InviteCodeResponse, status_code=201)
async def generate_invite_code(
    invite_data: InviteCodeCreate,
    admin: Dict = Depends(require_admin),
    service: InviteCodeService = Depends(get_invite_service)
):
    """Generate a new invite code"""
    return service.generate(invite_data, admin["id"])


@router.delete("/{invite_id}", status_code=204)
async def delete_invite_code(
    invite_id: str,
    admin: Dict = Depends(require_admin),
    service: InviteCodeService = Depends(get_invite_service)
):
    """Delete an invite code"""
    service.delete_code(invite_id)
    return None
