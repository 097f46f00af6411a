import secrets
import string
import logging
from supabase import Client
from linkbio.config import settings
from linkbio.database.errors import is_unique_violation
from linkbio.modules.invites.schemas import InviteCodeCreate, InviteCodeResponse
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)

INVITE_CHARSET = string.ascii_uppercase + string.digits  # A-Z, 0-9
MAX_GENERATE_ATTEMPTS = 10


def generate_invite_code(length: Optional[int] = None) -> str:
    """Generate a cryptographically random invite code."""
    length = length or settings.invite_code_length
    return "".join(secrets.choice(INVITE_CHARSET) for _ in range(length))


class InviteCodeService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def find_redeemable(self, code: str) -> Optional[InviteCodeResponse]:
        """Exact, case-sensitive lookup of a code that still has uses left"""
        result = self.supabase.table("invite_codes")\
            .select("*")\
            .eq("code", code)\
            .gt("uses_left", 0)\
            .limit(1)\
            .execute()
        if not result.data:
            return None
        return InviteCodeResponse(**result.data[0])

    def redeem(self, code: str, user_id: str) -> bool:
        """Atomically decrement uses_left and stamp the redeemer. False if the code ran out first."""
        result = self.supabase.rpc("use_invite_code", {
            "invite_code": code,
            "user_uuid": user_id
        }).execute()
        return bool(result.data)

    def generate(self, invite_data: InviteCodeCreate, created_by: str) -> InviteCodeResponse:
        """Create a fresh code with uses_left == max_uses"""
        try:
            for _ in range(MAX_GENERATE_ATTEMPTS):
                code = generate_invite_code()
                try:
                    result = self.supabase.table("invite_codes").insert({
                        "code": code,
                        "uses_left": invite_data.max_uses,
                        "max_uses": invite_data.max_uses,
                        "created_by": created_by
                    }).execute()
                except Exception as e:
                    if is_unique_violation(e):
                        logger.debug(f"Invite code collision on {code}, retrying")
                        continue
                    raise

                if not result.data:
                    raise HTTPException(status_code=500, detail="Failed to create invite code")

                logger.info(f"Invite code generated by {created_by} with {invite_data.max_uses} use(s)")
                return InviteCodeResponse(**result.data[0])

            raise HTTPException(status_code=500, detail="Failed to generate a unique invite code")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_codes(self) -> List[InviteCodeResponse]:
        """List all invite codes, newest first"""
        try:
            result = self.supabase.table("invite_codes")\
                .select("*")\
                .order("created_at", desc=True)\
                .execute()
            return [InviteCodeResponse(**code) for code in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_code(self, invite_id: str) -> bool:
        """Delete an invite code regardless of its state"""
        try:
            result = self.supabase.table("invite_codes")\
                .delete()\
                .eq("id", invite_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Invite code not found")

            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
