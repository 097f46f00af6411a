"""
Invite-gated registration.

register() runs these steps strictly in order, each one only after the
previous one succeeded:

1. find a redeemable invite code (exact, case-sensitive)
2. check the normalized username is free
3. create the credential identity
4. insert the profile
5. insert default visual settings
6. redeem the invite code through the store's guarded decrement

Steps 1-3 write nothing, so failures there can simply be retried. If step 4
or 5 fails, the identity created in step 3 is deleted again when a service
role client is available; otherwise it is logged as an orphan for manual
cleanup. Redemption runs last so a lost race on the code never takes down an
account that is otherwise complete; that outcome is still reported as
RedemptionRaceLost, or RedemptionFailed when the store errors instead.
Store errors in steps 1-2 surface as RegistrationUnavailable.
"""

import logging
from supabase import Client
from linkbio.core.usernames import normalize_username, is_username_available
from linkbio.database.errors import is_unique_violation
from linkbio.modules.auth.schemas import RegisterRequest, RegisterResponse
from linkbio.modules.auth.service import AuthService
from linkbio.modules.invites.service import InviteCodeService
from linkbio.modules.profiles.service import ProfileService
from linkbio.modules.visuals.service import VisualSettingsService
from linkbio.modules.registration.errors import (
    InvalidInviteCode, UsernameTaken, ProvisioningFailed, RedemptionRaceLost,
    RedemptionFailed, RegistrationUnavailable
)
from typing import Optional

logger = logging.getLogger(__name__)


class RegistrationService:
    def __init__(self, supabase: Client, admin_client: Optional[Client] = None):
        self.supabase = supabase
        self.auth = AuthService(supabase, admin_client)
        self.invites = InviteCodeService(supabase)
        self.profiles = ProfileService(supabase)
        self.visuals = VisualSettingsService(supabase)

    def register(self, register_data: RegisterRequest) -> RegisterResponse:
        try:
            invite = self.invites.find_redeemable(register_data.invite_code)
        except Exception as e:
            logger.error(f"Invite code lookup failed: {e}")
            raise RegistrationUnavailable("invite code")
        if invite is None:
            logger.warning("Registration rejected: invalid or exhausted invite code")
            raise InvalidInviteCode()

        username = normalize_username(register_data.username)
        try:
            available = is_username_available(self.supabase, username)
        except Exception as e:
            logger.error(f"Username lookup for {username} failed: {e}")
            raise RegistrationUnavailable("username")
        if not available:
            logger.warning(f"Registration rejected: username {username} taken")
            raise UsernameTaken(username)

        identity = self.auth.create_identity(register_data.email, register_data.password)
        user_id = identity.id
        logger.info(f"Identity {user_id} created for {username}")

        step = "profile"
        try:
            self.profiles.create_profile(user_id, username, display_name=register_data.username)
            step = "visual settings"
            self.visuals.create_default(user_id)
        except Exception as e:
            removed = self._discard_identity(user_id)
            if step == "profile" and is_unique_violation(e):
                logger.warning(f"Username {username} claimed concurrently; identity {user_id} removed={removed}")
                raise UsernameTaken(username)
            logger.error(f"Provisioning {step} for {user_id} failed: {e}")
            raise ProvisioningFailed(step, user_id, identity_removed=removed)

        try:
            redeemed = self.invites.redeem(register_data.invite_code, user_id)
        except Exception as e:
            logger.error(f"Redeeming invite code for {user_id} failed, account kept: {e}")
            raise RedemptionFailed(user_id, register_data.invite_code)
        if not redeemed:
            logger.warning(f"Invite code exhausted before {user_id} could redeem it; account kept")
            raise RedemptionRaceLost(user_id, register_data.invite_code)

        logger.info(f"Registration complete for {username} ({user_id})")
        return RegisterResponse(
            user_id=user_id,
            email=identity.email or register_data.email,
            username=username,
            message="Account created"
        )

    def _discard_identity(self, user_id: str) -> bool:
        """Undo steps 3-5 as far as possible. Returns True if the identity is gone."""
        try:
            self.profiles.delete_profile(user_id)
        except Exception as e:
            logger.error(f"Could not remove partial profile for {user_id}: {e}")
        try:
            removed = self.auth.delete_identity(user_id)
        except Exception as e:
            logger.error(f"Could not delete identity {user_id}: {e}")
            removed = False
        if not removed:
            logger.error(f"Orphaned identity {user_id} needs manual cleanup")
        return removed
