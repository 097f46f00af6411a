"""
Registration failure taxonomy.

Each error carries a stable ``code`` for clients, the HTTP status it maps to,
and ``retry_safe`` telling the caller whether submitting the same form again
can succeed without manual cleanup.
"""

from typing import Any, Dict, Optional


class RegistrationError(Exception):
    code = "registration_failed"
    status_code = 400
    retry_safe = True

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.detail, "code": self.code, "retry_safe": self.retry_safe}


class InvalidInviteCode(RegistrationError):
    code = "invalid_invite_code"

    def __init__(self):
        super().__init__("Invalid or expired invite code")


class UsernameTaken(RegistrationError):
    code = "username_taken"
    status_code = 409

    def __init__(self, username: str):
        super().__init__("Username already taken")
        self.username = username


class IssuerRejected(RegistrationError):
    """The credential issuer refused to create the identity; its message is passed through."""

    code = "issuer_rejected"

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
        if "already registered" in reason.lower() or "already exists" in reason.lower():
            self.status_code = 409


class ProvisioningFailed(RegistrationError):
    """Identity exists but its profile or visual settings could not be written."""

    code = "provisioning_failed"
    status_code = 500

    def __init__(self, step: str, user_id: str, identity_removed: bool):
        if identity_removed:
            detail = f"Account setup failed while creating {step}. Nothing was kept, please try again."
        else:
            detail = f"Account setup failed while creating {step}. Contact support to finish setting up your account."
        super().__init__(detail)
        self.step = step
        self.user_id = user_id
        self.identity_removed = identity_removed
        self.retry_safe = identity_removed

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["step"] = self.step
        return data


class RedemptionRaceLost(RegistrationError):
    """The account was created but the invite code ran out before it could be redeemed."""

    code = "redemption_race_lost"
    status_code = 409
    retry_safe = False

    def __init__(self, user_id: str, invite_code: Optional[str] = None):
        super().__init__(
            "Your account was created, but the invite code was used up by another signup at the same time"
        )
        self.user_id = user_id
        self.invite_code = invite_code

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["user_id"] = self.user_id
        return data


class RegistrationUnavailable(RegistrationError):
    """The store failed while checking the invite code or username; nothing was written."""

    code = "registration_unavailable"
    status_code = 503

    def __init__(self, step: str):
        super().__init__(f"Could not check the {step} right now, please try again.")
        self.step = step

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["step"] = self.step
        return data


class RedemptionFailed(RegistrationError):
    """The account was created but redeeming the invite code errored."""

    code = "redemption_failed"
    status_code = 500
    retry_safe = False

    def __init__(self, user_id: str, invite_code: Optional[str] = None):
        super().__init__(
            "Your account was created, but the invite code could not be redeemed. Contact support to finish setting up your account."
        )
        self.user_id = user_id
        self.invite_code = invite_code

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["step"] = "invite redemption"
        data["user_id"] = self.user_id
        return data
