from pydantic import BaseModel


class AdminFlagUpdate(BaseModel):
    is_admin: bool


class AdminStats(BaseModel):
    total_users: int
    invite_codes_total: int
    invite_codes_used: int  # redeemed at least once
    invite_codes_active: int  # still redeemable
    payments_pending: int
    payments_confirmed: int
