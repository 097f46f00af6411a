from enum import Enum
from pydantic import BaseModel, Field, computed_field
from typing import Optional
from datetime import datetime


class InviteCodeState(str, Enum):
    UNUSED = "unused"
    PARTIALLY_USED = "partially_used"
    EXHAUSTED = "exhausted"

    @classmethod
    def of(cls, uses_left: int, max_uses: int) -> "InviteCodeState":
        if uses_left <= 0:
            return cls.EXHAUSTED
        if uses_left >= max_uses:
            return cls.UNUSED
        return cls.PARTIALLY_USED


class InviteCodeCreate(BaseModel):
    max_uses: int = Field(default=1, ge=1, le=1000)


class InviteCodeResponse(BaseModel):
    id: str
    code: str
    uses_left: int
    max_uses: int
    created_by: Optional[str] = None
    used_by: Optional[str] = None
    used_at: Optional[datetime] = None
    created_at: datetime

    @computed_field
    @property
    def state(self) -> InviteCodeState:
        return InviteCodeState.of(self.uses_left, self.max_uses)

    @property
    def is_redeemable(self) -> bool:
        return self.uses_left > 0

    class Config:
        from_attributes = True
