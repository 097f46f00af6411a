from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class PaymentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"


class PaymentLogCreate(BaseModel):
    badge_id: Optional[str] = None
    discord_username: Optional[str] = None
    amount: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None


class PaymentLogResponse(BaseModel):
    id: str
    user_id: str
    badge_id: Optional[str] = None
    discord_username: Optional[str] = None
    amount: Optional[float] = None
    status: PaymentStatus = PaymentStatus.PENDING
    notes: Optional[str] = None
    confirmed_at: Optional[datetime] = None
    confirmed_by: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
