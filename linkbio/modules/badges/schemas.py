from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class BadgeCreate(BaseModel):
    name: str = Field(min_length=1)
    icon: str = Field(min_length=1)
    tooltip: Optional[str] = None
    is_premium: bool = False
    discord_buy_link: Optional[str] = None


class BadgeUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    icon: Optional[str] = Field(default=None, min_length=1)
    tooltip: Optional[str] = None
    is_premium: Optional[bool] = None
    discord_buy_link: Optional[str] = None


class BadgeResponse(BaseModel):
    id: str
    name: str
    icon: str
    tooltip: Optional[str] = None
    is_premium: Optional[bool] = False
    discord_buy_link: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserBadgeAssign(BaseModel):
    badge_id: str


class UserBadgeDisplayUpdate(BaseModel):
    is_displayed: bool


class UserBadgeResponse(BaseModel):
    id: str
    user_id: str
    badge_id: str
    is_displayed: Optional[bool] = True
    acquired_at: datetime
    badge: Optional[BadgeResponse] = None

    class Config:
        from_attributes = True
