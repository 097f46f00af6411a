from pydantic import BaseModel, Field
from typing import Optional, List
from linkbio.modules.visuals.schemas import VisualSettingsResponse
from linkbio.modules.links.schemas import LinkResponse
from linkbio.modules.badges.schemas import UserBadgeResponse
from datetime import datetime

BIO_MAX_LENGTH = 200


class ProfileUpdate(BaseModel):
    display_name: Optional[str] = None
    username: Optional[str] = None
    bio: Optional[str] = Field(default=None, max_length=BIO_MAX_LENGTH)
    avatar_url: Optional[str] = None


class ProfileResponse(BaseModel):
    id: str
    user_id: str
    username: str
    display_name: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    is_admin: bool = False
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UsernameAvailability(BaseModel):
    username: str
    available: bool


class PublicProfileResponse(BaseModel):
    profile: ProfileResponse
    visual_settings: Optional[VisualSettingsResponse] = None
    links: List[LinkResponse]
    badges: List[UserBadgeResponse]
