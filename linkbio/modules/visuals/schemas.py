from enum import Enum
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class BackgroundType(str, Enum):
    GRADIENT = "gradient"
    IMAGE = "image"
    VIDEO = "video"


class VisualSettingsUpdate(BaseModel):
    background_type: Optional[BackgroundType] = None
    background_value: Optional[str] = None
    background_audio_url: Optional[str] = None
    audio_autoplay: Optional[bool] = None
    audio_loop: Optional[bool] = None
    effect_snowfall: Optional[bool] = None
    effect_particles: Optional[bool] = None
    effect_glow: Optional[bool] = None
    effect_glitch: Optional[bool] = None


class VisualSettingsResponse(BaseModel):
    id: str
    user_id: str
    background_type: BackgroundType = BackgroundType.GRADIENT
    background_value: Optional[str] = None
    background_audio_url: Optional[str] = None
    audio_autoplay: bool = False
    audio_loop: bool = True
    effect_snowfall: bool = False
    effect_particles: bool = False
    effect_glow: bool = True
    effect_glitch: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
