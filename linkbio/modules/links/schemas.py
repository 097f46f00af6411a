from pydantic import BaseModel, Field, computed_field, model_validator
from typing import Optional
from datetime import datetime

from linkbio.modules.links.smart_links import Platform, extract_value_from_url


class LinkCreate(BaseModel):
    title: str = Field(min_length=1)
    icon: Platform = Platform.LINK
    url: Optional[str] = None
    value: Optional[str] = None  # handle/id for templated platforms, used instead of url
    sort_order: Optional[int] = None
    is_enabled: bool = True

    @model_validator(mode="after")
    def check_target(self):
        if not (self.url or self.value):
            raise ValueError("Either url or value is required")
        return self


class LinkUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    icon: Optional[Platform] = None
    url: Optional[str] = None
    value: Optional[str] = None
    sort_order: Optional[int] = None
    is_enabled: Optional[bool] = None


class LinkResponse(BaseModel):
    id: str
    user_id: str
    title: str
    url: str
    icon: Optional[str] = Platform.LINK.value
    sort_order: Optional[int] = 0
    is_enabled: Optional[bool] = True
    created_at: datetime
    updated_at: Optional[datetime] = None

    @computed_field
    @property
    def value(self) -> str:
        return extract_value_from_url(self.url, self.icon)

    class Config:
        from_attributes = True
