from datetime import datetime
from supabase import Client
from linkbio.modules.links.schemas import LinkCreate, LinkUpdate, LinkResponse
from linkbio.modules.links.smart_links import Platform, resolve_link_url
from typing import List
from fastapi import HTTPException


class LinkService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_links(self, user_id: str, enabled_only: bool = False) -> List[LinkResponse]:
        """List a user's links in display order"""
        try:
            query = self.supabase.table("links")\
                .select("*")\
                .eq("user_id", user_id)
            if enabled_only:
                query = query.eq("is_enabled", True)
            result = query.order("sort_order").execute()
            return [LinkResponse(**link) for link in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def add_link(self, user_id: str, link_data: LinkCreate) -> LinkResponse:
        """Append a link to the end of the user's list unless a sort_order is given"""
        try:
            sort_order = link_data.sort_order
            if sort_order is None:
                existing = self.supabase.table("links")\
                    .select("id")\
                    .eq("user_id", user_id)\
                    .execute()
                sort_order = len(existing.data or []) + 1

            result = self.supabase.table("links").insert({
                "user_id": user_id,
                "title": link_data.title,
                "url": resolve_link_url(link_data.icon, link_data.url, link_data.value),
                "icon": link_data.icon.value,
                "sort_order": sort_order,
                "is_enabled": link_data.is_enabled
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to add link")

            return LinkResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_link(self, user_id: str, link_id: str, link_data: LinkUpdate) -> LinkResponse:
        """Update one of the user's links"""
        try:
            update_data = {"updated_at": datetime.utcnow().isoformat()}
            if link_data.title is not None:
                update_data["title"] = link_data.title
            if link_data.icon is not None:
                update_data["icon"] = link_data.icon.value
            if link_data.sort_order is not None:
                update_data["sort_order"] = link_data.sort_order
            if link_data.is_enabled is not None:
                update_data["is_enabled"] = link_data.is_enabled
            if link_data.url or link_data.value:
                platform = link_data.icon or self._current_platform(user_id, link_id)
                update_data["url"] = resolve_link_url(platform, link_data.url, link_data.value)

            result = self.supabase.table("links")\
                .update(update_data)\
                .eq("id", link_id)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Link not found")

            return LinkResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_link(self, user_id: str, link_id: str) -> bool:
        """Delete one of the user's links"""
        try:
            result = self.supabase.table("links")\
                .delete()\
                .eq("id", link_id)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Link not found")

            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _current_platform(self, user_id: str, link_id: str) -> Platform:
        result = self.supabase.table("links")\
            .select("icon")\
            .eq("id", link_id)\
            .eq("user_id", user_id)\
            .limit(1)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail="Link not found")
        try:
            return Platform(result.data[0].get("icon") or Platform.LINK.value)
        except ValueError:
            return Platform.LINK
