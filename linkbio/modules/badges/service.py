import logging
from supabase import Client
from linkbio.database.errors import is_unique_violation
from linkbio.modules.badges.schemas import (
    BadgeCreate, BadgeUpdate, BadgeResponse, UserBadgeResponse
)
from typing import List
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class BadgeService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    # Catalog

    def list_badges(self) -> List[BadgeResponse]:
        """List the badge catalog"""
        try:
            result = self.supabase.table("badges")\
                .select("*")\
                .order("created_at")\
                .execute()
            return [BadgeResponse(**badge) for badge in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_badge(self, badge_id: str) -> BadgeResponse:
        try:
            result = self.supabase.table("badges")\
                .select("*")\
                .eq("id", badge_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Badge not found")

            return BadgeResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_badge(self, badge_data: BadgeCreate) -> BadgeResponse:
        """Add a badge to the catalog"""
        try:
            result = self.supabase.table("badges")\
                .insert(badge_data.model_dump())\
                .execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create badge")

            return BadgeResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_badge(self, badge_id: str, badge_data: BadgeUpdate) -> BadgeResponse:
        try:
            update_data = badge_data.model_dump(exclude_unset=True)
            if not update_data:
                return self.get_badge(badge_id)

            result = self.supabase.table("badges")\
                .update(update_data)\
                .eq("id", badge_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Badge not found")

            return BadgeResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_badge(self, badge_id: str) -> bool:
        """Delete a badge and every assignment of it"""
        try:
            self.supabase.table("user_badges")\
                .delete()\
                .eq("badge_id", badge_id)\
                .execute()

            result = self.supabase.table("badges")\
                .delete()\
                .eq("id", badge_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Badge not found")

            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    # Assignments

    def list_user_badges(self, user_id: str, displayed_only: bool = False) -> List[UserBadgeResponse]:
        """List a user's badges with the catalog entry embedded"""
        try:
            query = self.supabase.table("user_badges")\
                .select("*, badge:badges(*)")\
                .eq("user_id", user_id)
            if displayed_only:
                query = query.eq("is_displayed", True)
            result = query.execute()
            return [UserBadgeResponse(**user_badge) for user_badge in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def set_display(self, user_id: str, badge_id: str, is_displayed: bool) -> UserBadgeResponse:
        """Show or hide one of the user's badges on their public page"""
        try:
            result = self.supabase.table("user_badges")\
                .update({"is_displayed": is_displayed})\
                .eq("user_id", user_id)\
                .eq("badge_id", badge_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Badge not owned")

            return UserBadgeResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def assign_badge(self, user_id: str, badge_id: str) -> UserBadgeResponse:
        """Give a badge to a user; a second assignment of the same badge is a conflict"""
        try:
            self.get_badge(badge_id)

            # Fast path only; the (user_id, badge_id) unique constraint decides
            existing = self.supabase.table("user_badges")\
                .select("id")\
                .eq("user_id", user_id)\
                .eq("badge_id", badge_id)\
                .execute()

            if existing.data:
                raise HTTPException(status_code=409, detail="User already has this badge")

            try:
                result = self.supabase.table("user_badges").insert({
                    "user_id": user_id,
                    "badge_id": badge_id
                }).execute()
            except Exception as e:
                if is_unique_violation(e):
                    raise HTTPException(status_code=409, detail="User already has this badge")
                raise

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to assign badge")

            logger.info(f"Badge {badge_id} assigned to {user_id}")
            return UserBadgeResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def revoke_badge(self, user_id: str, badge_id: str) -> bool:
        try:
            result = self.supabase.table("user_badges")\
                .delete()\
                .eq("user_id", user_id)\
                .eq("badge_id", badge_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Badge not owned")

            logger.info(f"Badge {badge_id} revoked from {user_id}")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
