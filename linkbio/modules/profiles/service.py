import logging
from datetime import datetime
from supabase import Client
from linkbio.core.usernames import normalize_username, is_username_available
from linkbio.database.errors import is_unique_violation
from linkbio.modules.profiles.schemas import ProfileUpdate, ProfileResponse
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_profile(self, user_id: str, username: str, display_name: str) -> ProfileResponse:
        """Insert the profile row for a new identity. Store errors propagate to the caller."""
        result = self.supabase.table("profiles").insert({
            "user_id": user_id,
            "username": normalize_username(username),
            "display_name": display_name
        }).execute()
        return ProfileResponse(**result.data[0])

    def delete_profile(self, user_id: str) -> bool:
        result = self.supabase.table("profiles")\
            .delete()\
            .eq("user_id", user_id)\
            .execute()
        return len(result.data) > 0

    def find_by_user_id(self, user_id: str) -> Optional[ProfileResponse]:
        result = self.supabase.table("profiles")\
            .select("*")\
            .eq("user_id", user_id)\
            .limit(1)\
            .execute()
        if not result.data:
            return None
        return ProfileResponse(**result.data[0])

    def get_by_user_id(self, user_id: str) -> ProfileResponse:
        """Get a user's own profile"""
        try:
            profile = self.find_by_user_id(user_id)
            if profile is None:
                raise HTTPException(status_code=404, detail="Profile not found")
            return profile
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_by_username(self, username: str) -> ProfileResponse:
        """Get a profile by its (case-insensitive) username"""
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .eq("username", normalize_username(username))\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Profile not found")

            return ProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def check_username(self, username: str, user_id: Optional[str] = None) -> bool:
        """Availability as seen by user_id; their own current name counts as available"""
        try:
            return is_username_available(self.supabase, username, exclude_user_id=user_id)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_profile(self, user_id: str, profile_data: ProfileUpdate) -> ProfileResponse:
        """Update the caller's profile; username changes are normalized and re-checked"""
        try:
            update_data = {"updated_at": datetime.utcnow().isoformat()}
            if profile_data.display_name is not None:
                update_data["display_name"] = profile_data.display_name
            if profile_data.bio is not None:
                update_data["bio"] = profile_data.bio
            if profile_data.avatar_url is not None:
                update_data["avatar_url"] = profile_data.avatar_url
            if profile_data.username is not None:
                username = normalize_username(profile_data.username)
                if not username:
                    raise HTTPException(status_code=400, detail="Username cannot be empty")
                if not is_username_available(self.supabase, username, exclude_user_id=user_id):
                    raise HTTPException(status_code=409, detail="Username is already taken")
                update_data["username"] = username

            try:
                result = self.supabase.table("profiles")\
                    .update(update_data)\
                    .eq("user_id", user_id)\
                    .execute()
            except Exception as e:
                if is_unique_violation(e):
                    raise HTTPException(status_code=409, detail="Username is already taken")
                raise

            if not result.data:
                raise HTTPException(status_code=404, detail="Profile not found")

            return ProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_profiles(self, limit: int = 50, offset: int = 0) -> List[ProfileResponse]:
        """List all profiles, newest first"""
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .order("created_at", desc=True)\
                .range(offset, offset + limit - 1)\
                .execute()
            return [ProfileResponse(**profile) for profile in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def set_admin(self, user_id: str, is_admin: bool) -> ProfileResponse:
        """Grant or revoke the admin flag"""
        try:
            result = self.supabase.table("profiles")\
                .update({"is_admin": is_admin, "updated_at": datetime.utcnow().isoformat()})\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Profile not found")

            logger.info(f"Admin flag for {user_id} set to {is_admin}")
            return ProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
