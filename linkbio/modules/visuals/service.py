from datetime import datetime
from supabase import Client
from linkbio.modules.visuals.schemas import VisualSettingsUpdate, VisualSettingsResponse
from typing import Optional
from fastapi import HTTPException


class VisualSettingsService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_default(self, user_id: str) -> VisualSettingsResponse:
        """Insert the default row for a new profile. Store errors propagate to the caller."""
        result = self.supabase.table("visual_settings").insert({
            "user_id": user_id
        }).execute()
        return VisualSettingsResponse(**result.data[0])

    def find(self, user_id: str) -> Optional[VisualSettingsResponse]:
        result = self.supabase.table("visual_settings")\
            .select("*")\
            .eq("user_id", user_id)\
            .limit(1)\
            .execute()
        if not result.data:
            return None
        return VisualSettingsResponse(**result.data[0])

    def get(self, user_id: str) -> VisualSettingsResponse:
        """Get a user's visual settings"""
        try:
            settings_row = self.find(user_id)
            if settings_row is None:
                raise HTTPException(status_code=404, detail="Visual settings not found")
            return settings_row
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update(self, user_id: str, settings_data: VisualSettingsUpdate) -> VisualSettingsResponse:
        """Update only the fields that were sent"""
        try:
            update_data = settings_data.model_dump(exclude_unset=True, mode="json")
            update_data["updated_at"] = datetime.utcnow().isoformat()

            result = self.supabase.table("visual_settings")\
                .update(update_data)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Visual settings not found")

            return VisualSettingsResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
