import logging
from supabase import Client
from linkbio.config import settings
from linkbio.database.errors import is_foreign_key_violation
from linkbio.modules.payments.schemas import PaymentLogCreate, PaymentLogResponse
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class PaymentService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_log(self, user_id: str, payment_data: PaymentLogCreate) -> PaymentLogResponse:
        """Record a pending purchase request"""
        try:
            try:
                result = self.supabase.table("payment_logs").insert({
                    "user_id": user_id,
                    **payment_data.model_dump()
                }).execute()
            except Exception as e:
                if is_foreign_key_violation(e):
                    raise HTTPException(status_code=404, detail="Badge not found")
                raise

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to record payment")

            logger.info(f"Payment log created for {user_id}")
            return PaymentLogResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_recent(self, limit: Optional[int] = None) -> List[PaymentLogResponse]:
        """Most recent payment logs, newest first"""
        try:
            result = self.supabase.table("payment_logs")\
                .select("*")\
                .order("created_at", desc=True)\
                .limit(limit or settings.payment_log_page_size)\
                .execute()
            return [PaymentLogResponse(**log) for log in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def count_by_status(self, status: str) -> int:
        try:
            result = self.supabase.table("payment_logs")\
                .select("id")\
                .eq("status", status)\
                .execute()
            return len(result.data or [])
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
