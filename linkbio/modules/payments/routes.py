from fastapi import APIRouter, Depends, Query
from linkbio.database.supabase_client import get_supabase
from linkbio.modules.payments.schemas import PaymentLogCreate, PaymentLogResponse
from linkbio.modules.payments.service import PaymentService
from linkbio.core.dependencies import get_current_user_id, require_admin
from supabase import Client
from typing import List, Dict

router = APIRouter(tags=["payments"])


def get_payment_service(supabase: Client = Depends(get_supabase)) -> PaymentService:
    return PaymentService(supabase)


@router.post("/payments", response_model=PaymentLogResponse, status_code=201)
async def create_payment_log(
    payment_data: PaymentLogCreate,
    current_user: Dict = Depends(get_current_user_id),
    service: PaymentService = Depends(get_payment_service)
):
    """Log a premium badge purchase for an admin to confirm"""
    return service.create_log(current_user["id"], payment_data)


@router.get("/admin/payment-logs", response_model=List[PaymentLogResponse])
async def list_payment_logs(
    limit: int = Query(20, ge=1, le=100),
    admin: Dict = Depends(require_admin),
    service: PaymentService = Depends(get_payment_service)
):
    return service.list_recent(limit)
