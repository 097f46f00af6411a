from supabase import Client
from linkbio.modules.admin.schemas import AdminStats
from linkbio.modules.invites.service import InviteCodeService
from linkbio.modules.payments.schemas import PaymentStatus
from linkbio.modules.payments.service import PaymentService
from fastapi import HTTPException


class AdminService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.invites = InviteCodeService(supabase)
        self.payments = PaymentService(supabase)

    def get_stats(self) -> AdminStats:
        """Dashboard counters for the admin panel"""
        codes = self.invites.list_codes()
        try:
            users_result = self.supabase.table("profiles")\
                .select("id")\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        return AdminStats(
            total_users=len(users_result.data or []),
            invite_codes_total=len(codes),
            invite_codes_used=sum(1 for c in codes if c.uses_left < c.max_uses),
            invite_codes_active=sum(1 for c in codes if c.is_redeemable),
            payments_pending=self.payments.count_by_status(PaymentStatus.PENDING.value),
            payments_confirmed=self.payments.count_by_status(PaymentStatus.CONFIRMED.value)
        )
