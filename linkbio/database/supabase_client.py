"""
Process-wide Supabase clients.

The anon client serves every request (PostgREST queries, sign up, sign in).
The admin client uses the service role key and exists only to undo an
identity whose registration could not be completed.
"""

import logging
from supabase import create_client, Client
from linkbio.config import settings
from typing import Optional

logger = logging.getLogger(__name__)


class SupabaseClients:
    _anon: Optional[Client] = None
    _admin: Optional[Client] = None

    @classmethod
    def anon(cls) -> Client:
        if cls._anon is None:
            cls._anon = create_client(settings.supabase_url, settings.supabase_key)
        return cls._anon

    @classmethod
    def admin(cls) -> Optional[Client]:
        """Service role client, or None when SUPABASE_SERVICE_ROLE_KEY is not set"""
        if cls._admin is None and cls.has_admin():
            logger.info("Creating Supabase service role client")
            cls._admin = create_client(settings.supabase_url, settings.supabase_service_role_key)
        return cls._admin

    @staticmethod
    def has_admin() -> bool:
        return bool(settings.supabase_service_role_key)

    @classmethod
    def reset(cls):
        cls._anon = None
        cls._admin = None


def get_supabase() -> Client:
    return SupabaseClients.anon()


def get_service_supabase() -> Optional[Client]:
    return SupabaseClients.admin()
