"""
Core dependencies for route protection and admin checks
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from linkbio.database.supabase_client import get_supabase, get_service_supabase
from linkbio.modules.auth.service import AuthService
from linkbio.core.session import SessionContext
from supabase import Client
from typing import Optional
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()


def get_auth_service(
    supabase: Client = Depends(get_supabase),
    admin_client: Optional[Client] = Depends(get_service_supabase)
) -> AuthService:
    return AuthService(supabase, admin_client)


def get_session_context(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> SessionContext:
    """Start a session context from the request's bearer token"""
    context = SessionContext(auth_service)
    context.start(credentials.credentials)
    return context


def get_current_user_id(context: SessionContext = Depends(get_session_context)) -> dict:
    """Extract current user info from JWT token"""
    return context.user


def is_admin(user_id: str, supabase: Client) -> bool:
    """Check the is_admin flag on the user's profile"""
    try:
        result = supabase.table("profiles")\
            .select("is_admin")\
            .eq("user_id", user_id)\
            .limit(1)\
            .execute()
        return bool(result.data) and bool(result.data[0].get("is_admin"))
    except Exception as e:
        logger.error(f"Error checking admin flag for {user_id}: {e}")
        return False


def require_admin(
    user_data: dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase)
) -> dict:
    """Dependency that only lets admins through"""
    if not is_admin(user_data["id"], supabase):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return user_data


optional_security = HTTPBearer(auto_error=False)


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(optional_security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[dict]:
    """Current user when a bearer token is sent, None for anonymous requests"""
    if credentials is None:
        return None
    context = SessionContext(auth_service)
    return context.start(credentials.credentials)
