import hashlib
import time
import logging
from supabase import Client
from linkbio.modules.auth.schemas import LoginRequest, TokenResponse
from linkbio.modules.registration.errors import IssuerRejected
from fastapi import HTTPException
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def _cache_key(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def evict_cached_user(token: str) -> None:
    _AUTH_USER_CACHE.pop(_cache_key(token), None)


def clear_user_cache() -> None:
    _AUTH_USER_CACHE.clear()


class AuthService:
    def __init__(self, supabase: Client, admin_client: Optional[Client] = None):
        self.supabase = supabase
        self.admin_client = admin_client

    def create_identity(self, email: str, password: str):
        """Create a credential identity. Issuer errors are raised as IssuerRejected with the issuer's message."""
        try:
            auth_response = self.supabase.auth.sign_up({
                "email": email,
                "password": password,
            })
        except Exception as e:
            raise IssuerRejected(str(e))

        if not auth_response.user:
            raise IssuerRejected("Failed to register user")
        # An existing email comes back as an obfuscated user with no identities when confirmation is on
        if getattr(auth_response.user, "identities", None) == []:
            raise IssuerRejected("User already registered")
        return auth_response.user

    def delete_identity(self, user_id: str) -> bool:
        """Delete an identity via the admin API. Returns False when no service role client is configured."""
        if self.admin_client is None:
            return False
        self.admin_client.auth.admin.delete_user(user_id)
        return True

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })

            if not auth_response.user or not auth_response.session:
                raise HTTPException(status_code=401, detail="Invalid credentials")

            return TokenResponse(
                access_token=auth_response.session.access_token,
                refresh_token=auth_response.session.refresh_token,
                token_type="bearer",
                user_id=auth_response.user.id,
                email=auth_response.user.email or login_data.email
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise HTTPException(status_code=401, detail="Invalid email or password")
            raise HTTPException(status_code=500, detail=f"Login failed: {error_message}")

    def refresh(self, refresh_token: str) -> TokenResponse:
        """Exchange a refresh token for a new session"""
        try:
            auth_response = self.supabase.auth.refresh_session(refresh_token)
            if not auth_response.user or not auth_response.session:
                raise HTTPException(status_code=401, detail="Invalid refresh token")
            return TokenResponse(
                access_token=auth_response.session.access_token,
                refresh_token=auth_response.session.refresh_token,
                token_type="bearer",
                user_id=auth_response.user.id,
                email=auth_response.user.email or ""
            )
        except HTTPException:
            raise
        except Exception:
            raise HTTPException(status_code=401, detail="Invalid refresh token")

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token. Uses short TTL cache to reduce auth API calls."""
        try:
            cache_key = _cache_key(token)
            now = time.monotonic()
            if cache_key in _AUTH_USER_CACHE:
                user_data, expiry = _AUTH_USER_CACHE[cache_key]
                if now < expiry:
                    return user_data
                del _AUTH_USER_CACHE[cache_key]
            user_response = self.supabase.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            user = user_response.user
            user_data = {
                "id": user.id,
                "email": user.email,
                "user_metadata": user.user_metadata or {},
                "app_metadata": user.app_metadata or {},
                "created_at": user.created_at,
                "updated_at": user.updated_at
            }
            if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
                _AUTH_USER_CACHE[cache_key] = (user_data, now + _AUTH_CACHE_TTL_SEC)
            return user_data
        except HTTPException:
            raise
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

    def logout(self, token: str) -> bool:
        """Forget the cached identity for this token and sign out with Supabase Auth"""
        evict_cached_user(token)
        try:
            # Supabase access tokens are stateless JWTs; they stay valid until they expire
            self.supabase.auth.sign_out()
            return True
        except Exception as e:
            logger.warning(f"Sign out failed: {e}")
            return False
