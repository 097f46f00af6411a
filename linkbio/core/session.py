"""
Request-scoped authentication state.

A SessionContext is created for each request that carries a bearer token,
handed to the routes that need the caller, and torn down on sign-out.
Nothing about the signed-in user is kept in module globals.
"""

from typing import Any, Dict, Optional
from linkbio.modules.auth.schemas import TokenResponse
from linkbio.modules.auth.service import AuthService, evict_cached_user


class SessionContext:
    def __init__(self, auth_service: AuthService):
        self._auth = auth_service
        self.token: Optional[str] = None
        self.user: Optional[Dict[str, Any]] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def user_id(self) -> Optional[str]:
        return self.user["id"] if self.user else None

    def start(self, token: str) -> Dict[str, Any]:
        """Resolve the token to a user; raises 401 if the issuer rejects it"""
        self.user = self._auth.get_current_user(token)
        self.token = token
        return self.user

    def refresh(self, refresh_token: str) -> TokenResponse:
        """Swap in the session the issuer returns for refresh_token"""
        tokens = self._auth.refresh(refresh_token)
        if self.token:
            evict_cached_user(self.token)
        self.start(tokens.access_token)
        return tokens

    def end(self) -> None:
        if self.token:
            self._auth.logout(self.token)
        self.token = None
        self.user = None
