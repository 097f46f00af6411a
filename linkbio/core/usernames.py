"""
Username normalization and availability checks.

Shared by registration and profile editing so both apply the same rules.
The availability check is only a fast path for a friendly error message;
the unique index on profiles.username is what actually prevents duplicates.
"""

import re
from typing import Optional
from supabase import Client

USERNAME_PATTERN = re.compile(r"[a-zA-Z0-9_]+")
USERNAME_MIN_LENGTH = 3

_DISALLOWED = re.compile(r"[^a-z0-9_]")


def normalize_username(raw: str) -> str:
    """Lowercase and drop every character outside [a-z0-9_]."""
    return _DISALLOWED.sub("", raw.lower())


def is_username_available(
    supabase: Client,
    username: str,
    exclude_user_id: Optional[str] = None
) -> bool:
    """True if no profile other than exclude_user_id's owns the normalized username."""
    normalized = normalize_username(username)
    result = supabase.table("profiles")\
        .select("user_id")\
        .eq("username", normalized)\
        .execute()
    owners = [row["user_id"] for row in (result.data or [])]
    if exclude_user_id is not None:
        owners = [owner for owner in owners if owner != exclude_user_id]
    return not owners
