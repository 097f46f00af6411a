from postgrest.exceptions import APIError

# Postgres SQLSTATE codes surfaced by PostgREST
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


def is_unique_violation(exc: Exception) -> bool:
    return isinstance(exc, APIError) and exc.code == UNIQUE_VIOLATION


def is_foreign_key_violation(exc: Exception) -> bool:
    return isinstance(exc, APIError) and exc.code == FOREIGN_KEY_VIOLATION
