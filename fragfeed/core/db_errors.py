from postgrest.exceptions import APIError

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: Exception) -> bool:
    """True when PostgREST rejected a write because a unique index already holds the row."""
    return isinstance(exc, APIError) and exc.code == UNIQUE_VIOLATION
