# Typeahead search returns at most this many rows per query
SEARCH_RESULT_LIMIT = 10


def ilike_pattern(query_str: str) -> str:
    """Case-insensitive substring pattern with LIKE wildcards in the input escaped.

    PostgREST rewrites every ``*`` in a like/ilike value to ``%`` and offers no
    escape for it, so a literal asterisk becomes ``_`` and matches exactly one
    character (the asterisk included) instead of any run of text.
    """
    escaped = query_str.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_").replace("*", "_")
    return f"%{escaped}%"
