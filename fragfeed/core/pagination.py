from typing import Any, List, Optional, Tuple


def paginate(query: Any, limit: int, offset: int) -> Tuple[List[dict], bool, Optional[int]]:
    """Run an ordered select for one page.

    Fetches one extra row to learn whether another page exists. Returns
    (rows, is_done, next_offset); next_offset is None on the last page.
    """
    result = query.limit(limit + 1).offset(offset).execute()
    rows = result.data or []
    is_done = len(rows) <= limit
    next_offset = None if is_done else offset + limit
    return rows[:limit], is_done, next_offset
