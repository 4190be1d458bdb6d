from supabase import Client
from typing import Dict, List
import logging

logger = logging.getLogger(__name__)

_BATCH_SIZE = 200


def post_count_key(user_id: str) -> str:
    return f"post_count:{user_id}"


def comment_count_key(post_id: str) -> str:
    return f"comment_count:{post_id}"


def upvote_key(post_id: str) -> str:
    return f"upvote:{post_id}"


def downvote_key(post_id: str) -> str:
    return f"downvote:{post_id}"


class CounterService:
    """Denormalized counts.

    create_post, delete_post, create_comment, delete_comment and toggle_vote
    call adjust_counter inside their own transaction; inc and dec call it on
    their own for counters that no such function maintains.
    """

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def inc(self, key: str) -> int:
        return self._adjust(key, 1)

    def dec(self, key: str) -> int:
        return self._adjust(key, -1)

    def _adjust(self, key: str, delta: int) -> int:
        result = self.supabase.rpc("adjust_counter", {"counter_key": key, "delta": delta}).execute()
        logger.debug(f"Counter {key} adjusted by {delta} -> {result.data}")
        return int(result.data or 0)

    def count(self, key: str) -> int:
        result = self.supabase.table("counters")\
            .select("value")\
            .eq("key", key)\
            .limit(1)\
            .execute()
        return int(result.data[0]["value"]) if result.data else 0

    def count_many(self, keys: List[str]) -> Dict[str, int]:
        counts = {key: 0 for key in keys}
        # Keys travel in the query string, so look them up in batches
        for start in range(0, len(keys), _BATCH_SIZE):
            result = self.supabase.table("counters")\
                .select("key, value")\
                .in_("key", keys[start:start + _BATCH_SIZE])\
                .execute()
            for row in result.data or []:
                counts[row["key"]] = int(row["value"])
        return counts
