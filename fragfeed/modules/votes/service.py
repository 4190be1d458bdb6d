from supabase import Client
from fragfeed.modules.votes.schemas import VoteCounts
from fragfeed.modules.counters.service import CounterService, upvote_key, downvote_key
from fragfeed.core.db_errors import is_unique_violation
from typing import Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

UPVOTE = "upvote"
DOWNVOTE = "downvote"

_TABLES = {UPVOTE: "upvotes", DOWNVOTE: "downvotes"}

VOTE_ALREADY_RECORDED = "Vote already recorded"


class VoteService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.counters = CounterService(supabase)

    def _get_vote(self, direction: str, post_id: str, user_id: str) -> Optional[dict]:
        result = self.supabase.table(_TABLES[direction])\
            .select("id")\
            .eq("post_id", post_id)\
            .eq("user_id", user_id)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def toggle(self, direction: str, post_id: str, user_id: str) -> bool:
        """Flip the caller's vote in one direction.

        Removes an existing vote of that direction; otherwise clears any
        opposite vote and records this one. Returns True when the vote is now
        present.
        """
        try:
            post = self.supabase.table("posts")\
                .select("id")\
                .eq("id", post_id)\
                .limit(1)\
                .execute()
            if not post.data:
                raise HTTPException(status_code=404, detail="Post not found")

            # Vote rows and both counters change in one transaction
            try:
                result = self.supabase.rpc("toggle_vote", {
                    "p_post_id": post_id,
                    "p_user_id": user_id,
                    "p_direction": direction,
                }).execute()
            except Exception as e:
                if is_unique_violation(e):
                    raise HTTPException(status_code=400, detail=VOTE_ALREADY_RECORDED)
                raise
            return bool(result.data)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error toggling {direction} on post {post_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def toggle_upvote(self, post_id: str, user_id: str) -> bool:
        return self.toggle(UPVOTE, post_id, user_id)

    def toggle_downvote(self, post_id: str, user_id: str) -> bool:
        return self.toggle(DOWNVOTE, post_id, user_id)

    def get_vote_counts(self, post_id: str) -> VoteCounts:
        try:
            counts = self.counters.count_many([upvote_key(post_id), downvote_key(post_id)])
            upvotes = counts[upvote_key(post_id)]
            downvotes = counts[downvote_key(post_id)]
            return VoteCounts(upvotes=upvotes, downvotes=downvotes, total=upvotes - downvotes)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def has_upvoted(self, post_id: str, user_id: str) -> bool:
        try:
            return self._get_vote(UPVOTE, post_id, user_id) is not None
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def has_downvoted(self, post_id: str, user_id: str) -> bool:
        try:
            return self._get_vote(DOWNVOTE, post_id, user_id) is not None
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
