from supabase import Client
from fragfeed.config import settings
from fragfeed.modules.leaderboard.schemas import TopPostResponse
from fragfeed.modules.counters.service import CounterService, upvote_key, downvote_key
from fragfeed.modules.posts.service import enrich_posts
from typing import List
from fastapi import HTTPException


class LeaderboardService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.counters = CounterService(supabase)

    def get_top_posts(self, limit: int = 10) -> List[TopPostResponse]:
        """Highest scoring posts (upvotes minus downvotes) among the most recent window.

        Equal scores keep recency order.
        """
        try:
            result = self.supabase.table("posts")\
                .select("*")\
                .order("created_at", desc=True)\
                .limit(settings.leaderboard_window)\
                .execute()
            rows = result.data or []
            if not rows:
                return []

            keys = []
            for row in rows:
                keys.extend([upvote_key(row["id"]), downvote_key(row["id"])])
            counts = self.counters.count_many(keys)

            scores = {
                row["id"]: counts[upvote_key(row["id"])] - counts[downvote_key(row["id"])]
                for row in rows
            }
            # sorted() is stable, so ties stay newest first
            top = sorted(rows, key=lambda r: scores[r["id"]], reverse=True)[:limit]
            return [
                TopPostResponse(**post.model_dump(), score=scores[post.id])
                for post in enrich_posts(self.supabase, top)
            ]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
