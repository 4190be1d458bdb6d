from supabase import Client
from fragfeed.modules.saved_posts.schemas import SavedPostResponse
from fragfeed.modules.posts.service import enrich_posts
from fragfeed.core.db_errors import is_unique_violation
from typing import List, Optional
from fastapi import HTTPException

ALREADY_SAVED = "Post already saved"
NOT_SAVED = "Post not saved"


class SavedPostService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _get_saved(self, user_id: str, post_id: str) -> Optional[dict]:
        result = self.supabase.table("saved_posts")\
            .select("id")\
            .eq("user_id", user_id)\
            .eq("post_id", post_id)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def save_post(self, user_id: str, post_id: str) -> None:
        try:
            post = self.supabase.table("posts")\
                .select("id")\
                .eq("id", post_id)\
                .limit(1)\
                .execute()
            if not post.data:
                raise HTTPException(status_code=404, detail="Post not found")

            if self._get_saved(user_id, post_id):
                raise HTTPException(status_code=400, detail=ALREADY_SAVED)

            try:
                self.supabase.table("saved_posts").insert({
                    "user_id": user_id,
                    "post_id": post_id,
                }).execute()
            except Exception as e:
                if is_unique_violation(e):
                    raise HTTPException(status_code=400, detail=ALREADY_SAVED)
                raise
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def unsave_post(self, user_id: str, post_id: str) -> None:
        try:
            saved = self._get_saved(user_id, post_id)
            if not saved:
                raise HTTPException(status_code=400, detail=NOT_SAVED)

            self.supabase.table("saved_posts")\
                .delete()\
                .eq("id", saved["id"])\
                .execute()
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def is_post_saved(self, user_id: str, post_id: str) -> bool:
        try:
            return self._get_saved(user_id, post_id) is not None
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_user_saved_posts(self, user_id: str, limit: int = 50) -> List[SavedPostResponse]:
        """Most recently saved first; bookmarks of deleted posts are skipped"""
        try:
            saved = self.supabase.table("saved_posts")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("saved_at", desc=True)\
                .limit(limit)\
                .execute()
            if not saved.data:
                return []

            post_ids = [s["post_id"] for s in saved.data]
            posts_result = self.supabase.table("posts")\
                .select("*")\
                .in_("id", post_ids)\
                .execute()
            posts = {p.id: p for p in enrich_posts(self.supabase, posts_result.data or [])}

            items = []
            for s in saved.data:
                post = posts.get(s["post_id"])
                if not post:
                    continue
                items.append(SavedPostResponse(**post.model_dump(), saved_at=s["saved_at"]))
            return items
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
