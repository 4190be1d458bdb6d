from supabase import Client
from fragfeed.modules.subreddits.schemas import (
    SubredditCreate, SubredditResponse, SubredditSearchResult, MembershipSubredditResponse,
    MemberResponse, MemberUser, MAX_GUIDELINES
)
from fragfeed.modules.media.service import MediaService
from fragfeed.modules.users.service import UserService
from fragfeed.core.db_errors import is_unique_violation
from fragfeed.core.search import SEARCH_RESULT_LIMIT, ilike_pattern
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

SUBREDDIT_NOT_FOUND = "Subreddit not found"
SUBREDDIT_EXISTS = "Subreddit already exists"
ALREADY_MEMBER = "Already a member of this subreddit"
NOT_MEMBER = "Not a member of this subreddit"

DEFAULT_GUIDELINES = [
    "Be respectful to other members",
    "Stay on topic",
    "No spam or self-promotion",
    "Follow FragFeed's content policy",
]


class SubredditService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.media = MediaService(supabase)

    def _to_response(self, row: dict) -> SubredditResponse:
        return SubredditResponse(
            **row,
            banner_image_url=self.media.get_url(row.get("banner_image")),
            logo_image_url=self.media.get_url(row.get("logo_image")),
        )

    def get_row_by_id(self, subreddit_id: str) -> Optional[dict]:
        result = self.supabase.table("subreddits")\
            .select("*")\
            .eq("id", subreddit_id)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def get_row_by_name(self, name: str) -> Optional[dict]:
        result = self.supabase.table("subreddits")\
            .select("*")\
            .eq("name", name)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def get_membership(self, user_id: str, subreddit_id: str) -> Optional[dict]:
        result = self.supabase.table("subreddit_memberships")\
            .select("*")\
            .eq("user_id", user_id)\
            .eq("subreddit_id", subreddit_id)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def create_subreddit(self, subreddit_data: SubredditCreate, user_id: str) -> str:
        """Create a community with default guidelines; the creator joins it automatically"""
        try:
            if self.get_row_by_name(subreddit_data.name):
                raise HTTPException(status_code=400, detail=SUBREDDIT_EXISTS)

            # Community row and creator membership are written in one transaction
            try:
                result = self.supabase.rpc("create_subreddit", {
                    "p_name": subreddit_data.name,
                    "p_description": subreddit_data.description,
                    "p_author_id": user_id,
                    "p_guidelines": list(DEFAULT_GUIDELINES),
                }).execute()
            except Exception as e:
                if is_unique_violation(e):
                    raise HTTPException(status_code=400, detail=SUBREDDIT_EXISTS)
                raise

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create subreddit")

            subreddit_id = result.data

            logger.info(f"Subreddit {subreddit_data.name} created by {user_id}")
            return subreddit_id
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_subreddit(self, name: str) -> SubredditResponse:
        try:
            row = self.get_row_by_name(name)
            if not row:
                raise HTTPException(status_code=404, detail=SUBREDDIT_NOT_FOUND)
            return self._to_response(row)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _get_owned(self, subreddit_id: str, user_id: str, what: str) -> dict:
        row = self.get_row_by_id(subreddit_id)
        if not row:
            raise HTTPException(status_code=404, detail=SUBREDDIT_NOT_FOUND)
        if row["author_id"] != user_id:
            raise HTTPException(status_code=403, detail=f"Only the community owner can update {what}")
        return row

    def _patch(self, subreddit_id: str, update_data: dict) -> SubredditResponse:
        result = self.supabase.table("subreddits")\
            .update(update_data)\
            .eq("id", subreddit_id)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail=SUBREDDIT_NOT_FOUND)
        return self._to_response(result.data[0])

    def update_banner(self, subreddit_id: str, user_id: str, banner_image: Optional[str]) -> SubredditResponse:
        try:
            self._get_owned(subreddit_id, user_id, "the banner")
            return self._patch(subreddit_id, {"banner_image": banner_image})
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_logo(self, subreddit_id: str, user_id: str, logo_image: Optional[str]) -> SubredditResponse:
        try:
            self._get_owned(subreddit_id, user_id, "the logo")
            return self._patch(subreddit_id, {"logo_image": logo_image})
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_guidelines(self, subreddit_id: str, user_id: str, guidelines: List[str]) -> SubredditResponse:
        """Replace guidelines, dropping blank entries and keeping at most ten"""
        try:
            self._get_owned(subreddit_id, user_id, "guidelines")
            filtered = [g for g in guidelines if g.strip()][:MAX_GUIDELINES]
            return self._patch(subreddit_id, {"guidelines": filtered})
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_name(self, subreddit_id: str, user_id: str, new_name: str) -> SubredditResponse:
        try:
            row = self._get_owned(subreddit_id, user_id, "the name")
            if row["name"] == new_name:
                raise HTTPException(status_code=400, detail="Please enter a different name")
            if self.get_row_by_name(new_name):
                raise HTTPException(status_code=400, detail=SUBREDDIT_EXISTS)
            try:
                return self._patch(subreddit_id, {"name": new_name})
            except Exception as e:
                if is_unique_violation(e):
                    raise HTTPException(status_code=400, detail=SUBREDDIT_EXISTS)
                raise
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def is_owner(self, subreddit_id: str, user_id: str) -> bool:
        try:
            row = self.get_row_by_id(subreddit_id)
            return bool(row) and row["author_id"] == user_id
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def search(self, query_str: str) -> List[SubredditSearchResult]:
        if not query_str:
            return []
        try:
            result = self.supabase.table("subreddits")\
                .select("*")\
                .ilike("name", ilike_pattern(query_str))\
                .limit(SEARCH_RESULT_LIMIT)\
                .execute()
            return [
                SubredditSearchResult(
                    **row,
                    title=row["name"],
                    logo_image_url=self.media.get_url(row.get("logo_image")),
                )
                for row in result.data or []
            ]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def join(self, subreddit_id: str, user_id: str) -> None:
        try:
            if not self.get_row_by_id(subreddit_id):
                raise HTTPException(status_code=404, detail=SUBREDDIT_NOT_FOUND)
            if self.get_membership(user_id, subreddit_id):
                raise HTTPException(status_code=400, detail=ALREADY_MEMBER)
            try:
                self.supabase.table("subreddit_memberships").insert({
                    "user_id": user_id,
                    "subreddit_id": subreddit_id,
                }).execute()
            except Exception as e:
                if is_unique_violation(e):
                    raise HTTPException(status_code=400, detail=ALREADY_MEMBER)
                raise
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def leave(self, subreddit_id: str, user_id: str) -> None:
        try:
            membership = self.get_membership(user_id, subreddit_id)
            if not membership:
                raise HTTPException(status_code=400, detail=NOT_MEMBER)
            self.supabase.table("subreddit_memberships")\
                .delete()\
                .eq("id", membership["id"])\
                .execute()
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def is_member(self, subreddit_id: str, user_id: str) -> bool:
        try:
            return self.get_membership(user_id, subreddit_id) is not None
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_user_memberships(self, username: str) -> List[MembershipSubredditResponse]:
        """Communities a user belongs to; unknown usernames yield an empty list"""
        try:
            user = UserService(self.supabase).get_user_by_username(username)
            if not user:
                return []

            memberships = self.supabase.table("subreddit_memberships")\
                .select("*")\
                .eq("user_id", user["id"])\
                .execute()
            if not memberships.data:
                return []

            subreddit_ids = [m["subreddit_id"] for m in memberships.data]
            subreddits_result = self.supabase.table("subreddits")\
                .select("*")\
                .in_("id", subreddit_ids)\
                .execute()
            subreddits = {s["id"]: s for s in subreddits_result.data or []}

            items = []
            for membership in memberships.data:
                subreddit = subreddits.get(membership["subreddit_id"])
                if not subreddit:
                    continue
                items.append(MembershipSubredditResponse(
                    **subreddit,
                    logo_image_url=self.media.get_url(subreddit.get("logo_image")),
                    joined_at=membership["joined_at"],
                    membership_id=membership["id"],
                ))
            return items
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_member_count(self, subreddit_id: str) -> int:
        try:
            result = self.supabase.table("subreddit_memberships")\
                .select("id", count="exact")\
                .eq("subreddit_id", subreddit_id)\
                .execute()
            if result.count is not None:
                return result.count
            return len(result.data or [])
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_members(self, subreddit_id: str, limit: int = 50) -> List[MemberResponse]:
        """Newest members first; memberships whose user is gone are skipped"""
        try:
            memberships = self.supabase.table("subreddit_memberships")\
                .select("*")\
                .eq("subreddit_id", subreddit_id)\
                .order("joined_at", desc=True)\
                .limit(limit)\
                .execute()
            rows = memberships.data or []
            users = UserService(self.supabase).get_usernames([m["user_id"] for m in rows])

            members = []
            for membership in rows:
                user = users.get(membership["user_id"])
                if not user:
                    continue
                members.append(MemberResponse(
                    id=membership["id"],
                    user=MemberUser(
                        id=user["id"],
                        username=user["username"],
                        profile_picture_url=self.media.get_url(user.get("profile_picture")),
                    ),
                    joined_at=membership["joined_at"],
                ))
            return members
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
