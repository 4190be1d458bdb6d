from supabase import Client
from fragfeed.modules.follows.schemas import FollowResponse, FollowUser
from fragfeed.modules.users.service import UserService
from fragfeed.core.db_errors import is_unique_violation
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

CANNOT_FOLLOW_SELF = "You cannot follow yourself"
ALREADY_FOLLOWING = "You are already following this user"
NOT_FOLLOWING = "You are not following this user"
NEW_FOLLOWER_TITLE = "New Follower"


class FollowService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.users = UserService(supabase)

    def _get_follow(self, follower_id: str, following_id: str) -> Optional[dict]:
        result = self.supabase.table("follows")\
            .select("id")\
            .eq("follower_id", follower_id)\
            .eq("following_id", following_id)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def follow_user(self, current_user: dict, target_user_id: str) -> None:
        """Follow another user and let them know"""
        try:
            if current_user["id"] == target_user_id:
                raise HTTPException(status_code=400, detail=CANNOT_FOLLOW_SELF)

            if not self.users.get_user_by_id(target_user_id):
                raise HTTPException(status_code=404, detail="User not found")

            if self._get_follow(current_user["id"], target_user_id):
                raise HTTPException(status_code=400, detail=ALREADY_FOLLOWING)

            # Follow row and new_follower notification commit together
            try:
                self.supabase.rpc("follow_user", {
                    "p_follower_id": current_user["id"],
                    "p_following_id": target_user_id,
                    "p_title": NEW_FOLLOWER_TITLE,
                    "p_message": f'{current_user["username"]} started following you',
                }).execute()
            except Exception as e:
                if is_unique_violation(e):
                    raise HTTPException(status_code=400, detail=ALREADY_FOLLOWING)
                raise
            logger.info(f"User {current_user['id']} followed {target_user_id}")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def unfollow_user(self, current_user_id: str, target_user_id: str) -> None:
        try:
            follow = self._get_follow(current_user_id, target_user_id)
            if not follow:
                raise HTTPException(status_code=400, detail=NOT_FOLLOWING)

            self.supabase.table("follows")\
                .delete()\
                .eq("id", follow["id"])\
                .execute()
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def is_following(self, current_user_id: str, target_user_id: str) -> bool:
        try:
            return self._get_follow(current_user_id, target_user_id) is not None
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _count(self, column: str, user_id: str) -> int:
        try:
            result = self.supabase.table("follows")\
                .select("id", count="exact")\
                .eq(column, user_id)\
                .execute()
            if result.count is not None:
                return result.count
            return len(result.data or [])
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_follower_count(self, user_id: str) -> int:
        return self._count("following_id", user_id)

    def get_following_count(self, user_id: str) -> int:
        return self._count("follower_id", user_id)

    def _list(self, column: str, other_column: str, user_id: str, limit: int) -> List[FollowResponse]:
        """Newest follow rows first, joined to the user on the other side; dangling rows are dropped"""
        try:
            result = self.supabase.table("follows")\
                .select("*")\
                .eq(column, user_id)\
                .order("created_at", desc=True)\
                .limit(limit)\
                .execute()
            rows = result.data or []
            users = self.users.get_usernames([row[other_column] for row in rows])

            items = []
            for row in rows:
                user = users.get(row[other_column])
                if not user:
                    continue
                items.append(FollowResponse(
                    id=row["id"],
                    user=FollowUser(id=user["id"], username=user["username"]),
                    created_at=row["created_at"],
                ))
            return items
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_followers(self, user_id: str, limit: int = 50) -> List[FollowResponse]:
        return self._list("following_id", "follower_id", user_id, limit)

    def get_following(self, user_id: str, limit: int = 50) -> List[FollowResponse]:
        return self._list("follower_id", "following_id", user_id, limit)
