from supabase import Client
from fragfeed.modules.posts.schemas import (
    PostCreate, PostResponse, PostPage, PostSearchResult, PostAuthor, PostSubreddit
)
from fragfeed.modules.media.service import MediaService
from fragfeed.modules.notifications.schemas import NotificationCreate
from fragfeed.modules.notifications.service import NotificationService, NEW_POST, FOLLOWER_POST
from fragfeed.modules.subreddits.service import SubredditService
from fragfeed.modules.users.service import UserService
from fragfeed.core.pagination import paginate
from fragfeed.core.search import SEARCH_RESULT_LIMIT, ilike_pattern
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

POST_NOT_FOUND = "Post not found"
SUBREDDIT_NOT_FOUND = "Subreddit not found"
UNAUTHORIZED_DELETE = "You can't delete this post"
USER_NOT_FOUND = "User not found"
NOT_MEMBER = "You must join this subreddit before posting"


def enrich_posts(supabase: Client, rows: List[dict], media: Optional[MediaService] = None) -> List[PostResponse]:
    """Attach author username, subreddit id/name and image URL to post rows.

    Authors and subreddits are fetched in one batch each.
    """
    if not rows:
        return []
    media = media or MediaService(supabase)
    users = UserService(supabase).get_usernames([r["author_id"] for r in rows])

    subreddit_ids = list({r["subreddit_id"] for r in rows})
    subreddit_result = supabase.table("subreddits")\
        .select("id, name")\
        .in_("id", subreddit_ids)\
        .execute()
    subreddits = {s["id"]: s for s in subreddit_result.data or []}

    posts = []
    for row in rows:
        author = users.get(row["author_id"])
        subreddit = subreddits.get(row["subreddit_id"])
        posts.append(PostResponse(
            **row,
            author=PostAuthor(username=author["username"]) if author else None,
            subreddit=PostSubreddit(id=subreddit["id"], name=subreddit["name"]) if subreddit else None,
            image_url=media.get_url(row.get("image")),
        ))
    return posts


class PostService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.media = MediaService(supabase)
        self.notifications = NotificationService(supabase)
        self.subreddits = SubredditService(supabase)

    def get_row(self, post_id: str) -> Optional[dict]:
        result = self.supabase.table("posts")\
            .select("*")\
            .eq("id", post_id)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def create_post(self, post_data: PostCreate, user: dict) -> str:
        """Create a post in a community the author belongs to and notify members and followers"""
        try:
            subreddit = self.subreddits.get_row_by_id(post_data.subreddit_id)
            if not subreddit:
                raise HTTPException(status_code=404, detail=SUBREDDIT_NOT_FOUND)

            if not self.subreddits.get_membership(user["id"], post_data.subreddit_id):
                raise HTTPException(status_code=403, detail=NOT_MEMBER)

            # Post row and the author's post counter commit together
            result = self.supabase.rpc("create_post", {
                "p_subject": post_data.subject,
                "p_body": post_data.body,
                "p_subreddit_id": post_data.subreddit_id,
                "p_author_id": user["id"],
                "p_image": post_data.storage_id or None,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create post")

            post_id = result.data
            self._notify_new_post(post_id, post_data.subject, subreddit, user)
            return post_id
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _notify_new_post(self, post_id: str, subject: str, subreddit: dict, user: dict) -> None:
        """Fan out new_post to other members and follower_post to the author's followers.

        The post is already stored, so a failed fan-out is logged and the
        request still succeeds.
        """
        message = f'{user["username"]} posted "{subject}" in r/{subreddit["name"]}'
        try:
            members = self.supabase.table("subreddit_memberships")\
                .select("user_id")\
                .eq("subreddit_id", subreddit["id"])\
                .execute()
            followers = self.supabase.table("follows")\
                .select("follower_id")\
                .eq("following_id", user["id"])\
                .execute()

            notifications = [
                NotificationCreate(
                    user_id=member["user_id"],
                    type=NEW_POST,
                    title="New post in community",
                    message=message,
                    post_id=post_id,
                    subreddit_id=subreddit["id"],
                    from_user_id=user["id"],
                )
                for member in members.data or []
                if member["user_id"] != user["id"]
            ]
            notifications.extend(
                NotificationCreate(
                    user_id=follow["follower_id"],
                    type=FOLLOWER_POST,
                    title="New post from someone you follow",
                    message=message,
                    post_id=post_id,
                    subreddit_id=subreddit["id"],
                    from_user_id=user["id"],
                )
                for follow in followers.data or []
            )
            self.notifications.create_many(notifications)
        except Exception:
            logger.exception(f"Failed to fan out notifications for post {post_id}")

    def get_post(self, post_id: str) -> PostResponse:
        try:
            row = self.get_row(post_id)
            if not row:
                raise HTTPException(status_code=404, detail=POST_NOT_FOUND)
            return enrich_posts(self.supabase, [row], self.media)[0]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_subreddit_posts(self, subreddit_name: str, limit: int = 20, offset: int = 0) -> PostPage:
        try:
            subreddit = self.subreddits.get_row_by_name(subreddit_name)
            if not subreddit:
                raise HTTPException(status_code=404, detail=SUBREDDIT_NOT_FOUND)

            query = self.supabase.table("posts")\
                .select("*")\
                .eq("subreddit_id", subreddit["id"])\
                .order("created_at", desc=True)
            rows, is_done, next_offset = paginate(query, limit, offset)
            return PostPage(items=enrich_posts(self.supabase, rows, self.media), is_done=is_done, next_offset=next_offset)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def user_posts(self, author_username: str, limit: int = 20, offset: int = 0) -> PostPage:
        try:
            user = UserService(self.supabase).get_user_by_username(author_username)
            if not user:
                raise HTTPException(status_code=404, detail=USER_NOT_FOUND)

            query = self.supabase.table("posts")\
                .select("*")\
                .eq("author_id", user["id"])\
                .order("created_at", desc=True)
            rows, is_done, next_offset = paginate(query, limit, offset)
            return PostPage(items=enrich_posts(self.supabase, rows, self.media), is_done=is_done, next_offset=next_offset)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_post(self, post_id: str, user_id: str) -> None:
        """Delete a post; only its author may do so"""
        try:
            post = self.get_row(post_id)
            if not post:
                raise HTTPException(status_code=404, detail=POST_NOT_FOUND)

            if post["author_id"] != user_id:
                raise HTTPException(status_code=403, detail=UNAUTHORIZED_DELETE)

            result = self.supabase.rpc("delete_post", {"p_post_id": post_id}).execute()
            if not result.data:
                raise HTTPException(status_code=404, detail=POST_NOT_FOUND)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def search(self, query_str: str, subreddit_name: str) -> List[PostSearchResult]:
        """Subject search within one community"""
        if not query_str:
            return []
        try:
            subreddit = self.subreddits.get_row_by_name(subreddit_name)
            if not subreddit:
                return []

            result = self.supabase.table("posts")\
                .select("id, subject")\
                .eq("subreddit_id", subreddit["id"])\
                .ilike("subject", ilike_pattern(query_str))\
                .limit(SEARCH_RESULT_LIMIT)\
                .execute()
            return [
                PostSearchResult(id=post["id"], title=post["subject"], name=subreddit["name"])
                for post in result.data or []
            ]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
