from supabase import Client
from fragfeed.modules.comments.schemas import CommentCreate, CommentResponse, CommentAuthor, CommentPage
from fragfeed.modules.counters.service import CounterService, comment_count_key
from fragfeed.modules.users.service import UserService
from fragfeed.core.pagination import paginate
from fastapi import HTTPException


class CommentService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.counters = CounterService(supabase)

    def create_comment(self, comment_data: CommentCreate, user_id: str) -> CommentResponse:
        try:
            post = self.supabase.table("posts")\
                .select("id")\
                .eq("id", comment_data.post_id)\
                .limit(1)\
                .execute()
            if not post.data:
                raise HTTPException(status_code=404, detail="Post not found")

            # Comment row and the post's comment counter commit together
            created = self.supabase.rpc("create_comment", {
                "p_content": comment_data.content,
                "p_post_id": comment_data.post_id,
                "p_author_id": user_id,
            }).execute()
            if not created.data:
                raise HTTPException(status_code=500, detail="Failed to create comment")

            result = self.supabase.table("comments")\
                .select("*")\
                .eq("id", created.data)\
                .limit(1)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create comment")

            author = UserService(self.supabase).get_user_by_id(user_id)
            return CommentResponse(
                **result.data[0],
                author=CommentAuthor(username=author["username"] if author else None),
            )
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_comments(self, post_id: str, limit: int = 20, offset: int = 0) -> CommentPage:
        """Comments of a post in the order they were written"""
        try:
            query = self.supabase.table("comments")\
                .select("*")\
                .eq("post_id", post_id)\
                .order("created_at")
            rows, is_done, next_offset = paginate(query, limit, offset)
            users = UserService(self.supabase).get_usernames([c["author_id"] for c in rows])
            items = [
                CommentResponse(
                    **comment,
                    author=CommentAuthor(username=users.get(comment["author_id"], {}).get("username")),
                )
                for comment in rows
            ]
            return CommentPage(items=items, is_done=is_done, next_offset=next_offset)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_comment_count(self, post_id: str) -> int:
        try:
            return self.counters.count(comment_count_key(post_id))
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_comment(self, comment_id: str, user_id: str) -> None:
        try:
            result = self.supabase.table("comments")\
                .select("*")\
                .eq("id", comment_id)\
                .limit(1)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Comment not found")

            comment = result.data[0]
            if comment["author_id"] != user_id:
                raise HTTPException(status_code=403, detail="You can't delete this comment")

            deleted = self.supabase.rpc("delete_comment", {"p_comment_id": comment_id}).execute()
            if not deleted.data:
                raise HTTPException(status_code=404, detail="Comment not found")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
