from supabase import Client
from fragfeed.modules.users.schemas import (
    UserResponse, PublicUserResponse, UserSearchResult, ProfileUpdate,
    SteamConnect, RiotConnect, EpicConnect, UbisoftConnect, IdentityUserData
)
from fragfeed.modules.counters.service import CounterService, post_count_key
from fragfeed.modules.media.service import MediaService
from fragfeed.core.search import SEARCH_RESULT_LIMIT, ilike_pattern
from typing import List, Optional
from datetime import datetime, timezone
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class UserService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.counters = CounterService(supabase)
        self.media = MediaService(supabase)

    def get_user_by_username(self, username: str) -> Optional[dict]:
        result = self.supabase.table("users")\
            .select("*")\
            .eq("username", username)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def get_user_by_id(self, user_id: str) -> Optional[dict]:
        result = self.supabase.table("users")\
            .select("*")\
            .eq("id", user_id)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def get_usernames(self, user_ids: List[str]) -> dict:
        """Map user id -> users row (id, username, profile_picture) for a batch of ids"""
        ids = list({uid for uid in user_ids if uid})
        if not ids:
            return {}
        result = self.supabase.table("users")\
            .select("id, username, profile_picture")\
            .in_("id", ids)\
            .execute()
        return {row["id"]: row for row in result.data or []}

    def upsert_from_identity(self, data: IdentityUserData) -> UserResponse:
        """Create or refresh the users row for an identity provider subject"""
        try:
            attributes = {
                "username": data.resolved_username(),
                "external_id": data.id,
            }
            existing = self.supabase.table("users")\
                .select("id")\
                .eq("external_id", data.id)\
                .limit(1)\
                .execute()

            if existing.data:
                attributes["updated_at"] = _now()
                result = self.supabase.table("users")\
                    .update(attributes)\
                    .eq("id", existing.data[0]["id"])\
                    .execute()
            else:
                result = self.supabase.table("users").insert(attributes).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to sync user")

            return UserResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error syncing user {data.id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_from_identity(self, external_id: str) -> bool:
        """Delete the users row for an identity subject; missing rows are only logged"""
        try:
            result = self.supabase.table("users")\
                .delete()\
                .eq("external_id", external_id)\
                .execute()
            if not result.data:
                logger.warning(f"Can't delete user, there is none for identity ID: {external_id}")
                return False
            return True
        except Exception as e:
            logger.error(f"Error deleting user {external_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_public_user(self, username: str) -> PublicUserResponse:
        """Public profile; unknown usernames yield an empty profile with zero posts"""
        try:
            user = self.get_user_by_username(username)
            if not user:
                return PublicUserResponse(posts=0)

            return PublicUserResponse(
                id=user["id"],
                posts=self.counters.count(post_count_key(user["id"])),
                bio=user.get("bio"),
                location=user.get("location"),
                website=user.get("website"),
                profile_picture_url=self.media.get_url(user.get("profile_picture")),
                banner_image_url=self.media.get_url(user.get("banner_image")),
                steam_profile=user.get("steam_profile"),
                riot_profile=user.get("riot_profile"),
                epic_profile=user.get("epic_profile"),
                ubisoft_profile=user.get("ubisoft_profile"),
            )
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def search_users(self, query_str: str) -> List[UserSearchResult]:
        if not query_str:
            return []
        try:
            result = self.supabase.table("users")\
                .select("id, username, profile_picture, bio")\
                .ilike("username", ilike_pattern(query_str))\
                .limit(SEARCH_RESULT_LIMIT)\
                .execute()
            return [
                UserSearchResult(
                    id=user["id"],
                    username=user["username"],
                    title=user["username"],
                    profile_picture_url=self.media.get_url(user.get("profile_picture")),
                    bio=user.get("bio"),
                )
                for user in result.data or []
            ]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _patch(self, user_id: str, update_data: dict) -> UserResponse:
        update_data["updated_at"] = _now()
        result = self.supabase.table("users")\
            .update(update_data)\
            .eq("id", user_id)\
            .execute()

        if not result.data:
            raise HTTPException(status_code=404, detail=USER_NOT_FOUND)

        return UserResponse(**result.data[0])

    def update_profile(self, user_id: str, profile: ProfileUpdate) -> UserResponse:
        """Patch only the profile fields that were provided"""
        try:
            update_data = profile.model_dump(exclude_unset=True)
            return self._patch(user_id, update_data)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def connect_steam_profile(self, user_id: str, data: SteamConnect) -> UserResponse:
        return self._connect(user_id, "steam", data.model_dump())

    def connect_riot_profile(self, user_id: str, data: RiotConnect) -> UserResponse:
        return self._connect(user_id, "riot", data.model_dump())

    def connect_epic_profile(self, user_id: str, data: EpicConnect) -> UserResponse:
        return self._connect(user_id, "epic", data.model_dump())

    def connect_ubisoft_profile(self, user_id: str, data: UbisoftConnect) -> UserResponse:
        return self._connect(user_id, "ubisoft", data.model_dump())

    def _connect(self, user_id: str, platform: str, block: dict) -> UserResponse:
        try:
            block["connected_at"] = _now()
            return self._patch(user_id, {f"{platform}_profile": block})
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def disconnect_gaming_profile(self, user_id: str, platform: str) -> UserResponse:
        try:
            return self._patch(user_id, {f"{platform}_profile": None})
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
