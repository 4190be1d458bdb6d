from fastapi import APIRouter, Depends, Query
from fragfeed.database.supabase_client import get_supabase
from fragfeed.modules.leaderboard.schemas import TopPostResponse
from fragfeed.modules.leaderboard.service import LeaderboardService
from supabase import Client
from typing import List

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


def get_leaderboard_service(supabase: Client = Depends(get_supabase)) -> LeaderboardService:
    return LeaderboardService(supabase)


@router.get("/top-posts", response_model=List[TopPostResponse])
async def get_top_posts(
    limit: int = Query(10, ge=1, le=50),
    service: LeaderboardService = Depends(get_leaderboard_service)
):
    """Trending feed: best scored recent posts"""
    return service.get_top_posts(limit)
