from fastapi import APIRouter, Depends

from tcgleague.config import config
from tcgleague.logic.player_stats import refresh_statistics_for_player
from tcgleague.models.db.user import UserPublic
from tcgleague.routes.auth import user_authenticated
from tcgleague.routes.models import PlayerStatisticsResponse
from tcgleague.sql.player_stats import get_player_statistics
from tcgleague.utils.id_types import PlayerId

router = APIRouter(prefix=config.api_prefix)


@router.get("/players/{player_id}/statistics", response_model=PlayerStatisticsResponse)
async def get_statistics_of_player(
    player_id: PlayerId,
    _: UserPublic = Depends(user_authenticated),
) -> PlayerStatisticsResponse:
    return PlayerStatisticsResponse(data=await get_player_statistics(player_id))


@router.post("/players/me/statistics/refresh", response_model=PlayerStatisticsResponse)
async def post_refresh_my_statistics(
    user: UserPublic = Depends(user_authenticated),
) -> PlayerStatisticsResponse:
    return PlayerStatisticsResponse(data=await refresh_statistics_for_player(PlayerId(user.id)))
