from heliclockter import datetime_utc

from tcgleague.models.db.shared import BaseModelORM
from tcgleague.utils.id_types import PlayerId


class PlayerStatistics(BaseModelORM):
    player_id: PlayerId
    events_joined: int = 0
    events_completed: int = 0
    stages_played: int = 0
    total_points: int = 0
    wins: int = 0
    losses: int = 0
    win_percentage: float = 0
    best_cumulative_rank: int | None = None
    best_stage_rank: int | None = None
    updated: datetime_utc
