from collections.abc import Iterable, Sequence

from heliclockter import datetime_utc

from tcgleague.logic.ranking.standings import game_win_percentage
from tcgleague.models.db.event import Event, EventStatus
from tcgleague.models.db.player_stats import PlayerStatistics
from tcgleague.sql.events import get_events_for_player
from tcgleague.sql.player_stats import sql_upsert_player_statistics
from tcgleague.utils.id_types import PlayerId
from tcgleague.utils.logging import logger


def _best_rank(ranks: Iterable[int]) -> int | None:
    return min(ranks, default=None)


def compute_player_statistics(player_id: PlayerId, events: Sequence[Event]) -> PlayerStatistics:
    joined = [event for event in events if event.get_participant(player_id) is not None]
    stage_standings = [
        standing
        for event in joined
        for stage in event.stages
        if stage.is_completed
        for standing in stage.standings
        if standing.player_id == player_id
    ]
    cumulative_ranks = [
        standing.rank
        for event in joined
        for standing in event.standings
        if standing.player_id == player_id
    ]

    wins = sum(standing.wins for standing in stage_standings)
    losses = sum(standing.losses for standing in stage_standings)
    return PlayerStatistics(
        player_id=player_id,
        events_joined=len(joined),
        events_completed=sum(1 for event in joined if event.status is EventStatus.COMPLETED),
        stages_played=len(stage_standings),
        total_points=sum(standing.points for standing in stage_standings),
        wins=wins,
        losses=losses,
        win_percentage=game_win_percentage(wins, losses),
        best_cumulative_rank=_best_rank(cumulative_ranks),
        best_stage_rank=_best_rank(standing.rank for standing in stage_standings),
        updated=datetime_utc.now(),
    )


async def refresh_statistics_for_player(player_id: PlayerId) -> PlayerStatistics:
    statistics = compute_player_statistics(player_id, await get_events_for_player(player_id))
    await sql_upsert_player_statistics(statistics)
    return statistics


async def refresh_player_statistics(player_ids: Sequence[PlayerId]) -> int:
    """
    Recompute the statistics of every given player, one player at a time.

    Runs after the standings are committed. A failing player is logged and skipped, it never
    affects the other players or the standings. Returns how many players were refreshed.
    """
    refreshed = 0
    for player_id in player_ids:
        try:
            await refresh_statistics_for_player(player_id)
        except Exception as exc:
            logger.warning(f"Failed to refresh statistics of player {player_id}: {exc}")
            continue
        refreshed += 1

    if refreshed < len(player_ids):
        logger.warning(f"Refreshed statistics of {refreshed}/{len(player_ids)} players")
    return refreshed
