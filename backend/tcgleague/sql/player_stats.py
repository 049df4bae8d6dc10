from tcgleague.database import database
from tcgleague.models.db.player_stats import PlayerStatistics
from tcgleague.utils.id_types import PlayerId


async def get_player_statistics(player_id: PlayerId) -> PlayerStatistics | None:
    query = """
        SELECT *
        FROM player_statistics
        WHERE player_id = :player_id
        """
    result = await database.fetch_one(query=query, values={"player_id": player_id})
    return PlayerStatistics.model_validate(dict(result._mapping)) if result is not None else None


async def sql_upsert_player_statistics(statistics: PlayerStatistics) -> None:
    query = """
        INSERT INTO player_statistics (
            player_id,
            events_joined,
            events_completed,
            stages_played,
            total_points,
            wins,
            losses,
            win_percentage,
            best_cumulative_rank,
            best_stage_rank,
            updated
        )
        VALUES (
            :player_id,
            :events_joined,
            :events_completed,
            :stages_played,
            :total_points,
            :wins,
            :losses,
            :win_percentage,
            :best_cumulative_rank,
            :best_stage_rank,
            :updated
        )
        ON CONFLICT (player_id) DO UPDATE
        SET events_joined = EXCLUDED.events_joined,
            events_completed = EXCLUDED.events_completed,
            stages_played = EXCLUDED.stages_played,
            total_points = EXCLUDED.total_points,
            wins = EXCLUDED.wins,
            losses = EXCLUDED.losses,
            win_percentage = EXCLUDED.win_percentage,
            best_cumulative_rank = EXCLUDED.best_cumulative_rank,
            best_stage_rank = EXCLUDED.best_stage_rank,
            updated = EXCLUDED.updated
        """
    await database.execute(query=query, values=statistics.model_dump())
