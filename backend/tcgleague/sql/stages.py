from heliclockter import datetime_utc

from tcgleague.database import database
from tcgleague.models.db.event import Stage, Standing, dump_standings
from tcgleague.utils.id_types import EventId


async def get_stages_for_event(event_id: EventId) -> list[Stage]:
    query = """
        SELECT *
        FROM event_stages
        WHERE event_id = :event_id
        ORDER BY stage_number
        """
    result = await database.fetch_all(query=query, values={"event_id": event_id})
    return [Stage.model_validate(dict(row._mapping)) for row in result]


async def sql_create_stage(
    event_id: EventId, stage_number: int, name: str, date: datetime_utc
) -> None:
    query = """
        INSERT INTO event_stages (event_id, stage_number, name, date, is_completed, standings)
        VALUES (:event_id, :stage_number, :name, :date, false, '[]')
        """
    await database.execute(
        query=query,
        values={
            "event_id": event_id,
            "stage_number": stage_number,
            "name": name,
            "date": date,
        },
    )


async def sql_complete_stage(
    event_id: EventId, stage_number: int, standings: list[Standing]
) -> None:
    query = """
        UPDATE event_stages
        SET is_completed = true,
            standings = CAST(:standings AS json)
        WHERE event_id = :event_id
        AND stage_number = :stage_number
        """
    await database.execute(
        query=query,
        values={
            "event_id": event_id,
            "stage_number": stage_number,
            "standings": dump_standings(standings),
        },
    )
