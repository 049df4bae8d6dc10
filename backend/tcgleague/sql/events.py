from typing import Any

from heliclockter import datetime_utc, timedelta

from tcgleague.database import database
from tcgleague.models.db.event import (
    Event,
    EventRecord,
    EventStatus,
    EventWithCounts,
    Standing,
    dump_standings,
)
from tcgleague.models.db.user import UserPublic
from tcgleague.models.event import EventCreateBody
from tcgleague.sql.participants import get_participants_for_event
from tcgleague.sql.stages import get_stages_for_event, sql_complete_stage, sql_create_stage
from tcgleague.utils.id_types import EventId, PlayerId, UserId

DEFAULT_EVENT_DURATION = timedelta(hours=4)


async def sql_get_event_record(event_id: EventId) -> EventRecord | None:
    query = """
        SELECT *
        FROM events
        WHERE id = :event_id
        """
    result = await database.fetch_one(query=query, values={"event_id": event_id})
    return EventRecord.model_validate(dict(result._mapping)) if result is not None else None


async def get_event(event_id: EventId) -> Event | None:
    record = await sql_get_event_record(event_id)
    if record is None:
        return None

    return Event(
        **record.model_dump(),
        participants=await get_participants_for_event(event_id),
        stages=await get_stages_for_event(event_id),
    )


async def sql_get_events(
    *,
    status: EventStatus | None = None,
    search: str | None = None,
    store_id: UserId | None = None,
) -> list[EventWithCounts]:
    query = """
        SELECT
            e.*,
            (SELECT count(*) FROM event_participants ep WHERE ep.event_id = e.id)
                AS participant_count,
            (SELECT count(*) FROM event_stages es WHERE es.event_id = e.id) AS stage_count
        FROM events e
        WHERE TRUE
        """
    params: dict[str, Any] = {}

    if status is not None:
        query += " AND e.status = :status"
        params["status"] = status.value

    if search is not None and search.strip() != "":
        query += " AND (e.name ILIKE :search OR e.store_name ILIKE :search)"
        params["search"] = f"%{search.strip()}%"

    if store_id is not None:
        query += " AND e.store_id = :store_id"
        params["store_id"] = store_id

    query += " ORDER BY e.created DESC, e.id DESC"
    result = await database.fetch_all(query=query, values=params)
    return [EventWithCounts.model_validate(dict(row._mapping)) for row in result]


async def get_event_ids_for_player(player_id: PlayerId) -> list[EventId]:
    query = """
        SELECT DISTINCT event_id
        FROM event_participants
        WHERE player_id = :player_id
        ORDER BY event_id
        """
    result = await database.fetch_all(query=query, values={"player_id": player_id})
    return [EventId(int(row._mapping["event_id"])) for row in result]


async def get_events_for_player(player_id: PlayerId) -> list[Event]:
    events = []
    for event_id in await get_event_ids_for_player(player_id):
        event = await get_event(event_id)
        if event is not None:
            events.append(event)
    return events


async def sql_create_event(
    body: EventCreateBody,
    store: UserPublic,
    coordinates: tuple[float, float] | None = None,
) -> EventId:
    query = """
        INSERT INTO events (
            store_id,
            store_name,
            name,
            description,
            format,
            start_time,
            end_time,
            max_participants,
            entry_fee,
            prize_pool,
            location_address,
            location_city,
            location_state,
            latitude,
            longitude,
            standings,
            current_stage,
            status,
            created,
            updated
        )
        VALUES (
            :store_id,
            :store_name,
            :name,
            :description,
            :format,
            :start_time,
            :end_time,
            :max_participants,
            :entry_fee,
            :prize_pool,
            :location_address,
            :location_city,
            :location_state,
            :latitude,
            :longitude,
            '[]',
            0,
            'UPCOMING',
            :now,
            :now
        )
        RETURNING id
        """
    now = datetime_utc.now()
    latitude, longitude = coordinates if coordinates is not None else (None, None)

    async with database.transaction():
        event_id = EventId(
            await database.fetch_val(
                query=query,
                values={
                    "store_id": store.id,
                    "store_name": store.display_store_name,
                    "name": body.name,
                    "description": body.description,
                    "format": body.format.value,
                    "start_time": body.start_time,
                    "end_time": body.end_time or body.start_time + DEFAULT_EVENT_DURATION,
                    "max_participants": body.max_participants,
                    "entry_fee": body.entry_fee,
                    "prize_pool": body.prize_pool,
                    "location_address": body.location.address,
                    "location_city": body.location.city,
                    "location_state": body.location.state,
                    "latitude": latitude,
                    "longitude": longitude,
                    "now": now,
                },
            )
        )

        for stage_index in range(body.stage_count):
            plan = body.stages[stage_index] if stage_index < len(body.stages) else None
            await sql_create_stage(
                event_id,
                stage_index + 1,
                plan.name if plan is not None and plan.name else f"Stage {stage_index + 1}",
                plan.date if plan is not None and plan.date is not None else body.start_time,
            )

    return event_id


async def sql_update_event_status(event_id: EventId, status: EventStatus) -> None:
    query = """
        UPDATE events
        SET status = CAST(:status AS event_status),
            updated = :now
        WHERE id = :event_id
        """
    await database.execute(
        query=query,
        values={"event_id": event_id, "status": status.value, "now": datetime_utc.now()},
    )


async def sql_delete_event(event_id: EventId) -> None:
    async with database.transaction():
        await database.execute(
            "DELETE FROM event_stages WHERE event_id = :event_id", values={"event_id": event_id}
        )
        await database.execute(
            "DELETE FROM event_participants WHERE event_id = :event_id",
            values={"event_id": event_id},
        )
        await database.execute(
            "DELETE FROM events WHERE id = :event_id", values={"event_id": event_id}
        )


async def sql_save_stage_results(
    event_id: EventId,
    stage_number: int,
    stage_standings: list[Standing],
    cumulative_standings: list[Standing],
    current_stage: int,
    status: EventStatus,
) -> None:
    query = """
        UPDATE events
        SET standings = CAST(:standings AS json),
            current_stage = :current_stage,
            status = CAST(:status AS event_status),
            updated = :now
        WHERE id = :event_id
        """
    async with database.transaction():
        await sql_complete_stage(event_id, stage_number, stage_standings)
        await database.execute(
            query=query,
            values={
                "event_id": event_id,
                "standings": dump_standings(cumulative_standings),
                "current_stage": current_stage,
                "status": status.value,
                "now": datetime_utc.now(),
            },
        )
