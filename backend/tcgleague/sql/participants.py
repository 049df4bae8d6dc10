from heliclockter import datetime_utc

from tcgleague.database import database
from tcgleague.models.db.event import Participant, ParticipantInsertable
from tcgleague.models.db.user import UserPublic
from tcgleague.schema import event_participants
from tcgleague.utils.id_types import EventId, PlayerId


async def get_participants_for_event(event_id: EventId) -> list[Participant]:
    query = """
        SELECT *
        FROM event_participants
        WHERE event_id = :event_id
        ORDER BY registered_at, id
        """
    result = await database.fetch_all(query=query, values={"event_id": event_id})
    return [Participant.model_validate(dict(row._mapping)) for row in result]


async def sql_register_participant(
    event_id: EventId,
    player: UserPublic,
    *,
    deck_name: str | None = None,
    membership_id: str | None = None,
) -> None:
    await database.execute(
        query=event_participants.insert(),
        values=ParticipantInsertable(
            event_id=event_id,
            player_id=PlayerId(player.id),
            player_name=player.name,
            membership_id=membership_id if membership_id is not None else player.membership_id,
            deck_name=deck_name,
            registered_at=datetime_utc.now(),
        ).model_dump(),
    )


async def sql_set_participant_dropped(
    event_id: EventId, player_id: PlayerId, *, dropped: bool = True
) -> bool:
    query = """
        UPDATE event_participants
        SET dropped = :dropped
        WHERE event_id = :event_id
        AND player_id = :player_id
        RETURNING id
        """
    result = await database.fetch_val(
        query=query,
        values={"event_id": event_id, "player_id": player_id, "dropped": dropped},
    )
    return result is not None
