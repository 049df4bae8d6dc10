import asyncio

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query
from starlette import status

from tcgleague.config import config
from tcgleague.logic.player_stats import refresh_player_statistics
from tcgleague.logic.ranking.points import get_points_system
from tcgleague.logic.ranking.standings import StandingsValidationError
from tcgleague.logic.results import StandingsPersistenceError, submit_stage_results
from tcgleague.models.db.event import Event, EventStatus
from tcgleague.models.db.user import UserPublic
from tcgleague.models.event import (
    EventChangeStatusBody,
    EventCreateBody,
    ParticipantRegisterBody,
    PointsSystemRow,
    StageResultsBody,
)
from tcgleague.routes.auth import (
    player_authenticated,
    store_authenticated,
    user_authenticated,
    user_authenticated_for_event,
    user_can_manage_event,
)
from tcgleague.routes.models import (
    EventCreatedResponse,
    EventCreatedView,
    EventResponse,
    EventsResponse,
    EventStandingsResponse,
    PointsSystemResponse,
    SuccessResponse,
)
from tcgleague.routes.util import (
    event_dependency,
    to_event_detail_view,
    to_event_standings_view,
    to_event_summary_view,
)
from tcgleague.sql.events import (
    sql_create_event,
    sql_delete_event,
    sql_get_events,
    sql_update_event_status,
)
from tcgleague.sql.participants import sql_register_participant, sql_set_participant_dropped
from tcgleague.utils.errors import (
    ForeignKey,
    UniqueIndex,
    check_foreign_key_violation,
    check_unique_violation,
)
from tcgleague.utils.geocoding import geocode_address
from tcgleague.utils.id_types import EventId, PlayerId, UserId
from tcgleague.utils.logging import logger

router = APIRouter(prefix=config.api_prefix)

ALLOWED_STATUS_TRANSITIONS: dict[EventStatus, set[EventStatus]] = {
    EventStatus.UPCOMING: {EventStatus.ONGOING, EventStatus.CANCELLED},
    EventStatus.ONGOING: {EventStatus.CANCELLED},
    EventStatus.COMPLETED: set(),
    EventStatus.CANCELLED: set(),
}


@router.get("/events/points_system", response_model=PointsSystemResponse)
async def get_event_points_system() -> PointsSystemResponse:
    return PointsSystemResponse(
        data=[PointsSystemRow(rank=rank, points=points) for rank, points in get_points_system()]
    )


@router.get("/events", response_model=EventsResponse)
async def get_events(
    status_filter: EventStatus | None = Query(default=None, alias="status"),
    search: str | None = Query(default=None, description="Search in event and store name."),
    store_id: UserId | None = Query(default=None),
) -> EventsResponse:
    events = await sql_get_events(status=status_filter, search=search, store_id=store_id)
    return EventsResponse(data=[to_event_summary_view(event) for event in events])


@router.get("/events/{event_id}", response_model=EventResponse)
async def get_event_details(event: Event = Depends(event_dependency)) -> EventResponse:
    return EventResponse(data=to_event_detail_view(event))


@router.post("/events", response_model=EventCreatedResponse)
async def create_event(
    body: EventCreateBody,
    user: UserPublic = Depends(store_authenticated),
) -> EventCreatedResponse:
    coordinates = await asyncio.to_thread(
        geocode_address, body.location.address, body.location.city, body.location.state
    )
    with check_foreign_key_violation({ForeignKey.events_store_id_fkey}):
        event_id = await sql_create_event(body, user, coordinates)

    logger.info(f"Store {user.id} created event {event_id} with {body.stage_count} stage(s)")
    return EventCreatedResponse(data=EventCreatedView(id=event_id))


@router.put("/events/{event_id}/status", response_model=SuccessResponse)
async def change_event_status(
    body: EventChangeStatusBody,
    event: Event = Depends(event_dependency),
    _: UserPublic = Depends(user_authenticated_for_event),
) -> SuccessResponse:
    if body.status is event.status:
        return SuccessResponse()

    if body.status not in ALLOWED_STATUS_TRANSITIONS[event.status]:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot change status from {event.status.value} to {body.status.value}",
        )

    await sql_update_event_status(event.id, body.status)
    return SuccessResponse()


@router.delete("/events/{event_id}", response_model=SuccessResponse)
async def delete_event(
    event_id: EventId,
    _: UserPublic = Depends(user_authenticated_for_event),
) -> SuccessResponse:
    await sql_delete_event(event_id)
    return SuccessResponse()


@router.post("/events/{event_id}/participants", response_model=SuccessResponse)
async def register_for_event(
    body: ParticipantRegisterBody,
    event: Event = Depends(event_dependency),
    user: UserPublic = Depends(player_authenticated),
) -> SuccessResponse:
    if event.status is not EventStatus.UPCOMING:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Registration is only open for upcoming events",
        )

    if event.get_participant(PlayerId(user.id)) is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Player is already registered for this event",
        )

    if event.is_full:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Event is full",
        )

    with (
        check_unique_violation({UniqueIndex.uq_event_participants_event_id_player_id}),
        check_foreign_key_violation(
            {
                ForeignKey.event_participants_event_id_fkey,
                ForeignKey.event_participants_player_id_fkey,
            }
        ),
    ):
        await sql_register_participant(
            event.id, user, deck_name=body.deck_name, membership_id=body.membership_id
        )

    return SuccessResponse()


@router.post("/events/{event_id}/participants/{player_id}/drop", response_model=SuccessResponse)
async def drop_from_event(
    player_id: PlayerId,
    event: Event = Depends(event_dependency),
    user: UserPublic = Depends(user_authenticated),
) -> SuccessResponse:
    if user.id != player_id and not user_can_manage_event(user, event):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the player or the organizer can drop a participant",
        )

    if not await sql_set_participant_dropped(event.id, player_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Player is not registered for this event",
        )

    return SuccessResponse()


@router.post("/events/{event_id}/stages/{stage_number}/results", response_model=EventResponse)
async def post_stage_results(
    stage_number: int,
    body: StageResultsBody,
    background_tasks: BackgroundTasks,
    event: Event = Depends(event_dependency),
    _: UserPublic = Depends(user_authenticated_for_event),
) -> EventResponse:
    try:
        updated_event = await submit_stage_results(event, stage_number, body.placements)
    except StandingsValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except StandingsPersistenceError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not save standings",
        ) from exc

    background_tasks.add_task(
        refresh_player_statistics,
        [participant.player_id for participant in updated_event.participants],
    )
    return EventResponse(data=to_event_detail_view(updated_event))


@router.get("/events/{event_id}/standings", response_model=EventStandingsResponse)
async def get_event_standings(event: Event = Depends(event_dependency)) -> EventStandingsResponse:
    return EventStandingsResponse(data=to_event_standings_view(event))
