from fastapi import HTTPException
from starlette import status

from tcgleague.models.db.deck import Deck
from tcgleague.models.db.event import Event, EventWithCounts
from tcgleague.models.deck import DeckView
from tcgleague.models.event import (
    EventDetailView,
    EventStandingsView,
    EventSummaryView,
    StageStandingsView,
)
from tcgleague.sql.events import get_event
from tcgleague.utils.id_types import EventId


async def event_dependency(event_id: EventId) -> Event:
    event = await get_event(event_id)
    if event is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    return event


def to_event_summary_view(event: EventWithCounts) -> EventSummaryView:
    return EventSummaryView(
        id=event.id,
        store_id=event.store_id,
        store_name=event.store_name,
        name=event.name,
        format=event.format,
        status=event.status,
        start_time=event.start_time,
        end_time=event.end_time,
        location=event.location,
        participant_count=event.participant_count,
        max_participants=event.max_participants,
        stage_count=event.stage_count,
        current_stage=event.current_stage,
    )


def to_event_detail_view(event: Event) -> EventDetailView:
    return EventDetailView(
        id=event.id,
        store_id=event.store_id,
        store_name=event.store_name,
        name=event.name,
        format=event.format,
        status=event.status,
        start_time=event.start_time,
        end_time=event.end_time,
        location=event.location,
        participant_count=len(event.participants),
        max_participants=event.max_participants,
        stage_count=len(event.stages),
        current_stage=event.current_stage,
        description=event.description,
        entry_fee=event.entry_fee,
        prize_pool=event.prize_pool,
        participants=event.participants,
        stages=event.stages,
        standings=event.standings,
    )


def to_event_standings_view(event: Event) -> EventStandingsView:
    return EventStandingsView(
        event_id=event.id,
        status=event.status,
        current_stage=event.current_stage,
        cumulative=event.standings,
        stages=[
            StageStandingsView(
                stage_number=stage.stage_number,
                name=stage.name,
                is_completed=stage.is_completed,
                standings=stage.standings,
            )
            for stage in event.stages
        ],
    )


def to_deck_view(deck: Deck) -> DeckView:
    return DeckView(
        id=deck.id,
        user_id=deck.user_id,
        name=deck.name,
        format=deck.format,
        leader_card_id=deck.leader_card_id,
        leader_name=deck.leader_name,
        cards=deck.cards,
        total_cards=deck.total_cards,
        is_public=deck.is_public,
    )
