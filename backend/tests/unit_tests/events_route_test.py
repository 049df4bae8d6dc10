from typing import Any

import pytest
from fastapi import BackgroundTasks
from heliclockter import datetime_utc
from starlette.exceptions import HTTPException

from tcgleague.logic.player_stats import refresh_player_statistics
from tcgleague.logic.results import StandingsPersistenceError
from tcgleague.models.db.account import UserAccountType
from tcgleague.models.db.event import Event, EventStatus
from tcgleague.models.db.user import UserPublic
from tcgleague.models.event import (
    EventChangeStatusBody,
    ParticipantRegisterBody,
    PlacementBody,
    StageResultsBody,
)
from tcgleague.routes import events as event_routes
from tcgleague.utils.id_types import EventId, PlayerId, UserId
from tests.unit_tests.shared import build_event, build_participant, build_stage


def _build_user(user_id: int, account_type: UserAccountType) -> UserPublic:
    return UserPublic(
        id=UserId(user_id),
        email=f"user{user_id}@example.com",
        name=f"User {user_id}",
        created=datetime_utc.now(),
        account_type=account_type,
    )


def _store() -> UserPublic:
    return _build_user(100, UserAccountType.STORE)


def _event() -> Event:
    return build_event(
        [build_participant(1, "A"), build_participant(2, "B")],
        [build_stage(1), build_stage(2)],
    )


def _results(*placements: tuple[int, int]) -> StageResultsBody:
    return StageResultsBody(
        placements=[
            PlacementBody(player_id=PlayerId(player_id), final_rank=final_rank)
            for player_id, final_rank in placements
        ]
    )


@pytest.mark.asyncio
async def test_get_points_system_lists_top_ten() -> None:
    response = await event_routes.get_event_points_system()

    assert [(row.rank, row.points) for row in response.data][:3] == [(1, 25), (2, 18), (3, 15)]
    assert len(response.data) == 10
    assert response.data[-1].points == 1


@pytest.mark.asyncio
async def test_post_stage_results_schedules_statistics_refresh(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    async def fake_save(*_: Any, **__: Any) -> None:
        return None

    monkeypatch.setattr("tcgleague.logic.results.sql_save_stage_results", fake_save)
    background_tasks = BackgroundTasks()

    response = await event_routes.post_stage_results(
        1, _results((1, 2), (2, 1)), background_tasks, _event(), _store()
    )

    assert response.data.current_stage == 1
    assert response.data.status is EventStatus.ONGOING
    assert [standing.player_name for standing in response.data.standings] == ["B", "A"]
    assert len(background_tasks.tasks) == 1
    assert background_tasks.tasks[0].func is refresh_player_statistics
    assert background_tasks.tasks[0].args == ([PlayerId(1), PlayerId(2)],)


@pytest.mark.asyncio
async def test_post_stage_results_rejects_duplicate_rank(monkeypatch: pytest.MonkeyPatch) -> None:
    saves: list[Any] = []

    async def fake_save(*args: Any, **__: Any) -> None:
        saves.append(args)

    monkeypatch.setattr("tcgleague.logic.results.sql_save_stage_results", fake_save)
    background_tasks = BackgroundTasks()

    with pytest.raises(HTTPException) as exc_info:
        await event_routes.post_stage_results(
            1, _results((1, 1), (2, 1)), background_tasks, _event(), _store()
        )

    assert exc_info.value.status_code == 400
    assert "Duplicate rank" in str(exc_info.value.detail)
    assert saves == []
    assert background_tasks.tasks == []


@pytest.mark.asyncio
async def test_post_stage_results_reports_persistence_failure(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    async def failing_submit(*_: Any, **__: Any) -> Event:
        raise StandingsPersistenceError("Could not save standings of event 1")

    monkeypatch.setattr(event_routes, "submit_stage_results", failing_submit)
    background_tasks = BackgroundTasks()

    with pytest.raises(HTTPException) as exc_info:
        await event_routes.post_stage_results(
            1, _results((1, 1)), background_tasks, _event(), _store()
        )

    assert exc_info.value.status_code == 500
    assert background_tasks.tasks == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("current", "requested"),
    [
        (EventStatus.ONGOING, EventStatus.UPCOMING),
        (EventStatus.COMPLETED, EventStatus.ONGOING),
        (EventStatus.CANCELLED, EventStatus.UPCOMING),
    ],
)
async def test_change_event_status_rejects_invalid_transitions(
    monkeypatch: pytest.MonkeyPatch, current: EventStatus, requested: EventStatus
) -> None:
    updates: list[EventStatus] = []

    async def fake_update(_: EventId, status: EventStatus) -> None:
        updates.append(status)

    monkeypatch.setattr(event_routes, "sql_update_event_status", fake_update)
    event = build_event([], [build_stage(1)], status=current)

    with pytest.raises(HTTPException) as exc_info:
        await event_routes.change_event_status(
            EventChangeStatusBody(status=requested), event, _store()
        )

    assert exc_info.value.status_code == 400
    assert updates == []


@pytest.mark.asyncio
async def test_change_event_status_cancels_upcoming_event(monkeypatch: pytest.MonkeyPatch) -> None:
    updates: list[EventStatus] = []

    async def fake_update(_: EventId, status: EventStatus) -> None:
        updates.append(status)

    monkeypatch.setattr(event_routes, "sql_update_event_status", fake_update)

    response = await event_routes.change_event_status(
        EventChangeStatusBody(status=EventStatus.CANCELLED), _event(), _store()
    )

    assert response.success is True
    assert updates == [EventStatus.CANCELLED]


@pytest.mark.asyncio
async def test_register_for_event_inserts_participant(monkeypatch: pytest.MonkeyPatch) -> None:
    registered: list[UserId] = []

    async def fake_register(_: EventId, user: UserPublic, **__: Any) -> None:
        registered.append(user.id)

    monkeypatch.setattr(event_routes, "sql_register_participant", fake_register)

    response = await event_routes.register_for_event(
        ParticipantRegisterBody(deck_name="Mono Red"),
        _event(),
        _build_user(3, UserAccountType.PLAYER),
    )

    assert response.success is True
    assert registered == [UserId(3)]


@pytest.mark.asyncio
async def test_register_for_event_rejects_duplicate_registration() -> None:
    with pytest.raises(HTTPException) as exc_info:
        await event_routes.register_for_event(
            ParticipantRegisterBody(), _event(), _build_user(1, UserAccountType.PLAYER)
        )

    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "Player is already registered for this event"


@pytest.mark.asyncio
async def test_register_for_event_rejects_full_event() -> None:
    event = _event().model_copy(update={"max_participants": 2})

    with pytest.raises(HTTPException) as exc_info:
        await event_routes.register_for_event(
            ParticipantRegisterBody(), event, _build_user(3, UserAccountType.PLAYER)
        )

    assert exc_info.value.detail == "Event is full"


@pytest.mark.asyncio
async def test_register_for_event_rejects_started_event() -> None:
    event = build_event([], [build_stage(1)], status=EventStatus.ONGOING)

    with pytest.raises(HTTPException) as exc_info:
        await event_routes.register_for_event(
            ParticipantRegisterBody(), event, _build_user(3, UserAccountType.PLAYER)
        )

    assert exc_info.value.detail == "Registration is only open for upcoming events"


@pytest.mark.asyncio
async def test_drop_from_event_requires_player_or_organizer() -> None:
    with pytest.raises(HTTPException) as exc_info:
        await event_routes.drop_from_event(
            PlayerId(1), _event(), _build_user(2, UserAccountType.PLAYER)
        )

    assert exc_info.value.status_code == 403


@pytest.mark.asyncio
async def test_drop_from_event_unknown_player(monkeypatch: pytest.MonkeyPatch) -> None:
    async def fake_set_dropped(_: EventId, __: PlayerId) -> bool:
        return False

    monkeypatch.setattr(event_routes, "sql_set_participant_dropped", fake_set_dropped)

    with pytest.raises(HTTPException) as exc_info:
        await event_routes.drop_from_event(PlayerId(9), _event(), _store())

    assert exc_info.value.status_code == 404
