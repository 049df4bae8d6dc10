from collections.abc import Sequence

from asyncpg import PostgresError

from tcgleague.logic.ranking.standings import (
    StandingsValidationError,
    fold_cumulative,
    score_stage,
)
from tcgleague.models.db.event import Event, EventStatus
from tcgleague.models.event import Placement, PlacementBody
from tcgleague.sql.events import sql_save_stage_results
from tcgleague.utils.id_types import PlayerId
from tcgleague.utils.logging import logger


class EventClosedError(StandingsValidationError):
    def __init__(self, status: EventStatus) -> None:
        super().__init__(f"Cannot submit results for an event that is {status.value.lower()}")


class StageOutOfOrderError(StandingsValidationError):
    def __init__(self, stage_number: int, expected_stage_number: int) -> None:
        super().__init__(
            f"Cannot submit results for stage {stage_number}, "
            f"the next stage to close is stage {expected_stage_number}"
        )


class UnknownParticipantError(StandingsValidationError):
    def __init__(self, player_ids: Sequence[PlayerId]) -> None:
        self.player_ids = list(player_ids)
        super().__init__(
            "Players are not registered for this event: "
            + ", ".join(str(player_id) for player_id in self.player_ids)
        )


class StandingsPersistenceError(Exception):
    pass


def resolve_placements(event: Event, placements: Sequence[PlacementBody]) -> list[Placement]:
    roster = {participant.player_id: participant for participant in event.participants}
    unknown_player_ids = [
        placement.player_id for placement in placements if placement.player_id not in roster
    ]
    if unknown_player_ids:
        raise UnknownParticipantError(unknown_player_ids)

    return [
        Placement(
            player_id=placement.player_id,
            player_name=roster[placement.player_id].player_name,
            final_rank=placement.final_rank,
            wins=placement.wins,
            losses=placement.losses,
        )
        for placement in placements
    ]


def check_stage_can_be_submitted(event: Event, stage_number: int) -> None:
    if event.is_closed:
        raise EventClosedError(event.status)

    expected_stage_number = event.current_stage + 1
    if stage_number != expected_stage_number or expected_stage_number > len(event.stages):
        raise StageOutOfOrderError(stage_number, expected_stage_number)


async def submit_stage_results(
    event: Event, stage_number: int, placements: Sequence[PlacementBody]
) -> Event:
    """
    Close the next stage of an event with the organizer-entered placements.

    Everything is validated and computed before the first write. The stage standings, the
    cumulative standings, the stage pointer and the status are stored in one transaction.
    """
    check_stage_can_be_submitted(event, stage_number)

    resolved = resolve_placements(event, placements)
    stage_count = event.current_stage + 1
    stage_standings = score_stage(resolved)
    cumulative_standings = fold_cumulative(
        stage_standings, event.participants, event.stages, stage_count
    )
    status = EventStatus.COMPLETED if stage_count == len(event.stages) else EventStatus.ONGOING

    try:
        await sql_save_stage_results(
            event.id,
            stage_number,
            stage_standings,
            cumulative_standings,
            current_stage=stage_count,
            status=status,
        )
    except (PostgresError, OSError) as exc:
        logger.error(f"Could not save standings of stage {stage_number} of event {event.id}: {exc}")
        raise StandingsPersistenceError("Could not save standings") from exc

    logger.info(
        f"Closed stage {stage_number}/{len(event.stages)} of event {event.id} "
        f"with {len(stage_standings)} placements, status is now {status.value}"
    )

    return event.model_copy(
        update={
            "standings": cumulative_standings,
            "current_stage": stage_count,
            "status": status,
            "stages": [
                stage.model_copy(update={"is_completed": True, "standings": stage_standings})
                if stage.stage_number == stage_number
                else stage
                for stage in event.stages
            ],
        }
    )
