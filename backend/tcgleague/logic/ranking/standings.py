from collections import Counter
from collections.abc import Sequence
from typing import NamedTuple

from tcgleague.logic.ranking.points import points_for_rank
from tcgleague.models.db.event import Participant, Stage, Standing
from tcgleague.models.event import Placement
from tcgleague.utils.id_types import PlayerId
from tcgleague.utils.logging import logger


class StandingsValidationError(ValueError):
    pass


class EmptySubmissionError(StandingsValidationError):
    def __init__(self) -> None:
        super().__init__("Please add at least one placement")


class DuplicateRankError(StandingsValidationError):
    def __init__(self, ranks: Sequence[int]) -> None:
        self.ranks = list(ranks)
        super().__init__(
            f"Duplicate rank in submission: {', '.join(str(rank) for rank in self.ranks)}"
        )


class DuplicatePlayerError(StandingsValidationError):
    def __init__(self, player_ids: Sequence[PlayerId]) -> None:
        self.player_ids = list(player_ids)
        super().__init__(
            "Player placed more than once: "
            + ", ".join(str(player_id) for player_id in self.player_ids)
        )


class InvalidStageCountError(StandingsValidationError):
    def __init__(self, stage_count: int, total_stages: int) -> None:
        super().__init__(
            f"Cannot fold {stage_count} stage(s), event has {total_stages} stage(s)"
        )


class _Tally(NamedTuple):
    player_name: str
    points: int = 0
    wins: int = 0
    losses: int = 0
    stages_played: int = 0


def game_win_percentage(wins: int, losses: int) -> float:
    games = wins + losses
    return wins / games if games > 0 else 0


def check_placements(placements: Sequence[Placement]) -> None:
    if len(placements) < 1:
        raise EmptySubmissionError()

    duplicate_ranks = sorted(
        rank
        for rank, count in Counter(placement.final_rank for placement in placements).items()
        if count > 1
    )
    if duplicate_ranks:
        raise DuplicateRankError(duplicate_ranks)

    duplicate_players = sorted(
        player_id
        for player_id, count in Counter(placement.player_id for placement in placements).items()
        if count > 1
    )
    if duplicate_players:
        raise DuplicatePlayerError(duplicate_players)


def score_stage(placements: Sequence[Placement]) -> list[Standing]:
    """
    Convert the organizer-entered placements of one stage into standings.

    The entered rank is authoritative: it is copied onto the standing as-is and only used
    to order the result. Opponent win percentage is not available for a single stage.
    """
    check_placements(placements)

    standings = [
        Standing(
            player_id=placement.player_id,
            player_name=placement.player_name,
            points=points_for_rank(placement.final_rank),
            wins=placement.wins,
            losses=placement.losses,
            draws=0,
            matches_played=placement.wins + placement.losses,
            opponent_win_percentage=0,
            game_win_percentage=game_win_percentage(placement.wins, placement.losses),
            rank=placement.final_rank,
        )
        for placement in placements
    ]
    standings.sort(key=lambda standing: standing.rank)
    return standings


def fold_cumulative(
    stage_results: Sequence[Standing],
    participants: Sequence[Participant],
    stages: Sequence[Stage],
    stage_count: int,
) -> list[Standing]:
    """
    Fold the first `stage_count` stages into tournament-wide standings.

    The last folded stage is taken from `stage_results` since it has not been persisted yet,
    earlier stages from their stored standings. `matches_played` counts stages here, not
    matches. Players that never scored in any folded stage are left out of the result.
    """
    if not 0 < stage_count <= len(stages):
        raise InvalidStageCountError(stage_count, len(stages))

    tallies: dict[PlayerId, _Tally] = {
        participant.player_id: _Tally(player_name=participant.player_name)
        for participant in participants
    }

    for stage_index in range(stage_count):
        stage_standings = (
            stage_results if stage_index == stage_count - 1 else stages[stage_index].standings
        )
        for standing in stage_standings:
            tally = tallies.get(standing.player_id)
            if tally is None:
                logger.warning(
                    f"Ignoring standing of player {standing.player_id} in stage {stage_index + 1}: "
                    "player is not registered for the event"
                )
                continue

            tallies[standing.player_id] = tally._replace(
                points=tally.points + standing.points,
                wins=tally.wins + standing.wins,
                losses=tally.losses + standing.losses,
                stages_played=tally.stages_played + 1,
            )

    # sorted() is stable, so rows with equal points and wins keep roster order.
    ranked = sorted(
        tallies.items(),
        key=lambda item: (-item[1].points, -item[1].wins),
    )

    participated = [
        (player_id, tally)
        for player_id, tally in ranked
        if not (tally.points == 0 and tally.stages_played == 0)
    ]

    return [
        Standing(
            player_id=player_id,
            player_name=tally.player_name,
            points=tally.points,
            wins=tally.wins,
            losses=tally.losses,
            draws=0,
            matches_played=tally.stages_played,
            opponent_win_percentage=0,
            game_win_percentage=game_win_percentage(tally.wins, tally.losses),
            rank=rank,
        )
        for rank, (player_id, tally) in enumerate(participated, start=1)
    ]
