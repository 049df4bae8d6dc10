import pytest

from tcgleague.logic.ranking.standings import (
    DuplicatePlayerError,
    DuplicateRankError,
    EmptySubmissionError,
    InvalidStageCountError,
    fold_cumulative,
    score_stage,
)
from tcgleague.models.db.event import Standing
from tcgleague.utils.id_types import PlayerId
from tests.unit_tests.shared import build_participant, build_placement, build_stage

ROSTER = [
    build_participant(1, "A"),
    build_participant(2, "B"),
    build_participant(3, "C"),
    build_participant(4, "D"),
]


def _summary(standings: list[Standing]) -> list[tuple[str, int, int]]:
    return [(standing.player_name, standing.points, standing.rank) for standing in standings]


def _stage_one() -> list[Standing]:
    return score_stage(
        [
            build_placement(1, "A", final_rank=1, wins=3, losses=0),
            build_placement(2, "B", final_rank=2, wins=2, losses=1),
            build_placement(3, "C", final_rank=3, wins=1, losses=2),
        ]
    )


def _stage_two() -> list[Standing]:
    return score_stage(
        [
            build_placement(1, "A", final_rank=3, wins=0, losses=3),
            build_placement(2, "B", final_rank=1, wins=3, losses=0),
            build_placement(3, "C", final_rank=2, wins=2, losses=1),
        ]
    )


def test_score_stage_assigns_points_and_keeps_entered_rank() -> None:
    standings = _stage_one()

    assert _summary(standings) == [("A", 25, 1), ("B", 18, 2), ("C", 15, 3)]
    assert [standing.matches_played for standing in standings] == [3, 3, 3]
    assert [standing.game_win_percentage for standing in standings] == [1.0, 2 / 3, 1 / 3]
    assert all(standing.opponent_win_percentage == 0 for standing in standings)
    assert all(standing.draws == 0 for standing in standings)


def test_score_stage_orders_by_rank_without_renumbering() -> None:
    standings = score_stage(
        [
            build_placement(7, "G", final_rank=12, wins=0, losses=0),
            build_placement(5, "E", final_rank=5, wins=1, losses=1),
            build_placement(6, "F", final_rank=1, wins=2, losses=0),
        ]
    )

    assert _summary(standings) == [("F", 25, 1), ("E", 10, 5), ("G", 0, 12)]
    assert standings[-1].game_win_percentage == 0
    assert standings[-1].matches_played == 0


def test_score_stage_rejects_duplicate_ranks() -> None:
    placements = [
        build_placement(1, "A", final_rank=1, wins=3, losses=0),
        build_placement(2, "B", final_rank=1, wins=2, losses=1),
    ]

    with pytest.raises(DuplicateRankError, match="Duplicate rank in submission: 1"):
        score_stage(placements)

    assert [placement.final_rank for placement in placements] == [1, 1]


def test_score_stage_rejects_duplicate_players() -> None:
    with pytest.raises(DuplicatePlayerError):
        score_stage(
            [
                build_placement(1, "A", final_rank=1, wins=3, losses=0),
                build_placement(1, "A", final_rank=2, wins=2, losses=1),
            ]
        )


def test_score_stage_rejects_empty_submission() -> None:
    with pytest.raises(EmptySubmissionError):
        score_stage([])


def test_fold_first_stage_matches_stage_standings() -> None:
    stage_results = _stage_one()
    cumulative = fold_cumulative(stage_results, ROSTER, [build_stage(1), build_stage(2)], 1)

    assert _summary(cumulative) == _summary(stage_results)
    assert [(standing.wins, standing.losses) for standing in cumulative] == [
        (standing.wins, standing.losses) for standing in stage_results
    ]
    # Cumulative matches_played counts stages, not matches.
    assert [standing.matches_played for standing in cumulative] == [1, 1, 1]


def test_fold_two_stages_end_to_end() -> None:
    stages = [build_stage(1, _stage_one()), build_stage(2)]
    cumulative = fold_cumulative(_stage_two(), ROSTER, stages, 2)

    assert _summary(cumulative) == [("B", 43, 1), ("A", 40, 2), ("C", 33, 3)]
    assert [standing.matches_played for standing in cumulative] == [2, 2, 2]
    assert cumulative[0].wins == 5
    assert cumulative[0].losses == 1
    assert cumulative[0].game_win_percentage == 5 / 6
    assert PlayerId(4) not in {standing.player_id for standing in cumulative}


def test_fold_uses_fresh_results_for_last_stage() -> None:
    stale_stage_two = build_stage(2, _stage_one())
    stages = [build_stage(1, _stage_one()), stale_stage_two]

    cumulative = fold_cumulative(_stage_two(), ROSTER, stages, 2)

    assert _summary(cumulative) == [("B", 43, 1), ("A", 40, 2), ("C", 33, 3)]


def test_fold_ignores_stages_after_stage_count() -> None:
    stages = [build_stage(1, _stage_one()), build_stage(2, _stage_two()), build_stage(3)]

    cumulative = fold_cumulative(_stage_two(), ROSTER, stages, 2)

    assert _summary(cumulative) == [("B", 43, 1), ("A", 40, 2), ("C", 33, 3)]


def test_fold_breaks_point_ties_by_wins() -> None:
    roster = [build_participant(10, "X"), build_participant(11, "Y")]
    stage_one = score_stage(
        [
            build_placement(10, "X", final_rank=1, wins=1, losses=0),
            build_placement(11, "Y", final_rank=2, wins=3, losses=0),
        ]
    )
    stage_two = score_stage(
        [
            build_placement(10, "X", final_rank=10, wins=0, losses=3),
            build_placement(11, "Y", final_rank=6, wins=2, losses=1),
        ]
    )

    cumulative = fold_cumulative(
        stage_two, roster, [build_stage(1, stage_one), build_stage(2)], 2
    )

    assert _summary(cumulative) == [("Y", 26, 1), ("X", 26, 2)]


def test_fold_is_deterministic_for_full_ties() -> None:
    roster = [build_participant(20, "P"), build_participant(21, "Q"), build_participant(22, "R")]
    stage_results = score_stage(
        [
            build_placement(21, "Q", final_rank=11, wins=1, losses=2),
            build_placement(20, "P", final_rank=12, wins=1, losses=2),
        ]
    )
    stages = [build_stage(1)]

    first = fold_cumulative(stage_results, roster, stages, 1)
    second = fold_cumulative(stage_results, roster, stages, 1)

    assert first == second
    assert _summary(first) == [("P", 0, 1), ("Q", 0, 2)]


def test_fold_keeps_players_without_points_who_played() -> None:
    stage_results = score_stage(
        [
            build_placement(1, "A", final_rank=1, wins=3, losses=0),
            build_placement(2, "B", final_rank=11, wins=0, losses=3),
        ]
    )

    cumulative = fold_cumulative(stage_results, ROSTER, [build_stage(1)], 1)

    assert _summary(cumulative) == [("A", 25, 1), ("B", 0, 2)]
    assert cumulative[1].matches_played == 1


def test_fold_is_idempotent() -> None:
    stages = [build_stage(1, _stage_one()), build_stage(2)]
    stage_results = _stage_two()

    first = fold_cumulative(stage_results, ROSTER, stages, 2)
    second = fold_cumulative(stage_results, ROSTER, stages, 2)

    assert first == second
    assert stages[0].standings == _stage_one()


def test_fold_excludes_registered_players_who_never_played() -> None:
    roster = [build_participant(30, "Never"), *ROSTER]

    cumulative = fold_cumulative(_stage_one(), roster, [build_stage(1)], 1)

    assert [standing.player_name for standing in cumulative] == ["A", "B", "C"]
    assert [standing.rank for standing in cumulative] == [1, 2, 3]


def test_fold_with_empty_roster_returns_nothing() -> None:
    assert fold_cumulative(_stage_one(), [], [build_stage(1)], 1) == []


def test_fold_ignores_standings_of_unregistered_players() -> None:
    stage_results = score_stage(
        [
            build_placement(1, "A", final_rank=1, wins=3, losses=0),
            build_placement(99, "Ghost", final_rank=2, wins=2, losses=1),
        ]
    )

    cumulative = fold_cumulative(stage_results, ROSTER, [build_stage(1)], 1)

    assert _summary(cumulative) == [("A", 25, 1)]


@pytest.mark.parametrize("stage_count", [0, -1, 3])
def test_fold_rejects_invalid_stage_count(stage_count: int) -> None:
    with pytest.raises(InvalidStageCountError):
        fold_cumulative(_stage_one(), ROSTER, [build_stage(1), build_stage(2)], stage_count)
