from tcgleague.logic.ranking.points import POINTS_BY_RANK, get_points_system, points_for_rank


def test_points_for_top_ten_ranks() -> None:
    expected = {1: 25, 2: 18, 3: 15, 4: 12, 5: 10, 6: 8, 7: 6, 8: 4, 9: 2, 10: 1}
    assert {rank: points_for_rank(rank) for rank in range(1, 11)} == expected


def test_points_outside_top_ten_are_zero() -> None:
    assert points_for_rank(11) == 0
    assert points_for_rank(64) == 0
    assert points_for_rank(0) == 0
    assert points_for_rank(-1) == 0
    assert points_for_rank(None) == 0


def test_points_system_is_sorted_by_rank() -> None:
    points_system = get_points_system()
    assert [rank for rank, _ in points_system] == list(range(1, 11))
    assert dict(points_system) == POINTS_BY_RANK
