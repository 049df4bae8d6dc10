POINTS_BY_RANK: dict[int, int] = {
    1: 25,
    2: 18,
    3: 15,
    4: 12,
    5: 10,
    6: 8,
    7: 6,
    8: 4,
    9: 2,
    10: 1,
}


def points_for_rank(rank: int | None) -> int:
    """Points awarded for a final placement; anything outside the top 10 scores nothing."""
    if rank is None:
        return 0
    return POINTS_BY_RANK.get(rank, 0)


def get_points_system() -> list[tuple[int, int]]:
    return sorted(POINTS_BY_RANK.items())
