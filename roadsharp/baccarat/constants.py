"""Baccarat-specific constants and value mappings."""

from roadsharp.common.card import Rank

# Scoring value of each rank: face value mod 10, so 10/J/Q/K count 0
BACCARAT_VALUES = {rank: rank.value % 10 if rank < Rank.TEN else 0 for rank in Rank}

# Cards burned at the start of a shoe, decided by the first card turned over
BURN_COUNTS = {rank: min(rank.value, 10) for rank in Rank}

NATURAL_TOTALS = (8, 9)

# Player draws on 0-5 and stands on 6-7
PLAYER_DRAW_MAX = 5

# Banker total -> Player third-card values on which Banker draws.
# Banker always draws on 0-2 and always stands on 7.
BANKER_DRAWS_AGAINST = {
    0: frozenset(range(10)),
    1: frozenset(range(10)),
    2: frozenset(range(10)),
    3: frozenset({0, 1, 2, 3, 4, 5, 6, 7, 9}),
    4: frozenset({2, 3, 4, 5, 6, 7}),
    5: frozenset({4, 5, 6, 7}),
    6: frozenset({6, 7}),
    7: frozenset(),
}

# Banker draws on 0-5 when Player stood
BANKER_DRAW_MAX_WHEN_PLAYER_STANDS = 5

# The most cards a single round can consume
MAX_CARDS_PER_ROUND = 6


def get_baccarat_value(rank: Rank) -> int:
    """Get the baccarat scoring value for a given rank."""
    return BACCARAT_VALUES[rank]
