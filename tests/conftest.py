"""
Pytest configuration and shared fixtures.
"""

import pytest

from roadsharp.common.outcome import RoundOutcome, Winner

WINNER_CODES = {"B": Winner.BANKER, "P": Winner.PLAYER, "T": Winner.TIE}


def outcomes_from(codes: str):
    """Outcomes from a string such as "BBPTP", without totals or round numbers."""
    return [RoundOutcome(winner=WINNER_CODES[code]) for code in codes.replace(" ", "")]


@pytest.fixture
def history():
    """Factory for outcome lists from B/P/T strings."""
    return outcomes_from
