"""
Aggregate statistics for a shoe.

`ShoeStatistics` holds the running counts shown next to the roads (wins per
side, ties, naturals, pairs and the longest streaks). `win_rates` adds
confidence intervals for the observed outcome rates, and
`outcomes_to_dataframe` exports a history for tabular analysis.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

import numpy as np
import pandas as pd
import scipy.stats as stats

from roadsharp.common.outcome import RoundOutcome, Winner


@dataclass
class ShoeStatistics:
    """
    Running counts for one shoe.

    Streaks follow the Big Road: ties do not interrupt them.
    """

    total_rounds: int = 0
    banker_wins: int = 0
    player_wins: int = 0
    ties: int = 0
    naturals: int = 0
    player_pairs: int = 0
    banker_pairs: int = 0
    longest_banker_streak: int = 0
    longest_player_streak: int = 0
    _streak_winner: Optional[Winner] = field(default=None, repr=False)
    _streak_length: int = field(default=0, repr=False)

    def record(self, outcome: RoundOutcome) -> None:
        """Count one outcome."""
        self.total_rounds += 1
        if outcome.is_natural:
            self.naturals += 1
        if outcome.is_player_pair:
            self.player_pairs += 1
        if outcome.is_banker_pair:
            self.banker_pairs += 1

        if outcome.winner is Winner.TIE:
            self.ties += 1
            return

        if outcome.winner is Winner.BANKER:
            self.banker_wins += 1
        else:
            self.player_wins += 1

        if outcome.winner is self._streak_winner:
            self._streak_length += 1
        else:
            self._streak_winner = outcome.winner
            self._streak_length = 1

        if outcome.winner is Winner.BANKER:
            self.longest_banker_streak = max(self.longest_banker_streak, self._streak_length)
        else:
            self.longest_player_streak = max(self.longest_player_streak, self._streak_length)

    @property
    def decisive_rounds(self) -> int:
        return self.banker_wins + self.player_wins

    @property
    def current_streak(self) -> Dict[str, Any]:
        return {
            "winner": self._streak_winner.value if self._streak_winner else None,
            "length": self._streak_length,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary."""
        decisive = self.decisive_rounds
        return {
            "total_rounds": self.total_rounds,
            "banker_wins": self.banker_wins,
            "player_wins": self.player_wins,
            "ties": self.ties,
            "naturals": self.naturals,
            "player_pairs": self.player_pairs,
            "banker_pairs": self.banker_pairs,
            "longest_banker_streak": self.longest_banker_streak,
            "longest_player_streak": self.longest_player_streak,
            "current_streak": self.current_streak,
            "banker_win_rate": self.banker_wins / decisive if decisive > 0 else 0,
            "player_win_rate": self.player_wins / decisive if decisive > 0 else 0,
            "tie_rate": self.ties / self.total_rounds if self.total_rounds > 0 else 0,
        }


def compute_statistics(outcomes: Iterable[RoundOutcome]) -> ShoeStatistics:
    statistics = ShoeStatistics()
    for outcome in outcomes:
        statistics.record(outcome)
    return statistics


@dataclass
class ConfidenceInterval:
    """
    Represents a confidence interval with lower and upper bounds.

    Attributes:
        lower: The lower bound of the confidence interval
        upper: The upper bound of the confidence interval
        confidence: The confidence level (e.g., 0.95 for 95% confidence)
    """

    lower: float
    upper: float
    confidence: float

    def contains(self, value: float) -> bool:
        """Check if the interval contains a value."""
        return self.lower <= value <= self.upper

    def to_dict(self) -> Dict[str, float]:
        """Convert to a dictionary."""
        return {"lower": self.lower, "upper": self.upper, "confidence": self.confidence}


def _calculate_confidence_interval(
    values: List[float], confidence: float = 0.95
) -> ConfidenceInterval:
    """
    Calculate a t-distribution confidence interval for the mean of `values`.

    With fewer than two values the interval collapses onto the mean.
    """
    if not values:
        return ConfidenceInterval(0.0, 0.0, confidence)
    mean = float(np.mean(values))
    if len(values) < 2:
        return ConfidenceInterval(mean, mean, confidence)

    std_err = stats.sem(values)
    margin = std_err * stats.t.ppf((1 + confidence) / 2, len(values) - 1)
    # A constant sample has zero spread
    if np.isnan(margin):
        margin = 0.0
    lower = max(0.0, mean - margin)
    upper = min(1.0, mean + margin)
    return ConfidenceInterval(float(lower), float(upper), confidence)


def win_rates(
    outcomes: Iterable[RoundOutcome], confidence: float = 0.95
) -> Dict[str, Dict[str, Any]]:
    """
    Observed rate of each winner over all rounds, with confidence intervals.

    Args:
        outcomes: The rounds to analyze
        confidence: The confidence level for the intervals

    Returns:
        A dictionary keyed by winner value, each holding the rate, its
        confidence interval and the sample size
    """
    winners = [outcome.winner for outcome in outcomes]
    results = {}
    for winner in Winner:
        indicators = [1.0 if w is winner else 0.0 for w in winners]
        rate = float(np.mean(indicators)) if indicators else 0.0
        results[winner.value] = {
            "rate": rate,
            "confidence_interval": _calculate_confidence_interval(
                indicators, confidence
            ).to_dict(),
            "sample_size": len(indicators),
        }
    return results


OUTCOME_COLUMNS = [
    "round_number",
    "winner",
    "player_total",
    "banker_total",
    "is_player_pair",
    "is_banker_pair",
    "is_natural",
    "player_cards",
    "banker_cards",
]


def outcomes_to_dataframe(outcomes: Iterable[RoundOutcome]) -> pd.DataFrame:
    """
    Convert a history to a DataFrame, one row per round.

    Cards are rendered as space-separated strings.
    """
    rows = []
    for outcome in outcomes:
        row = outcome.to_dict()
        row["player_cards"] = " ".join(row["player_cards"])
        row["banker_cards"] = " ".join(row["banker_cards"])
        rows.append(row)
    return pd.DataFrame(rows, columns=OUTCOME_COLUMNS)
