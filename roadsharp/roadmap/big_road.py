"""
The Big Road.

Each column is one unbroken streak of the same winner. A change of winner
starts a new column; ties never take a cell and are counted on the most
recent cell instead. Columns are unbounded in height: a streak longer than
the display height stays one logical column, and wrapping it for display is
left to `roadsharp.roadmap.layout`.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Tuple

from roadsharp.common.errors import RoadmapConsistencyError
from roadsharp.common.outcome import RoundOutcome, Winner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BigRoadCell:
    """
    One decisive round on the Big Road.

    Attributes:
        winner: Player or Banker
        column: Logical column index
        row: Row within the column, unbounded
        round_number: Round that produced the cell
        tie_count: Ties dealt after this round and before the next decisive one
        is_player_pair: Player pair in this round
        is_banker_pair: Banker pair in this round
    """

    winner: Winner
    column: int
    row: int
    round_number: Optional[int] = None
    tie_count: int = 0
    is_player_pair: bool = False
    is_banker_pair: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "winner": self.winner.value,
            "column": self.column,
            "row": self.row,
            "round_number": self.round_number,
            "tie_count": self.tie_count,
            "is_player_pair": self.is_player_pair,
            "is_banker_pair": self.is_banker_pair,
        }


class BigRoad:
    """Incrementally built Big Road."""

    def __init__(self):
        self.columns: List[List[BigRoadCell]] = []
        self.pre_game_ties = 0

    @property
    def last_cell(self) -> Optional[BigRoadCell]:
        return self.columns[-1][-1] if self.columns else None

    @property
    def column_lengths(self) -> List[int]:
        return [len(column) for column in self.columns]

    def next_position(self, winner: Winner) -> Tuple[int, int]:
        """
        Where a decisive outcome for `winner` would be placed.

        Returns:
            (column, row) of the would-be cell
        """
        if not winner.is_decisive:
            raise ValueError("Ties are never placed on the Big Road")
        if not self.columns or self.columns[-1][0].winner is not winner:
            return len(self.columns), 0
        return len(self.columns) - 1, len(self.columns[-1])

    def add(self, outcome: RoundOutcome) -> Optional[BigRoadCell]:
        """
        Add an outcome to the road.

        Returns:
            The new cell, or None for a tie
        """
        if outcome.winner is Winner.TIE:
            last = self.last_cell
            if last is None:
                self.pre_game_ties += 1
            else:
                self.columns[-1][-1] = replace(last, tie_count=last.tie_count + 1)
            return None

        column, row = self.next_position(outcome.winner)
        cell = BigRoadCell(
            winner=outcome.winner,
            column=column,
            row=row,
            round_number=outcome.round_number,
            is_player_pair=outcome.is_player_pair,
            is_banker_pair=outcome.is_banker_pair,
        )
        if row == 0:
            self.columns.append([cell])
        else:
            self.columns[column].append(cell)
        self._check_column(column)
        return cell

    def _check_column(self, index: int) -> None:
        column = self.columns[index]
        head = column[0].winner
        for row, cell in enumerate(column):
            if cell.winner is not head or cell.row != row or cell.column != index:
                logger.error("Big Road column %d is inconsistent: %r", index, column)
                raise RoadmapConsistencyError(
                    f"Big Road column {index} mixes winners or positions at row {row}"
                )

    def validate(self) -> None:
        """Check every column holds a single winner and adjacent columns differ."""
        for index in range(len(self.columns)):
            self._check_column(index)
            if index and self.columns[index][0].winner is self.columns[index - 1][0].winner:
                raise RoadmapConsistencyError(
                    f"Big Road columns {index - 1} and {index} continue the same streak"
                )

    def to_columns(self) -> Tuple[Tuple[BigRoadCell, ...], ...]:
        return tuple(tuple(column) for column in self.columns)


def build_big_road(outcomes) -> Tuple[Tuple[Tuple[BigRoadCell, ...], ...], int]:
    """
    Build the Big Road from a complete history in one pass.

    Decisive outcomes are grouped into streaks first, then each tie is
    charged to the decisive round before it.

    Returns:
        (columns, pre_game_ties)
    """
    streaks: List[List[RoundOutcome]] = []
    ties_after: Dict[int, int] = {}
    pre_game_ties = 0
    decisive_index = -1

    for outcome in outcomes:
        if outcome.winner is Winner.TIE:
            if decisive_index < 0:
                pre_game_ties += 1
            else:
                ties_after[decisive_index] = ties_after.get(decisive_index, 0) + 1
            continue
        decisive_index += 1
        if streaks and streaks[-1][0].winner is outcome.winner:
            streaks[-1].append(outcome)
        else:
            streaks.append([outcome])

    columns = []
    index = 0
    for column_index, streak in enumerate(streaks):
        column = []
        for row, outcome in enumerate(streak):
            column.append(
                BigRoadCell(
                    winner=outcome.winner,
                    column=column_index,
                    row=row,
                    round_number=outcome.round_number,
                    tie_count=ties_after.get(index, 0),
                    is_player_pair=outcome.is_player_pair,
                    is_banker_pair=outcome.is_banker_pair,
                )
            )
            index += 1
        columns.append(tuple(column))
    return tuple(columns), pre_game_ties
