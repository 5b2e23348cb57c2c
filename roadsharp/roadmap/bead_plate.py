"""
The Bead Plate: every round in dealing order, ties included, filled top to
bottom in columns of a fixed height.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from roadsharp.common.outcome import RoundOutcome, Winner
from roadsharp.roadmap.constants import DEFAULT_ROWS


@dataclass(frozen=True)
class BeadCell:
    winner: Winner
    column: int
    row: int
    round_number: Optional[int] = None
    is_player_pair: bool = False
    is_banker_pair: bool = False
    is_natural: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "winner": self.winner.value,
            "column": self.column,
            "row": self.row,
            "round_number": self.round_number,
            "is_player_pair": self.is_player_pair,
            "is_banker_pair": self.is_banker_pair,
            "is_natural": self.is_natural,
        }


class BeadPlate:
    def __init__(self, rows: int = DEFAULT_ROWS):
        if rows < 1:
            raise ValueError(f"Bead plate needs at least one row, got {rows}")
        self.rows = rows
        self.cells: List[BeadCell] = []

    def add(self, outcome: RoundOutcome) -> BeadCell:
        index = len(self.cells)
        cell = BeadCell(
            winner=outcome.winner,
            column=index // self.rows,
            row=index % self.rows,
            round_number=outcome.round_number,
            is_player_pair=outcome.is_player_pair,
            is_banker_pair=outcome.is_banker_pair,
            is_natural=outcome.is_natural,
        )
        self.cells.append(cell)
        return cell

    def to_columns(self) -> Tuple[Tuple[BeadCell, ...], ...]:
        return tuple(
            tuple(self.cells[start:start + self.rows])
            for start in range(0, len(self.cells), self.rows)
        )
