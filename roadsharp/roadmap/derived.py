"""
Derived roads: Big Eye Boy, Small Road and Cockroach Pig.

Each derived road reads the shape of the Big Road, never the winners. For the
Big Road cell at (C, R) and a road offset k:

- R == 0: the cell is red when the two columns just before the new one,
  C-1 and C-1-k, have the same length.
- R >= 1: the cell is red unless column C-k has exactly R cells, i.e. it is
  blue only when the reference column stopped on the row just above.

Only columns left of C are read, and those are already closed, so a value
never depends on later rounds. A cell left of the road's first eligible
position has no value (None), which is distinct from blue (False).

Values are laid out with the Big Road rule: a change of value starts a new
column and columns are unbounded in height.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from roadsharp.roadmap.big_road import BigRoadCell
from roadsharp.roadmap.constants import DerivedRoadType


@dataclass(frozen=True)
class DerivedRoadCell:
    """
    One value on a derived road.

    Attributes:
        value: True for red (the Big Road follows its pattern), False for blue
        column: Column on the derived road
        row: Row within that column, unbounded
        round_number: Round whose Big Road cell produced the value
        source_column: Big Road column of that cell
        source_row: Big Road row of that cell
    """

    value: bool
    column: int
    row: int
    round_number: Optional[int] = None
    source_column: int = 0
    source_row: int = 0

    @property
    def is_red(self) -> bool:
        return self.value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "column": self.column,
            "row": self.row,
            "round_number": self.round_number,
            "source_column": self.source_column,
            "source_row": self.source_row,
        }


def derived_signal(
    column_lengths: Sequence[int], column: int, row: int, offset: int
) -> Optional[bool]:
    """
    Value a derived road gives the Big Road cell at (column, row).

    Args:
        column_lengths: Lengths of the Big Road columns; only indexes below
            `column` are read
        column: Big Road column of the cell
        row: Big Road row of the cell
        offset: Lookback of the road (1, 2 or 3)

    Returns:
        True (red), False (blue) or None before the road starts
    """
    if row == 0:
        if column < offset + 1:
            return None
        return column_lengths[column - 1] == column_lengths[column - 1 - offset]
    if column < offset:
        return None
    return column_lengths[column - offset] != row


class DerivedRoad:
    """Incrementally built derived road."""

    def __init__(self, road_type: DerivedRoadType):
        self.road_type = road_type
        self.columns: List[List[DerivedRoadCell]] = []

    @property
    def offset(self) -> int:
        return self.road_type.offset

    def add(
        self, source: BigRoadCell, column_lengths: Sequence[int]
    ) -> Optional[DerivedRoadCell]:
        """
        Derive and place the value for a newly placed Big Road cell.

        Returns:
            The new cell, or None when the road has not started yet
        """
        value = derived_signal(column_lengths, source.column, source.row, self.offset)
        if value is None:
            return None

        if self.columns and self.columns[-1][0].value == value:
            column, row = len(self.columns) - 1, len(self.columns[-1])
        else:
            column, row = len(self.columns), 0
            self.columns.append([])
        cell = DerivedRoadCell(
            value=value,
            column=column,
            row=row,
            round_number=source.round_number,
            source_column=source.column,
            source_row=source.row,
        )
        self.columns[column].append(cell)
        return cell

    def to_columns(self) -> Tuple[Tuple[DerivedRoadCell, ...], ...]:
        return tuple(tuple(column) for column in self.columns)


def build_derived_road(
    big_road_columns: Sequence[Sequence[BigRoadCell]], road_type: DerivedRoadType
) -> Tuple[Tuple[DerivedRoadCell, ...], ...]:
    """
    Build a derived road from a finished Big Road in one pass.

    Walks the Big Road column by column; every column left of the one being
    read is closed, so final lengths equal the lengths seen at placement.
    """
    lengths = [len(column) for column in big_road_columns]
    columns: List[List[DerivedRoadCell]] = []

    for column in big_road_columns:
        for cell in column:
            value = derived_signal(lengths, cell.column, cell.row, road_type.offset)
            if value is None:
                continue
            if not columns or columns[-1][0].value != value:
                columns.append([])
            columns[-1].append(
                DerivedRoadCell(
                    value=value,
                    column=len(columns) - 1,
                    row=len(columns[-1]),
                    round_number=cell.round_number,
                    source_column=cell.column,
                    source_row=cell.row,
                )
            )

    return tuple(tuple(column) for column in columns)
