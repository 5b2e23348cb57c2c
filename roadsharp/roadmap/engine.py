"""
The roadmap engine.

A `RoadmapEngine` owns the history of one shoe and the roads built from it.
It can be extended one outcome at a time with `append`, or the roads for a
whole history can be computed at once with `compute_all`. Both produce the
same `RoadmapSnapshot` for the same history.

Outcomes must arrive in strictly increasing round-number order. An outcome
without a round number is numbered one past the previous round. A rejected
outcome leaves the engine unchanged.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Tuple

from roadsharp.common.errors import (
    ContractViolationError,
    InvalidRoundNumberError,
    OutOfOrderRoundError,
)
from roadsharp.common.outcome import RoundOutcome, Winner
from roadsharp.roadmap.bead_plate import BeadCell, BeadPlate
from roadsharp.roadmap.big_road import BigRoad, BigRoadCell, build_big_road
from roadsharp.roadmap.constants import DerivedRoadType
from roadsharp.roadmap.derived import (
    DerivedRoad,
    DerivedRoadCell,
    build_derived_road,
    derived_signal,
)
from roadsharp.roadmap.layout import RoadmapConfig
from roadsharp.roadmap.statistics import ShoeStatistics, compute_statistics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoadmapSnapshot:
    """
    Immutable view of every road for one history.

    Attributes:
        big_road: Big Road columns
        derived_roads: Columns of each derived road
        bead_plate: Bead Plate columns
        statistics: Aggregate counts
        pre_game_ties: Ties dealt before the first decisive round
        round_count: Number of rounds in the history

    Snapshots compare by value but are not hashable: the derived roads are
    keyed by road type and the statistics are a mutable dataclass.
    """

    big_road: Tuple[Tuple[BigRoadCell, ...], ...] = ()
    derived_roads: Dict[DerivedRoadType, Tuple[Tuple[DerivedRoadCell, ...], ...]] = field(
        default_factory=dict
    )
    bead_plate: Tuple[Tuple[BeadCell, ...], ...] = ()
    statistics: ShoeStatistics = field(default_factory=ShoeStatistics)
    pre_game_ties: int = 0
    round_count: int = 0

    __hash__ = None

    @property
    def big_eye_boy(self):
        return self.derived_roads.get(DerivedRoadType.BIG_EYE_BOY, ())

    @property
    def small_road(self):
        return self.derived_roads.get(DerivedRoadType.SMALL_ROAD, ())

    @property
    def cockroach_pig(self):
        return self.derived_roads.get(DerivedRoadType.COCKROACH_PIG, ())

    def to_dict(self) -> Dict[str, Any]:
        """Plain nested lists and dictionaries, ready for JSON."""
        result = {
            "round_count": self.round_count,
            "pre_game_ties": self.pre_game_ties,
            "big_road": [[cell.to_dict() for cell in column] for column in self.big_road],
            "bead_plate": [[cell.to_dict() for cell in column] for column in self.bead_plate],
            "statistics": self.statistics.to_dict(),
        }
        for road_type in DerivedRoadType:
            result[road_type.value] = [
                [cell.to_dict() for cell in column]
                for column in self.derived_roads.get(road_type, ())
            ]
        return result


def number_outcomes(
    outcomes: Iterable[RoundOutcome], last_round_number: Optional[int] = None
) -> List[RoundOutcome]:
    """
    Check round numbers and fill in missing ones.

    Raises:
        InvalidRoundNumberError: On a round number that is not an int
        OutOfOrderRoundError: On a negative, duplicate or decreasing round number
    """
    numbered = []
    last = last_round_number
    for outcome in outcomes:
        if not isinstance(outcome, RoundOutcome):
            raise TypeError(f"Expected a RoundOutcome, got {outcome!r}")
        number = outcome.round_number
        if number is not None and (isinstance(number, bool) or not isinstance(number, int)):
            raise InvalidRoundNumberError(f"Round number must be an int, got {number!r}")
        if number is None:
            number = 1 if last is None else last + 1
            outcome = replace(outcome, round_number=number)
        elif number < 0:
            raise OutOfOrderRoundError(f"Round number must be non-negative, got {number}")
        elif last is not None and number <= last:
            raise OutOfOrderRoundError(
                f"Round {number} arrived after round {last}; rounds must strictly increase"
            )
        numbered.append(outcome)
        last = number
    return numbered


def compute_all(
    outcomes: Iterable[RoundOutcome], config: Optional[RoadmapConfig] = None
) -> RoadmapSnapshot:
    """
    Compute every road for a complete history in one pass.

    Args:
        outcomes: The shoe's outcomes in round order
        config: Display configuration; only the bead plate height is used

    Returns:
        A RoadmapSnapshot equal to the one an engine reaches by appending
        the same outcomes one at a time
    """
    config = config if config else RoadmapConfig()
    history = number_outcomes(outcomes)

    big_road, pre_game_ties = build_big_road(history)
    derived_roads = {
        road_type: build_derived_road(big_road, road_type) for road_type in DerivedRoadType
    }

    bead_plate = BeadPlate(config.rows)
    for outcome in history:
        bead_plate.add(outcome)

    return RoadmapSnapshot(
        big_road=big_road,
        derived_roads=derived_roads,
        bead_plate=bead_plate.to_columns(),
        statistics=compute_statistics(history),
        pre_game_ties=pre_game_ties,
        round_count=len(history),
    )


class RoadmapEngine:
    """
    Incrementally maintained roads for one shoe.

    Each instance owns its history and roads; nothing is shared between
    instances, so shoes can be processed side by side.
    """

    def __init__(self, config: Optional[RoadmapConfig] = None):
        self.config = config if config else RoadmapConfig()
        self.history: List[RoundOutcome] = []
        self.big_road = BigRoad()
        self.derived_roads: Dict[DerivedRoadType, DerivedRoad] = {
            road_type: DerivedRoad(road_type) for road_type in DerivedRoadType
        }
        self.bead_plate = BeadPlate(self.config.rows)
        self.statistics = ShoeStatistics()
        self._derived_by_round: Dict[DerivedRoadType, Dict[int, bool]] = {
            road_type: {} for road_type in DerivedRoadType
        }

    @classmethod
    def from_history(
        cls, outcomes: Iterable[RoundOutcome], config: Optional[RoadmapConfig] = None
    ) -> "RoadmapEngine":
        """Rehydrate an engine from a stored history."""
        engine = cls(config)
        for outcome in outcomes:
            engine.append(outcome)
        return engine

    compute_all = staticmethod(compute_all)

    @property
    def last_round_number(self) -> Optional[int]:
        return self.history[-1].round_number if self.history else None

    @property
    def next_round_number(self) -> int:
        last = self.last_round_number
        return 1 if last is None else last + 1

    def append(self, outcome: RoundOutcome) -> RoundOutcome:
        """
        Add the next outcome and extend every road.

        Args:
            outcome: The outcome of the next round

        Returns:
            The outcome as stored, with its round number filled in

        Raises:
            InvalidRoundNumberError: If the round number is not an int
            OutOfOrderRoundError: If the round number does not follow the last one
        """
        try:
            (outcome,) = number_outcomes([outcome], self.last_round_number)
        except ContractViolationError:
            logger.warning(
                "Rejected round %s after round %s",
                outcome.round_number,
                self.last_round_number,
            )
            raise

        cell = self.big_road.add(outcome)
        if cell is not None:
            lengths = self.big_road.column_lengths
            for road_type, road in self.derived_roads.items():
                derived = road.add(cell, lengths)
                if derived is not None:
                    self._derived_by_round[road_type][outcome.round_number] = derived.value

        self.bead_plate.add(outcome)
        self.statistics.record(outcome)
        self.history.append(outcome)

        logger.debug(
            "Round %d: %s (big road %s)",
            outcome.round_number,
            outcome.winner.value,
            f"{cell.column},{cell.row}" if cell else "tie",
        )
        return outcome

    def extend(self, outcomes: Iterable[RoundOutcome]) -> None:
        for outcome in outcomes:
            self.append(outcome)

    @property
    def pre_game_ties(self) -> int:
        return self.big_road.pre_game_ties

    def derived_value(self, road_type: DerivedRoadType, round_number: int) -> Optional[bool]:
        """
        Value a derived road took at a round.

        Returns:
            True (red), False (blue), or None when the road had no value for
            that round: before the road starts, for ties, or for unknown rounds
        """
        return self._derived_by_round[road_type].get(round_number)

    def predict(self, winner: Winner) -> Dict[DerivedRoadType, Optional[bool]]:
        """
        Values each derived road would take if the next decisive round went to `winner`.

        The engine is not modified.
        """
        column, row = self.big_road.next_position(winner)
        lengths = self.big_road.column_lengths
        return {
            road_type: derived_signal(lengths, column, row, road_type.offset)
            for road_type in DerivedRoadType
        }

    def validate(self) -> None:
        """Re-check the Big Road invariants; raises RoadmapConsistencyError."""
        self.big_road.validate()

    def snapshot(self) -> RoadmapSnapshot:
        return RoadmapSnapshot(
            big_road=self.big_road.to_columns(),
            derived_roads={
                road_type: road.to_columns() for road_type, road in self.derived_roads.items()
            },
            bead_plate=self.bead_plate.to_columns(),
            statistics=replace(self.statistics),
            pre_game_ties=self.big_road.pre_game_ties,
            round_count=len(self.history),
        )

    def __len__(self) -> int:
        return len(self.history)

    def __repr__(self) -> str:
        return (
            f"RoadmapEngine(rounds={len(self.history)}, "
            f"columns={len(self.big_road.columns)})"
        )
