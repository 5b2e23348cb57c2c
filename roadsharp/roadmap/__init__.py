"""
Road charts for baccarat outcomes.

The Big Road, the three derived roads (Big Eye Boy, Small Road, Cockroach
Pig) and the Bead Plate, built incrementally or from a whole history, plus the
display adapter and shoe statistics.
"""

from roadsharp.roadmap.bead_plate import BeadCell, BeadPlate
from roadsharp.roadmap.big_road import BigRoad, BigRoadCell
from roadsharp.roadmap.constants import DerivedRoadType
from roadsharp.roadmap.derived import DerivedRoad, DerivedRoadCell, derived_signal
from roadsharp.roadmap.engine import RoadmapEngine, RoadmapSnapshot, compute_all
from roadsharp.roadmap.layout import RoadmapConfig, layout_snapshot, wrap_columns
from roadsharp.roadmap.statistics import ShoeStatistics, outcomes_to_dataframe, win_rates

__all__ = [
    "BeadCell",
    "BeadPlate",
    "BigRoad",
    "BigRoadCell",
    "DerivedRoad",
    "DerivedRoadCell",
    "DerivedRoadType",
    "RoadmapConfig",
    "RoadmapEngine",
    "RoadmapSnapshot",
    "ShoeStatistics",
    "compute_all",
    "derived_signal",
    "layout_snapshot",
    "outcomes_to_dataframe",
    "win_rates",
    "wrap_columns",
]
