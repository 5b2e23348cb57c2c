"""Roadmap constants: derived-road offsets and default display sizes."""

from enum import Enum

# How many Big Road columns back each derived road looks
BIG_EYE_BOY_OFFSET = 1
SMALL_ROAD_OFFSET = 2
COCKROACH_PIG_OFFSET = 3

# House-standard display height
DEFAULT_ROWS = 6
DEFAULT_DISPLAY_COLUMNS = 40
DEFAULT_BEAD_PLATE_COLUMNS = 12


class DerivedRoadType(Enum):
    """The three roads derived from the shape of the Big Road."""

    BIG_EYE_BOY = "big_eye_boy"
    SMALL_ROAD = "small_road"
    COCKROACH_PIG = "cockroach_pig"

    @property
    def offset(self) -> int:
        return DERIVED_ROAD_OFFSETS[self]

    @property
    def first_continuation_column(self) -> int:
        """First Big Road column whose row >= 1 cells produce a value."""
        return self.offset

    @property
    def first_new_column(self) -> int:
        """First Big Road column whose row 0 cell produces a value."""
        return self.offset + 1


DERIVED_ROAD_OFFSETS = {
    DerivedRoadType.BIG_EYE_BOY: BIG_EYE_BOY_OFFSET,
    DerivedRoadType.SMALL_ROAD: SMALL_ROAD_OFFSET,
    DerivedRoadType.COCKROACH_PIG: COCKROACH_PIG_OFFSET,
}
