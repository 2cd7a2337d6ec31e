"""pupil_labs.partial_collection"""

from pupil_labs.partial_collection.collection import PartialCollection, Stats
from pupil_labs.partial_collection.errors import ConfigurationError
from pupil_labs.partial_collection.indexer import can_be_integer
from pupil_labs.partial_collection.range import Range
from pupil_labs.partial_collection.segments import (
    ExistingSegment,
    MissingSegment,
    Segment,
)

__all__: list[str] = [
    "ConfigurationError",
    "ExistingSegment",
    "MissingSegment",
    "PartialCollection",
    "Range",
    "Segment",
    "Stats",
    "can_be_integer",
]
