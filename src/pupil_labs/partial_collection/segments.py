from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Generic

import numpy as np

from pupil_labs.partial_collection._types import BoolArray, StoredT
from pupil_labs.partial_collection.range import Range


@dataclass(frozen=True)
class ExistingSegment(Generic[StoredT]):
    """Run of populated indices, `results` holds their items in index order"""

    start: int
    end: int
    results: list[StoredT] = field(default_factory=list)

    @property
    def range(self) -> Range:
        return Range(self.start, self.end)

    def __len__(self) -> int:
        return self.end - self.start + 1


@dataclass(frozen=True)
class MissingSegment:
    """Run of indices that have not been loaded yet"""

    start: int
    end: int

    @property
    def range(self) -> Range:
        return Range(self.start, self.end)

    def __len__(self) -> int:
        return self.end - self.start + 1


Segment = ExistingSegment[StoredT] | MissingSegment


def find_runs(mask: BoolArray) -> list[tuple[int, int, bool]]:
    """Split a boolean array into maximal runs of equal values.

    Returns `(start, stop, value)` triples with `stop` exclusive, eg.
    `[T, T, F, F, F, T]` gives `[(0, 2, True), (2, 5, False), (5, 6, True)]`.
    """
    if len(mask) == 0:
        return []
    boundaries = np.flatnonzero(mask[1:] != mask[:-1]) + 1
    starts = np.concatenate(([0], boundaries))
    stops = np.concatenate((boundaries, [len(mask)]))
    return [
        (int(start), int(stop), bool(mask[start]))
        for start, stop in zip(starts, stops)
    ]


def segment_range(
    storage: Mapping[int, StoredT], start: int, stop: int
) -> list[Segment[StoredT]]:
    """Classify `[start, stop)` into alternating existing and missing segments.

    Adjacent indices sharing the same populated state always end up in the same
    segment, so the segment count is minimal and consecutive segments never share
    a variant. An empty interval gives no segments.
    """
    if stop <= start:
        return []

    mask = np.fromiter(
        (storage.get(i) is not None for i in range(start, stop)),
        dtype=bool,
        count=stop - start,
    )
    segments = list[Segment[StoredT]]()
    for run_start, run_stop, populated in find_runs(mask):
        first, last = start + run_start, start + run_stop - 1
        if populated:
            results = [storage[i] for i in range(first, last + 1)]
            segments.append(ExistingSegment(first, last, results))
        else:
            segments.append(MissingSegment(first, last))
    return segments
