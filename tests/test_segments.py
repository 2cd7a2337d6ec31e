import numpy as np
import pytest

from pupil_labs.partial_collection.range import Range
from pupil_labs.partial_collection.segments import (
    ExistingSegment,
    MissingSegment,
    find_runs,
    segment_range,
)


def storage_for(indices: list[int]) -> dict[int, str]:
    return {i: f"item {i}" for i in indices}


def test_find_runs() -> None:
    mask = np.array([True, True, False, False, False, True])
    assert find_runs(mask) == [(0, 2, True), (2, 5, False), (5, 6, True)]


def test_find_runs_single_value() -> None:
    assert find_runs(np.zeros(4, dtype=bool)) == [(0, 4, False)]
    assert find_runs(np.ones(1, dtype=bool)) == [(0, 1, True)]
    assert find_runs(np.array([], dtype=bool)) == []


def test_empty_interval() -> None:
    storage = storage_for(list(range(10)))
    assert segment_range(storage, 5, 5) == []
    assert segment_range(storage, 6, 5) == []


def test_fully_loaded() -> None:
    storage = storage_for(list(range(20)))
    assert segment_range(storage, 3, 8) == [
        ExistingSegment(3, 7, [f"item {i}" for i in range(3, 8)])
    ]


def test_nothing_loaded() -> None:
    assert segment_range({}, 10, 20) == [MissingSegment(10, 19)]


def test_gap_at_end() -> None:
    storage = storage_for(list(range(20)))
    assert segment_range(storage, 13, 26) == [
        ExistingSegment(13, 19, [f"item {i}" for i in range(13, 20)]),
        MissingSegment(20, 25),
    ]


def test_alternating() -> None:
    storage = storage_for([0, 1, 4, 6, 7, 8])
    segments = segment_range(storage, 0, 10)
    assert segments == [
        ExistingSegment(0, 1, ["item 0", "item 1"]),
        MissingSegment(2, 3),
        ExistingSegment(4, 4, ["item 4"]),
        MissingSegment(5, 5),
        ExistingSegment(6, 8, ["item 6", "item 7", "item 8"]),
        MissingSegment(9, 9),
    ]


def test_none_values_count_as_missing() -> None:
    storage = {0: "item 0", 1: None, 2: "item 2"}
    assert segment_range(storage, 0, 3) == [
        ExistingSegment(0, 0, ["item 0"]),
        MissingSegment(1, 1),
        ExistingSegment(2, 2, ["item 2"]),
    ]


@pytest.mark.parametrize("seed", range(5))
def test_segments_cover_range_and_alternate(seed: int) -> None:
    rng = np.random.default_rng(seed)
    indices = [int(i) for i in np.flatnonzero(rng.random(100) < 0.5)]
    storage = storage_for(indices)
    segments = segment_range(storage, 7, 93)

    assert segments[0].start == 7
    assert segments[-1].end == 92
    assert sum(len(segment) for segment in segments) == 93 - 7
    for previous, current in zip(segments, segments[1:]):
        assert current.start == previous.end + 1
        assert type(current) is not type(previous)
    for segment in segments:
        if isinstance(segment, ExistingSegment):
            assert segment.results == [storage[i] for i in range(segment.start, segment.end + 1)]
        else:
            assert all(i not in storage for i in range(segment.start, segment.end + 1))


def test_segment_range_property() -> None:
    assert MissingSegment(20, 25).range == Range(20, 25)
    assert len(MissingSegment(20, 25)) == 6
    assert ExistingSegment(1, 2, ["a", "b"]).range == Range(1, 2)
