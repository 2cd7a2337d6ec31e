from collections.abc import Mapping, Sequence
from typing import Any, NamedTuple


class Range(NamedTuple):
    """Closed interval of indices, both `start` and `end` are inclusive."""

    start: int
    end: int

    @property
    def size(self) -> int:
        return max(self.end - self.start + 1, 0)


RangeLike = Range | tuple[int, int] | Mapping[str, int]


def as_range(value: Any) -> Range:
    """Coerce `(start, end)` pairs and `{"start": .., "end": ..}` mappings"""
    if isinstance(value, Range):
        return value
    if isinstance(value, Mapping):
        try:
            return Range(int(value["start"]), int(value["end"]))
        except KeyError as e:
            raise TypeError(f"range mapping is missing {e}") from e
    if isinstance(value, Sequence) and not isinstance(value, str | bytes):
        if len(value) != 2:
            raise TypeError(f"range must have exactly 2 bounds, got {len(value)}")
        start, end = value
        return Range(int(start), int(end))
    raise TypeError(f"range must be a Range, (start, end) or mapping, not {type(value)}")


def as_skip_take(value: RangeLike) -> tuple[int, int]:
    range_ = as_range(value)
    return range_.start, range_.end - range_.start + 1
