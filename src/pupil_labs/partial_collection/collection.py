import asyncio
import inspect
import math
from collections.abc import Coroutine, Iterable, Sequence
from dataclasses import dataclass
from logging import Logger, getLogger
from numbers import Real
from typing import Any, Generic, overload

from pupil_labs.partial_collection._types import (
    Fetcher,
    FieldOrMapper,
    ItemT,
    StoredT,
)
from pupil_labs.partial_collection.errors import ConfigurationError
from pupil_labs.partial_collection.indexer import as_index, identity, resolve_mapper
from pupil_labs.partial_collection.range import Range, RangeLike, as_skip_take
from pupil_labs.partial_collection.segments import (
    ExistingSegment,
    MissingSegment,
    Segment,
    segment_range,
)

DEFAULT_LOGGER = getLogger(__name__)


@dataclass
class Stats:
    """Tracks calls to the fetcher and items going into storage"""

    fetches: int = 0
    loaded: int = 0
    skipped: int = 0


class PartialCollection(Generic[ItemT, StoredT]):
    def __init__(
        self,
        fetcher: Fetcher,
        indexer: FieldOrMapper,
        identifier: FieldOrMapper | None = None,
        max_count: int | None = None,
        logger: Logger | None = None,
    ):
        """Sparse, index addressable collection that loads missing items on demand.

        Args:
        ----
            fetcher: Called with a `Range` for every gap that needs loading, returns
                the items in that range. Can be a coroutine function.
            indexer: Field name or callable giving the storage index of an item.
            identifier: Field name or callable giving the value that is actually
                stored for an item. Defaults to storing the item itself.
            max_count: Number of slots in the collection, can also be set later.
            logger: Python logger to use, decreases performance.

        """
        if not callable(fetcher):
            raise ConfigurationError(f"fetcher must be callable, not {type(fetcher)}")

        self.fetcher = fetcher
        self.logger = logger or DEFAULT_LOGGER
        self.stats = Stats()

        self._indexer = resolve_mapper(indexer, "indexer")
        self._identifier = resolve_mapper(identifier, "identifier", default=identity)
        self._log = bool(logger)
        self._storage = dict[int, StoredT]()
        self._max_count: int | float | None = None
        self.max_count = max_count

    def _get_logger(self, prefix: str) -> Any | Logger:
        if self._log:
            return self.logger.getChild(f"{self.__class__.__name__}.{prefix}")
        return False

    @property
    def max_count(self) -> int | float | None:
        """Number of slots in the collection.

        Assigning anything other than a non-negative number is ignored. Shrinking does
        not drop stored items, they are only hidden until `max_count` grows again.
        """
        return self._max_count

    @max_count.setter
    def max_count(self, value: int | float | None) -> None:
        if (
            isinstance(value, bool)
            or not isinstance(value, Real)
            or math.isnan(value)
            or value < 0
        ):
            if value is not None:
                self.logger.debug(f"ignoring invalid max_count: {value!r}")
            return
        self._max_count = value

    def _bound(self) -> int:
        if self._max_count is None or not math.isfinite(self._max_count):
            raise ConfigurationError(
                f"max_count must be set to a finite number, got {self._max_count!r}"
            )
        return math.ceil(self._max_count)

    def get(self, index: int) -> StoredT | None:
        """Return the item at `index`, or None if it has not been loaded yet.

        Raises `IndexError` for indices outside of `[0, max_count)`, negative indices
        are not counted from the end.
        """
        bound = self._bound()
        if index < 0 or index >= bound:
            raise IndexError(f"index {index} out of range [0, {bound})")
        return self._storage.get(index)

    @overload
    def __getitem__(self, key: int) -> StoredT | None: ...
    @overload
    def __getitem__(self, key: slice) -> list[StoredT | None]: ...

    def __getitem__(self, key: int | slice) -> StoredT | None | list[StoredT | None]:
        """Index-based access to the currently loaded items, never fetches.

        `collection[5]` is the same as `collection.get(5)`.
        `collection[5:10]` returns a list with None for slots not loaded yet.
        """
        if isinstance(key, slice):
            return [self.get(i) for i in range(*key.indices(len(self)))]
        if isinstance(key, int):
            return self.get(key)
        raise TypeError(f"key must be int or slice, not {type(key)}")

    def __len__(self) -> int:
        return self._bound()

    def __contains__(self, index: object) -> bool:
        if not isinstance(index, int):
            return False
        return 0 <= index < self._bound() and self._storage.get(index) is not None

    def loaded_indices(self) -> list[int]:
        """Sorted indices of the loaded items within `[0, max_count)`"""
        bound = self._bound()
        return sorted(
            index
            for index, item in self._storage.items()
            if 0 <= index < bound and item is not None
        )

    def segments(self, range_: RangeLike) -> list[Segment[StoredT]]:
        """Split a range into existing and missing segments.

        The range is clamped to `[0, max_count)`, so the last segment never extends
        past the end of the collection.
        """
        bound = self._bound()
        skip, take = as_skip_take(range_)
        return segment_range(self._storage, max(skip, 0), min(skip + take, bound))

    def fetch(self, range_: RangeLike) -> Coroutine[Any, Any, list[StoredT]]:
        """Return a coroutine resolving to all items in `range_`.

        Segments are worked out right away against the current storage, so
        configuration errors are raised here and not when awaiting. Every missing
        segment results in one concurrent call to the fetcher. Results are returned
        in segment order, as loaded.

        If any fetcher call fails, awaiting raises that error. Other fetcher calls
        are not cancelled and still load their items when they complete.
        """
        logger = self._get_logger(f"{PartialCollection.fetch.__name__}({range_})")
        segments = self.segments(range_)
        logger and logger.debug(f"segments: {_segment_summary(segments)}")
        return self._fill_gaps(segments)

    async def _fill_gaps(self, segments: list[Segment[StoredT]]) -> list[StoredT]:
        parts = await asyncio.gather(*[
            self._resolve_segment(segment) for segment in segments
        ])
        return [item for part in parts for item in part]

    async def _resolve_segment(self, segment: Segment[StoredT]) -> list[StoredT]:
        if isinstance(segment, ExistingSegment):
            return list(segment.results)
        assert isinstance(segment, MissingSegment)

        logger = self._get_logger(f"{PartialCollection._resolve_segment.__name__}")
        logger and logger.debug(f"fetching [{segment.start}, {segment.end}]")
        self.stats.fetches += 1
        items = self.fetcher(segment.range)
        if inspect.isawaitable(items):
            items = await items
        loaded = self.load(items)
        logger and logger.debug(
            f"loaded {len(loaded)} items for [{segment.start}, {segment.end}]"
        )
        return loaded

    def load(self, items: Iterable[ItemT]) -> list[StoredT]:
        """Store items at their indexer derived index, overwriting existing ones.

        Items with a non-integer index or one outside of `[0, max_count)` are
        skipped. Returns the stored values in input order.
        """
        bound = self._bound()
        results = list[StoredT]()
        for item in items:
            raw_index = self._indexer(item)
            index = as_index(raw_index)
            if index is None:
                self.logger.debug(f"skipping item with non-integer index: {raw_index!r}")
                self.stats.skipped += 1
                continue
            if index < 0 or index >= bound:
                self.logger.debug(f"skipping item with index {index} outside [0, {bound})")
                self.stats.skipped += 1
                continue

            stored = self._identifier(item)
            self._storage[index] = stored
            results.append(stored)
        self.stats.loaded += len(results)
        return results

    def unload(self, items: Iterable[ItemT]) -> None:
        """Remove items from storage, unknown or invalid indices are ignored"""
        for item in items:
            index = as_index(self._indexer(item))
            if index is not None:
                self._storage.pop(index, None)

    def unload_range(self, range_: RangeLike) -> None:
        """Remove every stored item within `range_`, clamped to `max_count` if set"""
        skip, take = as_skip_take(range_)
        stop = skip + take
        if self._max_count is not None and math.isfinite(self._max_count):
            stop = min(stop, math.ceil(self._max_count))
        if stop <= skip:
            return

        if stop - skip <= len(self._storage):
            indices: Sequence[int] = range(skip, stop)
        else:
            indices = [index for index in self._storage if skip <= index < stop]
        for index in indices:
            self._storage.pop(index, None)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            + ", ".join(
                f"{key}={value}"
                for key, value in [
                    ("max_count", self._max_count),
                    ("loaded", len(self._storage)),
                    ("stats", self.stats),
                ]
            )
            + ")"
        )


def _segment_summary(segments: Sequence[Segment[Any]]) -> str:
    return ", ".join(
        f"{'existing' if isinstance(segment, ExistingSegment) else 'missing'}"
        f"[{segment.start}, {segment.end}]"
        for segment in segments
    )
