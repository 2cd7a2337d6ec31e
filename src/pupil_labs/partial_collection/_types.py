from collections.abc import Awaitable, Callable, Sequence
from typing import Any, TypeVar

import numpy as np
import numpy.typing as npt

from pupil_labs.partial_collection.range import Range

ItemT = TypeVar("ItemT")
StoredT = TypeVar("StoredT")

Mapper = Callable[[Any], Any]
FieldOrMapper = str | Mapper

Fetcher = Callable[[Range], Awaitable[Sequence[Any]] | Sequence[Any]]
"Called with the bounds of a missing segment, returns (or resolves to) items"

BoolArray = npt.NDArray[np.bool_]
