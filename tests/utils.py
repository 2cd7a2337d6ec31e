import asyncio
from dataclasses import dataclass, field

from pupil_labs.partial_collection import Range


@dataclass
class Person:
    first_name: str
    last_name: str
    row_number: int


def make_people(start: int, end: int) -> list[Person]:
    return [Person(f"First {i}", f"Last {i}", row_number=i) for i in range(start, end + 1)]


@dataclass
class RecordingFetcher:
    """Async fetcher returning a person for every index in the requested range"""

    holes: set[int] = field(default_factory=set)
    failing: set[Range] = field(default_factory=set)
    delays: dict[Range, float] = field(default_factory=dict)
    calls: list[Range] = field(default_factory=list)

    async def __call__(self, range_: Range) -> list[Person]:
        self.calls.append(range_)
        await asyncio.sleep(self.delays.get(range_, 0))
        if range_ in self.failing:
            raise ConnectionError(f"failed to fetch {range_}")
        return [
            person
            for person in make_people(range_.start, range_.end)
            if person.row_number not in self.holes
        ]
