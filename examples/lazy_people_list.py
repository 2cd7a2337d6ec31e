import asyncio
import logging
import sys
from dataclasses import dataclass

import pupil_labs.partial_collection as plc


@dataclass
class Person:
    first_name: str
    last_name: str
    row_number: int


async def fetch_people(range_: plc.Range) -> list[Person]:
    # pretend this goes over the network
    await asyncio.sleep(0.1)
    return [
        Person(f"First {i}", f"Last {i}", row_number=i)
        for i in range(range_.start, range_.end + 1)
    ]


async def main(max_count: int) -> None:
    logger = logging.getLogger("people")

    # The only mandatory options are the fetcher and the indexer
    people = plc.PartialCollection[Person, Person](
        fetcher=fetch_people,
        indexer="row_number",
        logger=logger,
    )

    # max_count has to be set before the collection can be used
    people.max_count = max_count

    people.load(await fetch_people(plc.Range(0, 19)))

    # 0-19 are loaded already, so only 20-25 get fetched
    result = await people.fetch(plc.Range(13, 25))
    print(f"received {len(result)} people, first: {result[0]}")
    print(people.segments(plc.Range(0, max_count - 1)))

    # Index individual items, None means not loaded yet
    print(people[13], people[max_count - 1])
    print(people)


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    max_count = int(sys.argv[1]) if len(sys.argv) > 1 else 50
    asyncio.run(main(max_count))
