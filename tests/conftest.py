import pytest

from pupil_labs.partial_collection import PartialCollection

from .utils import Person, RecordingFetcher


@pytest.fixture
def fetcher() -> RecordingFetcher:
    return RecordingFetcher()


@pytest.fixture
def collection(fetcher: RecordingFetcher) -> PartialCollection[Person, Person]:
    return PartialCollection(fetcher=fetcher, indexer="row_number", max_count=50)
