import pytest

from tomatoscope.catalog.aggregator import ResultAggregator
from tomatoscope.catalog.mapper import EntityMapper
from tomatoscope.catalog.models import Movie
from tomatoscope.core.exceptions import MalformedResponseError, TransportError

from conftest import movie_json

PATH = "/api/public/v1.0/lists/movies/in_theaters.json"
PARAMS = {"apikey": "k", "page": "1", "page_limit": "30"}


@pytest.fixture
def aggregator(transport):
    return ResultAggregator(transport, host="api.rottentomatoes.com")


@pytest.fixture
def movies():
    return EntityMapper(Movie)


def test_paginated_envelope_returns_items_and_total(aggregator, transport, movies):
    transport.add({"movies": [movie_json("A", "1"), movie_json("B", "2")], "total": 87})

    items, total = aggregator.fetch_paginated(PATH, PARAMS, movies)

    assert [m.title for m in items] == ["A", "B"]
    assert total == 87
    assert len(transport.requested) == 1


def test_malformed_item_is_dropped_and_order_kept(aggregator, transport, movies):
    broken = movie_json("B", "2")
    del broken["title"]
    transport.add({"movies": [movie_json("A", "1"), broken, movie_json("C", "3")], "total": 3})

    page = aggregator.fetch_paginated(PATH, PARAMS, movies)

    assert [m.title for m in page.items] == ["A", "C"]
    assert page.total == 3


def test_limited_fetch_does_not_truncate(aggregator, transport, movies):
    transport.add({"movies": [movie_json(str(i), str(i)) for i in range(5)]})

    items = aggregator.fetch_limited(PATH, {"apikey": "k", "limit": "2"}, movies)

    assert len(items) == 5


def test_limited_fetch_skips_malformed_items(aggregator, transport, movies):
    transport.add({"movies": [movie_json("A", "1"), "garbage", {"id": "3"}, movie_json("D", "4")]})

    items = aggregator.fetch_limited(PATH, {"apikey": "k"}, movies)

    assert [m.title for m in items] == ["A", "D"]


def test_total_may_arrive_as_numeric_string(aggregator, transport, movies):
    transport.add({"movies": [], "total": "12"})
    assert aggregator.fetch_paginated(PATH, PARAMS, movies).total == 12


@pytest.mark.parametrize("body", [
    "not json at all",
    "[1, 2, 3]",
    {"total": 4},
    {"movies": {"id": "1"}, "total": 1},
    {"movies": []},
    {"movies": [], "total": "many"},
    {"movies": [], "total": "\u00b2"},
    {"movies": [], "total": 87.5},
    {"movies": [], "total": True},
])
def test_malformed_envelope_raises(aggregator, transport, movies, body):
    transport.add(body)
    with pytest.raises(MalformedResponseError):
        aggregator.fetch_paginated(PATH, PARAMS, movies)


def test_total_is_ignored_when_not_read(aggregator, transport, movies):
    transport.add({"movies": [movie_json()], "total": 156})
    page = aggregator.fetch_paginated(PATH, PARAMS, movies, read_total=False)
    assert page.total == 0
    assert len(page.items) == 1


def test_missing_total_is_not_required_when_not_read(aggregator, transport, movies):
    transport.add({"movies": []})
    assert aggregator.fetch_paginated(PATH, PARAMS, movies, read_total=False).total == 0


def test_whole_number_float_total_is_accepted(aggregator, transport, movies):
    transport.add({"movies": [], "total": 87.0})
    assert aggregator.fetch_paginated(PATH, PARAMS, movies).total == 87


def test_page_reports_raw_row_count(aggregator, transport, movies):
    transport.add({"movies": [movie_json("A", "1"), {"id": "2"}, "junk"], "total": 9})

    page = aggregator.fetch_paginated(PATH, PARAMS, movies)

    assert len(page.items) == 1
    assert page.received == 3


def test_single_item_requires_an_object(aggregator, transport):
    transport.add([movie_json()])
    with pytest.raises(MalformedResponseError):
        aggregator.fetch_single("/api/public/v1.0/movies/1.json", {"apikey": "k"})


def test_single_uri_is_requested_verbatim(aggregator, transport):
    uri = "http://api.rottentomatoes.com/api/public/v1.0/movies/9.json"
    transport.add(movie_json(movie_id="9"))

    data = aggregator.fetch_single_uri(uri)

    assert transport.requested == [uri]
    assert data["id"] == "9"


def test_transport_error_propagates(aggregator, transport, movies):
    transport.add(TransportError("HTTP 503", status_code=503))
    with pytest.raises(TransportError):
        aggregator.fetch_limited(PATH, {"apikey": "k"}, movies)
