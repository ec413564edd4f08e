import json
from urllib.parse import parse_qs, urlsplit

import pytest

from tomatoscope.catalog.client import CatalogClient
from tomatoscope.net.transport import HttpTransport


class FakeTransport:
    """Scripted transport: records every request and replays canned bodies."""

    def __init__(self):
        self.builder = HttpTransport()
        self.requested = []
        self.responses = []

    def add(self, body):
        """Queues a response; dicts are JSON-encoded, exceptions are raised."""
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        self.responses.append(body)

    def build_uri(self, scheme, host, path, params):
        return self.builder.build_uri(scheme, host, path, params)

    def get(self, uri):
        self.requested.append(uri)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def last_path(self):
        return urlsplit(self.requested[-1]).path

    @property
    def last_params(self):
        query = parse_qs(urlsplit(self.requested[-1]).query)
        return {name: values[0] for name, values in query.items()}


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(transport):
    return CatalogClient(api_key="test-key", transport=transport)


def movie_json(title="Toy Story 3", movie_id="770672122", **extra):
    data = {
        "id": movie_id,
        "title": title,
        "year": 2010,
        "mpaa_rating": "G",
        "runtime": 103,
        "release_dates": {"theater": "2010-06-18", "dvd": "2010-11-02"},
        "ratings": {"critics_rating": "Certified Fresh", "critics_score": 99,
                    "audience_rating": "Upright", "audience_score": 91},
        "abridged_cast": [{"name": "Tom Hanks", "id": "162655641", "characters": ["Woody"]}],
        "alternate_ids": {"imdb": "0435761"},
        "links": {"self": f"http://api.rottentomatoes.com/api/public/v1.0/movies/{movie_id}.json"},
    }
    if movie_id is None:
        del data["id"]
    data.update(extra)
    return data
