import importlib.util
from pathlib import Path
from urllib.parse import parse_qs, urlsplit

import pandas as pd
import pytest

from tomatoscope.catalog.client import CatalogClient

from conftest import movie_json

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "export_listing.py"


@pytest.fixture(scope="module")
def export_listing():
    spec = importlib.util.spec_from_file_location("export_listing", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def exporter(export_listing, transport):
    client = CatalogClient(api_key="test-key", transport=transport, page_limit=2)
    return export_listing.ListingExporter("in_theaters", client=client)


def requested_pages(transport):
    return [parse_qs(urlsplit(uri).query)["page"][0] for uri in transport.requested]


def test_stops_once_total_is_reached(exporter, transport):
    broken = movie_json("D", "4")
    del broken["title"]
    transport.add({"movies": [movie_json("A", "1"), movie_json("B", "2")], "total": 5})
    transport.add({"movies": [movie_json("C", "3"), broken], "total": 5})
    transport.add({"movies": [movie_json("E", "5")], "total": 5})

    movies = exporter.collect()

    assert [m.title for m in movies] == ["A", "B", "C", "E"]
    assert requested_pages(transport) == ["1", "2", "3"]


def test_stops_on_empty_page(exporter, transport):
    transport.add({"movies": [movie_json("A", "1"), movie_json("B", "2")], "total": 10})
    transport.add({"movies": [], "total": 10})

    movies = exporter.collect()

    assert [m.title for m in movies] == ["A", "B"]
    assert requested_pages(transport) == ["1", "2"]


def test_stops_after_max_pages(exporter, transport):
    transport.add({"movies": [movie_json("A", "1"), movie_json("B", "2")], "total": 10})

    movies = exporter.collect(max_pages=1)

    assert len(movies) == 2
    assert requested_pages(transport) == ["1"]


def test_counts_rows_actually_sent_when_server_sends_fewer(exporter, transport):
    exporter.client.page_limit = 5
    transport.add({"movies": [movie_json("A", "1"), movie_json("B", "2")], "total": 4})
    transport.add({"movies": [movie_json("C", "3"), movie_json("D", "4")], "total": 4})

    movies = exporter.collect(country="GB")

    assert [m.title for m in movies] == ["A", "B", "C", "D"]
    assert requested_pages(transport) == ["1", "2"]
    assert transport.last_params["country"] == "GB"


def test_run_writes_csv(exporter, transport, tmp_path):
    transport.add({"movies": [movie_json("Toy Story 3", "770672122")], "total": 1})
    output_file = tmp_path / "in_theaters.csv"

    exporter.run(output_file)

    df = pd.read_csv(output_file)
    assert list(df["title"]) == ["Toy Story 3"]
    assert df.loc[0, "critics_score"] == 99
