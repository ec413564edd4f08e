"""
Rotten Tomatoes API endpoint definitions.

Each catalog operation has exactly one `EndpointSpec`, fixed here at import
time. Paths are relative to `API_ROOT`.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

API_ROOT = "/api/public/v1.0"

# Parameter names understood by the service
APIKEY_PARAM = "apikey"
QUERY_PARAM = "q"
PAGE_PARAM = "page"
PAGE_LIMIT_PARAM = "page_limit"
LIMIT_PARAM = "limit"
COUNTRY_PARAM = "country"
REVIEW_TYPE_PARAM = "review_type"

# The service never returns more than this many items from a limited list
MAX_LIMIT = 50
DEFAULT_PAGE_LIMIT = 30


class PaginationKind(Enum):
    PAGINATED = "paginated"
    LIMITED = "limited"
    SINGLE_ITEM = "single-item"


@dataclass(frozen=True)
class EndpointSpec:
    """
    Static description of one endpoint.

    Attributes:
        path (str): Path template below `API_ROOT`; `{id}` is the movie id.
        kind (PaginationKind): Which aggregation strategy applies.
        supports_country (bool): Whether a `country` parameter is meaningful.
        field (str): Envelope field holding the result array, if any.
    """
    path: str
    kind: PaginationKind
    supports_country: bool = False
    field: str = "movies"

    def resolve(self, movie_id: Optional[str] = None) -> str:
        """Returns the full request path, interpolating `movie_id` if needed."""
        if "{id}" in self.path:
            return API_ROOT + self.path.format(id=movie_id)
        return API_ROOT + self.path


SEARCH_MOVIES = EndpointSpec("/movies.json", PaginationKind.PAGINATED)
BOX_OFFICE_MOVIES = EndpointSpec("/lists/movies/box_office.json", PaginationKind.LIMITED, True)
IN_THEATERS_MOVIES = EndpointSpec("/lists/movies/in_theaters.json", PaginationKind.PAGINATED, True)
OPENING_MOVIES = EndpointSpec("/lists/movies/opening.json", PaginationKind.LIMITED, True)
UPCOMING_MOVIES = EndpointSpec("/lists/movies/upcoming.json", PaginationKind.PAGINATED, True)
TOP_RENTALS = EndpointSpec("/lists/dvds/top_rentals.json", PaginationKind.LIMITED, True)
CURRENT_RELEASE_DVDS = EndpointSpec("/lists/dvds/current_releases.json", PaginationKind.PAGINATED, True)
NEW_RELEASE_DVDS = EndpointSpec("/lists/dvds/new_releases.json", PaginationKind.PAGINATED, True)
UPCOMING_DVDS = EndpointSpec("/lists/dvds/upcoming.json", PaginationKind.PAGINATED, True)

MOVIE_INFO = EndpointSpec("/movies/{id}.json", PaginationKind.SINGLE_ITEM)
SIMILAR_MOVIES = EndpointSpec("/movies/{id}/similar.json", PaginationKind.LIMITED, True)
MOVIE_CAST = EndpointSpec("/movies/{id}/cast.json", PaginationKind.LIMITED, field="cast")
MOVIE_REVIEWS = EndpointSpec("/movies/{id}/reviews.json", PaginationKind.PAGINATED, True, field="reviews")
MOVIE_ALIAS = EndpointSpec("/movie_alias.json", PaginationKind.SINGLE_ITEM)
