"""
Tomatoscope Catalog Client

This module provides the public client for the Rotten Tomatoes v1.0 API.
Each method performs at most one HTTP round trip: it builds the request
parameters, lets `ResultAggregator` fetch and parse the envelope, and maps
the items into `Movie`, `CastMember` or `Review` objects.

Callers that need every page of a paginated listing call the method again
with the next page number. The client holds its configuration (API key and
page size) without any locking; set it up before sharing a client between
threads.
"""
import logging
from typing import List, Optional

from requests.utils import quote

from tomatoscope.catalog import endpoints
from tomatoscope.catalog.aggregator import ResultAggregator
from tomatoscope.catalog.endpoints import EndpointSpec
from tomatoscope.catalog.mapper import EntityMapper
from tomatoscope.catalog.models import CastMember, Movie, ResultPage, Review
from tomatoscope.catalog.params import RequestParamBuilder
from tomatoscope.core.config import settings
from tomatoscope.core.exceptions import ConfigurationError, URIConstructionError
from tomatoscope.net.transport import HttpTransport, Transport

logger = logging.getLogger(__name__)


class ClientConfig:
    """
    API key and page size used by a `CatalogClient`.

    Only the owning client reads or writes it; lower layers receive the
    resolved values as arguments.
    """
    def __init__(self, api_key: Optional[str], page_limit: int = endpoints.DEFAULT_PAGE_LIMIT):
        self.api_key = api_key
        self.page_limit = page_limit


class CatalogClient:
    """
    A client for the Rotten Tomatoes movie catalog.

    Args:
        api_key (str, optional): The API key. None means the configured
            ROTTEN_TOMATOES_API_KEY. A missing or blank key only fails once a
            request is built.
        transport (Transport, optional): HTTP collaborator. Defaults to an
            `HttpTransport`.
        page_limit (int, optional): Items per page for paginated endpoints.
    """

    def __init__(self, api_key: Optional[str] = None, transport: Optional[Transport] = None,
                 page_limit: Optional[int] = None):
        self._config = ClientConfig(api_key if api_key is not None else settings.ROTTEN_TOMATOES_API_KEY)
        self.page_limit = page_limit if page_limit is not None else settings.PAGE_LIMIT
        self.transport = transport or HttpTransport()
        self.params = RequestParamBuilder()
        self.aggregator = ResultAggregator(self.transport)
        self._movies = EntityMapper(Movie)
        self._cast = EntityMapper(CastMember)
        self._reviews = EntityMapper(Review)

    # --- Configuration ---

    @property
    def api_key(self) -> Optional[str]:
        return self._config.api_key

    @api_key.setter
    def api_key(self, value: Optional[str]):
        self._config.api_key = value

    @property
    def page_limit(self) -> int:
        """Number of results per page requested from paginated endpoints."""
        return self._config.page_limit

    @page_limit.setter
    def page_limit(self, value: int):
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigurationError(f"Page limit must be a positive integer, got {value!r}.")
        self._config.page_limit = value

    # --- Search and listings ---

    def search_movies(self, query: str, page: int = 1) -> ResultPage:
        """
        Searches movies by plain-text query.

        Movies returned by search carry a self-link but no id.

        Returns:
            ResultPage: The movies on this page and the total number of matches.
        """
        params = self.params.paginated(self.api_key, page, self.page_limit, q=query)
        return self.aggregator.fetch_paginated(endpoints.SEARCH_MOVIES.resolve(), params, self._movies)

    def get_box_office_movies(self, country: Optional[str] = None, limit: int = 0) -> List[Movie]:
        """
        Top box office earners, sorted by most recent weekend gross.

        Args:
            country (str, optional): ISO 3166-1 alpha-2 code; None means US data.
            limit (int): At most 50; zero or negative leaves it to the server.
        """
        return self._limited(endpoints.BOX_OFFICE_MOVIES, country, limit)

    def get_in_theaters_movies(self, country: Optional[str] = None, page: int = 1) -> ResultPage:
        return self._paginated(endpoints.IN_THEATERS_MOVIES, country, page)

    def get_opening_movies(self, country: Optional[str] = None, limit: int = 0) -> List[Movie]:
        return self._limited(endpoints.OPENING_MOVIES, country, limit)

    def get_upcoming_movies(self, country: Optional[str] = None, page: int = 1) -> ResultPage:
        return self._paginated(endpoints.UPCOMING_MOVIES, country, page)

    def get_top_rentals(self, country: Optional[str] = None, limit: int = 0) -> List[Movie]:
        return self._limited(endpoints.TOP_RENTALS, country, limit)

    def get_current_release_dvds(self, country: Optional[str] = None, page: int = 1) -> ResultPage:
        return self._paginated(endpoints.CURRENT_RELEASE_DVDS, country, page)

    def get_new_release_dvds(self, country: Optional[str] = None, page: int = 1) -> ResultPage:
        return self._paginated(endpoints.NEW_RELEASE_DVDS, country, page)

    def get_upcoming_dvds(self, country: Optional[str] = None, page: int = 1) -> ResultPage:
        return self._paginated(endpoints.UPCOMING_DVDS, country, page)

    # --- Single movie ---

    def get_movie_detail(self, movie: Movie) -> Optional[Movie]:
        """
        Fetches the full record for a movie.

        The movie id takes precedence; without one, the movie's self-link is
        requested as-is. With neither, no request is made.

        Returns:
            Movie or None: The detailed movie, or None if it cannot be resolved
            or the response does not map to a movie.
        """
        if movie.id:
            params = self.params.base(self.api_key)
            data = self.aggregator.fetch_single(self._movie_path(endpoints.MOVIE_INFO, movie.id), params)
        elif movie.self_link:
            data = self.aggregator.fetch_single_uri(movie.self_link)
        else:
            logger.debug(f"Movie '{movie.title}' has neither an id nor a self-link.")
            return None
        return self._movies.map_one(data)

    def find_movie_by_imdb_id(self, imdb_id: str) -> Optional[Movie]:
        """
        Looks a movie up by its IMDb id (e.g. 'tt0031381' or '0031381').

        Returns:
            Movie or None: The movie, or None if the service does not know the id.
        """
        digits = imdb_id[2:] if imdb_id.lower().startswith("tt") else imdb_id
        if not digits:
            raise URIConstructionError(f"Invalid IMDb id: {imdb_id!r}")
        params = self.params.single(self.api_key, type="imdb", id=digits)
        data = self.aggregator.fetch_single(endpoints.MOVIE_ALIAS.resolve(), params)
        if "error" in data:
            logger.debug(f"Movie with IMDb ID '{imdb_id}' not found: {data['error']}")
            return None
        return self._movies.map_one(data)

    def get_similar_movies(self, movie: Movie, country: Optional[str] = None,
                           limit: int = 0) -> List[Movie]:
        """Movies similar to `movie`, which must carry an id."""
        params = self.params.limited(self.api_key, limit, country)
        path = self._movie_path(endpoints.SIMILAR_MOVIES, movie.id)
        return self.aggregator.fetch_limited(path, params, self._movies)

    def get_movie_cast(self, movie_id: str) -> List[CastMember]:
        """The complete cast of a movie."""
        params = self.params.base(self.api_key)
        path = self._movie_path(endpoints.MOVIE_CAST, movie_id)
        return self.aggregator.fetch_limited(path, params, self._cast, field=endpoints.MOVIE_CAST.field)

    def get_movie_reviews(self, movie_id: str, page: int = 1, country: Optional[str] = None,
                          review_type: Optional[str] = None) -> ResultPage:
        """
        Critic reviews for a movie.

        Args:
            movie_id (str): The Rotten Tomatoes movie id.
            page (int): The page of reviews, starting at 1.
            country (str, optional): ISO 3166-1 alpha-2 code; None means US data.
            review_type (str, optional): "all", "top_critic" or "dvd"; None
                leaves it to the server.

        Returns:
            ResultPage: Reviews on this page. The total is always 0: the
            envelope's count is not reported for reviews.
        """
        params = self.params.paginated(self.api_key, page, self.page_limit, country,
                                       review_type=review_type)
        path = self._movie_path(endpoints.MOVIE_REVIEWS, movie_id)
        return self.aggregator.fetch_paginated(path, params, self._reviews,
                                               field=endpoints.MOVIE_REVIEWS.field,
                                               read_total=False)

    # --- Helpers ---

    def _paginated(self, endpoint: EndpointSpec, country: Optional[str], page: int) -> ResultPage:
        params = self.params.paginated(self.api_key, page, self.page_limit, country)
        return self.aggregator.fetch_paginated(endpoint.resolve(), params, self._movies)

    def _limited(self, endpoint: EndpointSpec, country: Optional[str], limit: int) -> List[Movie]:
        params = self.params.limited(self.api_key, limit, country)
        return self.aggregator.fetch_limited(endpoint.resolve(), params, self._movies)

    @staticmethod
    def _movie_path(endpoint: EndpointSpec, movie_id: Optional[str]) -> str:
        if movie_id is None or not str(movie_id).strip():
            raise URIConstructionError(f"A movie id is required for {endpoint.path}")
        return endpoint.resolve(quote(str(movie_id).strip(), safe=""))
