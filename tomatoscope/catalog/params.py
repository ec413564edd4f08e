"""
Query parameter construction for Rotten Tomatoes requests.

Every value is rendered as a string here, at the request boundary; the rest
of the library works with ints and `None`.
"""
import logging
from typing import Dict, Optional

from tomatoscope.catalog.endpoints import (
    APIKEY_PARAM,
    COUNTRY_PARAM,
    LIMIT_PARAM,
    MAX_LIMIT,
    PAGE_LIMIT_PARAM,
    PAGE_PARAM,
)
from tomatoscope.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def clamp_limit(limit: int) -> Optional[int]:
    """
    Applies the service's limit contract.

    Returns None for a non-positive limit (the parameter is then omitted and
    the server default applies), `MAX_LIMIT` for anything above it, and the
    limit itself otherwise.
    """
    if limit <= 0:
        return None
    if limit > MAX_LIMIT:
        logger.debug(f"Requested limit {limit} clamped to {MAX_LIMIT}.")
        return MAX_LIMIT
    return limit


class RequestParamBuilder:
    """
    Builds the query parameter map for a single catalog call.

    The builder holds no configuration of its own: the API key and page size
    are resolved by the caller and passed in on every call.
    """

    def base(self, api_key: Optional[str]) -> Dict[str, str]:
        """
        Returns the parameters every request carries.

        Raises:
            ConfigurationError: If the API key is missing or blank.
        """
        if not api_key or not api_key.strip():
            raise ConfigurationError("Rotten Tomatoes API key is required.")
        return {APIKEY_PARAM: api_key}

    def paginated(self, api_key: Optional[str], page: int, page_limit: int,
                  country: Optional[str] = None, **extra: Optional[str]) -> Dict[str, str]:
        """Parameters for one page of a paginated endpoint."""
        params = self.base(api_key)
        params[PAGE_PARAM] = str(page)
        params[PAGE_LIMIT_PARAM] = str(page_limit)
        self._add_country(params, country)
        self._add_extra(params, extra)
        return params

    def limited(self, api_key: Optional[str], limit: int,
                country: Optional[str] = None) -> Dict[str, str]:
        """Parameters for a limit-bounded, non-paginated endpoint."""
        params = self.base(api_key)
        clamped = clamp_limit(limit)
        if clamped is not None:
            params[LIMIT_PARAM] = str(clamped)
        self._add_country(params, country)
        return params

    def single(self, api_key: Optional[str], **extra: Optional[str]) -> Dict[str, str]:
        """Parameters for a single-item endpoint."""
        params = self.base(api_key)
        self._add_extra(params, extra)
        return params

    @staticmethod
    def _add_country(params: Dict[str, str], country: Optional[str]) -> None:
        # No country means the service's default locale (US)
        if country and country.strip():
            params[COUNTRY_PARAM] = country

    @staticmethod
    def _add_extra(params: Dict[str, str], extra: Dict[str, Optional[str]]) -> None:
        for name, value in extra.items():
            if value is not None and value != "":
                params[name] = str(value)
