"""
Tomatoscope HTTP Transport

The catalog core talks to the network only through the two operations of
the `Transport` protocol. `HttpTransport` is the default implementation on
top of a `requests.Session`; tests substitute a scripted fake.
"""
import logging
import re
from typing import Mapping, Optional, Protocol

import requests

from tomatoscope.core.config import settings
from tomatoscope.core.exceptions import TransportError, URIConstructionError

logger = logging.getLogger(__name__)

_APIKEY_PATTERN = re.compile(r"(apikey=)[^&]*")


def redact(uri: str) -> str:
    """Masks the API key in a request target so it can be logged."""
    return _APIKEY_PATTERN.sub(r"\1***", uri)


class Transport(Protocol):
    def build_uri(self, scheme: Optional[str], host: str, path: str,
                  params: Mapping[str, str]) -> str:
        ...

    def get(self, uri: str) -> str:
        ...


class HttpTransport:
    """
    A `Transport` backed by `requests`.

    No retries are attempted; timeouts are the only network policy applied.
    """

    def __init__(self, timeout: float = settings.HTTP_TIMEOUT_SECONDS,
                 session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def build_uri(self, scheme: Optional[str], host: str, path: str,
                  params: Mapping[str, str]) -> str:
        """
        Composes an absolute request target.

        Args:
            scheme (str, optional): "http" or "https"; None means the configured default.
            host (str): The API host name.
            path (str): Absolute path, starting with "/".
            params (Mapping[str, str]): Query parameters, already rendered as strings.

        Raises:
            URIConstructionError: If the pieces do not form a valid HTTP URL.
        """
        scheme = scheme or settings.ROTTEN_TOMATOES_SCHEME
        if scheme not in ("http", "https"):
            raise URIConstructionError(f"Unsupported scheme: {scheme!r}")
        if not host:
            raise URIConstructionError("A host is required to build a request target.")
        if not path.startswith("/"):
            raise URIConstructionError(f"Path must be absolute: {path!r}")

        prepared = requests.PreparedRequest()
        try:
            prepared.prepare_url(f"{scheme}://{host}{path}", dict(params))
        except (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema) as e:
            raise URIConstructionError(f"Cannot build URI for {path!r}: {e}") from e
        return prepared.url

    def get(self, uri: str) -> str:
        """
        Issues a GET request and returns the response body.

        Raises:
            URIConstructionError: If `uri` is not a usable HTTP URL.
            TransportError: On network failure or a non-success status.
        """
        logger.debug(f"GET {redact(uri)}")
        try:
            response = self.session.get(uri, timeout=self.timeout)
            response.raise_for_status()
        except (requests.exceptions.MissingSchema,
                requests.exceptions.InvalidSchema,
                requests.exceptions.InvalidURL) as e:
            raise URIConstructionError(f"Invalid request target {redact(uri)}: {redact(str(e))}") from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.error(f"HTTP Error for {redact(uri)}: {redact(str(e))}")
            raise TransportError(f"HTTP {status} for {redact(uri)}", uri=uri, status_code=status) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed for {redact(uri)}: {redact(str(e))}")
            raise TransportError(f"Request failed for {redact(uri)}: {redact(str(e))}", uri=uri) from e
        return response.text

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
