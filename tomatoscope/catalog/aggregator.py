"""
Envelope parsing and result aggregation.

`ResultAggregator` performs exactly one HTTP round trip per call. It never
loops over pages and never truncates what the server returned.
"""
import json
import logging
from typing import Any, Dict, List, Mapping, Optional

from tomatoscope.catalog.mapper import EntityMapper
from tomatoscope.catalog.models import ResultPage
from tomatoscope.core.config import settings
from tomatoscope.core.exceptions import MalformedResponseError
from tomatoscope.net.transport import Transport, redact

logger = logging.getLogger(__name__)

TOTAL_FIELD = "total"


class ResultAggregator:
    """
    Fetches one endpoint response and turns it into entities.

    Args:
        transport (Transport): The HTTP collaborator.
        host (str): API host used to build request targets.
        scheme (str, optional): URL scheme; None lets the transport decide.
    """

    def __init__(self, transport: Transport, host: str = settings.ROTTEN_TOMATOES_HOST,
                 scheme: Optional[str] = None):
        self.transport = transport
        self.host = host
        self.scheme = scheme

    def fetch_paginated(self, path: str, params: Mapping[str, str], mapper: EntityMapper,
                        field: str = "movies", read_total: bool = True) -> ResultPage:
        """
        Fetches a single page and returns its entities with the envelope total.

        With `read_total=False` the envelope's total is not consulted and the
        page reports 0.

        Raises:
            MalformedResponseError: If the body is not an object with an array
                under `field` and, when read, an integer total.
        """
        uri, envelope = self._fetch_envelope(path, params)
        rows = self._array(envelope, field, uri)
        items = self._collect(rows, mapper, uri)
        total = self._total(envelope, uri) if read_total else 0
        logger.debug(f"{redact(uri)}: {len(items)} item(s) mapped, total={total}")
        return ResultPage(items, total, received=len(rows))

    def fetch_limited(self, path: str, params: Mapping[str, str], mapper: EntityMapper,
                      field: str = "movies") -> List[Any]:
        """Fetches a limit-bounded list; the envelope carries no usable total."""
        uri, envelope = self._fetch_envelope(path, params)
        return self._collect(self._array(envelope, field, uri), mapper, uri)

    def fetch_single(self, path: str, params: Mapping[str, str]) -> Dict[str, Any]:
        """Fetches an endpoint that answers with one bare JSON object."""
        uri = self.transport.build_uri(self.scheme, self.host, path, params)
        return self.fetch_single_uri(uri)

    def fetch_single_uri(self, uri: str) -> Dict[str, Any]:
        """Like `fetch_single`, but against a complete, pre-built request target."""
        return self._parse(self.transport.get(uri), uri)

    def _fetch_envelope(self, path: str, params: Mapping[str, str]):
        uri = self.transport.build_uri(self.scheme, self.host, path, params)
        return uri, self._parse(self.transport.get(uri), uri)

    @staticmethod
    def _parse(body: str, uri: str) -> Dict[str, Any]:
        try:
            data = json.loads(body)
        except (TypeError, ValueError) as e:
            raise MalformedResponseError(f"Response from {redact(uri)} is not valid JSON: {e}", uri) from e
        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Expected a JSON object from {redact(uri)}, got {type(data).__name__}.", uri
            )
        return data

    @staticmethod
    def _array(envelope: Dict[str, Any], field: str, uri: str) -> List[Any]:
        items = envelope.get(field)
        if not isinstance(items, list):
            raise MalformedResponseError(f"Response from {redact(uri)} has no '{field}' array.", uri)
        return items

    @staticmethod
    def _total(envelope: Dict[str, Any], uri: str) -> int:
        total = envelope.get(TOTAL_FIELD)
        if isinstance(total, str):
            try:
                total = int(total.strip()) if total.strip().isascii() else None
            except ValueError:
                total = None
        elif isinstance(total, float) and total.is_integer():
            total = int(total)
        if isinstance(total, int) and not isinstance(total, bool):
            return total
        raise MalformedResponseError(f"Response from {redact(uri)} has no integer '{TOTAL_FIELD}'.", uri)

    @staticmethod
    def _collect(items: List[Any], mapper: EntityMapper, uri: str) -> List[Any]:
        # Malformed rows are dropped; the rest keep their relative order.
        entities = []
        for index, item in enumerate(items):
            result = mapper.map(item)
            if result.ok:
                entities.append(result.entity)
            else:
                logger.warning(f"Skipping item {index} from {redact(uri)}: {result.error}")
        return entities
