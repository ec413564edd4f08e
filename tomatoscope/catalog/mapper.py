"""
Per-item conversion of JSON objects into catalog entities.
"""
import logging
from typing import Any, Generic, NamedTuple, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from tomatoscope.core.exceptions import MappingError

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=BaseModel)


class MappingResult(NamedTuple):
    """Outcome of mapping one item: exactly one of `entity` and `error` is set."""

    entity: Optional[Any]
    error: Optional[MappingError]

    @property
    def ok(self) -> bool:
        return self.error is None


class EntityMapper(Generic[EntityT]):
    """
    Converts raw JSON objects into one entity type.

    A failed conversion is reported as a value, never raised, so the caller
    decides what to do with the rest of the batch.
    """

    def __init__(self, model: Type[EntityT]):
        self.model = model

    def map(self, payload: Any) -> MappingResult:
        """Returns a `MappingResult` holding the entity or the reason it failed."""
        if not isinstance(payload, dict):
            error = MappingError(
                f"Expected a JSON object for {self.model.__name__}, got {type(payload).__name__}."
            )
            return MappingResult(None, error)
        try:
            return MappingResult(self.model.model_validate(payload), None)
        except ValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            error = MappingError(f"Invalid {self.model.__name__} ({fields}): {e.error_count()} error(s)")
            return MappingResult(None, error)

    def map_one(self, payload: Any) -> Optional[EntityT]:
        """Returns the mapped entity, or None if the payload could not be mapped."""
        result = self.map(payload)
        if not result.ok:
            logger.warning(f"Could not map {self.model.__name__}: {result.error}")
        return result.entity
