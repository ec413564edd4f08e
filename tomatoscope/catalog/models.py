"""
Tomatoscope Catalog Models (Pydantic v2)

These models mirror the JSON schema of the Rotten Tomatoes API. They are
frozen once built and silently ignore keys the service adds later. Only
`EntityMapper` constructs them from raw payloads.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: Any) -> Any:
    # The service sends "" for unknown years and runtimes.
    if isinstance(value, str) and not value.strip():
        return None
    return value


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class ReleaseDates(_Record):
    theater: Optional[str] = None
    dvd: Optional[str] = None


class Ratings(_Record):
    critics_rating: Optional[str] = None
    critics_score: Optional[int] = None
    audience_rating: Optional[str] = None
    audience_score: Optional[int] = None


class Posters(_Record):
    thumbnail: Optional[str] = None
    profile: Optional[str] = None
    detailed: Optional[str] = None
    original: Optional[str] = None


class AlternateIds(_Record):
    imdb: Optional[str] = None


class MovieLinks(_Record):
    """Links embedded in a movie; `self_link` points at its own detail resource."""

    self_link: Optional[str] = Field(default=None, alias="self")
    alternate: Optional[str] = None
    cast: Optional[str] = None
    clips: Optional[str] = None
    reviews: Optional[str] = None
    similar: Optional[str] = None


class ReviewLinks(_Record):
    review: Optional[str] = None


class CastMember(_Record):
    """An actor as listed in `abridged_cast` or by the cast endpoint."""

    name: str = Field(..., min_length=1)
    id: Optional[str] = None
    characters: List[str] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _normalize_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return _blank_to_none(value)


class Director(_Record):
    name: str = Field(..., min_length=1)


class Movie(_Record):
    """
    A movie as returned by list, search and info endpoints.

    Search results usually carry only `links.self`, never an `id`; either one
    is enough for a detail lookup.
    """

    title: str = Field(..., description="Movie title as published by the service.")
    id: Optional[str] = Field(default=None, description="Rotten Tomatoes movie id.")
    year: Optional[int] = None
    mpaa_rating: Optional[str] = None
    runtime: Optional[int] = Field(default=None, description="Runtime in minutes.")
    critics_consensus: Optional[str] = None
    synopsis: Optional[str] = None
    studio: Optional[str] = None
    genres: List[str] = Field(default_factory=list)
    release_dates: ReleaseDates = Field(default_factory=ReleaseDates)
    ratings: Ratings = Field(default_factory=Ratings)
    posters: Posters = Field(default_factory=Posters)
    abridged_cast: List[CastMember] = Field(default_factory=list)
    abridged_directors: List[Director] = Field(default_factory=list)
    alternate_ids: AlternateIds = Field(default_factory=AlternateIds)
    links: MovieLinks = Field(default_factory=MovieLinks)

    @field_validator("id", mode="before")
    @classmethod
    def _normalize_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return _blank_to_none(value)

    @field_validator("year", "runtime", mode="before")
    @classmethod
    def _blank_numbers(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @property
    def self_link(self) -> Optional[str]:
        return self.links.self_link


class Review(_Record):
    """A critic review from the reviews endpoint."""

    critic: str = Field(..., min_length=1)
    date: Optional[str] = None
    freshness: Optional[str] = None
    publication: Optional[str] = None
    quote: Optional[str] = None
    original_score: Optional[str] = None
    links: ReviewLinks = Field(default_factory=ReviewLinks)


@dataclass(frozen=True)
class ResultPage:
    """
    One page of a paginated endpoint.

    `total` is the envelope's count across all pages, not `len(items)`:
    items dropped during mapping still count towards it. `received` is the
    number of raw rows the server sent on this page, dropped ones included.
    Unpacks as `items, total`.
    """

    items: List[Any]
    total: Optional[int] = None
    received: int = 0

    def __iter__(self):
        return iter((self.items, self.total))
