"""
Mflix API - Document Models
============================

What:  Pydantic models for the documents written to the store.
How:   FastAPI parses POST/PUT request bodies into these models; resource
       services call `to_document()` to get the dict that is inserted or used
       as the full replacement on update.
Who:   Used by route handlers (request bodies) and resource services.

Field names follow the `sample_mflix` dataset (`movie_id`, `street1`, ...).
Store-managed fields (`_id`, and `movie_id` for comments) are never read from
the body.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StoreDocument(BaseModel):
    """Base for writable documents."""

    model_config = ConfigDict(extra="ignore")

    def to_document(self) -> Dict[str, Any]:
        """Dict written to the store; unset optional fields are omitted."""
        return self.model_dump(exclude_none=True)


# ══════════════════════════════════════════════════════════════════════════
# Movies
# ══════════════════════════════════════════════════════════════════════════


class MovieDocument(StoreDocument):
    """A movie in the `movies` collection."""

    title: str = Field(min_length=1, description="Movie title")
    year: Optional[int] = Field(default=None, ge=1870, le=2100, description="Release year")
    director: Optional[str] = Field(default=None, description="Director name")
    genre: List[str] = Field(default_factory=list, description="Ordered list of genres")
    plot: Optional[str] = Field(default=None, description="Short plot summary")

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "title": "Warhammer New Days",
                "year": 2026,
                "director": "Arbi Tazeur",
                "genre": ["action", "drame"],
                "plot": "...The last day of Humanity has come",
            }
        },
    )


# ══════════════════════════════════════════════════════════════════════════
# Comments
# ══════════════════════════════════════════════════════════════════════════


class CommentDocument(StoreDocument):
    """
    A comment in the `comments` collection.

    `movie_id` is absent on purpose: the parent reference always comes from
    the request path and is added by the comment service.
    """

    name: str = Field(min_length=1, description="Author display name")
    email: str = Field(min_length=3, description="Author email")
    text: str = Field(min_length=1, description="Comment body")
    date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        validate_default=True,
        description="When the comment was written (defaults to now, UTC)",
    )

    @field_validator("date")
    @classmethod
    def normalise_date(cls, value: datetime) -> datetime:
        """
        Bring the date to what BSON stores: UTC, millisecond precision.

        A naive value is taken as UTC; an offset is converted. The echoed
        document then equals what a later read returns.
        """
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.astimezone(timezone.utc)
        return value.replace(microsecond=value.microsecond // 1000 * 1000)

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "name": "Arbi Tazeur",
                "email": "arbi.tazeur@fqdn.com",
                "text": "Film incroyable, un lore de qualité totalement respecté.",
                "date": "2025-04-11T08:57:05.000Z",
            }
        },
    )


# ══════════════════════════════════════════════════════════════════════════
# Theaters
# ══════════════════════════════════════════════════════════════════════════


class Address(BaseModel):
    street1: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zipcode: str = Field(min_length=1)


class GeoPoint(BaseModel):
    """GeoJSON point; coordinates are [longitude, latitude]."""

    type: Literal["Point"] = "Point"
    coordinates: List[float] = Field(min_length=2, max_length=2)


class Location(BaseModel):
    address: Address
    geo: GeoPoint


class TheaterDocument(StoreDocument):
    """A theater in the `theaters` collection."""

    theaterId: Optional[int] = Field(default=None, ge=0, description="Dataset theater number")
    location: Location

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "location": {
                    "address": {
                        "street1": "340 W Market",
                        "city": "Bloomington",
                        "state": "MN",
                        "zipcode": "55425",
                    },
                    "geo": {"type": "Point", "coordinates": [-93.24565, 44.85466]},
                }
            }
        },
    )
