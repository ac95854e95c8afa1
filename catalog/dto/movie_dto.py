"""Wire representation of movies and conversion from persisted entities."""

from datetime import datetime
from typing import Iterable

from pydantic import BaseModel, Field, field_validator

from catalog.models.constraints import as_utc
from catalog.models.movie import Movie


class MovieDto(BaseModel):
    # Every field is optional on the wire; the controller decides which
    # status code a missing field maps to.
    movie_id: str | None = Field(default=None, alias='movieId')
    title: str | None = None
    director: str | None = None
    category: str | None = None
    screening_from_time: datetime | None = Field(default=None, alias='screeningFromTime')
    screening_to_time: datetime | None = Field(default=None, alias='screeningToTime')

    class Config:
        populate_by_name = True

    @field_validator('movie_id', mode='before')
    @classmethod
    def accept_numeric_movie_id(cls, value):
        # new ids are returned as JSON numbers and may be sent back that way
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


def has_required_fields(dto: MovieDto) -> bool:
    return None not in (
        dto.title,
        dto.director,
        dto.category,
        dto.screening_from_time,
        dto.screening_to_time,
    )


def transform(movie: Movie) -> MovieDto:
    # sqlite hands timestamps back without an offset; they are stored as UTC
    return MovieDto(
        movie_id=str(movie.id),
        title=movie.title,
        director=movie.director,
        category=movie.category,
        screening_from_time=as_utc(movie.screening_from_time),
        screening_to_time=as_utc(movie.screening_to_time),
    )


def transform_all(movies: Iterable[Movie]) -> list[MovieDto]:
    return [transform(movie) for movie in movies]
