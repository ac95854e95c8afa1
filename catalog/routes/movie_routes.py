import logging
import re
from contextlib import contextmanager
from datetime import datetime

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Query, Request, status
from sqlalchemy.orm import Session

from catalog.core.errors import ConstraintViolationError, is_constraint_violation, root_cause
from catalog.database import get_db
from catalog.dto.movie_dto import MovieDto, has_required_fields, transform, transform_all
from catalog.repositories.movie_repository import MovieRepository

logger = logging.getLogger(__name__)

router = APIRouter(tags=['movies'])

MOVIES_MEDIA_TYPE = 'application/vnd.catalog.movies+json'
MOVIES_JSON = f'{MOVIES_MEDIA_TYPE};charset=UTF-8;version=1'
BASE_JSON = 'application/json;charset=UTF-8'
JSON_MEDIA_TYPES = {MOVIES_MEDIA_TYPE, 'application/json'}
TEXT_MEDIA_TYPE = 'text/plain'

ID_PARAM = 'The numeric id of the movie'

ID_PATTERN = re.compile(r'[+-]?[0-9]+')
MIN_ID = -(2 ** 63)
MAX_ID = 2 ** 63 - 1


def get_movie_repository(db: Session = Depends(get_db)) -> MovieRepository:
    return MovieRepository(db)


def _media_type(request: Request) -> str:
    return request.headers.get('content-type', '').split(';', 1)[0].strip().lower()


def response_media_type(accept: str) -> str:
    """Answer with the versioned movies type only when the client lists it."""
    accepted = {item.split(';', 1)[0].strip().lower() for item in accept.split(',')}
    return MOVIES_JSON if MOVIES_MEDIA_TYPE in accepted else 'application/json'


def require_json_body(request: Request) -> None:
    if _media_type(request) not in JSON_MEDIA_TYPES:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=f'Expected one of: {MOVIES_JSON}, {BASE_JSON}.',
        )


async def read_title_body(request: Request) -> str:
    if _media_type(request) != TEXT_MEDIA_TYPE:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=f'Expected {TEXT_MEDIA_TYPE}.',
        )

    body = await request.body()
    try:
        return body.decode('utf-8')
    except UnicodeDecodeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Title must be UTF-8 text.',
        ) from exc


def parse_id(value: str | None) -> int | None:
    if value is None or not ID_PATTERN.fullmatch(value):
        return None

    parsed = int(value)
    if parsed < MIN_ID or parsed > MAX_ID:
        return None
    return parsed


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


@contextmanager
def constraint_violations_as_bad_request():
    try:
        yield
    except Exception as exc:
        if not is_constraint_violation(exc):
            raise

        cause = root_cause(exc)
        logger.info('Rejected movie write: %s', cause)
        detail = str(cause) if isinstance(cause, ConstraintViolationError) else 'Movie violates a data constraint.'
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail) from exc


@router.get(
    '',
    response_model=list[MovieDto],
    summary='Get all the movies',
    description='Filters by the first non-blank of title, director and category. '
                'Screening times are accepted but not applied.',
)
def get_movies(
    title: str | None = Query(default=None, description='The title of the movie'),
    director: str | None = Query(default=None, description='The name of the director'),
    category: str | None = Query(default=None, description='The category'),
    screening_from_time: datetime | None = Query(
        default=None,
        alias='screeningFromTime',
        description='The start of the screening',
    ),
    screening_to_time: datetime | None = Query(
        default=None,
        alias='screeningToTime',
        description='The end of the screening',
    ),
    crud: MovieRepository = Depends(get_movie_repository),
):
    if screening_from_time is not None or screening_to_time is not None:
        logger.debug('Screening time parameters are accepted but not applied as filters')

    if not is_blank(title):
        movies = crud.find_all_by_title(title)
    elif not is_blank(director):
        movies = crud.find_all_by_director(director)
    elif not is_blank(category):
        movies = crud.find_all_by_category(category)
    else:
        movies = crud.find_all()

    return transform_all(movies)


@router.post(
    '',
    response_model=int,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_json_body)],
    summary='Create a movie',
    response_description='The id of the newly created movie',
)
def create_movie(
    dto: MovieDto = Body(description='Title, director, category, screeningFromTime and screeningToTime of the movie'),
    crud: MovieRepository = Depends(get_movie_repository),
):
    if dto.movie_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Cannot specify an id for a new movie.',
        )

    if not has_required_fields(dto):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Title, director, category, screeningFromTime and screeningToTime are required.',
        )

    with constraint_violations_as_bad_request():
        movie_id = crud.create_movie(
            dto.title,
            dto.director,
            dto.category,
            dto.screening_from_time,
            dto.screening_to_time,
        )

    return movie_id


@router.get('/{movie_id}', response_model=MovieDto, summary='Get a single movie specified by id')
def get_movie(
    movie_id: str = Path(description=ID_PARAM),
    crud: MovieRepository = Depends(get_movie_repository),
):
    parsed_id = parse_id(movie_id)
    movie = crud.find_by_id(parsed_id) if parsed_id is not None else None

    if movie is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Movie not found.')

    return transform(movie)


@router.put(
    '/{movie_id}',
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_json_body)],
    summary='Update an existing movie entry',
)
def update_movie(
    movie_id: str = Path(description=ID_PARAM),
    dto: MovieDto = Body(description='The movie that will replace the old one. Its id cannot change.'),
    crud: MovieRepository = Depends(get_movie_repository),
):
    # the id is a string on the wire, so an unusable one is reported as a missing resource
    dto_id = parse_id(dto.movie_id)
    if dto_id is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Movie not found.')

    if dto.movie_id != movie_id:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail='The id of a movie cannot be changed.',
        )

    if not crud.exists_by_id(dto_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Movie not found.')

    if not has_required_fields(dto):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Title, director, category, screeningFromTime and screeningToTime are required.',
        )

    with constraint_violations_as_bad_request():
        crud.update(
            dto_id,
            dto.title,
            dto.director,
            dto.category,
            dto.screening_from_time,
            dto.screening_to_time,
        )


@router.put(
    '/{movie_id}/title',
    status_code=status.HTTP_204_NO_CONTENT,
    summary='Update the title of an existing movie',
    description='The request body is the new title as text/plain.',
)
def update_title(
    movie_id: str = Path(description=ID_PARAM),
    title: str = Depends(read_title_body),
    crud: MovieRepository = Depends(get_movie_repository),
):
    parsed_id = parse_id(movie_id)
    if parsed_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Invalid movie id.')

    if not crud.exists_by_id(parsed_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Movie not found.')

    with constraint_violations_as_bad_request():
        crud.update_title(parsed_id, title)


@router.delete('/{movie_id}', status_code=status.HTTP_204_NO_CONTENT, summary='Delete a movie with the given id')
def delete_movie(
    movie_id: str = Path(description=ID_PARAM),
    crud: MovieRepository = Depends(get_movie_repository),
):
    parsed_id = parse_id(movie_id)
    if parsed_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Invalid movie id.')

    if not crud.exists_by_id(parsed_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Movie not found.')

    crud.delete_by_id(parsed_id)
