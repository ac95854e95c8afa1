import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from catalog.core import config
from catalog.database import init_database
from catalog.routes import movie_routes

logging.basicConfig(level=config.LOG_LEVEL)

config.validate_runtime_config()

app = FastAPI(title='Movie Catalog API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_database() -> None:
    try:
        init_database()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL.')


@app.middleware('http')
async def negotiate_movies_media_type(request: Request, call_next):
    response = await call_next(request)
    if (
        request.url.path.startswith('/movies')
        and response.status_code < 400
        and response.headers.get('content-type', '').startswith('application/json')
    ):
        response.headers['content-type'] = movie_routes.response_media_type(request.headers.get('accept', ''))
    return response


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'detail': jsonable_encoder(exc.errors())},
    )


@app.get('/')
def root():
    return {'status': 'Movie Catalog API Running'}


app.include_router(movie_routes.router, prefix='/movies')
