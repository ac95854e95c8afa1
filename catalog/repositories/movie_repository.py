import logging
from datetime import datetime

from sqlalchemy.orm import Session

from catalog.database import transaction
from catalog.models.movie import Movie

logger = logging.getLogger(__name__)


class MovieRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_all(self) -> list[Movie]:
        return self.db.query(Movie).order_by(Movie.id.asc()).all()

    def find_all_by_title(self, title: str) -> list[Movie]:
        return self.db.query(Movie).filter(Movie.title == title).order_by(Movie.id.asc()).all()

    def find_all_by_director(self, director: str) -> list[Movie]:
        return self.db.query(Movie).filter(Movie.director == director).order_by(Movie.id.asc()).all()

    def find_all_by_category(self, category: str) -> list[Movie]:
        return self.db.query(Movie).filter(Movie.category == category).order_by(Movie.id.asc()).all()

    def find_by_id(self, movie_id: int) -> Movie | None:
        return self.db.get(Movie, movie_id)

    def exists_by_id(self, movie_id: int) -> bool:
        return self.db.query(Movie.id).filter(Movie.id == movie_id).first() is not None

    def delete_by_id(self, movie_id: int) -> bool:
        with transaction(self.db):
            movie = self.db.get(Movie, movie_id)
            if movie is None:
                return False
            self.db.delete(movie)

        logger.info('Deleted movie %s', movie_id)
        return True

    def create_movie(
        self,
        title: str,
        director: str,
        category: str,
        screening_from_time: datetime,
        screening_to_time: datetime,
    ) -> int:
        with transaction(self.db):
            movie = Movie(
                title=title,
                director=director,
                category=category,
                screening_from_time=screening_from_time,
                screening_to_time=screening_to_time,
            )
            self.db.add(movie)
            self.db.flush()
            movie_id = movie.id

        logger.info('Created movie %s', movie_id)
        return movie_id

    def update(
        self,
        movie_id: int,
        title: str,
        director: str,
        category: str,
        screening_from_time: datetime,
        screening_to_time: datetime,
    ) -> bool:
        with transaction(self.db):
            movie = self.db.get(Movie, movie_id)
            if movie is None:
                return False
            movie.title = title
            movie.director = director
            movie.category = category
            movie.screening_from_time = screening_from_time
            movie.screening_to_time = screening_to_time

        logger.info('Updated movie %s', movie_id)
        return True

    def update_title(self, movie_id: int, title: str) -> bool:
        with transaction(self.db):
            movie = self.db.get(Movie, movie_id)
            if movie is None:
                return False
            movie.title = title

        logger.info('Updated title of movie %s', movie_id)
        return True
