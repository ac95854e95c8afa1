"""Movie model definitions."""

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import validates

from catalog.database import ID_TYPE, Base
from catalog.models.constraints import require_text, require_utc_timestamp

TITLE_MAX_LENGTH = 256
DIRECTOR_MAX_LENGTH = 128
CATEGORY_MAX_LENGTH = 64


class Movie(Base):
    """Represents a catalog movie and its screening window."""
    __tablename__ = "movies"

    id = Column(ID_TYPE, primary_key=True, index=True)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False, index=True)
    director = Column(String(DIRECTOR_MAX_LENGTH), nullable=False, index=True)
    category = Column(String(CATEGORY_MAX_LENGTH), nullable=False, index=True)
    screening_from_time = Column(DateTime(timezone=True), nullable=False)
    screening_to_time = Column(DateTime(timezone=True), nullable=False)

    @validates('title')
    def validate_title(self, key, value):
        return require_text('Movie', key, value, TITLE_MAX_LENGTH)

    @validates('director')
    def validate_director(self, key, value):
        return require_text('Movie', key, value, DIRECTOR_MAX_LENGTH)

    @validates('category')
    def validate_category(self, key, value):
        return require_text('Movie', key, value, CATEGORY_MAX_LENGTH)

    @validates('screening_from_time', 'screening_to_time')
    def validate_screening_time(self, key, value):
        return require_utc_timestamp('Movie', key, value)
