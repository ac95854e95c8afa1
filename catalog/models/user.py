"""User model definitions."""

from sqlalchemy import Column, String
from sqlalchemy.orm import validates

from catalog.database import ID_TYPE, Base
from catalog.models.constraints import require_mail, require_text

USERNAME_MAX_LENGTH = 128
MAIL_MAX_LENGTH = 254
ADDRESS_MAX_LENGTH = 256


class User(Base):
    """Represents a user profile."""
    __tablename__ = "users"

    id = Column(ID_TYPE, primary_key=True, index=True)
    username = Column(String(USERNAME_MAX_LENGTH), unique=True, nullable=False, index=True)
    mail = Column(String(MAIL_MAX_LENGTH), nullable=False, index=True)
    address = Column(String(ADDRESS_MAX_LENGTH), nullable=False)

    @validates('username')
    def validate_username(self, key, value):
        return require_text('User', key, value, USERNAME_MAX_LENGTH)

    @validates('mail')
    def validate_mail(self, key, value):
        return require_mail('User', key, value, MAIL_MAX_LENGTH)

    @validates('address')
    def validate_address(self, key, value):
        return require_text('User', key, value, ADDRESS_MAX_LENGTH)
