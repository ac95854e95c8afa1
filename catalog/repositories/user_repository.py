import logging

from sqlalchemy.orm import Session

from catalog.database import transaction
from catalog.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Data access for user profiles. There is no delete operation."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def find_all(self) -> list[User]:
        return self.db.query(User).order_by(User.id.asc()).all()

    def find_all_by_username(self, username: str) -> list[User]:
        return self.db.query(User).filter(User.username == username).order_by(User.id.asc()).all()

    def find_all_by_mail(self, mail: str) -> list[User]:
        return self.db.query(User).filter(User.mail == mail).order_by(User.id.asc()).all()

    def find_all_by_address(self, address: str) -> list[User]:
        return self.db.query(User).filter(User.address == address).order_by(User.id.asc()).all()

    def create_user(self, username: str, mail: str, address: str) -> int:
        with transaction(self.db):
            user = User(username=username, mail=mail, address=address)
            self.db.add(user)
            self.db.flush()
            user_id = user.id

        logger.info('Created user %s', user_id)
        return user_id

    def update_username(self, user_id: int, username: str) -> bool:
        with transaction(self.db):
            user = self.db.get(User, user_id)
            if user is None:
                return False
            user.username = username

        logger.info('Updated username of user %s', user_id)
        return True

    def update(self, user_id: int, username: str, mail: str, address: str) -> bool:
        with transaction(self.db):
            user = self.db.get(User, user_id)
            if user is None:
                return False
            user.username = username
            user.mail = mail
            user.address = address

        logger.info('Updated user %s', user_id)
        return True
