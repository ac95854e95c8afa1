import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import BigInteger, Integer, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from catalog.core import config


logger = logging.getLogger(__name__)


def build_engine(url: str, **kwargs):
    if url.startswith("sqlite"):
        # sessions may be opened and closed on different worker threads
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, **kwargs)


engine = build_engine(config.DATABASE_URL, echo=config.SQL_ECHO)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

# 64-bit primary keys; sqlite only autoincrements a plain INTEGER primary key
ID_TYPE = BigInteger().with_variant(Integer, "sqlite")


def init_database() -> None:
    # register the mapped tables on Base.metadata
    from catalog.models import movie, user  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(session: Session) -> Iterator[Session]:
    """Run the enclosed block as one unit of work.

    Commits when the block completes, rolls back and re-raises on any error.
    Closing the session stays with whoever opened it.
    """
    try:
        yield session
        session.commit()
    except Exception:
        logger.debug('Rolling back transaction', exc_info=True)
        session.rollback()
        raise
