from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from parkinglot.config import settings

connect_args = {}
if settings.DATABASE_URL.startswith('sqlite'):
    connect_args['check_same_thread'] = False

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db(bind=None) -> None:
    """Create tables that don't exist yet."""
    from parkinglot import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
