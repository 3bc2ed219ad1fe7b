from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker
import os
import logging

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///./data/db/taskboard.db"

Base = declarative_base()


def build_engine(url: str = DEFAULT_DATABASE_URL) -> Engine:
    """
    Create the engine for the local store.
    SQLite file databases get their directory created first.
    """
    parsed = make_url(url)
    connect_args = {}
    if parsed.get_backend_name() == "sqlite":
        connect_args["check_same_thread"] = False
        if parsed.database and parsed.database != ":memory:":
            db_dir = os.path.dirname(os.path.abspath(parsed.database))
            os.makedirs(db_dir, exist_ok=True)

    engine = create_engine(url, connect_args=connect_args)
    logger.debug(f"Local store engine ready: {parsed.get_backend_name()}")
    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autoflush=False, bind=engine)


def init_db(engine: Engine):
    """Create tables if they don't exist yet. Call on app startup."""
    from . import models  # noqa: F401  (registers tables on Base)
    Base.metadata.create_all(bind=engine)
