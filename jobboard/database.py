# jobboard/database.py
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import sessionmaker, declarative_base

from jobboard.config import DATABASE_URL, SQL_ECHO

Base = declarative_base()


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def _register_sqlite_functions(dbapi_conn, connection_record) -> None:
    # SQLite's built-in lower() (and so ILIKE) only folds ASCII
    dbapi_conn.create_function("lower", 1, _unicode_lower, deterministic=True)


def make_engine(database_url: str, echo: bool = False) -> Engine:
    """Build an engine; SQLite connections are shared across worker threads."""
    url = make_url(database_url)
    is_sqlite = url.drivername.startswith("sqlite")

    connect_args = {}
    # Page and count queries run on separate threads
    if is_sqlite:
        connect_args["check_same_thread"] = False

    engine = create_engine(
        database_url,
        echo=echo,
        connect_args=connect_args,
        pool_pre_ping=True,  # avoid stale connections on resume
    )
    if is_sqlite:
        event.listen(engine, "connect", _register_sqlite_functions)
    return engine


def make_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=bind)


engine = make_engine(DATABASE_URL, echo=SQL_ECHO)
SessionLocal = make_session_factory(engine)
