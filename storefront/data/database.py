# storefront/data/database.py
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, declarative_base, Session
from sqlalchemy.pool import StaticPool

from storefront.utils.settings import DATABASE_URL, STORE_TIMEOUT_SECONDS
from storefront.utils.retry import db_retry
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _engine_options(url: str) -> dict:
    """Timeouty per wywolanie store: pool, sqlite busy timeout, postgres statement_timeout."""
    backend = make_url(url).get_backend_name()

    if backend == "sqlite":
        options = {
            "connect_args": {
                "check_same_thread": False,
                "timeout": STORE_TIMEOUT_SECONDS,
            },
        }
        # in-memory: jedna wspolna baza dla wszystkich sesji
        if make_url(url).database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool
        return options

    options = {
        "pool_pre_ping": True,
        "pool_timeout": STORE_TIMEOUT_SECONDS,
    }
    if backend == "postgresql":
        options["connect_args"] = {
            "connect_timeout": max(1, int(STORE_TIMEOUT_SECONDS)),
            "options": f"-c statement_timeout={int(STORE_TIMEOUT_SECONDS * 1000)}",
        }
    return options


engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@db_retry()
def init_db() -> None:
    # import modeli zeby SQLAlchemy zarejestrowal je w Base.metadata
    from storefront.data import models  # noqa: F401

    logger.info(f"Creating tables: {list(Base.metadata.tables.keys())}")
    Base.metadata.create_all(bind=engine)
