# infra/db/base.py
from __future__ import annotations
import logging
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from infra.path import default_db_path

logger = logging.getLogger(__name__)

Base = declarative_base()


def default_db_url() -> str:
    db_path = default_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{db_path.as_posix()}"


def make_engine(db_url: Optional[str] = None, *, create_schema: bool = True) -> Engine:
    url = db_url or default_db_url()
    logger.info("Using database at: %s", url)
    engine = create_engine(url, echo=False, future=True)
    if create_schema:
        # registers the ORM tables on Base.metadata
        import infra.db.models  # noqa: F401

        Base.metadata.create_all(bind=engine)
    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
