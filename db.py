from __future__ import annotations

import logging
from functools import lru_cache
from typing import Iterator, Optional

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from config import settings

import models  # noqa: F401  (registers tables on SQLModel.metadata)

_log = logging.getLogger(__name__)


def make_engine(url: str, echo: bool = False, **kwargs) -> Engine:
    connect_args = kwargs.pop("connect_args", {})
    if url.startswith("sqlite"):
        # FastAPI serves sync routes from a threadpool
        connect_args.setdefault("check_same_thread", False)
    return create_engine(url, echo=echo, connect_args=connect_args, **kwargs)


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    return make_engine(settings.database_url, echo=settings.sql_echo)


def init_db(engine: Optional[Engine] = None) -> None:
    engine = engine or get_engine()
    SQLModel.metadata.create_all(engine)
    _log.info("database ready url=%s", engine.url.render_as_string(hide_password=True))


def get_session() -> Iterator[Session]:
    """FastAPI dependency: one session per request."""
    with Session(get_engine()) as session:
        yield session
