# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from gatekeep.infra.models import Base

log = logging.getLogger(__name__)


def make_engine(url: str) -> Engine:
    """Build the engine for the account database.

    SQLite connections are shared across the server's worker threads and must
    enforce foreign keys, otherwise deleting an account would leave its
    sessions behind.
    """
    is_sqlite = url.startswith("sqlite")
    engine_kwargs: dict[str, object] = {"pool_pre_ping": True}
    if is_sqlite:
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    engine = create_engine(url, **engine_kwargs)

    if is_sqlite:
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):  # type: ignore[no-redef]
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def make_sessionmaker(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine,
        class_=Session,
        autoflush=False,
        expire_on_commit=False,
    )


def init_db(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)
    log.info("Account database ready (%s)", engine.url.render_as_string(hide_password=True))


@contextmanager
def session_scope(sm: sessionmaker[Session]) -> Generator[Session, None, None]:
    """Yield a session and commit, or roll back and re-raise."""
    s: Session = sm()
    try:
        yield s
        s.commit()
    except Exception:
        s.rollback()
        raise
    finally:
        s.close()
