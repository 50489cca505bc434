import os
import sys
from pathlib import Path as _Path
sys.path.insert(0, str(_Path(__file__).resolve().parents[1] / "src"))

# Cheap argon2 parameters; must be set before gatekeep.auth.passwords is imported.
os.environ.setdefault("GATEKEEP_ARGON2_TIME_COST", "1")
os.environ.setdefault("GATEKEEP_ARGON2_MEMORY_COST", "1024")
os.environ.setdefault("GATEKEEP_ARGON2_PARALLELISM", "1")
os.environ.setdefault("GATEKEEP_SECRET_KEY", "test-secret")

from pathlib import Path

import pytest

from gatekeep.infra.account_repo import AccountRepository
from gatekeep.infra.db import init_db, make_engine, make_sessionmaker
from gatekeep.infra.session_repo import SessionRepository
from gatekeep.services.account_service import AccountService


@pytest.fixture()
def db_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'users.sqlite'}"


@pytest.fixture()
def sm(db_url):
    """Sessionmaker bound to a fresh SQLite database with the schema created."""
    engine = make_engine(db_url)
    init_db(engine)
    yield make_sessionmaker(engine)
    engine.dispose()


@pytest.fixture()
def accounts(sm) -> AccountRepository:
    return AccountRepository(sm)


@pytest.fixture()
def sessions(sm, accounts) -> SessionRepository:
    return SessionRepository(sm, accounts)


@pytest.fixture()
def service(accounts, sessions) -> AccountService:
    return AccountService(accounts, sessions)


@pytest.fixture()
def broken_sm(tmp_path: Path):
    # Parent directory does not exist, so every connect fails.
    engine = make_engine(f"sqlite:///{tmp_path / 'missing' / 'users.sqlite'}")
    yield make_sessionmaker(engine)
    engine.dispose()
