# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
import uuid
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from gatekeep.errors import StoreUnavailable
from gatekeep.infra.account_repo import Account, AccountRepository
from gatekeep.infra.db import session_scope
from gatekeep.infra.models import SessionRow

log = logging.getLogger(__name__)


class SessionRepository:
    """Server-side sessions: opaque token -> account id."""

    def __init__(self, sm: sessionmaker[Session], accounts: AccountRepository):
        self._sm = sm
        self._accounts = accounts

    def create(self, account_id: int) -> str:
        token = str(uuid.uuid4())
        try:
            with session_scope(self._sm) as s:
                s.add(SessionRow(session_id=token, user_id=int(account_id)))
        except SQLAlchemyError as exc:
            log.error("Session insert failed for account %s: %s", account_id, exc)
            raise StoreUnavailable("session insert failed") from exc
        return token

    def get(self, token: str) -> Optional[Account]:
        if not token:
            return None
        try:
            with session_scope(self._sm) as s:
                row = s.get(SessionRow, token)
                account_id = int(row.user_id) if row is not None else None
        except SQLAlchemyError as exc:
            log.error("Session lookup failed: %s", exc)
            raise StoreUnavailable("session lookup failed") from exc
        if account_id is None:
            return None
        return self._accounts.get(account_id)
