# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from gatekeep.errors import DuplicateAccount, StoreUnavailable
from gatekeep.infra.db import session_scope
from gatekeep.infra.models import AccountRow

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Account:
    id: int
    email: str
    password_hash: str
    agreed_to_terms: bool


def _to_account(row: AccountRow) -> Account:
    return Account(
        id=int(row.id),
        email=row.email,
        password_hash=row.password_hash,
        agreed_to_terms=bool(row.agreed_to_terms),
    )


class AccountRepository:
    """Accounts keyed by id and by unique email."""

    def __init__(self, sm: sessionmaker[Session]):
        self._sm = sm

    def create(self, email: str, password_hash: str, agreed_to_terms: bool) -> Account:
        if not email:
            raise ValueError("email_blank")
        if not password_hash:
            raise ValueError("password_hash_blank")

        # The unique index on email is the duplicate check; no read-then-write race.
        try:
            with session_scope(self._sm) as s:
                row = AccountRow(email=email, password_hash=password_hash, agreed_to_terms=bool(agreed_to_terms))
                s.add(row)
                s.flush()
                return _to_account(row)
        except IntegrityError as exc:
            if self.find_by_email(email) is not None:
                raise DuplicateAccount() from exc
            log.error("Account insert violated a constraint other than email uniqueness: %s", exc)
            raise StoreUnavailable("account insert failed") from exc
        except SQLAlchemyError as exc:
            log.error("Account insert failed: %s", exc)
            raise StoreUnavailable("account insert failed") from exc

    def find_by_email(self, email: str) -> Optional[Account]:
        if not email:
            return None
        try:
            with session_scope(self._sm) as s:
                row = s.scalars(select(AccountRow).where(AccountRow.email == email)).one_or_none()
                return _to_account(row) if row is not None else None
        except SQLAlchemyError as exc:
            log.error("Account lookup by email failed: %s", exc)
            raise StoreUnavailable("account lookup failed") from exc

    def get(self, account_id: int) -> Optional[Account]:
        try:
            with session_scope(self._sm) as s:
                row = s.get(AccountRow, int(account_id))
                return _to_account(row) if row is not None else None
        except SQLAlchemyError as exc:
            log.error("Account lookup by id failed: %s", exc)
            raise StoreUnavailable("account lookup failed") from exc
