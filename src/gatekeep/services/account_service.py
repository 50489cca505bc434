# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from typing import List

from gatekeep.auth.passwords import hash_password, verify_dummy, verify_password
from gatekeep.core.rules import check_complexity, check_terms, check_username
from gatekeep.errors import DuplicateAccount, InvalidCredentials, SessionNotFound, ValidationFailed
from gatekeep.infra.account_repo import Account, AccountRepository
from gatekeep.infra.db import init_db, make_engine, make_sessionmaker
from gatekeep.infra.session_repo import SessionRepository

log = logging.getLogger(__name__)


def signup_violations(email: str, password: str, agreed_to_terms: bool) -> List[str]:
    """All rule violations for a signup attempt, in form order."""
    return check_terms(agreed_to_terms) + check_username(email) + check_complexity(password)


class AccountService:
    """Signup, signin and session resolution over the account stores."""

    def __init__(self, accounts: AccountRepository, sessions: SessionRepository):
        self.accounts = accounts
        self.sessions = sessions

    def signup(self, email: str, password: str, agreed_to_terms: bool) -> str:
        reasons = signup_violations(email, password, agreed_to_terms)
        if reasons:
            log.info("Signup rejected: %d rule violation(s)", len(reasons))
            raise ValidationFailed(reasons)

        try:
            account = self.accounts.create(email, hash_password(password), agreed_to_terms)
        except DuplicateAccount:
            log.info("Signup rejected: duplicate account")
            raise

        log.info("Account %s created", account.id)
        return self._issue(account)

    def signin(self, email: str, password: str) -> str:
        account = self.accounts.find_by_email(email)
        if account is None:
            verify_dummy(password)
            log.debug("Signin miss: no account for the given email")
            log.info("Signin rejected")
            raise InvalidCredentials()

        if not verify_password(account.password_hash, password):
            log.debug("Signin mismatch for account %s", account.id)
            log.info("Signin rejected")
            raise InvalidCredentials()

        return self._issue(account)

    def resolve_session(self, token: str) -> Account:
        account = self.sessions.get(token) if token else None
        if account is None:
            raise SessionNotFound()
        return account

    def _issue(self, account: Account) -> str:
        token = self.sessions.create(account.id)
        log.info("Session issued for account %s", account.id)
        return token


def build_account_service(database_url: str) -> AccountService:
    """Wire the stores for `database_url` into a ready AccountService."""
    engine = make_engine(database_url)
    init_db(engine)
    sm = make_sessionmaker(engine)
    accounts = AccountRepository(sm)
    return AccountService(accounts, SessionRepository(sm, accounts))
