# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import os
from typing import Optional

from fastapi import Request

from gatekeep.auth.session import COOKIE_NAME, verify_session
from gatekeep.errors import SessionNotFound
from gatekeep.infra.account_repo import Account
from gatekeep.services.account_service import AccountService

SIGNIN_REQUIRED_MSG = "Please sign in to continue."


class LoginRequired(Exception):
    """Raised by `require_account`; the app turns it into a redirect to /signin."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def account_service(request: Request) -> AccountService:
    return request.app.state.accounts


def load_account_from_request(request: Request) -> Optional[Account]:
    token = verify_session(request.cookies.get(COOKIE_NAME, ""))
    if not token:
        return None
    try:
        return account_service(request).resolve_session(token)
    except SessionNotFound:
        return None


def current_account_optional(request: Request) -> Optional[Account]:
    a = getattr(request.state, "account", None)
    if a is not None:
        return a
    a = load_account_from_request(request)
    request.state.account = a
    return a


def require_account(request: Request) -> Account:
    if not request.cookies.get(COOKIE_NAME):
        raise LoginRequired(SIGNIN_REQUIRED_MSG)
    a = current_account_optional(request)
    if a:
        return a
    raise LoginRequired(SessionNotFound.message)


def cookie_settings() -> dict:
    secure = os.getenv("GATEKEEP_COOKIE_SECURE", "false").lower() in {"1", "true", "yes", "y"}
    return {"httponly": True, "samesite": "lax", "secure": secure, "path": "/"}
