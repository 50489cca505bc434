# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import os
from typing import List, Optional, Sequence

from itsdangerous import BadSignature, URLSafeTimedSerializer

COOKIE_NAME = os.getenv("GATEKEEP_COOKIE_NAME", "SESSION_ID")
FLASH_COOKIE_NAME = "flash"
DEFAULT_MAX_AGE_SECONDS = int(os.getenv("GATEKEEP_SESSION_MAX_AGE", "60"))


def _serializer(salt: str) -> URLSafeTimedSerializer:
    secret = os.getenv("GATEKEEP_SECRET_KEY") or os.getenv("SECRET_KEY")
    if not secret:
        raise RuntimeError("Missing GATEKEEP_SECRET_KEY (or SECRET_KEY) in environment")
    return URLSafeTimedSerializer(secret_key=secret, salt=salt)


def _session_salt() -> str:
    return os.getenv("GATEKEEP_SESSION_SALT", "gatekeep.session.v1")


def sign_session(token: str) -> str:
    """Wrap a store-issued session token for use as a cookie value."""
    return _serializer(_session_salt()).dumps({"t": token})


def verify_session(value: str, *, max_age: int = DEFAULT_MAX_AGE_SECONDS) -> Optional[str]:
    """Return the store token inside a signed cookie value, or None.

    A valid signature only proves the value came from us; the token still has
    to be resolved against the session store.
    """
    if not value:
        return None
    try:
        data = _serializer(_session_salt()).loads(value, max_age=max_age)
    except BadSignature:
        return None
    token = str((data or {}).get("t") or "").strip() if isinstance(data, dict) else ""
    return token or None


def sign_flash(messages: Sequence[str]) -> str:
    return _serializer("gatekeep.flash").dumps([str(m) for m in messages])


def read_flash(value: str) -> List[str]:
    if not value:
        return []
    try:
        data = _serializer("gatekeep.flash").loads(value)
    except BadSignature:
        return []
    if not isinstance(data, list):
        return []
    return [str(m) for m in data]
