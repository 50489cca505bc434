# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import os
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError


def _env_int(name: str) -> Optional[int]:
    raw = (os.getenv(name) or "").strip()
    return int(raw) if raw else None


def _build_hasher() -> PasswordHasher:
    kwargs = {}
    for key, env in (
        ("time_cost", "GATEKEEP_ARGON2_TIME_COST"),
        ("memory_cost", "GATEKEEP_ARGON2_MEMORY_COST"),
        ("parallelism", "GATEKEEP_ARGON2_PARALLELISM"),
    ):
        value = _env_int(env)
        if value is not None:
            kwargs[key] = value
    return PasswordHasher(**kwargs)


_PH = _build_hasher()
_DUMMY_HASH = _PH.hash("gatekeep-dummy-password")


def hash_password(plain: str) -> str:
    if not plain:
        raise ValueError("Empty password")
    return _PH.hash(plain)


def verify_password(hash_value: str, plain: str) -> bool:
    if not hash_value or not plain:
        return False
    try:
        return _PH.verify(hash_value, plain)
    except (VerificationError, InvalidHashError, UnicodeEncodeError):
        # Non-ASCII hashes and unencodable passwords (lone surrogates) end up here.
        return False


def verify_dummy(plain: str) -> bool:
    """Spend the same work as a real verification, then fail.

    Called when a signin names an unknown email so the response time does not
    tell the caller whether the account exists.
    """
    verify_password(_DUMMY_HASH, plain or "-")
    return False
