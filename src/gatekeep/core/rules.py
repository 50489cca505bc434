# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Input rules shared by the signup form check and the signup endpoint.

Every function is pure and returns the full list of violated rules (empty
when the input is acceptable).
"""

from __future__ import annotations

import re
from typing import List

MIN_PASSWORD_LENGTH = 8

EMAIL_FORMAT_MSG = "Must use email format: name@domain.tld"
PASSWORD_LENGTH_MSG = f"Password must be at least {MIN_PASSWORD_LENGTH} characters long."
TERMS_MSG = "You must agree to the terms to sign up."

_EMAIL_SHAPE = re.compile(r"\S+@\S+\.\S+")


def check_username(candidate: str) -> List[str]:
    errors: List[str] = []
    if not _EMAIL_SHAPE.search(candidate or ""):
        errors.append(EMAIL_FORMAT_MSG)
    return errors


def check_complexity(candidate: str) -> List[str]:
    errors: List[str] = []
    if len(candidate or "") < MIN_PASSWORD_LENGTH:
        errors.append(PASSWORD_LENGTH_MSG)
    return errors


def check_terms(agreed: bool) -> List[str]:
    return [] if agreed else [TERMS_MSG]
