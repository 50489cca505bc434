# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Errors raised by the account core.

`AccountError` subclasses are expected outcomes of user input and carry a
message that is safe to show. `StoreUnavailable` signals an infrastructure
failure and is kept outside that hierarchy so it is never mistaken for one.
"""

from __future__ import annotations

from typing import List, Sequence


class AccountError(Exception):
    message = "There was an error processing your request."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    @property
    def reasons(self) -> List[str]:
        return [self.message]


class ValidationFailed(AccountError):
    message = "Invalid input."

    def __init__(self, reasons: Sequence[str]):
        self._reasons = list(reasons)
        super().__init__("; ".join(self._reasons) or self.message)

    @property
    def reasons(self) -> List[str]:
        return list(self._reasons)


class DuplicateAccount(AccountError):
    message = "Account already exists."


class InvalidCredentials(AccountError):
    message = "Invalid login credentials."


class SessionNotFound(AccountError):
    message = "Your session has expired. Please sign in to continue."


class StoreUnavailable(Exception):
    """The account database could not complete an operation."""
