#!/usr/bin/env python3
from __future__ import annotations

import os
from getpass import getpass

from dotenv import load_dotenv

from gatekeep.errors import AccountError
from gatekeep.services.account_service import build_account_service


def main() -> None:
    load_dotenv()
    database_url = os.getenv("GATEKEEP_DATABASE_URL", "sqlite:///users.sqlite")
    service = build_account_service(database_url)

    email = input("Email: ").strip()
    pw1 = getpass("Password: ")
    pw2 = getpass("Repeat password: ")
    if pw1 != pw2:
        raise SystemExit("Passwords do not match")

    try:
        service.signup(email, pw1, agreed_to_terms=True)
    except AccountError as exc:
        raise SystemExit("\n".join(exc.reasons))

    account = service.accounts.find_by_email(email)
    print(f"OK -> account {account.id if account else '?'} in {database_url}")


if __name__ == "__main__":
    main()
