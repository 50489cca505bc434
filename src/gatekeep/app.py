# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence

from fastapi import Depends, FastAPI, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from gatekeep.auth.session import (
    COOKIE_NAME,
    DEFAULT_MAX_AGE_SECONDS,
    FLASH_COOKIE_NAME,
    read_flash,
    sign_flash,
    sign_session,
)
from gatekeep.core.rules import check_complexity, check_username
from gatekeep.errors import AccountError, StoreUnavailable
from gatekeep.infra.account_repo import Account
from gatekeep.permissions import (
    LoginRequired,
    account_service,
    cookie_settings,
    current_account_optional,
    require_account,
)
from gatekeep.services.account_service import build_account_service

log = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent

DATABASE_URL = os.getenv("GATEKEEP_DATABASE_URL", "sqlite:///users.sqlite")
ENVIRONMENT = os.getenv("GATEKEEP_ENV", "development")

BAD_REQUEST_MSG = "There was an error processing your request."

app = FastAPI()
app.state.accounts = build_account_service(DATABASE_URL)

app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))


def _render(request: Request, template_name: str, ctx: Optional[dict] = None, status_code: int = 200):
    """TemplateResponse wrapper that consumes the flash cookie."""
    flash_value = request.cookies.get(FLASH_COOKIE_NAME, "")
    base_ctx = {
        "flash": read_flash(flash_value),
        "environment": ENVIRONMENT,
        "current_account": getattr(request.state, "account", None),
    }
    resp = templates.TemplateResponse(request, template_name, {**base_ctx, **(ctx or {})}, status_code=status_code)
    if flash_value:
        resp.delete_cookie(FLASH_COOKIE_NAME, path="/")
    return resp


def _redirect_with_flash(url: str, messages: Sequence[str]) -> RedirectResponse:
    resp = RedirectResponse(url=url, status_code=303)
    resp.set_cookie(FLASH_COOKIE_NAME, sign_flash(messages), **cookie_settings())
    return resp


def _redirect_with_session(url: str, token: str) -> RedirectResponse:
    resp = RedirectResponse(url=url, status_code=303)
    resp.set_cookie(
        COOKIE_NAME,
        sign_session(token),
        max_age=DEFAULT_MAX_AGE_SECONDS,
        **cookie_settings(),
    )
    return resp


@app.exception_handler(LoginRequired)
def _login_required(request: Request, exc: LoginRequired):
    return _redirect_with_flash("/signin", [exc.message])


@app.exception_handler(StoreUnavailable)
def _store_unavailable(request: Request, exc: StoreUnavailable):
    log.error("Account store unavailable (%s %s)", request.method, request.url.path, exc_info=exc)
    return _render(request, "error.html", {"message": BAD_REQUEST_MSG}, status_code=503)


# ------------------ Routes ------------------


@app.get("/")
def home():
    return RedirectResponse(url="/signin", status_code=303)


@app.get("/signup", response_class=HTMLResponse)
def signup_get(request: Request):
    return _render(request, "signup.html")


@app.post("/account/signup")
def signup_post(
    request: Request,
    email: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    agreedToTerms: Optional[str] = Form(None),
):
    if email is None or password is None:
        return _redirect_with_flash("/signup", [BAD_REQUEST_MSG])
    try:
        token = account_service(request).signup(email, password, agreedToTerms == "on")
    except AccountError as exc:
        return _redirect_with_flash("/signup", exc.reasons)
    return _redirect_with_session("/welcome", token)


@app.get("/signin", response_class=HTMLResponse)
def signin_get(request: Request):
    if current_account_optional(request):
        return RedirectResponse(url="/welcome", status_code=303)
    return _render(request, "signin.html")


@app.post("/account/signin")
def signin_post(
    request: Request,
    email: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
):
    if email is None or password is None:
        return _redirect_with_flash("/signin", [BAD_REQUEST_MSG])
    try:
        token = account_service(request).signin(email, password)
    except AccountError as exc:
        return _redirect_with_flash("/signin", exc.reasons)
    return _redirect_with_session("/welcome", token)


@app.get("/welcome", response_class=HTMLResponse)
def welcome(request: Request, account: Account = Depends(require_account)):
    return _render(request, "welcome.html", {"email": account.email})


@app.post("/logout")
def logout_post():
    resp = RedirectResponse(url="/signin", status_code=303)
    resp.delete_cookie(COOKIE_NAME, path="/")
    return resp


class RulesCheck(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


@app.post("/api/rules/check")
def rules_check(body: RulesCheck):
    """Field-level check used by the signup form while the user types."""
    out: dict[str, List[str]] = {"email": [], "password": []}
    if body.email is not None:
        out["email"] = check_username(body.email)
    if body.password is not None:
        out["password"] = check_complexity(body.password)
    return out
