import asyncio
import json

import structlog
from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from portfolio_api.api.deps import (
    AdminIdentity,
    bearer_credential,
    client_key,
    cookie_credential,
    require_admin,
)
from portfolio_api.core.config import settings
from portfolio_api.core.exceptions import RateLimited, ValidationFailed
from portfolio_api.core.rate_limiter import login_limiter
from portfolio_api.core.revocation import revocation_store
from portfolio_api.core.security import issue_token
from portfolio_api.schemas.auth import AuthStatus, LoginRequest, LoginResponse, SessionUser
from portfolio_api.utils.response import error

router = APIRouter()
logger = structlog.get_logger()


def _should_use_secure_cookies() -> bool:
    return settings.is_production


def _set_auth_cookie(response: JSONResponse, token: str) -> None:
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=_should_use_secure_cookies(),
        samesite="strict",
        max_age=settings.ACCESS_TOKEN_EXPIRE_HOURS * 3600,
        path="/",
    )


async def _read_login_payload(request: Request):
    content_type = request.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            return await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return None
    form = await request.form()
    return dict(form)


@router.post(
    "/login",
    summary="Admin login",
    description="""
Exchanges the admin password for a session token.

Behavior:
1. Counts the attempt and rejects with 429 once the failed-attempt budget is used up
2. Verifies the password against the hash computed at startup
3. Waits before answering a wrong password
4. Issues a 24h token, returned in the body and as an HttpOnly cookie
""",
    responses={
        200: {"description": "Login successful"},
        400: {"description": "Password is required"},
        401: {"description": "Invalid credentials"},
        429: {"description": "Too many failed attempts"},
    },
)
async def login(request: Request):
    key = client_key(request)

    # Count the attempt up front; a successful login hands the unit back.
    state = login_limiter.hit(key)
    if not state.allowed:
        logger.warning("login_rate_limited", client=key)
        raise RateLimited(login_limiter.message, headers=state.headers())

    payload = await _read_login_payload(request)
    password = payload.get("password") if isinstance(payload, dict) else None
    if not isinstance(password, str) or not password:
        raise ValidationFailed(
            [{"path": "password", "message": "Password is required"}],
            message="Password is required",
        )
    credentials = LoginRequest(password=password)

    verifier = request.app.state.credential_verifier
    is_valid = await run_in_threadpool(verifier.verify, credentials.password)
    if not is_valid:
        logger.warning("login_failed", client=key)
        await asyncio.sleep(settings.LOGIN_FAILURE_DELAY_SECONDS)
        return error(
            message="Invalid credentials",
            status_code=status.HTTP_401_UNAUTHORIZED,
            code="unauthorized",
        )

    login_limiter.refund(key)
    issued = issue_token(settings.ADMIN_USERNAME)
    logger.info("login_succeeded", client=key, expires_at=issued.expires_at.isoformat())

    body = LoginResponse(token=issued.token, expires_at=issued.expires_at)
    response = JSONResponse(content=body.model_dump(mode="json", by_alias=True))
    _set_auth_cookie(response, issued.token)
    return response


@router.get("/status", response_model=AuthStatus)
def auth_status(identity: AdminIdentity = Depends(require_admin)):
    return AuthStatus(
        user=SessionUser(username=identity.subject, role=identity.role),
        via=identity.via,
        expires_at=identity.expires_at,
    )


@router.post("/logout")
def logout(request: Request, identity: AdminIdentity = Depends(require_admin)):
    if identity.token:
        revocation_store.revoke(identity.token, identity.expires_at)

    # A different token may ride along in the other slot; end that session too.
    for credential in (bearer_credential(request), cookie_credential(request)):
        if credential and credential.value != identity.token:
            revocation_store.revoke(credential.value)

    logger.info("logout", via=identity.via)
    response = JSONResponse(content={"success": True, "message": "Logged out successfully"})
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        path="/",
        samesite="strict",
        secure=_should_use_secure_cookies(),
        httponly=True,
    )
    return response
