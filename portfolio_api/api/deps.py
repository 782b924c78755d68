import hmac
import ipaddress
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Literal, Optional, Sequence, Union

import structlog
from fastapi import Request
from jose import ExpiredSignatureError, JWTError

from portfolio_api.core.config import settings
from portfolio_api.core.exceptions import Unauthorized
from portfolio_api.core.revocation import revocation_store
from portfolio_api.core.security import ADMIN_ROLE, decode_token, token_expiry

logger = structlog.get_logger()

CredentialSource = Literal["bearer", "cookie", "api_key"]


def _first_valid_ip(candidates: Sequence[str]) -> Optional[str]:
    for candidate in candidates:
        try:
            ipaddress.ip_address(candidate)
            return candidate
        except ValueError:
            continue
    return None


def _parse_forwarded_header(forwarded: str) -> list[str]:
    """Collect `for=` values from an RFC 7239 Forwarded header."""
    chain: list[str] = []
    for element in forwarded.split(","):
        for part in element.split(";"):
            part = part.strip()
            if part.lower().startswith("for="):
                candidate = part.split("=", 1)[1].strip().strip('"')
                if candidate.startswith("["):
                    # [2001:db8::1]:4711
                    candidate = candidate[1:].split("]", 1)[0]
                chain.append(candidate)
    return chain


def get_real_client_ip(request: Request) -> tuple[str | None, list[str]]:
    """Return client IP and full proxy chain if provided."""
    direct_ip = request.client.host if request.client else None
    trust_proxy_headers = settings.TRUST_PROXY_HEADERS and settings.is_trusted_proxy(direct_ip)

    if not trust_proxy_headers:
        return direct_ip, []

    chain: list[str] = []
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        chain = [ip.strip() for ip in forwarded_for.split(",") if ip.strip()]

    # RFC7239 fallback
    forwarded = request.headers.get("Forwarded")
    if forwarded and not chain:
        chain = _parse_forwarded_header(forwarded)

    return _first_valid_ip(chain) or direct_ip, chain


def client_key(request: Request) -> str:
    client_ip, _ = get_real_client_ip(request)
    return client_ip or "unknown"


# --------------------------------------------------
# CREDENTIAL EXTRACTION
# --------------------------------------------------
@dataclass(frozen=True)
class Credential:
    source: CredentialSource
    value: str


def bearer_credential(request: Request) -> Optional[Credential]:
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None
    token = auth_header.split(" ", 1)[1].strip()
    return Credential("bearer", token) if token else None


def cookie_credential(request: Request) -> Optional[Credential]:
    token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    return Credential("cookie", token) if token else None


def api_key_credential(request: Request) -> Optional[Credential]:
    api_key = request.headers.get(settings.API_KEY_HEADER)
    return Credential("api_key", api_key) if api_key else None


# Checked in order; the first strategy that finds a credential decides.
CREDENTIAL_EXTRACTORS: tuple[Callable[[Request], Optional[Credential]], ...] = (
    bearer_credential,
    cookie_credential,
    api_key_credential,
)


def extract_credential(request: Request) -> Optional[Credential]:
    for extractor in CREDENTIAL_EXTRACTORS:
        credential = extractor(request)
        if credential is not None:
            return credential
    return None


# --------------------------------------------------
# VALIDATION OUTCOME
# --------------------------------------------------
@dataclass(frozen=True)
class AdminIdentity:
    subject: str
    role: str
    via: CredentialSource
    token: Optional[str] = None
    expires_at: Optional[datetime] = None


@dataclass(frozen=True)
class Authenticated:
    identity: AdminIdentity


@dataclass(frozen=True)
class Rejected:
    message: str
    code: str


MISSING_CREDENTIALS = Rejected("Unauthorized. Please provide a valid token or API key.", "unauthorized")
TOKEN_REVOKED = Rejected("Token has been revoked", "token_revoked")
TOKEN_INVALID = Rejected("Invalid or expired token", "token_invalid")
TOKEN_EXPIRED = Rejected("Invalid or expired token", "token_expired")

AuthOutcome = Union[Authenticated, Rejected]


def validate_credential(credential: Credential, store=None) -> AuthOutcome:
    if store is None:
        store = revocation_store

    if credential.source == "api_key":
        if hmac.compare_digest(credential.value.encode(), settings.ADMIN_API_KEY.encode()):
            return Authenticated(AdminIdentity(settings.ADMIN_USERNAME, ADMIN_ROLE, "api_key"))
        return MISSING_CREDENTIALS

    token = credential.value
    if store.is_revoked(token):
        return TOKEN_REVOKED

    try:
        payload = decode_token(token)
    except ExpiredSignatureError:
        return TOKEN_EXPIRED
    except JWTError:
        return TOKEN_INVALID

    if payload.get("role") != ADMIN_ROLE or not payload.get("sub"):
        return TOKEN_INVALID

    return Authenticated(
        AdminIdentity(
            subject=payload["sub"],
            role=payload["role"],
            via=credential.source,
            token=token,
            expires_at=token_expiry(payload),
        )
    )


def authenticate_request(request: Request) -> AuthOutcome:
    credential = extract_credential(request)
    if credential is None:
        return MISSING_CREDENTIALS
    return validate_credential(credential)


def require_admin(request: Request) -> AdminIdentity:
    outcome = authenticate_request(request)
    client_ip, ip_chain = get_real_client_ip(request)
    action_name = f"{request.method} {request.url.path}"

    if isinstance(outcome, Rejected):
        logger.warning(
            "admin_access_denied",
            action=action_name,
            reason=outcome.code,
            client_ip=client_ip,
            ip_chain=ip_chain,
        )
        raise Unauthorized(outcome.message, code=outcome.code)

    identity = outcome.identity
    if request.method != "GET":
        logger.info(
            "admin_action",
            action=action_name,
            via=identity.via,
            client_ip=client_ip,
        )
    return identity
