from fastapi import status
from typing import Any, Dict, List, Optional


class APIError(Exception):
    code = "error"

    def __init__(
        self,
        status_code: int,
        message: str,
        errors: Optional[List[Any]] = None,
        code: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.errors = errors or []
        self.code = code or self.code
        self.headers = headers


class ValidationFailed(APIError):
    code = "validation_error"

    def __init__(self, errors: List[Any], message: str = "Validation failed"):
        super().__init__(status.HTTP_400_BAD_REQUEST, message, errors=errors)


class Unauthorized(APIError):
    code = "unauthorized"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(
            status.HTTP_401_UNAUTHORIZED,
            message,
            code=code,
            headers={"WWW-Authenticate": "Bearer"},
        )


class NotFound(APIError):
    code = "not_found"

    def __init__(self, resource: str):
        super().__init__(status.HTTP_404_NOT_FOUND, f"{resource} not found")


class Conflict(APIError):
    code = "conflict"

    def __init__(self, message: str):
        super().__init__(status.HTTP_409_CONFLICT, message)


class RateLimited(APIError):
    code = "rate_limited"

    def __init__(self, message: str, headers: Optional[Dict[str, str]] = None):
        super().__init__(status.HTTP_429_TOO_MANY_REQUESTS, message, headers=headers)


class UpstreamFailure(APIError):
    code = "upstream_failure"

    def __init__(self, message: str = "Upstream service failed"):
        super().__init__(status.HTTP_502_BAD_GATEWAY, message)
