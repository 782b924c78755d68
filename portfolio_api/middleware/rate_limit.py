import structlog
from fastapi import Request

from portfolio_api.api.deps import client_key
from portfolio_api.core.exceptions import RateLimited
from portfolio_api.core.rate_limiter import api_limiter
from portfolio_api.middleware.versioning import is_api_path
from portfolio_api.utils.response import api_error_response

logger = structlog.get_logger()


async def enforce_api_rate_limit(request: Request, call_next):
    """Count every /api request against the client's window, versioned or not."""
    if not is_api_path(request.url.path):
        return await call_next(request)

    key = client_key(request)
    state = api_limiter.hit(key)
    if not state.allowed:
        logger.warning("rate_limit_exceeded", limiter=api_limiter.name, client=key, path=request.url.path)
        # Exception handlers sit inside the middleware stack, so answer directly.
        return api_error_response(RateLimited(api_limiter.message, headers=state.headers()))

    response = await call_next(request)
    for header, value in state.headers().items():
        # A route-level limiter that already answered keeps its own numbers.
        response.headers.setdefault(header, value)
    return response
