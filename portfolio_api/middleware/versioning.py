from typing import Optional

from portfolio_api.core.config import settings


def is_api_path(path: str) -> bool:
    prefix = settings.API_PREFIX
    return path == prefix or path.startswith(prefix + "/")


def versioned_path(path: str, query: str = "") -> Optional[str]:
    """Where an unversioned `/api` request should go, or None to pass through.

    `/api/projects?x=1` -> `/api/v1/projects?x=1`; `/api` and `/api/` go to
    `/api/v1/`. Anything already under `/api/v1` is left alone.
    """
    current = settings.API_V1_STR
    if not is_api_path(path):
        return None
    if path == current or path.startswith(current + "/"):
        return None

    rest = path[len(settings.API_PREFIX):]
    target = current + (rest if rest not in ("", "/") else "/")
    if query:
        target = f"{target}?{query}"
    return target
