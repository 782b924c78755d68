from datetime import datetime, timezone
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel

from portfolio_api.core.exceptions import APIError, ValidationFailed


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def serialize(schema: Type[BaseModel], obj: Any) -> Dict[str, Any]:
    """Render an ORM row through a response schema, camelCase keys."""
    return schema.model_validate(obj).model_dump(mode="json", by_alias=True)


def success(
    data: Optional[Any] = None,
    message: str = "Success",
    status_code: int = 200,
):
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({
            "success": True,
            "message": message,
            "data": data,
        }),
    )


def error(
    message: str = "Error",
    errors: Optional[List[Any]] = None,
    status_code: int = 400,
    code: str = "error",
    headers: Optional[Dict[str, str]] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    content = {
        "success": False,
        "message": message,
        "code": code,
        "errors": errors or [],
        "timestamp": utc_timestamp(),
    }
    if extra:
        content.update(extra)
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(content),
        headers=headers,
    )


def api_error_response(exc: APIError) -> JSONResponse:
    """Render an APIError without raising it, for middleware and result branches."""
    return error(
        message=exc.message,
        errors=exc.errors,
        status_code=exc.status_code,
        code=exc.code,
        headers=exc.headers,
    )


def validation_error(errors: List[Dict[str, str]]) -> JSONResponse:
    return api_error_response(ValidationFailed(errors))
