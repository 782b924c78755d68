"""Body validation as an explicit result.

Handlers call `parse_model` and branch on the outcome instead of letting
pydantic's ValidationError unwind through the stack.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Sequence, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class Parsed(Generic[ModelT]):
    value: ModelT


@dataclass(frozen=True)
class Invalid:
    errors: List[Dict[str, str]] = field(default_factory=list)


def format_errors(errors: Sequence[Dict[str, Any]], skip_location: bool = False) -> List[Dict[str, str]]:
    """Flatten pydantic error dicts into `{path, message}` pairs."""
    formatted = []
    for err in errors:
        loc = list(err.get("loc", ()))
        if skip_location and loc and loc[0] in {"body", "query", "path", "header", "cookie"}:
            loc = loc[1:]
        formatted.append({
            "path": ".".join(str(part) for part in loc),
            "message": err.get("msg", "Invalid value"),
        })
    return formatted


def parse_model(model: Type[ModelT], payload: Any) -> Union[Parsed[ModelT], Invalid]:
    if payload is None:
        payload = {}
    try:
        return Parsed(model.model_validate(payload))
    except ValidationError as exc:
        return Invalid(format_errors(exc.errors()))
