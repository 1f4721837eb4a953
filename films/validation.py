from typing import Any, Iterable, List, Mapping, NamedTuple, Optional, Tuple, Type

from pydantic import ValidationError as PydanticValidationError
from sqlmodel import SQLModel


class Violation(NamedTuple):
    field: str
    message: str


REQUIRED_MESSAGES = {
    "title": "The film title is required",
    "director": "The director name is required",
    "genre": "The film genre is required",
    "duration": "The film duration is required",
}

CONSTRAINT_MESSAGES = {
    "string_too_long": "The genre cannot exceed 55 characters",
    "greater_than_equal": "The duration must be between 60 and 700 minutes",
    "less_than_equal": "The duration must be between 60 and 700 minutes",
}

# error types that mean "no usable value was given"
REQUIRED_TYPES = {"missing", "string_too_short", "value_error"}

_LOCATION_PREFIXES = ("body", "query", "path")


def _field_name(loc: Tuple[Any, ...], error_type: Optional[str] = None) -> str:
    # json_invalid locations carry a character offset
    if error_type == "json_invalid":
        return "body"
    parts = list(loc)
    if len(parts) > 1 and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(str(part) for part in parts) or "body"


def _message(field: str, error: Mapping[str, Any]) -> str:
    error_type = error.get("type")
    if field in REQUIRED_MESSAGES:
        if error_type in REQUIRED_TYPES or error.get("input", "") is None:
            return REQUIRED_MESSAGES[field]
        if error_type in CONSTRAINT_MESSAGES:
            return CONSTRAINT_MESSAGES[error_type]
    return error.get("msg", "Invalid value")


def violations_from_errors(errors: Iterable[Mapping[str, Any]]) -> List[Violation]:
    """Translate pydantic/FastAPI error dicts into field-level violations."""
    violations = []
    for error in errors:
        field = _field_name(tuple(error.get("loc", ())), error.get("type"))
        violations.append(Violation(field, _message(field, error)))
    return violations


def validate_film(
        dto_class: Type[SQLModel],
        data: Any
) -> Tuple[Optional[SQLModel], List[Violation]]:
    """Build ``dto_class`` from ``data``.

    Returns the validated DTO and an empty list, or ``None`` and the
    violations found. ``data`` may be a mapping or another SQLModel.
    """
    if isinstance(data, SQLModel):
        data = data.model_dump()
    if not isinstance(data, Mapping):
        return None, [Violation("body", "The request body must be a JSON object")]
    try:
        return dto_class.model_validate(dict(data)), []
    except PydanticValidationError as e:
        return None, violations_from_errors(e.errors())
