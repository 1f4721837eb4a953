"""JSON Patch (RFC 6902) applied to flat transfer-object documents."""
import copy
from typing import Any, Dict, List, Literal, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from films.validation import Violation, violations_from_errors


class PatchError(Exception):
    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class PatchOperation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    op: Literal["add", "remove", "replace", "move", "copy", "test"]
    path: str
    value: Any = None
    from_: Optional[str] = Field(default=None, alias="from")


PATCH_DOCUMENT = TypeAdapter(List[PatchOperation])


def parse_patch(raw: Any) -> Tuple[List[PatchOperation], List[Violation]]:
    """Read a patch document: a JSON array of operations."""
    try:
        return PATCH_DOCUMENT.validate_python(raw), []
    except PydanticValidationError as e:
        return [], violations_from_errors(e.errors())


def _segments(pointer: str) -> List[str]:
    if pointer == "":
        return []
    if not pointer.startswith("/"):
        raise PatchError(pointer, f"The path '{pointer}' is not a valid JSON pointer.")
    return [part.replace("~1", "/").replace("~0", "~") for part in pointer[1:].split("/")]


def _resolve(document: Dict[str, Any], pointer: Optional[str]) -> str:
    """Return the document key ``pointer`` targets, matching case-insensitively."""
    if pointer is None:
        raise PatchError("", "The 'from' location is required for this operation.")
    segments = _segments(pointer)
    if not segments:
        raise PatchError("", "The whole document cannot be the target of an operation.")
    if len(segments) > 1:
        raise PatchError(
            segments[0],
            f"The target location specified by path segment '{segments[1]}' was not found."
        )
    segment = segments[0]
    for key in document:
        if key.lower() == segment.lower():
            return key
    raise PatchError(segment, f"The target location specified by path segment '{segment}' was not found.")


def _require_value(operation: PatchOperation, key: str):
    if "value" not in operation.model_fields_set:
        raise PatchError(key, f"The '{operation.op}' operation requires a value.")
    return operation.value


def apply_operation(document: Dict[str, Any], operation: PatchOperation):
    key = _resolve(document, operation.path)

    if operation.op in ("add", "replace"):
        document[key] = _require_value(operation, key)
    elif operation.op == "remove":
        document[key] = None
    elif operation.op == "test":
        expected = _require_value(operation, key)
        if document[key] != expected:
            raise PatchError(
                key,
                f"The current value '{document[key]}' at path '{key}' "
                f"is not equal to the test value '{expected}'."
            )
    else:
        source = _resolve(document, operation.from_)
        document[key] = document[source]
        if operation.op == "move" and source != key:
            document[source] = None


def apply_patch(
        document: Dict[str, Any],
        operations: Sequence[PatchOperation]
) -> Tuple[Dict[str, Any], List[Violation]]:
    """Apply ``operations`` in order to a copy of ``document``.

    Failing operations are skipped and reported as violations; the
    remaining ones still apply.
    """
    patched = copy.deepcopy(document)
    violations = []
    for operation in operations:
        try:
            apply_operation(patched, operation)
        except PatchError as e:
            violations.append(Violation(e.field, e.message))
    return patched, violations
