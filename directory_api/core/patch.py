"""All-or-nothing application of JSON-patch documents to a record."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from directory_api.core.exceptions import PatchTestFailed, ValidationError
from directory_api.schemas.patch import AddOp, PatchDocument, RemoveOp, ReplaceOp, TestOp


def apply_patch(
    current: dict[str, Any],
    patch: PatchDocument,
    schema: type[BaseModel],
) -> dict[str, Any]:
    """Apply *patch* to a copy of *current* and validate the result with *schema*.

    *current* is keyed by the API (camelCase) field names; only fields declared
    on *schema* may be addressed. Returns the validated fields keyed by
    attribute name. The caller's record is untouched when anything fails.
    """
    allowed = {
        (info.alias or name): name for name, info in schema.model_fields.items()
    }
    doc = {key: current.get(key) for key in allowed}

    for operation in patch.root:
        key = operation.path[1:]
        if key not in allowed:
            raise ValidationError(f"unknown patch path '{operation.path}'")

        if isinstance(operation, TestOp):
            if doc.get(key) != operation.value:
                raise PatchTestFailed(operation.path)
        elif isinstance(operation, RemoveOp):
            if doc.get(key) is None:
                raise ValidationError(f"nothing to remove at '{operation.path}'")
            doc.pop(key)
        elif isinstance(operation, (AddOp, ReplaceOp)):
            if isinstance(operation, ReplaceOp) and doc.get(key) is None:
                raise ValidationError(f"nothing to replace at '{operation.path}'")
            doc[key] = operation.value

    try:
        validated = schema.model_validate(doc)
    except PydanticValidationError as exc:
        fields = ", ".join(str(err["loc"][0]) for err in exc.errors() if err.get("loc"))
        raise ValidationError(f"patched record is invalid: {fields}") from exc
    return validated.model_dump()
