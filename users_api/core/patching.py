"""Patch Application — RFC 6902 JSON Patch applied to the update representation.

Invariants:
    - The input document is never mutated (jsonpatch copies before applying)
    - Operations apply in order; the first failing operation voids the whole patch
    - Failures come back as field errors naming the failing operation's path,
      never as exceptions

Design Decisions:
    - jsonpatch library over a hand-written patch algebra: add/remove/replace/
      move/copy/test semantics follow the RFC exactly
    - One operation per apply_patch call so a failure can be pinned to its path
"""

from typing import Any

import jsonpatch
import jsonpointer

from users_api.core.errors import FieldError
from users_api.core.validation import ValidationResult


def _field_of(operation: dict[str, Any]) -> str:
    path = operation.get("path")
    if isinstance(path, str) and path.strip("/"):
        return path.strip("/")
    return "patch"


def apply_patch(
    document: dict[str, Any], operations: list[dict[str, Any]],
) -> ValidationResult[dict[str, Any]]:
    """Apply operations in sequence to a copy of document."""
    patched = document
    for index, operation in enumerate(operations):
        try:
            patched = jsonpatch.apply_patch(patched, [operation])
        except (jsonpatch.JsonPatchException, jsonpointer.JsonPointerException) as exc:
            return ValidationResult(errors=[
                FieldError(
                    _field_of(operation),
                    f"Operation {index} failed: {exc}",
                    "patch_error",
                ),
            ])
    return ValidationResult(value=patched)
