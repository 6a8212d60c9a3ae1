"""Validation of the persisted folder store."""

from __future__ import annotations

import json
from collections import Counter
from typing import Any

from jsonschema import Draft202012Validator, ValidationError

from ..config import SCHEMA_DIR
from ..errors import StorageCorruptedError

_STORE_VALIDATOR: Draft202012Validator | None = None


def _store_validator() -> Draft202012Validator:
    global _STORE_VALIDATOR
    if _STORE_VALIDATOR is None:
        schema_path = SCHEMA_DIR / "store.schema.json"
        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        _STORE_VALIDATOR = Draft202012Validator(schema)
    return _STORE_VALIDATOR


def _describe(error: ValidationError) -> str:
    location = "/".join(str(part) for part in error.absolute_path)
    return f"{location}: {error.message}" if location else error.message


def validate_store(document: dict[str, Any]) -> None:
    """Check a folder store document before it is loaded or written.

    Besides the JSON schema, folder ids must be unique inside the store since
    the backend keys folders by id.  Failures raise
    :class:`StorageCorruptedError` naming the offending locations, e.g.
    ``folders/0/title: 5 is not of type 'string'``.
    """

    errors = sorted(
        _store_validator().iter_errors(document),
        key=lambda err: [str(part) for part in err.absolute_path],
    )
    if errors:
        raise StorageCorruptedError("; ".join(_describe(error) for error in errors))

    counts = Counter(entry["id"] for entry in document["folders"])
    duplicates = sorted(folder_id for folder_id, count in counts.items() if count > 1)
    if duplicates:
        raise StorageCorruptedError(f"Duplicate folder ids in store: {duplicates}")


__all__ = ["validate_store"]
