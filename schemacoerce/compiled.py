"""Compiled schemas that validate JSON values.

A :class:`~schemacoerce.schema.SchemaNode` is turned into JSON, checked
against the draft-4 meta-schema (extended with the ``"any"`` type the model
uses) and wrapped in a validator.
"""

from __future__ import annotations

import copy
import json
from typing import Any

from jsonschema import Draft4Validator
from jsonschema.exceptions import best_match
from jsonschema.validators import extend

from .schema import SchemaNode

__all__ = ["ROOT_URL", "SchemaCompiled", "ValidationError", "CompileError", "compile_schema"]

ROOT_URL = "json-schema://root"

_TYPE_CHECKER = Draft4Validator.TYPE_CHECKER.redefine(
    "any", lambda _checker, _instance: True
)
_Validator = extend(Draft4Validator, type_checker=_TYPE_CHECKER)


def _meta_schema() -> dict[str, Any]:
    meta = copy.deepcopy(Draft4Validator.META_SCHEMA)
    meta.pop("id", None)
    meta["definitions"]["simpleTypes"]["enum"].append("any")
    return meta


_META_VALIDATOR = _Validator(_meta_schema())


class CompileError(Exception):
    """Raised when a schema cannot be turned into a validator."""


class ValidationError(Exception):
    """Raised when a value does not match a compiled schema.

    ``errors`` lists one dictionary per violation, each with the JSON
    pointer ``path`` of the offending value, the failing ``keyword`` and a
    ``message``.
    """

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        super().__init__(f"ValidationError: {errors!r}")
        self.errors = errors


def _pointer(parts: Any) -> str:
    return "".join(f"/{part}" for part in parts)


class SchemaCompiled:
    """A schema ready to validate values."""

    root_url = ROOT_URL

    def __init__(self, schema_json: dict[str, Any]) -> None:
        self._schema = schema_json
        self._validator = _Validator(schema_json)

    @property
    def schema(self) -> dict[str, Any]:
        """The JSON form of the compiled schema."""
        return copy.deepcopy(self._schema)

    def validate(self, value: Any) -> None:
        """Check *value*; raise :class:`ValidationError` if it does not match."""
        found = sorted(
            self._validator.iter_errors(value),
            key=lambda error: [str(part) for part in error.absolute_path],
        )
        if found:
            raise ValidationError(
                [
                    {
                        "path": _pointer(error.absolute_path),
                        "keyword": error.validator,
                        "message": error.message,
                    }
                    for error in found
                ]
            )

    def __repr__(self) -> str:
        return f"SchemaCompiled({self._schema!r})"


def compile_schema(schema: SchemaNode) -> SchemaCompiled:
    """Compile *schema*; raise :class:`CompileError` if it is not a valid schema."""
    try:
        data = json.loads(json.dumps(schema.to_json()))
    except (TypeError, ValueError) as exc:
        raise CompileError(f"CompileError::SerializeError: {exc}") from exc
    error = best_match(_META_VALIDATOR.iter_errors(data))
    if error is not None:
        raise CompileError(
            f"CompileError::SchemaError: {error.message} at {_pointer(error.absolute_path)!r}"
        )
    return SchemaCompiled(data)