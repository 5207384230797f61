"""Schema validation for tool arguments and Slack responses.

One pass per schema, with the mode passed explicitly:

    >>> from slack_mcp.validation import Validator
    >>> from slack_mcp.foundation.errors import Mode
    >>> v = Validator()
    >>> v.validate("ListChannelsRequest", {}, mode=Mode.STRICT).unwrap().limit
    100
    >>> v.validate("ListChannelsRequest", {"limit": 0}, mode=Mode.STRICT).unwrap_err().fields()
    {'limit'}

STRICT (tool arguments): no type coercion, unknown fields rejected.
PERMISSIVE (Slack responses): lax types, unknown fields stripped.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import ValidationError

from .foundation.errors import Err, FieldIssue, Mode, Ok, Result, ValidationFailure
from .schemas import SCHEMAS, SlackModel
from .schemas.base import MODE_KEY


class Validator:
    """Applies a named schema to a raw value and reports every violation found."""

    __slots__ = ("_schemas",)

    def __init__(self, schemas: Mapping[str, type[SlackModel]] = SCHEMAS) -> None:
        self._schemas = schemas

    def schema(self, name: str) -> type[SlackModel]:
        if (model := self._schemas.get(name)) is None:
            raise ValueError(f"Unknown schema '{name}'")
        return model

    def validate(self, schema_name: str, raw: Any, *, mode: Mode) -> Result[SlackModel, ValidationFailure]:
        """Validate raw input against a named schema.

        Args:
            schema_name: Catalog name, e.g. "PostRichMessageRequest"
            raw: Decoded JSON value; None counts as an empty object
            mode: STRICT for caller input, PERMISSIVE for remote responses

        Returns:
            Ok with the typed value (defaults filled in) or Err with every issue found
        """
        model = self.schema(schema_name)
        data = {} if raw is None else raw
        if isinstance(data, SlackModel):
            data = data.model_dump(exclude_unset=True)
        try:
            value = model.model_validate(data, strict=mode is Mode.STRICT, context={MODE_KEY: mode})
        except ValidationError as e:
            return Err(ValidationFailure(schema_name=schema_name, mode=mode, issues=tuple(_issues(e))))
        return Ok(value)


def _issues(exc: ValidationError) -> Iterator[FieldIssue]:
    """Flatten pydantic errors into field issues.

    Errors that name their own fields in ``ctx["fields"]`` (joint rules, unknown
    keys) are attributed to those fields under the error's location.
    """
    for error in exc.errors(include_url=False):
        loc = tuple(str(part) for part in error["loc"])
        named = (error.get("ctx") or {}).get("fields")
        if named:
            fields = tuple(_path(*loc, str(name)) for name in named)
        else:
            fields = (_path(*loc),) if loc else ()
        yield FieldIssue(fields=fields, message=error["msg"], kind=error["type"])


def _path(*parts: str) -> str:
    return ".".join(parts)
