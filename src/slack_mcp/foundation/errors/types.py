"""Type aliases and internal failure variants.

Each stage of a tool call reports its own failure variant; the error mapper
turns any of them into a ToolError. Frozen Pydantic models keep them immutable.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, TypeAlias, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field

# JSON type aliases - Any for recursive slots to avoid Pydantic resolution issues
JsonPrimitive = Union[str, int, float, bool, None]
JsonValue = Union[JsonPrimitive, list[Any], dict[str, Any]]
JsonDict = dict[str, Any]


class Mode(StrEnum):
    """Validation mode.

    STRICT is for operator input: no type coercion, unknown fields rejected.
    PERMISSIVE is for remote responses: lax types, unknown fields stripped.
    """
    STRICT = "strict"
    PERMISSIVE = "permissive"


_FROZEN = ConfigDict(frozen=True, extra="forbid", revalidate_instances="never")


class FieldIssue(BaseModel):
    """One rule violation, attributed to one or more dotted field paths."""

    model_config = _FROZEN

    fields: tuple[str, ...] = ()
    message: Annotated[str, Field(min_length=1)]
    kind: str = "value_error"

    def describe(self) -> str:
        where = ", ".join(self.fields) if self.fields else "(root)"
        return f"{where}: {self.message}"

    __str__ = describe


class ValidationFailure(BaseModel):
    """A schema rejected a value. Carries every issue found in the single pass."""

    model_config = _FROZEN

    schema_name: Annotated[str, Field(min_length=1)]
    mode: Mode
    issues: tuple[FieldIssue, ...]

    @computed_field
    @property
    def message(self) -> str:
        return "; ".join(issue.describe() for issue in self.issues) or "validation failed"

    def fields(self) -> set[str]:
        """All field paths mentioned by any issue."""
        return {f for issue in self.issues for f in issue.fields}


class RemoteFailure(BaseModel):
    """The remote API answered with ok=false."""

    model_config = _FROZEN

    operation: str
    error: str


class UnknownTool(BaseModel):
    """The requested tool name is not registered."""

    model_config = _FROZEN

    name: str


class TransportFailure(BaseModel):
    """The outbound call could not complete, or a startup credential is missing."""

    model_config = _FROZEN

    operation: str
    message: Annotated[str, Field(min_length=1)]
    exc_type: str | None = None


Failure: TypeAlias = ValidationFailure | RemoteFailure | UnknownTool | TransportFailure
