"""Shared model base and field types for every Slack schema."""

from __future__ import annotations

import re
from typing import Annotated, Any, TypeAlias

from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    ConfigDict,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
    WithJsonSchema,
    model_validator,
)
from pydantic_core import PydanticCustomError

from slack_mcp.foundation.errors import Mode

TIMESTAMP_PATTERN = r"^\d{10}\.\d{6}$"
TIMESTAMP_MESSAGE = "Timestamp must be in the format '1234567890.123456'"

_TIMESTAMP_RE = re.compile(TIMESTAMP_PATTERN, re.ASCII)
_URL: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)

# Validation context key carrying the Mode
MODE_KEY = "mode"


def _check_timestamp(v: str) -> str:
    if not _TIMESTAMP_RE.fullmatch(v):
        raise PydanticCustomError("timestamp_format", TIMESTAMP_MESSAGE)
    return v


def _check_url(v: str) -> str:
    """Require a parseable URL but keep the caller's exact string."""
    try:
        _URL.validate_python(v)
    except ValidationError:
        raise PydanticCustomError("url_parsing", "Input should be a valid URL") from None
    return v


Timestamp: TypeAlias = Annotated[
    str,
    AfterValidator(_check_timestamp),
    WithJsonSchema({"type": "string", "pattern": TIMESTAMP_PATTERN}),
]
Url: TypeAlias = Annotated[str, AfterValidator(_check_url), WithJsonSchema({"type": "string", "format": "uri"})]
Number: TypeAlias = int | float


def _is_strict(info: ValidationInfo) -> bool:
    ctx = info.context
    return isinstance(ctx, dict) and ctx.get(MODE_KEY) == Mode.STRICT


class SlackModel(BaseModel):
    """Base for request, response and layout schemas.

    Unknown keys are dropped by default. When validated with the STRICT mode
    in the validation context they are rejected instead, at every nesting level.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _reject_unknown_fields(cls, data: Any, info: ValidationInfo) -> Any:
        if not isinstance(data, dict) or not _is_strict(info):
            return data
        unknown = sorted(str(k) for k in data if k not in cls.model_fields)
        if unknown:
            raise PydanticCustomError(
                "extra_forbidden",
                "Unknown field(s): {names}",
                {"names": ", ".join(unknown), "fields": tuple(unknown)},
            )
        return data

    def to_payload(self) -> dict[str, Any]:
        """Plain JSON form with absent optional values left out."""
        return self.model_dump(mode="json", exclude_none=True)
