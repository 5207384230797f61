"""Response normalizer: Slack response -> stable textual tool result."""

from __future__ import annotations

from typing import Any

import orjson

from .foundation.errors import Mode, Result, ValidationFailure
from .schemas import SlackModel, SlackResponse
from .validation import Validator

THREAD_REPLY = "Reply sent to thread"


def render_payload(value: SlackModel) -> str:
    """Serialize a normalized response, leaving out fields Slack did not send."""
    return orjson.dumps(value.model_dump(mode="json", exclude_unset=True)).decode()


def confirmation(action: str, *, thread_ts: str | None = None) -> str:
    """Short confirmation for a write operation.

    >>> confirmation("Message posted")
    'Message posted successfully'
    >>> confirmation("Message posted", thread_ts="1234567890.123456")
    'Reply sent to thread successfully'
    """
    return f"{THREAD_REPLY if thread_ts else action} successfully"


class ResponseNormalizer:
    """Validates raw responses permissively and renders the tool result text."""

    __slots__ = ("_validator",)

    def __init__(self, validator: Validator | None = None) -> None:
        self._validator = validator or Validator()

    def normalize(self, schema_name: str, raw: Any) -> Result[SlackModel, ValidationFailure]:
        return self._validator.validate(schema_name, raw, mode=Mode.PERMISSIVE)

    def summarize(self, schema_name: str, raw: Any) -> Result[str, ValidationFailure]:
        """Normalized response as a JSON document (list/history/replies)."""
        return self.normalize(schema_name, raw).map(render_payload)

    def acknowledge(self, raw: Any, action: str, *, thread_ts: str | None = None) -> Result[str, ValidationFailure]:
        """Confirmation text for post/react, once the response shape checks out."""
        return self.normalize(SlackResponse.__name__, raw).map(lambda _: confirmation(action, thread_ts=thread_ts))
