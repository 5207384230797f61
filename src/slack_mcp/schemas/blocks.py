"""Block Kit layout schema for structured messages.

A layout document is an ordered list of blocks, each tagged by ``type``:

    section   optional text, optional field texts, optional accessory
    divider   no payload
    image     image_url + alt_text, optional title
    header    plain_text object
    context   text or image elements
    actions   interactive elements

Section accessories and action elements are accepted as-is and forwarded
unchanged; their inner structure is not validated.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import Field

from .base import SlackModel, Url

MAX_BLOCKS = 50


class TextObject(SlackModel):
    type: Literal["plain_text", "mrkdwn"]
    text: str
    emoji: bool | None = None
    verbatim: bool | None = None


class HeaderText(SlackModel):
    type: Literal["plain_text"]
    text: str
    emoji: bool | None = None


class ImageElement(SlackModel):
    type: Literal["image"]
    image_url: Url
    alt_text: str


ContextElement = Annotated[Union[TextObject, ImageElement], Field(discriminator="type")]


class SectionBlock(SlackModel):
    type: Literal["section"]
    text: TextObject | None = None
    block_id: str | None = None
    fields: list[TextObject] | None = None
    accessory: Any = None


class DividerBlock(SlackModel):
    type: Literal["divider"]
    block_id: str | None = None


class ImageBlock(SlackModel):
    type: Literal["image"]
    image_url: Url
    alt_text: str
    title: TextObject | None = None
    block_id: str | None = None


class HeaderBlock(SlackModel):
    type: Literal["header"]
    text: HeaderText
    block_id: str | None = None


class ContextBlock(SlackModel):
    type: Literal["context"]
    elements: list[ContextElement]
    block_id: str | None = None


class ActionsBlock(SlackModel):
    type: Literal["actions"]
    elements: list[Any]
    block_id: str | None = None


Block = Annotated[
    Union[SectionBlock, DividerBlock, ImageBlock, HeaderBlock, ContextBlock, ActionsBlock],
    Field(discriminator="type"),
]

Blocks = Annotated[list[Block], Field(max_length=MAX_BLOCKS)]
