"""Schemas for Slack slash command replies."""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field

ResponseType = Literal["in_channel", "ephemeral"]


class MarkdownText(BaseModel):
    type: Literal["mrkdwn"] = "mrkdwn"
    text: str


class MessageBlock(BaseModel):
    """A single ``section`` block rendered by Slack."""

    type: Literal["section"] = "section"
    text: MarkdownText


class SlackMessage(BaseModel):
    """Reply body for a slash command invocation."""

    blocks: List[MessageBlock] = Field(default_factory=list)
    response_type: ResponseType = "ephemeral"


__all__ = ["MarkdownText", "MessageBlock", "ResponseType", "SlackMessage"]
