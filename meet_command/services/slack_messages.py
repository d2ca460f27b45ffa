"""Helpers for composing Slack slash command replies."""

from __future__ import annotations

from typing import Literal, Sequence, Union

from meet_command.schemas import MarkdownText, MessageBlock, ResponseType, SlackMessage

Audience = Literal["everyone", "me"]

_RESPONSE_TYPES: dict[str, ResponseType] = {
    "everyone": "in_channel",
    "me": "ephemeral",
}


def create_message(markdown: Union[str, Sequence[str]], audience: Audience = "me") -> SlackMessage:
    """Build a message with one section block per markdown paragraph."""
    if audience not in _RESPONSE_TYPES:
        raise ValueError(f"Unsupported audience: {audience}")
    paragraphs = [markdown] if isinstance(markdown, str) else list(markdown)
    return SlackMessage(
        blocks=[MessageBlock(text=MarkdownText(text=text)) for text in paragraphs],
        response_type=_RESPONSE_TYPES[audience],
    )


__all__ = ["Audience", "create_message"]
