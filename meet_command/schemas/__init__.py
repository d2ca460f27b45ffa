"""Public schema exports."""

from .http import HandlerResponse
from .slack import MarkdownText, MessageBlock, ResponseType, SlackMessage

__all__ = [
    "HandlerResponse",
    "MarkdownText",
    "MessageBlock",
    "ResponseType",
    "SlackMessage",
]
