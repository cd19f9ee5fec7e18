"""
Server-Sent Events parser for FastGPT chat streams.

FastGPT multiplexes several event types over one stream::

    event: flowNodeStatus
    data: {"status":"running","name":"AI Chat"}

    event: answer
    data: {"id":"","object":"","created":0,"choices":[{"delta":{"content":"Hi"}}]}

    event: answer
    data: [DONE]

Parsing happens in two steps. ``iter_sse`` / ``aiter_sse`` reassemble raw
events from lines, and ``decode_event`` turns a raw event into a typed
``ChatStreamEvent`` using ``EVENT_DECODERS``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, AsyncIterable, AsyncIterator, Callable, Dict, Iterable, Iterator, List, NamedTuple, Optional

from pydantic import ValidationError

from fastgpt_sdk.models import (
    AnswerEvent,
    ChatStreamEvent,
    FlowNodeStatusEvent,
    FlowResponsesEvent,
    Interactive,
    StreamDecodeError,
)

logger = logging.getLogger(__name__)

DONE = "[DONE]"
DEFAULT_EVENT = "message"


class ServerSentEvent(NamedTuple):
    """A raw event: name plus the joined ``data:`` payload."""
    event: str
    data: str


class _EventBuilder:
    """Accumulates lines until a blank line completes an event."""

    def __init__(self):
        self.event = DEFAULT_EVENT
        self.data: List[str] = []

    def feed(self, line: str) -> Optional[ServerSentEvent]:
        line = line.rstrip("\n").rstrip("\r")

        if line == "":
            if not self.data:
                return None
            sse = ServerSentEvent(self.event, "".join(self.data))
            self.event = DEFAULT_EVENT
            self.data = []
            return sse

        if line.startswith("data:"):
            value = line[5:]
            if value.startswith(" "):
                value = value[1:]
            self.data.append(value)
        elif line.startswith("event:"):
            value = line[6:]
            if value:
                self.event = value[1:] if value.startswith(" ") else value
        else:
            # id:, retry:, ": comment"
            logger.debug("Ignoring SSE line: %r", line)
        return None

    def finish(self) -> None:
        if self.data:
            logger.debug(
                "SSE stream ended with an unterminated %r event, dropped", self.event
            )


def iter_sse(lines: Iterable[str]) -> Iterator[ServerSentEvent]:
    """
    Reassemble raw events from an iterable of text lines.

    Events without an ``event:`` line are named ``message``, both at the
    start of the stream and after each dispatched event. FastGPT sends
    every frame this way when the request has ``detail=False``.
    """
    builder = _EventBuilder()
    for line in lines:
        sse = builder.feed(line)
        if sse is not None:
            yield sse
    builder.finish()


async def aiter_sse(lines: AsyncIterable[str]) -> AsyncIterator[ServerSentEvent]:
    """Async variant of ``iter_sse``."""
    builder = _EventBuilder()
    async for line in lines:
        sse = builder.feed(line)
        if sse is not None:
            yield sse
    builder.finish()


# ──────────────────────────────────────────────────────────
# TYPED DISPATCH
# ──────────────────────────────────────────────────────────

def _passthrough(payload: str) -> str:
    return payload


def _json_decoder(model) -> Callable[[str], Any]:
    def decode(payload: str):
        return model.model_validate(json.loads(payload))
    return decode


def _decode_answer(payload: str):
    if payload == DONE:
        return DONE
    return AnswerEvent.model_validate(json.loads(payload))


EVENT_DECODERS: Dict[str, Callable[[str], Any]] = {
    "flowNodeStatus": _json_decoder(FlowNodeStatusEvent),
    "answer": _decode_answer,
    "fastAnswer": _decode_answer,
    "flowResponses": _json_decoder(FlowResponsesEvent),
    "interactive": _json_decoder(Interactive),
    "toolCall": _passthrough,
    "toolParams": _passthrough,
    "toolResponse": _passthrough,
    "updateVariables": _passthrough,
    "error": _passthrough,
}


def decode_event(sse: ServerSentEvent) -> ChatStreamEvent:
    """
    Decode a raw event into a ``ChatStreamEvent``.

    Unknown event names pass the payload through as a string.

    Raises:
        StreamDecodeError: The payload is not valid for its event type.
    """
    decoder = EVENT_DECODERS.get(sse.event, _passthrough)
    try:
        data = decoder(sse.data)
    except (json.JSONDecodeError, ValidationError) as e:
        raise StreamDecodeError(
            f"Invalid '{sse.event}' event payload",
            event=sse.event,
            payload=sse.data,
            detail=str(e),
        ) from e
    return ChatStreamEvent(event=sse.event, data=data, raw=sse.data)


def iter_chat_events(lines: Iterable[str]) -> Iterator[ChatStreamEvent]:
    """Parse and decode a chat stream from text lines."""
    for sse in iter_sse(lines):
        yield decode_event(sse)


async def aiter_chat_events(lines: AsyncIterable[str]) -> AsyncIterator[ChatStreamEvent]:
    """Async variant of ``iter_chat_events``."""
    async for sse in aiter_sse(lines):
        yield decode_event(sse)
