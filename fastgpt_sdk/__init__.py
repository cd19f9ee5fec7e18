"""
FastGPT SDK – Python client for the FastGPT API.

Usage:
    from fastgpt_sdk import FastGPTClient, ChatRequest, Message

    client = FastGPTClient(
        base_url="https://cloud.fastgpt.cn",
        api_key="fastgpt-..."
    )

    request = ChatRequest(messages=[Message(role="user", content="Hello")])
    for event in client.chat.stream(request):
        print(event.content, end="")
"""

__version__ = "0.1.0"

from fastgpt_sdk.client import FastGPTClient
from fastgpt_sdk.models import (
    AnswerEvent,
    APIError,
    AuthenticationError,
    ChatCompletion,
    ChatRequest,
    ChatStreamEvent,
    FastGPTConnectionError,
    FastGPTError,
    FlowNodeStatusEvent,
    FlowResponsesEvent,
    Interactive,
    Message,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    StreamDecodeError,
)
from fastgpt_sdk.sse import DONE

__all__ = [
    "FastGPTClient",
    "ChatRequest",
    "Message",
    "ChatCompletion",
    "ChatStreamEvent",
    "AnswerEvent",
    "FlowNodeStatusEvent",
    "FlowResponsesEvent",
    "Interactive",
    "DONE",
    "FastGPTError",
    "APIError",
    "AuthenticationError",
    "PermissionDeniedError",
    "NotFoundError",
    "RateLimitError",
    "FastGPTConnectionError",
    "StreamDecodeError",
]
