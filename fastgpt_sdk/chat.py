"""
Chat API – completions (streaming and not), history and feedback.
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any, AsyncIterator, Awaitable, Callable, Iterator, List, Optional

from fastgpt_sdk.models import (
    ChatCompletion,
    ChatInit,
    ChatRequest,
    ChatStreamEvent,
    CreateQuestionGuideRequest,
    GetHistoriesRequest,
    GetPaginationRecordsRequest,
    HistoriesPage,
    QuestionGuide,
    RecordsPage,
    ResponseDataItem,
    UpdateHistoryRequest,
    UpdateUserFeedbackRequest,
)
from fastgpt_sdk.sse import aiter_chat_events

if TYPE_CHECKING:
    from fastgpt_sdk.client import FastGPTClient


_COMPLETIONS_PATH = "/api/v1/chat/completions"

# handler(event_name, payload); an exception ends the stream
ChatEventHandler = Callable[[str, Any], Optional[Awaitable[None]]]


class ChatAPI:
    """Chat endpoints. Access via ``client.chat``."""

    def __init__(self, client: "FastGPTClient"):
        self._client = client

    # ──────────────────────────────────────────────────────────
    # COMPLETIONS
    # ──────────────────────────────────────────────────────────

    async def astream(self, request: ChatRequest) -> AsyncIterator[ChatStreamEvent]:
        """
        Send a chat request and yield events as they arrive (async).

        ``stream`` is forced on. Yields ChatStreamEvent objects; the payload
        type depends on the event name:
            - "answer" / "fastAnswer" → AnswerEvent, or "[DONE]" at the end
            - "flowNodeStatus"        → FlowNodeStatusEvent
            - "flowResponses"         → FlowResponsesEvent (needs detail=True)
            - "interactive"           → Interactive
            - anything else           → raw payload string

        Example:
            async for event in client.chat.astream(request):
                if event.is_answer:
                    print(event.content, end="", flush=True)

        Raises:
            StreamDecodeError: A payload could not be decoded.
            FastGPTConnectionError: The connection failed mid-stream.
        """
        payload = request.model_copy(update={"stream": True}).to_payload()
        async with self._client._stream("POST", _COMPLETIONS_PATH, json=payload) as resp:
            async for event in aiter_chat_events(resp.aiter_lines()):
                yield event

    def stream(self, request: ChatRequest) -> Iterator[ChatStreamEvent]:
        """
        Send a chat request and yield events (sync generator).

        Same events as astream().

        Example:
            for event in client.chat.stream(request):
                if event.is_answer:
                    print(event.content, end="", flush=True)
        """
        return self._client._sync_iter(self.astream(request))

    async def achat(self, request: ChatRequest, handler: ChatEventHandler) -> None:
        """
        Stream a chat request, calling ``handler(event_name, payload)`` per event (async).

        The handler may be a coroutine function. Any exception it raises
        stops the stream and propagates to the caller.
        """
        events = self.astream(request)
        try:
            async for event in events:
                result = handler(event.event, event.data)
                if inspect.isawaitable(result):
                    await result
        finally:
            # release the HTTP response now, not when the generator is collected
            await events.aclose()

    def chat(self, request: ChatRequest, handler: Callable[[str, Any], Any]) -> None:
        """Stream a chat request through a callback (sync). See ``achat``."""
        for event in self.stream(request):
            handler(event.event, event.data)

    async def acreate_completion(self, request: ChatRequest) -> ChatCompletion:
        """Send a chat request and wait for the complete answer (async)."""
        payload = request.model_copy(update={"stream": False}).to_payload()
        data = await self._client._request("POST", _COMPLETIONS_PATH, json=payload)
        return ChatCompletion.model_validate(data)

    def create_completion(self, request: ChatRequest) -> ChatCompletion:
        """Send a chat request and wait for the complete answer (sync)."""
        return self._client._sync(self.acreate_completion(request))

    # ──────────────────────────────────────────────────────────
    # HISTORIES
    # ──────────────────────────────────────────────────────────

    async def aget_histories(self, request: GetHistoriesRequest) -> HistoriesPage:
        """List the conversations of an app, newest first (async)."""
        data = await self._client._request(
            "POST", "/api/core/chat/getHistories", json=request.to_payload()
        )
        return HistoriesPage.model_validate(data or {})

    def get_histories(self, request: GetHistoriesRequest) -> HistoriesPage:
        """List conversations (sync)."""
        return self._client._sync(self.aget_histories(request))

    async def aupdate_history(self, request: UpdateHistoryRequest) -> None:
        """Rename or pin a conversation (async)."""
        await self._client._request(
            "POST", "/api/core/chat/updateHistory", json=request.to_payload()
        )

    def update_history(self, request: UpdateHistoryRequest) -> None:
        """Rename or pin a conversation (sync)."""
        return self._client._sync(self.aupdate_history(request))

    async def adelete_history(self, app_id: str, chat_id: str) -> None:
        """Delete a conversation (async)."""
        await self._client._request(
            "DELETE",
            "/api/core/chat/delHistory",
            params={"chatId": chat_id, "appId": app_id},
        )

    def delete_history(self, app_id: str, chat_id: str) -> None:
        """Delete a conversation (sync)."""
        return self._client._sync(self.adelete_history(app_id, chat_id))

    async def aclear_histories(self, app_id: str) -> None:
        """Delete every conversation of an app (async)."""
        await self._client._request(
            "DELETE", "/api/core/chat/clearHistories", params={"appId": app_id}
        )

    def clear_histories(self, app_id: str) -> None:
        """Delete every conversation of an app (sync)."""
        return self._client._sync(self.aclear_histories(app_id))

    # ──────────────────────────────────────────────────────────
    # RECORDS
    # ──────────────────────────────────────────────────────────

    async def aget_init(self, app_id: str, chat_id: str) -> ChatInit:
        """Get the initial state of a conversation (async)."""
        data = await self._client._request(
            "GET", "/api/core/chat/init", params={"appId": app_id, "chatId": chat_id}
        )
        return ChatInit.model_validate(data or {})

    def get_init(self, app_id: str, chat_id: str) -> ChatInit:
        """Get the initial state of a conversation (sync)."""
        return self._client._sync(self.aget_init(app_id, chat_id))

    async def aget_pagination_records(
        self, request: GetPaginationRecordsRequest
    ) -> RecordsPage:
        """Page through the messages of a conversation (async)."""
        data = await self._client._request(
            "POST", "/api/core/chat/getPaginationRecords", json=request.to_payload()
        )
        return RecordsPage.model_validate(data or {})

    def get_pagination_records(self, request: GetPaginationRecordsRequest) -> RecordsPage:
        """Page through the messages of a conversation (sync)."""
        return self._client._sync(self.aget_pagination_records(request))

    async def aget_res_data(
        self, app_id: str, chat_id: str, data_id: str
    ) -> List[ResponseDataItem]:
        """Get the per-module run details of one record (async)."""
        data = await self._client._request(
            "GET",
            "/api/core/chat/getResData",
            params={"appId": app_id, "chatId": chat_id, "dataId": data_id},
        )
        return [ResponseDataItem.model_validate(item) for item in data or []]

    def get_res_data(self, app_id: str, chat_id: str, data_id: str) -> List[ResponseDataItem]:
        """Get the run details of one record (sync)."""
        return self._client._sync(self.aget_res_data(app_id, chat_id, data_id))

    async def adelete_item(self, app_id: str, chat_id: str, content_id: str) -> None:
        """Delete one record from a conversation (async)."""
        await self._client._request(
            "DELETE",
            "/api/core/chat/item/delete",
            params={"contentId": content_id, "chatId": chat_id, "appId": app_id},
        )

    def delete_item(self, app_id: str, chat_id: str, content_id: str) -> None:
        """Delete one record (sync)."""
        return self._client._sync(self.adelete_item(app_id, chat_id, content_id))

    # ──────────────────────────────────────────────────────────
    # FEEDBACK & QUESTION GUIDE
    # ──────────────────────────────────────────────────────────

    async def aupdate_user_feedback(self, request: UpdateUserFeedbackRequest) -> None:
        """Like or dislike a record (async)."""
        await self._client._request(
            "POST",
            "/api/core/chat/feedback/updateUserFeedback",
            json=request.to_payload(),
        )

    def update_user_feedback(self, request: UpdateUserFeedbackRequest) -> None:
        """Like or dislike a record (sync)."""
        return self._client._sync(self.aupdate_user_feedback(request))

    async def acreate_question_guide(
        self, request: CreateQuestionGuideRequest
    ) -> QuestionGuide:
        """Generate suggested follow-up questions for a conversation (async)."""
        data = await self._client._request(
            "POST",
            "/api/core/ai/agent/v2/createQuestionGuide",
            json=request.to_payload(),
        )
        return QuestionGuide.model_validate(data or [])

    def create_question_guide(self, request: CreateQuestionGuideRequest) -> QuestionGuide:
        """Generate suggested follow-up questions (sync)."""
        return self._client._sync(self.acreate_question_guide(request))
