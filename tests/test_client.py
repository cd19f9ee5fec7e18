"""
Tests for FastGPT SDK client and API groups.

Run: pytest tests/ -v
"""

import json

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock

from fastgpt_sdk import (
    APIError,
    AuthenticationError,
    ChatRequest,
    FastGPTClient,
    FastGPTConnectionError,
    FastGPTError,
    Message,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
)
from fastgpt_sdk.client import _BearerAuth
from fastgpt_sdk.models import (
    AppChartDataRequest,
    ChatCompletion,
    CollectionCreateAPIRequest,
    CollectionCreateExternalFileRequest,
    CollectionCreateLinkRequest,
    CollectionCreateRequest,
    CollectionCreateTextRequest,
    CollectionListRequest,
    CollectionUpdateRequest,
    CreateQuestionGuideRequest,
    DataListRequest,
    DataPushRequest,
    DataUpdateRequest,
    DatasetCreateRequest,
    DatasetData,
    DatasetTrainOrderRequest,
    GetHistoriesRequest,
    GetPaginationRecordsRequest,
    Index,
    QuestionGuide,
    QuestionGuideConfig,
    SearchTestRequest,
    SourceCountMap,
    UpdateHistoryRequest,
    UpdateUserFeedbackRequest,
)


# ═══════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════

def _envelope(data, code=200, message=""):
    return {"code": code, "statusText": "" if code == 200 else "error", "message": message, "data": data}


def _mock_http_response(data, status_code=200):
    """Create a mock httpx.Response."""
    resp = MagicMock()
    resp.is_success = 200 <= status_code < 300
    resp.status_code = status_code
    resp.json.return_value = data
    resp.text = json.dumps(data)
    resp.content = resp.text.encode()
    resp.headers = {}
    return resp


@pytest.fixture
def client():
    c = FastGPTClient("https://test.com", api_key="fastgpt-key")
    c._http = AsyncMock()
    return c


def _last_call(client):
    """(method, path, kwargs) of the last request."""
    args, kwargs = client._http.request.call_args
    return args[0], args[1], kwargs


def _stream_client(body, status_code=200):
    """Client whose transport answers every request with ``body``."""
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(status_code, content=body.encode())

    c = FastGPTClient("https://test.com", api_key="fastgpt-key")
    c._http = httpx.AsyncClient(base_url="https://test.com", transport=httpx.MockTransport(handler))
    return c, seen


SSE_BODY = (
    "event: flowNodeStatus\n"
    'data: {"status":"running","name":"AI Chat"}\n'
    "\n"
    "event: answer\n"
    'data: {"choices":[{"delta":{"content":"Hello"},"index":0}]}\n'
    "\n"
    "event: answer\n"
    'data: {"choices":[{"delta":{"content":" world"},"index":0}]}\n'
    "\n"
    "event: answer\n"
    "data: [DONE]\n"
    "\n"
)


# detail=False: FastGPT omits the event: lines
PLAIN_SSE_BODY = (
    'data: {"choices":[{"delta":{"content":"Hello"},"index":0}]}\n'
    "\n"
    'data: {"choices":[{"delta":{"content":" world"},"index":0}]}\n'
    "\n"
    "data: [DONE]\n"
    "\n"
)


class _TrackedStream(httpx.AsyncByteStream):
    """Response body that records whether it was closed."""

    def __init__(self, body):
        self.body = body
        self.closed = False

    async def __aiter__(self):
        yield self.body

    async def aclose(self):
        self.closed = True


def _chat_request():
    return ChatRequest(chat_id="chat-1", messages=[Message(role="user", content="Hi")])


# ═══════════════════════════════════════════════════════════
# CLIENT INIT
# ═══════════════════════════════════════════════════════════

class TestClientInit:

    def test_bearer_auth(self):
        c = FastGPTClient("https://test.com", api_key="fastgpt-key")
        assert isinstance(c._http.auth, _BearerAuth)
        c.close()

    def test_auth_flow_sets_header(self):
        flow = _BearerAuth("fastgpt-key").auth_flow(httpx.Request("GET", "https://test.com/x"))
        request = next(flow)
        assert request.headers["Authorization"] == "Bearer fastgpt-key"

    def test_default_headers(self):
        c = FastGPTClient("https://test.com", api_key="k")
        assert c._http.headers["Content-Type"] == "application/json"
        assert c._http.headers["User-Agent"].startswith("fastgpt-python-sdk/")
        c.close()

    def test_missing_key_raises(self):
        with pytest.raises(ValueError, match="api_key"):
            FastGPTClient("https://test.com", api_key="")

    def test_missing_url_raises(self):
        with pytest.raises(ValueError, match="base_url"):
            FastGPTClient("", api_key="k")

    def test_url_trailing_slash_stripped(self):
        c = FastGPTClient("https://test.com/", api_key="k")
        assert c.base_url == "https://test.com"
        c.close()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("FASTGPT_BASE_URL", "https://env.test")
        monkeypatch.setenv("FASTGPT_API_KEY", "env-key")
        monkeypatch.setenv("FASTGPT_TIMEOUT", "12")
        c = FastGPTClient.from_env()
        assert c.base_url == "https://env.test"
        assert c._timeout == 12.0
        c.close()

    def test_from_env_missing(self, monkeypatch):
        monkeypatch.delenv("FASTGPT_BASE_URL", raising=False)
        monkeypatch.delenv("FASTGPT_API_KEY", raising=False)
        with pytest.raises(ValueError, match="FASTGPT_BASE_URL"):
            FastGPTClient.from_env()

    def test_set_debug(self):
        c = FastGPTClient("https://test.com", api_key="k")
        c.set_debug(True)
        assert c.debug
        assert "debug=True" in repr(c)
        c.close()

    def test_resource_groups(self):
        c = FastGPTClient("https://test.com", api_key="k")
        assert c.app._client is c
        assert c.chat._client is c
        assert c.dataset._client is c
        c.close()


# ═══════════════════════════════════════════════════════════
# MODELS
# ═══════════════════════════════════════════════════════════

class TestModels:

    def test_request_payload_uses_camel_case_and_drops_none(self):
        payload = _chat_request().to_payload()
        assert payload["chatId"] == "chat-1"
        assert payload["messages"] == [{"role": "user", "content": "Hi"}]
        assert "variables" not in payload
        assert "responseChatItemId" not in payload

    def test_snake_case_wire_names(self):
        counts = SourceCountMap.model_validate({"official_account": 3, "cronJob": 2})
        assert counts.official_account == 3
        assert counts.cron_job == 2

    def test_underscore_id_alias(self):
        data = DatasetData.model_validate({"_id": "d1", "q": "question", "indexes": [{"text": "t"}]})
        assert data.id == "d1"
        assert data.indexes[0].text == "t"

    def test_chat_completion_text(self):
        completion = ChatCompletion.model_validate({
            "id": "c1",
            "model": "gpt",
            "usage": {"prompt_tokens": 3, "completion_tokens": 5, "total_tokens": 8},
            "choices": [{"message": {"role": "assistant", "content": "Answer"}, "finish_reason": "stop", "index": 0}],
        })
        assert completion.text == "Answer"
        assert completion.usage.total_tokens == 8
        assert completion.choices[0].finish_reason == "stop"
        assert completion.response_data == []

    def test_question_guide_accepts_list(self):
        assert QuestionGuide.model_validate(["a", "b"]).questions == ["a", "b"]
        assert QuestionGuide.model_validate({"questions": ["c"]}).questions == ["c"]


# ═══════════════════════════════════════════════════════════
# EXCEPTIONS
# ═══════════════════════════════════════════════════════════

class TestExceptions:

    def test_error_str(self):
        err = FastGPTError("Failed", status_code=500, detail="Internal")
        assert "[500]" in str(err)
        assert "Internal" in str(err)

    def test_error_without_status(self):
        assert str(FastGPTError("Generic error")) == "Generic error"

    def test_hierarchy(self):
        for cls in (AuthenticationError, PermissionDeniedError, NotFoundError, APIError, FastGPTConnectionError):
            assert issubclass(cls, FastGPTError)

    def test_rate_limit_retry_after(self):
        err = RateLimitError("Too fast", retry_after=30, status_code=429)
        assert err.retry_after == 30


# ═══════════════════════════════════════════════════════════
# ERROR MAPPING & ENVELOPE
# ═══════════════════════════════════════════════════════════

class TestResponseHandling:

    @pytest.mark.asyncio
    async def test_envelope_unwrapped(self, client):
        client._http.request.return_value = _mock_http_response(_envelope({"totalUsers": 4}))
        result = await client._request("GET", "/x")
        assert result == {"totalUsers": 4}

    @pytest.mark.asyncio
    async def test_plain_body_returned_as_is(self, client):
        client._http.request.return_value = _mock_http_response([1, 2])
        assert await client._request("GET", "/x") == [1, 2]

    @pytest.mark.asyncio
    async def test_envelope_error_code(self, client):
        client._http.request.return_value = _mock_http_response(
            _envelope(None, code=500, message="Dataset not found")
        )
        with pytest.raises(APIError) as exc_info:
            await client._request("GET", "/x")
        assert exc_info.value.code == 500
        assert exc_info.value.message == "Dataset not found"

    @pytest.mark.asyncio
    async def test_error_401(self, client):
        client._http.request.return_value = _mock_http_response(
            _envelope(None, code=401, message="unAuthorization"), status_code=401
        )
        with pytest.raises(AuthenticationError) as exc_info:
            await client._request("GET", "/x")
        assert exc_info.value.detail == "unAuthorization"

    @pytest.mark.asyncio
    async def test_error_403(self, client):
        client._http.request.return_value = _mock_http_response({}, status_code=403)
        with pytest.raises(PermissionDeniedError):
            await client._request("GET", "/x")

    @pytest.mark.asyncio
    async def test_error_404(self, client):
        client._http.request.return_value = _mock_http_response({}, status_code=404)
        with pytest.raises(NotFoundError):
            await client._request("GET", "/x")

    @pytest.mark.asyncio
    async def test_error_429(self, client):
        mock_resp = _mock_http_response({"message": "Rate limit"}, status_code=429)
        mock_resp.headers = {"Retry-After": "30"}
        client._http.request.return_value = mock_resp
        with pytest.raises(RateLimitError) as exc_info:
            await client._request("GET", "/x")
        assert exc_info.value.retry_after == 30

    @pytest.mark.asyncio
    async def test_error_500(self, client):
        client._http.request.return_value = _mock_http_response({"detail": "boom"}, status_code=500)
        with pytest.raises(APIError) as exc_info:
            await client._request("GET", "/x")
        assert exc_info.value.status_code == 500
        assert exc_info.value.detail == "boom"

    @pytest.mark.asyncio
    async def test_transport_error_wrapped(self, client):
        client._http.request.side_effect = httpx.ConnectError("refused")
        with pytest.raises(FastGPTConnectionError) as exc_info:
            await client._request("GET", "/x")
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


# ═══════════════════════════════════════════════════════════
# APP
# ═══════════════════════════════════════════════════════════

class TestAppAPI:

    @pytest.mark.asyncio
    async def test_aget_total_data(self, client):
        client._http.request.return_value = _mock_http_response(
            _envelope({"totalUsers": 10, "totalChats": 20, "totalPoints": 3.5})
        )
        total = await client.app.aget_total_data("app-1")
        assert total.total_users == 10
        assert total.total_points == 3.5
        method, path, kwargs = _last_call(client)
        assert (method, path) == ("GET", "/api/proApi/core/app/logs/getTotalData")
        assert kwargs["params"] == {"appId": "app-1"}

    @pytest.mark.asyncio
    async def test_aget_chart_data(self, client):
        client._http.request.return_value = _mock_http_response(_envelope({
            "userData": [{"timestamp": 1758240000000, "summary": {"userCount": 2, "sourceCountMap": {"api": 2}}}],
            "chatData": [],
            "appData": [{"timestamp": 1758240000000, "summary": {"goodFeedBackCount": 1}}],
        }))
        request = AppChartDataRequest(
            app_id="app-1",
            date_start="2025-09-19T16:00:00.000Z",
            date_end="2025-09-27T15:59:59.999Z",
            source=["api"],
        )
        chart = await client.app.aget_chart_data(request)
        assert chart.user_data[0].summary.source_count_map.api == 2
        assert chart.app_data[0].summary.good_feed_back_count == 1

        payload = _last_call(client)[2]["json"]
        assert payload["appId"] == "app-1"
        assert payload["userTimespan"] == "day"

    def test_sync_get_total_data(self, client):
        client._http.request.return_value = _mock_http_response(_envelope({"totalUsers": 1}))
        assert client.app.get_total_data("app-1").total_users == 1
        method, path, kwargs = _last_call(client)
        assert (method, path) == ("GET", "/api/proApi/core/app/logs/getTotalData")
        client.close()

    def test_sync_get_chart_data(self, client):
        client._http.request.return_value = _mock_http_response(_envelope({"chatData": [
            {"timestamp": 1, "summary": {"chatCount": 7}},
        ]}))
        request = AppChartDataRequest(app_id="app-1", date_start="a", date_end="b")
        chart = client.app.get_chart_data(request)
        assert chart.chat_data[0].summary.chat_count == 7
        method, path, kwargs = _last_call(client)
        assert (method, path) == ("POST", "/api/proApi/core/app/logs/getChartData")
        assert kwargs["json"]["dateStart"] == "a"
        client.close()


# ═══════════════════════════════════════════════════════════
# CHAT
# ═══════════════════════════════════════════════════════════

class TestChatAPI:

    @pytest.mark.asyncio
    async def test_astream(self):
        c, seen = _stream_client(SSE_BODY)
        events = [e async for e in c.chat.astream(_chat_request())]

        assert [e.event for e in events] == ["flowNodeStatus", "answer", "answer", "answer"]
        assert "".join(e.content for e in events) == "Hello world"
        assert events[-1].is_done

        sent = json.loads(seen[0].content)
        assert seen[0].url.path == "/api/v1/chat/completions"
        assert sent["stream"] is True
        assert sent["chatId"] == "chat-1"
        await c.aclose()

    @pytest.mark.asyncio
    async def test_achat_callback(self):
        c, _ = _stream_client(SSE_BODY)
        received = []
        await c.chat.achat(_chat_request(), lambda name, data: received.append((name, data)))
        assert [name for name, _ in received] == ["flowNodeStatus", "answer", "answer", "answer"]
        assert received[-1][1] == "[DONE]"
        await c.aclose()

    @pytest.mark.asyncio
    async def test_achat_async_callback(self):
        c, _ = _stream_client(SSE_BODY)
        received = []

        async def handler(name, data):
            received.append(name)

        await c.chat.achat(_chat_request(), handler)
        assert len(received) == 4
        await c.aclose()

    @pytest.mark.asyncio
    async def test_achat_handler_error_stops_stream(self):
        c, _ = _stream_client(SSE_BODY)
        calls = []

        def handler(name, data):
            calls.append(name)
            if name == "answer":
                raise RuntimeError("stop here")

        with pytest.raises(RuntimeError, match="stop here"):
            await c.chat.achat(_chat_request(), handler)
        assert calls == ["flowNodeStatus", "answer"]
        await c.aclose()

    @pytest.mark.asyncio
    async def test_achat_handler_error_closes_response(self):
        body = _TrackedStream(SSE_BODY.encode())
        c = FastGPTClient("https://test.com", api_key="fastgpt-key")
        c._http = httpx.AsyncClient(
            base_url="https://test.com",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, stream=body)),
        )

        def handler(name, data):
            raise RuntimeError("stop")

        with pytest.raises(RuntimeError):
            await c.chat.achat(_chat_request(), handler)
        assert body.closed
        await c.aclose()

    @pytest.mark.asyncio
    async def test_astream_without_event_names(self):
        c, _ = _stream_client(PLAIN_SSE_BODY)
        events = [e async for e in c.chat.astream(_chat_request())]
        assert [e.event for e in events] == ["message", "message", "message"]
        assert "".join(e.content for e in events) == "Hello world"
        assert events[-1].is_done
        await c.aclose()

    @pytest.mark.asyncio
    async def test_astream_http_error(self):
        c, _ = _stream_client(json.dumps(_envelope(None, code=401, message="bad key")), status_code=401)
        with pytest.raises(AuthenticationError):
            async for _ in c.chat.astream(_chat_request()):
                pass
        await c.aclose()

    def test_sync_stream(self):
        c, _ = _stream_client(SSE_BODY)
        text = "".join(e.content for e in c.chat.stream(_chat_request()))
        assert text == "Hello world"
        c.close()

    def test_sync_chat_callback(self):
        c, _ = _stream_client(SSE_BODY)
        names = []
        c.chat.chat(_chat_request(), lambda name, data: names.append(name))
        assert names == ["flowNodeStatus", "answer", "answer", "answer"]
        c.close()

    @pytest.mark.asyncio
    async def test_acreate_completion(self, client):
        client._http.request.return_value = _mock_http_response({
            "id": "c1",
            "model": "",
            "usage": {"prompt_tokens": 1, "completion_tokens": 1, "total_tokens": 2},
            "choices": [{"message": {"role": "assistant", "content": "Hi!"}, "finish_reason": "stop", "index": 0}],
            "responseData": [{"moduleName": "AI Chat", "tokens": 2}],
        })
        request = _chat_request()
        request.stream = True
        request.detail = True
        completion = await client.chat.acreate_completion(request)

        assert completion.text == "Hi!"
        assert completion.response_data[0].module_name == "AI Chat"
        payload = _last_call(client)[2]["json"]
        assert payload["stream"] is False
        assert payload["detail"] is True

    @pytest.mark.asyncio
    async def test_aget_histories(self, client):
        client._http.request.return_value = _mock_http_response(_envelope({
            "list": [{"chatId": "c1", "appId": "a1", "title": "Hi", "customTitle": "", "top": True}],
            "total": 1,
        }))
        page = await client.chat.aget_histories(GetHistoriesRequest(app_id="a1"))
        assert page.total == 1
        assert page.list[0].display_title == "Hi"
        assert page.list[0].top
        method, path, kwargs = _last_call(client)
        assert path == "/api/core/chat/getHistories"
        assert kwargs["json"] == {"appId": "a1", "offset": 0, "pageSize": 20, "source": "api"}

    @pytest.mark.asyncio
    async def test_aupdate_history(self, client):
        client._http.request.return_value = _mock_http_response(_envelope(None))
        await client.chat.aupdate_history(UpdateHistoryRequest(app_id="a1", chat_id="c1", top=False))
        payload = _last_call(client)[2]["json"]
        assert payload == {"appId": "a1", "chatId": "c1", "top": False}

    @pytest.mark.asyncio
    async def test_adelete_history(self, client):
        client._http.request.return_value = _mock_http_response(_envelope(None))
        await client.chat.adelete_history("a1", "c1")
        method, path, kwargs = _last_call(client)
        assert (method, path) == ("DELETE", "/api/core/chat/delHistory")
        assert kwargs["params"] == {"chatId": "c1", "appId": "a1"}

    @pytest.mark.asyncio
    async def test_aclear_histories(self, client):
        client._http.request.return_value = _mock_http_response(_envelope(None))
        await client.chat.aclear_histories("a1")
        method, path, kwargs = _last_call(client)
        assert (method, path) == ("DELETE", "/api/core/chat/clearHistories")
        assert kwargs["params"] == {"appId": "a1"}

    @pytest.mark.asyncio
    async def test_aget_init(self, client):
        client._http.request.return_value = _mock_http_response(_envelope({
            "chatId": "c1",
            "appId": "a1",
            "variables": {},
            "app": {"name": "Bot", "chatConfig": {"welcomeText": "Hello", "ttsConfig": {"type": "web"}}},
        }))
        init = await client.chat.aget_init("a1", "c1")
        assert init.app.name == "Bot"
        assert init.app.chat_config.welcome_text == "Hello"
        assert init.app.chat_config.tts_config.type == "web"

    @pytest.mark.asyncio
    async def test_aget_res_data(self, client):
        client._http.request.return_value = _mock_http_response(_envelope([
            {"moduleName": "Dataset Search", "quoteList": [{"id": "q1", "score": 0.9}]},
        ]))
        items = await client.chat.aget_res_data("a1", "c1", "d1")
        assert items[0].module_name == "Dataset Search"
        assert items[0].quote_list[0].id == "q1"
        assert _last_call(client)[2]["params"] == {"appId": "a1", "chatId": "c1", "dataId": "d1"}

    @pytest.mark.asyncio
    async def test_adelete_item(self, client):
        client._http.request.return_value = _mock_http_response(_envelope(None))
        await client.chat.adelete_item("a1", "c1", "x1")
        method, path, kwargs = _last_call(client)
        assert (method, path) == ("DELETE", "/api/core/chat/item/delete")
        assert kwargs["params"]["contentId"] == "x1"

    @pytest.mark.asyncio
    async def test_aget_pagination_records(self, client):
        client._http.request.return_value = _mock_http_response(_envelope({
            "list": [
                {"_id": "r1", "dataId": "d1", "obj": "Human", "value": [{"type": "text", "text": {"content": "Hi"}}]},
                {"_id": "r2", "dataId": "d2", "obj": "AI", "value": []},
            ],
            "total": 2,
        }))
        page = await client.chat.aget_pagination_records(
            GetPaginationRecordsRequest(app_id="a1", chat_id="c1", page_size=2)
        )
        assert page.total == 2
        assert page.list[0].id == "r1"
        assert page.list[0].is_human
        assert not page.list[1].is_human

        method, path, kwargs = _last_call(client)
        assert (method, path) == ("POST", "/api/core/chat/getPaginationRecords")
        assert kwargs["json"] == {
            "appId": "a1", "chatId": "c1", "offset": 0, "pageSize": 2, "loadCustomFeedbacks": False,
        }

    @pytest.mark.asyncio
    async def test_aupdate_user_feedback(self, client):
        client._http.request.return_value = _mock_http_response(_envelope(None))
        await client.chat.aupdate_user_feedback(
            UpdateUserFeedbackRequest(app_id="a1", chat_id="c1", data_id="d1", user_good_feedback="yes")
        )
        method, path, kwargs = _last_call(client)
        assert (method, path) == ("POST", "/api/core/chat/feedback/updateUserFeedback")
        assert kwargs["json"] == {"appId": "a1", "chatId": "c1", "dataId": "d1", "userGoodFeedback": "yes"}

    @pytest.mark.asyncio
    async def test_acreate_question_guide(self, client):
        client._http.request.return_value = _mock_http_response(_envelope(["Why?", "How?"]))
        guide = await client.chat.acreate_question_guide(
            CreateQuestionGuideRequest(app_id="a1", chat_id="c1", question_guide=QuestionGuideConfig(model="gpt"))
        )
        assert guide.questions == ["Why?", "How?"]
        method, path, kwargs = _last_call(client)
        assert (method, path) == ("POST", "/api/core/ai/agent/v2/createQuestionGuide")
        assert kwargs["json"] == {"appId": "a1", "chatId": "c1", "questionGuide": {"open": True, "model": "gpt"}}


# ═══════════════════════════════════════════════════════════
# DATASET
# ═══════════════════════════════════════════════════════════

class TestDatasetAPI:

    @pytest.mark.asyncio
    async def test_acreate_dataset(self, client):
        client._http.request.return_value = _mock_http_response(_envelope("ds-1"))
        dataset_id = await client.dataset.acreate_dataset(DatasetCreateRequest(name="Docs", intro="Manuals"))
        assert dataset_id == "ds-1"
        assert _last_call(client)[2]["json"] == {"name": "Docs", "type": "dataset", "intro": "Manuals"}

    @pytest.mark.asyncio
    async def test_aget_dataset_list(self, client):
        client._http.request.return_value = _mock_http_response(_envelope([
            {"_id": "ds-1", "name": "Docs", "type": "dataset", "vectorModel": {"model": "text-embedding-3-small"}},
            {"_id": "f-1", "name": "Folder", "type": "folder"},
        ]))
        datasets = await client.dataset.aget_dataset_list()
        assert [d.id for d in datasets] == ["ds-1", "f-1"]
        assert datasets[0].vector_model.model == "text-embedding-3-small"
        assert datasets[1].is_folder
        assert _last_call(client)[2]["json"] == {"parentId": None}

    @pytest.mark.asyncio
    async def test_adelete_dataset(self, client):
        client._http.request.return_value = _mock_http_response(_envelope(None))
        await client.dataset.adelete_dataset("ds-1")
        method, path, kwargs = _last_call(client)
        assert (method, path) == ("DELETE", "/api/core/dataset/delete")
        assert kwargs["params"] == {"id": "ds-1"}

    @pytest.mark.asyncio
    async def test_acreate_text_collection(self, client):
        client._http.request.return_value = _mock_http_response(_envelope({
            "collectionId": "col-1",
            "results": {"insertLen": 5, "overToken": [], "repeat": [], "error": []},
        }))
        request = CollectionCreateTextRequest(dataset_id="ds-1", name="Notes", text="Lorem ipsum", chunk_size=512)
        result = await client.dataset.acreate_text_collection(request)
        assert result.collection_id == "col-1"
        assert result.results.insert_len == 5

        method, path, kwargs = _last_call(client)
        assert path == "/api/core/dataset/collection/create/text"
        assert kwargs["json"]["trainingType"] == "chunk"
        assert kwargs["json"]["chunkSize"] == 512

    @pytest.mark.asyncio
    async def test_aget_collection_list(self, client):
        client._http.request.return_value = _mock_http_response(_envelope({
            "list": [{"_id": "col-1", "name": "Notes", "type": "virtual", "dataAmount": 5}],
            "total": 1,
        }))
        page = await client.dataset.aget_collection_list(CollectionListRequest(dataset_id="ds-1", search_text="No"))
        assert page.list[0].data_amount == 5
        assert _last_call(client)[2]["json"]["searchText"] == "No"

    @pytest.mark.asyncio
    async def test_adelete_collection(self, client):
        client._http.request.return_value = _mock_http_response(_envelope(None))
        await client.dataset.adelete_collection(["col-1", "col-2"])
        assert _last_call(client)[2]["json"] == {"collectionIds": ["col-1", "col-2"]}

    @pytest.mark.asyncio
    async def test_apush_data(self, client):
        client._http.request.return_value = _mock_http_response(_envelope({
            "insertLen": 1, "overToken": [], "repeat": [], "error": [],
        }))
        request = DataPushRequest(
            collection_id="col-1",
            data=[DatasetData(q="What?", a="That.", indexes=[Index(text="custom index")])],
        )
        result = await client.dataset.apush_data(request)
        assert result.insert_len == 1
        payload = _last_call(client)[2]["json"]
        assert payload["collectionId"] == "col-1"
        assert payload["data"][0] == {"q": "What?", "a": "That.", "indexes": [{"text": "custom index"}]}

    @pytest.mark.asyncio
    async def test_asearch_test_list(self, client):
        client._http.request.return_value = _mock_http_response(_envelope([
            {"id": "d1", "q": "refunds", "a": "", "datasetId": "ds-1", "collectionId": "col-1",
             "sourceName": "faq.md", "score": 0.82},
        ]))
        results = await client.dataset.asearch_test(SearchTestRequest(dataset_id="ds-1", text="refund"))
        assert results[0].source_name == "faq.md"
        payload = _last_call(client)[2]["json"]
        assert payload["searchMode"] == "embedding"
        assert payload["usingReRank"] is False

    @pytest.mark.asyncio
    async def test_asearch_test_nested_list(self, client):
        client._http.request.return_value = _mock_http_response(_envelope({
            "list": [{"id": "d1", "q": "refunds"}],
            "duration": "0.3s",
        }))
        results = await client.dataset.asearch_test(SearchTestRequest(dataset_id="ds-1", text="refund"))
        assert [r.id for r in results] == ["d1"]

    @pytest.mark.asyncio
    async def test_acreate_train_order(self, client):
        client._http.request.return_value = _mock_http_response(_envelope("bill-1"))
        bill_id = await client.dataset.acreate_train_order(DatasetTrainOrderRequest(dataset_id="ds-1"))
        assert bill_id == "bill-1"
        method, path, kwargs = _last_call(client)
        assert path == "/api/support/wallet/usage/createTrainingUsage"
        assert kwargs["json"] == {"datasetId": "ds-1"}

    @pytest.mark.asyncio
    async def test_aget_dataset_detail(self, client):
        client._http.request.return_value = _mock_http_response(_envelope({
            "_id": "ds-1", "name": "Docs", "agentModel": {"model": "gpt-4o-mini", "maxContext": 128000},
        }))
        info = await client.dataset.aget_dataset_detail("ds-1")
        assert info.agent_model.max_context == 128000
        method, path, kwargs = _last_call(client)
        assert (method, path) == ("GET", "/api/core/dataset/detail")
        assert kwargs["params"] == {"id": "ds-1"}

    @pytest.mark.asyncio
    async def test_acreate_collection(self, client):
        client._http.request.return_value = _mock_http_response(_envelope("col-1"))
        collection_id = await client.dataset.acreate_collection(
            CollectionCreateRequest(dataset_id="ds-1", name="Manual", metadata={"k": "v"})
        )
        assert collection_id == "col-1"
        method, path, kwargs = _last_call(client)
        assert (method, path) == ("POST", "/api/core/dataset/collection/create")
        assert kwargs["json"] == {"datasetId": "ds-1", "name": "Manual", "type": "virtual", "metadata": {"k": "v"}}

    @pytest.mark.asyncio
    async def test_acreate_link_collection(self, client):
        client._http.request.return_value = _mock_http_response(_envelope({"collectionId": "col-2"}))
        result = await client.dataset.acreate_link_collection(
            CollectionCreateLinkRequest(dataset_id="ds-1", link="https://doc.fastgpt.cn", training_type="qa")
        )
        assert result.collection_id == "col-2"
        method, path, kwargs = _last_call(client)
        assert (method, path) == ("POST", "/api/core/dataset/collection/create/link")
        assert kwargs["json"] == {"datasetId": "ds-1", "trainingType": "qa", "link": "https://doc.fastgpt.cn"}

    @pytest.mark.asyncio
    async def test_acreate_api_collection(self, client):
        client._http.request.return_value = _mock_http_response(_envelope({"collectionId": "col-3"}))
        await client.dataset.acreate_api_collection(
            CollectionCreateAPIRequest(dataset_id="ds-1", name="Remote", api_file_id="file-9")
        )
        method, path, kwargs = _last_call(client)
        assert (method, path) == ("POST", "/api/core/dataset/collection/create/apiCollection")
        assert kwargs["json"]["apiFileId"] == "file-9"
        assert kwargs["json"]["name"] == "Remote"

    @pytest.mark.asyncio
    async def test_acreate_external_file_collection(self, client):
        client._http.request.return_value = _mock_http_response(_envelope({"collectionId": "col-4"}))
        await client.dataset.acreate_external_file_collection(
            CollectionCreateExternalFileRequest(
                dataset_id="ds-1", external_file_url="https://files.test/a.pdf", filename="a.pdf"
            )
        )
        method, path, kwargs = _last_call(client)
        assert (method, path) == ("POST", "/api/proApi/core/dataset/collection/create/externalFileUrl")
        assert kwargs["json"]["externalFileUrl"] == "https://files.test/a.pdf"
        assert kwargs["json"]["filename"] == "a.pdf"

    @pytest.mark.asyncio
    async def test_aget_collection_detail(self, client):
        client._http.request.return_value = _mock_http_response(_envelope({
            "_id": "col-1", "name": "Notes", "permission": {"hasWritePer": True},
        }))
        info = await client.dataset.aget_collection_detail("col-1")
        assert info.permission.has_write_per
        method, path, kwargs = _last_call(client)
        assert (method, path) == ("GET", "/api/core/dataset/collection/detail")
        assert kwargs["params"] == {"id": "col-1"}

    @pytest.mark.asyncio
    async def test_aupdate_collection(self, client):
        client._http.request.return_value = _mock_http_response(_envelope(None))
        await client.dataset.aupdate_collection(CollectionUpdateRequest(id="col-1", name="Renamed", forbid=True))
        method, path, kwargs = _last_call(client)
        assert (method, path) == ("PUT", "/api/core/dataset/collection/update")
        assert kwargs["json"] == {"id": "col-1", "name": "Renamed", "forbid": True}

    @pytest.mark.asyncio
    async def test_aget_data_list(self, client):
        client._http.request.return_value = _mock_http_response(_envelope({
            "list": [{"_id": "d1", "q": "What?", "chunkIndex": 0}],
            "total": 1,
        }))
        page = await client.dataset.aget_data_list(DataListRequest(collection_id="col-1", search_text="Wh"))
        assert page.list[0].id == "d1"
        assert page.list[0].chunk_index == 0
        method, path, kwargs = _last_call(client)
        assert (method, path) == ("POST", "/api/core/dataset/data/v2/list")
        assert kwargs["json"] == {"collectionId": "col-1", "offset": 0, "pageSize": 10, "searchText": "Wh"}

    @pytest.mark.asyncio
    async def test_aget_data_detail(self, client):
        client._http.request.return_value = _mock_http_response(_envelope({"id": "d1", "q": "What?", "a": "That."}))
        data = await client.dataset.aget_data_detail("d1")
        assert data.a == "That."
        method, path, kwargs = _last_call(client)
        assert (method, path) == ("GET", "/api/core/dataset/data/detail")
        assert kwargs["params"] == {"id": "d1"}

    @pytest.mark.asyncio
    async def test_aupdate_data(self, client):
        client._http.request.return_value = _mock_http_response(_envelope(None))
        await client.dataset.aupdate_data(
            DataUpdateRequest(data_id="d1", q="New?", indexes=[Index(text="extra", type="custom")])
        )
        method, path, kwargs = _last_call(client)
        assert (method, path) == ("PUT", "/api/core/dataset/data/update")
        assert kwargs["json"] == {"dataId": "d1", "q": "New?", "indexes": [{"text": "extra", "type": "custom"}]}

    @pytest.mark.asyncio
    async def test_adelete_data(self, client):
        client._http.request.return_value = _mock_http_response(_envelope(None))
        await client.dataset.adelete_data("d1")
        method, path, kwargs = _last_call(client)
        assert (method, path) == ("DELETE", "/api/core/dataset/data/delete")
        assert kwargs["params"] == {"id": "d1"}

    def test_sync_wrapper(self, client):
        client._http.request.return_value = _mock_http_response(_envelope({"_id": "col-1", "name": "Notes"}))
        info = client.dataset.get_collection_detail("col-1")
        assert info.name == "Notes"
        client.close()
