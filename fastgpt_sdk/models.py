"""
Data models for FastGPT SDK requests and responses.
"""

from __future__ import annotations

from functools import cached_property
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel


# ═══════════════════════════════════════════════════════════
# EXCEPTIONS
# ═══════════════════════════════════════════════════════════

class FastGPTError(Exception):
    """Base exception for all FastGPT SDK errors."""

    def __init__(self, message: str, status_code: int = 0, detail: str = ""):
        self.message = message
        self.status_code = status_code
        self.detail = detail
        super().__init__(self.message)

    def __str__(self) -> str:
        base = f"[{self.status_code}] {self.message}" if self.status_code else self.message
        return f"{base} – {self.detail}" if self.detail else base


class AuthenticationError(FastGPTError):
    """Raised when the API key is invalid or expired."""
    pass


class PermissionDeniedError(FastGPTError):
    """Raised when the API key may not access the resource."""
    pass


class NotFoundError(FastGPTError):
    """Raised when a resource is not found."""
    pass


class RateLimitError(FastGPTError):
    """Raised when rate limit is exceeded."""

    def __init__(self, message: str, retry_after: int = 60, **kwargs):
        self.retry_after = retry_after
        super().__init__(message, **kwargs)


class APIError(FastGPTError):
    """
    Raised when FastGPT reports a failure.

    Either a non-2xx HTTP status, or a response envelope whose
    ``code`` is not 200.
    """

    def __init__(self, message: str, code: int = 0, **kwargs):
        self.code = code
        super().__init__(message, **kwargs)


class FastGPTConnectionError(FastGPTError):
    """Raised when the server cannot be reached or the connection drops."""
    pass


class StreamDecodeError(FastGPTError):
    """Raised when an SSE event payload cannot be decoded."""

    def __init__(self, message: str, event: str = "", payload: str = "", **kwargs):
        self.event = event
        self.payload = payload
        super().__init__(message, **kwargs)


# ═══════════════════════════════════════════════════════════
# BASE
# ═══════════════════════════════════════════════════════════

class FastGPTModel(BaseModel):
    """Base model: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, value: Any) -> Any:
        # a JSON null means "not set": fall back to the field default
        if isinstance(value, dict):
            return {k: v for k, v in value.items() if v is not None}
        return value

    def to_payload(self) -> Dict[str, Any]:
        """Serialise as a request body, dropping unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Envelope(FastGPTModel):
    """Standard FastGPT response wrapper."""
    code: int = 200
    status_text: str = ""
    message: str = ""
    data: Any = None

    @property
    def is_success(self) -> bool:
        return self.code == 200


# ═══════════════════════════════════════════════════════════
# APP STATISTICS
# ═══════════════════════════════════════════════════════════

class AppTotalData(FastGPTModel):
    """Cumulative usage of an app."""
    total_users: int = 0
    total_chats: int = 0
    total_points: float = 0


class AppChartDataRequest(FastGPTModel):
    app_id: str
    date_start: str
    date_end: str
    offset: int = 1
    source: List[str] = Field(default_factory=list)
    user_timespan: str = "day"
    chat_timespan: str = "day"
    app_timespan: str = "day"


class SourceCountMap(FastGPTModel):
    """Hits per chat source."""
    test: int = 0
    online: int = 0
    share: int = 0
    api: int = 0
    cron_job: int = 0
    team: int = 0
    feishu: int = 0
    official_account: int = Field(0, alias="official_account")
    wecom: int = 0
    mcp: int = 0


class UserSummary(FastGPTModel):
    user_count: int = 0
    new_user_count: int = 0
    retention_user_count: int = 0
    points: float = 0
    source_count_map: SourceCountMap = Field(default_factory=SourceCountMap)


class UserData(FastGPTModel):
    timestamp: int = 0
    summary: UserSummary = Field(default_factory=UserSummary)


class ChatSummary(FastGPTModel):
    chat_item_count: int = 0
    chat_count: int = 0
    error_count: int = 0
    points: float = 0


class ChatData(FastGPTModel):
    timestamp: int = 0
    summary: ChatSummary = Field(default_factory=ChatSummary)


class AppSummary(FastGPTModel):
    good_feed_back_count: int = 0
    bad_feed_back_count: int = 0
    chat_count: int = 0
    total_response_time: float = 0


class AppData(FastGPTModel):
    timestamp: int = 0
    summary: AppSummary = Field(default_factory=AppSummary)


class AppChartData(FastGPTModel):
    """Log dashboard series for an app. Timestamps are in milliseconds."""
    user_data: List[UserData] = Field(default_factory=list)
    chat_data: List[ChatData] = Field(default_factory=list)
    app_data: List[AppData] = Field(default_factory=list)


# ═══════════════════════════════════════════════════════════
# CHAT REQUESTS
# ═══════════════════════════════════════════════════════════

class ImageURL(FastGPTModel):
    url: str


class FileURL(FastGPTModel):
    name: str
    url: str


class ContentItem(FastGPTModel):
    """Structured message part: text, image_url or file_url."""
    type: str
    text: Optional[str] = None
    image_url: Optional[ImageURL] = Field(None, alias="image_url")
    file_url: Optional[FileURL] = Field(None, alias="file_url")


class Message(FastGPTModel):
    """A single chat message. ``content`` is text or a list of parts."""
    role: str
    content: Union[str, List[ContentItem]]


class ChatRequest(FastGPTModel):
    """
    Body for ``/api/v1/chat/completions``.

    ``chat_id`` enables FastGPT's server-side context. ``detail`` asks for
    intermediate node results (``flowNodeStatus``, ``flowResponses``, ...).
    """
    chat_id: Optional[str] = None
    stream: bool = False
    detail: bool = False
    response_chat_item_id: Optional[str] = None
    variables: Optional[Dict[str, Any]] = None
    messages: List[Message] = Field(default_factory=list)


# ═══════════════════════════════════════════════════════════
# CHAT RESPONSES & STREAM EVENTS
# ═══════════════════════════════════════════════════════════

class Delta(FastGPTModel):
    role: Optional[str] = None
    content: Optional[str] = None


class Choice(FastGPTModel):
    """A completion choice. Stream chunks carry ``delta``, full responses ``message``."""
    index: int = 0
    delta: Optional[Delta] = None
    message: Optional[Delta] = None
    finish_reason: Optional[str] = Field(None, alias="finish_reason")


class AnswerEvent(FastGPTModel):
    """Payload of an ``answer`` / ``fastAnswer`` stream event."""
    id: str = ""
    object: str = ""
    created: int = 0
    model: str = ""
    choices: List[Choice] = Field(default_factory=list)

    @property
    def content(self) -> str:
        """Concatenated delta text of all choices."""
        return "".join(c.delta.content or "" for c in self.choices if c.delta)


class FlowNodeStatusEvent(FastGPTModel):
    """Payload of a ``flowNodeStatus`` event."""
    status: str = ""
    name: str = ""


class HistoryPreview(FastGPTModel):
    obj: str = ""
    value: str = ""


class FlowResponse(FastGPTModel):
    """Execution result of a single workflow node."""
    node_id: str = ""
    module_name: str = ""
    module_type: str = ""
    total_points: float = 0
    model: str = ""
    tokens: int = 0
    query: str = ""
    max_token: int = 0
    history_preview: List[HistoryPreview] = Field(default_factory=list)
    context_total_len: int = 0
    running_time: float = 0
    plugin_output: Any = None


class FlowResponsesEvent(FastGPTModel):
    """Payload of a ``flowResponses`` event."""
    responses: List[FlowResponse] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _wrap_list(cls, value: Any) -> Any:
        # FastGPT sends the node list bare
        if isinstance(value, list):
            return {"responses": value}
        return value


class UserSelectOption(FastGPTModel):
    value: str = ""
    key: str = ""


class UserSelectParams(FastGPTModel):
    description: str = ""
    user_select_options: List[UserSelectOption] = Field(default_factory=list)


class ListOption(FastGPTModel):
    label: str = ""
    value: str = ""


class InputFormItem(FastGPTModel):
    type: str = ""
    key: str = ""
    label: str = ""
    description: str = ""
    value: Any = None
    default_value: Any = None
    value_type: str = ""
    required: bool = False
    list: List[ListOption] = Field(default_factory=list)


class UserInputParams(FastGPTModel):
    description: str = ""
    input_form: List[InputFormItem] = Field(default_factory=list)


class Interactive(FastGPTModel):
    """Payload of an ``interactive`` event: a workflow node waiting on the user."""
    type: str = ""
    params: Any = None

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, value: Any) -> Any:
        if isinstance(value, dict) and isinstance(value.get("interactive"), dict):
            return value["interactive"]
        return value

    @property
    def user_select(self) -> Optional[UserSelectParams]:
        if self.type != "userSelect" or not isinstance(self.params, dict):
            return None
        return UserSelectParams.model_validate(self.params)

    @property
    def user_input(self) -> Optional[UserInputParams]:
        if self.type != "userInput" or not isinstance(self.params, dict):
            return None
        return UserInputParams.model_validate(self.params)


class ChatStreamEvent(BaseModel):
    """
    A single decoded event from the chat completion stream.

    Attributes:
        event: SSE event name – "answer", "fastAnswer", "flowNodeStatus",
               "flowResponses", "interactive", "toolCall", "toolParams",
               "toolResponse", "updateVariables", "error", or anything else.
        data: Typed payload (``AnswerEvent``, ``FlowNodeStatusEvent``,
              ``FlowResponsesEvent``, ``Interactive``), the ``"[DONE]"``
              sentinel, or the raw payload string for passthrough events.
        raw: The joined payload text as received.

    With ``detail=False`` FastGPT sends answer chunks and the ``[DONE]``
    sentinel without an ``event:`` line, so they arrive as plain
    ``message`` events. ``answer``, ``is_answer``, ``is_done`` and
    ``content`` treat those the same as ``answer`` events.
    """
    event: str
    data: Any = None
    raw: str = ""

    @cached_property
    def answer(self) -> Optional[AnswerEvent]:
        """The answer chunk carried by this event, if any."""
        if isinstance(self.data, AnswerEvent):
            return self.data
        if self.event != "message" or self.raw in ("", "[DONE]"):
            return None
        try:
            chunk = AnswerEvent.model_validate_json(self.raw)
        except ValidationError:
            return None
        return chunk if chunk.choices else None

    @property
    def is_done(self) -> bool:
        return self.raw == "[DONE]" and self.event in ("answer", "fastAnswer", "message")

    @property
    def is_answer(self) -> bool:
        return self.answer is not None

    @property
    def is_error(self) -> bool:
        return self.event == "error"

    @property
    def content(self) -> str:
        """Shortcut: answer delta text, empty for other events."""
        return self.answer.content if self.is_answer else ""

    def __str__(self) -> str:
        if self.is_answer:
            return self.content
        return f"[{self.event}] {self.raw}"


class Usage(FastGPTModel):
    prompt_tokens: int = Field(0, alias="prompt_tokens")
    completion_tokens: int = Field(0, alias="completion_tokens")
    total_tokens: int = Field(0, alias="total_tokens")


class QuoteItem(FastGPTModel):
    """A knowledge-base chunk cited by a response."""
    dataset_id: Optional[str] = Field(None, alias="dataset_id")
    id: Optional[str] = None
    q: Optional[str] = None
    a: Optional[str] = None
    source: Optional[str] = None
    collection_id: Optional[str] = None
    source_name: Optional[str] = None
    source_id: Optional[str] = None
    score: Optional[Any] = None


class CompleteMessage(FastGPTModel):
    obj: str = ""
    value: Any = None


class ResponseDataItem(FastGPTModel):
    """Run detail of one workflow module."""
    module_name: str = ""
    price: Optional[float] = None
    model: Optional[str] = None
    tokens: Optional[int] = None
    similarity: Optional[float] = None
    limit: Optional[int] = None
    question: Optional[str] = None
    answer: Optional[str] = None
    max_token: Optional[int] = None
    quote_list: List[QuoteItem] = Field(default_factory=list)
    complete_messages: List[CompleteMessage] = Field(default_factory=list)
    node_id: Optional[str] = None
    module_type: Optional[str] = None
    total_points: Optional[float] = None
    query: Optional[str] = None
    history_preview: List[HistoryPreview] = Field(default_factory=list)
    context_total_len: Optional[int] = None
    running_time: Optional[float] = None
    plugin_output: Any = None


class ChatCompletion(FastGPTModel):
    """
    Non-streaming chat completion.

    ``response_data`` and ``new_variables`` are only filled when the
    request set ``detail=True``.
    """
    id: str = ""
    model: str = ""
    usage: Usage = Field(default_factory=Usage)
    choices: List[Choice] = Field(default_factory=list)
    response_data: List[ResponseDataItem] = Field(default_factory=list)
    new_variables: Optional[Dict[str, Any]] = None

    @property
    def text(self) -> str:
        for choice in self.choices:
            msg = choice.message or choice.delta
            if msg and msg.content:
                return msg.content
        return ""

    def __str__(self) -> str:
        preview = self.text[:200] + "..." if len(self.text) > 200 else self.text
        return preview


# ═══════════════════════════════════════════════════════════
# CHAT HISTORY
# ═══════════════════════════════════════════════════════════

class GetHistoriesRequest(FastGPTModel):
    app_id: str
    offset: int = 0
    page_size: int = 20
    source: str = "api"


class ChatHistory(FastGPTModel):
    chat_id: str
    update_time: Optional[str] = None
    app_id: str = ""
    custom_title: str = ""
    title: str = ""
    top: bool = False

    @property
    def display_title(self) -> str:
        return self.custom_title or self.title


class HistoriesPage(FastGPTModel):
    list: List[ChatHistory] = Field(default_factory=list)
    total: int = 0


class UpdateHistoryRequest(FastGPTModel):
    app_id: str
    chat_id: str
    custom_title: Optional[str] = None
    top: Optional[bool] = None


class TTSConfig(FastGPTModel):
    type: str = ""


class WhisperConfig(FastGPTModel):
    open: bool = False
    auto_send: bool = False
    auto_tts_response: bool = Field(False, alias="autoTTSResponse")


class ChatInputGuide(FastGPTModel):
    open: bool = False
    text_list: List[str] = Field(default_factory=list)
    custom_url: str = ""


class FileSelectConfig(FastGPTModel):
    can_select_file: bool = False
    can_select_img: bool = False
    max_files: int = 0


class ChatConfig(FastGPTModel):
    question_guide: Any = False
    tts_config: TTSConfig = Field(default_factory=TTSConfig, alias="ttsConfig")
    whisper_config: WhisperConfig = Field(default_factory=WhisperConfig)
    chat_input_guide: ChatInputGuide = Field(default_factory=ChatInputGuide)
    instruction: str = ""
    variables: List[Any] = Field(default_factory=list)
    file_select_config: FileSelectConfig = Field(default_factory=FileSelectConfig)
    welcome_text: str = ""


class ChatAppInfo(FastGPTModel):
    chat_config: ChatConfig = Field(default_factory=ChatConfig)
    chat_models: List[str] = Field(default_factory=list)
    name: str = ""
    avatar: str = ""
    intro: str = ""
    type: str = ""
    plugin_inputs: List[Any] = Field(default_factory=list)


class ChatInit(FastGPTModel):
    """Initial state of a conversation (``/api/core/chat/init``)."""
    chat_id: str = ""
    app_id: str = ""
    variables: Dict[str, Any] = Field(default_factory=dict)
    app: ChatAppInfo = Field(default_factory=ChatAppInfo)


class GetPaginationRecordsRequest(FastGPTModel):
    app_id: str
    chat_id: str
    offset: int = 0
    page_size: int = 10
    load_custom_feedbacks: bool = False


class ChatRecord(FastGPTModel):
    id: str = Field("", alias="_id")
    data_id: str = ""
    obj: str = ""
    value: Any = None
    custom_feedbacks: List[Any] = Field(default_factory=list)
    llm_module_account: Optional[int] = None
    total_quote_list: List[Any] = Field(default_factory=list)
    total_running_time: Optional[float] = None
    history_preview_length: Optional[int] = None

    @property
    def is_human(self) -> bool:
        return self.obj == "Human"


class RecordsPage(FastGPTModel):
    list: List[ChatRecord] = Field(default_factory=list)
    total: int = 0


class UpdateUserFeedbackRequest(FastGPTModel):
    """Like / dislike a record. Leave both feedbacks unset to clear them."""
    app_id: str
    chat_id: str
    data_id: str
    user_good_feedback: Optional[str] = None
    user_bad_feedback: Optional[str] = None


class QuestionGuideConfig(FastGPTModel):
    open: bool = True
    model: Optional[str] = None
    custom_prompt: Optional[str] = None


class CreateQuestionGuideRequest(FastGPTModel):
    app_id: str
    chat_id: str
    question_guide: Optional[QuestionGuideConfig] = None


class QuestionGuide(FastGPTModel):
    """Suggested follow-up questions."""
    questions: List[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _wrap_list(cls, value: Any) -> Any:
        if isinstance(value, list):
            return {"questions": value}
        return value


# ═══════════════════════════════════════════════════════════
# DATASETS
# ═══════════════════════════════════════════════════════════

class DatasetCreateRequest(FastGPTModel):
    """
    Create a dataset (knowledge base) or a folder.

    Leave the model fields empty to use the system defaults.
    """
    name: str
    parent_id: Optional[str] = None
    type: Optional[str] = "dataset"
    intro: Optional[str] = None
    avatar: Optional[str] = None
    vector_model: Optional[str] = None
    agent_model: Optional[str] = None
    vlm_model: Optional[str] = None


class VectorModel(FastGPTModel):
    model: str = ""
    name: str = ""
    chars_points_price: float = 0
    default_token: int = 0
    max_token: int = 0
    weight: int = 0


class AgentModel(FastGPTModel):
    model: str = ""
    name: str = ""
    max_context: int = 0
    max_response: int = 0
    chars_points_price: float = 0


class DatasetInfo(FastGPTModel):
    id: str = Field("", alias="_id")
    parent_id: Optional[str] = None
    avatar: str = ""
    name: str = ""
    intro: str = ""
    type: str = ""
    permission: Any = None
    can_write: bool = False
    is_owner: bool = False
    vector_model: Optional[VectorModel] = None
    agent_model: Optional[AgentModel] = None
    status: Optional[str] = None
    team_id: Optional[str] = None
    tmb_id: Optional[str] = None
    update_time: Optional[str] = None

    @property
    def is_folder(self) -> bool:
        return self.type == "folder"


class DatasetTrainOrderRequest(FastGPTModel):
    dataset_id: str
    name: Optional[str] = None


# ═══════════════════════════════════════════════════════════
# COLLECTIONS
# ═══════════════════════════════════════════════════════════

class CollectionCreateRequest(FastGPTModel):
    """Create an empty collection (``folder`` or ``virtual``)."""
    dataset_id: str
    name: str
    type: str = "virtual"
    parent_id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class _TrainingParams(FastGPTModel):
    dataset_id: str
    parent_id: Optional[str] = None
    training_type: str = "chunk"
    chunk_setting_mode: Optional[str] = None
    chunk_split_mode: Optional[str] = None
    chunk_size: Optional[int] = None
    index_size: Optional[int] = None
    chunk_splitter: Optional[str] = None
    qa_prompt: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class CollectionCreateTextRequest(_TrainingParams):
    text: str
    name: str


class CollectionCreateLinkRequest(_TrainingParams):
    """``metadata`` may carry ``webPageSelector``."""
    link: str


class CollectionCreateAPIRequest(_TrainingParams):
    name: str
    api_file_id: str


class CollectionCreateExternalFileRequest(_TrainingParams):
    """Commercial edition only."""
    external_file_url: str
    external_file_id: Optional[str] = None
    filename: Optional[str] = None
    create_time: Optional[str] = None
    tags: Optional[List[str]] = None


class CollectionCreateResult(FastGPTModel):
    insert_len: int = 0
    over_token: List[Any] = Field(default_factory=list)
    repeat: List[Any] = Field(default_factory=list)
    error: List[Any] = Field(default_factory=list)


class CollectionCreateResponse(FastGPTModel):
    collection_id: str = ""
    results: CollectionCreateResult = Field(default_factory=CollectionCreateResult)


class CollectionPermission(FastGPTModel):
    value: int = 0
    is_owner: bool = False
    has_manage_per: bool = False
    has_write_per: bool = False
    has_read_per: bool = False


class CollectionInfo(FastGPTModel):
    id: str = Field("", alias="_id")
    parent_id: Optional[str] = None
    tmb_id: str = ""
    type: str = ""
    name: str = ""
    update_time: Optional[str] = None
    data_amount: int = 0
    training_amount: int = 0
    external_file_id: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    forbid: bool = False
    training_type: str = ""
    permission: Optional[CollectionPermission] = None
    raw_link: Optional[str] = None
    dataset_id: Any = None
    team_id: Optional[str] = None
    raw_text_length: Optional[int] = None
    hash_raw_text: Optional[str] = None
    create_time: Optional[str] = None
    can_write: Optional[bool] = None
    source_name: Optional[str] = None
    chunk_size: Optional[int] = None
    chunk_splitter: Optional[str] = None
    qa_prompt: Optional[str] = None


class CollectionListRequest(FastGPTModel):
    """``page_size`` is capped at 30 by the server."""
    dataset_id: str
    offset: int = 0
    page_size: int = 10
    parent_id: Optional[str] = None
    search_text: Optional[str] = None


class CollectionPage(FastGPTModel):
    list: List[CollectionInfo] = Field(default_factory=list)
    total: int = 0


class CollectionUpdateRequest(FastGPTModel):
    """Identify the collection by ``id``, or by ``dataset_id`` + ``external_file_id``."""
    id: Optional[str] = None
    dataset_id: Optional[str] = None
    external_file_id: Optional[str] = None
    parent_id: Optional[str] = None
    name: Optional[str] = None
    tags: Optional[List[str]] = None
    forbid: Optional[bool] = None
    create_time: Optional[str] = None


# ═══════════════════════════════════════════════════════════
# DATA
# ═══════════════════════════════════════════════════════════

class Index(FastGPTModel):
    """A vector index of a data item."""
    text: str
    type: Optional[str] = None
    data_id: Optional[str] = None
    id: Optional[str] = Field(None, alias="_id")


class DatasetData(FastGPTModel):
    """A single Q/A chunk inside a collection."""
    q: str = ""
    a: Optional[str] = None
    id: Optional[str] = Field(None, alias="_id")
    team_id: Optional[str] = None
    tmb_id: Optional[str] = None
    dataset_id: Optional[str] = None
    collection_id: Optional[str] = None
    full_text_token: Optional[str] = None
    indexes: List[Index] = Field(default_factory=list)
    update_time: Optional[str] = None
    chunk_index: Optional[int] = None
    source_name: Optional[str] = None
    source_id: Optional[str] = None
    is_owner: Optional[bool] = None
    can_write: Optional[bool] = None


class DataPushRequest(FastGPTModel):
    """Up to 200 items per call."""
    collection_id: str
    data: List[DatasetData]
    training_type: str = "chunk"
    prompt: Optional[str] = None
    bill_id: Optional[str] = None


class DataPushResponse(FastGPTModel):
    insert_len: int = 0
    over_token: List[Any] = Field(default_factory=list)
    repeat: List[Any] = Field(default_factory=list)
    error: List[Any] = Field(default_factory=list)


class DataListRequest(FastGPTModel):
    collection_id: str
    offset: int = 0
    page_size: int = 10
    search_text: Optional[str] = None


class DataPage(FastGPTModel):
    list: List[DatasetData] = Field(default_factory=list)
    total: int = 0


class DataUpdateRequest(FastGPTModel):
    data_id: str
    q: Optional[str] = None
    a: Optional[str] = None
    indexes: Optional[List[Index]] = None


# ═══════════════════════════════════════════════════════════
# SEARCH TEST
# ═══════════════════════════════════════════════════════════

class SearchTestRequest(FastGPTModel):
    """``search_mode``: embedding | fullTextRecall | mixedRecall."""
    dataset_id: str
    text: str
    limit: int = 5000
    similarity: Optional[float] = None
    search_mode: str = "embedding"
    using_re_rank: bool = False
    dataset_search_using_extension_query: Optional[bool] = None
    dataset_search_extension_model: Optional[str] = None
    dataset_search_extension_bg: Optional[str] = None


class SearchTestResult(FastGPTModel):
    id: str = ""
    q: str = ""
    a: str = ""
    dataset_id: str = ""
    collection_id: str = ""
    source_name: str = ""
    source_id: Optional[str] = None
    score: Any = None
