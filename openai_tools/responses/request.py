"""
Responses API request builder.

``input`` is either plain text or a list of messages; messages use the
responses content shapes (``input_text`` / ``input_image``) and tool results
become ``function_call_output`` items.
"""

import logging
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from openai_tools.common.client import BaseClient
from openai_tools.common.errors import ConfigError
from openai_tools.common.message import Message
from openai_tools.common.models import apply_parameter_policy
from openai_tools.common.pagination import DeletedObject
from openai_tools.common.structured_output import Schema
from openai_tools.common.tool import Tool
from openai_tools.config.constants import DEFAULT_CHAT_MODEL, LOGGER_NAME
from openai_tools.responses.response import Response

logger = logging.getLogger(LOGGER_NAME)

RESPONSES_PATH = "responses"

ReasoningEffort = Literal["none", "minimal", "low", "medium", "high", "xhigh"]
ReasoningSummary = Literal["auto", "concise", "detailed"]
Truncation = Literal["auto", "disabled"]
Verbosity = Literal["low", "medium", "high"]


class Reasoning(BaseModel):
    effort: Optional[ReasoningEffort] = None
    summary: Optional[ReasoningSummary] = None


class ResponsesBody(BaseModel):
    """Fields of a responses request; None means not sent."""

    model: str = DEFAULT_CHAT_MODEL
    instructions: Optional[str] = None
    input_text: Optional[str] = None
    input_messages: Optional[List[Message]] = None
    tools: Optional[List[Tool]] = None
    tool_choice: Optional[Any] = None
    text_format: Optional[Dict[str, Any]] = None
    verbosity: Optional[Verbosity] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_logprobs: Optional[int] = None
    max_output_tokens: Optional[int] = None
    max_tool_calls: Optional[int] = None
    metadata: Optional[Dict[str, str]] = None
    parallel_tool_calls: Optional[bool] = None
    include: Optional[List[str]] = None
    background: Optional[bool] = None
    conversation: Optional[str] = None
    previous_response_id: Optional[str] = None
    reasoning: Optional[Reasoning] = None
    safety_identifier: Optional[str] = None
    service_tier: Optional[str] = None
    store: Optional[bool] = None
    stream: Optional[bool] = None
    stream_options: Optional[Dict[str, Any]] = None
    truncation: Optional[Truncation] = None
    prompt_cache_key: Optional[str] = None
    user: Optional[str] = None


_SCALAR_FIELDS = (
    "model",
    "instructions",
    "tool_choice",
    "temperature",
    "top_p",
    "top_logprobs",
    "max_output_tokens",
    "max_tool_calls",
    "metadata",
    "parallel_tool_calls",
    "include",
    "background",
    "conversation",
    "previous_response_id",
    "safety_identifier",
    "service_tier",
    "store",
    "stream",
    "stream_options",
    "truncation",
    "prompt_cache_key",
    "user",
)


class Responses(BaseClient):
    """Builder and client for ``POST /responses``."""

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.request = ResponsesBody()

    def model(self, model: str) -> "Responses":
        self.request.model = model
        return self

    def instructions(self, instructions: str) -> "Responses":
        self.request.instructions = instructions
        return self

    def str_message(self, text: str) -> "Responses":
        """Plain text input."""
        self.request.input_text = text
        self.request.input_messages = None
        return self

    def messages(self, messages: List[Message]) -> "Responses":
        self.request.input_messages = list(messages)
        self.request.input_text = None
        return self

    def tools(self, tools: List[Tool]) -> "Responses":
        self.request.tools = list(tools)
        return self

    def tool_choice(self, choice: Any) -> "Responses":
        """``"auto"``, ``"none"``, ``"required"`` or a function name."""
        if isinstance(choice, str) and choice not in ("auto", "none", "required"):
            choice = {"type": "function", "name": choice}
        self.request.tool_choice = choice
        return self

    def structured_output(self, schema: Schema) -> "Responses":
        self.request.text_format = schema.to_responses_format()
        return self

    def text_verbosity(self, verbosity: Verbosity) -> "Responses":
        self.request.verbosity = verbosity
        return self

    def temperature(self, value: float) -> "Responses":
        self.request.temperature = value
        return self

    def top_p(self, value: float) -> "Responses":
        self.request.top_p = value
        return self

    def top_logprobs(self, count: int) -> "Responses":
        self.request.top_logprobs = count
        return self

    def max_output_tokens(self, tokens: int) -> "Responses":
        self.request.max_output_tokens = tokens
        return self

    def max_tool_calls(self, count: int) -> "Responses":
        self.request.max_tool_calls = count
        return self

    def metadata(self, metadata: Dict[str, str]) -> "Responses":
        self.request.metadata = dict(metadata)
        return self

    def parallel_tool_calls(self, enabled: bool) -> "Responses":
        self.request.parallel_tool_calls = enabled
        return self

    def include(self, fields: List[str]) -> "Responses":
        self.request.include = list(fields)
        return self

    def background(self, enabled: bool) -> "Responses":
        self.request.background = enabled
        return self

    def conversation(self, conversation_id: str) -> "Responses":
        self.request.conversation = conversation_id
        return self

    def previous_response_id(self, response_id: str) -> "Responses":
        self.request.previous_response_id = response_id
        return self

    def reasoning(
        self, effort: Optional[ReasoningEffort] = None, summary: Optional[ReasoningSummary] = None
    ) -> "Responses":
        self.request.reasoning = Reasoning(effort=effort, summary=summary)
        return self

    def safety_identifier(self, identifier: str) -> "Responses":
        self.request.safety_identifier = identifier
        return self

    def service_tier(self, tier: str) -> "Responses":
        self.request.service_tier = tier
        return self

    def store(self, store: bool) -> "Responses":
        self.request.store = store
        return self

    def stream(self, enabled: bool, options: Optional[Dict[str, Any]] = None) -> "Responses":
        self.request.stream = enabled
        self.request.stream_options = options
        return self

    def truncation(self, truncation: Truncation) -> "Responses":
        self.request.truncation = truncation
        return self

    def prompt_cache_key(self, key: str) -> "Responses":
        self.request.prompt_cache_key = key
        return self

    def user(self, user: str) -> "Responses":
        self.request.user = user
        return self

    def build(self) -> Dict[str, Any]:
        """
        Serialize the request body.

        Raises:
            ConfigError: Neither text nor messages were given as input
        """
        request = self.request
        if request.input_text is None and not request.input_messages:
            raise ConfigError("Responses request requires input text or messages")
        if request.conversation and request.previous_response_id:
            raise ConfigError("conversation and previous_response_id cannot be combined")

        body: Dict[str, Any] = {}
        for name in _SCALAR_FIELDS:
            value = getattr(request, name)
            if value is not None:
                body[name] = value
        if request.input_text is not None:
            body["input"] = request.input_text
        else:
            body["input"] = [item for m in request.input_messages for item in m.to_responses_items()]
        if request.tools:
            body["tools"] = [tool.to_responses_dict() for tool in request.tools]
        if request.text_format is not None or request.verbosity is not None:
            text: Dict[str, Any] = {}
            if request.text_format is not None:
                text["format"] = request.text_format
            if request.verbosity is not None:
                text["verbosity"] = request.verbosity
            body["text"] = text
        if request.reasoning is not None:
            body["reasoning"] = request.reasoning.model_dump(exclude_none=True)
        return apply_parameter_policy(request.model, body)

    def complete(self) -> Response:
        body = self.build()
        if body.get("stream"):
            raise ConfigError("Streaming responses are not supported by complete()")
        logger.debug(f"Responses request with model {self.request.model}")
        return self.http.post(RESPONSES_PATH, Response, body)

    def retrieve(self, response_id: str) -> Response:
        return self.http.get(f"{RESPONSES_PATH}/{response_id}", Response)

    def delete(self, response_id: str) -> DeletedObject:
        return self.http.delete(f"{RESPONSES_PATH}/{response_id}", DeletedObject)

    def cancel(self, response_id: str) -> Response:
        """Cancel a background response."""
        return self.http.post(f"{RESPONSES_PATH}/{response_id}/cancel", Response)
