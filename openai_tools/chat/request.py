"""
Chat completions request builder.

Example:
```python
chat = ChatCompletion().model("gpt-4o-mini").messages(
    [Message.from_string(Role.USER, "Hi!")]
)
response = chat.temperature(0.2).chat()
print(response.content)
```
"""

import logging
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from openai_tools.chat.response import ChatCompletionResponse
from openai_tools.common.client import BaseClient
from openai_tools.common.errors import ConfigError
from openai_tools.common.message import Message
from openai_tools.common.models import apply_parameter_policy
from openai_tools.common.structured_output import Schema
from openai_tools.common.tool import Tool
from openai_tools.config.constants import DEFAULT_CHAT_MODEL, LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)

CHAT_PATH = "chat/completions"

ReasoningEffort = Literal["none", "minimal", "low", "medium", "high", "xhigh"]


class ChatCompletionBody(BaseModel):
    """Fields of a chat completion request; None means not sent."""

    model: str = DEFAULT_CHAT_MODEL
    messages: List[Message] = Field(default_factory=list)
    store: Optional[bool] = None
    frequency_penalty: Optional[float] = None
    logit_bias: Optional[Dict[str, int]] = None
    logprobs: Optional[bool] = None
    top_logprobs: Optional[int] = None
    max_completion_tokens: Optional[int] = None
    n: Optional[int] = None
    modalities: Optional[List[str]] = None
    presence_penalty: Optional[float] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    response_format: Optional[Dict[str, Any]] = None
    tools: Optional[List[Tool]] = None
    tool_choice: Optional[Any] = None
    parallel_tool_calls: Optional[bool] = None
    reasoning_effort: Optional[ReasoningEffort] = None
    seed: Optional[int] = None
    user: Optional[str] = None
    safety_identifier: Optional[str] = None
    service_tier: Optional[str] = None
    metadata: Optional[Dict[str, str]] = None


class ChatCompletion(BaseClient):
    """Builder and client for ``POST /chat/completions``."""

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.request = ChatCompletionBody()

    def model(self, model: str) -> "ChatCompletion":
        self.request.model = model
        return self

    def messages(self, messages: List[Message]) -> "ChatCompletion":
        self.request.messages = list(messages)
        return self

    def add_message(self, message: Message) -> "ChatCompletion":
        self.request.messages.append(message)
        return self

    def store(self, store: bool) -> "ChatCompletion":
        self.request.store = store
        return self

    def frequency_penalty(self, value: float) -> "ChatCompletion":
        self.request.frequency_penalty = value
        return self

    def logit_bias(self, bias: Dict[str, int]) -> "ChatCompletion":
        self.request.logit_bias = dict(bias)
        return self

    def logprobs(self, enabled: bool) -> "ChatCompletion":
        self.request.logprobs = enabled
        return self

    def top_logprobs(self, count: int) -> "ChatCompletion":
        self.request.top_logprobs = count
        return self

    def max_completion_tokens(self, tokens: int) -> "ChatCompletion":
        self.request.max_completion_tokens = tokens
        return self

    def n(self, count: int) -> "ChatCompletion":
        self.request.n = count
        return self

    def modalities(self, modalities: List[str]) -> "ChatCompletion":
        self.request.modalities = list(modalities)
        return self

    def presence_penalty(self, value: float) -> "ChatCompletion":
        self.request.presence_penalty = value
        return self

    def temperature(self, value: float) -> "ChatCompletion":
        self.request.temperature = value
        return self

    def top_p(self, value: float) -> "ChatCompletion":
        self.request.top_p = value
        return self

    def json_schema(self, schema: Schema) -> "ChatCompletion":
        """Constrain the output to ``schema`` (structured output)."""
        self.request.response_format = schema.to_chat_format()
        return self

    def json_object(self) -> "ChatCompletion":
        self.request.response_format = {"type": "json_object"}
        return self

    def tools(self, tools: List[Tool]) -> "ChatCompletion":
        self.request.tools = list(tools)
        return self

    def tool_choice(self, choice: Any) -> "ChatCompletion":
        """``"auto"``, ``"none"``, ``"required"`` or a function name."""
        if isinstance(choice, str) and choice not in ("auto", "none", "required"):
            choice = {"type": "function", "function": {"name": choice}}
        self.request.tool_choice = choice
        return self

    def parallel_tool_calls(self, enabled: bool) -> "ChatCompletion":
        self.request.parallel_tool_calls = enabled
        return self

    def reasoning_effort(self, effort: ReasoningEffort) -> "ChatCompletion":
        self.request.reasoning_effort = effort
        return self

    def seed(self, seed: int) -> "ChatCompletion":
        self.request.seed = seed
        return self

    def user(self, user: str) -> "ChatCompletion":
        self.request.user = user
        return self

    def safety_identifier(self, identifier: str) -> "ChatCompletion":
        self.request.safety_identifier = identifier
        return self

    def service_tier(self, tier: str) -> "ChatCompletion":
        self.request.service_tier = tier
        return self

    def metadata(self, metadata: Dict[str, str]) -> "ChatCompletion":
        self.request.metadata = dict(metadata)
        return self

    def build(self) -> Dict[str, Any]:
        """
        Serialize the request body.

        Raises:
            ConfigError: No messages were given
        """
        if not self.request.messages:
            raise ConfigError("Chat completion requires at least one message")
        body = self.request.model_dump(exclude_none=True, exclude={"messages", "tools"})
        body["messages"] = [message.to_chat_dict() for message in self.request.messages]
        if self.request.tools:
            body["tools"] = [tool.to_chat_dict() for tool in self.request.tools]
        return apply_parameter_policy(self.request.model, body)

    def chat(self) -> ChatCompletionResponse:
        body = self.build()
        logger.debug(f"Chat completion with model {self.request.model}")
        return self.http.post(CHAT_PATH, ChatCompletionResponse, body)
