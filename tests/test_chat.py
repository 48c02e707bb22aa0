"""
Unit tests for the chat completions builder and response models.
"""

import logging

import pytest
from pydantic import BaseModel

from openai_tools.chat import ChatCompletion
from openai_tools.chat.response import ChatCompletionResponse
from openai_tools.common.auth import AzureAuth
from openai_tools.common.errors import ApiError, ConfigError
from openai_tools.common.message import Message, Role
from openai_tools.common.structured_output import Schema
from openai_tools.common.tool import ParameterProperty, Tool

COMPLETION = {
    "id": "chatcmpl-1",
    "object": "chat.completion",
    "created": 1730000000,
    "model": "gpt-4o-mini-2024-07-18",
    "choices": [
        {
            "index": 0,
            "message": {"role": "assistant", "content": "Hello there!"},
            "finish_reason": "stop",
        }
    ],
    "usage": {
        "prompt_tokens": 9,
        "completion_tokens": 3,
        "total_tokens": 12,
        "prompt_tokens_details": {"cached_tokens": 0},
    },
}


@pytest.fixture
def chat(openai_auth, mock_session):
    client = ChatCompletion(auth=openai_auth, timeout=10.0)
    client.http.session = mock_session
    return client


@pytest.fixture
def hello():
    return [Message.from_string(Role.USER, "Hi!")]


class TestBuild:
    """Tests for ChatCompletion.build."""

    def test_minimal_body(self, chat, hello):
        assert chat.messages(hello).build() == {
            "model": "gpt-4o-mini",
            "messages": [{"role": "user", "content": "Hi!"}],
        }

    def test_no_messages(self, chat):
        with pytest.raises(ConfigError):
            chat.build()

    def test_all_options(self, chat, hello):
        tool = Tool.function("lookup", "Find a record", {"id": ParameterProperty.string()})
        body = (
            chat.model("gpt-4o")
            .messages(hello)
            .temperature(0.3)
            .top_p(0.9)
            .n(2)
            .logprobs(True)
            .top_logprobs(2)
            .max_completion_tokens(100)
            .seed(7)
            .tools([tool])
            .tool_choice("lookup")
            .parallel_tool_calls(False)
            .metadata({"run": "a"})
            .build()
        )

        assert body["temperature"] == 0.3
        assert body["n"] == 2
        assert body["logprobs"] is True
        assert body["tools"][0]["function"]["name"] == "lookup"
        assert body["tool_choice"] == {"type": "function", "function": {"name": "lookup"}}
        assert body["parallel_tool_calls"] is False
        assert body["metadata"] == {"run": "a"}

    def test_reasoning_model_drops_temperature(self, chat, hello, caplog):
        """temperature=0.3 on a reasoning model is left out of the request."""
        with caplog.at_level(logging.WARNING, logger="openai_tools"):
            body = chat.model("o3-mini").messages(hello).temperature(0.3).reasoning_effort("low").build()

        assert "temperature" not in body
        assert body["reasoning_effort"] == "low"
        assert len(caplog.records) == 1

    def test_structured_output(self, chat, hello):
        schema = Schema("answer").add_property("value", "string")
        body = chat.messages(hello).json_schema(schema).build()
        assert body["response_format"]["type"] == "json_schema"
        assert body["response_format"]["json_schema"]["name"] == "answer"

    def test_json_object(self, chat, hello):
        body = chat.messages(hello).json_object().build()
        assert body["response_format"] == {"type": "json_object"}

    def test_tool_choice_keywords(self, chat, hello):
        assert chat.messages(hello).tool_choice("required").build()["tool_choice"] == "required"


class TestChat:
    """Tests for sending chat requests."""

    def test_chat(self, chat, hello, mock_session, make_response):
        mock_session.request.return_value = make_response(json_data=COMPLETION)

        response = chat.messages(hello).chat()

        assert response.content == "Hello there!"
        assert response.choices[0].finish_reason == "stop"
        assert response.usage.input_total == 9
        assert response.usage.output_total == 3
        args = mock_session.request.call_args.args
        assert args == ("POST", "https://api.openai.com/v1/chat/completions")

    def test_tool_calls(self, chat, hello, mock_session, make_response):
        payload = dict(COMPLETION)
        payload["choices"] = [
            {
                "index": 0,
                "message": {
                    "role": "assistant",
                    "content": None,
                    "tool_calls": [
                        {
                            "id": "call_1",
                            "type": "function",
                            "function": {"name": "lookup", "arguments": '{"id": "42"}'},
                        }
                    ],
                },
                "finish_reason": "tool_calls",
            }
        ]
        mock_session.request.return_value = make_response(json_data=payload)

        response = chat.messages(hello).chat()

        call = response.choices[0].message.tool_calls[0]
        assert call.function.name == "lookup"
        assert response.content is None

    def test_parse_structured_content(self, chat, hello, mock_session, make_response):
        class Answer(BaseModel):
            value: str

        payload = dict(COMPLETION)
        payload["choices"] = [{"index": 0, "message": {"role": "assistant", "content": '{"value": "ok"}'}}]
        mock_session.request.return_value = make_response(json_data=payload)

        message = chat.messages(hello).chat().choices[0].message

        assert message.parse_as(Answer) == Answer(value="ok")

    def test_api_error(self, chat, hello, mock_session, make_response):
        mock_session.request.return_value = make_response(
            status_code=401,
            json_data={"error": {"message": "Incorrect API key", "type": "invalid_request_error", "code": "invalid_api_key"}},
        )
        with pytest.raises(ApiError) as exc_info:
            chat.messages(hello).chat()
        assert exc_info.value.code == "invalid_api_key"

    def test_azure_endpoint(self, hello, mock_session, make_response):
        auth = AzureAuth("az-key", deployment_name="gpt4o", resource_name="myres")
        chat = ChatCompletion(auth=auth, timeout=10.0)
        chat.http.session = mock_session
        mock_session.request.return_value = make_response(json_data=COMPLETION)

        chat.messages(hello).chat()

        args, kwargs = mock_session.request.call_args
        assert args[1] == (
            "https://myres.openai.azure.com/openai/deployments/gpt4o/chat/completions"
            "?api-version=2024-08-01-preview"
        )
        assert kwargs["headers"]["api-key"] == "az-key"


class TestResponseModel:
    def test_round_trip(self):
        """A decoded completion serializes back to the payload it came from."""
        completion = ChatCompletionResponse.model_validate(COMPLETION)

        assert completion.model_dump(mode="json", exclude_none=True) == COMPLETION
        assert ChatCompletionResponse.model_validate(completion.model_dump()) == completion
