"""
Unit tests for the responses API builder and response model.
"""

import logging

import pytest
from pydantic import BaseModel

from openai_tools.common.errors import ConfigError
from openai_tools.common.message import Content, Message, Role
from openai_tools.common.structured_output import Schema
from openai_tools.common.tool import ParameterProperty, Tool
from openai_tools.responses import Response, Responses

RESPONSE = {
    "id": "resp_1",
    "object": "response",
    "created_at": 1730000000,
    "status": "completed",
    "model": "gpt-4o-mini",
    "output": [
        {"type": "reasoning", "id": "rs_1", "summary": []},
        {
            "type": "message",
            "id": "msg_1",
            "status": "completed",
            "role": "assistant",
            "content": [{"type": "output_text", "text": '{"city": "Oslo"}', "annotations": []}],
        },
        {
            "type": "function_call",
            "id": "fc_1",
            "call_id": "call_1",
            "name": "get_weather",
            "arguments": '{"city": "Oslo"}',
        },
    ],
    "usage": {"input_tokens": 20, "output_tokens": 8, "total_tokens": 28},
}


@pytest.fixture
def responses(openai_auth, mock_session):
    client = Responses(auth=openai_auth, timeout=10.0)
    client.http.session = mock_session
    return client


class TestBuild:
    """Tests for Responses.build."""

    def test_text_input(self, responses):
        assert responses.str_message("Hi").build() == {"model": "gpt-4o-mini", "input": "Hi"}

    def test_no_input(self, responses):
        with pytest.raises(ConfigError):
            responses.build()

    def test_conversation_and_previous_response(self, responses):
        responses.str_message("Hi").conversation("conv_1").previous_response_id("resp_0")
        with pytest.raises(ConfigError):
            responses.build()

    def test_message_input(self, responses):
        body = responses.messages(
            [
                Message.from_string(Role.DEVELOPER, "Answer in French."),
                Message.from_contents(
                    Role.USER,
                    [Content.from_text("Describe"), Content.from_image_url("https://example.com/a.png")],
                ),
            ]
        ).build()

        assert body["input"] == [
            {"role": "developer", "content": "Answer in French."},
            {
                "role": "user",
                "content": [
                    {"type": "input_text", "text": "Describe"},
                    {"type": "input_image", "image_url": "https://example.com/a.png"},
                ],
            },
        ]

    def test_text_options(self, responses):
        schema = Schema("weather").add_property("city", "string")
        body = responses.str_message("Hi").structured_output(schema).text_verbosity("low").build()

        assert body["text"]["verbosity"] == "low"
        assert body["text"]["format"]["type"] == "json_schema"
        assert body["text"]["format"]["name"] == "weather"

    def test_tools_and_reasoning(self, responses):
        tool = Tool.function("get_weather", "Weather", {"city": ParameterProperty.string()})
        body = (
            responses.model("o4-mini")
            .str_message("Hi")
            .tools([tool, Tool.builtin("web_search_preview")])
            .tool_choice("get_weather")
            .reasoning(effort="medium", summary="auto")
            .build()
        )

        assert body["tools"][0]["name"] == "get_weather"
        assert body["tools"][1] == {"type": "web_search_preview"}
        assert body["tool_choice"] == {"type": "function", "name": "get_weather"}
        assert body["reasoning"] == {"effort": "medium", "summary": "auto"}

    def test_reasoning_model_policy(self, responses, caplog):
        with caplog.at_level(logging.WARNING, logger="openai_tools"):
            body = responses.model("gpt-5.1").str_message("Hi").temperature(0.2).top_p(1.0).build()
        assert "temperature" not in body
        assert body["top_p"] == 1.0
        assert len(caplog.records) == 1

    def test_complete_rejects_stream(self, responses, mock_session):
        with pytest.raises(ConfigError):
            responses.str_message("Hi").stream(True).complete()
        mock_session.request.assert_not_called()


class TestOperations:
    """Tests for the responses endpoints."""

    def test_complete(self, responses, mock_session, make_response):
        mock_session.request.return_value = make_response(json_data=RESPONSE)

        response = responses.str_message("Weather?").complete()

        assert response.output_text() == '{"city": "Oslo"}'
        assert [item.call_id for item in response.function_calls()] == ["call_1"]
        assert response.usage.input_total == 20
        assert mock_session.request.call_args.args[1] == "https://api.openai.com/v1/responses"

    def test_parse_as(self):
        class City(BaseModel):
            city: str

        response = Response.model_validate(RESPONSE)
        assert response.parse_as(City).city == "Oslo"

    def test_output_text_without_message(self):
        assert Response(id="resp_2").output_text() is None

    def test_retrieve_delete_cancel(self, responses, mock_session, make_response):
        mock_session.request.return_value = make_response(json_data=RESPONSE)
        assert responses.retrieve("resp_1").id == "resp_1"
        assert mock_session.request.call_args.args == ("GET", "https://api.openai.com/v1/responses/resp_1")

        responses.cancel("resp_1")
        assert mock_session.request.call_args.args == (
            "POST",
            "https://api.openai.com/v1/responses/resp_1/cancel",
        )

        mock_session.request.return_value = make_response(
            json_data={"id": "resp_1", "object": "response.deleted", "deleted": True}
        )
        assert responses.delete("resp_1").deleted


class TestResponseModel:
    def test_round_trip(self):
        """A decoded response serializes back to the payload it came from."""
        response = Response.model_validate(RESPONSE)

        assert response.model_dump(mode="json", exclude_none=True) == RESPONSE
        assert Response.model_validate(response.model_dump()) == response
