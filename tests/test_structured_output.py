"""
Unit tests for structured output schemas.
"""

from typing import List

import pytest
from pydantic import BaseModel

from openai_tools.common.errors import DecodeError
from openai_tools.common.structured_output import Schema, parse_json_output


class Step(BaseModel):
    explanation: str
    output: str


class MathAnswer(BaseModel):
    steps: List[Step]
    final_answer: str


class TestSchema:
    """Tests for Schema construction and formats."""

    def test_manual_schema(self):
        schema = Schema.chat_json_schema("answer").add_property("final_answer", "string", "The result")
        schema.add_array("steps", [("explanation", "Why"), ("output", "What")])

        assert schema.schema["required"] == ["final_answer", "steps"]
        steps = schema.schema["properties"]["steps"]
        assert steps["items"]["required"] == ["explanation", "output"]
        assert steps["items"]["additionalProperties"] is False

    def test_formats(self):
        schema = Schema.responses_json_schema("answer").add_property("x", "integer")

        chat = schema.to_chat_format()
        responses = schema.to_responses_format()

        assert chat["type"] == "json_schema"
        assert chat["json_schema"]["name"] == "answer"
        assert chat["json_schema"]["strict"] is True
        assert responses["name"] == "answer"
        assert responses["schema"] == chat["json_schema"]["schema"]

    def test_from_model_closes_objects(self):
        """Derived schemas close every object and drop titles."""
        schema = Schema.from_model(MathAnswer)

        assert schema.name == "MathAnswer"
        assert schema.schema["additionalProperties"] is False
        assert schema.schema["required"] == ["steps", "final_answer"]
        assert "title" not in schema.schema
        step = schema.schema["$defs"]["Step"]
        assert step["additionalProperties"] is False
        assert step["required"] == ["explanation", "output"]
        assert "title" not in step["properties"]["output"]

    def test_property_named_title_survives(self):
        class Book(BaseModel):
            title: str

        schema = Schema.from_model(Book)
        assert "title" in schema.schema["properties"]


class TestParse:
    """Tests for parse_json_output."""

    def test_parse(self):
        text = '{"steps": [{"explanation": "add", "output": "2"}], "final_answer": "2"}'
        answer = parse_json_output(text, MathAnswer)
        assert answer.final_answer == "2"
        assert answer.steps[0].explanation == "add"

    @pytest.mark.parametrize("text", [None, "", "not json", '{"steps": []}'])
    def test_parse_failures(self, text):
        with pytest.raises(DecodeError):
            parse_json_output(text, MathAnswer)
