"""
JSON schemas for structured output.

A ``Schema`` is built either field by field (``add_property`` / ``add_array``)
or derived from a pydantic model with ``Schema.from_model``. Structured output
requires closed objects, so every object in the schema gets
``additionalProperties: false`` and lists all of its properties as required.
"""

import copy
import json
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from openai_tools.common.errors import DecodeError

ModelT = TypeVar("ModelT", bound=BaseModel)

# Keys whose values map names to sub-schemas
_SCHEMA_MAPS = ("properties", "$defs", "definitions")


def _close_objects(node: Any) -> Any:
    """Recursively mark every object schema closed and fully required."""
    if isinstance(node, dict):
        closed = {}
        for key, value in node.items():
            if key in _SCHEMA_MAPS and isinstance(value, dict):
                closed[key] = {name: _close_objects(sub) for name, sub in value.items()}
            elif key in ("title", "default"):
                # not accepted in strict mode
                continue
            else:
                closed[key] = _close_objects(value)
        if closed.get("type") == "object" and "properties" in closed:
            closed["additionalProperties"] = False
            closed["required"] = list(closed["properties"].keys())
        return closed
    if isinstance(node, list):
        return [_close_objects(item) for item in node]
    return node


class Schema:
    """A named JSON schema for structured output."""

    def __init__(self, name: str, schema: Optional[Dict[str, Any]] = None, strict: bool = True):
        self.name = name
        self.strict = strict
        self.schema: Dict[str, Any] = schema or {
            "type": "object",
            "properties": {},
            "required": [],
            "additionalProperties": False,
        }

    @classmethod
    def chat_json_schema(cls, name: str) -> "Schema":
        return cls(name)

    @classmethod
    def responses_json_schema(cls, name: str) -> "Schema":
        return cls(name)

    @classmethod
    def from_model(cls, model_cls: Type[BaseModel], name: Optional[str] = None) -> "Schema":
        """Derive the schema from a pydantic model's JSON schema."""
        raw = model_cls.model_json_schema()
        return cls(name or model_cls.__name__, _close_objects(raw))

    def add_property(self, name: str, type_name: str, description: Optional[str] = None) -> "Schema":
        prop: Dict[str, Any] = {"type": type_name}
        if description is not None:
            prop["description"] = description
        self._add(name, prop)
        return self

    def add_array(self, name: str, fields: List[Tuple[str, str]]) -> "Schema":
        """Add an array of objects whose string fields are given as (name, description)."""
        properties = {
            field: {"type": "string", "description": description} for field, description in fields
        }
        items = {
            "type": "object",
            "properties": properties,
            "required": list(properties.keys()),
            "additionalProperties": False,
        }
        self._add(name, {"type": "array", "items": items})
        return self

    def _add(self, name: str, prop: Dict[str, Any]) -> None:
        self.schema["properties"][name] = prop
        if name not in self.schema["required"]:
            self.schema["required"].append(name)

    def to_chat_format(self) -> Dict[str, Any]:
        """Value of ``response_format`` for chat completions."""
        return {
            "type": "json_schema",
            "json_schema": {
                "name": self.name,
                "schema": copy.deepcopy(self.schema),
                "strict": self.strict,
            },
        }

    def to_responses_format(self) -> Dict[str, Any]:
        """Value of ``text.format`` for the responses API."""
        return {
            "type": "json_schema",
            "name": self.name,
            "schema": copy.deepcopy(self.schema),
            "strict": self.strict,
        }


def parse_json_output(text: Optional[str], model_cls: Type[ModelT]) -> ModelT:
    """Parse structured output text into ``model_cls``."""
    if not text:
        raise DecodeError("No content to parse")
    try:
        return model_cls.model_validate(json.loads(text))
    except (ValueError, ValidationError) as e:
        raise DecodeError(f"Output does not match {model_cls.__name__}: {e}") from e
