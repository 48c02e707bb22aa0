"""
Function-calling types shared by the chat, responses and realtime APIs.

The same ``Tool`` serializes three ways: nested under ``function`` for chat
completions, flat for the responses API, and flat without ``strict`` for the
realtime session.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, Field

PropertySpec = Union[Mapping[str, "ParameterProperty"], Iterable[Tuple[str, "ParameterProperty"]]]


class ParameterProperty(BaseModel):
    """JSON-schema description of a single function parameter."""

    type_names: List[str] = Field(..., description="JSON type name(s)")
    description: Optional[str] = None
    enum_values: Optional[List[Any]] = None
    items: Optional["ParameterProperty"] = Field(None, description="Item schema for arrays")

    @classmethod
    def of(cls, type_name: Union[str, List[str]], description: Optional[str] = None) -> "ParameterProperty":
        names = [type_name] if isinstance(type_name, str) else list(type_name)
        return cls(type_names=names, description=description)

    @classmethod
    def string(cls, description: Optional[str] = None) -> "ParameterProperty":
        return cls.of("string", description)

    @classmethod
    def number(cls, description: Optional[str] = None) -> "ParameterProperty":
        return cls.of("number", description)

    @classmethod
    def integer(cls, description: Optional[str] = None) -> "ParameterProperty":
        return cls.of("integer", description)

    @classmethod
    def boolean(cls, description: Optional[str] = None) -> "ParameterProperty":
        return cls.of("boolean", description)

    @classmethod
    def enum(cls, values: List[Any], description: Optional[str] = None) -> "ParameterProperty":
        return cls(type_names=["string"], description=description, enum_values=list(values))

    @classmethod
    def array(cls, items: "ParameterProperty", description: Optional[str] = None) -> "ParameterProperty":
        return cls(type_names=["array"], description=description, items=items)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.type_names[0] if len(self.type_names) == 1 else list(self.type_names)
        }
        if self.description is not None:
            data["description"] = self.description
        if self.enum_values is not None:
            data["enum"] = list(self.enum_values)
        if self.items is not None:
            data["items"] = self.items.to_dict()
        return data


class Parameters(BaseModel):
    """Object schema for a function's arguments; every property is required."""

    properties: Dict[str, ParameterProperty] = Field(default_factory=dict)
    additional_properties: Optional[bool] = None

    @classmethod
    def from_properties(
        cls, properties: PropertySpec, additional_properties: Optional[bool] = None
    ) -> "Parameters":
        items = properties.items() if isinstance(properties, Mapping) else properties
        return cls(properties=dict(items), additional_properties=additional_properties)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": "object",
            "properties": {name: prop.to_dict() for name, prop in self.properties.items()},
            "required": list(self.properties.keys()),
        }
        if self.additional_properties is not None:
            data["additionalProperties"] = self.additional_properties
        return data


class Tool(BaseModel):
    """A function tool, an MCP server, or a built-in tool of the responses API."""

    type: str = "function"
    name: Optional[str] = None
    description: Optional[str] = None
    parameters: Optional[Parameters] = None
    strict: Optional[bool] = None
    # MCP
    server_label: Optional[str] = None
    server_url: Optional[str] = None
    require_approval: Optional[str] = None
    allowed_tools: Optional[List[str]] = None
    # Built-in tool options (web_search, file_search, ...)
    options: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def function(
        cls,
        name: str,
        description: str,
        properties: PropertySpec = (),
        strict: bool = False,
    ) -> "Tool":
        """
        Define a function tool.

        In strict mode the server enforces the schema exactly, which requires
        ``additionalProperties: false``.
        """
        parameters = Parameters.from_properties(
            properties, additional_properties=False if strict else None
        )
        return cls(
            type="function", name=name, description=description, parameters=parameters, strict=strict
        )

    @classmethod
    def mcp(
        cls,
        server_label: str,
        server_url: str,
        require_approval: Optional[str] = None,
        allowed_tools: Optional[List[str]] = None,
    ) -> "Tool":
        return cls(
            type="mcp",
            server_label=server_label,
            server_url=server_url,
            require_approval=require_approval,
            allowed_tools=allowed_tools,
        )

    @classmethod
    def builtin(cls, type_name: str, **options: Any) -> "Tool":
        """A server-side tool such as ``web_search_preview`` or ``file_search``."""
        return cls(type=type_name, options=options)

    def _function_body(self, include_strict: bool = True) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name}
        if self.description is not None:
            data["description"] = self.description
        data["parameters"] = (self.parameters or Parameters()).to_dict()
        if include_strict and self.strict is not None:
            data["strict"] = self.strict
        return data

    def _mcp_body(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": "mcp",
            "server_label": self.server_label,
            "server_url": self.server_url,
        }
        if self.require_approval is not None:
            data["require_approval"] = self.require_approval
        if self.allowed_tools is not None:
            data["allowed_tools"] = list(self.allowed_tools)
        return data

    def to_chat_dict(self) -> Dict[str, Any]:
        if self.type == "function":
            return {"type": "function", "function": self._function_body()}
        if self.type == "mcp":
            return self._mcp_body()
        return {"type": self.type, **self.options}

    def to_responses_dict(self) -> Dict[str, Any]:
        if self.type == "function":
            return {"type": "function", **self._function_body()}
        if self.type == "mcp":
            return self._mcp_body()
        return {"type": self.type, **self.options}

    def to_realtime_dict(self) -> Dict[str, Any]:
        if self.type != "function":
            raise ValueError(f"Realtime sessions only accept function tools, not '{self.type}'")
        return {"type": "function", **self._function_body(include_strict=False)}


ParameterProperty.model_rebuild()
