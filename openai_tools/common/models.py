"""
Model identifiers and the per-model parameter policy.

Reasoning models (the gpt-5 and o-series families) accept only the default
value for the sampling parameters and reject log-probability options outright.
Request builders call ``apply_parameter_policy`` right before serialization:
fields the model does not honor are removed from the payload and a warning is
logged. The request itself always proceeds.
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict

from openai_tools.config.constants import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)

# Optional request fields governed by the policy
POLICY_FIELDS = (
    "temperature",
    "top_p",
    "frequency_penalty",
    "presence_penalty",
    "logprobs",
    "top_logprobs",
    "logit_bias",
    "n",
)

REASONING_MODELS = frozenset(
    [
        "gpt-5.2",
        "gpt-5.2-chat-latest",
        "gpt-5.2-pro",
        "gpt-5.1",
        "gpt-5.1-chat-latest",
        "gpt-5.1-codex-max",
        "gpt-5-mini",
        "o1",
        "o1-pro",
        "o3",
        "o3-mini",
        "o4-mini",
    ]
)
REASONING_PREFIXES = ("gpt-5", "o1", "o3", "o4")

STANDARD_CHAT_MODELS = frozenset(
    [
        "gpt-4.1",
        "gpt-4.1-mini",
        "gpt-4.1-nano",
        "gpt-4o",
        "gpt-4o-mini",
        "gpt-4o-audio-preview",
        "gpt-4-turbo",
        "gpt-4",
        "gpt-3.5-turbo",
    ]
)


class RestrictionKind(str, Enum):
    SUPPORTED = "supported"
    SUPPORTED_WITH_DEFAULT = "supported_with_default"
    UNSUPPORTED = "unsupported"


class ParameterRestriction(BaseModel):
    """How a model treats one optional request field."""

    model_config = ConfigDict(frozen=True)

    kind: RestrictionKind
    default: Optional[Union[int, float]] = None

    @classmethod
    def supported(cls) -> "ParameterRestriction":
        return cls(kind=RestrictionKind.SUPPORTED)

    @classmethod
    def with_default(cls, value: Union[int, float]) -> "ParameterRestriction":
        return cls(kind=RestrictionKind.SUPPORTED_WITH_DEFAULT, default=value)

    @classmethod
    def unsupported(cls) -> "ParameterRestriction":
        return cls(kind=RestrictionKind.UNSUPPORTED)

    def allows(self, value: Any) -> bool:
        """Whether sending ``value`` for this field is honored by the model."""
        if self.kind == RestrictionKind.SUPPORTED:
            return True
        if self.kind == RestrictionKind.UNSUPPORTED:
            return False
        return value == self.default


_REASONING_TABLE: Dict[str, ParameterRestriction] = {
    "temperature": ParameterRestriction.with_default(1.0),
    "top_p": ParameterRestriction.with_default(1.0),
    "frequency_penalty": ParameterRestriction.with_default(0.0),
    "presence_penalty": ParameterRestriction.with_default(0.0),
    "n": ParameterRestriction.with_default(1),
    "logprobs": ParameterRestriction.unsupported(),
    "top_logprobs": ParameterRestriction.unsupported(),
    "logit_bias": ParameterRestriction.unsupported(),
}


def is_reasoning_model(model: str) -> bool:
    """Known reasoning models plus custom ids in the same families."""
    return model in REASONING_MODELS or model.startswith(REASONING_PREFIXES)


def restriction_for(model: str, field: str) -> ParameterRestriction:
    if field not in POLICY_FIELDS:
        raise ValueError(f"'{field}' is not governed by the parameter policy")
    if is_reasoning_model(model):
        return _REASONING_TABLE[field]
    return ParameterRestriction.supported()


def apply_parameter_policy(model: str, body: Dict[str, Any]) -> Dict[str, Any]:
    """
    Drop fields ``model`` does not honor from a request body.

    Args:
        model: Model identifier the request targets
        body: Serialized request body; not modified

    Returns:
        Dict[str, Any]: A copy of the body without the ignored fields
    """
    filtered = dict(body)
    for field in POLICY_FIELDS:
        if field not in filtered:
            continue
        value = filtered[field]
        restriction = restriction_for(model, field)
        if restriction.allows(value):
            continue
        del filtered[field]
        if restriction.kind == RestrictionKind.UNSUPPORTED:
            logger.warning(f"Model '{model}' does not support {field}. Ignoring {field}={value}.")
        else:
            logger.warning(
                f"Model '{model}' only supports {field}={restriction.default}. "
                f"Ignoring {field}={value}."
            )
    return filtered
