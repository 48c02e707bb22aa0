"""Client for the moderation endpoint (``POST /moderations``)."""

from typing import Any, Dict, List, Literal, Union

from openai_tools.common.client import BaseClient
from openai_tools.common.errors import ConfigError
from openai_tools.config.constants import DEFAULT_MODERATION_MODEL
from openai_tools.moderation.response import ModerationResponse

MODERATIONS_PATH = "moderations"

ModerationModel = Literal["omni-moderation-latest", "text-moderation-latest"]


class Moderations(BaseClient):
    """Classify text for potentially harmful content."""

    def _moderate(self, input_value: Union[str, List[str]], model: str) -> ModerationResponse:
        body: Dict[str, Any] = {"input": input_value, "model": model}
        return self.http.post(MODERATIONS_PATH, ModerationResponse, body)

    def moderate_text(self, text: str, model: ModerationModel = DEFAULT_MODERATION_MODEL) -> ModerationResponse:
        return self._moderate(text, model)

    def moderate_texts(
        self, texts: List[str], model: ModerationModel = DEFAULT_MODERATION_MODEL
    ) -> ModerationResponse:
        if not texts:
            raise ConfigError("At least one text is required")
        return self._moderate(list(texts), model)
