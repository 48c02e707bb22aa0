"""Token accounting returned by the chat, responses and embeddings APIs."""

from typing import Optional

from pydantic import BaseModel


class InputTokenDetails(BaseModel):
    cached_tokens: Optional[int] = None
    text_tokens: Optional[int] = None
    audio_tokens: Optional[int] = None


class OutputTokenDetails(BaseModel):
    reasoning_tokens: Optional[int] = None
    text_tokens: Optional[int] = None
    audio_tokens: Optional[int] = None
    accepted_prediction_tokens: Optional[int] = None
    rejected_prediction_tokens: Optional[int] = None


class Usage(BaseModel):
    """Covers both naming schemes: prompt/completion (chat) and input/output (responses)."""

    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None
    total_tokens: Optional[int] = None
    prompt_tokens_details: Optional[InputTokenDetails] = None
    completion_tokens_details: Optional[OutputTokenDetails] = None
    input_tokens_details: Optional[InputTokenDetails] = None
    output_tokens_details: Optional[OutputTokenDetails] = None

    @property
    def input_total(self) -> int:
        return self.input_tokens if self.input_tokens is not None else (self.prompt_tokens or 0)

    @property
    def output_total(self) -> int:
        return self.output_tokens if self.output_tokens is not None else (self.completion_tokens or 0)
