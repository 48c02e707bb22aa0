"""Pydantic models for transcription and translation results."""

from typing import List, Optional

from pydantic import BaseModel

from openai_tools.common.usage import Usage


class Word(BaseModel):
    word: str
    start: float
    end: float


class Segment(BaseModel):
    id: int
    start: float
    end: float
    text: str
    seek: Optional[int] = None
    tokens: Optional[List[int]] = None
    temperature: Optional[float] = None
    avg_logprob: Optional[float] = None
    compression_ratio: Optional[float] = None
    no_speech_prob: Optional[float] = None


class TranscriptionResponse(BaseModel):
    """
    Transcription or translation text.

    ``language``, ``duration``, ``words`` and ``segments`` are only present for
    ``verbose_json``.
    """

    text: str
    language: Optional[str] = None
    duration: Optional[float] = None
    words: Optional[List[Word]] = None
    segments: Optional[List[Segment]] = None
    usage: Optional[Usage] = None
