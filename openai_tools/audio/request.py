"""
Client for text-to-speech, transcription and translation.

Speech returns raw audio bytes. Transcriptions and translations upload audio as
multipart form data; the ``text``, ``srt`` and ``vtt`` formats come back as
plain text and are wrapped in a ``TranscriptionResponse``.
"""

import logging
import mimetypes
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from openai_tools.audio.response import TranscriptionResponse
from openai_tools.common.client import BaseClient
from openai_tools.common.errors import ConfigError
from openai_tools.common.http import parse_model
from openai_tools.config.constants import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)

SPEECH_PATH = "audio/speech"
TRANSCRIPTIONS_PATH = "audio/transcriptions"
TRANSLATIONS_PATH = "audio/translations"

TtsModel = Literal["tts-1", "tts-1-hd", "gpt-4o-mini-tts"]
SttModel = Literal["whisper-1", "gpt-4o-transcribe", "gpt-4o-mini-transcribe"]
SpeechVoice = Literal[
    "alloy", "ash", "ballad", "coral", "echo", "fable", "onyx", "nova", "sage", "shimmer", "verse"
]
SpeechFormat = Literal["mp3", "opus", "aac", "flac", "wav", "pcm"]
TranscriptionFormat = Literal["json", "text", "srt", "verbose_json", "vtt"]
TimestampGranularity = Literal["word", "segment"]

TEXT_FORMATS = ("text", "srt", "vtt")
MIN_SPEED, MAX_SPEED = 0.25, 4.0

AudioInput = Union[str, Path, Tuple[str, bytes]]


def _audio_part(audio: AudioInput) -> Tuple[str, bytes, str]:
    if isinstance(audio, tuple):
        filename, content = audio
    else:
        path = Path(audio)
        filename, content = path.name, path.read_bytes()
    content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
    return filename, content, content_type


class Audio(BaseClient):
    def text_to_speech(
        self,
        text: str,
        voice: SpeechVoice = "alloy",
        model: TtsModel = "tts-1",
        response_format: Optional[SpeechFormat] = None,
        speed: Optional[float] = None,
        instructions: Optional[str] = None,
    ) -> bytes:
        """
        Synthesize speech.

        Returns:
            bytes: Audio in ``response_format`` (mp3 by default)
        """
        if not text:
            raise ConfigError("Text is required for speech synthesis")
        if speed is not None and not MIN_SPEED <= speed <= MAX_SPEED:
            raise ConfigError(f"speed must be between {MIN_SPEED} and {MAX_SPEED}")
        if instructions is not None and model != "gpt-4o-mini-tts":
            raise ConfigError("instructions are only supported by gpt-4o-mini-tts")
        body: Dict[str, Any] = {"model": model, "input": text, "voice": voice}
        if response_format is not None:
            body["response_format"] = response_format
        if speed is not None:
            body["speed"] = speed
        if instructions is not None:
            body["instructions"] = instructions
        logger.info(f"Synthesizing {len(text)} characters with {model}/{voice}")
        return self.http.post_bytes(SPEECH_PATH, body)

    def _upload(
        self,
        path: str,
        audio: AudioInput,
        model: str,
        fields: List[Tuple[str, str]],
        response_format: Optional[TranscriptionFormat],
    ) -> TranscriptionResponse:
        data: List[Tuple[str, str]] = [("model", model)]
        if response_format is not None:
            data.append(("response_format", response_format))
        data.extend(fields)
        response = self.http.post_multipart(path, data, {"file": _audio_part(audio)})
        if response_format in TEXT_FORMATS:
            return TranscriptionResponse(text=response.text)
        return parse_model(TranscriptionResponse, self.http.decode_json(response))

    def transcribe(
        self,
        audio: AudioInput,
        model: SttModel = "whisper-1",
        language: Optional[str] = None,
        prompt: Optional[str] = None,
        response_format: Optional[TranscriptionFormat] = None,
        temperature: Optional[float] = None,
        timestamp_granularities: Optional[List[TimestampGranularity]] = None,
    ) -> TranscriptionResponse:
        """
        Transcribe audio in its original language.

        Args:
            audio: A file path or a (filename, bytes) pair
        """
        if timestamp_granularities and response_format != "verbose_json":
            raise ConfigError("timestamp_granularities requires response_format='verbose_json'")
        fields: List[Tuple[str, str]] = []
        if language is not None:
            fields.append(("language", language))
        if prompt is not None:
            fields.append(("prompt", prompt))
        if temperature is not None:
            fields.append(("temperature", str(temperature)))
        for granularity in timestamp_granularities or []:
            fields.append(("timestamp_granularities[]", granularity))
        return self._upload(TRANSCRIPTIONS_PATH, audio, model, fields, response_format)

    def translate(
        self,
        audio: AudioInput,
        model: SttModel = "whisper-1",
        prompt: Optional[str] = None,
        response_format: Optional[TranscriptionFormat] = None,
        temperature: Optional[float] = None,
    ) -> TranscriptionResponse:
        """Translate audio into English text."""
        fields: List[Tuple[str, str]] = []
        if prompt is not None:
            fields.append(("prompt", prompt))
        if temperature is not None:
            fields.append(("temperature", str(temperature)))
        return self._upload(TRANSLATIONS_PATH, audio, model, fields, response_format)
