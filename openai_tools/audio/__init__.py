"""Speech synthesis, transcription and translation."""

from openai_tools.audio.request import Audio
