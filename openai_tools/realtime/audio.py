"""Helpers for the base64 PCM16 audio carried by realtime events."""

import base64
from typing import Iterator

from openai_tools.config.constants import PCM16_SAMPLE_WIDTH, REALTIME_SAMPLE_RATE

# 100 ms of 24 kHz mono PCM16
DEFAULT_CHUNK_SIZE = REALTIME_SAMPLE_RATE * PCM16_SAMPLE_WIDTH // 10


def encode_audio(pcm: bytes) -> str:
    return base64.b64encode(pcm).decode("ascii")


def decode_audio(audio: str) -> bytes:
    return base64.b64decode(audio)


def chunk_audio(pcm: bytes, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
    """
    Split raw audio into chunks suitable for ``input_audio_buffer.append``.

    The chunk size is rounded down to whole samples so no sample is split.
    """
    if chunk_size < PCM16_SAMPLE_WIDTH:
        raise ValueError(f"chunk_size must be at least {PCM16_SAMPLE_WIDTH} bytes")
    chunk_size -= chunk_size % PCM16_SAMPLE_WIDTH
    for start in range(0, len(pcm), chunk_size):
        yield pcm[start:start + chunk_size]


def pcm16_duration_ms(pcm: bytes, sample_rate: int = REALTIME_SAMPLE_RATE) -> int:
    """Duration of mono PCM16 audio in milliseconds."""
    samples = len(pcm) // PCM16_SAMPLE_WIDTH
    return samples * 1000 // sample_rate
