"""
Unit tests for the realtime audio helpers.
"""

import pytest

from openai_tools.realtime.audio import (
    DEFAULT_CHUNK_SIZE,
    chunk_audio,
    decode_audio,
    encode_audio,
    pcm16_duration_ms,
)


class TestAudioHelpers:
    def test_encode_decode(self):
        pcm = bytes(range(16))
        assert decode_audio(encode_audio(pcm)) == pcm
        assert encode_audio(b"\x00\x01") == "AAE="

    def test_default_chunk_is_100ms(self):
        assert DEFAULT_CHUNK_SIZE == 4800
        assert pcm16_duration_ms(b"\x00" * DEFAULT_CHUNK_SIZE) == 100

    def test_chunks_keep_whole_samples(self):
        """Odd chunk sizes are rounded down to whole samples."""
        chunks = list(chunk_audio(b"\x01\x02" * 5, chunk_size=3))
        assert [len(chunk) for chunk in chunks] == [2, 2, 2, 2, 2]
        assert b"".join(chunks) == b"\x01\x02" * 5

    def test_last_chunk_may_be_short(self):
        chunks = list(chunk_audio(b"\x00" * 10, chunk_size=4))
        assert [len(chunk) for chunk in chunks] == [4, 4, 2]

    def test_empty_audio(self):
        assert list(chunk_audio(b"")) == []

    def test_chunk_size_too_small(self):
        with pytest.raises(ValueError):
            list(chunk_audio(b"\x00\x00", chunk_size=1))

    def test_duration(self):
        assert pcm16_duration_ms(b"\x00" * 48000) == 1000
        assert pcm16_duration_ms(b"\x00" * 3200, sample_rate=16000) == 100
