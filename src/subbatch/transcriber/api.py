"""API transcription backend via LiteLLM.

Uses litellm.transcription() to call a cloud Whisper API (OpenAI by default)
with segment-level timestamps and a verbose JSON response.
"""

from __future__ import annotations

import os
from typing import BinaryIO

import litellm

from subbatch.core.config import WhisperConfig
from subbatch.core.errors import TranscriptionServiceError
from subbatch.core.models import Segment, TranscriptionResult

# 25 MB limit for OpenAI Whisper API
_MAX_FILE_SIZE = 25 * 1024 * 1024


def transcribe(audio: BinaryIO, config: WhisperConfig) -> TranscriptionResult:
    """Transcribe an open audio stream via a cloud Whisper API.

    Args:
        audio: Binary stream positioned at the start of an audio file.
        config: Whisper configuration with model set to a LiteLLM model string.

    Returns:
        Transcript text and segments, in the order the service returned them.

    Raises:
        TranscriptionServiceError: If the upload is too large, the request
            fails, or the response cannot be parsed.
    """
    size = os.fstat(audio.fileno()).st_size
    if size > _MAX_FILE_SIZE:
        size_mb = size / (1024 * 1024)
        raise TranscriptionServiceError(
            f"Audio file is {size_mb:.1f} MB, exceeding the 25 MB API limit."
        )

    call_kwargs: dict = {
        "model": config.model,
        "response_format": "verbose_json",
        "timestamp_granularities": ["segment"],
        "timeout": config.timeout,
        "max_retries": config.max_retries,
        "api_key": os.environ.get(config.api_key_env),
    }
    if config.api_base:
        call_kwargs["api_base"] = config.api_base

    try:
        response = litellm.transcription(file=audio, **call_kwargs)
    except Exception as e:
        raise TranscriptionServiceError(f"Transcription request failed: {e}") from e

    return _response_to_result(response)


def _response_to_result(response) -> TranscriptionResult:
    """Convert a LiteLLM transcription response to a TranscriptionResult."""
    # LiteLLM returns a TranscriptionResponse; extract the inner dict
    data = response.model_dump() if hasattr(response, "model_dump") else response
    if not isinstance(data, dict):
        raise TranscriptionServiceError(f"Unexpected transcription response: {type(data).__name__}")

    try:
        segments = [
            Segment(
                start=float(_get(seg, "start", 0)),
                end=float(_get(seg, "end", 0)),
                text=_get(seg, "text", "") or "",
            )
            for seg in data.get("segments") or []
        ]
    except (TypeError, ValueError) as e:
        raise TranscriptionServiceError(f"Malformed segment in response: {e}") from e

    return TranscriptionResult(text=data.get("text") or "", segments=segments)


def _get(obj, key: str, default=None):
    """Get a value from a dict or object attribute."""
    if isinstance(obj, dict):
        return obj.get(key, default)
    return getattr(obj, key, default)
