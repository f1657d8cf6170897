"""Clock-style timestamps for subtitle cues.

Every field is truncated, never rounded: 1.9999s renders as 00:00:01,999.
Hours are not wrapped at 24. Negative offsets are not supported.
"""

from __future__ import annotations


def _clock_fields(seconds: float) -> tuple[int, int, int, int]:
    h = int(seconds // 3600)
    m = int((seconds % 3600) // 60)
    s = int(seconds % 60)
    ms = int((seconds % 1) * 1000)
    return h, m, s, ms


def _format(seconds: float, ms_delimiter: str) -> str:
    h, m, s, ms = _clock_fields(seconds)
    return f"{h:02d}:{m:02d}:{s:02d}{ms_delimiter}{ms:03d}"


def format_srt_timestamp(seconds: float) -> str:
    """Format seconds as an SRT timestamp (HH:MM:SS,mmm)."""
    return _format(seconds, ",")


def format_vtt_timestamp(seconds: float) -> str:
    """Format seconds as a WebVTT timestamp (HH:MM:SS.mmm)."""
    return _format(seconds, ".")
