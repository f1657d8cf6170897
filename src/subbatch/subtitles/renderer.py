"""Render transcription segments as SRT and WebVTT text.

Both renderers are pure: cues keep the input order, numbering starts at 1,
and segment text is only stripped of surrounding whitespace.
"""

from __future__ import annotations

from typing import Iterable

from subbatch.core.models import Segment
from subbatch.subtitles.timestamps import format_srt_timestamp, format_vtt_timestamp

VTT_HEADER = "WEBVTT\n\n"


def render_srt(segments: Iterable[Segment]) -> str:
    """Render segments as an SRT document. No segments gives an empty string."""
    blocks = []
    for i, seg in enumerate(segments, 1):
        start = format_srt_timestamp(seg.start)
        end = format_srt_timestamp(seg.end)
        blocks.append(f"{i}\n{start} --> {end}\n{seg.text.strip()}\n\n")
    return "".join(blocks)


def render_vtt(segments: Iterable[Segment], width: int | None = None) -> str:
    """Render segments as a WebVTT document.

    Args:
        segments: Segments in cue order.
        width: Optional cue width in percent, appended to each timing line
            as `` size:<width>%``.

    Returns:
        The document text, starting with the ``WEBVTT`` header.
    """
    settings = f" size:{width}%" if width is not None else ""
    blocks = [VTT_HEADER]
    for i, seg in enumerate(segments, 1):
        start = format_vtt_timestamp(seg.start)
        end = format_vtt_timestamp(seg.end)
        blocks.append(f"{i}\n{start} --> {end}{settings}\n{seg.text.strip()}\n\n")
    return "".join(blocks)
