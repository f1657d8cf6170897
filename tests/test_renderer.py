"""Tests for SRT and WebVTT rendering."""

from subbatch.core.models import Segment
from subbatch.subtitles.renderer import render_srt, render_vtt


def test_srt_example_block():
    segments = [Segment(start=1.5, end=3.25, text=" Hello ")]
    assert render_srt(segments) == "1\n00:00:01,500 --> 00:00:03,250\nHello\n\n"


def test_empty_inputs():
    assert render_srt([]) == ""
    assert render_vtt([]) == "WEBVTT\n\n"
    assert render_vtt([], width=50) == "WEBVTT\n\n"


def test_srt_three_cues_in_input_order(segments):
    content = render_srt(segments)
    blocks = content.split("\n\n")[:-1]
    assert len(blocks) == 3
    assert [block.splitlines()[0] for block in blocks] == ["1", "2", "3"]
    assert [block.splitlines()[2] for block in blocks] == ["Bonjour", "tout le monde", "Salut"]
    assert content.endswith("\n\n")


def test_srt_keeps_unsorted_and_overlapping_segments():
    segments = [
        Segment(start=5.0, end=6.0, text="later"),
        Segment(start=1.0, end=5.5, text="earlier"),
    ]
    content = render_srt(segments)
    assert content == (
        "1\n00:00:05,000 --> 00:00:06,000\nlater\n\n"
        "2\n00:00:01,000 --> 00:00:05,500\nearlier\n\n"
    )


def test_vtt_document(segments):
    content = render_vtt(segments)
    assert content.startswith("WEBVTT\n\n1\n00:00:00.000 --> 00:00:01.500\nBonjour\n\n")
    assert "3\n00:00:03.250 --> 00:00:04.000\nSalut\n\n" in content
    assert "size:" not in content


def test_vtt_width_suffix():
    segments = [Segment(start=1.5, end=3.25, text="Hello")]
    content = render_vtt(segments, width=50)
    assert content == "WEBVTT\n\n1\n00:00:01.500 --> 00:00:03.250 size:50%\nHello\n\n"


def test_text_is_not_escaped_or_wrapped():
    text = "<b>Tom & Jerry</b> " + "x" * 120
    content = render_srt([Segment(start=0.0, end=1.0, text=text)])
    assert text.strip() in content
