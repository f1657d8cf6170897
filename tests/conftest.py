"""Shared test fixtures."""

import os

# Keep litellm from fetching its model cost map over the network at import time.
os.environ.setdefault("LITELLM_LOCAL_MODEL_COST_MAP", "True")

from pathlib import Path

import pytest

from subbatch.core.config import SubbatchConfig
from subbatch.core.models import Segment, TranscriptionResult

SAMPLE_SEGMENTS = [
    Segment(start=0.0, end=1.5, text=" Bonjour "),
    Segment(start=1.5, end=3.25, text="tout le monde"),
    Segment(start=3.25, end=4.0, text="  Salut\n"),
]


class FakeTranscoder:
    """Stands in for ffmpeg: writes a few bytes to the output path."""

    def __init__(self, fail_on: set[str] | None = None):
        self.fail_on = fail_on or set()
        self.calls: list[tuple[Path, Path]] = []

    def __call__(self, source: Path, output: Path) -> Path:
        self.calls.append((source, output))
        output.write_bytes(b"ID3fake-mp3")
        if source.stem in self.fail_on:
            raise RuntimeError("Invalid data found when processing input")
        return output


class FakeTranscriber:
    """Stands in for the transcription API, returning a canned result."""

    def __init__(self, result: TranscriptionResult | None = None, fail_on: set[str] | None = None):
        self.result = result or TranscriptionResult(
            text="Bonjour tout le monde Salut", segments=list(SAMPLE_SEGMENTS)
        )
        self.fail_on = fail_on or set()
        self.calls: list[str] = []

    def __call__(self, audio) -> TranscriptionResult:
        self.calls.append(audio.name)
        assert audio.read() == b"ID3fake-mp3"
        if any(Path(audio.name).stem.startswith(stem) for stem in self.fail_on):
            raise ConnectionError("API unreachable")
        return self.result


@pytest.fixture
def config() -> SubbatchConfig:
    return SubbatchConfig()


@pytest.fixture
def segments() -> list[Segment]:
    return list(SAMPLE_SEGMENTS)


@pytest.fixture
def transcoder() -> FakeTranscoder:
    return FakeTranscoder()


@pytest.fixture
def transcriber() -> FakeTranscriber:
    return FakeTranscriber()


@pytest.fixture
def video(tmp_path: Path) -> Path:
    path = tmp_path / "lecture.mp4"
    path.write_bytes(b"\x00\x00\x00\x18ftypmp42")
    return path
