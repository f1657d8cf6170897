"""Shared data models for subbatch."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Segment:
    """A timed span of transcribed text, mapped 1:1 to a subtitle cue."""

    start: float  # seconds
    end: float  # seconds
    text: str


@dataclass
class TranscriptionResult:
    """Output from the transcription service, in the order it was received."""

    text: str
    segments: list[Segment] = field(default_factory=list)


@dataclass(frozen=True)
class FileTask:
    """Paths derived from a single source video."""

    source_path: Path
    base_name: str
    srt_path: Path
    vtt_path: Path
    audio_path: Path  # temporary transcoded audio

    @property
    def outputs_exist(self) -> bool:
        return self.srt_path.is_file() and self.vtt_path.is_file()


class FileStatus(str, enum.Enum):
    SKIPPED = "skipped"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class FileOutcome:
    """Result of orchestrating one file."""

    task: FileTask
    status: FileStatus
    error: str | None = None


@dataclass
class BatchSummary:
    """Counts accumulated over one batch run."""

    discovered: int = 0
    skipped: int = 0
    succeeded: int = 0
    failed: int = 0
    outcomes: list[FileOutcome] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        """Files that were not skipped."""
        return self.discovered - self.skipped

    def record(self, outcome: FileOutcome) -> None:
        self.outcomes.append(outcome)
        if outcome.status is FileStatus.SKIPPED:
            self.skipped += 1
        elif outcome.status is FileStatus.SUCCEEDED:
            self.succeeded += 1
        else:
            self.failed += 1
