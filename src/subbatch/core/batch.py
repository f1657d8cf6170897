"""Batch driver: process every video in a directory, one at a time."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from subbatch.core.config import SubbatchConfig
from subbatch.core.events import EventCallback
from subbatch.core.models import BatchSummary
from subbatch.core.orchestrator import process_file
from subbatch.core.pipeline import TranscodeFn, TranscribeFn
from subbatch.utils.paths import find_media_files

# (1-based index, total, source path), called before each file
FileStartCallback = Callable[[int, int, Path], None]


def run_batch(
    directory: Path,
    config: SubbatchConfig,
    width: int | None = None,
    transcode: TranscodeFn | None = None,
    transcribe: TranscribeFn | None = None,
    on_event: EventCallback | None = None,
    on_file_start: FileStartCallback | None = None,
) -> BatchSummary:
    """Transcribe every matching video directly inside ``directory``.

    Files are processed sequentially; a failure on one file is recorded
    in the summary and does not stop the rest.
    """
    files = find_media_files(directory, config.transcode.extension)
    summary = BatchSummary(discovered=len(files))

    for i, path in enumerate(files, 1):
        if on_file_start:
            on_file_start(i, len(files), path)
        outcome = process_file(
            path,
            config,
            width=width,
            transcode=transcode,
            transcribe=transcribe,
            on_event=on_event,
        )
        summary.record(outcome)

    return summary
