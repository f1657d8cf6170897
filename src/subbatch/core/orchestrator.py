"""Per-file orchestration: skip check, transcription, rendering, writing.

``process_file`` never raises for a file-level problem. Every
``SubbatchError`` becomes a FAILED outcome so the batch can move on.
"""

from __future__ import annotations

from pathlib import Path

from subbatch.core.config import SubbatchConfig
from subbatch.core.errors import SubbatchError, WriteError
from subbatch.core.events import EventCallback, emitter
from subbatch.core.models import FileOutcome, FileStatus, FileTask
from subbatch.core.pipeline import TranscodeFn, TranscribeFn, transcribe_video
from subbatch.subtitles.renderer import render_srt, render_vtt
from subbatch.utils.console import console
from subbatch.utils.paths import file_task


def _write(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise WriteError(f"Could not write {path}: {e}") from e


def write_outputs(task: FileTask, srt: str, vtt: str) -> None:
    """Write both subtitle files, removing the SRT again if the VTT write fails."""
    _write(task.srt_path, srt)
    try:
        _write(task.vtt_path, vtt)
    except WriteError:
        task.srt_path.unlink(missing_ok=True)
        raise


def process_file(
    source_path: Path,
    config: SubbatchConfig,
    width: int | None = None,
    transcode: TranscodeFn | None = None,
    transcribe: TranscribeFn | None = None,
    on_event: EventCallback | None = None,
) -> FileOutcome:
    """Produce ``<stem>.srt`` and ``<stem>.vtt`` next to a source video.

    Args:
        source_path: Video file to process.
        config: Full application config.
        width: VTT cue width in percent; falls back to ``config.output.vtt_width``.
        transcode: Override for the audio transcoder.
        transcribe: Override for the transcription call.
        on_event: Optional callback for streaming progress events.

    Returns:
        The outcome for this file: skipped, succeeded, or failed with a message.
    """
    emit = emitter(on_event)
    task = file_task(Path(source_path), temp_suffix=config.transcode.temp_suffix)
    if width is None:
        width = config.output.vtt_width

    if task.outputs_exist:
        console.print(f"[dim]Skipping {task.base_name} (SRT and VTT already exist)[/dim]")
        return FileOutcome(task=task, status=FileStatus.SKIPPED)

    try:
        result = transcribe_video(
            task.source_path,
            config,
            transcode=transcode,
            transcribe=transcribe,
            on_event=on_event,
        )

        emit("write", 0.85, "Creating subtitle files...")
        srt = render_srt(result.segments)
        vtt = render_vtt(result.segments, width=width)
        write_outputs(task, srt, vtt)
    except SubbatchError as e:
        console.print(f"[red]Failed to process {task.base_name}:[/red] {e}")
        return FileOutcome(task=task, status=FileStatus.FAILED, error=str(e))

    emit(
        "done",
        1.0,
        "Complete!",
        data={"srt": str(task.srt_path), "vtt": str(task.vtt_path)},
    )
    console.print(f"[green]Saved:[/green] {task.srt_path}")
    console.print(f"[green]Saved:[/green] {task.vtt_path}")
    return FileOutcome(task=task, status=FileStatus.SUCCEEDED)
