"""subbatch run command: transcribe every MP4 in a folder to SRT and VTT."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.progress import BarColumn, Progress, TaskID, TextColumn
from rich.table import Table

from subbatch.core.config import load_config
from subbatch.core.events import PipelineEvent
from subbatch.core.models import BatchSummary, FileStatus
from subbatch.utils.console import console

# Exit codes for startup failures; typer uses 2 for usage errors.
EXIT_DIR_NOT_FOUND = 3
EXIT_NOT_A_DIRECTORY = 4
EXIT_MISSING_CREDENTIAL = 5
EXIT_FFMPEG_MISSING = 6


class _ProgressReporter:
    """Drives one rich progress bar per file from pipeline events."""

    def __init__(self) -> None:
        self.progress = Progress(
            TextColumn("[bold blue]{task.fields[name]}"),
            BarColumn(),
            TextColumn("{task.percentage:>3.0f}%"),
            TextColumn("{task.description}"),
            console=console,
        )
        self._task: TaskID | None = None
        self._name = ""

    def on_file_start(self, index: int, total: int, path: Path) -> None:
        self._finish()
        self._name = f"File {index}/{total}"
        console.rule(f"[bold][{index}/{total}] {path.name}[/bold]")

    def on_event(self, event: PipelineEvent) -> None:
        if self._task is None:
            self._task = self.progress.add_task("Starting...", total=100, name=self._name)
        self.progress.update(self._task, completed=event.progress * 100, description=event.message)

    def _finish(self) -> None:
        if self._task is not None:
            self.progress.remove_task(self._task)
            self._task = None

    def __enter__(self) -> _ProgressReporter:
        self.progress.start()
        return self

    def __exit__(self, *exc: object) -> None:
        self._finish()
        self.progress.stop()


def _print_summary(summary: BatchSummary) -> None:
    table = Table(title=f"Batch Results ({summary.discovered} files)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("File", max_width=50, no_wrap=True)
    table.add_column("Status")
    table.add_column("Detail", max_width=60)

    styles = {
        FileStatus.SUCCEEDED: "green",
        FileStatus.SKIPPED: "dim",
        FileStatus.FAILED: "red",
    }
    for i, outcome in enumerate(summary.outcomes, 1):
        style = styles[outcome.status]
        table.add_row(
            str(i),
            outcome.task.source_path.name,
            f"[{style}]{outcome.status.value}[/{style}]",
            outcome.error or "",
        )

    console.print()
    console.print(table)
    console.print(
        f"\n[bold]{summary.succeeded}/{summary.attempted} succeeded[/bold]"
        f" ({summary.skipped} skipped, {summary.failed} failed)"
    )


def run(
    directory: Annotated[
        Path,
        typer.Argument(help="Folder containing MP4 files (not searched recursively)."),
    ],
    width: Annotated[
        Optional[int],
        typer.Option("--width", min=1, max=100, help="VTT cue width in percent (size:<width>%)."),
    ] = None,
    model: Annotated[
        Optional[str],
        typer.Option("--model", "-m", help="Transcription model (LiteLLM model string)."),
    ] = None,
    bitrate: Annotated[
        Optional[int],
        typer.Option("--bitrate", min=8, help="MP3 bitrate in kbps for the uploaded audio."),
    ] = None,
) -> None:
    """Transcribe every MP4 file in DIRECTORY into .srt and .vtt subtitles.

    Files that already have both subtitle files are skipped, so re-running
    over the same folder only processes what is missing.
    """
    from subbatch.core.batch import run_batch
    from subbatch.utils.audio import check_ffmpeg
    from subbatch.utils.paths import find_media_files

    if not directory.exists():
        console.print(f"[red]Error: Folder not found: {directory}[/red]")
        raise typer.Exit(EXIT_DIR_NOT_FOUND)
    if not directory.is_dir():
        console.print(f"[red]Error: Path is not a directory: {directory}[/red]")
        raise typer.Exit(EXIT_NOT_A_DIRECTORY)

    config = load_config(
        **{
            "whisper.model": model,
            "transcode.bitrate": bitrate,
            "output.vtt_width": width,
        }
    )

    key_env = config.whisper.api_key_env
    if not os.environ.get(key_env):
        console.print(f"[red]Error: {key_env} environment variable is required[/red]")
        raise typer.Exit(EXIT_MISSING_CREDENTIAL)

    files = find_media_files(directory, config.transcode.extension)
    if not files:
        console.print(f"No {config.transcode.extension.upper().lstrip('.')} files found in: {directory}")
        return

    if not check_ffmpeg():
        console.print("[red]Error: ffmpeg not found. Install it with: brew install ffmpeg[/red]")
        raise typer.Exit(EXIT_FFMPEG_MISSING)

    console.print(f"[bold]Found {len(files)} file(s) in:[/bold] {directory}\n")

    with _ProgressReporter() as reporter:
        summary = run_batch(
            directory,
            config,
            on_event=reporter.on_event,
            on_file_start=reporter.on_file_start,
        )

    _print_summary(summary)
