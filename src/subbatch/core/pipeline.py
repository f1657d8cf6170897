"""Media pipeline: transcode a video to audio and transcribe it."""

from __future__ import annotations

from contextlib import contextmanager
from functools import partial
from pathlib import Path
from typing import BinaryIO, Callable, Iterator

from subbatch.core.config import SubbatchConfig
from subbatch.core.errors import TranscodeError, TranscriptionServiceError, ValidationError
from subbatch.core.events import EventCallback, emitter
from subbatch.core.models import TranscriptionResult
from subbatch.utils.console import console
from subbatch.utils.paths import file_task, has_extension

# (source video, output audio path) -> output audio path
TranscodeFn = Callable[[Path, Path], Path]
# open audio stream -> transcript
TranscribeFn = Callable[[BinaryIO], TranscriptionResult]


def default_transcoder(config: SubbatchConfig) -> TranscodeFn:
    """ffmpeg-backed transcoder bound to the transcode settings."""
    from subbatch.utils.audio import convert_to_mp3

    return partial(
        convert_to_mp3,
        bitrate=config.transcode.bitrate,
        codec=config.transcode.codec,
        timeout=config.transcode.timeout,
    )


def default_transcriber(config: SubbatchConfig) -> TranscribeFn:
    """LiteLLM-backed transcriber bound to the whisper settings."""
    from subbatch.transcriber.api import transcribe

    return partial(transcribe, config=config.whisper)


@contextmanager
def temporary_audio(path: Path) -> Iterator[Path]:
    """Yield ``path`` and delete whatever is there on exit, however the block ends.

    A failed delete is reported, not raised, so it cannot mask the error
    that ended the block.
    """
    try:
        yield path
    finally:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            console.print(f"[yellow]Could not remove temporary audio {path}:[/yellow] {e}")


def validate_source(source_path: Path, extension: str = ".mp4") -> None:
    """Raise ValidationError unless ``source_path`` is an existing file with ``extension``."""
    if not source_path.exists():
        raise ValidationError(f"File not found: {source_path}")
    if not source_path.is_file():
        raise ValidationError(f"Not a file: {source_path}")
    if not has_extension(source_path, extension):
        raise ValidationError(f"Only {extension.upper().lstrip('.')} files are supported: {source_path}")


def transcribe_video(
    source_path: Path,
    config: SubbatchConfig,
    transcode: TranscodeFn | None = None,
    transcribe: TranscribeFn | None = None,
    on_event: EventCallback | None = None,
) -> TranscriptionResult:
    """Convert a video to audio and transcribe it with segment timestamps.

    Args:
        source_path: Video file to transcribe.
        config: Full application config.
        transcode: Override for the audio transcoder (defaults to ffmpeg).
        transcribe: Override for the transcription call (defaults to LiteLLM).
        on_event: Optional callback for streaming progress events.

    Returns:
        The transcript and its segments, unmodified.

    Raises:
        ValidationError: If the source is missing or has the wrong extension.
        TranscodeError: If audio conversion fails.
        TranscriptionServiceError: If the transcription call fails.
    """
    emit = emitter(on_event)
    source_path = Path(source_path)
    validate_source(source_path, config.transcode.extension)

    transcode = transcode or default_transcoder(config)
    transcribe = transcribe or default_transcriber(config)
    task = file_task(source_path, temp_suffix=config.transcode.temp_suffix)

    with temporary_audio(task.audio_path) as audio_path:
        emit("convert", 0.1, "Converting to MP3...")
        try:
            transcode(source_path, audio_path)
        except TranscodeError:
            raise
        except Exception as e:
            raise TranscodeError(f"Audio conversion failed: {e}") from e
        if not audio_path.is_file():
            raise TranscodeError(f"Transcoder produced no audio file at {audio_path}")

        emit("transcribe", 0.3, "Sending to transcription API...")
        try:
            with open(audio_path, "rb") as audio:
                result = transcribe(audio)
        except TranscriptionServiceError:
            raise
        except Exception as e:
            raise TranscriptionServiceError(f"Transcription failed: {e}") from e

        emit("process", 0.8, "Processing transcription...")

    return result
