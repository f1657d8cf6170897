"""Output path derivation and media discovery."""

from __future__ import annotations

from pathlib import Path

from subbatch.core.models import FileTask


def file_task(source_path: Path, temp_suffix: str = "_temp.mp3") -> FileTask:
    """Derive the output and temporary paths for a source video.

    Outputs sit next to the source and share its stem:
    ``clip.mp4`` -> ``clip.srt``, ``clip.vtt`` and ``clip_temp.mp3``.
    """
    source_path = Path(source_path)
    base = source_path.stem
    parent = source_path.parent
    return FileTask(
        source_path=source_path,
        base_name=base,
        srt_path=parent / f"{base}.srt",
        vtt_path=parent / f"{base}.vtt",
        audio_path=parent / f"{base}{temp_suffix}",
    )


def has_extension(path: Path, extension: str) -> bool:
    """Case-insensitive suffix check (``.MP4`` matches ``.mp4``)."""
    return Path(path).suffix.lower() == extension.lower()


def find_media_files(directory: Path, extension: str = ".mp4") -> list[Path]:
    """List regular files directly inside ``directory`` with the given extension.

    Not recursive. Results are sorted by name so runs are reproducible.
    """
    return sorted(
        entry
        for entry in Path(directory).iterdir()
        if entry.is_file() and has_extension(entry, extension)
    )
