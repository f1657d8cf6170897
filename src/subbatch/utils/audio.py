"""Audio extraction from video files using ffmpeg."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

from subbatch.core.errors import TranscodeError


def check_ffmpeg() -> bool:
    """Check if ffmpeg is available on the system."""
    return shutil.which("ffmpeg") is not None


def convert_to_mp3(
    video_path: Path,
    output_path: Path,
    bitrate: int = 128,
    codec: str = "libmp3lame",
    timeout: float | None = None,
) -> Path:
    """Transcode the audio track of a video to a constant-bitrate MP3.

    Args:
        video_path: Path to the input video file.
        output_path: Path for the MP3 file. Overwritten if it exists.
        bitrate: Audio bitrate in kbps.
        codec: ffmpeg audio encoder.
        timeout: Seconds to wait for ffmpeg before giving up, or None.

    Returns:
        Path to the transcoded audio file.

    Raises:
        TranscodeError: If ffmpeg is missing, fails, or times out.
    """
    if not check_ffmpeg():
        raise TranscodeError("ffmpeg not found. Install it with: brew install ffmpeg")

    video_path = Path(video_path)
    output_path = Path(output_path)

    cmd = [
        "ffmpeg",
        "-i",
        str(video_path),
        "-vn",  # no video
        "-acodec",
        codec,
        "-b:a",
        f"{bitrate}k",
        "-f",
        "mp3",
        "-y",  # overwrite
        str(output_path),
    ]

    try:
        result = subprocess.run(
            cmd, stdout=subprocess.DEVNULL, stderr=subprocess.PIPE, timeout=timeout
        )
    except subprocess.TimeoutExpired as e:
        raise TranscodeError(f"ffmpeg timed out after {timeout}s on {video_path.name}") from e
    except OSError as e:
        raise TranscodeError(f"Could not run ffmpeg: {e}") from e

    if result.returncode != 0:
        stderr_msg = result.stderr.decode(errors="replace").strip()
        # Last line carries the actual error; the rest is the banner
        detail = stderr_msg.splitlines()[-1] if stderr_msg else f"exit code {result.returncode}"
        raise TranscodeError(f"ffmpeg failed on {video_path.name}: {detail}")
    return output_path
