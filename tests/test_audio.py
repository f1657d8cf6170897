"""Tests for ffmpeg audio conversion with a mocked subprocess."""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from subbatch.core.errors import TranscodeError
from subbatch.utils.audio import check_ffmpeg, convert_to_mp3


@patch("subbatch.utils.audio.shutil.which", return_value=None)
def test_check_ffmpeg_missing(_mock):
    assert check_ffmpeg() is False


@patch("subbatch.utils.audio.shutil.which", return_value=None)
def test_convert_without_ffmpeg(_mock, tmp_path: Path):
    with pytest.raises(TranscodeError, match="ffmpeg not found"):
        convert_to_mp3(tmp_path / "a.mp4", tmp_path / "a_temp.mp3")


@patch("subbatch.utils.audio.shutil.which", return_value="/usr/bin/ffmpeg")
@patch("subbatch.utils.audio.subprocess.run")
def test_convert_command(mock_run, _which, tmp_path: Path):
    mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=0, stderr=b"")
    out = convert_to_mp3(tmp_path / "a.mp4", tmp_path / "a_temp.mp3", bitrate=96, timeout=10)

    assert out == tmp_path / "a_temp.mp3"
    cmd = mock_run.call_args.args[0]
    assert cmd[0] == "ffmpeg"
    assert cmd[cmd.index("-i") + 1] == str(tmp_path / "a.mp4")
    assert cmd[cmd.index("-acodec") + 1] == "libmp3lame"
    assert cmd[cmd.index("-b:a") + 1] == "96k"
    assert cmd[cmd.index("-f") + 1] == "mp3"
    assert cmd[-1] == str(tmp_path / "a_temp.mp3")
    assert mock_run.call_args.kwargs["timeout"] == 10


@patch("subbatch.utils.audio.shutil.which", return_value="/usr/bin/ffmpeg")
@patch("subbatch.utils.audio.subprocess.run")
def test_convert_failure_reports_last_stderr_line(mock_run, _which, tmp_path: Path):
    mock_run.return_value = subprocess.CompletedProcess(
        args=[], returncode=1, stderr=b"ffmpeg version 6.0\nbroken.mp4: Invalid data found\n"
    )
    with pytest.raises(TranscodeError, match="Invalid data found"):
        convert_to_mp3(tmp_path / "broken.mp4", tmp_path / "broken_temp.mp3")


@patch("subbatch.utils.audio.shutil.which", return_value="/usr/bin/ffmpeg")
@patch("subbatch.utils.audio.subprocess.run", side_effect=subprocess.TimeoutExpired("ffmpeg", 5))
def test_convert_timeout(_run, _which, tmp_path: Path):
    with pytest.raises(TranscodeError, match="timed out"):
        convert_to_mp3(tmp_path / "a.mp4", tmp_path / "a_temp.mp3", timeout=5)
