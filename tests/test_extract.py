"""
Unit Tests for frame extraction and clean-up
"""

import os
import pathlib
import subprocess
import sys

import pytest

from framecull import extract as extract_mod
from framecull.errors import ExternalToolError
from framecull.extract import build_ffmpeg_cmd, clean, extract, run_cmd
from framecull.frameset import TRASH


class TestBuildCommand:
    """Tests for build_ffmpeg_cmd()"""

    def test_names_frames_after_video_stem(self, tmp_path):
        cmd = build_ffmpeg_cmd("ffmpeg", pathlib.Path("clips/trip.mp4"), tmp_path)

        assert cmd[0] == "ffmpeg"
        assert cmd[cmd.index("-i") + 1] == os.path.join("clips", "trip.mp4")
        assert cmd[cmd.index("-vsync") + 1] == "vfr"
        assert cmd[-1] == str(tmp_path / "trip__%05d.png")


class TestRunCmd:
    """Tests for run_cmd()"""

    def test_missing_binary(self):
        with pytest.raises(ExternalToolError) as exc:
            run_cmd(["framecull-no-such-binary"])
        assert exc.value.returncode == 127

    def test_non_zero_exit(self):
        cmd = [sys.executable, "-c", "import sys; sys.stderr.write('bad input'); sys.exit(3)"]

        with pytest.raises(ExternalToolError) as exc:
            run_cmd(cmd)

        assert exc.value.returncode == 3
        assert "bad input" in str(exc.value)


class TestExtract:
    """Tests for extract() with ffmpeg replaced"""

    def test_counts_written_frames(self, tmp_path, monkeypatch):
        calls = []

        def fake_run(cmd, stdout=None, stderr=None):
            calls.append(cmd)
            pattern = cmd[-1]
            for k in range(1, 4):
                pathlib.Path(pattern % k).write_bytes(b"x")
            return subprocess.CompletedProcess(cmd, 0, b"", b"")

        monkeypatch.setattr(extract_mod.subprocess, "run", fake_run)

        n = extract(tmp_path / "trip.mp4", tmp_path / "out", quiet=True)

        assert n == 3
        assert sorted(os.listdir(tmp_path / "out")) == [
            "trip__00001.png", "trip__00002.png", "trip__00003.png",
        ]
        assert len(calls) == 1


class TestClean:
    """Tests for clean()"""

    def test_removes_previous_run_only(self, tmp_path):
        (tmp_path / "old__00001.png").write_bytes(b"x")
        (tmp_path / "00002").mkdir()
        (tmp_path / TRASH).mkdir()
        (tmp_path / TRASH / "x.png").write_bytes(b"x")
        (tmp_path / "video.mp4").write_bytes(b"v")
        (tmp_path / "src").mkdir()

        removed = clean(tmp_path)

        assert removed == 3
        assert sorted(os.listdir(tmp_path)) == ["src", "video.mp4"]
