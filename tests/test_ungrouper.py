"""
Unit Tests for ungroup()
"""

import os

from framecull.frameset import TRASH
from framecull.grouper import group_frames
from framecull.ungrouper import ungroup


def snapshot(directory):
    return {
        n: (directory / n).read_bytes()
        for n in os.listdir(directory)
        if (directory / n).is_file()
    }


class TestUngroup:
    """Tests for ungroup()"""

    def test_restores_flat_frames_after_grouping(self, frames_dir):
        names = [f"f{k}.png" for k in range(6)]
        for k, n in enumerate(names):
            (frames_dir / n).write_bytes(b"frame %d" % k)
            os.utime(frames_dir / n, (1000 + k, 1000 + k))
        before = snapshot(frames_dir)
        similar = {("f0.png", "f1.png"), ("f1.png", "f2.png"), ("f4.png", "f5.png")}

        group_frames(frames_dir, compare=lambda a, b: (a, b) in similar, quiet=True)
        assert snapshot(frames_dir) != before

        ungroup(frames_dir)

        assert snapshot(frames_dir) == before
        assert not [n for n in os.listdir(frames_dir) if (frames_dir / n).is_dir()]

    def test_leaves_trash_alone(self, frames_dir):
        (frames_dir / TRASH).mkdir()
        (frames_dir / TRASH / "bad.png").write_bytes(b"x")
        (frames_dir / "00001").mkdir()
        (frames_dir / "00001" / "a.png").write_bytes(b"a")

        moved = ungroup(frames_dir)

        assert moved == 1
        assert sorted(os.listdir(frames_dir)) == [TRASH, "a.png"]
        assert os.listdir(frames_dir / TRASH) == ["bad.png"]
