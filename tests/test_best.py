"""
Unit Tests for the sharpness jump report
"""

import os

from framecull import codec
from framecull.best import DELTA, find_best, find_boundaries


class TestFindBoundaries:
    """Tests for find_boundaries()"""

    def test_reports_large_jumps_only(self):
        assert find_boundaries([0.1, 0.9, 0.91, 0.2]) == [1, 3]

    def test_first_frame_counts_when_far_from_zero(self):
        assert find_boundaries([0.8, 0.85]) == [0]

    def test_custom_delta(self):
        assert DELTA == 0.5
        assert find_boundaries([0.1, 0.3, 0.35], delta=0.15) == [1]


class TestFindBest:
    """Tests for find_best() on disk"""

    def test_scans_names_descending_and_reports_neighbours(self, frames_dir):
        names = [
            codec.encode("d", 0.1, 1),
            codec.encode("c", 0.9, 2),
            codec.encode("b", 0.91, 3),
            codec.encode("a", 0.2, 4),
        ]
        for n in names:
            (frames_dir / n).write_bytes(b"x")

        report = find_best(frames_dir)

        assert [c.index for c in report] == [1, 3]
        assert report[0].frames == names[0:3]
        assert report[1].frames == names[2:4]
        assert report[1].sharpness == 0.2
        assert sorted(os.listdir(frames_dir)) == sorted(names)

    def test_empty_directory(self, frames_dir):
        assert find_best(frames_dir) == []
