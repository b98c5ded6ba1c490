# -*- coding: utf-8 -*-
"""
Diagnostic scan for jumps in sharpness.

Frames are visited in descending file name order while a running maximum
(starting at 0) is tracked; whenever a frame differs from it by more than
DELTA, the frame and its two neighbours are reported and the maximum moves
to that frame's value. Nothing on disk is changed.
"""

from typing import List, NamedTuple, Sequence

from . import codec
from .frameset import list_frames

DELTA = 0.5


class BestCandidate(NamedTuple):
    index: int
    sharpness: float
    frames: List[str]


def find_boundaries(values: Sequence[float], delta: float = DELTA) -> List[int]:
    current_max = 0.0
    hits = []
    for j, value in enumerate(values):
        if abs(value - current_max) > delta:
            current_max = value
            hits.append(j)
    return hits


def find_best(in_dir: str, delta: float = DELTA) -> List[BestCandidate]:
    frames = sorted(list_frames(in_dir), reverse=True)
    values = [codec.decode(f).sharpness for f in frames]
    report = []
    for j in find_boundaries(values, delta):
        neighbours = [frames[k] for k in (j - 1, j, j + 1) if 0 <= k < len(frames)]
        report.append(BestCandidate(j, values[j], neighbours))
    return report
