# -*- coding: utf-8 -*-
"""
Group stage: walk the frames in order and gather runs of similar neighbours
into numbered cluster directories (00001, 00002, ...).

The boundary test always compares the frame just placed with the next
candidate, so a cluster keeps growing while consecutive neighbours stay
similar. A cluster that ends with a single member is dissolved back into the
parent. One empty cluster directory is left after the last frame.
"""

import math
import os
from dataclasses import dataclass, field
from typing import Callable, List, NamedTuple, Optional

from . import codec
from .frameset import ensure_dir, list_frames, move, remove_tree
from .metrics import similarity

DEFAULT_THRESHOLD = 0.025
DIST_SCALE = 5


def parse_threshold(value) -> float:
    """Numeric threshold, the default for None, and nan for anything unparsable."""
    if value is None:
        return DEFAULT_THRESHOLD
    try:
        return float(value)
    except (TypeError, ValueError):
        # nan never compares true, so every pair counts as different.
        return math.nan


def is_similar(distance: float, diff: float, threshold: float) -> bool:
    return distance <= threshold * DIST_SCALE or diff <= threshold


class ClosedCluster(NamedTuple):
    name: str
    members: List[str]

    @property
    def dissolved(self) -> bool:
        return len(self.members) == 1


@dataclass
class GroupWalker:
    """State carried across frames: (counter, current cluster members, pending_same)."""

    counter: int = 1
    members: List[str] = field(default_factory=list)
    pending_same: bool = False

    @property
    def cluster_name(self) -> str:
        return codec.zfill(self.counter)

    def place(self, frame: str, same: bool) -> Optional[ClosedCluster]:
        """
        Put frame into the current cluster.

        Args:
            frame (str): Frame just placed.
            same (bool): Whether frame is similar to the next candidate.

        Returns:
            ClosedCluster | None: The finished cluster when same is False.
        """
        self.members.append(frame)
        self.pending_same = same
        if same:
            return None
        closed = ClosedCluster(self.cluster_name, self.members)
        self.counter += 1
        self.members = []
        return closed


def plan_clusters(frames: List[str], similar: Callable[[str, Optional[str]], bool]) -> List[ClosedCluster]:
    """Run the walker over frames without touching the filesystem."""
    walker = GroupWalker()
    closed = []
    for i, frame in enumerate(frames):
        nxt = frames[i + 1] if i + 1 < len(frames) else None
        same = nxt is not None and similar(frame, nxt)
        done = walker.place(frame, same)
        if done is not None:
            closed.append(done)
    return closed


def make_compare(in_dir, threshold, measure=similarity):
    def _compare(a, b):
        if b is None:
            return False
        distance, diff = measure(os.path.join(in_dir, a), os.path.join(in_dir, b))
        return is_similar(distance, diff, threshold)
    return _compare


def group_frames(in_dir, threshold=None, compare=None, quiet=False) -> int:
    """
    Cluster the frames of in_dir into numbered sub-directories.

    Args:
        in_dir (str): Directory holding the sorted frames.
        threshold: Similarity threshold (number, numeric string or None).
        compare (callable | None): (name, next_name | None) -> bool; defaults
            to the image similarity oracle with the given threshold.
        quiet (bool): Suppress per-frame output.

    Returns:
        int: Counter of the trailing (empty) cluster directory.
    """
    if compare is None:
        compare = make_compare(in_dir, parse_threshold(threshold))
    frames = list_frames(in_dir)
    total = len(frames)
    walker = GroupWalker()
    ensure_dir(os.path.join(in_dir, walker.cluster_name))

    for i, frame in enumerate(frames):
        nxt = frames[i + 1] if i + 1 < total else None
        same = compare(frame, nxt) if nxt is not None else False
        cluster_dir = os.path.join(in_dir, walker.cluster_name)
        move(os.path.join(in_dir, frame), os.path.join(cluster_dir, frame))
        if not quiet:
            print(f"{i + 1}/{total} {frame} -> {walker.cluster_name}")

        closed = walker.place(frame, same)
        if closed is None:
            continue
        if closed.dissolved:
            move(os.path.join(cluster_dir, frame), os.path.join(in_dir, frame))
            remove_tree(cluster_dir)
        ensure_dir(os.path.join(in_dir, walker.cluster_name))

    return walker.counter
