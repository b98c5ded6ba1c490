# -*- coding: utf-8 -*-
"""
Rank stage: within each unit (the working directory itself and every
cluster below it) keep the frames scoring at or above the unit's mean
sharpness and trash the rest.

Survivors of a cluster are promoted into the working directory and the
cluster directory is removed. Ranking a single cluster directory treats
its parent as the working directory.

Scores are compared as the integers stored in the file names, so a frame
sitting exactly on the mean is always kept.
"""

import os
from typing import NamedTuple

from . import codec
from .errors import CodecError
from .fanout import run_all
from .frameset import TRASH, ensure_dir, list_cluster_dirs, list_frames, move, remove_tree


class RankResult(NamedTuple):
    units: int
    kept: int
    trashed: int


def is_cluster_dir(p):
    name = os.path.basename(os.path.abspath(p))
    return len(name) == codec.PRECISION and name.isdigit()


def sharpness_units(frames):
    """Stored sharpness of each frame as an integer (value * 10**PRECISION)."""
    units = []
    for f in frames:
        parsed = codec.decode(f)
        if not parsed.sharpness_digits:
            raise CodecError(f"frame has no sharpness field: {f}")
        units.append(int(parsed.sharpness_digits))
    return units


def mean_sharpness(frames):
    ints = sharpness_units(frames)
    if not ints:
        return None
    return sum(ints) / len(ints) / 10 ** codec.PRECISION


def rank_unit(root, unit_dir, frames, workers=None):
    """
    Apply the keep/trash rule to one unit.

    Args:
        root (str): Working directory (promotion target, owns the trash).
        unit_dir (str): Directory of the unit; equal to root for the root unit.
        frames (list[str]): Snapshot of the unit's frame names.
        workers (int | None): Pool size for the per-frame moves.

    Returns:
        tuple[float | None, int, int]: (mean, kept, trashed).
    """
    is_root = os.path.abspath(unit_dir) == os.path.abspath(root)
    ints = sharpness_units(frames)
    total, count = sum(ints), len(ints)
    trash_dir = os.path.join(root, TRASH)

    def _dispose(job):
        name, value = job
        # value >= total / count without division
        keep = value * count >= total
        if keep and is_root:
            return True
        dst_dir = root if keep else trash_dir
        move(os.path.join(unit_dir, name), os.path.join(dst_dir, name))
        return keep

    kept = run_all("Moving", _dispose, zip(frames, ints), workers=workers, quiet=True)
    if not is_root:
        remove_tree(unit_dir)
    return mean_sharpness(frames), sum(1 for k in kept if k), sum(1 for k in kept if not k)


def rank_frames(in_dir, workers=None, quiet=False):
    """Rank every unit under in_dir concurrently, or in_dir alone if it is a cluster."""
    if is_cluster_dir(in_dir):
        root = os.path.dirname(os.path.abspath(in_dir))
        units = [in_dir]
    else:
        root = in_dir
        units = [in_dir] + [os.path.join(in_dir, d) for d in list_cluster_dirs(in_dir)]
    ensure_dir(os.path.join(root, TRASH))
    # Snapshot before any promotion lands in the root.
    snapshot = [(unit, list_frames(unit)) for unit in units]

    def _one(job):
        unit, frames = job
        avg, kept, trashed = rank_unit(root, unit, frames, workers=workers)
        if not quiet:
            avg_txt = "-" if avg is None else f"{avg:.{codec.PRECISION}f}"
            print(f"[INFO] {os.path.basename(os.path.abspath(unit))}: mean {avg_txt} "
                  f"kept {kept} / trashed {trashed}")
        return kept, trashed

    results = run_all("Ranking", _one, snapshot, workers=workers, quiet=quiet)
    return RankResult(
        units=len(units),
        kept=sum(k for k, _ in results),
        trashed=sum(t for _, t in results),
    )
