# -*- coding: utf-8 -*-
"""
Sort stage: score every frame, trash the blurry ones, and write the score
into each surviving file name.

Two naming modes:
  - extracted video (frames named <video>__<seq>.png by ffmpeg): owner and
    sequence are kept from the current name, extension is forced to .png
  - raw image directory: owner is the directory name, extension is kept, and
    the sequence is the frame's 1-based position in creation order (frames
    already sorted under this directory keep their sequence)
"""

import os
from typing import NamedTuple

from . import codec
from .errors import CodecError
from .fanout import run_all
from .frameset import TRASH, ensure_dir, list_frames, move
from .metrics import sharpness

MIN_SHARPNESS = 0.2

TRASHED = "trashed"
RENAMED = "renamed"
UNCHANGED = "unchanged"


class SortResult(NamedTuple):
    total: int
    trashed: int
    renamed: int
    unchanged: int


def is_video_dir(in_dir):
    return os.path.abspath(in_dir) == os.getcwd()


def sorted_sequence(owner, name):
    """Sequence of a frame already sorted under owner, else None."""
    try:
        parsed = codec.decode(name)
    except CodecError:
        return None
    if parsed.owner_id == owner and parsed.sharpness_digits:
        return int(parsed.sequence_index)
    return None


def assign_sequences(owner, frames):
    """
    Sequence number for every frame of a raw directory.

    Frames sorted on an earlier pass keep theirs so a rerun is a no-op;
    the others take their 1-based position, moved to the next free number
    when an earlier frame already holds it.

    Args:
        owner (str): Directory name used as owner.
        frames (list[str]): Frame names in creation order.

    Returns:
        list[int]: One sequence per frame, all distinct.
    """
    kept = [sorted_sequence(owner, name) for name in frames]
    taken = {seq for seq in kept if seq is not None}
    sequences = []
    for position, seq in enumerate(kept, start=1):
        if seq is None:
            seq = position
            while seq in taken:
                seq += 1
            taken.add(seq)
        sequences.append(seq)
    return sequences


def target_name(in_dir, name, sequence, value, from_video):
    if from_video:
        parsed = codec.decode(name)
        return codec.encode(parsed.owner_id, value, parsed.sequence_index)
    owner = os.path.basename(os.path.abspath(in_dir))
    _, ext = os.path.splitext(name)
    return codec.encode(owner, value, sequence, ext)


def sort_frames(in_dir, min_sharpness=MIN_SHARPNESS, workers=None, score=sharpness,
                from_video=None, quiet=False):
    """
    Score and rename every frame in in_dir.

    Args:
        in_dir (str): Directory holding the frames.
        min_sharpness (float): Frames scoring at or below this go to the trash.
        workers (int | None): Worker pool size.
        score (callable): Sharpness oracle, path -> float.
        from_video (bool | None): Naming mode; defaults to "in_dir is the
            current directory", where extraction writes its frames.
        quiet (bool): Suppress progress output.

    Returns:
        SortResult: Counts per outcome.
    """
    if from_video is None:
        from_video = is_video_dir(in_dir)
    trash_dir = os.path.join(in_dir, TRASH)
    ensure_dir(trash_dir)
    frames = list_frames(in_dir)
    owner = os.path.basename(os.path.abspath(in_dir))
    sequences = [None] * len(frames) if from_video else assign_sequences(owner, frames)

    def _one(job):
        sequence, name = job
        src = os.path.join(in_dir, name)
        value = score(src)
        if value <= min_sharpness:
            move(src, os.path.join(trash_dir, name))
            return TRASHED
        new_name = target_name(in_dir, name, sequence, value, from_video)
        if new_name == name:
            return UNCHANGED
        move(src, os.path.join(in_dir, new_name))
        return RENAMED

    outcomes = run_all("Sorting", _one, zip(sequences, frames), workers=workers, quiet=quiet)
    return SortResult(
        total=len(frames),
        trashed=outcomes.count(TRASHED),
        renamed=outcomes.count(RENAMED),
        unchanged=outcomes.count(UNCHANGED),
    )
