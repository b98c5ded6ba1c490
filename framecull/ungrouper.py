# -*- coding: utf-8 -*-
"""Flatten cluster directories back into their parent without trashing anything."""

import os

from .frameset import list_cluster_dirs, list_frames, move, remove_tree


def ungroup_dir(in_dir, cluster):
    cluster_dir = os.path.join(in_dir, cluster)
    frames = list_frames(cluster_dir)
    for name in frames:
        move(os.path.join(cluster_dir, name), os.path.join(in_dir, name))
    remove_tree(cluster_dir)
    return len(frames)


def ungroup(in_dir):
    """
    Move every frame of every cluster under in_dir up into in_dir.

    Returns:
        int: Number of frames moved.
    """
    return sum(ungroup_dir(in_dir, d) for d in list_cluster_dirs(in_dir))
