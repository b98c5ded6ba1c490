# -*- coding: utf-8 -*-
"""Directory listing and file moves shared by every stage."""

import os
import shutil

IMAGE_EXTS = {".png", ".jpg", ".jpeg"}
TRASH = "_trash"


def is_image(name):
    _, ext = os.path.splitext(name)
    return ext.lower() in IMAGE_EXTS


def created_at(path):
    """Creation time where the platform records it, otherwise mtime (kept across renames)."""
    st = os.stat(path)
    return getattr(st, "st_birthtime", st.st_mtime)


def list_frames(in_dir):
    """
    Collect image files directly under in_dir, oldest first.

    Args:
        in_dir (str): Directory to scan (subfolders are not descended).

    Returns:
        list[str]: File names (not paths) ordered by creation time, then name.
    """
    entries = []
    for name in os.listdir(in_dir):
        fp = os.path.join(in_dir, name)
        if not is_image(name) or not os.path.isfile(fp):
            continue
        entries.append((created_at(fp), name))
    entries.sort()
    return [name for _, name in entries]


def list_cluster_dirs(in_dir):
    """Sub-directories of in_dir that hold a cluster (names without an underscore)."""
    return sorted(
        name for name in os.listdir(in_dir)
        if "_" not in name and os.path.isdir(os.path.join(in_dir, name))
    )


def ensure_dir(p):
    os.makedirs(p, exist_ok=True)


def move(src, dst):
    """Rename src to dst, refusing to overwrite an existing file."""
    if os.path.exists(dst):
        raise FileExistsError(f"destination already exists: {dst}")
    os.rename(src, dst)
    return dst


def remove_tree(p):
    shutil.rmtree(p)
