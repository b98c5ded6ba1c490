# -*- coding: utf-8 -*-
"""Frame extraction through ffmpeg, and clean-up of a previous run."""

import os
import pathlib
import shlex
import subprocess
from typing import List

from . import codec
from .errors import ExternalToolError
from .frameset import TRASH, is_image, list_cluster_dirs, remove_tree


def build_ffmpeg_cmd(ffmpeg: str, inp: pathlib.Path, out_dir: pathlib.Path) -> List[str]:
    """One image per decoded frame: <out_dir>/<stem>__00001.png, ..."""
    pattern = out_dir / f"{inp.stem}{codec.DELIM}%0{codec.PRECISION}d{codec.EXT}"
    return [ffmpeg, "-hide_banner", "-loglevel", "error", "-y",
            "-i", str(inp), "-vsync", "vfr", str(pattern)]


def run_cmd(cmd: List[str]) -> None:
    try:
        proc = subprocess.run(cmd, stdout=subprocess.DEVNULL, stderr=subprocess.PIPE)
    except FileNotFoundError as e:
        raise ExternalToolError(cmd, 127, str(e)) from e
    if proc.returncode != 0:
        raise ExternalToolError(cmd, proc.returncode, (proc.stderr or b"").decode(errors="ignore"))


def extract(video, out_dir=".", ffmpeg="ffmpeg", quiet=False) -> int:
    """
    Decode every frame of video into out_dir.

    Returns:
        int: Number of images in out_dir afterwards.
    """
    inp = pathlib.Path(video).expanduser()
    out = pathlib.Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    cmd = build_ffmpeg_cmd(ffmpeg, inp, out)
    if not quiet:
        print("$ " + " ".join(shlex.quote(c) for c in cmd))
    run_cmd(cmd)
    return sum(1 for p in out.iterdir() if p.is_file() and is_image(p.name))


def clean(in_dir="."):
    """Remove frames, cluster directories and the trash left by a previous run."""
    removed = 0
    for name in os.listdir(in_dir):
        fp = os.path.join(in_dir, name)
        if os.path.isfile(fp) and is_image(name):
            os.remove(fp)
            removed += 1
    stale = [d for d in list_cluster_dirs(in_dir) if d.isdigit()]
    if os.path.isdir(os.path.join(in_dir, TRASH)):
        stale.append(TRASH)
    for name in stale:
        remove_tree(os.path.join(in_dir, name))
        removed += 1
    return removed
