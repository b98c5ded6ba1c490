#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
framecull command line

Usage:
  framecull <input> [command] [threshold]

  <input>     a video file (mp4, mov, mkv, ...) or a directory of frames/images
  command     extract | sort | group | rank | ungroup | best
              (-e -s -g -r -u -b are accepted as well)
  threshold   similarity threshold used by "group" (default: 0.025)

Without a command a video runs clean -> extract -> sort -> group -> rank in
the current directory; a directory runs sort -> group -> rank in place.
"""

import argparse
import os
import sys
import time

import cv2

from . import __version__, codec
from .best import find_best
from .extract import clean, extract
from .grouper import group_frames
from .ranker import rank_frames
from .sorter import MIN_SHARPNESS, sort_frames
from .ungrouper import ungroup

COMMANDS = ("extract", "sort", "group", "rank", "ungroup", "best")
FLAG_ALIASES = {"-" + c[0]: c for c in COMMANDS}


def positive_int(value):
    try:
        ivalue = int(value)
    except (TypeError, ValueError):
        raise argparse.ArgumentTypeError("--workers must be a positive integer")
    if ivalue <= 0:
        raise argparse.ArgumentTypeError("--workers must be a positive integer")
    return ivalue


def non_negative_float(value):
    try:
        fvalue = float(value)
    except (TypeError, ValueError):
        raise argparse.ArgumentTypeError("value must be a number >= 0")
    if not fvalue >= 0.0:
        raise argparse.ArgumentTypeError("value must be a number >= 0")
    return fvalue


def build_parser():
    ap = argparse.ArgumentParser(
        prog="framecull",
        description="Extract, score, group and rank video frames, keeping the sharpest of each scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Usage:", 1)[1],
    )
    ap.add_argument("input", nargs="?", help="Video file or directory of frames.")
    ap.add_argument("command", nargs="?", help="One of: " + ", ".join(COMMANDS))
    # Kept as a string: an unparsable value switches grouping off instead of failing.
    ap.add_argument("threshold", nargs="?", help="Similarity threshold for the group step.")
    flags = ap.add_mutually_exclusive_group()
    for alias, command in FLAG_ALIASES.items():
        flags.add_argument(alias, dest="flag_command", action="store_const", const=command,
                           help=f"Same as the '{command}' command.")
    ap.add_argument("-w", "--workers", type=positive_int,
                    help="Worker pool size for sort/rank (default: min(8, cpu or 4)).")
    ap.add_argument("--min-sharpness", type=non_negative_float, default=MIN_SHARPNESS,
                    help=f"Frames at or below this sharpness are trashed (default: {MIN_SHARPNESS}).")
    ap.add_argument("--ffmpeg", default="ffmpeg", help="ffmpeg executable path.")
    ap.add_argument("--opencv-threads", type=int, default=0,
                    help="Set OpenCV thread count (0 leaves the default).")
    ap.add_argument("-q", "--quiet", action="store_true", help="Suppress progress output.")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return ap


def resolve_command(ap, args):
    command, threshold = args.command, args.threshold
    if args.flag_command:
        # "-g 0.05": the first positional after the input is the threshold.
        if command is not None and threshold is None:
            command, threshold = None, command
        if command is not None:
            ap.error("give either a command or a command flag, not both")
        command = args.flag_command
    if command is not None and command not in COMMANDS:
        ap.error(f"unknown command: {command} (choose from {', '.join(COMMANDS)})")
    return command, threshold


def stage(label, quiet, fn, /, *a, **kw):
    if not quiet:
        print(f"[INFO] {label}...")
    started = time.perf_counter()
    result = fn(*a, **kw)
    if not quiet:
        print(f"[INFO] {label} done in {time.perf_counter() - started:.2f}s")
    return result


def print_best(report):
    if not report:
        print("[INFO] No sharpness jumps found")
    for cand in report:
        print(f"[{cand.index}] {cand.sharpness:.5f}: " + ", ".join(cand.frames))


def main(argv=None):
    ap = build_parser()
    args = ap.parse_intermixed_args(argv)
    if not args.input:
        ap.print_help()
        return 0
    command, threshold = resolve_command(ap, args)

    if not os.path.exists(args.input):
        print(f"[ERR] Input not found: {args.input}", file=sys.stderr)
        return 1

    if args.opencv_threads and args.opencv_threads > 0:
        cv2.setNumThreads(args.opencv_threads)

    is_video = not os.path.isdir(args.input)
    if command == "extract" and not is_video:
        ap.error("extract needs a video file as input")
    work_dir = "." if is_video else args.input
    quiet = args.quiet
    started = time.perf_counter()
    if not quiet:
        print(f"[INFO] Working directory: {os.path.abspath(work_dir)}")

    if command is None and is_video:
        removed = clean(work_dir)
        if removed and not quiet:
            print(f"[WARN] Removed {removed} entries left by a previous run")
    if command == "extract" or (command is None and is_video):
        n = stage("Extracting", quiet, extract, args.input, work_dir, args.ffmpeg, quiet=quiet)
        if not quiet:
            print(f"[INFO] Extracted {n} frames")
    if command in (None, "sort"):
        res = stage("Sorting", quiet, sort_frames, work_dir, min_sharpness=args.min_sharpness,
                    workers=args.workers, quiet=quiet)
        if not quiet:
            print(f"[INFO] Sorted {res.total}: renamed {res.renamed} / "
                  f"unchanged {res.unchanged} / trashed {res.trashed}")
    if command in (None, "group"):
        groups = stage("Grouping", quiet, group_frames, work_dir, threshold, quiet=quiet)
        if not quiet:
            print(f"[INFO] Last cluster directory: {codec.zfill(groups)}")
    if command in (None, "rank"):
        res = stage("Ranking", quiet, rank_frames, work_dir, workers=args.workers, quiet=quiet)
        if not quiet:
            print(f"[INFO] Ranked {res.units} units: kept {res.kept} / trashed {res.trashed}")
    if command == "ungroup":
        moved = stage("Ungrouping", quiet, ungroup, work_dir)
        if not quiet:
            print(f"[INFO] Moved {moved} frames up")
    if command == "best":
        print_best(stage("Finding best frames", quiet, find_best, work_dir))

    if not quiet:
        print(f"[OK] Complete in {time.perf_counter() - started:.2f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
