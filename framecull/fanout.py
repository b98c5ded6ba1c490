# -*- coding: utf-8 -*-
"""Bounded thread pool fan-out used by the sort and rank stages."""

import os
import sys
import time
from concurrent.futures import ThreadPoolExecutor, as_completed

PROGRESS_INTERVAL = 5


def update_progress(label, completed, total, last_pct):
    if total <= 0:
        return last_pct
    pct = int((completed * 100) / total)
    if last_pct < 0 or pct >= 100 or pct - last_pct >= PROGRESS_INTERVAL:
        sys.stdout.write(f"{label}... {pct:3d}% ({completed}/{total})\r")
        sys.stdout.flush()
        return pct
    return last_pct


def default_workers():
    return min(8, (os.cpu_count() or 4))


def run_all(label, fn, items, workers=None, quiet=False):
    """
    Call fn(item) for every item on a bounded pool and wait for all of them.

    The first task that raises cancels everything still queued and the
    exception propagates to the caller; no partial results are returned.

    Args:
        label (str): Progress label ("Sorting", "Ranking", ...).
        fn (callable): Task body, called once per item.
        items (list): Work items.
        workers (int | None): Pool size (default: min(8, cpu or 4)).
        quiet (bool): Suppress progress output.

    Returns:
        list: fn results in the order of items.
    """
    items = list(items)
    n = len(items)
    results = [None] * n
    if not n:
        return results

    workers = workers if (workers and workers > 0) else default_workers()
    started = time.perf_counter()
    with ThreadPoolExecutor(max_workers=workers) as ex:
        futs = {ex.submit(fn, item): i for i, item in enumerate(items)}
        completed = 0
        last_pct = -1
        for fut in as_completed(futs):
            try:
                results[futs[fut]] = fut.result()
            except BaseException:
                for pending in futs:
                    pending.cancel()
                if not quiet:
                    sys.stdout.write("\n")
                raise
            completed += 1
            if not quiet:
                last_pct = update_progress(label, completed, n, last_pct)

    if not quiet:
        print(f"{label}... 100% ({n}/{n}) in {time.perf_counter() - started:.2f}s")
    return results
