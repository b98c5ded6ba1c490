"""
Test Configuration and Fixtures

Synthetic frames written with OpenCV into tmp_path.
"""

import os
from pathlib import Path

import cv2
import numpy as np
import pytest

from framecull import codec


def write_image(path, seed=0, size=(48, 64), blur=0):
    """Write a noisy BGR image; blur > 0 applies a Gaussian blur of that kernel size."""
    rng = np.random.default_rng(seed)
    img = rng.integers(0, 256, size=(size[0], size[1], 3), dtype=np.uint8)
    if blur:
        img = cv2.GaussianBlur(img, (blur, blur), 0)
    assert cv2.imwrite(str(path), img)
    return Path(path)


def write_flat(path, value=128, size=(48, 64)):
    img = np.full((size[0], size[1], 3), value, dtype=np.uint8)
    assert cv2.imwrite(str(path), img)
    return Path(path)


def stamp_order(paths, start=1_000_000):
    """Give each path an increasing mtime so creation order is deterministic."""
    for k, p in enumerate(paths):
        os.utime(p, (start + k, start + k))


def make_encoded(directory, sharpness_values, owner="clip"):
    """Create encoded frames (owner__digits__seq.png) in order, one per value."""
    paths = []
    for k, value in enumerate(sharpness_values, start=1):
        p = Path(directory) / codec.encode(owner, value, k)
        p.write_bytes(b"frame %d" % k)
        paths.append(p)
    stamp_order(paths)
    return paths


@pytest.fixture
def frames_dir(tmp_path):
    d = tmp_path / "shots"
    d.mkdir()
    return d


@pytest.fixture
def in_tmp_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path
