# -*- coding: utf-8 -*-
"""
Image oracles used by the pipeline.

  - sharpness():  standard deviation of a 3x3 Laplacian (kernel scaled by 1/9)
                  on the greyscale image; higher means sharper
  - similarity(): (perceptual distance, pixel diff percentage) between two
                  images; both are dissimilarity measures in [0, 1]
"""

import cv2
import numpy as np
import imagehash
from PIL import Image

from .errors import ScoringError

LAPLACIAN = np.array(
    [[0.0, 1.0, 0.0],
     [1.0, -4.0, 1.0],
     [0.0, 1.0, 0.0]],
    dtype=np.float32,
) / 9.0

# Per-pixel YIQ colour distance above which two pixels count as different.
DIFF_PIXEL_THRESHOLD = 0.1
MAX_YIQ_DELTA = 35215.0


def _read(fp, flags):
    img = cv2.imread(fp, flags)
    if img is None:
        raise ScoringError(f"cannot decode image: {fp}")
    return img


def sharpness(fp):
    """
    Laplacian deviation of the greyscale image, on the 0-255 pixel scale.

    Photographic frames land well below 10; synthetic noise or extreme
    high-contrast patterns go above it and are stored as 9.99999 by the
    file name codec, so such frames rank as equals.
    """
    gray = _read(fp, cv2.IMREAD_GRAYSCALE).astype(np.float32)
    lap = cv2.filter2D(gray, cv2.CV_32F, LAPLACIAN)
    _, std = cv2.meanStdDev(lap)
    return float(std[0, 0])


def _yiq(bgr):
    b, g, r = (bgr[..., k].astype(np.float32) for k in range(3))
    y = r * 0.29889531 + g * 0.58662247 + b * 0.11448223
    i = r * 0.59597799 - g * 0.27417610 - b * 0.32180189
    q = r * 0.21147017 - g * 0.52261711 + b * 0.31114694
    return y, i, q


def _match_size(a, b):
    """Scale both images down to the smaller common size."""
    h = min(a.shape[0], b.shape[0])
    w = min(a.shape[1], b.shape[1])
    if a.shape[:2] != (h, w):
        a = cv2.resize(a, (w, h), interpolation=cv2.INTER_AREA)
    if b.shape[:2] != (h, w):
        b = cv2.resize(b, (w, h), interpolation=cv2.INTER_AREA)
    return a, b


def diff_percent(a, b, threshold=DIFF_PIXEL_THRESHOLD):
    """
    Fraction of pixels whose colour differs noticeably between two BGR images.

    Args:
        a (np.ndarray): First image (BGR, uint8).
        b (np.ndarray): Second image (BGR, uint8).
        threshold (float): Per-pixel sensitivity in [0, 1].

    Returns:
        float: Share of differing pixels in [0, 1].
    """
    a, b = _match_size(a, b)
    ya, ia, qa = _yiq(a)
    yb, ib, qb = _yiq(b)
    delta = (
        0.5053 * (ya - yb) ** 2
        + 0.299 * (ia - ib) ** 2
        + 0.1957 * (qa - qb) ** 2
    )
    return float(np.mean(delta > MAX_YIQ_DELTA * threshold * threshold))


def phash_distance(a, b):
    ha = imagehash.phash(Image.fromarray(cv2.cvtColor(a, cv2.COLOR_BGR2RGB)))
    hb = imagehash.phash(Image.fromarray(cv2.cvtColor(b, cv2.COLOR_BGR2RGB)))
    return (ha - hb) / float(ha.hash.size)


def similarity(fp_a, fp_b):
    a = _read(fp_a, cv2.IMREAD_COLOR)
    b = _read(fp_b, cv2.IMREAD_COLOR)
    return phash_distance(a, b), diff_percent(a, b)
