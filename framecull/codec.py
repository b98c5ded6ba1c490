# -*- coding: utf-8 -*-
"""
Frame file name codec.

Every frame carries its metadata in its own name:

    <owner>__<sharpness digits>__<sequence>.<ext>

  - owner:     video stem or directory name the frame belongs to
  - sharpness: fixed precision value with the decimal point removed
               (one integer digit followed by PRECISION fractional digits)
  - sequence:  position of the frame, zero padded to PRECISION digits

Frames written by ffmpeg have no sharpness yet (<owner>__<sequence>.png).
"""

import os
from typing import NamedTuple, Optional, Union

from .errors import CodecError

DELIM = "__"
PRECISION = 5
EXT = ".png"

# Largest value whose integer part still fits in a single digit.
MAX_SHARPNESS = 10.0 - 10.0 ** -PRECISION


class FrameName(NamedTuple):
    owner_id: str
    sharpness_digits: Optional[str]
    sequence_index: str
    ext: str

    @property
    def sharpness(self) -> float:
        if not self.sharpness_digits:
            raise CodecError(f"frame has no sharpness field: {self.owner_id}")
        return parse_sharpness(self.sharpness_digits)


def zfill(value: Union[int, str]) -> str:
    return str(value).zfill(PRECISION)


def sharpness_digits(value: float) -> str:
    value = min(max(float(value), 0.0), MAX_SHARPNESS)
    return f"{value:.{PRECISION}f}".replace(".", "")


def parse_sharpness(digits: str) -> float:
    if not digits.isdigit():
        raise CodecError(f"invalid sharpness digits: {digits!r}")
    return float(f"{digits[0]}.{digits[1:]}")


def encode(owner_id: str, sharpness: float, sequence_index: Union[int, str], ext: str = EXT) -> str:
    if not ext.startswith("."):
        ext = "." + ext
    return DELIM.join([owner_id, sharpness_digits(sharpness), zfill(sequence_index)]) + ext


def decode(filename: str) -> FrameName:
    """
    Split a frame file name into its fields.

    The owner may itself contain the delimiter, so fields are taken from the
    right: the last one is the sequence, the one before it the sharpness
    (when it is all digits).

    Args:
        filename (str): Base name or path of the frame.

    Returns:
        FrameName: Decoded fields; sharpness_digits is None for raw
        extracted frames.
    """
    stem, ext = os.path.splitext(os.path.basename(filename))
    parts = stem.split(DELIM)
    if len(parts) < 2 or not parts[-1].isdigit():
        raise CodecError(f"not a frame name: {filename}")
    sequence = parts[-1]
    if len(parts) >= 3 and parts[-2].isdigit():
        return FrameName(DELIM.join(parts[:-2]), parts[-2], sequence, ext)
    return FrameName(DELIM.join(parts[:-1]), None, sequence, ext)
