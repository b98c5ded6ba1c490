# -*- coding: utf-8 -*-
"""Exception types raised by the curation stages."""


class FramecullError(Exception):
    pass


class ExternalToolError(FramecullError):
    """ffmpeg (or another subprocess) exited with a non-zero status."""

    def __init__(self, cmd, returncode, stderr=""):
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stderr = stderr
        msg = f"{self.cmd[0]} exited with status {returncode}"
        if stderr.strip():
            msg += ": " + stderr.strip()
        super().__init__(msg)


class ScoringError(FramecullError):
    """An image could not be decoded by a scoring or similarity oracle."""


class CodecError(FramecullError, ValueError):
    """A file name does not follow the frame naming scheme."""
