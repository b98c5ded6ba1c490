# -*- coding: utf-8 -*-
"""Curate video frames down to the sharpest representative of each scene."""

__version__ = "0.1.0"
