"""Spike: a small raw-mode terminal text editor."""

import logging

from .constants import SPIKE_VERSION as __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())
