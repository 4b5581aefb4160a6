"""Utility functions for ktoolhu."""

from ktoolhu.utils.concurrency import run_bounded
from ktoolhu.utils.merge import create_two_way_merge_patch
from ktoolhu.utils.secret_codec import Direction, SecretCodecError, transcode_secret

__all__ = [
    "Direction",
    "SecretCodecError",
    "create_two_way_merge_patch",
    "run_bounded",
    "transcode_secret",
]
