"""Shared utility helpers."""

from dmg_bundler.utils.paths import ensure_directories, remove_tree, write_resource_file
from dmg_bundler.utils.time_utils import now_utc

__all__ = [
    "ensure_directories",
    "remove_tree",
    "write_resource_file",
    "now_utc",
]
