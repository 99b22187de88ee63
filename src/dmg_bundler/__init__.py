"""Package a compiled macOS application into a DMG disk image."""

__version__ = "0.1.0"
