"""Finder window layout for the mounted volume."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final, Sequence

from dmg_bundler.errors import ConfigurationError

ICON_SIZE: Final[int] = 100
ROW_SPACING: Final[int] = 60
WINDOW_SIZE: Final[tuple[int, int]] = (571, 375)
APP_ICON_POSITION: Final[tuple[int, int]] = (75, 64)
DROP_LINK_POSITION: Final[tuple[int, int]] = (396, 64)

LEFT_COLUMN_X: Final[int] = APP_ICON_POSITION[0]
RIGHT_COLUMN_X: Final[int] = DROP_LINK_POSITION[0]


@dataclass(frozen=True, slots=True)
class AttachmentPair:
    """Up to two attachments sharing one grid row."""

    first: Path
    second: Path | None = None


@dataclass(frozen=True, slots=True)
class LayoutEntry:
    """Resolved placement of one file inside the volume window."""

    file_name: str
    x: int
    y: int


@dataclass(frozen=True, slots=True)
class WindowLayout:
    """Fixed window anchors plus the attachment grid."""

    window_size: tuple[int, int]
    icon_size: int
    app_position: tuple[int, int]
    drop_link_position: tuple[int, int]
    attachments: tuple[LayoutEntry, ...]


def pair_attachments(attachments: Sequence[Path]) -> list[AttachmentPair]:
    """Group attachments two at a time in input order."""

    pairs: list[AttachmentPair] = []
    for start in range(0, len(attachments), 2):
        chunk = attachments[start : start + 2]
        pairs.append(AttachmentPair(first=chunk[0], second=chunk[1] if len(chunk) == 2 else None))
    return pairs


def attachment_row_y(row_index: int) -> int:
    """Return the y coordinate of a 0-based attachment row below the primary row."""

    return APP_ICON_POSITION[1] + (row_index + 1) * (ICON_SIZE + ROW_SPACING)


def file_name_of(path: Path, *, setting: str) -> str:
    """Return the final path component, rejecting paths that have none."""

    name = path.name
    if not name:
        raise ConfigurationError(f"{setting} path has no file name: {str(path)!r}", path=path)
    return name


def compute_attachment_layout(attachments: Sequence[Path]) -> list[LayoutEntry]:
    """Place attachments in a two-column grid that only grows downward."""

    entries: list[LayoutEntry] = []
    for row_index, pair in enumerate(pair_attachments(attachments)):
        y = attachment_row_y(row_index)
        entries.append(LayoutEntry(file_name_of(pair.first, setting="attachment"), LEFT_COLUMN_X, y))
        if pair.second is not None:
            entries.append(LayoutEntry(file_name_of(pair.second, setting="attachment"), RIGHT_COLUMN_X, y))
    return entries


def compute_window_layout(attachments: Sequence[Path] | None = None) -> WindowLayout:
    """Return the complete window layout for the given attachment list."""

    return WindowLayout(
        window_size=WINDOW_SIZE,
        icon_size=ICON_SIZE,
        app_position=APP_ICON_POSITION,
        drop_link_position=DROP_LINK_POSITION,
        attachments=tuple(compute_attachment_layout(attachments or [])),
    )
