"""Produce the ``.icns`` volume/application icon from configured icon sources.

A configured ``.icns`` file is copied verbatim. Otherwise the configured PNGs
are packed into an ICNS container: modern ICNS stores PNG payloads directly,
keyed by a four-character type code per pixel size.
"""

from __future__ import annotations

import logging
import shutil
import struct
from pathlib import Path

from dmg_bundler.config import AppSettings
from dmg_bundler.errors import ConfigurationError, StagingError

LOGGER = logging.getLogger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
ICNS_TYPE_BY_SIZE: dict[int, str] = {
    16: "icp4",
    32: "icp5",
    64: "icp6",
    128: "ic07",
    256: "ic08",
    512: "ic09",
    1024: "ic10",
}


def read_png_size(path: Path) -> tuple[int, int]:
    """Return (width, height) from a PNG's IHDR chunk."""

    with path.open("rb") as handle:
        header = handle.read(24)
    if len(header) < 24 or header[:8] != PNG_SIGNATURE or header[12:16] != b"IHDR":
        raise ConfigurationError(f"not a PNG file: {path}", path=path)
    width, height = struct.unpack(">II", header[16:24])
    return width, height


def pack_icns(png_by_type: dict[str, bytes]) -> bytes:
    """Pack PNG payloads into an ICNS container in ascending size order."""

    parts = bytearray()
    for size in sorted(ICNS_TYPE_BY_SIZE):
        type_code = ICNS_TYPE_BY_SIZE[size]
        data = png_by_type.get(type_code)
        if data is None:
            continue
        parts += type_code.encode("ascii")
        parts += struct.pack(">I", 8 + len(data))
        parts += data
    return b"icns" + struct.pack(">I", 8 + len(parts)) + bytes(parts)


def _collect_png_payloads(icons: list[Path], logger: logging.Logger) -> dict[str, bytes]:
    payloads: dict[str, bytes] = {}
    for icon in icons:
        if icon.suffix.lower() != ".png":
            continue
        width, height = read_png_size(icon)
        type_code = ICNS_TYPE_BY_SIZE.get(width) if width == height else None
        if type_code is None:
            logger.warning("icon.unsupported_size path=%s width=%s height=%s", icon, width, height)
            continue
        payloads.setdefault(type_code, icon.read_bytes())
    return payloads


def icns_destination(out_dir: Path, settings: AppSettings) -> Path | None:
    """Return where ``create_icns_file`` writes the icon, or None when no icons are configured."""

    if not settings.bundle.icons:
        return None
    product_name = settings.main_binary_name() or "icon"
    return out_dir / f"{product_name}.icns"


def create_icns_file(out_dir: Path, settings: AppSettings, logger: logging.Logger | None = None) -> Path | None:
    """Write ``<out_dir>/<product>.icns`` from the configured icons, or return None."""

    effective_logger = logger or LOGGER
    icons = list(settings.bundle.icons)
    dest_path = icns_destination(out_dir, settings)
    if dest_path is None:
        return None

    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        for icon in icons:
            if icon.suffix.lower() == ".icns":
                shutil.copyfile(icon, dest_path)
                effective_logger.info("icon.copied source=%s dest=%s", icon, dest_path)
                return dest_path

        payloads = _collect_png_payloads(icons, effective_logger)
        if not payloads:
            raise ConfigurationError("no usable icon sources among bundle.icons")
        dest_path.write_bytes(pack_icns(payloads))
    except OSError as exc:
        raise StagingError(f"failed to create icon file {dest_path}: {exc}", path=dest_path) from exc

    effective_logger.info("icon.packed dest=%s sizes=%s", dest_path, len(payloads))
    return dest_path
