"""Minimal ``.app`` bundle builder used when no bundle exists yet."""

from __future__ import annotations

import logging
import plistlib
import shutil
from pathlib import Path
from typing import Any

from dmg_bundler.config import AppSettings
from dmg_bundler.dmg.paths import MACOS_BUNDLE_SUBDIR, require_product_identity
from dmg_bundler.errors import StagingError
from dmg_bundler.macos.icon import create_icns_file
from dmg_bundler.utils.paths import ensure_directories, remove_tree

LOGGER = logging.getLogger(__name__)


def build_info_plist(settings: AppSettings, icon_file: Path | None) -> dict[str, Any]:
    """Return the Info.plist dictionary for the configured product."""

    product_name, version = require_product_identity(settings)
    identifier = settings.package.identifier or f"com.example.{product_name.lower()}"
    info: dict[str, Any] = {
        "CFBundleDevelopmentRegion": "English",
        "CFBundleDisplayName": product_name,
        "CFBundleExecutable": product_name,
        "CFBundleIdentifier": identifier,
        "CFBundleInfoDictionaryVersion": "6.0",
        "CFBundleName": product_name,
        "CFBundlePackageType": "APPL",
        "CFBundleShortVersionString": version,
        "CFBundleVersion": version,
        "NSHighResolutionCapable": True,
    }
    if icon_file is not None:
        info["CFBundleIconFile"] = icon_file.name
    if settings.macos.minimum_system_version:
        info["LSMinimumSystemVersion"] = settings.macos.minimum_system_version
    if settings.package.copyright:
        info["NSHumanReadableCopyright"] = settings.package.copyright
    return info


def build_app_bundle(settings: AppSettings, logger: logging.Logger | None = None) -> list[Path]:
    """Create ``<out>/bundle/macos/<product>.app`` from the compiled binary."""

    effective_logger = logger or LOGGER
    product_name, _ = require_product_identity(settings)
    project_out = settings.paths.project_out_directory
    binary_path = project_out / product_name
    app_dir = project_out / MACOS_BUNDLE_SUBDIR / f"{product_name}.app"
    contents_dir = app_dir / "Contents"

    if not binary_path.is_file():
        raise StagingError(f"compiled binary not found at {binary_path}", path=binary_path)

    effective_logger.info("app.bundle.start app_dir=%s", app_dir)
    try:
        remove_tree(app_dir)
        macos_dir, resources_dir = ensure_directories([contents_dir / "MacOS", contents_dir / "Resources"])
        icon_file = create_icns_file(resources_dir, settings, logger=effective_logger)
        shutil.copy2(binary_path, macos_dir / product_name)
        with (contents_dir / "Info.plist").open("wb") as handle:
            plistlib.dump(build_info_plist(settings, icon_file), handle)
    except OSError as exc:
        raise StagingError(f"failed to build app bundle at {app_dir}: {exc}", path=app_dir) from exc

    effective_logger.info("app.bundle.done app_dir=%s", app_dir)
    return [app_dir]
