"""Argument list construction for the disk-image assembly script.

Each section of the command line is produced by its own pure function and the
sections are concatenated in a fixed order, so the full list is a function of
settings, layout, and the injected options alone.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Sequence

from dmg_bundler.config import AppSettings
from dmg_bundler.dmg.layout import LayoutEntry, WindowLayout, file_name_of
from dmg_bundler.dmg.paths import DmgPaths, require_product_identity

CI_ENV_VAR = "CI"
CI_ENV_TRUE = "true"


@dataclass(frozen=True, slots=True)
class DmgArgumentOptions:
    """Environment-derived inputs, injected so argument building stays pure."""

    ci: bool = False
    working_dir: Path = field(default_factory=Path.cwd)


def is_ci_environment(environ: Mapping[str, str]) -> bool:
    """Return True only when ``CI`` is exactly the string ``"true"``."""

    return environ.get(CI_ENV_VAR) == CI_ENV_TRUE


def _window_arguments(product_name: str, layout: WindowLayout) -> list[str]:
    bundle_file_name = f"{product_name}.app"
    app_x, app_y = layout.app_position
    link_x, link_y = layout.drop_link_position
    width, height = layout.window_size
    return [
        "--no-internet-enable",
        "--volname",
        product_name,
        "--icon-size",
        str(layout.icon_size),
        "--icon",
        bundle_file_name,
        str(app_x),
        str(app_y),
        "--app-drop-link",
        str(link_x),
        str(link_y),
        "--window-size",
        str(width),
        str(height),
        "--hide-extension",
        bundle_file_name,
    ]


def _attachment_arguments(entries: Sequence[LayoutEntry]) -> list[str]:
    arguments: list[str] = []
    for entry in entries:
        arguments.extend(["--add-file", entry.file_name, entry.file_name, str(entry.x), str(entry.y)])
    return arguments


def _volume_icon_arguments(volume_icon: Path | None) -> list[str]:
    return [] if volume_icon is None else ["--volicon", str(volume_icon)]


def _background_arguments(background: Path | None) -> list[str]:
    if background is None:
        return []
    return ["--background", file_name_of(background, setting="macos.background")]


def _eula_arguments(license_path: Path | None, working_dir: Path) -> list[str]:
    if license_path is None:
        return []
    resolved = license_path if license_path.is_absolute() else working_dir / license_path
    return ["--eula", str(resolved)]


def _ci_arguments(ci: bool) -> list[str]:
    # Skips the Finder AppleScript pass inside the assembly script.
    return ["--skip-jenkins"] if ci else []


def build_dmg_arguments(
    settings: AppSettings,
    layout: WindowLayout,
    *,
    volume_icon: Path | None = None,
    options: DmgArgumentOptions | None = None,
) -> list[str]:
    """Build the ordered flag list for the assembly script (positionals excluded)."""

    effective_options = options or DmgArgumentOptions()
    product_name, _ = require_product_identity(settings)
    macos = settings.macos
    return [
        *_window_arguments(product_name, layout),
        *_attachment_arguments(layout.attachments),
        *_volume_icon_arguments(volume_icon),
        *_background_arguments(macos.background),
        *_eula_arguments(macos.license, effective_options.working_dir),
        *_ci_arguments(effective_options.ci),
    ]


def invocation_arguments(arguments: Sequence[str], paths: DmgPaths) -> list[str]:
    """Append the trailing ``<dmg name> <app bundle name>`` positionals."""

    return [*arguments, paths.dmg_name, paths.bundle_file_name]
