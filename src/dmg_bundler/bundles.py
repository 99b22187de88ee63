"""Descriptors for bundles already produced during a build run."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Sequence

PackageType = Literal["app", "dmg", "ios", "deb", "rpm", "appimage", "msi", "nsis"]
PACKAGE_TYPE_VALUES: tuple[PackageType, ...] = ("app", "dmg", "ios", "deb", "rpm", "appimage", "msi", "nsis")
MACOS_BUNDLE: PackageType = "app"


@dataclass(frozen=True, slots=True)
class Bundle:
    """One produced package and the files it consists of."""

    package_type: PackageType
    bundle_paths: tuple[Path, ...] = field(default_factory=tuple)


def has_macos_bundle(bundles: Sequence[Bundle]) -> bool:
    """Return True when an ``.app`` bundle was already produced for this run."""

    return any(bundle.package_type == MACOS_BUNDLE for bundle in bundles)
