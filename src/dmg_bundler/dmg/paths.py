"""Deterministic output paths and artifact naming for DMG runs."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from dmg_bundler.config import AppSettings
from dmg_bundler.errors import PreconditionError

DMG_OUTPUT_SUBDIR = Path("bundle/dmg")
MACOS_BUNDLE_SUBDIR = Path("bundle/macos")
SUPPORT_DIR_NAME = "support"
BUNDLE_SCRIPT_NAME = "bundle_dmg.sh"

ARCH_ALIASES: dict[str, str] = {"x86_64": "x64"}


@dataclass(frozen=True, slots=True)
class DmgPaths:
    """Every path one DMG run reads from or writes to."""

    output_dir: Path
    support_dir: Path
    script_path: Path
    bundle_dir: Path
    bundle_file_name: str
    dmg_name: str
    dmg_path: Path
    intermediate_dmg_path: Path

    @property
    def app_bundle_path(self) -> Path:
        return self.bundle_dir / self.bundle_file_name


def normalize_arch(arch: str) -> str:
    """Map ``x86_64`` to ``x64`` and pass every other architecture through."""

    return ARCH_ALIASES.get(arch, arch)


def artifact_base_name(product_name: str, version: str, arch: str) -> str:
    """Return ``<product>_<version>_<arch>`` with the architecture normalized."""

    return f"{product_name}_{version}_{normalize_arch(arch)}"


def require_product_identity(settings: AppSettings) -> tuple[str, str]:
    """Return (product_name, version) or raise if either is unset."""

    product_name = settings.main_binary_name()
    version = settings.version_string()
    if not product_name or not version:
        missing = [
            name
            for name, value in (("package.product_name", product_name), ("package.version", version))
            if not value
        ]
        raise PreconditionError(f"missing required settings: {', '.join(missing)}")
    return product_name, version


def plan_dmg_paths(settings: AppSettings) -> DmgPaths:
    """Derive output/support/script/bundle/artifact paths from settings only."""

    product_name, version = require_product_identity(settings)
    project_out = settings.paths.project_out_directory
    output_dir = project_out / DMG_OUTPUT_SUBDIR
    bundle_dir = project_out / MACOS_BUNDLE_SUBDIR
    dmg_name = f"{artifact_base_name(product_name, version, settings.package.binary_arch)}.dmg"

    return DmgPaths(
        output_dir=output_dir,
        support_dir=output_dir / SUPPORT_DIR_NAME,
        script_path=output_dir / BUNDLE_SCRIPT_NAME,
        bundle_dir=bundle_dir,
        bundle_file_name=f"{product_name}.app",
        dmg_name=dmg_name,
        dmg_path=output_dir / dmg_name,
        intermediate_dmg_path=bundle_dir / dmg_name,
    )
