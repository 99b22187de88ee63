"""Configuration models and loading logic."""

from __future__ import annotations

import os
import platform
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_SETTINGS_FILE = Path("configs/bundler.yaml")
SETTINGS_FILE_ENV = "DMG_BUNDLER_SETTINGS_FILE"


HOST_ARCH_ALIASES: dict[str, str] = {"arm64": "aarch64"}


def default_binary_arch() -> str:
    """Return the host architecture using target-triple naming (``arm64`` becomes ``aarch64``)."""

    machine = platform.machine() or "x86_64"
    return HOST_ARCH_ALIASES.get(machine, machine)


class PackageConfig(BaseModel):
    """Identity of the application being packaged."""

    product_name: str | None = None
    version: str | None = None
    binary_arch: str = Field(default_factory=default_binary_arch)
    identifier: str | None = None
    copyright: str | None = None


class PathsConfig(BaseModel):
    """Filesystem roots for build outputs and logs."""

    project_out_directory: Path = Path("./target/release")
    logs_root: Path = Path("./logs")

    def resolved(self, project_root: Path) -> "PathsConfig":
        """Return a copy with project-relative paths resolved to absolute paths."""

        updates: dict[str, Path] = {}
        for field_name in type(self).model_fields:
            value = getattr(self, field_name)
            updates[field_name] = value if value.is_absolute() else (project_root / value).resolve()
        return self.model_copy(update=updates)


class BundleConfig(BaseModel):
    """Platform-independent bundle inputs."""

    icons: list[Path] = Field(default_factory=list)


class MacOSConfig(BaseModel):
    """macOS-specific packaging settings."""

    background: Path | None = None
    license: Path | None = None
    signing_identity: str | None = None
    entitlements: Path | None = None
    attachments: list[Path] | None = None
    minimum_system_version: str | None = "10.13"


class AppSettings(BaseSettings):
    """Top-level application settings."""

    _yaml_file_override: ClassVar[Path | None] = None

    package: PackageConfig = Field(default_factory=PackageConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    bundle: BundleConfig = Field(default_factory=BundleConfig)
    macos: MacOSConfig = Field(default_factory=MacOSConfig)

    model_config = SettingsConfigDict(
        env_prefix="DMG_BUNDLER_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Use YAML defaults while allowing env vars to override values."""

        yaml_file = resolve_settings_file(cls._yaml_file_override)
        yaml_settings = YamlConfigSettingsSource(settings_cls, yaml_file=yaml_file)
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            yaml_settings,
            file_secret_settings,
        )

    def main_binary_name(self) -> str | None:
        """Return the product binary name, if configured."""

        return self.package.product_name

    def version_string(self) -> str | None:
        """Return the configured version, if any."""

        return self.package.version

    def as_dict(self) -> dict[str, object]:
        """Return settings as a standard nested dictionary."""

        return self.model_dump(mode="json")


def find_project_root(start: Path | None = None) -> Path:
    """Locate the project root by traversing upward for config markers."""

    current = (start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / DEFAULT_SETTINGS_FILE).exists():
            return candidate
    return current


def resolve_settings_file(override: Path | None = None) -> Path:
    """Resolve settings file from explicit override, env var, or default."""

    chosen = override
    if chosen is None:
        env_value = os.getenv(SETTINGS_FILE_ENV)
        if env_value:
            chosen = Path(env_value)
    if chosen is None:
        chosen = DEFAULT_SETTINGS_FILE

    if not chosen.is_absolute():
        chosen = (find_project_root() / chosen).resolve()
    return chosen


def load_settings(config_file: Path | None = None) -> AppSettings:
    """Load settings with YAML defaults and environment variable overrides."""

    settings_file = resolve_settings_file(config_file)
    project_root = settings_file.parent.parent.resolve()
    AppSettings._yaml_file_override = settings_file
    try:
        settings = AppSettings()
    finally:
        AppSettings._yaml_file_override = None
    resolved_paths = settings.paths.resolved(project_root=project_root)
    return settings.model_copy(update={"paths": resolved_paths})
