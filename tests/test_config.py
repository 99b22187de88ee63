from __future__ import annotations

from pathlib import Path

from dmg_bundler import config
from dmg_bundler.config import AppSettings, default_binary_arch, load_settings, resolve_settings_file


def _write_settings(root: Path, body: str) -> Path:
    settings_file = root / "configs" / "bundler.yaml"
    settings_file.parent.mkdir(parents=True)
    settings_file.write_text(body, encoding="utf-8")
    return settings_file


def test_load_settings_reads_yaml_and_resolves_paths(tmp_path: Path) -> None:
    settings_file = _write_settings(
        tmp_path,
        """
package:
  product_name: MyApp
  version: 1.2.3
  binary_arch: aarch64
paths:
  project_out_directory: ./target/release
macos:
  background: assets/bg.png
  attachments:
    - docs/README.md
    - docs/LICENSE
""",
    )

    settings = load_settings(settings_file)

    assert settings.package.product_name == "MyApp"
    assert settings.package.version == "1.2.3"
    assert settings.package.binary_arch == "aarch64"
    assert settings.paths.project_out_directory == (tmp_path / "target" / "release").resolve()
    assert settings.paths.logs_root == (tmp_path / "logs").resolve()
    assert settings.macos.background == Path("assets/bg.png")
    assert settings.macos.attachments == [Path("docs/README.md"), Path("docs/LICENSE")]
    assert settings.macos.signing_identity is None


def test_env_overrides_yaml(tmp_path: Path, monkeypatch) -> None:
    settings_file = _write_settings(tmp_path, "package:\n  product_name: MyApp\n  version: 1.0.0\n")
    monkeypatch.setenv("DMG_BUNDLER_PACKAGE__VERSION", "2.0.0")
    monkeypatch.setenv("DMG_BUNDLER_MACOS__SIGNING_IDENTITY", "Developer ID")

    settings = load_settings(settings_file)

    assert settings.package.product_name == "MyApp"
    assert settings.package.version == "2.0.0"
    assert settings.macos.signing_identity == "Developer ID"


def test_settings_file_env_var_is_used(tmp_path: Path, monkeypatch) -> None:
    target = tmp_path / "elsewhere.yaml"
    monkeypatch.setenv("DMG_BUNDLER_SETTINGS_FILE", str(target))

    assert resolve_settings_file() == target


def test_missing_settings_file_gives_defaults() -> None:
    settings = AppSettings()

    assert settings.main_binary_name() is None
    assert settings.version_string() is None
    assert settings.macos.attachments is None
    assert settings.bundle.icons == []
    assert settings.as_dict()["macos"]["minimum_system_version"] == "10.13"


def test_default_binary_arch_uses_target_triple_names(monkeypatch) -> None:
    monkeypatch.setattr(config.platform, "machine", lambda: "arm64")
    assert default_binary_arch() == "aarch64"

    monkeypatch.setattr(config.platform, "machine", lambda: "x86_64")
    assert default_binary_arch() == "x86_64"

    monkeypatch.setattr(config.platform, "machine", lambda: "")
    assert default_binary_arch() == "x86_64"
