from __future__ import annotations

from pathlib import Path

import pytest

from dmg_bundler.dmg.paths import artifact_base_name, normalize_arch, plan_dmg_paths
from dmg_bundler.errors import PreconditionError


@pytest.mark.parametrize(
    ("arch", "expected"),
    [
        ("x86_64", "x64"),
        ("aarch64", "aarch64"),
        ("arm64", "arm64"),
        ("i686", "i686"),
        ("X86_64", "X86_64"),
        ("", ""),
    ],
)
def test_normalize_arch_only_rewrites_x86_64(arch: str, expected: str) -> None:
    assert normalize_arch(arch) == expected


def test_artifact_base_name_uses_normalized_arch() -> None:
    assert artifact_base_name("MyApp", "1.0.0", "x86_64") == "MyApp_1.0.0_x64"
    assert artifact_base_name("MyApp", "2.1", "aarch64") == "MyApp_2.1_aarch64"


def test_plan_dmg_paths_layout(make_settings, tmp_path: Path) -> None:
    settings = make_settings()
    out = tmp_path / "target" / "release"

    paths = plan_dmg_paths(settings)

    assert paths.output_dir == out / "bundle" / "dmg"
    assert paths.support_dir == out / "bundle" / "dmg" / "support"
    assert paths.script_path == out / "bundle" / "dmg" / "bundle_dmg.sh"
    assert paths.bundle_dir == out / "bundle" / "macos"
    assert paths.bundle_file_name == "MyApp.app"
    assert paths.dmg_name == "MyApp_1.0.0_x64.dmg"
    assert paths.dmg_path == out / "bundle" / "dmg" / "MyApp_1.0.0_x64.dmg"
    assert paths.intermediate_dmg_path == out / "bundle" / "macos" / "MyApp_1.0.0_x64.dmg"
    assert paths.app_bundle_path == out / "bundle" / "macos" / "MyApp.app"


def test_plan_dmg_paths_is_deterministic(make_settings) -> None:
    assert plan_dmg_paths(make_settings()) == plan_dmg_paths(make_settings())


def test_plan_dmg_paths_performs_no_io(make_settings, tmp_path: Path) -> None:
    plan_dmg_paths(make_settings())

    assert not (tmp_path / "target").exists()


@pytest.mark.parametrize(
    ("product_name", "version", "missing"),
    [
        (None, "1.0.0", "package.product_name"),
        ("MyApp", None, "package.version"),
        ("", "", "package.product_name, package.version"),
    ],
)
def test_plan_dmg_paths_rejects_missing_identity(make_settings, product_name, version, missing) -> None:
    settings = make_settings(product_name=product_name, version=version)

    with pytest.raises(PreconditionError) as excinfo:
        plan_dmg_paths(settings)

    assert missing in str(excinfo.value)
    assert str(excinfo.value).startswith("precondition: ")
