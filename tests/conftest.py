from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

import pytest

from dmg_bundler.config import AppSettings, BundleConfig, MacOSConfig, PackageConfig, PathsConfig
from dmg_bundler.process import ProcessOutcome


@pytest.fixture(autouse=True)
def _isolate_settings_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith("DMG_BUNDLER_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("CI", raising=False)
    monkeypatch.setenv("DMG_BUNDLER_SETTINGS_FILE", str(tmp_path / "no-such-settings.yaml"))


@dataclass
class RecordedCall:
    command: str
    args: list[str]
    cwd: Path


@dataclass
class FakeRunner:
    """Records invocations; the assembly script call drops a fake image into its cwd."""

    returncodes: dict[str, int] = field(default_factory=dict)
    outputs: dict[str, str] = field(default_factory=dict)
    calls: list[RecordedCall] = field(default_factory=list)
    produce_image: bool = True

    def run(self, command: str, args: Sequence[str], cwd: Path) -> ProcessOutcome:
        self.calls.append(RecordedCall(command=command, args=list(args), cwd=cwd))
        key = Path(command).name
        returncode = self.returncodes.get(key, 0)
        if key == "bundle_dmg.sh" and returncode == 0 and self.produce_image:
            cwd.mkdir(parents=True, exist_ok=True)
            (cwd / args[-2]).write_bytes(b"fake dmg")
        return ProcessOutcome(
            command=(command, *args),
            returncode=returncode,
            output=self.outputs.get(key, ""),
        )

    def calls_to(self, name: str) -> list[RecordedCall]:
        return [call for call in self.calls if Path(call.command).name == name]


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def make_settings(tmp_path: Path) -> Callable[..., AppSettings]:
    def _make(
        *,
        product_name: str | None = "MyApp",
        version: str | None = "1.0.0",
        binary_arch: str = "x86_64",
        macos: MacOSConfig | None = None,
        icons: list[Path] | None = None,
        out_dir: Path | None = None,
    ) -> AppSettings:
        return AppSettings(
            package=PackageConfig(product_name=product_name, version=version, binary_arch=binary_arch),
            paths=PathsConfig(
                project_out_directory=out_dir or tmp_path / "target" / "release",
                logs_root=tmp_path / "logs",
            ),
            bundle=BundleConfig(icons=icons or []),
            macos=macos or MacOSConfig(),
        )

    return _make
