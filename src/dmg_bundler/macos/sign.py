"""Code signing through Apple's ``codesign`` tool."""

from __future__ import annotations

import logging
from pathlib import Path

from dmg_bundler.config import AppSettings
from dmg_bundler.errors import InvocationError, SigningError
from dmg_bundler.process import CommandRunner, SubprocessRunner, run_checked

LOGGER = logging.getLogger(__name__)

CODESIGN_COMMAND = "codesign"


def codesign_arguments(
    path: Path,
    identity: str,
    *,
    entitlements: Path | None,
    is_an_executable: bool,
) -> list[str]:
    """Return codesign flags; hardened runtime and entitlements apply to executables only."""

    args = ["--force", "-s", identity]
    if is_an_executable:
        args.extend(["--options", "runtime"])
        if entitlements is not None:
            args.extend(["--entitlements", str(entitlements)])
    args.append(str(path))
    return args


class CodesignSigner:
    """Signer that shells out to ``codesign`` via a command runner."""

    def __init__(self, runner: CommandRunner | None = None, logger: logging.Logger | None = None) -> None:
        self.runner = runner or SubprocessRunner()
        self.logger = logger or LOGGER

    def sign(
        self,
        path: Path,
        identity: str,
        settings: AppSettings,
        *,
        is_an_executable: bool,
    ) -> None:
        args = codesign_arguments(
            path,
            identity,
            entitlements=settings.macos.entitlements,
            is_an_executable=is_an_executable,
        )
        self.logger.info("sign.start path=%s identity=%s", path, identity)
        try:
            run_checked(self.runner, CODESIGN_COMMAND, args, path.parent, logger=self.logger)
        except InvocationError as exc:
            raise SigningError(f"failed to sign {path}: {exc.message}", path=path, output=exc.output) from exc
        self.logger.info("sign.done path=%s", path)
