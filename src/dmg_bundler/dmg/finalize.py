"""Move the produced disk image into place and optionally sign it."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol

from dmg_bundler.config import AppSettings
from dmg_bundler.dmg.paths import DmgPaths
from dmg_bundler.errors import FinalizationError

LOGGER = logging.getLogger(__name__)


class Signer(Protocol):
    """Signs one file with a configured identity."""

    def sign(
        self,
        path: Path,
        identity: str,
        settings: AppSettings,
        *,
        is_an_executable: bool,
    ) -> None: ...


def move_into_place(source: Path, target: Path) -> Path:
    """Rename the tool-produced image to its planned artifact path."""

    try:
        os.replace(source, target)
    except OSError as exc:
        raise FinalizationError(f"failed to move {source} to {target}: {exc}", path=target) from exc
    return target


def finalize_artifact(
    paths: DmgPaths,
    settings: AppSettings,
    *,
    signer: Signer | None,
    logger: logging.Logger | None = None,
) -> list[Path]:
    """Rename the image into the output directory, sign when an identity is set."""

    effective_logger = logger or LOGGER
    dmg_path = move_into_place(paths.intermediate_dmg_path, paths.dmg_path)
    effective_logger.info("dmg.finalize.moved dmg_path=%s", dmg_path)

    identity = settings.macos.signing_identity
    if identity:
        if signer is None:
            raise FinalizationError(
                f"signing identity configured but no signer available for {dmg_path}",
                path=dmg_path,
            )
        effective_logger.info("dmg.finalize.signing dmg_path=%s identity=%s", dmg_path, identity)
        signer.sign(dmg_path, identity, settings, is_an_executable=False)
    else:
        effective_logger.info("dmg.finalize.unsigned dmg_path=%s", dmg_path)

    return [dmg_path]
