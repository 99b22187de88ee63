"""Stage the assembly script and its support templates into a clean directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Final

from dmg_bundler.dmg.paths import DmgPaths
from dmg_bundler.errors import StagingError
from dmg_bundler.process import CommandRunner, make_executable
from dmg_bundler.utils.paths import remove_tree, write_resource_file

LOGGER = logging.getLogger(__name__)

TEMPLATE_PACKAGE: Final[str] = "dmg_bundler.dmg"
TEMPLATE_DIR: Final[str] = "templates"
SCRIPT_TEMPLATE: Final[str] = "bundle_dmg"
APPLESCRIPT_TEMPLATE: Final[str] = "template.applescript"
EULA_TEMPLATE: Final[str] = "eula-resources-template.xml"


@dataclass(frozen=True, slots=True)
class StagedResources:
    """Files written into the DMG output directory for one run."""

    script_path: Path
    applescript_path: Path
    eula_template_path: Path

    def all_paths(self) -> tuple[Path, ...]:
        return (self.script_path, self.applescript_path, self.eula_template_path)


def read_template(name: str) -> str:
    """Return the packaged template text for ``name``."""

    return resources.files(TEMPLATE_PACKAGE).joinpath(TEMPLATE_DIR).joinpath(name).read_text(encoding="utf-8")


def _remove_previous_output(output_dir: Path, logger: logging.Logger) -> None:
    try:
        removed = remove_tree(output_dir)
    except OSError as exc:
        raise StagingError(f"failed to remove old output directory {output_dir}: {exc}", path=output_dir) from exc
    if removed:
        logger.info("dmg.stage.removed_previous output_dir=%s", output_dir)


def _write_template(target: Path, template_name: str) -> Path:
    try:
        return write_resource_file(target, read_template(template_name))
    except OSError as exc:
        raise StagingError(f"failed to write {target}: {exc}", path=target) from exc


def stage_support_resources(
    paths: DmgPaths,
    *,
    runner: CommandRunner,
    logger: logging.Logger | None = None,
) -> StagedResources:
    """Recreate the output directory and write the fixed helper resources into it."""

    effective_logger = logger or LOGGER
    _remove_previous_output(paths.output_dir, effective_logger)
    try:
        paths.support_dir.mkdir(parents=True, exist_ok=False)
    except OSError as exc:
        raise StagingError(
            f"failed to create output directory at {paths.support_dir}: {exc}",
            path=paths.support_dir,
        ) from exc

    staged = StagedResources(
        script_path=_write_template(paths.script_path, SCRIPT_TEMPLATE),
        applescript_path=_write_template(paths.support_dir / APPLESCRIPT_TEMPLATE, APPLESCRIPT_TEMPLATE),
        eula_template_path=_write_template(paths.support_dir / EULA_TEMPLATE, EULA_TEMPLATE),
    )
    make_executable(runner, staged.script_path, logger=effective_logger)

    effective_logger.info(
        "dmg.stage.done script=%s support_dir=%s",
        staged.script_path,
        paths.support_dir,
    )
    return staged
