"""DMG pipeline orchestration: plan, stage, lay out, invoke, finalize."""

from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping, Sequence
from uuid import uuid4

from dmg_bundler.bundles import Bundle, has_macos_bundle
from dmg_bundler.config import AppSettings
from dmg_bundler.dmg.arguments import (
    DmgArgumentOptions,
    build_dmg_arguments,
    invocation_arguments,
    is_ci_environment,
)
from dmg_bundler.dmg.finalize import Signer, finalize_artifact
from dmg_bundler.dmg.layout import compute_window_layout
from dmg_bundler.dmg.paths import DmgPaths, plan_dmg_paths
from dmg_bundler.dmg.resources import stage_support_resources
from dmg_bundler.macos.app import build_app_bundle
from dmg_bundler.macos.icon import create_icns_file
from dmg_bundler.macos.sign import CodesignSigner
from dmg_bundler.process import CommandRunner, ProcessOutcome, SubprocessRunner, run_checked
from dmg_bundler.utils.time_utils import now_utc

LOGGER = logging.getLogger(__name__)

SUMMARY_SUBDIR = "dmg_runs"

AppBundleBuilder = Callable[[AppSettings], list[Path]]
IconConverter = Callable[[Path, AppSettings], Path | None]


@dataclass(frozen=True, slots=True)
class DmgRunOptions:
    """Runtime inputs read from the process environment by default."""

    environ: Mapping[str, str] | None = None
    working_dir: Path | None = None
    write_summary: bool = True


@dataclass(frozen=True, slots=True)
class DmgRunResult:
    """Return object for one DMG pipeline run."""

    run_id: str
    artifacts: list[Path]
    paths: DmgPaths
    arguments: list[str]
    built_app_bundle: bool
    summary_path: Path | None
    tool_output: str = field(default="", repr=False)


def _atomic_temp_path(target_path: Path) -> Path:
    """Create a temp path in the target directory for atomic replacement."""

    return target_path.parent / f".{target_path.name}.{uuid4().hex}.tmp"


def _write_json_atomically(payload: dict[str, Any], output_path: Path) -> Path:
    """Write JSON payload atomically to output path."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = _atomic_temp_path(output_path)
    try:
        temp_path.write_text(json.dumps(payload, indent=2, sort_keys=True, default=str) + "\n", encoding="utf-8")
        os.replace(temp_path, output_path)
    finally:
        if temp_path.exists():
            temp_path.unlink()
    return output_path


def _argument_options(run_options: DmgRunOptions) -> DmgArgumentOptions:
    environ = os.environ if run_options.environ is None else run_options.environ
    working_dir = run_options.working_dir or Path.cwd()
    return DmgArgumentOptions(ci=is_ci_environment(environ), working_dir=working_dir)


def plan_dmg_invocation(
    settings: AppSettings,
    *,
    volume_icon: Path | None = None,
    options: DmgRunOptions | None = None,
) -> tuple[DmgPaths, list[str]]:
    """Return planned paths and the full script argument list without any I/O."""

    run_options = options or DmgRunOptions()
    paths = plan_dmg_paths(settings)
    layout = compute_window_layout(settings.macos.attachments)
    arguments = build_dmg_arguments(
        settings,
        layout,
        volume_icon=volume_icon,
        options=_argument_options(run_options),
    )
    return paths, invocation_arguments(arguments, paths)


def run_bundle_script(
    runner: CommandRunner,
    paths: DmgPaths,
    arguments: Sequence[str],
    *,
    logger: logging.Logger | None = None,
) -> ProcessOutcome:
    """Execute the staged script inside the app-bundle directory."""

    return run_checked(
        runner,
        str(paths.script_path),
        arguments,
        paths.bundle_dir,
        description=paths.script_path.name,
        logger=logger,
    )


def run_dmg_pipeline(
    settings: AppSettings,
    bundles: Sequence[Bundle] = (),
    *,
    options: DmgRunOptions | None = None,
    runner: CommandRunner | None = None,
    app_builder: AppBundleBuilder | None = None,
    icon_converter: IconConverter | None = None,
    signer: Signer | None = None,
    logger: logging.Logger | None = None,
) -> DmgRunResult:
    """Build a DMG from the app bundle, building the bundle first if needed."""

    effective_logger = logger or LOGGER
    run_options = options or DmgRunOptions()
    effective_runner = runner or SubprocessRunner()
    effective_signer = signer or CodesignSigner(effective_runner, logger=effective_logger)

    run_id = f"dmg-run-{uuid4().hex[:12]}"
    started_ts = now_utc()
    started_mono = time.monotonic()

    paths = plan_dmg_paths(settings)
    # attachment and background names are checked before anything is built or wiped
    plan_dmg_invocation(settings, options=run_options)

    built_app_bundle = False
    if not has_macos_bundle(bundles):
        effective_logger.info("dmg.app_bundle.missing building app_dir=%s", paths.app_bundle_path)
        if app_builder is None:
            build_app_bundle(settings, logger=effective_logger)
        else:
            app_builder(settings)
        built_app_bundle = True

    effective_logger.info("dmg.bundling dmg_name=%s dmg_path=%s", paths.dmg_name, paths.dmg_path)
    stage_support_resources(paths, runner=effective_runner, logger=effective_logger)

    if icon_converter is None:
        volume_icon = create_icns_file(paths.output_dir, settings, logger=effective_logger)
    else:
        volume_icon = icon_converter(paths.output_dir, settings)

    _, arguments = plan_dmg_invocation(settings, volume_icon=volume_icon, options=run_options)

    effective_logger.info("dmg.running script=%s cwd=%s", paths.script_path.name, paths.bundle_dir)
    outcome = run_bundle_script(effective_runner, paths, arguments, logger=effective_logger)

    artifacts = finalize_artifact(paths, settings, signer=effective_signer, logger=effective_logger)

    duration_sec = round(time.monotonic() - started_mono, 3)
    summary_path: Path | None = None
    if run_options.write_summary:
        summary = {
            "run_id": run_id,
            "started_ts": started_ts.isoformat(),
            "finished_ts": now_utc().isoformat(),
            "duration_sec": duration_sec,
            "dmg_name": paths.dmg_name,
            "artifacts": [str(path) for path in artifacts],
            "arguments": arguments,
            "built_app_bundle": built_app_bundle,
            "signed": bool(settings.macos.signing_identity),
        }
        summary_path = _write_json_atomically(
            summary,
            settings.paths.logs_root / SUMMARY_SUBDIR / f"{run_id}.json",
        )

    effective_logger.info(
        "dmg.summary run_id=%s artifacts=%s duration_sec=%s summary_path=%s",
        run_id,
        [str(path) for path in artifacts],
        duration_sec,
        summary_path,
    )
    return DmgRunResult(
        run_id=run_id,
        artifacts=artifacts,
        paths=paths,
        arguments=arguments,
        built_app_bundle=built_app_bundle,
        summary_path=summary_path,
        tool_output=outcome.output,
    )


def bundle_project(
    settings: AppSettings,
    bundles: Sequence[Bundle] = (),
    **kwargs: Any,
) -> list[Path]:
    """Build the DMG and return the list holding its single artifact path."""

    return run_dmg_pipeline(settings, bundles, **kwargs).artifacts
