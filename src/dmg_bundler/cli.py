"""Typer CLI entrypoint for dmg_bundler."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
import yaml

from dmg_bundler.bundles import Bundle
from dmg_bundler.config import AppSettings, load_settings
from dmg_bundler.dmg.paths import plan_dmg_paths
from dmg_bundler.dmg.pipeline import DmgRunOptions, plan_dmg_invocation, run_dmg_pipeline
from dmg_bundler.errors import BundlerError
from dmg_bundler.logging_utils import configure_logging
from dmg_bundler.macos.app import build_app_bundle
from dmg_bundler.macos.icon import icns_destination

LOG_FILE_NAME = "bundler.log"

app = typer.Typer(
    add_completion=False,
    help="dmg_bundler command line interface.",
    no_args_is_help=True,
)


def _load_and_optionally_configure_logger(
    config_file: Path | None,
    configure: bool,
) -> tuple[AppSettings, logging.Logger]:
    settings = load_settings(config_file=config_file)
    if configure:
        logger = configure_logging(settings.paths.logs_root / LOG_FILE_NAME)
    else:
        logger = logging.getLogger("dmg_bundler")
    return settings, logger


def _fail(logger: logging.Logger, command: str, exc: BundlerError) -> typer.Exit:
    logger.error("%s.failed stage=%s error=%s", command, exc.stage, exc.message)
    typer.echo(f"{command} failed: {exc}", err=True)
    return typer.Exit(code=1)


@app.command("show-config")
def show_config(
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help="Optional settings YAML path.",
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Print the effective configuration after env overrides."""

    settings, _ = _load_and_optionally_configure_logger(config_file, configure=False)
    rendered = yaml.safe_dump(settings.as_dict(), sort_keys=False)
    typer.echo(rendered)


@app.command("dmg-plan")
def dmg_plan(
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help="Optional settings YAML path.",
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Print planned DMG paths and the assembly script arguments without touching disk."""

    settings, logger = _load_and_optionally_configure_logger(config_file, configure=False)
    try:
        paths = plan_dmg_paths(settings)
        _, arguments = plan_dmg_invocation(
            settings,
            volume_icon=icns_destination(paths.output_dir, settings),
        )
    except BundlerError as exc:
        raise _fail(logger, "dmg-plan", exc) from exc

    typer.echo(f"dmg_name: {paths.dmg_name}")
    typer.echo(f"dmg_path: {paths.dmg_path}")
    typer.echo(f"output_dir: {paths.output_dir}")
    typer.echo(f"support_dir: {paths.support_dir}")
    typer.echo(f"script_path: {paths.script_path}")
    typer.echo(f"bundle_dir: {paths.bundle_dir}")
    typer.echo("arguments:")
    for argument in arguments:
        typer.echo(f"  {argument}")


@app.command("app-bundle")
def app_bundle(
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help="Optional settings YAML path.",
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Build the .app bundle from the compiled binary."""

    settings, logger = _load_and_optionally_configure_logger(config_file, configure=True)
    try:
        bundle_paths = build_app_bundle(settings, logger=logger)
    except BundlerError as exc:
        raise _fail(logger, "app-bundle", exc) from exc
    for path in bundle_paths:
        typer.echo(f"app_bundle: {path}")


@app.command("dmg-run")
def dmg_run(
    app_exists: bool = typer.Option(
        False,
        "--app-exists",
        help="Treat the .app bundle as already built and skip building it.",
    ),
    no_summary: bool = typer.Option(
        False,
        "--no-summary",
        help="Do not write the JSON run summary under the logs root.",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help="Optional settings YAML path.",
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Stage resources, run the assembly script, and finalize the DMG."""

    settings, logger = _load_and_optionally_configure_logger(config_file, configure=True)
    bundles = [Bundle(package_type="app")] if app_exists else []
    options = DmgRunOptions(write_summary=not no_summary)
    try:
        result = run_dmg_pipeline(settings, bundles, options=options, logger=logger)
    except BundlerError as exc:
        raise _fail(logger, "dmg-run", exc) from exc

    typer.echo(f"run_id: {result.run_id}")
    typer.echo(f"built_app_bundle: {result.built_app_bundle}")
    for artifact in result.artifacts:
        typer.echo(f"artifact: {artifact}")
    typer.echo(f"summary_path: {result.summary_path if result.summary_path else 'none'}")


def main() -> None:
    """CLI script entrypoint."""

    app()


if __name__ == "__main__":
    main()
