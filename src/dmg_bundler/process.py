"""Child-process execution behind a small runner interface."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence

from dmg_bundler.errors import InvocationError, StagingError

LOGGER = logging.getLogger(__name__)

EXECUTABLE_MODE = "755"


@dataclass(frozen=True, slots=True)
class ProcessOutcome:
    """Exit status and combined stdout/stderr of one child process."""

    command: tuple[str, ...]
    returncode: int
    output: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(Protocol):
    """Anything that can run a command with arguments in a working directory."""

    def run(self, command: str, args: Sequence[str], cwd: Path) -> ProcessOutcome: ...


class SubprocessRunner:
    """Blocking runner backed by ``subprocess.run``; no timeout is applied."""

    def run(self, command: str, args: Sequence[str], cwd: Path) -> ProcessOutcome:
        argv = (command, *args)
        completed = subprocess.run(
            list(argv),
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
        return ProcessOutcome(command=argv, returncode=completed.returncode, output=completed.stdout or "")


def run_checked(
    runner: CommandRunner,
    command: str,
    args: Sequence[str],
    cwd: Path,
    *,
    description: str | None = None,
    logger: logging.Logger | None = None,
) -> ProcessOutcome:
    """Run a command and raise InvocationError on spawn failure or non-zero exit."""

    effective_logger = logger or LOGGER
    label = description or Path(command).name
    effective_logger.debug("process.run command=%s args=%s cwd=%s", command, list(args), cwd)
    try:
        outcome = runner.run(command, args, cwd)
    except OSError as exc:
        raise InvocationError(f"error running {label}: {exc}", path=Path(command)) from exc

    if not outcome.ok:
        effective_logger.error("process.failed command=%s returncode=%s", label, outcome.returncode)
        raise InvocationError(
            f"error running {label} (exit status {outcome.returncode})",
            path=Path(command),
            output=outcome.output,
            returncode=outcome.returncode,
        )
    return outcome


def make_executable(
    runner: CommandRunner,
    script_path: Path,
    *,
    logger: logging.Logger | None = None,
) -> None:
    """Mark a staged script executable with chmod, escalating any failure."""

    try:
        run_checked(
            runner,
            "chmod",
            [EXECUTABLE_MODE, str(script_path)],
            script_path.parent,
            description=f"chmod {script_path.name}",
            logger=logger,
        )
    except InvocationError as exc:
        raise StagingError(
            f"failed to mark {script_path} executable: {exc.message}",
            path=script_path,
            output=exc.output,
        ) from exc
