"""Stage-tagged error types raised by the bundling pipeline."""

from __future__ import annotations

from pathlib import Path


class BundlerError(RuntimeError):
    """Base error for bundling failures; renders as ``<stage>: <message>``."""

    stage = "bundle"

    def __init__(self, message: str, *, path: Path | None = None, output: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.output = output

    def __str__(self) -> str:
        rendered = f"{self.stage}: {self.message}"
        if self.output:
            rendered = f"{rendered}\n{self.output.rstrip()}"
        return rendered


class PreconditionError(BundlerError):
    """Raised when required settings are missing before any I/O happens."""

    stage = "precondition"


class ConfigurationError(BundlerError):
    """Raised when a configured path or value cannot be used as given."""

    stage = "configuration"


class StagingError(BundlerError):
    """Raised when support resources cannot be written or prepared."""

    stage = "staging"


class InvocationError(BundlerError):
    """Raised when a child process cannot be spawned or exits non-zero."""

    stage = "invocation"

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        output: str | None = None,
        returncode: int | None = None,
    ) -> None:
        super().__init__(message, path=path, output=output)
        self.returncode = returncode


class FinalizationError(BundlerError):
    """Raised when the produced image cannot be moved into place."""

    stage = "finalization"


class SigningError(BundlerError):
    """Raised by the signer when the signing tool fails."""

    stage = "signing"
