from __future__ import annotations

import sys
from pathlib import Path

import pytest

from dmg_bundler.errors import InvocationError, StagingError
from dmg_bundler.process import ProcessOutcome, SubprocessRunner, make_executable, run_checked


class RaisingRunner:
    def run(self, command, args, cwd):
        raise FileNotFoundError(2, "No such file or directory", command)


def test_run_checked_returns_outcome_on_success(fake_runner, tmp_path: Path) -> None:
    outcome = run_checked(fake_runner, "tool", ["--flag"], tmp_path)

    assert outcome.ok
    assert fake_runner.calls[0].args == ["--flag"]
    assert fake_runner.calls[0].cwd == tmp_path


def test_run_checked_surfaces_output_on_failure(fake_runner, tmp_path: Path) -> None:
    fake_runner.returncodes["tool"] = 3
    fake_runner.outputs["tool"] = "hdiutil: create failed - Resource busy\n"

    with pytest.raises(InvocationError) as excinfo:
        run_checked(fake_runner, "tool", [], tmp_path)

    assert excinfo.value.returncode == 3
    assert excinfo.value.output == "hdiutil: create failed - Resource busy\n"
    assert "Resource busy" in str(excinfo.value)
    assert str(excinfo.value).startswith("invocation: error running tool")


def test_run_checked_wraps_spawn_failure(tmp_path: Path) -> None:
    with pytest.raises(InvocationError) as excinfo:
        run_checked(RaisingRunner(), "missing-tool", [], tmp_path)

    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


def test_make_executable_runs_chmod_in_script_dir(fake_runner, tmp_path: Path) -> None:
    script = tmp_path / "bundle_dmg.sh"

    make_executable(fake_runner, script)

    call = fake_runner.calls_to("chmod")[0]
    assert call.args == ["755", str(script)]
    assert call.cwd == tmp_path


def test_make_executable_failure_is_staging_error(fake_runner, tmp_path: Path) -> None:
    fake_runner.returncodes["chmod"] = 1
    fake_runner.outputs["chmod"] = "chmod: Operation not permitted"

    with pytest.raises(StagingError) as excinfo:
        make_executable(fake_runner, tmp_path / "bundle_dmg.sh")

    assert excinfo.value.path == tmp_path / "bundle_dmg.sh"
    assert excinfo.value.output == "chmod: Operation not permitted"


def test_subprocess_runner_combines_output(tmp_path: Path) -> None:
    runner = SubprocessRunner()

    outcome = runner.run(
        sys.executable,
        ["-c", "import sys; print('out'); print('err', file=sys.stderr); sys.exit(4)"],
        tmp_path,
    )

    assert isinstance(outcome, ProcessOutcome)
    assert outcome.returncode == 4
    assert not outcome.ok
    assert "out" in outcome.output
    assert "err" in outcome.output


def test_subprocess_runner_replaces_undecodable_output(tmp_path: Path) -> None:
    with pytest.raises(InvocationError) as excinfo:
        run_checked(SubprocessRunner(), "sh", ["-c", "printf 'bad \\377\\376'; exit 1"], tmp_path)

    assert excinfo.value.returncode == 1
    assert excinfo.value.output.startswith("bad ")
    assert "\ufffd" in excinfo.value.output
