"""Tests for the check runner."""

import io
import sys
from pathlib import Path

import pytest

from android_selfcheck.checks.runner import CheckRunner, default_check_command
from android_selfcheck.core.exceptions.errors import ExternalCheckFailedError
from android_selfcheck.models.findings import FindingLog
from android_selfcheck.models.target import TargetTriple, ValidationMode

AARCH64 = TargetTriple.AARCH64
CROSS = ValidationMode.CROSS_FROM_HOST


def python_command(code: str) -> list[str]:
    return [sys.executable, "-c", code]


class TestDefaultCommand:
    """Test default command construction."""

    def test_cargo_check(self) -> None:
        assert default_check_command(TargetTriple.ARMV7) == [
            "cargo",
            "check",
            "--locked",
            "--target",
            "armv7-linux-androideabi",
            "--no-default-features",
        ]

    def test_extra_args(self) -> None:
        command = default_check_command(AARCH64, ["--bins"])
        assert command[-1] == "--bins"

    def test_runner_uses_extra_args(self) -> None:
        runner = CheckRunner(extra_args=["-p", "app"])
        assert runner.build_command(AARCH64)[-2:] == ["-p", "app"]


class TestCheckRunner:
    """Test running the check command."""

    def test_success_skips_diagnosis(self, temp_dir: Path) -> None:
        stream = io.StringIO()
        findings = FindingLog()
        runner = CheckRunner(
            command=python_command("print('Finished dev profile')"),
            cwd=temp_dir,
            stream=stream,
        )

        result = runner.run(AARCH64, CROSS, findings)

        assert result.return_code == 0
        assert result.to_dict()["return_code"] == 0
        assert "Finished dev profile" in stream.getvalue()
        assert len(findings) == 0
        assert runner.last_log_path is not None
        assert not runner.last_log_path.exists()

    def test_failure_is_diagnosed(self, temp_dir: Path) -> None:
        code = (
            "import sys\n"
            "print('   Compiling ring v0.17.8')\n"
            "sys.stderr.write('error occurred: failed to find tool \"aarch64-linux-android-clang\"\\n')\n"
            "sys.exit(101)\n"
        )
        findings = FindingLog()
        runner = CheckRunner(command=python_command(code), cwd=temp_dir, stream=io.StringIO())

        with pytest.raises(ExternalCheckFailedError) as exc_info:
            runner.run(AARCH64, CROSS, findings)

        assert exc_info.value.return_code == 101
        assert "(exit 101)" in exc_info.value.message
        assert exc_info.value.details["matched_rules"] == ["compiler_lookup"]
        assert findings.detections == [
            "detected cc-rs compiler lookup failure for Android target"
        ]
        assert not runner.last_log_path.exists()

    def test_failure_without_known_signature(self, temp_dir: Path) -> None:
        findings = FindingLog()
        runner = CheckRunner(
            command=python_command("import sys; print('boom'); sys.exit(3)"),
            cwd=temp_dir,
            stream=io.StringIO(),
        )

        with pytest.raises(ExternalCheckFailedError):
            runner.run(AARCH64, CROSS, findings)

        assert findings.detections == []
        assert not runner.last_log_path.exists()

    def test_missing_command(self, temp_dir: Path) -> None:
        findings = FindingLog()
        runner = CheckRunner(
            command=["definitely-not-a-real-cargo-xyz", "check"],
            cwd=temp_dir,
            stream=io.StringIO(),
        )

        with pytest.raises(ExternalCheckFailedError) as exc_info:
            runner.run(AARCH64, CROSS, findings)

        assert exc_info.value.return_code == 127
        assert "missing_executable" in exc_info.value.details["matched_rules"]
        assert not runner.last_log_path.exists()

    def test_target_dir_exported(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("CARGO_TARGET_DIR", raising=False)
        stream = io.StringIO()
        runner = CheckRunner(
            command=python_command("import os; print(os.environ['CARGO_TARGET_DIR'])"),
            cwd=temp_dir,
            target_dir=temp_dir / "target",
            stream=stream,
        )

        runner.run(AARCH64, CROSS, FindingLog())

        assert str(temp_dir / "target") in stream.getvalue()

    def test_existing_target_dir_kept(
        self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CARGO_TARGET_DIR", "/custom/target")
        stream = io.StringIO()
        runner = CheckRunner(
            command=python_command("import os; print(os.environ['CARGO_TARGET_DIR'])"),
            cwd=temp_dir,
            target_dir=temp_dir / "target",
            stream=stream,
        )

        runner.run(AARCH64, CROSS, FindingLog())

        assert "/custom/target" in stream.getvalue()
