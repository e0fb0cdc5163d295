"""Optional execution of the external build check.

The check command's combined output is streamed to the terminal and
captured in a temporary log, which is diagnosed when the command fails.
"""

import os
import shlex
import subprocess
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from android_selfcheck.checks.diagnostic import BuildDiagnostician
from android_selfcheck.core.exceptions.errors import ExternalCheckFailedError
from android_selfcheck.core.logger.logger import get_logger
from android_selfcheck.models.findings import FindingLog
from android_selfcheck.models.target import TargetTriple, ValidationMode

logger = get_logger(__name__)


@dataclass
class CheckResult:
    """Result of a check command that completed successfully.

    Failures are raised as ExternalCheckFailedError instead.

    Attributes:
        command: The command that was executed.
        return_code: Exit code of the command.
    """

    command: list[str]
    return_code: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "command": shlex.join(self.command),
            "return_code": self.return_code,
        }


def default_check_command(target: TargetTriple, extra_args: list[str] | None = None) -> list[str]:
    """``cargo check`` scoped to ``target`` without default features."""
    return [
        "cargo",
        "check",
        "--locked",
        "--target",
        target.value,
        "--no-default-features",
        *(extra_args or []),
    ]


class CheckRunner:
    """Runs the build check and diagnoses its output on failure."""

    def __init__(
        self,
        diagnostician: BuildDiagnostician | None = None,
        command: list[str] | None = None,
        cwd: Path | None = None,
        target_dir: Path | None = None,
        extra_args: list[str] | None = None,
        stream: TextIO | None = None,
    ) -> None:
        """Initialize the check runner.

        Args:
            diagnostician: Engine applied to the captured log on failure.
            command: Command to run instead of the default ``cargo check``.
            cwd: Working directory for the command.
            target_dir: CARGO_TARGET_DIR to export when not already set.
            extra_args: Extra arguments for the default command.
            stream: Where command output is echoed (defaults to stdout).
        """
        self.diagnostician = diagnostician or BuildDiagnostician()
        self.command = command
        self.cwd = cwd
        self.target_dir = target_dir
        self.extra_args = extra_args or []
        self.stream = stream
        self.last_log_path: Path | None = None

    def build_command(self, target: TargetTriple) -> list[str]:
        if self.command is not None:
            return list(self.command)
        return default_check_command(target, self.extra_args)

    def _environment(self) -> dict[str, str]:
        env = os.environ.copy()
        if self.target_dir is not None and not env.get("CARGO_TARGET_DIR"):
            env["CARGO_TARGET_DIR"] = str(self.target_dir)
        return env

    def _execute(self, command: list[str], log_file: TextIO) -> int:
        stream = self.stream or sys.stdout
        try:
            process = subprocess.Popen(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                cwd=self.cwd,
                env=self._environment(),
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            # Recorded like shell "command not found" so the log stays diagnosable
            message = f"{command[0]}: {e.strerror or e} (os error {e.errno})\n"
            log_file.write(message)
            stream.write(message)
            return 127

        with process:
            for line in process.stdout or []:
                stream.write(line)
                log_file.write(line)
        return process.returncode

    def run(
        self,
        target: TargetTriple,
        mode: ValidationMode,
        findings: FindingLog,
    ) -> CheckResult:
        """Run the check command for ``target``.

        Raises:
            ExternalCheckFailedError: If the command exits non-zero, after the
                captured output has been diagnosed.
        """
        command = self.build_command(target)
        command_text = shlex.join(command)

        log_fd, log_name = tempfile.mkstemp(prefix="android-selfcheck-", suffix=".log")
        log_path = Path(log_name)
        self.last_log_path = log_path
        try:
            logger.info(f"running {command_text}")
            with os.fdopen(log_fd, "w", encoding="utf-8") as log_file:
                return_code = self._execute(command, log_file)

            if return_code == 0:
                logger.info("check command completed successfully")
                return CheckResult(command=command, return_code=0)

            logger.warning(f"{command_text} failed; analyzing common Android toolchain issues")
            matched = self.diagnostician.diagnose(log_path, target, mode, findings)
            raise ExternalCheckFailedError(
                f"{command[0]} check failed (exit {return_code})",
                command=command_text,
                return_code=return_code,
                details={"matched_rules": matched},
            )
        finally:
            log_path.unlink(missing_ok=True)
