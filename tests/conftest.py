"""Pytest configuration and shared fixtures."""

import shutil
import tempfile
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Generator

import pytest

from android_selfcheck.checks.preflight import ToolProbe
from android_selfcheck.core.config.settings import CheckSettings, LoggingSettings, Settings
from android_selfcheck.models.target import TargetTriple

OVERRIDE_VARS = [
    var
    for triple in TargetTriple
    for var in (triple.cargo_linker_var, triple.cc_linker_var)
]


class FakeProbe(ToolProbe):
    """Tool probe backed by fixed sets instead of PATH and rustup."""

    def __init__(
        self,
        commands: Iterable[str] = (),
        executables: Iterable[str] = (),
        targets: Iterable[str] = (),
    ) -> None:
        self.commands = set(commands)
        self.executables = set(executables)
        self.targets = set(targets)

    def command_exists(self, name: str) -> bool:
        return name in self.commands

    def is_executable_tool(self, tool: str) -> bool:
        return tool in self.commands or tool in self.executables

    def installed_targets(self) -> set[str]:
        return set(self.targets)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory that is cleaned up after the test.

    Yields:
        Path to the temporary directory.
    """
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def make_probe() -> Callable[..., FakeProbe]:
    """Factory for fake tool probes."""
    return FakeProbe


@pytest.fixture
def full_toolchain_probe() -> FakeProbe:
    """Probe where rustup, cargo, clang and both targets are present."""
    return FakeProbe(
        commands={"rustup", "cargo", "clang"},
        targets={t.value for t in TargetTriple},
    )


@pytest.fixture
def rust_only_probe() -> FakeProbe:
    """Probe with rustup, cargo and both targets but no clang."""
    return FakeProbe(
        commands={"rustup", "cargo"},
        targets={t.value for t in TargetTriple},
    )


@pytest.fixture
def project_root(temp_dir: Path) -> Path:
    """Empty project directory without a cargo config."""
    root = temp_dir / "project"
    root.mkdir()
    return root


@pytest.fixture
def write_cargo_config(project_root: Path) -> Callable[[str], Path]:
    """Write ``.cargo/config.toml`` in the project root."""

    def _write(content: str) -> Path:
        config_dir = project_root / ".cargo"
        config_dir.mkdir(exist_ok=True)
        path = config_dir / "config.toml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def settings(temp_dir: Path) -> Settings:
    """Settings independent of the caller's environment."""
    return Settings(
        logging=LoggingSettings(level="DEBUG", use_rich=False),
        check=CheckSettings(check_target_dir=temp_dir / "target"),
    )


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove Termux markers and linker overrides from os.environ."""
    for var in ["TERMUX_VERSION", "PREFIX", *OVERRIDE_VARS]:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
