"""Linker chain and run report models."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, computed_field

from android_selfcheck.models.target import (
    FALLBACK_LINKER,
    EnvironmentClass,
    TargetTriple,
    ValidationMode,
)

REPORT_SCHEMA_VERSION = "android-selfcheck.report.v1"


class RunStatus(str, Enum):
    """Overall outcome of a run."""

    OK = "ok"
    ERROR = "error"


class LinkerChain(BaseModel):
    """Linker sources for one target and the linker the build will use."""

    config_linker: str | None = Field(
        default=None,
        description="linker declared in [target.<triple>] of the cargo config",
    )
    cargo_linker_override: str | None = Field(
        default=None,
        description="Value of CARGO_TARGET_<TRIPLE>_LINKER",
    )
    cc_linker_override: str | None = Field(
        default=None,
        description="Value of CC_<triple>",
    )

    @computed_field
    @property
    def effective_linker(self) -> str:
        """Environment override, else configured linker, else plain clang."""
        return self.cargo_linker_override or self.config_linker or FALLBACK_LINKER


class RunReport(BaseModel):
    """Snapshot of one self-check invocation."""

    schema_version: str = REPORT_SCHEMA_VERSION
    timestamp_utc: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
    )
    status: RunStatus
    exit_code: int
    error_message: str | None = None
    target: TargetTriple | None = None
    mode_requested: ValidationMode | None = None
    mode_effective: ValidationMode | None = None
    environment: EnvironmentClass | None = None
    run_check: bool = False
    diagnose_log: str | None = None
    config_linker: str | None = None
    cargo_linker_override: str | None = None
    cc_linker_override: str | None = None
    effective_linker: str | None = None
    rules_version: str | None = None
    warnings: list[str] = Field(default_factory=list)
    detections: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status is RunStatus.OK
