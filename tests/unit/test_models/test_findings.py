"""Tests for findings and the linker chain model."""

import pytest
from pydantic import ValidationError

from android_selfcheck.models.findings import Finding, FindingKind, FindingLog
from android_selfcheck.models.report import LinkerChain, RunReport, RunStatus


class TestFindingLog:
    """Test the append-only finding buffers."""

    def test_kinds_are_kept_apart_and_ordered(self) -> None:
        findings = FindingLog()
        findings.warn("w1")
        findings.suggest("s1", "s2")
        findings.detect("d1")
        findings.warn("w2")

        assert findings.warnings == ["w1", "w2"]
        assert findings.detections == ["d1"]
        assert findings.suggestions == ["s1", "s2"]
        assert len(findings) == 5
        assert [f.kind for f in findings][:3] == [
            FindingKind.WARNING,
            FindingKind.SUGGESTION,
            FindingKind.SUGGESTION,
        ]

    def test_findings_are_immutable(self) -> None:
        finding = Finding(kind=FindingKind.WARNING, message="x")
        with pytest.raises(ValidationError):
            finding.message = "y"

    def test_returned_lists_are_copies(self) -> None:
        findings = FindingLog()
        findings.warn("w1")
        findings.warnings.append("tampered")
        assert findings.warnings == ["w1"]


class TestLinkerChain:
    """Test effective linker precedence."""

    def test_fallback_when_nothing_set(self) -> None:
        assert LinkerChain().effective_linker == "clang"

    def test_configured_linker_used_without_override(self) -> None:
        chain = LinkerChain(config_linker="/opt/ndk/clang")
        assert chain.effective_linker == "/opt/ndk/clang"

    def test_environment_override_wins(self) -> None:
        chain = LinkerChain(
            config_linker="clang",
            cargo_linker_override="/ndk/aarch64-linux-android21-clang",
            cc_linker_override="/ndk/other",
        )
        assert chain.effective_linker == "/ndk/aarch64-linux-android21-clang"

    def test_effective_linker_is_serialized(self) -> None:
        data = LinkerChain(config_linker="clang").model_dump()
        assert data["effective_linker"] == "clang"


class TestRunReport:
    """Test report defaults."""

    def test_unset_fields_are_none(self) -> None:
        report = RunReport(status=RunStatus.ERROR, exit_code=1, error_message="boom")
        data = report.model_dump(mode="json")

        assert data["schema_version"] == "android-selfcheck.report.v1"
        assert data["target"] is None
        assert data["mode_effective"] is None
        assert data["config_linker"] is None
        assert data["warnings"] == []
        assert report.success is False
