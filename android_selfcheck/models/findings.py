"""Findings accumulated during one self-check run."""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from android_selfcheck.core.logger.logger import get_logger

logger = get_logger(__name__)


class FindingKind(str, Enum):
    """Kinds of findings recorded during a run."""

    WARNING = "warning"  # configuration looks wrong but is not fatal
    DETECTION = "detection"  # a known failure signature matched a log
    SUGGESTION = "suggestion"  # remediation step, ordered


class Finding(BaseModel):
    """A single recorded finding."""

    model_config = ConfigDict(frozen=True)

    kind: FindingKind
    message: str


class FindingLog:
    """Append-only finding buffers owned by a single run.

    Every component receives the same instance; findings are logged at the
    moment they are recorded and are never modified afterwards.
    """

    def __init__(self) -> None:
        self._findings: list[Finding] = []

    def warn(self, message: str) -> None:
        logger.warning(message)
        self._findings.append(Finding(kind=FindingKind.WARNING, message=message))

    def detect(self, message: str) -> None:
        logger.warning(message)
        self._findings.append(Finding(kind=FindingKind.DETECTION, message=message))

    def suggest(self, *messages: str) -> None:
        for message in messages:
            logger.info(message)
            self._findings.append(Finding(kind=FindingKind.SUGGESTION, message=message))

    def of_kind(self, kind: FindingKind) -> list[str]:
        return [f.message for f in self._findings if f.kind is kind]

    @property
    def warnings(self) -> list[str]:
        return self.of_kind(FindingKind.WARNING)

    @property
    def detections(self) -> list[str]:
        return self.of_kind(FindingKind.DETECTION)

    @property
    def suggestions(self) -> list[str]:
        return self.of_kind(FindingKind.SUGGESTION)

    def __iter__(self):
        return iter(list(self._findings))

    def __len__(self) -> int:
        return len(self._findings)
