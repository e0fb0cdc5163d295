"""Serialization of run reports."""

import json
import os
import tempfile
from pathlib import Path

import yaml

from android_selfcheck.core.logger.logger import get_logger
from android_selfcheck.models.report import RunReport

logger = get_logger(__name__)

REPORT_FORMATS = ("json", "yaml")


def render_report(report: RunReport, output_format: str = "json") -> str:
    """Render a report as JSON or YAML text.

    Unset fields are rendered as null rather than omitted.
    """
    data = report.model_dump(mode="json")
    if output_format == "json":
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    if output_format == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    raise ValueError(f"Unsupported report format: {output_format}")


def write_report(report: RunReport, path: Path, output_format: str = "json") -> Path:
    """Write a report atomically.

    The text is written to a sibling temporary file which then replaces
    ``path``, so readers never observe a partial report.

    Args:
        report: Report to write.
        path: Destination file.
        output_format: "json" or "yaml".

    Returns:
        The destination path.
    """
    content = render_report(report, output_format)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info(f"report written to {path}")
    return path
