"""
Logging configuration — step-tagged output for installs.

``setup_logging`` is called once by main.py.  Every record from the
formula service is tagged with the install step that emitted it
(resolve, locate, fetch, verify, extract, place, smoke-test), so a
failed run reads as a sequence of steps rather than module paths.

Levels, highest precedence first:
    -v / -q / --debug  >  TOLI_FORMULA_LOG_LEVEL  >  WARNING

TOLI_FORMULA_LOG_FILE adds a full-detail file log at
TOLI_FORMULA_LOG_FILE_LEVEL (defaults to the console level).
"""

from __future__ import annotations

import logging
import sys

# Module → step.  Checksum helpers share a module with the fetcher,
# so they are matched on function name first.
_STEP_BY_FUNC: dict[str, str] = {
    "verify_checksum": "verify",
    "compute_sha256": "verify",
}
_STEP_BY_MODULE: dict[str, str] = {
    "platform_resolution": "resolve",
    "host": "resolve",
    "artifact_location": "locate",
    "download": "fetch",
    "archive": "extract",
    "placement": "place",
    "installer": "install",
    "orchestrator": "install",
    "tool_version": "smoke-test",
}

_CONSOLE_FORMATS: dict[int, tuple[str, str | None]] = {
    logging.DEBUG: (
        "%(asctime)s %(levelname)-5s %(step_tag)s%(name)s:%(lineno)d  %(message)s",
        "%H:%M:%S",
    ),
    logging.INFO: ("%(asctime)s %(step_tag)s%(message)s", "%H:%M:%S"),
    logging.WARNING: ("%(step_tag)s%(message)s", None),
}

_FMT_FILE = "%(asctime)s %(levelname)-5s %(step_tag)s%(name)s:%(lineno)d  %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


class StepFilter(logging.Filter):
    """Set ``record.step`` / ``record.step_tag`` from where the record came from."""

    def filter(self, record: logging.LogRecord) -> bool:
        step = getattr(record, "step", None) or step_for(record)
        record.step = step
        record.step_tag = f"[{step}] " if step else ""
        return True


def step_for(record: logging.LogRecord) -> str:
    """Install step for a record, or ``""`` outside the formula service."""
    if ".services.formula." not in record.name:
        return ""
    if record.funcName in _STEP_BY_FUNC:
        return _STEP_BY_FUNC[record.funcName]
    return _STEP_BY_MODULE.get(record.name.rsplit(".", 1)[-1], "")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Replace the root handlers with a step-tagged console handler.

    Args:
        level: Console level name.
        log_file: Optional path for a full-detail log.
        log_file_level: Level for ``log_file``; defaults to ``level``.
    """
    numeric_level = _parse_level(level)
    step_filter = StepFilter()

    if numeric_level <= logging.DEBUG:
        fmt, datefmt = _CONSOLE_FORMATS[logging.DEBUG]
    elif numeric_level <= logging.INFO:
        fmt, datefmt = _CONSOLE_FORMATS[logging.INFO]
    else:
        fmt, datefmt = _CONSOLE_FORMATS[logging.WARNING]

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    console.addFilter(step_filter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    effective_level = numeric_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        fh.addFilter(step_filter)
        root.addHandler(fh)

    root.setLevel(effective_level)

    # A closed stderr (e.g. under CliRunner) must not break an install.
    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Level name → numeric level; unknown names fall back to WARNING."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
