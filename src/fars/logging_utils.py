"""
Structured logging utilities.

Every logger gets a console handler. When JSONL output is enabled (argument
or logging.jsonl in configs/params.yml), records are also written as JSON
lines to logs/<name>_<run_id>.jsonl.

Each JSONL entry includes:
- timestamp
- run_id (unique per process unless set explicitly)
- level
- event type and context, when logged through log_event()
"""

import json
import logging
import sys
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from fars.config import load_params
from fars.paths import paths, ensure_dir


# =============================================================================
# Run ID generation
# =============================================================================

def generate_run_id() -> str:
    """
    Generate a unique run ID.

    Format: YYYYMMDD_HHMMSS_<short_uuid>

    Returns:
        Unique run identifier string.
    """
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    short_uuid = uuid.uuid4().hex[:8]
    return f"{timestamp}_{short_uuid}"


# =============================================================================
# JSONL Handler
# =============================================================================

class JSONLHandler(logging.Handler):
    """
    A logging handler that writes structured JSON lines to a file.
    """

    def __init__(self, log_path: Path, run_id: str):
        super().__init__()
        self.log_path = log_path
        self.run_id = run_id
        self._file = None

    def _ensure_file(self):
        """Lazily open the log file."""
        if self._file is None:
            ensure_dir(self.log_path.parent)
            self._file = open(self.log_path, "a", encoding="utf-8")

    def emit(self, record: logging.LogRecord):
        """Write a log record as a JSON line."""
        try:
            self._ensure_file()

            log_entry = {
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "run_id": self.run_id,
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
            }

            if hasattr(record, "event_type"):
                log_entry["event_type"] = record.event_type
            if hasattr(record, "context"):
                log_entry["context"] = record.context

            if record.exc_info:
                log_entry["exception"] = self.format(record)

            self._file.write(json.dumps(log_entry, default=str) + "\n")
            self._file.flush()

        except Exception:
            self.handleError(record)

    def close(self):
        """Close the log file."""
        if self._file is not None:
            self._file.close()
            self._file = None
        super().close()


# =============================================================================
# Logger setup
# =============================================================================

_LOGGERS: dict[str, logging.Logger] = {}
_RUN_ID: str | None = None


def get_run_id() -> str:
    """Get the current run ID, generating one if needed."""
    global _RUN_ID
    if _RUN_ID is None:
        _RUN_ID = generate_run_id()
    return _RUN_ID


def set_run_id(run_id: str) -> None:
    """Set a specific run ID (useful for testing or continuation)."""
    global _RUN_ID
    _RUN_ID = run_id


def get_logger(
    name: str,
    console_level: int | str | None = None,
    jsonl: bool | None = None,
    log_dir: Path | str | None = None,
) -> logging.Logger:
    """
    Get or create a configured logger.

    Loggers are cached by name; the first call decides the handlers.

    Args:
        name: Logger name (e.g., "fars.reader").
        console_level: Level for console output. Defaults to
            logging.console_level from the params file.
        jsonl: Whether to add a JSONL file handler. Defaults to
            logging.jsonl from the params file.
        log_dir: Directory for JSONL files. Defaults to logs/ under the
            project root.

    Returns:
        Configured Logger instance.
    """
    if name in _LOGGERS:
        return _LOGGERS[name]

    params = load_params()["logging"]
    if console_level is None:
        console_level = params["console_level"]
    if isinstance(console_level, str):
        console_level = logging.getLevelName(console_level.upper())
    if jsonl is None:
        jsonl = bool(params["jsonl"])

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.handlers = []
    # Handlers are attached here; root handlers would print every line twice
    logger.propagate = False

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    if jsonl:
        run_id = get_run_id()
        log_dir = Path(log_dir) if log_dir is not None else paths.logs
        jsonl_handler = JSONLHandler(log_dir / f"{name}_{run_id}.jsonl", run_id)
        jsonl_handler.setLevel(logging.DEBUG)
        logger.addHandler(jsonl_handler)

    _LOGGERS[name] = logger
    return logger


def log_event(
    logger: logging.Logger,
    level: int,
    message: str,
    event_type: str,
    **context: Any
) -> None:
    """
    Log a structured event with type and context.

    Args:
        logger: Logger instance.
        level: Logging level (e.g., logging.INFO).
        message: Human-readable message.
        event_type: Event type for structured parsing.
        **context: Additional context key-value pairs.
    """
    logger.log(level, message, extra={
        "event_type": event_type,
        "context": context
    })


def log_step_start(logger: logging.Logger, step_name: str, **context: Any) -> None:
    """Log the start of a processing step."""
    log_event(logger, logging.DEBUG, f"Starting: {step_name}", "step_start",
              step_name=step_name, **context)


def log_step_end(logger: logging.Logger, step_name: str, **context: Any) -> None:
    """Log the end of a processing step."""
    log_event(logger, logging.DEBUG, f"Completed: {step_name}", "step_end",
              step_name=step_name, **context)


def log_qa_check(
    logger: logging.Logger,
    check_name: str,
    passed: bool,
    details: str | None = None,
    **context: Any
) -> None:
    """
    Log a QA check result.

    Failed checks are logged at WARNING level; the caller decides whether a
    failure is fatal.
    """
    status = "PASSED" if passed else "FAILED"
    level = logging.DEBUG if passed else logging.WARNING
    message = f"QA Check [{check_name}]: {status}"
    if details:
        message += f" - {details}"

    log_event(logger, level, message, "qa_check",
              check_name=check_name, passed=passed, details=details, **context)
