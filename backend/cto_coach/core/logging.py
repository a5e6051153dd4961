"""Structured logging configuration using structlog."""

import logging
import re
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

import structlog
from typing_extensions import override

ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")

# PII patterns masked in request summaries
PII_PATTERNS = {
    "api_key": re.compile(r"\b(?:sk-|AIza|AKIA|ghp_)[A-Za-z0-9_-]{16,}\b"),
    "email": re.compile(r"\b[A-Za-z0-9._%+-]+@([A-Za-z0-9.-]+\.[A-Za-z]{2,})\b"),
    "phone": re.compile(r"\b\d{3}[-.]?\d{3}[-.]?\d{4}\b"),
}

MAX_LOGGED_TEXT = 300


def strip_ansi(text: str) -> str:
    """Remove ANSI escape codes from text."""
    return ANSI_ESCAPE.sub("", text)


def mask_pii(text: str) -> tuple[str, list[str]]:
    """Mask emails, phone numbers and API keys.

    Emails keep their domain, phone numbers their last four digits.

    Returns:
        (masked_text, detected_types)
    """
    detected: list[str] = []

    def _replace(pii_type: str):
        def _sub(match: re.Match[str]) -> str:
            detected.append(pii_type)
            original = match.group()
            if pii_type == "email":
                return f"***@{match.group(1)}"
            if pii_type == "phone":
                return f"***{original[-4:]}"
            return "***"

        return _sub

    masked = text
    for pii_type, pattern in PII_PATTERNS.items():
        masked = pattern.sub(_replace(pii_type), masked)
    return masked, detected


class CleanFileHandler(logging.Handler):
    """File handler that writes plain logs without ANSI codes.

    Rotates by renaming the file with a timestamp suffix once it grows past
    ``max_size_mb``.
    """

    def __init__(self, filepath: Path, max_size_mb: int = 10):
        super().__init__()
        self.filepath = filepath
        self.max_size = max_size_mb * 1024 * 1024

    @override
    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = strip_ansi(self.format(record))
            with open(self.filepath, "a", encoding="utf-8") as f:
                f.write(msg + "\n")

            if self.filepath.stat().st_size > self.max_size:
                self._rotate()
        except Exception:
            self.handleError(record)

    def _rotate(self) -> None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        if self.filepath.exists():
            self.filepath.rename(self.filepath.with_suffix(f".{timestamp}.log"))


FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def _add_file_handler(
    target: logging.Logger,
    path: Path,
    max_size_mb: int,
    level: int = logging.NOTSET,
    fmt: str = FILE_FORMAT,
) -> None:
    handler = CleanFileHandler(path, max_size_mb=max_size_mb)
    handler.setFormatter(logging.Formatter(fmt, datefmt="%Y-%m-%d %H:%M:%S"))
    handler.setLevel(level)
    target.addHandler(handler)


def setup_logging(
    log_level: str = "INFO",
    json_format: bool = False,
    log_to_file: bool = False,
    log_dir: str | Path = "logs",
) -> None:
    """Configure structured logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_format: If True, output JSON; otherwise console-friendly output
        log_to_file: If True, also write app, error and request logs to ``log_dir``
        log_dir: Directory for log files
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    if log_to_file:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        _add_file_handler(root_logger, directory / "app.log", 10)
        _add_file_handler(root_logger, directory / "error.log", 5, level=logging.ERROR)

        # Chat turn summaries go to their own file only
        request_logger = logging.getLogger("request")
        request_logger.handlers.clear()
        request_logger.setLevel(logging.INFO)
        request_logger.propagate = False
        _add_file_handler(request_logger, directory / "request.log", 20, fmt="%(asctime)s | %(message)s")

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors_list = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors_list = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors_list,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a configured logger instance."""
    return structlog.get_logger(name)


def _truncate(text: str) -> str:
    return text[:MAX_LOGGED_TEXT] + "..." if len(text) > MAX_LOGGED_TEXT else text


def log_request(
    method: str,
    path: str,
    session_id: str | None = None,
    user_message: str | None = None,
    document_count: int | None = None,
    duration_ms: float | None = None,
    status: str = "success",
    error: str | None = None,
) -> str:
    """Write a one-line summary of a chat turn to the ``request`` logger.

    User text and error messages are truncated and PII-masked.

    Returns:
        The line that was logged.
    """
    parts = [f"[{method}] {path}"]

    if session_id:
        parts.append(f"session={session_id[:8]}...")

    if user_message:
        masked, detected = mask_pii(_truncate(user_message))
        parts.append(f"| INPUT: {masked}")
        if detected:
            parts.append(f"| PII: {','.join(sorted(set(detected)))}")

    if document_count is not None:
        parts.append(f"| DOCS: {document_count}")

    if duration_ms is not None:
        parts.append(f"| {duration_ms:.0f}ms")

    parts.append(f"| {status.upper()}")

    if error:
        masked_error, _ = mask_pii(_truncate(error))
        parts.append(f"| ERROR: {masked_error}")

    line = " ".join(parts)
    logging.getLogger("request").info(line)
    return line
