"""
Structured logging for the clustering pipeline.

Produces both console output and rotating JSON log files.
Every build/classification/error event gets a structured record.
"""

import logging
import logging.handlers
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from taxocluster.config.settings import LOG_DIR

ROOT_LOGGER = "taxocluster"


class JSONFormatter(logging.Formatter):
    """Emit structured JSON log lines for machine consumption."""

    EXTRA_FIELDS = (
        "document_index", "category", "detail", "keyword", "token",
        "phase", "duration_ms", "error_type", "path",
    )

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "thread": record.threadName,
        }
        if record.exc_info and record.exc_info[0]:
            log_entry["exception"] = self.formatException(record.exc_info)
        for key in self.EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                log_entry[key] = val
        return json.dumps(log_entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Concise colored output for humans."""

    COLORS = {
        "DEBUG": "\033[90m",    # gray
        "INFO": "\033[36m",     # cyan
        "WARNING": "\033[33m",  # yellow
        "ERROR": "\033[31m",    # red
        "CRITICAL": "\033[41m", # red background
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        ts = datetime.now().strftime("%H:%M:%S")
        prefix = f"{color}[{ts}] {record.levelname:<8}{self.RESET}"
        doc = getattr(record, "document_index", None)
        doc_str = f" [doc {doc}]" if doc is not None else ""
        return f"{prefix}{doc_str} {record.getMessage()}"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None,
                  log_dir: Optional[Path] = None) -> None:
    """
    Initialize the logging system.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Override log file name. Defaults to cluster_YYYYMMDD.jsonl
        log_dir: Override log directory. Defaults to data/logs
    """
    log_dir = log_dir or LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()

    # ── Console handler ────────────────────────────────────────────────
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(root.level)
    console.setFormatter(ConsoleFormatter())
    root.addHandler(console)

    # ── Rotating JSON file handler ─────────────────────────────────────
    if log_file is None:
        log_file = f"cluster_{datetime.now().strftime('%Y%m%d')}.jsonl"
    file_path = log_dir / log_file

    file_handler = logging.handlers.RotatingFileHandler(
        file_path, maxBytes=50 * 1024 * 1024, backupCount=10,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(JSONFormatter())
    root.addHandler(file_handler)

    root.info("Logging initialized", extra={"phase": "startup"})


def get_logger(name: str) -> logging.Logger:
    """Get a child logger under the taxocluster namespace."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
