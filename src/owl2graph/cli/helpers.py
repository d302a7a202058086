"""
CLI helper utilities.

Logging for a loader run is configured from the ``logging`` section of the
loader config, after ``--log-level``/``--log-file`` have been merged into it:

    {"level": "INFO", "file": "logs/owl2graph.log", "format": "json",
     "rotation": {"enabled": true, "max_mb": 10, "backup_count": 5}}

Each setup replaces the handlers installed by the previous one, so repeated
runs in one process do not stack output. The report printed at the end of a
run is framed by ``print_header``/``print_footer``.
"""

import json
import logging
import sys
import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from ..constants import LoggingConfig

DEFAULT_LOG_FILENAME = "owl2graph.log"

logger = logging.getLogger(__name__)

_installed: List[logging.Handler] = []


class JSONFormatter(logging.Formatter):
    """One JSON object per record: time, level, logger, message and source line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
                LoggingConfig.JSON_DATE_FORMAT
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "source": f"{record.module}:{record.lineno}",
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _positive(value: Any, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return default
    return value


@dataclass(frozen=True)
class LogSettings:
    """The ``logging`` config section with defaults applied."""
    level: int = logging.INFO
    file: Optional[str] = None
    structured: bool = False
    rotate: bool = LoggingConfig.ROTATION_ENABLED
    max_bytes: int = LoggingConfig.MAX_LOG_FILE_MB * 1024 * 1024
    backup_count: int = LoggingConfig.LOG_BACKUP_COUNT

    @classmethod
    def from_dict(cls, section: Optional[Mapping[str, Any]] = None) -> "LogSettings":
        """Unknown levels fall back to INFO, unknown formats to text."""
        section = section or {}
        level = logging.getLevelName(str(section.get('level') or LoggingConfig.DEFAULT_LOG_LEVEL).upper())
        rotation = section.get('rotation')
        if not isinstance(rotation, Mapping):
            rotation = {}
        return cls(
            level=level if isinstance(level, int) else logging.INFO,
            file=section.get('file') or None,
            structured=str(section.get('format', LoggingConfig.DEFAULT_FORMAT_STYLE)).lower() == "json",
            rotate=bool(rotation.get('enabled', LoggingConfig.ROTATION_ENABLED)),
            max_bytes=_positive(rotation.get('max_mb'), LoggingConfig.MAX_LOG_FILE_MB) * 1024 * 1024,
            backup_count=_positive(rotation.get('backup_count'), LoggingConfig.LOG_BACKUP_COUNT),
        )

    def formatter(self) -> logging.Formatter:
        if self.structured:
            return JSONFormatter()
        return logging.Formatter(LoggingConfig.LOG_FORMAT, LoggingConfig.DATE_FORMAT)


def _log_file_candidates(requested: str) -> Iterator[Path]:
    """The requested path, then the same file name in the temp and home directories."""
    path = Path(requested)
    name = path.name or DEFAULT_LOG_FILENAME
    yield path
    yield Path(tempfile.gettempdir()) / name
    yield Path.home() / name


def _open_log_file(settings: LogSettings) -> Optional[Tuple[logging.Handler, str]]:
    for attempt, candidate in enumerate(_log_file_candidates(settings.file)):
        try:
            candidate.parent.mkdir(parents=True, exist_ok=True)
            if settings.rotate:
                handler: logging.Handler = RotatingFileHandler(
                    candidate,
                    maxBytes=settings.max_bytes,
                    backupCount=settings.backup_count,
                    encoding='utf-8',
                )
            else:
                handler = logging.FileHandler(candidate, encoding='utf-8')
        except OSError as e:
            print(f"  Could not create log at {candidate}: {e}")
            continue
        if attempt:
            print(f"Note: Using fallback log file: {candidate}")
        return handler, str(candidate)

    print(f"Warning: Could not write log file {settings.file} anywhere; logging to console only")
    return None


def reset_logging() -> None:
    """Remove and close the handlers installed by the last ``setup_logging`` call."""
    root = logging.getLogger()
    while _installed:
        handler = _installed.pop()
        root.removeHandler(handler)
        handler.close()


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    *,
    config: Optional[Mapping[str, Any]] = None,
) -> Optional[str]:
    """
    Configure root logging for a loader run.

    Args:
        level: Overrides ``config['level']``.
        log_file: Overrides ``config['file']``.
        config: The ``logging`` section of the loader config.

    Returns:
        Path of the log file in use, or None when logging to the console only.
    """
    section = dict(config or {})
    if level:
        section['level'] = level
    if log_file:
        section['file'] = log_file
    settings = LogSettings.from_dict(section)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    log_path = None
    if settings.file:
        opened = _open_log_file(settings)
        if opened is not None:
            file_handler, log_path = opened
            handlers.append(file_handler)

    reset_logging()
    root = logging.getLogger()
    root.setLevel(settings.level)
    formatter = settings.formatter()
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
        _installed.append(handler)
    logging.captureWarnings(True)

    if log_path:
        logger.info(f"Logging to: {log_path}")
    return log_path


def print_header(title: str, width: int = 60) -> None:
    print("\n" + "=" * width)
    print(title)
    print("=" * width)


def print_footer(width: int = 60) -> None:
    print("=" * width + "\n")
