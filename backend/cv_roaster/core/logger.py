"""Service logger. Level and output format come from Settings (LOG_LEVEL, LOG_FORMAT).

Every line carries the request id of the request being served, or "-"
outside a request.
"""

import json
import logging
import sys
from datetime import datetime, timezone

from cv_roaster.config import Settings, load_settings
from cv_roaster.core.constants import SERVICE_NAME
from cv_roaster.middleware import request_id_var

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[41m",
}
RESET = "\033[0m"


def _with_traceback(formatter: logging.Formatter, record: logging.LogRecord, text: str) -> str:
    if record.exc_info and record.exc_info[0] is not None:
        return f"{text}\n{formatter.formatException(record.exc_info)}"
    return text


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": SERVICE_NAME,
            "logger": record.name,
            "request_id": request_id_var.get("-"),
            "message": record.getMessage(),
            "source": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


class ConsoleFormatter(logging.Formatter):
    """Coloured single-line output for local development."""

    def format(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelname, RESET)
        clock = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        text = (
            f"{color}{clock} {record.levelname:<8}{RESET} "
            f"[{request_id_var.get('-')}] {record.name}: {record.getMessage()}"
        )
        return _with_traceback(self, record, text)


def build_formatter(log_format: str) -> logging.Formatter:
    if log_format.strip().lower() == "json":
        return JSONFormatter()
    return ConsoleFormatter()


def setup_logger(name: str = SERVICE_NAME, settings: Settings | None = None) -> logging.Logger:
    """Configure `name` once from settings and return it.

    A logger that already has handlers only gets its level refreshed.
    """
    settings = settings or load_settings()
    configured = logging.getLogger(name)
    configured.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    if not configured.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(build_formatter(settings.log_format))
        configured.addHandler(handler)

    return configured


logger = setup_logger()
