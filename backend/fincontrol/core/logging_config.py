"""
Centralized logging configuration for the Financial Control Dashboard.

This module provides structured logging with:
- JSON formatting for production
- Console formatting for development
- SQLAlchemy query timing
- Request/response logging
- Log rotation

Usage:
    from fincontrol.core.logging_config import setup_logging, get_logger

    # In main.py
    setup_logging(app, log_level="INFO", enable_sql_echo=True)

    # In any module
    logger = get_logger(__name__)
    logger.info("Invoice created", extra={"context": {"invoice_id": "..."}})
"""

import json
import logging
import logging.handlers
import sys
import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from flask import Flask, g, request
from flask_login import current_user
from sqlalchemy import event
from sqlalchemy.engine import Engine


class JSONFormatter(logging.Formatter):
    """
    Custom JSON formatter for structured logging.
    Outputs logs as JSON with timestamp, level, message, and extra context.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "context"):
            log_data["context"] = getattr(record, "context", {})

        return json.dumps(log_data, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """
    Human-readable console formatter with colors for development.
    """

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Format a copy so other handlers still see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{color}{record.levelname:8}{self.RESET}"
        return super().format(record)


def _add_file_handler(
    root_logger: logging.Logger,
    console_handler: logging.Handler,
    path: Path,
    level: int,
) -> None:
    try:
        handler = logging.handlers.RotatingFileHandler(
            path,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(JSONFormatter())
        root_logger.addHandler(handler)
    except Exception as e:
        # Disk full, read-only filesystem, etc. Keep going with console only.
        console_handler.handle(
            logging.LogRecord(
                name="fincontrol.logging",
                level=logging.WARNING,
                pathname=__file__,
                lineno=0,
                msg=f"Failed to create file handler for {path.name}: {e}. "
                "Falling back to console-only logging.",
                args=(),
                exc_info=None,
            )
        )


def setup_logging(
    app: Optional[Flask] = None,
    log_level: Union[int, str] = "INFO",
    enable_sql_echo: bool = False,
    log_to_file: bool = True,
    use_json_format: bool = False,
    log_dir: Optional[Path] = None,
) -> None:
    """
    Configure logging for the Flask application.

    Args:
        app: Flask application instance (required for request/response hooks)
        log_level: Logging level (can be int like logging.INFO or string "INFO")
        enable_sql_echo: Enable SQLAlchemy query timing logs
        log_to_file: Write logs to rotating files
        use_json_format: Use JSON format instead of console format
        log_dir: Directory for log files (defaults to ``<backend>/logs``)
    """
    if isinstance(log_level, int):
        level = log_level
    else:
        level = getattr(logging, str(log_level).upper(), logging.INFO)

    log_dir = log_dir or Path(__file__).parent.parent.parent / "logs"
    early_warnings = []
    if log_to_file:
        try:
            log_dir.mkdir(exist_ok=True)
        except Exception as e:
            early_warnings.append(
                f"Failed to create logs directory: {e}. Logging will only go to console."
            )
            log_to_file = False

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    if use_json_format:
        console_formatter: logging.Formatter = JSONFormatter()
    else:
        console_formatter = ConsoleFormatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    for msg in early_warnings:
        root_logger.warning(msg, extra={"context": {"component": "logging_setup"}})

    if log_to_file:
        _add_file_handler(root_logger, console_handler, log_dir / "app.log", level)
        _add_file_handler(
            root_logger,
            console_handler,
            log_dir / "fincontrol_errors.log",
            logging.ERROR,
        )

    if enable_sql_echo:
        sql_logger = logging.getLogger("sqlalchemy.engine")
        sql_logger.setLevel(logging.INFO)
        sql_logger.propagate = True

        if not event.contains(Engine, "before_cursor_execute", _before_cursor_execute):
            event.listen(Engine, "before_cursor_execute", _before_cursor_execute)
            event.listen(Engine, "after_cursor_execute", _after_cursor_execute)

    if app is not None:
        _register_request_hooks(app)

    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)

    app_logger = logging.getLogger("fincontrol")
    app_logger.setLevel(level)
    app_logger.info(
        f"Logging configured: level={level}, sql_echo={enable_sql_echo}, "
        f"log_to_file={log_to_file}, json_format={use_json_format}"
    )


def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    conn.info.setdefault("query_start_time", []).append(time.time())


def _after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    starts = conn.info.get("query_start_time")
    if not starts:
        return
    total_time = time.time() - starts.pop(-1)
    # Parameters are deliberately left out: they carry password hashes
    logging.getLogger("sqlalchemy.performance").info(
        f"Query executed in {total_time * 1000:.2f}ms",
        extra={
            "context": {
                "sql_query": statement[:500],
                "sql_duration_ms": round(total_time * 1000, 2),
            }
        },
    )


def _register_request_hooks(app: Flask) -> None:
    @app.before_request
    def log_request():
        g.request_start_time = time.time()
        g.request_id = uuid.uuid4().hex
        g.route = request.url_rule.rule if request.url_rule is not None else request.path
        g.user_id = None
        if current_user and current_user.is_authenticated:
            g.user_id = getattr(current_user, "id", None)

        logging.getLogger("flask.request").info(
            f"{request.method} {request.path}",
            extra={
                "context": {
                    "request_id": g.request_id,
                    "method": request.method,
                    "path": request.path,
                    "route": g.route,
                    "user_id": g.user_id,
                    "remote_addr": request.remote_addr,
                }
            },
        )

    @app.after_request
    def log_response(response):
        if hasattr(g, "request_start_time"):
            duration_ms = (time.time() - g.request_start_time) * 1000
            logging.getLogger("flask.response").info(
                f"{request.method} {request.path} {response.status_code} in {duration_ms:.2f}ms",
                extra={
                    "context": {
                        "request_id": g.get("request_id"),
                        "method": request.method,
                        "path": request.path,
                        "status_code": response.status_code,
                        "duration_ms": round(duration_ms, 2),
                    }
                },
            )
        return response


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    Example:
        logger = get_logger(__name__)
        logger.info("Customer deleted", extra={"context": {"customer_id": "..."}})
    """
    return logging.getLogger(name)
