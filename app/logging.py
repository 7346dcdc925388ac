import logging
import json
import os
import re
from typing import Any
from opentelemetry.trace import get_current_span


SENSITIVE_KEYS = {"password", "token", "secret", "secret_key", "api_key", "database_url"}
REDACTED = "[REDACTED]"
NOT_SET = "n/a"

# user:password@ inside connection strings
_DSN_PASSWORD = re.compile(r"(?P<scheme>[a-z][a-z0-9+.-]*://[^:/@\s]+):[^@\s]+@", re.I)

# Context attributes every record carries, plus optional domain extras.
CONTEXT_FIELDS = ("request_id", "trace_id", "span_id")
EXTRA_FIELDS = ("table", "scope", "product_id", "shop_id")

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s"


def stamp_context(record: logging.LogRecord) -> logging.LogRecord:
    record.request_id = _request_id()
    record.trace_id, record.span_id = _trace_ids()
    return record


class ContextFilter(logging.Filter):
    """Stamp request and trace ids onto records reaching our handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        stamp_context(record)
        return True


def _install_record_factory() -> None:
    # Records that only reach foreign handlers (e.g. pytest caplog) still get ids.
    base = logging.getLogRecordFactory()
    if getattr(base, "stamps_context", False):
        return

    def factory(*args, **kwargs):
        return stamp_context(base(*args, **kwargs))

    factory.stamps_context = True
    logging.setLogRecordFactory(factory)


def _request_id() -> str:
    from flask import g, has_app_context
    if not has_app_context():
        return NOT_SET
    return getattr(g, "request_id", None) or NOT_SET


def _trace_ids():
    ctx = get_current_span().get_span_context()
    if not ctx.is_valid:
        return NOT_SET, NOT_SET
    return format(ctx.trace_id, "032x"), format(ctx.span_id, "016x")


def mask(value: Any) -> Any:
    """Redact sensitive keys at any depth and passwords inside DSNs."""
    if isinstance(value, dict):
        return {
            k: (REDACTED if str(k).lower() in SENSITIVE_KEYS else mask(v))
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return type(value)(mask(v) for v in value)
    if isinstance(value, str):
        return _DSN_PASSWORD.sub(rf"\g<scheme>:{REDACTED}@", value)
    return value


class MaskingFilter(logging.Filter):
    """Mask dict payloads, except DEBUG records outside production."""

    def filter(self, record: logging.LogRecord) -> bool:
        production = os.getenv("APP_ENV", "development").lower() == "production"
        if record.levelno == logging.DEBUG and not production:
            return True
        if isinstance(record.msg, dict):
            record.msg = mask(record.msg)
        if isinstance(record.args, dict):
            record.args = mask(record.args)
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        doc = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
        }
        for field in CONTEXT_FIELDS:
            doc[field] = getattr(record, field, NOT_SET)
        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                doc[field] = getattr(record, field)
        if isinstance(record.msg, dict):
            doc.update(record.msg)
        else:
            doc["message"] = record.getMessage()
        if record.exc_info:
            doc["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(doc, default=str)


def _formatter():
    datefmt = "%Y-%m-%dT%H:%M:%S%z"
    if os.getenv("LOG_FORMAT", "json").lower() == "text":
        return logging.Formatter(TEXT_FORMAT, datefmt=datefmt)
    return JsonFormatter(datefmt=datefmt)


def _level(app) -> int:
    name = os.getenv("LOG_LEVEL")
    if name:
        return getattr(logging, name.upper(), logging.INFO)
    return logging.DEBUG if app.config.get("DEBUG") else logging.INFO


def configure_logging(app) -> None:
    """Route app, root and werkzeug logs through one masked, context-aware handler.

    ``LOG_FORMAT=text`` switches from JSON lines to a plain format for local
    work; ``SQL_ECHO`` turns on SQLAlchemy statement logging.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(_formatter())
    handler.addFilter(ContextFilter())
    handler.addFilter(MaskingFilter())
    level = _level(app)
    _install_record_factory()

    app.logger.handlers.clear()
    app.logger.addHandler(handler)
    app.logger.setLevel(level)

    root = logging.getLogger()
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        root.addHandler(handler)
    root.setLevel(level)

    werkzeug = logging.getLogger("werkzeug")
    werkzeug.handlers.clear()
    werkzeug.addHandler(handler)
    werkzeug.setLevel(level)

    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if os.getenv("SQL_ECHO") else logging.WARNING
    )
