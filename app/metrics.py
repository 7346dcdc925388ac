from flask import request
from prometheus_client import Histogram, Counter
from sqlalchemy import event
import time

from models import db

# Histogram buckets for DB query durations
DB_QUERY_DURATION = Histogram(
    "db_query_duration_seconds",
    "Database query duration in seconds",
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2, 5),
)

# Counter for HTTP errors
ERROR_COUNTER = Counter(
    "flask_error_total",
    "Count of HTTP responses with status >= 400",
    ["endpoint", "method", "code"],
)

CART_ADDITIONS = Counter(
    "cart_additions_total",
    "Add-to-list actions by outcome",
    ["result"],
)

PURCHASED_ITEMS = Counter(
    "purchased_items_total",
    "Cart rows reconciled into stock by purchase confirmation",
)


def init_app(app):
    """Attach metric hooks to the app and database."""

    with app.app_context():
        engine = db.engine

        if not event.contains(engine, "before_cursor_execute", before_cursor_execute):
            event.listen(engine, "before_cursor_execute", before_cursor_execute)
            event.listen(engine, "after_cursor_execute", after_cursor_execute)

    @app.after_request
    def track_errors(resp):
        if resp.status_code >= 400:
            endpoint = request.endpoint or "unknown"
            ERROR_COUNTER.labels(endpoint, request.method, resp.status_code).inc()
        return resp


def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    conn.info.setdefault("_query_start_time", []).append(time.time())


def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    starts = conn.info.get("_query_start_time")
    if starts:
        DB_QUERY_DURATION.observe(time.time() - starts.pop(-1))
