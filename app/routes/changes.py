import json
import queue

from flask import Blueprint, Response, current_app, request, stream_with_context
from app.services.backend import change_feed, TABLES
from app.utils import ok, error
from app.version import API_PREFIX

changes_bp = Blueprint("changes", __name__, url_prefix=API_PREFIX)


@changes_bp.route("/changes", methods=["GET"])
def change_versions():
    return ok({"versions": change_feed.versions()})


@changes_bp.route("/changes/stream", methods=["GET"])
def change_stream():
    """Server-sent "changed" events; the client re-fetches on each one.

    The stream ends after ``timeout`` seconds without a change so proxies do
    not hold it forever; EventSource reconnects on its own.
    """
    requested = request.args.get("tables")
    tables = [t.strip() for t in requested.split(",") if t.strip()] if requested else list(TABLES)
    unknown = [t for t in tables if t not in TABLES]
    if unknown:
        return error(f"Unknown table: {', '.join(unknown)}", status=400)
    timeout = float(request.args.get("timeout", current_app.config.get("CHANGE_STREAM_TIMEOUT", 25)))

    events = queue.Queue()
    subscriptions = [change_feed.subscribe(t, events.put) for t in tables]

    def generate():
        try:
            yield ": connected\n\n"
            while True:
                try:
                    table = events.get(timeout=timeout)
                except queue.Empty:
                    yield ": timeout\n\n"
                    return
                data = json.dumps({"table": table, "versions": change_feed.versions()})
                yield f"event: changed\ndata: {data}\n\n"
        finally:
            for sub in subscriptions:
                sub.unsubscribe()

    return Response(
        stream_with_context(generate()),
        mimetype="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )
