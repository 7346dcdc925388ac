"""Shared handle over the three tables plus the per-table change feed.

Screens never talk to SQLAlchemy directly for reads; they go through
``backend`` so a single process-wide object owns selects, mutations and
change subscriptions. Change events carry only the table name; subscribers
are expected to re-fetch.
"""
import logging
import threading
from typing import Callable, Dict, Iterable, List

from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models import db
from models.shop import Shop
from models.product import Product
from models.cart import CartItem

logger = logging.getLogger(__name__)

TABLES = {
    Shop.__tablename__: Shop,
    Product.__tablename__: Product,
    CartItem.__tablename__: CartItem,
}

_PENDING_KEY = "_changed_tables"


class BackendError(Exception):
    """A select/insert/update/delete was rejected by the database."""


class Subscription:
    def __init__(self, feed, table, callback):
        self._feed = feed
        self.table = table
        self.callback = callback
        self.active = True

    def unsubscribe(self):
        if self.active:
            self._feed._remove(self)
            self.active = False


class ChangeFeed:
    """Per-table "something changed" notifications with version counters."""

    def __init__(self):
        self._lock = threading.Lock()
        self._subscribers: Dict[str, List[Subscription]] = {}
        self._versions: Dict[str, int] = {name: 0 for name in TABLES}

    def subscribe(self, table: str, callback: Callable[[str], None]) -> Subscription:
        if table not in TABLES:
            raise KeyError(f"Unknown table: {table}")
        sub = Subscription(self, table, callback)
        with self._lock:
            self._subscribers.setdefault(table, []).append(sub)
        return sub

    def _remove(self, sub: Subscription):
        with self._lock:
            subs = self._subscribers.get(sub.table, [])
            if sub in subs:
                subs.remove(sub)

    def publish(self, table: str):
        with self._lock:
            self._versions[table] = self._versions.get(table, 0) + 1
            subs = list(self._subscribers.get(table, []))
        for sub in subs:
            try:
                sub.callback(table)
            except Exception:
                logger.exception("Change subscriber for %s failed", table)

    def publish_pending(self, session):
        tables = session.info.pop(_PENDING_KEY, set())
        for table in sorted(tables):
            self.publish(table)

    def versions(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._versions)

    def subscriber_count(self, table: str) -> int:
        with self._lock:
            return len(self._subscribers.get(table, []))


change_feed = ChangeFeed()


@event.listens_for(Session, "after_flush")
def _collect_changed_tables(session, flush_context):
    touched = session.info.setdefault(_PENDING_KEY, set())
    for obj in list(session.new) + list(session.dirty) + list(session.deleted):
        table = getattr(obj, "__tablename__", None)
        if table in TABLES:
            touched.add(table)


@event.listens_for(Session, "after_soft_rollback")
def _discard_changed_tables(session, previous_transaction):
    session.info.pop(_PENDING_KEY, None)


class BackendClient:
    """Generic row access used by the screens."""

    def __init__(self, database, feed: ChangeFeed):
        self.db = database
        self.feed = feed

    def _model(self, table: str):
        try:
            return TABLES[table]
        except KeyError:
            raise KeyError(f"Unknown table: {table}")

    def select(self, table: str, order_by: str = "id", **filters) -> list:
        model = self._model(table)
        query = model.query.filter_by(**filters)
        if order_by:
            descending = order_by.startswith("-")
            column = getattr(model, order_by.lstrip("-"))
            query = query.order_by(column.desc() if descending else column.asc())
        return query.all()

    def get(self, table: str, row_id):
        return self.db.session.get(self._model(table), row_id)

    def insert(self, table: str, values: dict):
        row = self._model(table)(**values)
        self.db.session.add(row)
        self._commit(f"insert into {table} failed")
        return row

    def update(self, table: str, row_id, values: dict):
        row = self.get(table, row_id)
        if row is None:
            return None
        for key, value in values.items():
            setattr(row, key, value)
        self._commit(f"update of {table} failed")
        return row

    def delete(self, table: str, row_ids: Iterable) -> int:
        model = self._model(table)
        ids = list(row_ids)
        if not ids:
            return 0
        rows = model.query.filter(model.id.in_(ids)).all()
        for row in rows:
            self.db.session.delete(row)
        self._commit(f"delete from {table} failed")
        return len(rows)

    def subscribe(self, table: str, callback: Callable[[str], None]) -> Subscription:
        return self.feed.subscribe(table, callback)

    def _commit(self, message: str):
        try:
            self.db.session.commit()
        except SQLAlchemyError as e:
            self.db.session.rollback()
            logger.error("%s: %s", message, e)
            raise BackendError(f"{message}: {e}") from e
        self.feed.publish_pending(self.db.session)


backend = BackendClient(db, change_feed)
