import threading
from contextlib import contextmanager
from typing import List, Optional

from app.services.backend import backend as default_backend, BackendClient, Subscription


class ScreenState:
    """View state owned by a single screen.

    ``mount`` does the initial fetch and subscribes to every table the
    screen watches. A change on one of them only marks the screen stale;
    the next ``view()`` from the owner re-runs ``load`` in its own session.
    Subclasses implement ``load`` and ``render``.
    """

    tables: tuple = ()

    def __init__(self, client: Optional[BackendClient] = None):
        self.backend = client or default_backend
        self.loading = False
        self.is_mounted = False
        self.refresh_count = 0
        self._stale = threading.Event()
        self._subscriptions: List[Subscription] = []

    def load(self) -> None:
        raise NotImplementedError

    def render(self) -> dict:
        raise NotImplementedError

    def mount(self):
        self.loading = True
        try:
            self.load()
        finally:
            self.loading = False
        for table in self.tables:
            self._subscriptions.append(self.backend.subscribe(table, self._on_change))
        self.is_mounted = True
        return self

    def _on_change(self, table: str) -> None:
        # Runs on the committing thread; must not touch the session.
        self._stale.set()

    @property
    def stale(self) -> bool:
        return self._stale.is_set()

    def refresh(self) -> None:
        self._stale.clear()
        self.load()
        self.refresh_count += 1

    def sync(self) -> None:
        if self._stale.is_set():
            self.refresh()

    def view(self) -> dict:
        self.sync()
        return self.render()

    def unmount(self) -> None:
        for sub in self._subscriptions:
            sub.unsubscribe()
        self._subscriptions = []
        self.is_mounted = False


@contextmanager
def mounted(screen: ScreenState):
    screen.mount()
    try:
        yield screen
    finally:
        screen.unmount()
