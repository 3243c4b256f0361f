# doccart/backends/session.py
import time
from threading import Lock
from typing import Any, Callable, Dict, List, Optional

from doccart.domain.cart_item import CartItem
from doccart.utils.settings import CART_TTL_SECONDS


class SessionStore:
    """
    Magazyn sesji w pamieci procesu: session_key -> dane sesji.
    Jedna instancja na aplikacje (app.state), nie globalny singleton.

    Wpis powstaje dopiero przy pierwszym zapisie (get), odczyty (peek/pop)
    niczego nie tworza. Sesje nieuzywane dluzej niz ttl sa usuwane.
    """

    def __init__(
        self,
        ttl_seconds: float = CART_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: Dict[str, Dict[str, Any]] = {}
        self._touched: Dict[str, float] = {}
        self._next_sweep = clock() + ttl_seconds
        self._lock = Lock()

    def get(self, session_key: str) -> Dict[str, Any]:
        """Dane sesji do zapisu, tworzy pusty wpis jesli go nie ma."""
        with self._lock:
            now = self._clock()
            if now >= self._next_sweep:
                self._sweep(now)
            self._touched[session_key] = now
            return self._sessions.setdefault(session_key, {})

    def peek(self, session_key: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            session = self._sessions.get(session_key)
            if session is not None:
                self._touched[session_key] = self._clock()
            return session

    def pop(self, session_key: str, field: str, default: Any = None) -> Any:
        with self._lock:
            session = self._sessions.get(session_key)
            if session is None:
                return default
            return session.pop(field, default)

    def drop(self, session_key: str) -> bool:
        with self._lock:
            self._touched.pop(session_key, None)
            return self._sessions.pop(session_key, None) is not None

    def expire_idle(self) -> int:
        """Usuwa sesje bez dostepu dluzej niz ttl, zwraca ich liczbe."""
        with self._lock:
            return self._sweep(self._clock())

    def _sweep(self, now: float) -> int:
        idle = [key for key, seen in self._touched.items() if now - seen > self.ttl_seconds]
        for key in idle:
            del self._touched[key]
            self._sessions.pop(key, None)
        self._next_sweep = now + self.ttl_seconds
        return len(idle)

    def __contains__(self, session_key: str) -> bool:
        return session_key in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)


class SessionBackend:
    """Domyslny backend koszyka, trzyma pozycje w danych sesji."""

    ITEMS = "items"
    BACK_URL = "back_url"
    RECEIVER_INFO = "receiver_info"

    def __init__(self, store: SessionStore, session_key: str):
        self.session_key = session_key
        self._store = store

    def _session(self, create: bool = False) -> Optional[Dict[str, Any]]:
        if create:
            return self._store.get(self.session_key)
        return self._store.peek(self.session_key)

    #dict zachowuje kolejnosc wstawienia, podmiana klucza nie zmienia pozycji
    def _items(self, create: bool = False) -> Dict[int, CartItem]:
        session = self._session(create)
        if session is None:
            return {}
        return session.setdefault(self.ITEMS, {})

    def get_items(self) -> List[CartItem]:
        return [item.copy() for item in self._items().values()]

    def get_item(self, document_id: int) -> Optional[CartItem]:
        item = self._items().get(int(document_id))
        return item.copy() if item else None

    def add_item(self, item: CartItem) -> None:
        self._items(create=True)[item.document_id] = item.copy()

    def remove_item(self, item: CartItem) -> None:
        self.remove_item_by_id(item.document_id)

    def remove_item_by_id(self, document_id: int) -> None:
        self._items().pop(int(document_id), None)

    def empty_cart(self) -> None:
        self._items().clear()

    def set_back_url(self, url: Optional[str]) -> None:
        self._session(create=True)[self.BACK_URL] = url

    def get_back_url(self) -> Optional[str]:
        session = self._session()
        return session.get(self.BACK_URL) if session is not None else None

    def set_receiver_info(self, info: Optional[Dict[str, str]]) -> None:
        self._session(create=True)[self.RECEIVER_INFO] = dict(info) if info is not None else None

    def get_receiver_info(self) -> Optional[Dict[str, str]]:
        session = self._session()
        info = session.get(self.RECEIVER_INFO) if session is not None else None
        return dict(info) if info is not None else None
