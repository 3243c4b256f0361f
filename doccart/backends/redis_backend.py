# doccart/backends/redis_backend.py
import json
from typing import Any, Dict, List, Optional

import redis

from doccart.domain.cart_item import CartItem
from doccart.utils.retry import redis_retry
from doccart.utils.settings import REDIS_URL, CART_TTL_SECONDS
from doccart.utils.logging import get_logger

logger = get_logger(__name__)


def cart_key(session_key: str) -> str:
    return f"cart:{session_key}"


class RedisBackend:
    """
    Koszyk jako jeden dokument JSON w redisie: cart:{session_key}.
    Kazdy zapis odswieza TTL, porzucone koszyki wygasaja same.
    """

    def __init__(
        self,
        session_key: str,
        client: redis.Redis | None = None,
        ttl: int = CART_TTL_SECONDS,
    ):
        self.session_key = session_key
        self.key = cart_key(session_key)
        self.ttl = ttl
        self.redis = client or redis.Redis.from_url(REDIS_URL, decode_responses=True)

    @redis_retry()
    def _load(self) -> Dict[str, Any]:
        raw = self.redis.get(self.key)
        if not raw:
            return {"items": [], "back_url": None, "receiver_info": None}
        return json.loads(raw)

    @redis_retry()
    def _save(self, state: Dict[str, Any]) -> None:
        self.redis.set(self.key, json.dumps(state), ex=self.ttl)

    def get_items(self) -> List[CartItem]:
        return [CartItem.from_dict(row) for row in self._load()["items"]]

    def get_item(self, document_id: int) -> Optional[CartItem]:
        document_id = int(document_id)
        for row in self._load()["items"]:
            if row["document_id"] == document_id:
                return CartItem.from_dict(row)
        return None

    def add_item(self, item: CartItem) -> None:
        state = self._load()
        rows = state["items"]
        for i, row in enumerate(rows):
            if row["document_id"] == item.document_id:
                rows[i] = item.to_dict()
                break
        else:
            rows.append(item.to_dict())
        self._save(state)

    def remove_item(self, item: CartItem) -> None:
        self.remove_item_by_id(item.document_id)

    def remove_item_by_id(self, document_id: int) -> None:
        document_id = int(document_id)
        state = self._load()
        rows = [row for row in state["items"] if row["document_id"] != document_id]
        if len(rows) == len(state["items"]):
            return
        state["items"] = rows
        self._save(state)

    def empty_cart(self) -> None:
        state = self._load()
        state["items"] = []
        self._save(state)

    def set_back_url(self, url: Optional[str]) -> None:
        state = self._load()
        state["back_url"] = url
        self._save(state)

    def get_back_url(self) -> Optional[str]:
        return self._load().get("back_url")

    def set_receiver_info(self, info: Optional[Dict[str, str]]) -> None:
        state = self._load()
        state["receiver_info"] = dict(info) if info is not None else None
        self._save(state)

    def get_receiver_info(self) -> Optional[Dict[str, str]]:
        return self._load().get("receiver_info")
