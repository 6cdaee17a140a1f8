"""
Persisted cart storage.

The cart is stored whole under one fixed key as a JSON list of
`{id, ...snapshot fields, quantity}` records. Saves overwrite the whole value
(last writer wins). Loads never raise: an absent, unreadable or malformed
value is an empty cart.
"""
import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from eventhub.config import CART_STORAGE_KEY
from eventhub.logging import get_logger

from .models import Cart, MalformedCart

logger = get_logger(__name__)


class CartStorage:
    """Base class for cart persistence backends."""

    key = CART_STORAGE_KEY

    def load(self) -> Cart:
        """Return the last saved cart, or an empty cart."""
        try:
            raw = self._read()
        except Exception as e:
            logger.warning(f"Failed to read persisted cart ({type(self).__name__}): {e}")
            return Cart()

        if raw is None:
            return Cart()

        try:
            return Cart.from_records(json.loads(raw))
        except (json.JSONDecodeError, UnicodeDecodeError, TypeError, MalformedCart) as e:
            logger.warning(f"Ignoring corrupted persisted cart: {e}")
            return Cart()

    def save(self, cart: Cart) -> None:
        """Overwrite the stored cart. Errors propagate."""
        self._write(json.dumps(cart.to_records(), default=str))

    def _read(self) -> Optional[str]:
        raise NotImplementedError

    def _write(self, value: str) -> None:
        raise NotImplementedError


class MemoryCartStorage(CartStorage):
    """Process-local storage (tests, throwaway sessions)."""

    def __init__(self, value: Optional[str] = None):
        self.value = value

    def _read(self) -> Optional[str]:
        return self.value

    def _write(self, value: str) -> None:
        self.value = value


class FileCartStorage(CartStorage):
    """JSON file in a per-device directory, the local-storage equivalent."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)
        self.path = self.directory / f"{self.key}.json"

    def _read(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def _write(self, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        # Readers see either the old or the new file, never a partial one
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{self.key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise


class RedisCartStorage(CartStorage):
    """Cart kept in Upstash Redis (sync REST client), no TTL."""

    def __init__(self, redis):
        self.redis = redis

    def _read(self) -> Optional[str]:
        value = self.redis.get(self.key)
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    def _write(self, value: str) -> None:
        self.redis.set(self.key, value)
