"""
Client configuration.

Values come from the environment, optionally seeded from a `.env` file in the
project root. Read once through `get_settings()`.
"""
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

_ENV_PATH = Path(__file__).parent.parent / ".env"

# Key under which the cart is persisted (file name stem / redis key)
CART_STORAGE_KEY = "eventhub_cart"

CART_BACKEND_FILE = "file"
CART_BACKEND_REDIS = "redis"
CART_BACKEND_MEMORY = "memory"


class Settings(BaseModel):
    """Runtime settings for the EventHub client."""
    supabase_url: str = ""
    supabase_anon_key: str = ""
    cart_backend: str = CART_BACKEND_FILE
    cart_dir: Path = Path.home() / ".eventhub"
    upstash_redis_rest_url: str = ""
    upstash_redis_rest_token: str = ""
    checkout_rpc: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        cart_dir = os.environ.get("EVENTHUB_CART_DIR")
        return cls(
            supabase_url=os.environ.get("SUPABASE_URL", ""),
            supabase_anon_key=os.environ.get("SUPABASE_ANON_KEY", ""),
            cart_backend=os.environ.get("EVENTHUB_CART_BACKEND", CART_BACKEND_FILE).lower(),
            cart_dir=Path(cart_dir).expanduser() if cart_dir else Path.home() / ".eventhub",
            upstash_redis_rest_url=os.environ.get("UPSTASH_REDIS_REST_URL", ""),
            upstash_redis_rest_token=os.environ.get("UPSTASH_REDIS_REST_TOKEN", ""),
            checkout_rpc=os.environ.get("EVENTHUB_CHECKOUT_RPC") or None,
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings (cached). `.env` never overrides variables already set."""
    if _ENV_PATH.exists():
        load_dotenv(_ENV_PATH)
    return Settings.from_env()
