"""EventHub client: cart, checkout and dashboards over a Supabase backend."""

__version__ = "1.0.0"
