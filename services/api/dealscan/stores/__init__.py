"""Data stores for persistence and caching.

Stores handle:
- PostgreSQL: DB session, catalog queries, junk report persistence
- Redis: caching with TTL policies

No business/scoring logic in stores - that belongs in services.
"""
