# ==============================================================================
# Analytics Session Store
# ==============================================================================
"""
Session data-access layer for an analytics product.

- sessionstore.core: models, errors, SessionTracker
- sessionstore.base: storage ports (SessionRepository, TimestampStore)
- sessionstore.infrastructure: OpenSearch and Valkey adapters
- sessionstore.security: cookie token verification
- sessionstore.api: FastAPI boundary helpers
"""

__version__ = "0.1.0"
