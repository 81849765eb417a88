"""
resale_market.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide document-shaped ORM models, engine/session setup, and repositories.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Routers and services only see documents (plain dicts) and write results, so the
# backing store can be swapped without touching the HTTP layer.
