"""
resale_market.auth

Authentication/authorization package.

Responsibilities:
- JWT helpers and validation.
- Role resolution against stored user records.
- FastAPI auth dependencies (Principal + role gates).
"""

# Package marker.
