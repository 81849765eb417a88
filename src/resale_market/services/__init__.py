"""
resale_market.services

Service-layer package.

Responsibilities:
- Own commit boundaries for multi-record operations.
- Wrap the external payment provider behind a small gateway interface.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services should be pure Python and easily testable with fake gateways/sessions.
