"""
resale_market.api.routers

One router module per resource; composed in `api.app.create_app`.
"""
