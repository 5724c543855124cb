"""
Flask REST API for the adjustment service.

Provides endpoints for:
- Calculating comparable adjustments
- Default rate tables
- Saved per-CMA adjustment settings
"""

from cmaadjust.api.server import create_app
from cmaadjust.api.routes import register_routes

__all__ = [
    "create_app",
    "register_routes",
]
