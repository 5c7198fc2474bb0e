"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.brands import router as brands_router

__all__ = [
    "brands_router",
]
