"""
API route handlers.
"""

from .health_api import router as health_router
from .analysis_api import router as analysis_router

__all__ = ["health_router", "analysis_router"]
