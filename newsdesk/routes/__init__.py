"""
API route modules.
"""

from .articles import router as articles_router
from .auth import router as auth_router
from .dashboard import router as dashboard_router
from .misc import router as misc_router

__all__ = [
    "articles_router",
    "auth_router",
    "dashboard_router",
    "misc_router",
]
