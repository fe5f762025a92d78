# Routers package
from . import videos_router
from . import comparison_router
from . import dashboard_router

__all__ = [
    "videos_router",
    "comparison_router",
    "dashboard_router",
]
