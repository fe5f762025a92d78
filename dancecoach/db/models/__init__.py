# Models package (re-export feature modules for stable imports)
from .dance_video import DanceVideo

__all__ = [
    "DanceVideo",
]
