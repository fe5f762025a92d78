# Schemas package (re-export feature modules for stable imports)
from .videos.video import *
from .comparison.comparison import *
from .common.common import *
