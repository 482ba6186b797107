"""Terminal renderers and caller-driven widgets."""

from .banner import BannerRenderer
from .box import BoxRenderer
from .charts import ChartPoint, ChartRenderer
from .progress import ProgressBar
from .prompts import InteractivePrompts
from .spinner import Spinner
from .table import ColumnDef, TableRenderer

__all__ = [
    "BannerRenderer",
    "BoxRenderer",
    "ChartPoint",
    "ChartRenderer",
    "ColumnDef",
    "InteractivePrompts",
    "ProgressBar",
    "Spinner",
    "TableRenderer",
]
