from .shared_text import SharedTextTable
from .style import StyleCache

__all__ = ["SharedTextTable", "StyleCache"]
