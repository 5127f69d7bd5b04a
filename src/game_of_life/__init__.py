"""Conway's Game of Life on a fixed-size bounded grid."""

__version__ = "0.1.0"

from .core.grid import Grid, Update
from .core.patterns import Pattern, PatternLibrary

__all__ = ["Grid", "Update", "Pattern", "PatternLibrary"]
