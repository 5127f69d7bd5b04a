"""Core cellular automaton logic."""

from .grid import Grid, Update, next_state
from .patterns import Pattern, PatternLibrary

__all__ = ["Grid", "Update", "next_state", "Pattern", "PatternLibrary"]
