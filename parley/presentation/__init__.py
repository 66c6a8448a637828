"""
Presentation module - where parsed dialog goes to be shown.
"""

from parley.presentation.surface import PresentationSurface, MemorySurface, RenderedDialog

__all__ = [
    "PresentationSurface",
    "MemorySurface",
    "RenderedDialog",
]
