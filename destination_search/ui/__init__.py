"""Presentation layer: page model, result rendering and the search widget."""

from .page import Element
from .renderer import Cleared, Empty, Error, Loading, ResultRenderer, Results
from .widget import SearchWidget

__all__ = [
    "Cleared",
    "Element",
    "Empty",
    "Error",
    "Loading",
    "ResultRenderer",
    "Results",
    "SearchWidget",
]
