"""
Destination search.

Typo-tolerant search over a static destination dataset with
category-weighted ranking, debounced search-as-you-type and
result-card rendering.
"""

__version__ = "1.0.0"
