"""
Organization logic module for grouping files into categories.
"""

from .categories import CategoryResolver, category_for
from .engine import OrganizationEngine

__all__ = [
    "CategoryResolver",
    "OrganizationEngine",
    "category_for",
]
