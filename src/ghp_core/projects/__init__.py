"""Project item normalization and status ordering."""

from .normalizer import ItemNormalizer, extract_field_values, sort_items
from .status_order import StatusOrderIndex

__all__ = [
    "ItemNormalizer",
    "StatusOrderIndex",
    "extract_field_values",
    "sort_items",
]
