"""
Item handlers: the ordered extraction rules of the backport pipeline.
"""

from .base import HandlerRegistry, ItemHandler, ProcessingContext, target_to_request
from .base_item import BaseItemHandler
from .display_context import DisplayContextHandler
from .stored_enchantments import StoredEnchantmentsHandler
from .writable_book import WritableBookContentHandler

__all__ = [
    "HandlerRegistry",
    "ItemHandler",
    "ProcessingContext",
    "target_to_request",
    "BaseItemHandler",
    "DisplayContextHandler",
    "StoredEnchantmentsHandler",
    "WritableBookContentHandler",
]
