"""Documentation lookups for the chat assistant, with a time-bounded cache."""

from shopgen.docs.cache import TTLCache
from shopgen.docs.shopify_dev import TOPICS, DocResult, ShopifyDevDocs

__all__ = [
    "DocResult",
    "ShopifyDevDocs",
    "TOPICS",
    "TTLCache",
]
