"""shopify.dev documentation lookup.

Answers topic and free-text queries from a static table of shopify.dev
summaries.  Results are cached in a ``TTLCache`` keyed by
``search:<query>`` or ``docs:<topic>`` so repeated questions from the chat
widget do not rebuild the same answer.
"""

from __future__ import annotations

import textwrap
from typing import Optional

from pydantic import BaseModel, Field

from .cache import TTLCache

SHOPIFY_DEV_BASE_URL = "https://shopify.dev"
SOURCE = "shopify.dev"


class DocResult(BaseModel):
    """A documentation answer."""

    source: str = Field(default=SOURCE)
    title: str
    url: str
    content: str
    relevance: float = Field(default=0.0, ge=0.0, le=1.0)


class DocTopic(BaseModel):
    """An entry of the topic table."""

    path: str
    title: str
    description: str

    @property
    def url(self) -> str:
        return f"{SHOPIFY_DEV_BASE_URL}{self.path}"


TOPICS: dict[str, DocTopic] = {
    "graphql": DocTopic(path="/api/graphql", title="GraphQL API",
                        description="Shopify GraphQL API documentation"),
    "polaris": DocTopic(path="/design-system", title="Polaris Design System",
                        description="Shopify design system components"),
    "app bridge": DocTopic(path="/app-bridge", title="App Bridge",
                           description="Embedded app framework"),
    "webhooks": DocTopic(path="/api/webhooks", title="Webhooks",
                         description="Shopify webhook documentation"),
    "oauth": DocTopic(path="/api/authentication", title="OAuth Authentication",
                      description="Shopify OAuth authentication"),
    "admin api": DocTopic(path="/api/admin", title="Admin API",
                          description="Shopify Admin API documentation"),
    "storefront api": DocTopic(path="/api/storefront", title="Storefront API",
                               description="Shopify Storefront API"),
    "app development": DocTopic(path="/apps", title="App Development",
                                description="Shopify app development guides"),
    "themes": DocTopic(path="/themes", title="Theme Development",
                       description="Shopify theme development"),
    "liquid": DocTopic(path="/docs/api/liquid", title="Liquid Template Language",
                       description="Shopify Liquid documentation"),
}


# ---------------------------------------------------------------------------
# Search summaries
# ---------------------------------------------------------------------------

# (keywords, topic key, relevance, body); the first entry with a matching
# keyword wins.
_SEARCH_SUMMARIES: tuple[tuple[tuple[str, ...], str, float, str], ...] = (
    (("graphql",), "graphql", 0.95, """\
        **GraphQL API** - Shopify's modern API that lets you request exactly the data you need.

        **Key Benefits:**
        - Request only the data you need
        - Single endpoint for all operations
        - Strong typing and introspection

        **Common Use Cases:**
        - Fetching products with specific fields
        - Managing orders and inventory
        - Customer data operations"""),
    (("polaris",), "polaris", 0.92, """\
        **Polaris Design System** - Shopify's design system for building consistent, accessible apps.

        **Key Features:**
        - Pre-built React components
        - Consistent with Shopify admin
        - Accessibility built-in
        - Responsive design patterns"""),
    (("oauth", "authentication"), "oauth", 0.90, """\
        **OAuth Authentication** - Securely connect your app to Shopify stores.

        **OAuth Flow:**
        1. Redirect merchant to Shopify
        2. Merchant authorizes your app
        3. Shopify redirects back with code
        4. Exchange code for access token
        5. Use token for API requests"""),
    (("webhook",), "webhooks", 0.88, """\
        **Webhooks** - Get notified when events happen in Shopify stores.

        **Common Webhook Topics:**
        - orders/create, orders/updated, orders/cancelled
        - products/create, products/update, products/delete
        - app/uninstalled

        **Best Practices:**
        - Always verify webhook authenticity
        - Respond with 200 status quickly
        - Use idempotency for duplicate events"""),
    (("app bridge",), "app bridge", 0.85, """\
        **App Bridge** - JavaScript library for seamless Shopify admin integration.

        **Key Features:**
        - Navigation between admin sections
        - Toast notifications
        - Modal dialogs
        - Resource picker"""),
)

_DEFAULT_SUMMARY = """\
    **Shopify App Development** - Build apps that extend Shopify's functionality.

    **Getting Started:**
    - Choose your app type (Admin, Storefront, Theme)
    - Set up your development environment
    - Implement OAuth authentication
    - Use Shopify APIs (GraphQL, REST)
    - Follow Shopify's design guidelines"""


def _with_link(body: str, topic: DocTopic) -> str:
    return f"{textwrap.dedent(body)}\n\n**Documentation:** [{topic.title}]({topic.url})"


class ShopifyDevDocs:
    """Cached documentation lookups against the static topic table."""

    def __init__(self, cache: TTLCache | None = None) -> None:
        self.cache = cache if cache is not None else TTLCache()

    def search(self, query: str) -> DocResult:
        """Best summary for a free-text *query*; falls back to app development."""
        key = f"search:{query.lower()}"
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        result = _search_summary(query.lower())
        self.cache.set(key, result)
        return result

    def get_docs(self, topic: str) -> Optional[DocResult]:
        """Documentation card for a known *topic*, or ``None``."""
        key = f"docs:{topic.lower()}"
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        entry = TOPICS.get(topic.lower())
        if entry is None:
            return None
        result = DocResult(
            title=entry.title,
            url=entry.url,
            content=f"**{entry.title}** - {entry.description}\n\n"
                    f"**Documentation:** [{entry.title}]({entry.url})",
            relevance=0.95,
        )
        self.cache.set(key, result)
        return result

    def clear_cache(self) -> None:
        self.cache.clear()

    def cache_stats(self) -> dict:
        return self.cache.stats()


def _search_summary(lowered_query: str) -> DocResult:
    for keywords, topic_key, relevance, body in _SEARCH_SUMMARIES:
        if any(word in lowered_query for word in keywords):
            topic = TOPICS[topic_key]
            return DocResult(
                title=topic.title,
                url=topic.url,
                content=_with_link(body, topic),
                relevance=relevance,
            )
    topic = TOPICS["app development"]
    return DocResult(
        title="Shopify App Development",
        url=topic.url,
        content=_with_link(_DEFAULT_SUMMARY, topic),
        relevance=0.70,
    )
