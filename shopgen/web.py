"""HTTP surface -- Flask app factory.

Exposes the generation operation and the provider/docs lookups as a small
JSON API for the scaffold form.  Static file hosting is left to whatever
serves the front-end.

Endpoints:
    GET  /health                 -- liveness check
    POST /api/generate           -- generate a scaffold
    GET  /api/providers          -- registered remote providers and status
    GET  /api/defaults           -- recommended form defaults
    GET  /api/docs/search?q=...  -- documentation search
    GET  /api/docs/<topic>       -- documentation for a known topic
"""

from __future__ import annotations

import asyncio
import logging

from flask import Blueprint, Flask, current_app, jsonify, request

from shopgen.config import Settings
from shopgen.docs import ShopifyDevDocs, TTLCache
from shopgen.errors import ConfigurationValidationError
from shopgen.models import recommended_defaults
from shopgen.providers import available_providers, get_provider
from shopgen.service import GenerationService

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


def _service() -> GenerationService:
    return current_app.extensions["shopgen.service"]


def _docs() -> ShopifyDevDocs:
    return current_app.extensions["shopgen.docs"]


# ── Generation ─────────────────────────────────────────────────────

@api_bp.route("/generate", methods=["POST"])
def generate():
    """Generate a scaffold from a form payload."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({"success": False, "error": "Request body must be a JSON object"}), 400

    try:
        result = asyncio.run(_service().generate(payload))
    except Exception as exc:
        logger.exception("Scaffold generation crashed")
        return jsonify({"success": False, "error": str(exc)}), 500
    if result.success:
        return jsonify({"success": True, "files": result.files, "source": result.source})

    status = 400 if result.error_kind == ConfigurationValidationError.__name__ else 502
    return jsonify({"success": False, "error": result.error, "kind": result.error_kind}), status


# ── Providers & defaults ───────────────────────────────────────────

@api_bp.route("/providers")
def providers():
    """List registered providers with their availability."""
    settings = _service().settings
    statuses = asyncio.run(_service().provider_statuses())

    listing = []
    for provider_id in available_providers():
        info = get_provider(provider_id, settings).describe()
        info["status"] = statuses.get(provider_id, "unknown")
        listing.append(info)
    return jsonify({"current": settings.provider, "providers": listing})


@api_bp.route("/defaults")
def defaults():
    """Recommended form defaults."""
    return jsonify(recommended_defaults())


# ── Documentation ──────────────────────────────────────────────────

@api_bp.route("/docs/search")
def docs_search():
    query = request.args.get("q", "").strip()
    if not query:
        return jsonify({"error": "Missing query parameter 'q'"}), 400
    return jsonify(_docs().search(query).model_dump())


@api_bp.route("/docs/<path:topic>")
def docs_topic(topic: str):
    result = _docs().get_docs(topic)
    if result is None:
        return jsonify({"error": f"Unknown topic: {topic}"}), 404
    return jsonify(result.model_dump())


# ── App factory ────────────────────────────────────────────────────

def create_app(
    settings: Settings | None = None,
    service: GenerationService | None = None,
) -> Flask:
    """Create and configure the Flask application.

    Args:
        settings: shopgen settings; read from the environment when omitted.
        service: Pre-built generation service (tests inject one).

    Returns:
        Configured Flask application.
    """
    settings = settings or (service.settings if service else Settings.from_env())
    app = Flask(__name__)
    app.json.sort_keys = False

    app.extensions["shopgen.service"] = service or GenerationService(settings)
    app.extensions["shopgen.docs"] = ShopifyDevDocs(TTLCache(ttl=settings.cache_ttl))

    app.register_blueprint(api_bp, url_prefix="/api")

    @app.route("/health")
    def health():  # type: ignore[no-untyped-def]
        return jsonify({"status": "ok"})

    logger.info("shopgen web app created (provider=%s)", settings.provider)
    return app
