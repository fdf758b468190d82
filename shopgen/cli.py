"""Command-line entry point for shopgen.

Usage::

    python -m shopgen generate -d "Track inventory levels" --feature OAuth -o ./my-app
    python -m shopgen generate -d "Loyalty points" --recommended --provider ollama
    python -m shopgen providers
    python -m shopgen docs "how do webhooks work"
    python -m shopgen serve --port 3001
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Sequence

from rich.logging import RichHandler

from shopgen.config import Settings
from shopgen.docs import ShopifyDevDocs, TTLCache
from shopgen.models import AppType, Feature, Framework, recommended_defaults
from shopgen.providers import AVAILABLE, OllamaProvider, available_providers, get_provider
from shopgen.service import GenerationService
from shopgen.utils import (
    build_file_tree,
    console,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
    write_files,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shopgen",
        description="shopgen -- Shopify app scaffold generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  shopgen generate -d 'Track inventory levels' --feature OAuth\n"
            "  shopgen generate -d 'Loyalty points' --framework Remix -o ./loyalty\n"
            "  shopgen providers\n"
        ),
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate a scaffold")
    gen.add_argument("--description", "-d", required=True, help="What the app should do")
    gen.add_argument(
        "--app-type",
        default=AppType.ADMIN_APP.value,
        help=f"One of: {', '.join(t.value for t in AppType)} (default: Admin App)",
    )
    gen.add_argument(
        "--framework",
        default=Framework.NODE_JS.value,
        help=f"One of: {', '.join(f.value for f in Framework)} (default: Node.js)",
    )
    gen.add_argument(
        "--feature",
        action="append",
        default=[],
        dest="features",
        help=f"Enable a feature; repeatable. One of: {', '.join(f.value for f in Feature)}",
    )
    gen.add_argument(
        "--recommended",
        action="store_true",
        help="Use the recommended app type, framework and features",
    )
    gen.add_argument("--provider", default=None, help="'local' or a remote provider id")
    gen.add_argument("--delay", type=float, default=None, help="Artificial delay in seconds")
    gen.add_argument("--output", "-o", default=None, help="Write the files into this directory")
    gen.add_argument("--json", action="store_true", help="Print the file mapping as JSON")

    sub.add_parser("providers", help="List remote providers and their status")

    docs = sub.add_parser("docs", help="Search shopify.dev summaries")
    docs.add_argument("query", help="Free-text question or topic")

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=3001)
    serve.add_argument("--debug", action="store_true")

    return parser


def _generation_payload(args: argparse.Namespace) -> dict[str, Any]:
    if args.recommended:
        payload = recommended_defaults()
    else:
        payload = {
            "appType": args.app_type,
            "framework": args.framework,
            "features": args.features,
        }
    payload["description"] = args.description
    return payload


def _cmd_generate(args: argparse.Namespace, settings: Settings) -> int:
    updates: dict[str, Any] = {}
    if args.provider:
        updates["provider"] = args.provider.lower()
    if args.delay is not None:
        updates["generation_delay"] = args.delay
    if updates:
        settings = settings.model_copy(update=updates)

    service = GenerationService(settings)
    with console.status(f"Generating scaffold via {service.source}..."):
        result = asyncio.run(service.generate(_generation_payload(args)))

    if not result.success:
        print_error(f"Generation failed: {result.error}")
        return 1

    if args.json:
        console.print_json(json.dumps(result.files))
    else:
        console.print(build_file_tree(result.files))

    if args.output:
        written = write_files(result.files, args.output)
        print_success(f"Wrote {len(written)} files to {args.output}")
    else:
        print_success(f"Generated {len(result.files)} files via {result.source}")
    return 0


def _cmd_providers(settings: Settings) -> int:
    statuses = asyncio.run(GenerationService(settings).provider_statuses())
    rows: dict[str, str] = {"local": "template assembler (always available)"}
    for provider_id in available_providers():
        provider = get_provider(provider_id, settings)
        info = provider.describe()
        row = f"{info['name']} / {info['default_model']} -- {statuses[provider_id]}"
        if isinstance(provider, OllamaProvider) and statuses[provider_id] == AVAILABLE:
            pulled = asyncio.run(provider.list_models())
            if pulled:
                row += f" (pulled: {', '.join(pulled)})"
        rows[provider_id] = row
    print_summary_table(rows, title=f"Providers (current: {settings.provider})")
    return 0


def _cmd_docs(args: argparse.Namespace, settings: Settings) -> int:
    docs = ShopifyDevDocs(TTLCache(ttl=settings.cache_ttl))
    result = docs.search(args.query)
    console.print(f"[bold]{result.title}[/bold]  [dim]{result.url}[/dim]")
    console.print(result.content, markup=False)
    return 0


def _cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    from shopgen.web import create_app

    if settings.is_local and settings.generation_delay > 0:
        print_warning(f"Local generation waits {settings.generation_delay:.1f}s per request")
    app = create_app(settings)
    app.run(host=args.host, port=args.port, debug=args.debug)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point for ``python -m shopgen``."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    try:
        settings = Settings.from_env()
    except ValueError as exc:
        print_error(f"Invalid environment configuration: {exc}")
        return 2

    if args.command == "generate":
        return _cmd_generate(args, settings)
    if args.command == "providers":
        return _cmd_providers(settings)
    if args.command == "docs":
        return _cmd_docs(args, settings)
    return _cmd_serve(args, settings)


if __name__ == "__main__":
    sys.exit(main())
