"""Local scaffold assembly.

Turns an ``AppConfiguration`` into a ``FileMapping`` by rendering a fixed
table of template fragments.  Which fragments are rendered depends only on
the framework and the enabled features, so the same configuration always
produces byte-identical output.

Write order is: base files, framework files, feature files.  No two entries
in a plan share a path.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional

from shopgen.models import AppConfiguration, Feature, FileMapping, Framework

from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Fragment table
# ---------------------------------------------------------------------------

PACKAGE_NAME = "shopify-app"
DESCRIPTION_LIMIT = 100
ELLIPSIS = "..."

ENTRY_POINT = "index.js"

# (output path, template); a ``None`` template is built in code.
BASE_FILES: tuple[tuple[str, Optional[str]], ...] = (
    ("package.json", None),
    ("README.md", "README.md.j2"),
    (".env.example", "env.example.j2"),
    (ENTRY_POINT, "index.js.j2"),
)

# Route blocks spliced into the entry point, keyed by the enabling feature.
ROUTE_BLOCKS: dict[Feature, str] = {
    Feature.GRAPHQL: "routes/graphql.js.j2",
    Feature.WEBHOOKS: "routes/webhooks.js.j2",
    Feature.OAUTH: "routes/oauth.js.j2",
}

FRAMEWORK_FILES: dict[Framework, tuple[tuple[str, str], ...]] = {
    Framework.REMIX: (
        ("remix.config.js", "remix/remix.config.js.j2"),
        ("app/root.jsx", "remix/app/root.jsx.j2"),
    ),
}

FEATURE_FILES: dict[Feature, tuple[tuple[str, str], ...]] = {
    Feature.POLARIS: (
        ("components/PolarisProvider.jsx", "components/PolarisProvider.jsx.j2"),
    ),
    Feature.APP_BRIDGE: (
        ("components/AppBridgeProvider.jsx", "components/AppBridgeProvider.jsx.j2"),
    ),
}

PACKAGE_SCRIPTS: dict[str, str] = {
    "start": "node index.js",
    "dev": "nodemon index.js",
}
PACKAGE_DEPENDENCIES: dict[str, str] = {
    "express": "^4.18.2",
    "dotenv": "^16.0.3",
}
PACKAGE_DEV_DEPENDENCIES: dict[str, str] = {
    "nodemon": "^2.0.22",
}


@dataclass(frozen=True)
class FilePlan:
    """One file the assembler will write."""

    path: str
    template: Optional[str]
    stage: str  # "base", "framework" or "feature"


# ---------------------------------------------------------------------------
# Assembler
# ---------------------------------------------------------------------------


class TemplateAssembler:
    """Pure configuration -> file mapping generator."""

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    def plan(self, config: AppConfiguration) -> list[FilePlan]:
        """List the files *config* produces, in write order."""
        entries = [FilePlan(path, template, "base") for path, template in BASE_FILES]
        for path, template in FRAMEWORK_FILES.get(config.framework, ()):
            entries.append(FilePlan(path, template, "framework"))
        for feature in config.ordered_features():
            for path, template in FEATURE_FILES.get(feature, ()):
                entries.append(FilePlan(path, template, "feature"))
        return entries

    def route_blocks(self, config: AppConfiguration) -> list[str]:
        """Render the entry-point route blocks enabled by *config*, in canonical order."""
        return [
            self.renderer.render(ROUTE_BLOCKS[feature])
            for feature in config.ordered_features()
            if feature in ROUTE_BLOCKS
        ]

    def assemble(self, config: AppConfiguration) -> FileMapping:
        """Render every planned file for *config*."""
        context = self._build_context(config)
        files: FileMapping = {}
        for entry in self.plan(config):
            if entry.template is None:
                files[entry.path] = render_package_json(config.description)
            else:
                files[entry.path] = self.renderer.render(entry.template, context)
        return files

    # -- Context building --------------------------------------------------

    def _build_context(self, config: AppConfiguration) -> dict[str, Any]:
        return {
            "app_type": config.app_type.value,
            "framework": config.framework.value,
            "features": [f.value for f in config.ordered_features()],
            "description": config.description,
            "route_blocks": self.route_blocks(config),
        }


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def truncate_description(description: str) -> str:
    """First ``DESCRIPTION_LIMIT`` characters followed by the ellipsis marker.

    The marker is always appended, even to short descriptions.
    """
    return description[:DESCRIPTION_LIMIT] + ELLIPSIS


def render_package_json(description: str) -> str:
    """Render the generated app's ``package.json`` manifest."""
    manifest = {
        "name": PACKAGE_NAME,
        "version": "1.0.0",
        "description": truncate_description(description),
        "main": ENTRY_POINT,
        "scripts": dict(PACKAGE_SCRIPTS),
        "dependencies": dict(PACKAGE_DEPENDENCIES),
        "devDependencies": dict(PACKAGE_DEV_DEPENDENCIES),
    }
    return json.dumps(manifest, indent=2, ensure_ascii=False)


_default_assembler: TemplateAssembler | None = None


def assemble(config: AppConfiguration) -> FileMapping:
    """Assemble *config* with a shared default ``TemplateAssembler``."""
    global _default_assembler
    if _default_assembler is None:
        _default_assembler = TemplateAssembler()
    return _default_assembler.assemble(config)
