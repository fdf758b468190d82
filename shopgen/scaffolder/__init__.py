"""shopgen scaffolder -- assembles Shopify app scaffolds from templates.

Takes an ``AppConfiguration`` and renders a deterministic mapping of
relative file path to file content: a package manifest, README, env
example, an Express entry point with feature-dependent routes, plus Remix
and component boilerplate where selected.

Quick usage::

    from shopgen.models import AppConfiguration
    from shopgen.scaffolder import assemble

    config = AppConfiguration(
        app_type="Admin App",
        framework="Remix",
        features=["OAuth", "Polaris"],
        description="Track inventory levels",
    )
    files = assemble(config)
"""

from shopgen.scaffolder.assembler import FilePlan, TemplateAssembler, assemble
from shopgen.scaffolder.templates import TemplateRenderer

__all__ = [
    "FilePlan",
    "TemplateAssembler",
    "TemplateRenderer",
    "assemble",
]
