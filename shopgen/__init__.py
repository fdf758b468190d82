"""shopgen -- Shopify app scaffold generator.

Assembles a ready-to-edit Shopify app skeleton (manifest, README, env
example, Express entry point and framework/feature boilerplate) from a short
form, either locally from templates or through a remote language model.
"""

from shopgen.models import AppConfiguration, AppType, Feature, Framework, GenerationResult
from shopgen.scaffolder import assemble
from shopgen.service import GenerationService

__version__ = "0.1.0"

__all__ = [
    "AppConfiguration",
    "AppType",
    "Feature",
    "Framework",
    "GenerationResult",
    "GenerationService",
    "assemble",
]
