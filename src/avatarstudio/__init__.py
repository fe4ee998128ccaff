"""Avatar Studio - Photo-to-avatar generation service."""

__version__ = "0.1.0"

from avatarstudio.core.config import AvatarStudioConfig
from avatarstudio.core.style_resolvers import StyleResolverBase, resolver_registry

# Import resolvers to ensure they're registered
from avatarstudio.core.resolvers import MockLookupResolver, VertexGeminiResolver  # noqa: F401

__all__ = [
    "AvatarStudioConfig",
    "StyleResolverBase",
    "resolver_registry",
    "MockLookupResolver",
    "VertexGeminiResolver",
]
