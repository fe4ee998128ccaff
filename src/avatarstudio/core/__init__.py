"""Core functionality for Avatar Studio.

- **AvatarStudioConfig**: Configuration management using Pydantic Settings
- **Style presets**: The six avatar styles and their fallback rule
- **Style resolvers**: Pluggable style resolution (mock lookup, Vertex AI)
- **resolver_registry**: Registry for discovering and instantiating resolvers

Usage Example
-------------
    from avatarstudio.core import AvatarStudioConfig, resolver_registry

    config = AvatarStudioConfig()
    resolver = resolver_registry.instantiate(config.style_resolver, config)
    result = await resolver.generate(stored_path, "anime")
"""

# Import resolvers to ensure they're registered
from avatarstudio.core.resolvers import MockLookupResolver, VertexGeminiResolver  # noqa: F401
from avatarstudio.core.config import AvatarStudioConfig
from avatarstudio.core.style_resolvers import (
    CustomizationResult,
    GenerationResult,
    StyleResolverBase,
    resolver_registry,
)
from avatarstudio.core.styles import DEFAULT_STYLE, AvatarStyle

__all__ = [
    "AvatarStudioConfig",
    "AvatarStyle",
    "CustomizationResult",
    "DEFAULT_STYLE",
    "GenerationResult",
    "StyleResolverBase",
    "resolver_registry",
]
