"""Style resolver implementations.

Importing this package registers every resolver with
:data:`avatarstudio.core.style_resolvers.resolver_registry`.
"""

from .mock_lookup import MockLookupResolver
from .vertex_gemini import VertexGeminiResolver

__all__ = ["MockLookupResolver", "VertexGeminiResolver"]
