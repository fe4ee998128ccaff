"""Base classes and registry for style resolvers.

A style resolver turns a stored upload and a style tag into a result
descriptor.  Avatar Studio ships two resolvers:

- **mock-lookup**: returns a stock image for the style after a fixed delay
  (see :mod:`avatarstudio.core.resolvers.mock_lookup`)
- **vertex-gemini**: sends the photo to Gemini on Vertex AI and saves the
  generated image (see :mod:`avatarstudio.core.resolvers.vertex_gemini`)

The active resolver is chosen by ``AvatarStudioConfig.style_resolver`` and
instantiated once per application through :data:`resolver_registry`.

Usage Example
-------------
    >>> from avatarstudio.core.style_resolvers import resolver_registry
    >>> resolver = resolver_registry.instantiate("mock-lookup", config)
    >>> result = await resolver.generate(Path("uploads/image-1.png"), "anime")
    >>> result.image_url
    'https://images.unsplash.com/photo-1578632767115-...'

Customisation
-------------
No resolver transforms an existing avatar yet.  The base class implements
:meth:`StyleResolverBase.customize` as an explicit passthrough whose result
has ``transformed=False``, so callers and tests can tell a no-op from a
real edit.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import AvatarStudioConfig
from .errors import ResolverNotFoundError

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class GenerationResult:
    """Result descriptor for one avatar generation.

    Attributes
    ----------
    image_url : str
        Locator of the resulting image
    style : str
        Style tag exactly as requested (not the coerced default)
    original_image : Path
        Where the upload was stored
    success : bool
        Always ``True``; failures raise instead
    processed_at : datetime
        UTC time the result was produced
    """

    image_url: str
    style: str
    original_image: Path
    success: bool = True
    processed_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class CustomizationResult:
    """Result descriptor for one customisation request."""

    image_url: str
    style: str
    applied_instructions: str
    transformed: bool
    success: bool = True
    processed_at: datetime = field(default_factory=_utcnow)


class StyleResolverBase(ABC):
    """Abstract base class for all style resolvers.

    Attributes
    ----------
    name : str
        Registry key, matches a value of ``AvatarStudioConfig.style_resolver``
    description : str
        Brief description of the resolver
    config : AvatarStudioConfig
        Application configuration
    """

    name: str = "base"
    description: str = "Base class for style resolvers"

    def __init__(self, config: AvatarStudioConfig) -> None:
        self.config = config
        logger.info(f"Initialized {self.name} style resolver")

    @abstractmethod
    async def generate(self, image_path: Path, style: str) -> GenerationResult:
        """Produce an avatar for the stored image in the given style.

        Args:
            image_path: Location of the stored upload
            style: Style tag from the request

        Returns
        -------
        GenerationResult
            Result descriptor with ``success=True``

        Raises
        ------
        GenerationError
            If the image cannot be read or the result cannot be produced
        """

    async def customize(self, avatar_url: str, style: str, instructions: str) -> CustomizationResult:
        """Apply free-text instructions to an existing avatar.

        Not implemented by any resolver yet: the input locator is returned
        unchanged and the result is flagged ``transformed=False``.
        """
        logger.info(f"Customization not implemented by {self.name}; returning avatar unchanged")
        logger.debug(f"Ignored instructions for {style} avatar: {instructions}")
        return CustomizationResult(
            image_url=avatar_url,
            style=style,
            applied_instructions=instructions,
            transformed=False,
        )

    def get_resolver_info(self) -> dict[str, Any]:
        return {"name": self.name, "description": self.description}


class ResolverRegistry:
    """Registry of available style resolver classes.

    Resolvers register themselves at import time (see
    :mod:`avatarstudio.core.resolvers`), and the application instantiates the
    one named by its configuration.
    """

    def __init__(self) -> None:
        self._resolvers: dict[str, type[StyleResolverBase]] = {}

    def register(self, resolver_class: type[StyleResolverBase]) -> type[StyleResolverBase]:
        """Register a resolver class under its ``name``.

        Returns the class unchanged so this can be used as a decorator.
        """
        resolver_name = resolver_class.name

        if resolver_name in self._resolvers:
            logger.warning(f"Style resolver '{resolver_name}' is already registered, overwriting")

        self._resolvers[resolver_name] = resolver_class
        logger.debug(f"Registered style resolver: {resolver_name}")
        return resolver_class

    def instantiate(self, resolver_name: str, config: AvatarStudioConfig) -> StyleResolverBase:
        """Create an instance of a registered resolver.

        Raises
        ------
        ResolverNotFoundError
            If resolver_name is not registered
        """
        if resolver_name not in self._resolvers:
            available = ", ".join(self.list_available())
            raise ResolverNotFoundError(
                f"Style resolver '{resolver_name}' not found. Available resolvers: {available}"
            )

        return self._resolvers[resolver_name](config=config)

    def list_available(self) -> list[str]:
        return list(self._resolvers.keys())


# Global resolver registry instance
resolver_registry = ResolverRegistry()
