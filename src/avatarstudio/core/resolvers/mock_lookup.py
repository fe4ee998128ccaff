"""Mock lookup resolver.

Stands in for real avatar generation: the upload is read (to prove it is
there and to log its size), the request is held for a fixed delay to
emulate inference time, and the result is the stock image of the style.
The lookup is pure, so the same style always yields the same URL.
"""

import asyncio
import logging
from pathlib import Path

from ..errors import GenerationError
from ..style_resolvers import GenerationResult, StyleResolverBase, resolver_registry
from ..styles import resolve_style

logger = logging.getLogger(__name__)


@resolver_registry.register
class MockLookupResolver(StyleResolverBase):
    """Resolve a style tag to a fixed stock image URL."""

    name = "mock-lookup"
    description = "Returns a stock image per style after a simulated delay"

    async def generate(self, image_path: Path, style: str) -> GenerationResult:
        logger.info(f"Generating {style} style avatar from image: {image_path}")

        try:
            image_bytes = await asyncio.to_thread(image_path.read_bytes)
        except OSError as e:
            raise GenerationError(f"Failed to generate avatar: {e}") from e
        logger.info(f"Image size: {len(image_bytes)} bytes")

        await asyncio.sleep(self.config.resolution_delay_seconds)

        preset = resolve_style(style)
        return GenerationResult(
            image_url=preset.image_url,
            style=style,
            original_image=image_path,
        )
