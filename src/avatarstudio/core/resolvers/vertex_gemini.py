"""Gemini-on-Vertex-AI resolver.

Sends the uploaded photo together with the style prompt to a Gemini image
model on Vertex AI, saves the first image in the response as a PNG under
``generated_dir`` and returns its ``/static/generated/`` URL.

The ``google-genai`` SDK is imported lazily on first use so that the mock
resolver (the default) works without it installed.  Install it with the
``vertex`` extra::

    pip install avatar-studio[vertex]

Credentials come from the environment (Application Default Credentials);
the project and region come from ``AvatarStudioConfig``.
"""

from __future__ import annotations

import asyncio
import logging
from io import BytesIO
from pathlib import Path
from typing import Any

from PIL import Image

from ..config import AvatarStudioConfig
from ..errors import GenerationError
from ..style_resolvers import GenerationResult, StyleResolverBase, resolver_registry
from ..styles import resolve_style

logger = logging.getLogger(__name__)

GENERATED_URL_PREFIX = "/static/generated"

_MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}


def _extract_image_bytes(response: Any) -> bytes | None:
    """Return the data of the first inline image part in a Gemini response."""
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            inline_data = getattr(part, "inline_data", None)
            if inline_data is not None and inline_data.data:
                return inline_data.data
    return None


def _save_png(data: bytes, output_path: Path) -> None:
    """Decode image bytes with Pillow and write them to *output_path* as PNG.

    Blocking; callers run it in a worker thread.
    """
    with Image.open(BytesIO(data)) as image:
        image.save(output_path, format="PNG")


@resolver_registry.register
class VertexGeminiResolver(StyleResolverBase):
    """Generate avatars with a Gemini image model on Vertex AI."""

    name = "vertex-gemini"
    description = "Generates avatars with Gemini on Vertex AI"

    def __init__(self, config: AvatarStudioConfig) -> None:
        super().__init__(config)
        self._client = None

    def _get_client(self):
        """Create the Vertex AI client on first use."""
        if self._client is None:
            if not self.config.google_cloud_project_id:
                raise GenerationError(
                    "Failed to generate avatar: google_cloud_project_id is not configured"
                )

            from google import genai

            self._client = genai.Client(
                vertexai=True,
                project=self.config.google_cloud_project_id,
                location=self.config.google_cloud_location,
            )
            logger.info(
                f"Vertex AI client ready (project={self.config.google_cloud_project_id}, "
                f"location={self.config.google_cloud_location})"
            )
        return self._client

    async def generate(self, image_path: Path, style: str) -> GenerationResult:
        logger.info(f"Generating {style} style avatar from image: {image_path}")

        try:
            image_bytes = await asyncio.to_thread(image_path.read_bytes)
        except OSError as e:
            raise GenerationError(f"Failed to generate avatar: {e}") from e

        preset = resolve_style(style)
        client = self._get_client()

        from google.genai import types

        mime_type = _MIME_TYPES.get(image_path.suffix.lower(), "image/jpeg")
        contents = [
            types.Content(
                role="user",
                parts=[
                    types.Part.from_text(text=preset.prompt),
                    types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                ],
            )
        ]

        try:
            response = await client.aio.models.generate_content(
                model=self.config.vertex_model,
                contents=contents,
                config=types.GenerateContentConfig(response_modalities=["TEXT", "IMAGE"]),
            )
        except Exception as e:
            raise GenerationError(f"Failed to generate avatar: {e}") from e

        data = _extract_image_bytes(response)
        if data is None:
            raise GenerationError("Failed to generate avatar: the model returned no image")

        filename = f"{image_path.stem}-{preset.id.value}.png"
        output_path = self.config.generated_dir / filename
        try:
            await asyncio.to_thread(_save_png, data, output_path)
        except OSError as e:
            raise GenerationError(f"Failed to generate avatar: {e}") from e
        logger.info(f"Saved generated avatar to {output_path}")

        return GenerationResult(
            image_url=f"{GENERATED_URL_PREFIX}/{filename}",
            style=style,
            original_image=image_path,
        )
