"""Avatar style presets.

The style set is closed: six tags, each with a display name and description
(shown by the client's style picker), a stock result image (returned by the
mock resolver), and a generation prompt (sent by the Vertex resolver).

Unknown tags are coerced to :data:`DEFAULT_STYLE` by :func:`resolve_style`.
Whether a present but unknown tag should instead be rejected is an open
question; the API only rejects when ``strict_styles`` is enabled.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class AvatarStyle(str, Enum):
    PIXAR = "pixar"
    ANIME = "anime"
    SIMPSONS = "simpsons"
    REALISTIC = "realistic"
    CARTOON = "cartoon"
    FANTASY = "fantasy"


DEFAULT_STYLE = AvatarStyle.PIXAR


@dataclass(frozen=True)
class StylePreset:
    """Everything known about one style tag."""

    id: AvatarStyle
    name: str
    description: str
    image_url: str
    prompt: str


_UNSPLASH = "https://images.unsplash.com/{photo}?q=80&w=300&auto=format&fit=crop"

STYLE_PRESETS: dict[AvatarStyle, StylePreset] = {
    preset.id: preset
    for preset in (
        StylePreset(
            id=AvatarStyle.PIXAR,
            name="Pixar/Disney",
            description="3D animated character with expressive features",
            image_url=_UNSPLASH.format(photo="photo-1601814933824-fd0b574dd592"),
            prompt="Create a Pixar/Disney style 3D animated character avatar",
        ),
        StylePreset(
            id=AvatarStyle.ANIME,
            name="Anime",
            description="Japanese animation style with distinctive eyes and colorful hair",
            image_url=_UNSPLASH.format(photo="photo-1578632767115-351597cf2477"),
            prompt="Create a Japanese anime style avatar with distinctive eyes",
        ),
        StylePreset(
            id=AvatarStyle.SIMPSONS,
            name="Simpsons",
            description="Yellow-skinned cartoon character with overbite",
            image_url=_UNSPLASH.format(photo="photo-1608889335941-32ac5f2041b9"),
            prompt="Create a Simpsons style cartoon avatar with yellow skin",
        ),
        StylePreset(
            id=AvatarStyle.REALISTIC,
            name="Realistic",
            description="Photorealistic portrait with enhanced features",
            image_url=_UNSPLASH.format(photo="photo-1544005313-94ddf0286df2"),
            prompt="Create a photorealistic portrait with enhanced features",
        ),
        StylePreset(
            id=AvatarStyle.CARTOON,
            name="Cartoon",
            description="Classic cartoon style with exaggerated features",
            image_url=_UNSPLASH.format(photo="photo-1620428268482-cf1851a383b0"),
            prompt="Create a classic cartoon style avatar with exaggerated features",
        ),
        StylePreset(
            id=AvatarStyle.FANTASY,
            name="Fantasy",
            description="Mythical character with fantasy elements",
            image_url=_UNSPLASH.format(photo="photo-1535137755190-8a0503aebdc1"),
            prompt="Create a fantasy character avatar with mythical elements",
        ),
    )
}


def is_known_style(tag: str) -> bool:
    """Return ``True`` if *tag* is one of the six style tags."""
    return tag in {style.value for style in AvatarStyle}


def resolve_style(tag: str) -> StylePreset:
    """Return the preset for *tag*, falling back to the default preset.

    Args:
        tag: Style tag as received from the client.

    Returns:
        The matching preset, or the :data:`DEFAULT_STYLE` preset when *tag*
        is not a known style.
    """
    if is_known_style(tag):
        return STYLE_PRESETS[AvatarStyle(tag)]
    logger.warning(f"Unknown style '{tag}', falling back to '{DEFAULT_STYLE.value}'")
    return STYLE_PRESETS[DEFAULT_STYLE]
