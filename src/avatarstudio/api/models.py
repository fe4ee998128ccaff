"""Pydantic request and response models for the Avatar Studio API.

The browser client speaks camelCase JSON, so every field has a camelCase
alias.  FastAPI serialises response models by alias.

Models
------
CustomizeRequest
    Payload for ``POST /api/customize-avatar``.
HealthResponse
    Body of ``GET /api/health``.
StyleOption, StylesResponse
    Body of ``GET /api/styles``.
GenerateResponse
    Body of a successful ``POST /api/generate-avatar``.
CustomizeResponse
    Body of a successful ``POST /api/customize-avatar``.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from avatarstudio.core.style_resolvers import CustomizationResult, GenerationResult

CUSTOMIZE_REQUIRED_FIELDS = ["avatarUrl", "style", "instructions"]


class CustomizeRequest(BaseModel):
    """Request body for the ``POST /api/customize-avatar`` endpoint.

    All three fields are mandatory.  They are declared optional here so that
    a missing field reaches the route handler, which answers with a 400
    listing the required fields rather than FastAPI's generic 422.

    Attributes:
        avatar_url: Locator of the avatar to modify.
        style: Style tag of the avatar.
        instructions: Free-text modification instructions.
    """

    model_config = ConfigDict(populate_by_name=True)

    avatar_url: str | None = Field(
        default=None,
        alias="avatarUrl",
        description="URL of the avatar to customize.",
    )
    style: str | None = Field(
        default=None,
        description="Style tag of the avatar.",
    )
    instructions: str | None = Field(
        default=None,
        description="Free-text modification instructions.",
    )

    def missing_fields(self) -> list[str]:
        """Return the aliases of fields that are absent or blank."""
        values = {
            "avatarUrl": self.avatar_url,
            "style": self.style,
            "instructions": self.instructions,
        }
        return [name for name, value in values.items() if not value or not value.strip()]


class HealthResponse(BaseModel):
    """Response body for the ``GET /api/health`` liveness probe."""

    status: str = "ok"
    message: str = "Server is running"


class StyleOption(BaseModel):
    """One entry of the style picker."""

    id: str
    name: str
    description: str


class StylesResponse(BaseModel):
    """Response body for ``GET /api/styles``."""

    default: str
    styles: list[StyleOption]


class GenerateResponse(BaseModel):
    """Response body for a successful avatar generation."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str = "Avatar generated successfully"
    avatar_url: str = Field(alias="avatarUrl")
    style: str
    processed_at: datetime = Field(alias="processedAt")

    @classmethod
    def from_result(cls, result: GenerationResult) -> GenerateResponse:
        return cls(
            success=result.success,
            avatar_url=result.image_url,
            style=result.style,
            processed_at=result.processed_at,
        )


class CustomizeResponse(BaseModel):
    """Response body for a customisation request.

    ``transformed`` is ``False`` when the resolver returned the avatar
    unchanged, which is currently always the case.
    """

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str
    avatar_url: str = Field(alias="avatarUrl")
    style: str
    applied_instructions: str = Field(alias="appliedInstructions")
    transformed: bool
    processed_at: datetime = Field(alias="processedAt")

    @classmethod
    def from_result(cls, result: CustomizationResult) -> CustomizeResponse:
        if result.transformed:
            message = "Avatar customized successfully"
        else:
            message = "Avatar customization is not implemented yet; the original avatar was returned"
        return cls(
            success=result.success,
            message=message,
            avatar_url=result.image_url,
            style=result.style,
            applied_instructions=result.applied_instructions,
            transformed=result.transformed,
            processed_at=result.processed_at,
        )
