"""Tests for avatarstudio.api.models — Pydantic request/response models.

Tests cover:
- camelCase aliases on request and response bodies.
- Missing-field detection on CustomizeRequest.
- Building responses from resolver results.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from avatarstudio.api.models import (
    CUSTOMIZE_REQUIRED_FIELDS,
    CustomizeRequest,
    CustomizeResponse,
    GenerateResponse,
    HealthResponse,
    StyleOption,
    StylesResponse,
)
from avatarstudio.core.style_resolvers import CustomizationResult, GenerationResult


class TestCustomizeRequest:
    def test_parses_camel_case(self):
        req = CustomizeRequest.model_validate(
            {"avatarUrl": "https://x/a.png", "style": "anime", "instructions": "hat"}
        )
        assert req.avatar_url == "https://x/a.png"
        assert req.missing_fields() == []

    def test_accepts_field_names(self):
        req = CustomizeRequest(avatar_url="u", style="s", instructions="i")
        assert req.missing_fields() == []

    def test_all_missing(self):
        assert CustomizeRequest().missing_fields() == CUSTOMIZE_REQUIRED_FIELDS

    def test_blank_counts_as_missing(self):
        req = CustomizeRequest(avatar_url="u", style="", instructions="   ")
        assert req.missing_fields() == ["style", "instructions"]


class TestGenerateResponse:
    def test_from_result_serialises_by_alias(self):
        result = GenerationResult(
            image_url="https://x/anime.png", style="anime", original_image=Path("uploads/a.png")
        )
        body = GenerateResponse.from_result(result).model_dump(by_alias=True)
        assert body["avatarUrl"] == "https://x/anime.png"
        assert body["style"] == "anime"
        assert body["success"] is True
        assert body["message"] == "Avatar generated successfully"
        assert body["processedAt"] == result.processed_at
        assert "originalImage" not in body


class TestCustomizeResponse:
    def _result(self, transformed: bool) -> CustomizationResult:
        return CustomizationResult(
            image_url="u", style="anime", applied_instructions="hat", transformed=transformed
        )

    def test_passthrough_message(self):
        resp = CustomizeResponse.from_result(self._result(False))
        assert resp.transformed is False
        assert "not implemented" in resp.message

    def test_transformed_message(self):
        resp = CustomizeResponse.from_result(self._result(True))
        assert resp.message == "Avatar customized successfully"

    def test_serialises_by_alias(self):
        body = CustomizeResponse.from_result(self._result(False)).model_dump(by_alias=True)
        assert body["appliedInstructions"] == "hat"
        assert body["avatarUrl"] == "u"


@pytest.mark.parametrize(
    "model",
    [CustomizeRequest, HealthResponse, StyleOption, StylesResponse, GenerateResponse, CustomizeResponse],
)
def test_models_documented(model):
    """Every API model carries its own docstring for the OpenAPI schema."""
    assert "__doc__" in model.__dict__
    assert model.__doc__ and model.__doc__.strip()
