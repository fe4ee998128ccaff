"""Avatar Studio — FastAPI Application.

This module defines the application factory, all REST API routes, and the
``main()`` CLI function that launches the uvicorn server.

Architecture
------------
The application is stateless apart from the uploads directory:

- **Configuration** is an :class:`AvatarStudioConfig` built once by
  ``main()`` and passed to :func:`create_app`, which keeps it on
  ``app.state``.  Routes receive it through :func:`get_config`.
- **Style resolution** is delegated to the resolver named by
  ``config.style_resolver``, instantiated once per app from the resolver
  registry and exposed through :func:`get_resolver`.
- **Errors** derive from :class:`AvatarStudioError` and are rendered as JSON
  by a single exception handler.
- **Generated images** (vertex-gemini resolver only) are served by
  FastAPI's ``StaticFiles`` at ``/static/generated``.

Endpoints
---------
========  ==========================  ======================================
Method    Path                        Purpose
========  ==========================  ======================================
GET       ``/api/health``             Liveness probe (polled every 30 s)
GET       ``/api/styles``             Style presets for the style picker
POST      ``/api/generate-avatar``    Upload a photo and generate an avatar
POST      ``/api/customize-avatar``   Apply free-text instructions
========  ==========================  ======================================

Usage
-----
CLI (installed entry point)::

    avatar-studio

Direct invocation::

    python -m avatarstudio.api.main
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Body, Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from avatarstudio import __version__
from avatarstudio.api.models import (
    CUSTOMIZE_REQUIRED_FIELDS,
    CustomizeRequest,
    CustomizeResponse,
    GenerateResponse,
    HealthResponse,
    StyleOption,
    StylesResponse,
)
from avatarstudio.api.uploads import accept_upload, store_upload
from avatarstudio.core import resolver_registry
from avatarstudio.core.config import AvatarStudioConfig
from avatarstudio.core.errors import (
    AvatarStudioError,
    CustomizationError,
    GenerationError,
    MissingFieldsError,
    ValidationError,
)
from avatarstudio.core.resolvers.vertex_gemini import GENERATED_URL_PREFIX
from avatarstudio.core.style_resolvers import StyleResolverBase
from avatarstudio.core.styles import DEFAULT_STYLE, STYLE_PRESETS, is_known_style

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


# ---------------------------------------------------------------------------
# Dependencies.
# ---------------------------------------------------------------------------


def get_config(request: Request) -> AvatarStudioConfig:
    """Return the configuration the application was created with."""
    return request.app.state.config


def get_resolver(request: Request) -> StyleResolverBase:
    """Return the application's style resolver."""
    return request.app.state.resolver


async def _avatar_studio_error_handler(request: Request, exc: AvatarStudioError) -> JSONResponse:
    """Render an :class:`AvatarStudioError` as a JSON response."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness probe.  Always returns ``{"status": "ok"}`` with no side effects."""
    return HealthResponse()


@router.get("/styles", response_model=StylesResponse)
async def list_styles() -> StylesResponse:
    """Return the style presets in display order and the default style."""
    return StylesResponse(
        default=DEFAULT_STYLE.value,
        styles=[
            StyleOption(id=preset.id.value, name=preset.name, description=preset.description)
            for preset in STYLE_PRESETS.values()
        ],
    )


@router.post("/generate-avatar", response_model=GenerateResponse)
async def generate_avatar(
    image: UploadFile | str | None = File(default=None),
    style: str | None = Form(default=None),
    config: AvatarStudioConfig = Depends(get_config),
    resolver: StyleResolverBase = Depends(get_resolver),
) -> GenerateResponse:
    """Generate an avatar from an uploaded photo.

    This endpoint:

    1. Checks that an image was attached and that it is an allowed type
       and size.
    2. Checks that a style was specified (and, with ``strict_styles``,
       that it is a known style).
    3. Stores the upload in ``uploads_dir``.
    4. Delegates to the configured style resolver.

    A plain text ``image`` field counts as no image.

    Raises:
        ValidationError: 400 if the image or style is missing.
        UnsupportedMediaError: 415 if the image is not JPEG/PNG.
        UploadTooLargeError: 413 if the image exceeds the size limit.
        GenerationError: 500 if the resolver fails.
    """
    if image is None or isinstance(image, str):
        raise ValidationError("No image file provided")

    data = await accept_upload(image, config.max_upload_bytes)

    if not style or not style.strip():
        raise ValidationError("No avatar style specified")
    if config.strict_styles and not is_known_style(style):
        raise ValidationError(f"Unknown avatar style: {style}")

    try:
        image_path = store_upload(data, config.uploads_dir, image.filename or "")
        result = await resolver.generate(image_path, style)
    except Exception as e:
        logger.exception("Error generating avatar")
        if isinstance(e, GenerationError):
            raise
        raise GenerationError(str(e) or type(e).__name__) from e

    return GenerateResponse.from_result(result)


@router.post("/customize-avatar", response_model=CustomizeResponse)
async def customize_avatar(
    req: CustomizeRequest | None = Body(default=None),
    resolver: StyleResolverBase = Depends(get_resolver),
) -> CustomizeResponse:
    """Apply free-text instructions to an existing avatar.

    No resolver transforms avatars yet, so the response echoes the input
    URL with ``transformed`` set to ``False``.

    Raises:
        MissingFieldsError: 400 if any of avatarUrl, style or instructions
            is missing or blank.
        CustomizationError: 500 if the resolver fails.
    """
    # A request without a body is treated as one with every field missing.
    if req is None:
        req = CustomizeRequest()
    missing = req.missing_fields()
    if missing:
        raise MissingFieldsError(CUSTOMIZE_REQUIRED_FIELDS, missing)

    try:
        result = await resolver.customize(req.avatar_url, req.style, req.instructions)
    except Exception as e:
        logger.exception("Error customizing avatar")
        if isinstance(e, CustomizationError):
            raise
        raise CustomizationError(str(e) or type(e).__name__) from e

    return CustomizeResponse.from_result(result)


# ---------------------------------------------------------------------------
# Application factory.
# ---------------------------------------------------------------------------


def create_app(config: AvatarStudioConfig | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Application configuration.  When omitted (e.g. under
            ``uvicorn --factory``) it is loaded from the environment.

    Returns:
        The configured application.

    Raises:
        ResolverNotFoundError: If ``config.style_resolver`` is not registered.
    """
    if config is None:
        config = AvatarStudioConfig()

    app = FastAPI(
        title="Avatar Studio",
        description="Upload a photo, pick a style, get an avatar.",
        version=__version__,
    )
    app.state.config = config
    app.state.resolver = resolver_registry.instantiate(config.style_resolver, config)
    logger.info(f"Using style resolver '{config.style_resolver}'")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.client_url],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_exception_handler(AvatarStudioError, _avatar_studio_error_handler)
    app.include_router(router)
    app.mount(
        GENERATED_URL_PREFIX,
        StaticFiles(directory=str(config.generated_dir)),
        name="generated",
    )
    return app


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Builds the configuration once from ``AVATAR_STUDIO_*`` environment
    variables and serves the app on ``server_host:server_port``
    (``0.0.0.0:3001`` by default).

    This function is registered as the ``avatar-studio`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    config = AvatarStudioConfig()
    logger.info(f"Health check: http://localhost:{config.server_port}/api/health")
    uvicorn.run(
        create_app(config),
        host=config.server_host,
        port=config.server_port,
        log_level=config.log_level,
    )


if __name__ == "__main__":
    main()
