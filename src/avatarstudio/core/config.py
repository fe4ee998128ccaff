"""Configuration management for Avatar Studio.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the AVATAR_STUDIO_
prefix, allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (AVATAR_STUDIO_* prefix)
2. .env file in the project root
3. Default values defined in AvatarStudioConfig

Example .env file:
    AVATAR_STUDIO_SERVER_PORT=3001
    AVATAR_STUDIO_CLIENT_URL=http://localhost:5173
    AVATAR_STUDIO_STYLE_RESOLVER=vertex-gemini
    AVATAR_STUDIO_GOOGLE_CLOUD_PROJECT_ID=my-project

Lifetime
--------
Unlike a module-level global, the configuration is constructed exactly once
by :func:`avatarstudio.api.main.main` and handed to
:func:`avatarstudio.api.main.create_app`.  Route handlers receive it through
a FastAPI dependency.  There is no hot-reload: to change a value, set the
environment variable and restart the server.

Directory Management
--------------------
The configuration creates its directories on initialization:
- uploads_dir: Transient storage for uploaded photos (never cleaned up)
- generated_dir: Images produced by the inference resolver
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MAX_UPLOAD_BYTES = 5 * 1024 * 1024


class AvatarStudioConfig(BaseSettings):
    """Main configuration for Avatar Studio.

    Attributes
    ----------
    Server Settings:
        server_host : str
            Server bind address
        server_port : int
            Server port (1024-65535)
        client_url : str
            The single origin allowed to make cross-origin requests
        log_level : str
            Log level handed to uvicorn

    Upload Settings:
        uploads_dir : Path
            Directory uploaded photos are written to
        max_upload_bytes : int
            Largest accepted upload in bytes (5 MiB)

    Style Resolution:
        style_resolver : Literal["mock-lookup", "vertex-gemini"]
            Registered resolver used by the generate and customize routes
        resolution_delay_seconds : float
            Artificial delay applied by the mock resolver
        strict_styles : bool
            Reject unknown style tags instead of falling back to the default

    Vertex AI:
        google_cloud_project_id : str | None
            Project used by the vertex-gemini resolver
        google_cloud_location : str
            Vertex AI region
        vertex_model : str
            Gemini model that produces the avatar image
        generated_dir : Path
            Directory generated images are saved to

    Examples
    --------
        >>> cfg = AvatarStudioConfig(server_port=8080, resolution_delay_seconds=0)
        >>> cfg.style_resolver
        'mock-lookup'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AVATAR_STUDIO_",
        case_sensitive=False,
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=3001,
        description="Server port",
        ge=1024,
        le=65535,
    )
    client_url: str = Field(
        default="http://localhost:5173",
        description="Origin of the browser client allowed through CORS",
    )
    log_level: Literal["critical", "error", "warning", "info", "debug"] = Field(
        default="info",
        description="uvicorn log level",
    )

    # Upload settings
    uploads_dir: Path = Field(
        default=Path("uploads"),
        description="Directory for transient upload storage",
    )
    max_upload_bytes: int = Field(
        default=MAX_UPLOAD_BYTES,
        description="Maximum accepted upload size in bytes",
        gt=0,
    )

    # Style resolution
    style_resolver: Literal["mock-lookup", "vertex-gemini"] = Field(
        default="mock-lookup",
        description="Style resolver implementation",
    )
    resolution_delay_seconds: float = Field(
        default=1.5,
        description="Simulated generation time of the mock resolver",
        ge=0.0,
    )
    strict_styles: bool = Field(
        default=False,
        description="Reject unknown style tags with 400 instead of using the default",
    )

    # Vertex AI (only read by the vertex-gemini resolver)
    google_cloud_project_id: str | None = Field(
        default=None,
        description="Google Cloud project ID",
    )
    google_cloud_location: str = Field(
        default="us-central1",
        description="Google Cloud region for Vertex AI",
    )
    vertex_model: str = Field(
        default="gemini-2.5-flash-image",
        description="Gemini model used for avatar generation",
    )
    generated_dir: Path = Field(
        default=Path("generated"),
        description="Directory to save generated avatars",
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create required directories.

        Args:
            **kwargs: Configuration overrides (typically from environment variables)
        """
        super().__init__(**kwargs)

        self.uploads_dir.mkdir(parents=True, exist_ok=True)
        self.generated_dir.mkdir(parents=True, exist_ok=True)
