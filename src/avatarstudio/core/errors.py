"""Error taxonomy for Avatar Studio.

Every error the service reports to a client derives from
:class:`AvatarStudioError`.  Each class knows its HTTP status code and how to
render itself as a JSON body; ``avatarstudio.api.main`` registers a single
exception handler that calls :meth:`AvatarStudioError.to_payload`.

========================  ======  ==========================================
Error                     Status  Raised when
========================  ======  ==========================================
ValidationError           400     image or style missing, unknown style in
                                  strict mode
MissingFieldsError        400     a customisation field is missing
UploadTooLargeError       413     upload exceeds ``max_upload_bytes``
UnsupportedMediaError     415     extension or content type not JPEG/PNG
GenerationError           500     a resolver failed to generate
CustomizationError        500     a resolver failed to customize
========================  ======  ==========================================
"""

from __future__ import annotations

from typing import Any


class AvatarStudioError(Exception):
    """Base class for errors rendered as JSON responses."""

    status_code: int = 500
    error: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.error
        super().__init__(self.message)

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body sent to the client."""
        if self.message == self.error:
            return {"error": self.error}
        return {"error": self.error, "message": self.message}


class ValidationError(AvatarStudioError):
    """A required part of the request is missing or unusable."""

    status_code = 400

    def __init__(self, error: str) -> None:
        self.error = error
        super().__init__(error)


class MissingFieldsError(ValidationError):
    """One or more mandatory JSON fields were absent or empty."""

    def __init__(self, required: list[str], missing: list[str]) -> None:
        super().__init__("Missing required parameters")
        self.required = required
        self.missing = missing

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.error, "required": self.required, "missing": self.missing}


class UploadRejectedError(AvatarStudioError):
    """The upload was refused before the route handler looked at it."""

    status_code = 400
    error = "Failed to upload image"


class UnsupportedMediaError(UploadRejectedError):
    status_code = 415


class UploadTooLargeError(UploadRejectedError):
    status_code = 413


class GenerationError(AvatarStudioError):
    """A style resolver could not produce a result."""

    error = "Failed to generate avatar"

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.error, "message": self.message}


class CustomizationError(GenerationError):
    """A style resolver could not apply customisation instructions."""

    error = "Failed to customize avatar"


class ResolverNotFoundError(KeyError):
    """No style resolver is registered under the requested name."""
