"""Custom exception hierarchy."""

from typing import Any


class AppError(Exception):
    """Base application exception."""

    status_code: int = 500

    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
            }
        }


class ValidationError(AppError):
    """Missing or malformed input."""

    status_code = 400

    def __init__(self, message: str, field: str | None = None, code: str = "VALIDATION_ERROR"):
        self.field = field
        super().__init__(message, code=code)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["error"]["details"] = {"field": self.field}
        return result


class UnsupportedFileTypeError(ValidationError):
    """Uploaded file has a MIME type we cannot extract text from."""

    def __init__(self, mime_type: str | None):
        self.mime_type = mime_type
        super().__init__(
            f"Unsupported file type: {mime_type}",
            field="document",
            code="UNSUPPORTED_FILE_TYPE",
        )


class NotFoundError(AppError):
    """Requested resource does not exist."""

    status_code = 404

    def __init__(self, resource: str, identifier: Any):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found", code="NOT_FOUND")

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["error"]["details"] = {"resource": self.resource, "id": str(self.identifier)}
        return result


class LLMError(AppError):
    """LLM communication error."""

    def __init__(self, message: str, provider: str, code: str = "LLM_ERROR"):
        self.provider = provider
        super().__init__(message, code=code)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["error"]["details"] = {"provider": self.provider}
        return result


class LLMAuthenticationError(LLMError):
    """Provider rejected the API key."""

    status_code = 401

    def __init__(self, provider: str):
        super().__init__(f"Invalid {provider} API key", provider, code="LLM_AUTH_ERROR")


class LLMQuotaExceededError(LLMError):
    """Provider quota or rate limit exhausted."""

    status_code = 429

    def __init__(self, provider: str):
        super().__init__(f"{provider} API quota exceeded", provider, code="LLM_QUOTA_EXCEEDED")


class ContentFilteredError(LLMError):
    """Provider blocked the prompt or the completion."""

    status_code = 400

    def __init__(self, provider: str):
        super().__init__("Content filtered by safety settings", provider, code="LLM_CONTENT_FILTERED")


class GenerationError(LLMError):
    """Any other generation failure, including empty completions."""

    def __init__(self, provider: str, message: str = "Failed to generate AI response"):
        super().__init__(message, provider, code="LLM_GENERATION_FAILED")


class ExtractionError(AppError):
    """Text could not be read from an uploaded file."""

    def __init__(self, message: str = "Failed to extract content from file"):
        super().__init__(message, code="EXTRACTION_ERROR")


class FileStorageError(AppError):
    """Uploaded file could not be written to disk."""

    def __init__(self, message: str):
        super().__init__(message, code="IO_ERROR")


class ConfigurationError(AppError):
    """Configuration error."""

    def __init__(self, message: str):
        super().__init__(message, code="CONFIG_ERROR")
