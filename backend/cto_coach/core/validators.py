"""Input validation utilities.

Functions return tuples of (is_valid, error_message) so callers decide which
exception to raise.
"""

import re
import uuid

# =============================================================================
# Constants
# =============================================================================

# Message validation
MAX_MESSAGE_LENGTH: int = 10000

# File upload validation
MAX_FILE_SIZE_BYTES: int = 10 * 1024 * 1024  # 10MB
MAX_FILENAME_LENGTH: int = 255

SUPPORTED_MIME_TYPES: tuple[str, ...] = ("text/plain", "text/markdown", "application/pdf")

# Fallback when the client sends no type or a generic binary type
EXTENSION_MIME_TYPES: dict[str, str] = {
    "txt": "text/plain",
    "text": "text/plain",
    "md": "text/markdown",
    "markdown": "text/markdown",
    "pdf": "application/pdf",
}

GENERIC_MIME_TYPES: frozenset[str] = frozenset({"", "application/octet-stream"})

PDF_MAGIC: bytes = b"%PDF-"

STORED_NAME_PATTERN: re.Pattern[str] = re.compile(r"[^A-Za-z0-9._ -]")


# =============================================================================
# Message Validation
# =============================================================================


def validate_message_content(content: str) -> tuple[bool, str | None]:
    """Validate user chat message content.

    Args:
        content: The message content to validate

    Returns:
        Tuple of (is_valid, error_message). Returns (True, None) if valid.

    Examples:
        >>> validate_message_content("How do I scale my team?")
        (True, None)

        >>> validate_message_content("   ")
        (False, 'Message is required')
    """
    if not isinstance(content, str) or not content.strip():
        return False, "Message is required"

    if "\x00" in content:
        return False, "Message contains null bytes"

    if len(content) > MAX_MESSAGE_LENGTH:
        return False, f"Message exceeds maximum length of {MAX_MESSAGE_LENGTH} characters"

    return True, None


# =============================================================================
# Session ID Validation
# =============================================================================


def validate_session_id(session_id: str) -> tuple[bool, str | None]:
    """Validate that a session identifier is a UUID.

    Examples:
        >>> validate_session_id("not-a-uuid")
        (False, 'Invalid session ID format')
    """
    if not session_id:
        return False, "Session ID is required"

    try:
        uuid.UUID(str(session_id))
    except ValueError:
        return False, "Invalid session ID format"

    return True, None


# =============================================================================
# File Upload Validation
# =============================================================================


def get_extension(filename: str) -> str:
    """Lower-cased extension without the dot, or empty string."""
    parts = filename.rsplit(".", 1)
    return parts[1].lower() if len(parts) == 2 else ""


def validate_filename(filename: str | None) -> tuple[bool, str | None]:
    """Reject missing names, path traversal, null bytes and extensionless files."""
    if not filename:
        return False, "No file uploaded"

    if ".." in filename or "/" in filename or "\\" in filename:
        return False, "Filename contains path traversal sequences"

    if "\x00" in filename:
        return False, "Filename contains null bytes"

    if len(filename) > MAX_FILENAME_LENGTH:
        return False, f"Filename exceeds maximum length of {MAX_FILENAME_LENGTH} characters"

    if not get_extension(filename):
        return False, "File must have an extension"

    return True, None


def validate_file_size(size: int, max_size: int = MAX_FILE_SIZE_BYTES) -> tuple[bool, str | None]:
    """Validate uploaded file size in bytes. Empty files are allowed."""
    if size > max_size:
        size_mb = max_size / (1024 * 1024)
        return False, f"File size exceeds maximum of {size_mb:.0f}MB"

    return True, None


def resolve_mime_type(filename: str, declared_mime_type: str | None) -> str:
    """Return the declared MIME type, or infer it from the extension.

    Inference only happens when the client sent nothing useful; an explicit
    but unsupported type such as ``image/png`` is kept so the caller can
    reject it.

    Examples:
        >>> resolve_mime_type("notes.md", "application/octet-stream")
        'text/markdown'

        >>> resolve_mime_type("logo.png", "image/png")
        'image/png'
    """
    declared = (declared_mime_type or "").split(";")[0].strip().lower()
    if declared not in GENERIC_MIME_TYPES:
        return declared

    return EXTENSION_MIME_TYPES.get(get_extension(filename), declared or "application/octet-stream")


def is_supported_mime_type(mime_type: str | None) -> bool:
    """Check the MIME type against the extractor whitelist."""
    return mime_type in SUPPORTED_MIME_TYPES


def validate_pdf_header(content: bytes) -> tuple[bool, str | None]:
    """Check the PDF magic bytes at the start of a file."""
    if not content.startswith(PDF_MAGIC):
        return False, "File content does not match declared type application/pdf"
    return True, None


# =============================================================================
# Utility Functions
# =============================================================================


def sanitize_filename(filename: str) -> str:
    """Make an uploaded filename safe to embed in a stored file name.

    Examples:
        >>> sanitize_filename("team/notes?.md")
        'teamnotes.md'
    """
    cleaned = STORED_NAME_PATTERN.sub("", filename.replace("\x00", "")).strip(" .")
    return cleaned or "unnamed"
