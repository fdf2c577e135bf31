"""Domain errors. Each one maps to a single HTTP status and user-facing message.

All of them are terminal for the current request; nothing here is retried.
"""


class RoastError(Exception):
    """Base class — rendered by the RoastError handler in main.py."""

    status_code = 500
    message = "Failed to process request"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class ExtractionError(RoastError):
    status_code = 400
    message = "Failed to extract text from file"

    @classmethod
    def for_format(cls, fmt: str) -> "ExtractionError":
        return cls(f"Failed to extract text from {fmt}")


class ValidationError(RoastError):
    status_code = 400
    message = (
        "Could not extract meaningful content from file. "
        "Please ensure your CV contains readable text."
    )


class MissingInputError(ValidationError):
    message = "No file uploaded"


class InvalidProfileUrlError(ValidationError):
    message = "Please provide a valid LinkedIn profile URL (linkedin.com/in/username)"


class UnsupportedTypeError(RoastError):
    status_code = 400
    message = "Invalid file type. Only PDF, DOCX, and TXT files are allowed."


class TooLargeError(RoastError):
    status_code = 400
    message = "File too large. Maximum size is 5MB."


class NotFoundError(RoastError):
    status_code = 404
    message = "Endpoint not found"


# Upstream failures — the caller did nothing wrong, so these are 500s.


class ConfigError(RoastError):
    message = "API key not configured"


class AuthError(RoastError):
    message = "Invalid API key"


class RateLimitedError(RoastError):
    message = "Rate limit exceeded. Please try again later."


class BadRequestError(RoastError):
    message = "Invalid request format"


class UpstreamError(RoastError):
    message = "Failed to get AI feedback. Please try again."
